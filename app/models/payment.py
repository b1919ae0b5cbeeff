from enum import Enum
from sqlalchemy import ForeignKey, Numeric, String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models import TimestampMixin, new_id


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    E_WALLET = "e_wallet"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Payment(Base, TimestampMixin):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    booking_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("bookings.id"), index=True, nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    payment_method: Mapped[PaymentMethod] = mapped_column(SAEnum(
        PaymentMethod, name="payment_method_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(SAEnum(
        PaymentStatus, name="payment_status_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=PaymentStatus.PENDING)
