from enum import Enum
from sqlalchemy import ForeignKey, Numeric, String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models import TimestampMixin, new_id


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(Base, TimestampMixin):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), index=True, nullable=False)
    showtime_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("showtimes.id"), index=True, nullable=False)
    total_price: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(SAEnum(
        BookingStatus, name="booking_status_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=BookingStatus.PENDING)
