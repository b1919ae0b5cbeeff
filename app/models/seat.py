from enum import Enum
from sqlalchemy import ForeignKey, Integer, String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models import TimestampMixin, new_id


class SeatType(str, Enum):
    STANDARD = "standard"
    PREMIUM = "premium"
    VIP = "vip"


class Seat(Base, TimestampMixin):
    # no unique constraint on (theater_id, row, number): seats are discovered by label
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    theater_id: Mapped[str] = mapped_column(String(36), ForeignKey(
        "theaters.id", ondelete="CASCADE"), index=True, nullable=False)
    row: Mapped[str] = mapped_column(String(5), nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_type: Mapped[SeatType] = mapped_column("type", SAEnum(
        SeatType, name="seat_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=SeatType.STANDARD)
