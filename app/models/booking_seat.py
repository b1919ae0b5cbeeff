from app.db.base import Base
from app.models import TimestampMixin, new_id
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column


class BookingSeat(Base, TimestampMixin):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    booking_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("bookings.id"), index=True, nullable=False)
    seat_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("seats.id"), nullable=False)
