import uuid
from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


def new_id() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

from .user import User, UserRole
from .movie import Movie
from .theater import Theater
from .showtime import Showtime
from .seat import Seat, SeatType
from .booking import Booking, BookingStatus
from .booking_seat import BookingSeat
from .payment import Payment, PaymentMethod, PaymentStatus
