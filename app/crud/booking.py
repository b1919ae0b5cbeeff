from collections import defaultdict
from typing import Dict, Iterable, List, Optional
from sqlalchemy.sql import select, update

from app.db.store import DataStore
from app.models.booking import Booking, BookingStatus
from app.models.booking_seat import BookingSeat
from app.models.movie import Movie
from app.models.seat import Seat
from app.models.showtime import Showtime
from app.models.theater import Theater
from app.models.user import User


def booking_summary_stmt():
    """Bookings joined with everything the booking pages display."""
    return (select(
        Booking.id,
        Booking.created_at,
        Booking.user_id,
        Booking.showtime_id,
        Booking.total_price,
        Booking.status,
        Showtime.date,
        Showtime.time,
        Movie.title.label("movie_title"),
        Theater.name.label("theater_name"),
        User.email.label("user_email"),
        User.full_name.label("user_full_name")
    )
        .join(Showtime, Booking.showtime_id == Showtime.id)
        .join(Movie, Showtime.movie_id == Movie.id)
        .join(Theater, Showtime.theater_id == Theater.id)
        .outerjoin(User, Booking.user_id == User.id))


class CRUDBooking:
    async def create_booking(self, store: DataStore, user_id: str, showtime_id: str, total_price) -> Booking:
        return await store.insert(Booking(
            user_id=user_id,
            showtime_id=showtime_id,
            total_price=total_price,
            status=BookingStatus.PENDING
        ))

    async def add_booking_seat(self, store: DataStore, booking_id: str, seat_id: str) -> BookingSeat:
        return await store.insert(BookingSeat(booking_id=booking_id, seat_id=seat_id))

    async def get_booking(self, store: DataStore, booking_id: str) -> Optional[Booking]:
        return await store.first(
            select(Booking)
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )

    async def update_status(self, store: DataStore, booking_id: str, status: BookingStatus) -> int:
        return await store.update(
            update(Booking)
            .where(Booking.id == booking_id)
            .values(status=status)
        )

    async def get_booking_ids_for_showtime(self, store: DataStore, showtime_id: str,
                                           status: BookingStatus) -> List[str]:
        return await store.all(
            select(Booking.id)
            .where(Booking.showtime_id == showtime_id)
            .where(Booking.status == status)
        )

    async def get_seat_labels(self, store: DataStore, booking_ids: Iterable[str]) -> Dict[str, List[str]]:
        """Seat labels per booking id, in link insertion order."""
        booking_ids = list(booking_ids)
        labels = defaultdict(list)
        if not booking_ids:
            return labels
        rows = await store.rows(
            select(BookingSeat.booking_id, Seat.row, Seat.number)
            .join(Seat, BookingSeat.seat_id == Seat.id)
            .where(BookingSeat.booking_id.in_(booking_ids))
            .order_by(BookingSeat.created_at, BookingSeat.id)
        )
        for row in rows:
            labels[row["booking_id"]].append(f"{row['row']}{row['number']}")
        return labels

    async def get_booking_summary(self, store: DataStore, booking_id: str, user_id: str) -> Optional[dict]:
        rows = await store.rows(
            booking_summary_stmt()
            .where(Booking.id == booking_id)
            .where(Booking.user_id == user_id)
        )
        return dict(rows[0]) if rows else None

    async def list_booking_summaries(self, store: DataStore, user_id: Optional[str] = None,
                                     status: Optional[BookingStatus] = None) -> List[dict]:
        stmt = booking_summary_stmt()
        if user_id is not None:
            stmt = stmt.where(Booking.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        rows = await store.rows(stmt.order_by(Booking.created_at.desc()))
        return [dict(row) for row in rows]


crud_booking = CRUDBooking()
