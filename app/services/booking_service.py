import logging
from typing import List, Optional

from app.core.exceptions import (
    BookingError,
    BookingNotFoundError,
    DataStoreError,
    IdentityError,
    InvalidSelectionError,
    LoadError,
    WriteError,
)
from app.crud.booking import crud_booking
from app.crud.seat import crud_seat
from app.crud.user import crud_user
from app.db.store import DataStore
from app.models.booking import Booking, BookingStatus
from app.models.seat import Seat
from app.models.user import User, UserRole
from app.schemas.auth import CurrentUser
from app.schemas.booking import BookingDetails
from app.schemas.showtime import ShowtimeDetails
from app.services.seat_selection import SeatSelection, parse_seat_label

logger = logging.getLogger(__name__)


def to_booking_details(summary: dict, seats: List[str]) -> BookingDetails:
    return BookingDetails(
        id=summary["id"],
        created_at=summary["created_at"],
        total_price=float(summary["total_price"]),
        status=summary["status"],
        seats=seats,
        movie_title=summary["movie_title"],
        theater_name=summary["theater_name"],
        showtime=f"{summary['date']} at {summary['time'].strftime('%H:%M')}",
        user_id=summary["user_id"],
        user_email=summary["user_email"],
        user_full_name=summary["user_full_name"]
    )


class BookingService:
    """
    Records a booking attempt and its seats.

    Steps run one after another and each write is committed on its own. A failing
    step aborts the rest; rows written by earlier steps are left in place.
    """

    async def ensure_user(self, store: DataStore, user: CurrentUser) -> User:
        try:
            existing = await crud_user.get_user(store, user.id)
        except DataStoreError as e:
            raise WriteError(f"Error checking user: {e}", step="check_user") from e
        if existing is not None:
            logger.info(f"User exists in database: {user.id}")
            return existing

        logger.info(f"User {user.id} not found in users table, creating user record")
        try:
            return await crud_user.create_user(
                store,
                user_id=user.id,
                email=user.email or "",
                full_name=user.full_name or "User",
                role=UserRole.USER
            )
        except DataStoreError as e:
            logger.error(f"Error creating user record: {e}", exc_info=True)
            raise WriteError(f"Failed to create user record: {e}", step="create_user") from e

    async def resolve_seat(self, store: DataStore, theater_id: str, label: str) -> Seat:
        """Find the seat row for a label, creating it when the theater has none yet."""
        row, number = parse_seat_label(label)
        seat = await crud_seat.find_seat(store, theater_id, row, number)
        if seat is not None:
            logger.info(f"Found existing seat {label}: {seat.id}")
            return seat
        logger.info(f"Seat {label} not found, creating new seat")
        seat = await crud_seat.create_seat(store, theater_id, row, number)
        if not seat.id:
            raise WriteError("Failed to create seat properly", step="create_seat", seat=label)
        return seat

    async def attach_seat(self, store: DataStore, booking_id: str, theater_id: str, label: str) -> None:
        logger.info(f"Processing seat {label}: theater_id={theater_id}")
        try:
            seat = await self.resolve_seat(store, theater_id, label)
            await crud_booking.add_booking_seat(store, booking_id, seat.id)
        except (DataStoreError, BookingError) as e:
            logger.error(f"Error processing seat {label}: {e}", exc_info=True)
            raise WriteError(f"Failed to process seat {label}: {e}", step="process_seat", seat=label) from e
        logger.info(f"Booking seat record created for seat {label}")

    async def create_booking(self, store: DataStore, user: CurrentUser, showtime: ShowtimeDetails,
                             selection: SeatSelection) -> Booking:
        if user is None or not user.id:
            raise IdentityError()
        if not showtime.id:
            raise InvalidSelectionError("Showtime details not loaded properly")
        if not showtime.theater_id:
            raise InvalidSelectionError("Theater details not loaded properly")
        if not selection.can_confirm:
            raise InvalidSelectionError(f"Please select {selection.ticket_count} seats to continue.")

        seats = selection.seats
        total_price = len(seats) * showtime.price
        logger.info(f"Creating booking with: user_id={user.id}, showtime_id={showtime.id}, "
                    f"theater_id={showtime.theater_id}, selected_seats={list(seats)}, total_price={total_price}")

        await self.ensure_user(store, user)

        try:
            booking = await crud_booking.create_booking(store, user.id, showtime.id, total_price)
        except DataStoreError as e:
            logger.error(f"Error creating booking record: {e}", exc_info=True)
            raise WriteError(f"Failed to create booking: {e}", step="create_booking") from e
        if booking is None or not booking.id:
            raise WriteError("Failed to create booking properly", step="create_booking")
        logger.info(f"Booking created successfully: {booking.id}")

        # one seat at a time so a failure names its seat
        for label in seats:
            await self.attach_seat(store, booking.id, showtime.theater_id, label)

        logger.info(f"All seats processed for booking {booking.id}, status {BookingStatus.PENDING.value}")
        return booking

    async def get_booking_details(self, store: DataStore, booking_id: str, user: CurrentUser) -> BookingDetails:
        try:
            summary = await crud_booking.get_booking_summary(store, booking_id, user.id)
            if summary is None:
                raise BookingNotFoundError(booking_id)
            labels = await crud_booking.get_seat_labels(store, [booking_id])
        except DataStoreError as e:
            logger.error(f"Error fetching booking details: {e}", exc_info=True)
            raise LoadError("Failed to load booking details. Please try again.") from e
        return to_booking_details(summary, labels.get(booking_id, []))

    async def list_bookings(self, store: DataStore, user_id: Optional[str] = None,
                            status: Optional[BookingStatus] = None) -> List[BookingDetails]:
        """Bookings newest first, each with its seat labels. No user id lists everyone's."""
        try:
            summaries = await crud_booking.list_booking_summaries(store, user_id=user_id, status=status)
            labels = await crud_booking.get_seat_labels(store, [s["id"] for s in summaries])
        except DataStoreError as e:
            logger.error(f"Error fetching bookings: {e}", exc_info=True)
            raise LoadError("Failed to load booking history") from e
        return [to_booking_details(s, labels.get(s["id"], [])) for s in summaries]

    async def update_booking_status(self, store: DataStore, booking_id: str, status: BookingStatus) -> Booking:
        try:
            booking = await crud_booking.get_booking(store, booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            await crud_booking.update_status(store, booking_id, status)
            updated = await crud_booking.get_booking(store, booking_id)
        except DataStoreError as e:
            logger.error(f"Error updating booking status: {e}", exc_info=True)
            raise WriteError(f"Failed to update booking status: {e}", step="update_status") from e
        logger.info(f"Booking {booking_id} status updated to {status.value}")
        return updated


booking_service = BookingService()
