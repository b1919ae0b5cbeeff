import logging
from typing import Set

from app.core.exceptions import DataStoreError, InvalidSelectionError, LoadError
from app.crud.booking import crud_booking
from app.db.store import DataStore
from app.models.booking import BookingStatus
from app.schemas.showtime import SeatMapResponse, SeatRow, SeatStatusCell
from app.services.seat_selection import layout_labels, parse_seat_label

logger = logging.getLogger(__name__)


async def get_taken_seats(store: DataStore, showtime_id: str) -> Set[str]:
    """
    Labels of the seats held by confirmed bookings of the showtime.

    Pending bookings do not hold seats. The result is a snapshot: nothing stops
    another booking from taking one of the returned-as-free seats afterwards.
    """
    if not showtime_id:
        raise InvalidSelectionError("Showtime details not loaded properly")
    try:
        booking_ids = await crud_booking.get_booking_ids_for_showtime(
            store, showtime_id, BookingStatus.CONFIRMED)
        if not booking_ids:
            return set()
        labels_by_booking = await crud_booking.get_seat_labels(store, booking_ids)
    except DataStoreError as e:
        logger.error(f"Error fetching booked seats for showtime {showtime_id}: {e}", exc_info=True)
        raise LoadError("Failed to load showtime details. Please try again.") from e

    taken = {label for labels in labels_by_booking.values() for label in labels}
    logger.info(f"Booked seats for showtime {showtime_id}: {sorted(taken)}")
    return taken


async def get_seat_map(store: DataStore, showtime_id: str) -> SeatMapResponse:
    taken = await get_taken_seats(store, showtime_id)
    rows = []
    for labels in layout_labels():
        cells = []
        for label in labels:
            row, number = parse_seat_label(label)
            cells.append(SeatStatusCell(
                label=label,
                number=number,
                status="taken" if label in taken else "available"
            ))
        rows.append(SeatRow(row=row, seats=cells))
    return SeatMapResponse(showtime_id=showtime_id, rows=rows)
