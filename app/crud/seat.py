from typing import Optional
from sqlalchemy.sql import select

from app.db.store import DataStore
from app.models.seat import Seat, SeatType


class CRUDSeat:
    async def find_seat(self, store: DataStore, theater_id: str, row: str, number: int) -> Optional[Seat]:
        # duplicates can exist for a triple; the oldest row wins
        return await store.first(
            select(Seat)
            .where(Seat.theater_id == theater_id)
            .where(Seat.row == row)
            .where(Seat.number == number)
            .order_by(Seat.created_at, Seat.id)
        )

    async def create_seat(self, store: DataStore, theater_id: str, row: str, number: int,
                          seat_type: SeatType = SeatType.STANDARD) -> Seat:
        return await store.insert(Seat(theater_id=theater_id, row=row, number=number, seat_type=seat_type))

    async def count_seats(self, store: DataStore, theater_id: str, row: str, number: int) -> int:
        seats = await store.all(
            select(Seat.id)
            .where(Seat.theater_id == theater_id)
            .where(Seat.row == row)
            .where(Seat.number == number)
        )
        return len(seats)


crud_seat = CRUDSeat()
