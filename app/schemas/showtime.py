import datetime
from typing import List
from pydantic import BaseModel


class ShowtimeDetails(BaseModel):
    id: str
    movie_id: str
    movie_title: str
    theater_id: str
    theater_name: str
    date: datetime.date
    time: datetime.time
    price: float


class TakenSeatsResponse(BaseModel):
    showtime_id: str
    taken_seats: List[str]


class SeatStatusCell(BaseModel):
    label: str
    number: int
    status: str


class SeatRow(BaseModel):
    row: str
    seats: List[SeatStatusCell]


class SeatMapResponse(BaseModel):
    showtime_id: str
    rows: List[SeatRow]
