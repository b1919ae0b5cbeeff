from fastapi import APIRouter, Depends

from app.db.store import DataStore, get_store
from app.schemas.showtime import SeatMapResponse, ShowtimeDetails, TakenSeatsResponse
from app.services.seat_availability import get_seat_map, get_taken_seats
from app.services.showtime_service import get_showtime_details


router = APIRouter(
    prefix="/showtimes"
)


@router.get("/{showtime_id}", response_model=ShowtimeDetails)
async def get_showtime(showtime_id: str, store: DataStore = Depends(get_store)):
    return await get_showtime_details(store, showtime_id)


@router.get("/{showtime_id}/taken-seats", response_model=TakenSeatsResponse)
async def get_showtime_taken_seats(showtime_id: str, store: DataStore = Depends(get_store)):
    await get_showtime_details(store, showtime_id)
    taken = await get_taken_seats(store, showtime_id)
    return TakenSeatsResponse(showtime_id=showtime_id, taken_seats=sorted(taken))


@router.get("/{showtime_id}/seat-map", response_model=SeatMapResponse)
async def get_showtime_seat_map(showtime_id: str, store: DataStore = Depends(get_store)):
    await get_showtime_details(store, showtime_id)
    return await get_seat_map(store, showtime_id)
