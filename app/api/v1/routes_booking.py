from typing import List
from fastapi import APIRouter, Depends, Request
from redis.asyncio import Redis

from app.core.config import get_settings
from app.core.idempotency import check_idempotency, save_idempotent_response
from app.core.identity import get_current_user
from app.db.store import DataStore, get_store
from app.redis import get_redis
from app.schemas.auth import CurrentUser
from app.schemas.booking import BookingCreate, BookingDetails, BookingResponse
from app.schemas.payment import PaymentRequest, PaymentResponse
from app.services.booking_service import booking_service
from app.services.payment_service import payment_service
from app.services.seat_availability import get_taken_seats
from app.services.seat_selection import SeatSelection
from app.services.showtime_service import get_showtime_details

router = APIRouter(
    prefix="/booking"
)


@router.post("/showtimes/{showtime_id}", response_model=BookingResponse, status_code=201)
async def create_booking(
        showtime_id: str,
        data: BookingCreate,
        user: CurrentUser = Depends(get_current_user),
        store: DataStore = Depends(get_store)):
    showtime = await get_showtime_details(store, showtime_id)
    # snapshot only; a seat can still be booked by someone else before our writes land
    taken = await get_taken_seats(store, showtime.id)
    selection = SeatSelection.from_request(data.seats, data.ticket_count, taken=taken)
    return await booking_service.create_booking(store, user, showtime, selection)


@router.get("/me", response_model=List[BookingDetails])
async def get_my_bookings(
        user: CurrentUser = Depends(get_current_user),
        store: DataStore = Depends(get_store)):
    return await booking_service.list_bookings(store, user_id=user.id)


@router.get("/{booking_id}", response_model=BookingDetails)
async def get_booking(
        booking_id: str,
        user: CurrentUser = Depends(get_current_user),
        store: DataStore = Depends(get_store)):
    return await booking_service.get_booking_details(store, booking_id, user)


@router.post("/{booking_id}/payment", response_model=PaymentResponse)
async def pay_for_booking(
        booking_id: str,
        data: PaymentRequest,
        request: Request,
        user: CurrentUser = Depends(get_current_user),
        store: DataStore = Depends(get_store),
        redis: Redis = Depends(get_redis)):
    scope = f"payment:{user.id}:{booking_id}"
    idem_key, cached, is_repeat = await check_idempotency(request, redis, scope)
    if is_repeat:
        return cached
    response = await payment_service.pay(store, booking_id, user, data)
    await save_idempotent_response(redis, scope, idem_key, response.model_dump(mode="json"),
                                   ttl=get_settings().IDEMPOTENCY_TTL_SECONDS)
    return response
