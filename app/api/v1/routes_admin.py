from typing import List, Optional
from fastapi import APIRouter, Depends

from app.core.exceptions import DataStoreError, ForbiddenError, LoadError
from app.core.identity import get_current_user
from app.crud.user import crud_user
from app.db.store import DataStore, get_store
from app.models.booking import BookingStatus
from app.models.user import UserRole
from app.schemas.auth import CurrentUser
from app.schemas.booking import BookingDetails, BookingResponse, BookingStatusUpdate
from app.services.booking_service import booking_service

router = APIRouter(
    prefix="/admin"
)


async def require_admin(
        user: CurrentUser = Depends(get_current_user),
        store: DataStore = Depends(get_store)) -> CurrentUser:
    try:
        record = await crud_user.get_user(store, user.id)
    except DataStoreError as e:
        raise LoadError("Failed to check admin access") from e
    if record is None or record.role != UserRole.ADMIN:
        raise ForbiddenError()
    return user


@router.get("/bookings", response_model=List[BookingDetails])
async def list_bookings(
        status: Optional[BookingStatus] = None,
        admin: CurrentUser = Depends(require_admin),
        store: DataStore = Depends(get_store)):
    return await booking_service.list_bookings(store, status=status)


@router.patch("/bookings/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
        booking_id: str,
        data: BookingStatusUpdate,
        admin: CurrentUser = Depends(require_admin),
        store: DataStore = Depends(get_store)):
    return await booking_service.update_booking_status(store, booking_id, data.status)
