from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.models.booking import BookingStatus


class BookingCreate(BaseModel):
    seats: List[str] = Field(..., min_length=1, description="Seat labels such as 'A1', in selection order")
    ticket_count: int = Field(..., ge=1)


class BookingResponse(BaseModel):
    id: str
    user_id: str
    showtime_id: str
    total_price: float
    status: BookingStatus

    class Config:
        from_attributes = True


class BookingDetails(BaseModel):
    id: str
    created_at: datetime
    total_price: float
    status: BookingStatus
    seats: List[str]
    movie_title: str
    theater_name: str
    showtime: str
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    user_full_name: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
