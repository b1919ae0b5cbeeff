from pydantic import BaseModel

from app.models.payment import PaymentMethod, PaymentStatus
from app.models.booking import BookingStatus


class PaymentRequest(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    card_number: str = ""
    card_name: str = ""
    expiry_date: str = ""
    cvv: str = ""


class PaymentResponse(BaseModel):
    payment_id: str
    booking_id: str
    amount: float
    payment_method: PaymentMethod
    status: PaymentStatus
    booking_status: BookingStatus
