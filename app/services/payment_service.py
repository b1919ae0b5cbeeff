import logging

from app.core.exceptions import DataStoreError, PaymentFailedError, PaymentValidationError
from app.crud.booking import crud_booking
from app.crud.payment import crud_payment
from app.db.store import DataStore
from app.models.booking import BookingStatus
from app.models.payment import PaymentMethod
from app.schemas.auth import CurrentUser
from app.schemas.payment import PaymentRequest, PaymentResponse
from app.services.booking_service import booking_service

logger = logging.getLogger(__name__)

CARD_METHODS = {PaymentMethod.CREDIT_CARD, PaymentMethod.DEBIT_CARD}


def validate_payment_details(details: PaymentRequest) -> None:
    """Shape checks only; nothing is verified against a card network."""
    if details.payment_method not in CARD_METHODS:
        return
    if not details.card_number.strip() or len(details.card_number) < 16:
        raise PaymentValidationError("Please enter a valid card number")
    if not details.card_name.strip():
        raise PaymentValidationError("Please enter the cardholder name")
    if not details.expiry_date.strip() or "/" not in details.expiry_date:
        raise PaymentValidationError("Please enter a valid expiry date (MM/YY)")
    if not details.cvv.strip() or len(details.cvv) < 3:
        raise PaymentValidationError("Please enter a valid CVV")


class PaymentService:
    async def pay(self, store: DataStore, booking_id: str, user: CurrentUser,
                  details: PaymentRequest) -> PaymentResponse:
        """
        Simulate settlement: record a completed payment, then confirm the booking.

        The two writes are separate. If the status update fails after the payment
        was recorded, the booking stays pending next to a completed payment.
        """
        validate_payment_details(details)
        booking = await booking_service.get_booking_details(store, booking_id, user)

        try:
            payment = await crud_payment.create_payment(
                store, booking_id, booking.total_price, details.payment_method)
            logger.info(f"Payment {payment.id} recorded for booking {booking_id}")
            await crud_booking.update_status(store, booking_id, BookingStatus.CONFIRMED)
        except DataStoreError as e:
            logger.error(f"Payment processing error for booking {booking_id}: {e}", exc_info=True)
            raise PaymentFailedError() from e
        logger.info(f"Booking {booking_id} confirmed")

        return PaymentResponse(
            payment_id=payment.id,
            booking_id=booking_id,
            amount=float(payment.amount),
            payment_method=payment.payment_method,
            status=payment.status,
            booking_status=BookingStatus.CONFIRMED
        )


payment_service = PaymentService()
