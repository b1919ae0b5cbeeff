import pytest

from app.core.exceptions import BookingNotFoundError, DataStoreError, PaymentFailedError, PaymentValidationError
from app.crud.booking import crud_booking
from app.crud.payment import crud_payment
from app.models import Booking, BookingStatus, Payment, PaymentMethod, PaymentStatus
from app.schemas.payment import PaymentRequest
from app.services.booking_service import booking_service
from app.services.payment_service import payment_service, validate_payment_details
from app.services.seat_selection import SeatSelection


VALID_CARD = dict(
    card_number="4111111111111111",
    card_name="Alice Example",
    expiry_date="12/29",
    cvv="123",
)


@pytest.fixture
async def pending_booking(store, showtime, alice):
    selection = SeatSelection.from_request(["A1", "A2"], 2)
    return await booking_service.create_booking(store, alice, showtime, selection)


@pytest.mark.parametrize("override, message", [
    ({"card_number": ""}, "Please enter a valid card number"),
    ({"card_number": "4111 1111"}, "Please enter a valid card number"),
    ({"card_name": "   "}, "Please enter the cardholder name"),
    ({"expiry_date": "1229"}, "Please enter a valid expiry date (MM/YY)"),
    ({"cvv": "12"}, "Please enter a valid CVV"),
])
def test_card_details_are_checked_in_order(override, message):
    details = PaymentRequest(payment_method=PaymentMethod.DEBIT_CARD, **{**VALID_CARD, **override})

    with pytest.raises(PaymentValidationError) as exc_info:
        validate_payment_details(details)
    assert exc_info.value.message == message


def test_e_wallet_needs_no_card_details():
    validate_payment_details(PaymentRequest(payment_method=PaymentMethod.E_WALLET))


async def test_invalid_details_write_nothing(store, pending_booking, alice, read_rows):
    with pytest.raises(PaymentValidationError):
        await payment_service.pay(store, pending_booking.id, alice, PaymentRequest())

    assert await read_rows(Payment) == []
    bookings = await read_rows(Booking)
    assert bookings[0].status == BookingStatus.PENDING


async def test_e_wallet_payment_confirms_booking(store, pending_booking, alice, read_rows):
    result = await payment_service.pay(
        store, pending_booking.id, alice, PaymentRequest(payment_method=PaymentMethod.E_WALLET))

    assert result.payment_method == PaymentMethod.E_WALLET
    assert result.amount == 100000

    payments = await crud_payment.get_payments_for_booking(store, pending_booking.id)
    assert [p.status for p in payments] == [PaymentStatus.COMPLETED]
    assert (await read_rows(Booking))[0].status == BookingStatus.CONFIRMED


async def test_paying_someone_elses_booking_is_not_found(store, pending_booking, bob, read_rows):
    with pytest.raises(BookingNotFoundError):
        await payment_service.pay(store, pending_booking.id, bob, PaymentRequest(**VALID_CARD))

    assert await read_rows(Payment) == []


async def test_status_update_failure_leaves_completed_payment_and_pending_booking(
        store, pending_booking, alice, read_rows, monkeypatch):
    async def failing(*args, **kwargs):
        raise DataStoreError("connection reset")

    monkeypatch.setattr(crud_booking, "update_status", failing)

    with pytest.raises(PaymentFailedError) as exc_info:
        await payment_service.pay(store, pending_booking.id, alice, PaymentRequest(**VALID_CARD))
    assert exc_info.value.message == "Failed to process payment. Please try again."

    payments = await read_rows(Payment)
    assert len(payments) == 1
    assert payments[0].status == PaymentStatus.COMPLETED
    assert (await read_rows(Booking))[0].status == BookingStatus.PENDING


async def test_payment_insert_failure_leaves_booking_pending(store, pending_booking, alice, read_rows, monkeypatch):
    async def failing(*args, **kwargs):
        raise DataStoreError("insert rejected")

    monkeypatch.setattr(crud_payment, "create_payment", failing)

    with pytest.raises(PaymentFailedError):
        await payment_service.pay(store, pending_booking.id, alice, PaymentRequest(**VALID_CARD))

    assert await read_rows(Payment) == []
    assert (await read_rows(Booking))[0].status == BookingStatus.PENDING


async def test_paying_twice_records_two_payments(store, pending_booking, alice, read_rows):
    details = PaymentRequest(**VALID_CARD)
    await payment_service.pay(store, pending_booking.id, alice, details)
    await payment_service.pay(store, pending_booking.id, alice, details)

    assert len(await read_rows(Payment)) == 2
