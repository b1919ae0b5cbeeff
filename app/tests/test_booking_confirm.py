from app.models import Booking, BookingSeat, BookingStatus, Payment, PaymentMethod, PaymentStatus, Seat, User
from app.schemas.payment import PaymentRequest
from app.services.booking_service import booking_service
from app.services.payment_service import payment_service
from app.services.seat_availability import get_taken_seats
from app.services.seat_selection import SeatSelection


CARD = PaymentRequest(
    payment_method=PaymentMethod.CREDIT_CARD,
    card_number="4111111111111111",
    card_name="Alice Example",
    expiry_date="12/29",
    cvv="123",
)


async def test_book_and_pay_two_seats(store, showtime, alice, read_rows):
    """Select two seats, book them and pay: one confirmed booking, two seats, one payment."""
    taken = await get_taken_seats(store, showtime.id)
    selection = SeatSelection(ticket_count=2, taken=taken)
    selection.select("A1")
    selection.select("A2")

    booking = await booking_service.create_booking(store, alice, showtime, selection)

    assert booking.status == BookingStatus.PENDING
    assert float(booking.total_price) == 100000

    result = await payment_service.pay(store, booking.id, alice, CARD)

    assert result.booking_status == BookingStatus.CONFIRMED
    assert result.status == PaymentStatus.COMPLETED
    assert result.amount == 100000

    bookings = await read_rows(Booking)
    assert len(bookings) == 1
    assert bookings[0].status == BookingStatus.CONFIRMED
    assert bookings[0].user_id == alice.id

    seats = await read_rows(Seat)
    assert sorted(f"{s.row}{s.number}" for s in seats) == ["A1", "A2"]
    assert all(s.theater_id == showtime.theater_id for s in seats)

    links = await read_rows(BookingSeat)
    assert len(links) == 2
    assert {link.booking_id for link in links} == {booking.id}

    payments = await read_rows(Payment)
    assert len(payments) == 1
    assert payments[0].booking_id == booking.id
    assert float(payments[0].amount) == 100000
    assert payments[0].payment_method == PaymentMethod.CREDIT_CARD

    assert await get_taken_seats(store, showtime.id) == {"A1", "A2"}


async def test_booking_details_after_confirmation(store, showtime, alice):
    selection = SeatSelection.from_request(["B3", "B4"], 2)
    booking = await booking_service.create_booking(store, alice, showtime, selection)
    await payment_service.pay(store, booking.id, alice, CARD)

    details = await booking_service.get_booking_details(store, booking.id, alice)

    assert details.status == BookingStatus.CONFIRMED
    assert details.seats == ["B3", "B4"]
    assert details.movie_title == "Test Movie"
    assert details.theater_name == "Test Theater"
    assert details.showtime == "2026-11-01 at 19:30"
    assert details.user_email == "alice@example.com"


async def test_first_booking_creates_user_record(store, showtime, alice, read_rows):
    selection = SeatSelection.from_request(["C1"], 1)
    await booking_service.create_booking(store, alice, showtime, selection)

    users = await read_rows(User, User.id == alice.id)
    assert len(users) == 1
    assert users[0].email == "alice@example.com"
    assert users[0].full_name == "Alice"
