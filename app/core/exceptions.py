import traceback
from typing import Optional


class BookingError(Exception):
    def __init__(self, message: str, status_code: int = 400, stack_trace: bool = False):
        self.message = message
        self.status_code = status_code
        self.stack_trace = traceback.format_exc() if stack_trace else None
        super().__init__(self.message)


class IdentityError(BookingError):
    def __init__(self, message: str = "You must be logged in to book tickets"):
        super().__init__(message, status_code=401)


class ForbiddenError(BookingError):
    def __init__(self, message: str = "Admin access required"):
        super().__init__(message, status_code=403)


class ShowtimeNotFoundError(BookingError):
    def __init__(self, showtime_id: str):
        super().__init__(f"Showtime with ID {showtime_id} not found", status_code=404)


class BookingNotFoundError(BookingError):
    def __init__(self, booking_id: str):
        super().__init__(f"Booking {booking_id} not found", status_code=404)


class InvalidSelectionError(BookingError):
    def __init__(self, message: str):
        super().__init__(message, status_code=422)


class InvalidSeatLabelError(InvalidSelectionError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Invalid seat label: {label!r}")


class PaymentValidationError(BookingError):
    def __init__(self, message: str):
        super().__init__(message, status_code=422)


class LoadError(BookingError):
    def __init__(self, message: str):
        super().__init__(message, status_code=500, stack_trace=True)


class WriteError(BookingError):
    """A workflow step failed after earlier steps were already committed."""

    def __init__(self, message: str, step: str, seat: Optional[str] = None):
        self.step = step
        self.seat = seat
        super().__init__(message, status_code=500, stack_trace=True)


class PaymentFailedError(BookingError):
    def __init__(self):
        super().__init__("Failed to process payment. Please try again.", status_code=500, stack_trace=True)


class DataStoreError(Exception):
    """Raised by the data store client once a call has failed for good."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self):
        return self.message
