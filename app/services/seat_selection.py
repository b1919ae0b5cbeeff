"""
Seat labels and the seat selection state machine.

A label is a row letter followed by the seat number with no separator, e.g.
``A1`` or ``H12``. A selection moves between three states::

    idle (no seats) -> partial (1..ticket_count-1) -> ready (ticket_count seats)

and can only be confirmed when ready.
"""
import re
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from app.core.config import get_settings
from app.core.exceptions import InvalidSeatLabelError, InvalidSelectionError

THEATER_ROWS = ("A", "B", "C", "D", "E", "F", "G", "H")
SEATS_PER_ROW = 12

# canonical form only: upper-case ASCII row, no leading zero
SEAT_LABEL_PATTERN = re.compile(r"([A-Z])([1-9][0-9]*)")


def parse_seat_label(label: str) -> Tuple[str, int]:
    """Split 'A12' into ('A', 12). Labels such as 'a1' or 'A01' are rejected."""
    if not isinstance(label, str):
        raise InvalidSeatLabelError(label)
    match = SEAT_LABEL_PATTERN.fullmatch(label)
    if match is None:
        raise InvalidSeatLabelError(label)
    return match.group(1), int(match.group(2))


def format_seat_label(row: str, number: int) -> str:
    return f"{row}{number}"


def layout_labels() -> List[List[str]]:
    return [[format_seat_label(row, n) for n in range(1, SEATS_PER_ROW + 1)] for row in THEATER_ROWS]


class SelectionState(str, Enum):
    IDLE = "idle"
    PARTIAL = "partial"
    READY = "ready"


class SeatSelection:
    def __init__(self, ticket_count: int = 1, taken: Iterable[str] = (), max_tickets: Optional[int] = None):
        if max_tickets is None:
            max_tickets = get_settings().MAX_TICKETS_PER_BOOKING
        self.max_tickets = max_tickets
        self._check_ticket_count(ticket_count)
        self.ticket_count = ticket_count
        self.taken = frozenset(taken)
        self._seats: List[str] = []

    @property
    def seats(self) -> Tuple[str, ...]:
        return tuple(self._seats)

    @property
    def state(self) -> SelectionState:
        if not self._seats:
            return SelectionState.IDLE
        if len(self._seats) < self.ticket_count:
            return SelectionState.PARTIAL
        return SelectionState.READY

    @property
    def can_confirm(self) -> bool:
        return self.state == SelectionState.READY

    def is_taken(self, label: str) -> bool:
        return label in self.taken

    def select(self, label: str) -> bool:
        """Add a seat. Returns False when the seat is taken, already chosen or the selection is full."""
        parse_seat_label(label)
        if label in self.taken or label in self._seats:
            return False
        if len(self._seats) >= self.ticket_count:
            return False
        self._seats.append(label)
        return True

    def deselect(self, label: str) -> bool:
        if label not in self._seats:
            return False
        self._seats.remove(label)
        return True

    def toggle(self, label: str) -> bool:
        if label in self.taken:
            return False
        if label in self._seats:
            return self.deselect(label)
        return self.select(label)

    def set_ticket_count(self, count: int) -> None:
        self._check_ticket_count(count)
        if count < len(self._seats):
            # keep the earliest picks
            self._seats = self._seats[:count]
        self.ticket_count = count

    def _check_ticket_count(self, count: int) -> None:
        if not isinstance(count, int) or count < 1 or count > self.max_tickets:
            raise InvalidSelectionError(
                f"Ticket count must be between 1 and {self.max_tickets}")

    @classmethod
    def from_request(cls, seats: Iterable[str], ticket_count: int, taken: Iterable[str] = ()) -> "SeatSelection":
        """
        Replay a submitted selection against a taken-seat snapshot.

        Every seat the state machine would not accept is a validation error, as is
        a selection that does not fill the ticket count.
        """
        selection = cls(ticket_count=ticket_count, taken=taken)
        for label in seats:
            if selection.select(label):
                continue
            if selection.is_taken(label):
                raise InvalidSelectionError(f"Seat {label} is already taken")
            if label in selection.seats:
                raise InvalidSelectionError(f"Seat {label} selected more than once")
            raise InvalidSelectionError(f"Please select {ticket_count} seats to continue.")
        if not selection.can_confirm:
            raise InvalidSelectionError(f"Please select {ticket_count} seats to continue.")
        return selection
