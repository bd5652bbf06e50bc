"""Domain primitives that enforce validity at creation time."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Self
from uuid import UUID, uuid4

CENT = Decimal("0.01")


@dataclass(frozen=True)
class RoomId:
    """Unique identifier for a Room."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Non-negative amount in the major currency unit."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")
        object.__setattr__(self, "amount", Decimal(self.amount).quantize(CENT))

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    def __add__(self, other: "Money") -> "Money":
        return Money(amount=self.amount + other.amount)

    def __mul__(self, factor: int) -> "Money":
        return Money(amount=self.amount * factor)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Maximum occupancy of a room, at least one guest."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Capacity must be at least 1")


@dataclass(frozen=True)
class DateRange:
    """Half-open stay interval ``[check_in, check_out)``.

    The check-out date is not an occupied night. Construction does not
    reject inverted ranges: callers ask ``is_valid`` and the pricing and
    availability rules treat an invalid range as zero nights.
    """

    check_in: date
    check_out: date

    @property
    def is_valid(self) -> bool:
        return self.check_in < self.check_out

    @property
    def night_count(self) -> int:
        return max((self.check_out - self.check_in).days, 0)

    def nights(self) -> Iterator[date]:
        """Yield each night's start date, check-in through the day before check-out."""
        night = self.check_in
        while night < self.check_out:
            yield night
            night += timedelta(days=1)

    def overlaps(self, other: "DateRange") -> bool:
        """Two stays conflict when they share at least one night."""
        return self.check_in < other.check_out and self.check_out > other.check_in

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()}..{self.check_out.isoformat()}"


@dataclass(frozen=True)
class PartySize:
    """Adults and kids in a booking party.

    Categories that price per room only care about the total, so a single
    guest count is stored as adults with no kids.
    """

    adults: int
    kids: int = 0

    def __post_init__(self) -> None:
        if self.adults < 0 or self.kids < 0:
            raise ValueError("Party counts cannot be negative")
        if self.total < 1:
            raise ValueError("Party must include at least one guest")

    @classmethod
    def of_guests(cls, guests: int) -> Self:
        return cls(adults=guests)

    @property
    def total(self) -> int:
        return self.adults + self.kids


@dataclass(frozen=True)
class ContactInfo:
    """Guest contact details captured on the booking form."""

    name: str
    email: str
    phone: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Guest name is required")
        if "@" not in self.email:
            raise ValueError("A valid guest email is required")
