"""Pricing calculator.

Each night in ``[check_in, check_out)`` is charged at the weekend rate when
it starts on a Friday or Saturday and the room defines one, otherwise at the
weekday rate. Per-head categories multiply the room total by the whole party
(kids are charged like adults).
"""

from dataclasses import dataclass
from datetime import date

from bookings.domain.models import Room
from bookings.domain.value_objects import DateRange, Money, PartySize, RoomId

FRIDAY = 4
SATURDAY = 5
WEEKEND_NIGHTS = frozenset({FRIDAY, SATURDAY})


@dataclass(frozen=True)
class NightlyRate:
    """Rate charged for a single night of a stay."""

    night: date
    rate: Money
    is_weekend: bool


@dataclass(frozen=True)
class PriceQuote:
    """Priced stay for a room and party.

    ``is_estimate`` is set for quote-only rooms; the amount must then be
    settled by staff before the booking can be confirmed.
    """

    room_id: RoomId
    stay: DateRange
    party: PartySize
    nightly_rates: tuple[NightlyRate, ...]
    base_total: Money
    total: Money
    per_head: bool
    is_estimate: bool


def is_weekend_night(night: date) -> bool:
    return night.weekday() in WEEKEND_NIGHTS


def nightly_rate(room: Room, night: date) -> NightlyRate:
    weekend = is_weekend_night(night)
    if weekend and room.weekend_price is not None:
        rate = room.weekend_price
    else:
        rate = room.weekday_price
    return NightlyRate(night=night, rate=rate, is_weekend=weekend)


def build_quote(room: Room, stay: DateRange, party: PartySize) -> PriceQuote:
    """Price every night of the stay and apply the category's party rule.

    An inverted or empty range has no nights and therefore totals zero.
    """
    rates = tuple(nightly_rate(room, night) for night in stay.nights())

    base_total = Money.zero()
    for rate in rates:
        base_total += rate.rate

    per_head = room.category.is_per_head
    total = base_total * party.total if per_head else base_total

    return PriceQuote(
        room_id=room.id,
        stay=stay,
        party=party,
        nightly_rates=rates,
        base_total=base_total,
        total=total,
        per_head=per_head,
        is_estimate=room.manual_pricing,
    )


def compute_total(room: Room, stay: DateRange, party: PartySize) -> Money:
    return build_quote(room, stay, party).total
