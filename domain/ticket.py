"""
Domain: Ticket categories, line items and per-order aggregates.

Rules captured here:
- Ticket categories are a closed set: ADULT, CHILD, INFANT.
- Prices are static per category: ADULT=25, CHILD=15, INFANT=0.
- An order may contain at most MAX_TICKETS_PER_ORDER tickets.
- Infants sit on an adult's lap and do not occupy a seat.

Business-rule enforcement lives in services/ticket_validator.py. This module only
guarantees that each value is well-formed on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple


class TicketCategory(str, Enum):
    ADULT = "ADULT"
    CHILD = "CHILD"
    INFANT = "INFANT"

    @property
    def occupies_seat(self) -> bool:
        """Infants travel on an adult's lap."""

        return self is not TicketCategory.INFANT


TICKET_PRICES: Mapping[TicketCategory, int] = MappingProxyType(
    {
        TicketCategory.ADULT: 25,
        TicketCategory.CHILD: 15,
        TicketCategory.INFANT: 0,
    }
)

MAX_TICKETS_PER_ORDER = 25


def is_count(value: object) -> bool:
    """True for a non-negative int; bools are rejected even though they subclass int."""

    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True, slots=True)
class LineItem:
    """
    One (category, count) line of a purchase request.

    Immutable. A request may hold at most one LineItem per category.
    """

    category: TicketCategory
    count: int

    def __post_init__(self) -> None:
        if not isinstance(self.category, TicketCategory):
            raise TypeError(f"category must be a TicketCategory, got {self.category!r}")
        if not isinstance(self.count, int) or isinstance(self.count, bool):
            raise TypeError(f"count must be an integer, got {self.count!r}")
        if self.count < 0:
            raise ValueError("count must be >= 0")

    @classmethod
    def of(cls, ticket_type: str, count: int) -> "LineItem":
        """
        Build a LineItem from a category name such as "ADULT".

        Raises ValueError for an unknown category name.
        """

        try:
            category = TicketCategory(ticket_type.upper())
        except (AttributeError, ValueError):
            raise ValueError(f"Unknown ticket type: {ticket_type!r}") from None
        return cls(category=category, count=count)


@dataclass(frozen=True, slots=True)
class CategoryTotals:
    """Aggregated ticket counts for one order, one field per category."""

    adult: int = 0
    child: int = 0
    infant: int = 0

    @classmethod
    def from_line_items(cls, line_items: Iterable[LineItem]) -> "CategoryTotals":
        adult = child = infant = 0
        for item in line_items:
            if item.category is TicketCategory.ADULT:
                adult += item.count
            elif item.category is TicketCategory.CHILD:
                child += item.count
            else:
                infant += item.count
        return cls(adult=adult, child=child, infant=infant)

    @property
    def total(self) -> int:
        return self.adult + self.child + self.infant


@dataclass(frozen=True, slots=True)
class PurchaseRequest:
    """
    A purchase attempt: the paying account plus the requested line items.

    Not validated on construction; the validator reports structural problems
    as MALFORMED_REQUEST so callers get one error taxonomy.
    """

    account_id: int
    line_items: Tuple[LineItem, ...]


@dataclass(frozen=True, slots=True)
class PurchaseConfirmation:
    """Returned once seats are reserved and payment has been taken."""

    message: str
    transaction_id: str
    total_cost: int
    total_seats: int


__all__ = [
    "CategoryTotals",
    "LineItem",
    "MAX_TICKETS_PER_ORDER",
    "PurchaseConfirmation",
    "PurchaseRequest",
    "TICKET_PRICES",
    "TicketCategory",
    "is_count",
]
