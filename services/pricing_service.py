"""
Pricing service for ticket orders.

Calculates the total cost and the number of seats needed for a set of line
items, using the static per-category price table.

Inputs are expected to have passed TicketValidator already. A category missing
from the price table is a configuration defect and surfaces as KeyError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Mapping

from domain.ticket import TICKET_PRICES, LineItem, TicketCategory

CURRENCY = "GBP"


@dataclass(frozen=True, slots=True)
class PriceCalculation:
    """
    Priced line item: one category, its count and the resulting subtotal.
    """
    category: TicketCategory
    count: int
    unit_price: int

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.count

    @property
    def seats(self) -> int:
        return self.count if self.category.occupies_seat else 0


@dataclass(frozen=True, slots=True)
class PurchaseQuote:
    """
    Complete price breakdown for an order.

    Includes:
    - Individual line prices
    - Total cost (sum of all lines)
    - Seats required (infants excluded)
    """
    items: List[PriceCalculation]
    total_cost: int
    total_seats: int
    currency: str
    created_at: datetime

    @property
    def total_tickets(self) -> int:
        """Total number of tickets in this quote, infants included."""
        return sum(item.count for item in self.items)


def calculate_total_cost(
    line_items: Iterable[LineItem],
    prices: Mapping[TicketCategory, int] = TICKET_PRICES,
) -> int:
    """
    Sum of price[category] * count over all line items.

    Example:
        calculate_total_cost([LineItem(TicketCategory.ADULT, 2), LineItem(TicketCategory.CHILD, 1)])
        # Returns 65
    """
    return sum(prices[item.category] * item.count for item in line_items)


def calculate_total_seats(line_items: Iterable[LineItem]) -> int:
    """Sum of counts over line items that occupy a seat (everything but INFANT)."""
    return sum(item.count for item in line_items if item.category.occupies_seat)


def calculate_purchase_quote(
    line_items: Iterable[LineItem],
    prices: Mapping[TicketCategory, int] = TICKET_PRICES,
) -> PurchaseQuote:
    """
    Calculate an itemised quote for the given line items.

    Args:
        line_items: Validated line items
        prices: Price table (default: TICKET_PRICES)

    Returns:
        PurchaseQuote with per-line pricing, total cost and seats
    """
    items = [
        PriceCalculation(
            category=item.category,
            count=item.count,
            unit_price=prices[item.category],
        )
        for item in line_items
    ]

    return PurchaseQuote(
        items=items,
        total_cost=sum(item.subtotal for item in items),
        total_seats=sum(item.seats for item in items),
        currency=CURRENCY,
        created_at=datetime.now(timezone.utc),
    )


__all__ = [
    "CURRENCY",
    "PriceCalculation",
    "PurchaseQuote",
    "calculate_purchase_quote",
    "calculate_total_cost",
    "calculate_total_seats",
]
