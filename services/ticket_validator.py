"""
Ticket purchase validation.

Checks run in a fixed order and the first failure wins:
1. Structure: positive integer account id, at least one well-formed LineItem
2. Each ticket category appears at most once
3. Total tickets between 1 and the order limit
4. Child or infant tickets require at least one adult ticket
5. Infants cannot outnumber adults (one infant per adult lap)

Rules 4 and 5 apply to the order as a whole, so they run on aggregated
CategoryTotals rather than on individual line items.
"""

from __future__ import annotations

from typing import Sequence

from domain.errors import ErrorCode, Messages, TicketValidationError
from domain.ticket import (
    MAX_TICKETS_PER_ORDER,
    CategoryTotals,
    LineItem,
    PurchaseRequest,
    TicketCategory,
    is_count,
)


class TicketValidator:
    """Validates purchase requests against the order rules."""

    def __init__(self, max_tickets_per_order: int = MAX_TICKETS_PER_ORDER) -> None:
        self.max_tickets_per_order = max_tickets_per_order

    def validate(self, request: PurchaseRequest) -> CategoryTotals:
        """
        Validate a purchase request.

        Returns:
            The aggregated CategoryTotals of the request.

        Raises:
            TicketValidationError: With the code of the first failing rule.
        """

        self._check_structure(request)
        line_items: Sequence[LineItem] = request.line_items
        self._check_unique_categories(line_items)

        totals = CategoryTotals.from_line_items(line_items)
        self._check_ticket_count(totals)
        self._check_adult_present(totals)
        self._check_infant_capacity(totals)
        return totals

    def _check_structure(self, request: PurchaseRequest) -> None:
        account_id = request.account_id
        if not is_count(account_id) or account_id == 0:
            raise TicketValidationError(ErrorCode.MALFORMED_REQUEST, Messages.INVALID_REQUEST)

        line_items = request.line_items
        if not isinstance(line_items, (list, tuple)) or not line_items:
            raise TicketValidationError(ErrorCode.MALFORMED_REQUEST, Messages.INVALID_REQUEST)

        for item in line_items:
            if (
                not isinstance(item, LineItem)
                or not isinstance(item.category, TicketCategory)
                or not is_count(item.count)
            ):
                raise TicketValidationError(ErrorCode.MALFORMED_REQUEST, Messages.INVALID_REQUEST)

    def _check_unique_categories(self, line_items: Sequence[LineItem]) -> None:
        categories = {item.category for item in line_items}
        if len(categories) != len(line_items):
            raise TicketValidationError(ErrorCode.DUPLICATE_CATEGORY, Messages.DUPLICATE_TICKET_TYPE)

    def _check_ticket_count(self, totals: CategoryTotals) -> None:
        if totals.total < 1:
            raise TicketValidationError(ErrorCode.BELOW_MINIMUM_TICKETS, Messages.MIN_NUMBER_OF_TICKETS)

        if totals.total > self.max_tickets_per_order:
            raise TicketValidationError(
                ErrorCode.EXCEEDS_ORDER_LIMIT,
                Messages.MAX_ALLOWED_TICKETS.format(allowed_tickets=self.max_tickets_per_order),
            )

    def _check_adult_present(self, totals: CategoryTotals) -> None:
        if (totals.child > 0 or totals.infant > 0) and totals.adult == 0:
            raise TicketValidationError(ErrorCode.ADULT_REQUIRED, Messages.ADULT_REQUIRED)

    def _check_infant_capacity(self, totals: CategoryTotals) -> None:
        if totals.infant > totals.adult:
            raise TicketValidationError(ErrorCode.TOO_MANY_INFANTS, Messages.TOO_MANY_INFANTS)


__all__ = ["TicketValidator"]
