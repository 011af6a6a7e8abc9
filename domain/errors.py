"""
Domain: Error codes, user-facing messages and exception types.

Two shapes leave the purchase service:
- InvalidRequestError: the caller sent something that is not a purchase request.
- InvalidPurchaseError: a well-formed request that was rejected, with a reason.

Collaborator failures (seat reservation, payment) are reported as
InvalidPurchaseError with their own codes, so callers never deal with
gateway-specific exception types.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    DUPLICATE_CATEGORY = "DUPLICATE_CATEGORY"
    BELOW_MINIMUM_TICKETS = "BELOW_MINIMUM_TICKETS"
    EXCEEDS_ORDER_LIMIT = "EXCEEDS_ORDER_LIMIT"
    ADULT_REQUIRED = "ADULT_REQUIRED"
    TOO_MANY_INFANTS = "TOO_MANY_INFANTS"
    SEAT_RESERVATION_FAILED = "SEAT_RESERVATION_FAILED"
    SEAT_RESERVATION_REJECTED_INPUT = "SEAT_RESERVATION_REJECTED_INPUT"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    PAYMENT_REJECTED_INPUT = "PAYMENT_REJECTED_INPUT"


class Messages:
    """User-safe message texts."""

    INVALID_REQUEST = "Invalid purchase request"
    DUPLICATE_TICKET_TYPE = "Each ticket type can only be requested once per purchase"
    MIN_NUMBER_OF_TICKETS = "At least one ticket must be purchased"
    MAX_ALLOWED_TICKETS = "Only a maximum of {allowed_tickets} tickets can be purchased at a time"
    ADULT_REQUIRED = "Child and Infant tickets cannot be purchased without an Adult ticket"
    TOO_MANY_INFANTS = "Each infant must be accompanied by an adult; infant tickets cannot exceed adult tickets"
    SEAT_RESERVATION_FAILED = "Seat reservation failed, please try again later"
    SEAT_RESERVATION_ERROR = "Seat reservation could not be processed"
    PAYMENT_FAILED = "Payment failed, please try again later"
    PAYMENT_ERROR = "Payment could not be processed"
    PURCHASE_SUCCESSFUL = "Tickets purchased successfully"


class TicketServiceError(Exception):
    """Base error carrying a code, a user-safe message and the transaction id, if any."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        transaction_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.transaction_id = transaction_id

    def __str__(self) -> str:
        return self.message


class TicketValidationError(TicketServiceError):
    """Raised by the validator; the first rule that fails wins."""


class InvalidRequestError(TicketServiceError):
    """The input is not a well-formed purchase request."""

    def __init__(self, message: str = Messages.INVALID_REQUEST, transaction_id: Optional[str] = None) -> None:
        super().__init__(ErrorCode.MALFORMED_REQUEST, message, transaction_id)


class InvalidPurchaseError(TicketServiceError):
    """A well-formed purchase was rejected by a business rule or a collaborator."""


__all__ = [
    "ErrorCode",
    "InvalidPurchaseError",
    "InvalidRequestError",
    "Messages",
    "TicketServiceError",
    "TicketValidationError",
]
