"""
Gateway interfaces for the two external collaborators of a purchase.

Implementations must be swappable. They report failure by raising GatewayError
with one of two kinds:
- INVALID_INPUT: the collaborator refused the arguments it was given. This
  points at a defect in the caller, not a business condition.
- OPERATIONAL: anything else (no seats left, card declined, network down).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class GatewayErrorKind(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    OPERATIONAL = "OPERATIONAL"


class GatewayError(Exception):
    """Failure raised by a collaborator, classified by kind."""

    def __init__(self, kind: GatewayErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def invalid_input(cls, message: str) -> "GatewayError":
        return cls(GatewayErrorKind.INVALID_INPUT, message)

    @classmethod
    def operational(cls, message: str) -> "GatewayError":
        return cls(GatewayErrorKind.OPERATIONAL, message)


class SeatReservationService(ABC):
    """Reserves seats for an account. Blocking; no timeout is applied by callers."""

    @abstractmethod
    def reserve_seat(self, account_id: int, seat_count: int) -> None:
        """Reserve `seat_count` seats for `account_id` or raise GatewayError."""
        ...


class TicketPaymentService(ABC):
    """Charges an account. Blocking; no timeout is applied by callers."""

    @abstractmethod
    def make_payment(self, account_id: int, amount: int) -> None:
        """Charge `amount` to `account_id` or raise GatewayError."""
        ...


__all__ = [
    "GatewayError",
    "GatewayErrorKind",
    "SeatReservationService",
    "TicketPaymentService",
]
