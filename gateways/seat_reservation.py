"""
In-memory seat reservation service.

Stands in for the cinema's seat booking system. Arguments are checked the way
the real service checks them; exceeding the configured capacity is reported as
an operational failure. Only a running total of reserved seats is kept, so a
long-running process does not grow with every account it serves.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from domain.ticket import is_count
from gateways.interfaces import GatewayError, SeatReservationService

logger = logging.getLogger(__name__)


class InMemorySeatReservationService(SeatReservationService):
    """
    Seat reservations kept in process memory.

    Args:
        capacity: Total seats available across all accounts. None means unlimited.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        self._capacity = capacity
        self._seats_reserved = 0
        self._lock = threading.Lock()

    @property
    def seats_reserved(self) -> int:
        return self._seats_reserved

    @property
    def seats_available(self) -> Optional[int]:
        if self._capacity is None:
            return None
        return self._capacity - self._seats_reserved

    def reserve_seat(self, account_id: int, seat_count: int) -> None:
        if not is_count(account_id) or account_id == 0:
            raise GatewayError.invalid_input("accountId must be an integer greater than zero")
        if not is_count(seat_count):
            raise GatewayError.invalid_input("totalSeatsToAllocate must be a non-negative integer")

        with self._lock:
            available = self.seats_available
            if available is not None and seat_count > available:
                raise GatewayError.operational(
                    f"Not enough seats available: requested {seat_count}, available {available}"
                )
            self._seats_reserved += seat_count

        logger.debug(
            "Seats reserved",
            extra={"account_id": account_id, "seat_count": seat_count},
        )


__all__ = ["InMemorySeatReservationService"]
