"""
Pytest configuration and shared fixtures.

Adds the project root to the Python path so tests can import domain,
services, gateways and api, and provides recording collaborators.
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.transaction_id import SnowflakeIdGenerator  # noqa: E402
from gateways.interfaces import SeatReservationService, TicketPaymentService  # noqa: E402
from services.purchase_service import TicketService  # noqa: E402


class RecordingSeatReservation(SeatReservationService):
    """Records every call; raises `error` instead when one is set."""

    def __init__(self) -> None:
        self.calls: List[Tuple[int, int]] = []
        self.error: Optional[Exception] = None

    def reserve_seat(self, account_id: int, seat_count: int) -> None:
        self.calls.append((account_id, seat_count))
        if self.error is not None:
            raise self.error


class RecordingPayment(TicketPaymentService):
    """Records every call; raises `error` instead when one is set."""

    def __init__(self) -> None:
        self.calls: List[Tuple[int, int]] = []
        self.error: Optional[Exception] = None

    def make_payment(self, account_id: int, amount: int) -> None:
        self.calls.append((account_id, amount))
        if self.error is not None:
            raise self.error


@pytest.fixture
def seat_reservation() -> RecordingSeatReservation:
    return RecordingSeatReservation()


@pytest.fixture
def payment() -> RecordingPayment:
    return RecordingPayment()


@pytest.fixture
def ticket_service(payment: RecordingPayment, seat_reservation: RecordingSeatReservation) -> TicketService:
    return TicketService(
        payment_service=payment,
        seat_reservation_service=seat_reservation,
        id_generator=SnowflakeIdGenerator(machine_id=7),
    )
