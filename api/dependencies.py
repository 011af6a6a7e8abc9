"""
Service wiring for the API.

A single TicketService per process, so every request shares one transaction id
generator.
"""

from functools import lru_cache

from gateways.payment import InMemoryPaymentService
from gateways.seat_reservation import InMemorySeatReservationService
from services.purchase_service import TicketService
from services.settings import Settings, load_settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_ticket_service() -> TicketService:
    return TicketService.from_settings(
        get_settings(),
        payment_service=InMemoryPaymentService(),
        seat_reservation_service=InMemorySeatReservationService(),
    )
