from gateways.interfaces import (
    GatewayError,
    GatewayErrorKind,
    SeatReservationService,
    TicketPaymentService,
)
from gateways.payment import InMemoryPaymentService, PaymentRecord
from gateways.seat_reservation import InMemorySeatReservationService

__all__ = [
    "GatewayError",
    "GatewayErrorKind",
    "InMemoryPaymentService",
    "InMemorySeatReservationService",
    "PaymentRecord",
    "SeatReservationService",
    "TicketPaymentService",
]
