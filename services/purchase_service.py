"""
Purchase service for cinema tickets.

Handles:
- Transaction id assignment (one per purchase attempt)
- Validation of the request against the order rules
- Seat reservation, then payment
- Mapping every failure to InvalidRequestError or InvalidPurchaseError

Seats are reserved before payment is taken so that money is never accepted
for seats that cannot be provided. If payment fails after seats were
reserved, the reservation is NOT released and payment is not retried; the
failure is logged with the transaction id and raised to the caller.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, NoReturn, Optional

from domain.errors import (
    ErrorCode,
    InvalidPurchaseError,
    InvalidRequestError,
    Messages,
    TicketValidationError,
)
from domain.ticket import LineItem, PurchaseConfirmation, PurchaseRequest
from domain.transaction_id import SnowflakeIdGenerator
from gateways.interfaces import (
    GatewayError,
    GatewayErrorKind,
    SeatReservationService,
    TicketPaymentService,
)
from services.pricing_service import (
    PurchaseQuote,
    calculate_purchase_quote,
    calculate_total_cost,
    calculate_total_seats,
)
from services.settings import Settings
from services.ticket_validator import TicketValidator

logger = logging.getLogger(__name__)


class PurchaseState(str, Enum):
    """
    Lifecycle of one purchase attempt. Transitions only move forward:

    CREATED -> VALIDATED -> SEATS_RESERVED -> PAID -> CONFIRMED

    A failure in any step ends the attempt in the state it had reached.
    """
    CREATED = "CREATED"
    VALIDATED = "VALIDATED"
    SEATS_RESERVED = "SEATS_RESERVED"
    PAID = "PAID"
    CONFIRMED = "CONFIRMED"


class TicketService:
    """Coordinates validation, seat reservation and payment for a ticket purchase."""

    def __init__(
        self,
        payment_service: TicketPaymentService,
        seat_reservation_service: SeatReservationService,
        validator: Optional[TicketValidator] = None,
        id_generator: Optional[SnowflakeIdGenerator] = None,
    ) -> None:
        self._payment_service = payment_service
        self._seat_reservation_service = seat_reservation_service
        self._validator = validator or TicketValidator()
        self._id_generator = id_generator or SnowflakeIdGenerator()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        payment_service: TicketPaymentService,
        seat_reservation_service: SeatReservationService,
    ) -> "TicketService":
        return cls(
            payment_service=payment_service,
            seat_reservation_service=seat_reservation_service,
            validator=TicketValidator(max_tickets_per_order=settings.max_tickets_per_order),
            id_generator=SnowflakeIdGenerator(machine_id=settings.machine_id, epoch_ms=settings.epoch_ms),
        )

    def purchase_tickets(self, account_id: int, *line_items: LineItem) -> PurchaseConfirmation:
        """
        Purchase tickets for an account.

        Args:
            account_id: Paying account, a positive integer
            *line_items: One LineItem per ticket category

        Returns:
            PurchaseConfirmation with the transaction id

        Raises:
            InvalidRequestError: Malformed account id or line items
            InvalidPurchaseError: A business rule, the seat reservation or the
                payment rejected the purchase

        Example:
            confirmation = service.purchase_tickets(
                1,
                LineItem(TicketCategory.ADULT, 2),
                LineItem(TicketCategory.CHILD, 1),
            )
            print(confirmation.transaction_id)
        """
        return self.execute_purchase(PurchaseRequest(account_id=account_id, line_items=line_items))

    def execute_purchase(self, request: PurchaseRequest) -> PurchaseConfirmation:
        # 1. Assign the transaction id used in every log record below
        transaction_id = self._id_generator.generate()

        # 2. Validate the order rules
        self._validate(request, transaction_id)
        state = PurchaseState.VALIDATED

        # 3. Reserve seats before taking any money
        total_seats = calculate_total_seats(request.line_items)
        self._call_gateway(
            lambda: self._seat_reservation_service.reserve_seat(request.account_id, total_seats),
            step="Seat reservation",
            state=state,
            transaction_id=transaction_id,
            failed=(ErrorCode.SEAT_RESERVATION_FAILED, Messages.SEAT_RESERVATION_FAILED),
            rejected_input=(ErrorCode.SEAT_RESERVATION_REJECTED_INPUT, Messages.SEAT_RESERVATION_ERROR),
        )
        state = PurchaseState.SEATS_RESERVED
        logger.info(
            f"Seat reservation successful: {total_seats} seats",
            extra={"transaction_id": transaction_id, "state": state.value},
        )

        # 4. Take payment. No rollback of the reservation on failure.
        total_cost = calculate_total_cost(request.line_items)
        self._call_gateway(
            lambda: self._payment_service.make_payment(request.account_id, total_cost),
            step="Payment",
            state=state,
            transaction_id=transaction_id,
            failed=(ErrorCode.PAYMENT_FAILED, Messages.PAYMENT_FAILED),
            rejected_input=(ErrorCode.PAYMENT_REJECTED_INPUT, Messages.PAYMENT_ERROR),
        )
        state = PurchaseState.PAID
        logger.info(
            f"Payment successful: {total_cost}",
            extra={"transaction_id": transaction_id, "state": state.value},
        )

        state = PurchaseState.CONFIRMED
        logger.info(
            "Purchase confirmed",
            extra={"transaction_id": transaction_id, "state": state.value},
        )
        return PurchaseConfirmation(
            message=Messages.PURCHASE_SUCCESSFUL,
            transaction_id=transaction_id,
            total_cost=total_cost,
            total_seats=total_seats,
        )

    def get_quote(self, account_id: int, *line_items: LineItem) -> PurchaseQuote:
        """
        Validate and price an order without reserving seats or taking payment.

        Raises the same errors as purchase_tickets for invalid requests.
        """
        request = PurchaseRequest(account_id=account_id, line_items=line_items)
        try:
            self._validator.validate(request)
        except TicketValidationError as exc:
            _raise_rejection(exc, transaction_id=None)
        return calculate_purchase_quote(request.line_items)

    def _validate(self, request: PurchaseRequest, transaction_id: str) -> None:
        try:
            self._validator.validate(request)
        except TicketValidationError as exc:
            logger.error(
                f"Purchase validation failed: {exc.message}",
                extra={
                    "transaction_id": transaction_id,
                    "state": PurchaseState.CREATED.value,
                    "error_code": exc.code.value,
                },
            )
            _raise_rejection(exc, transaction_id)

    def _call_gateway(
        self,
        call: Callable[[], None],
        step: str,
        state: PurchaseState,
        transaction_id: str,
        failed: tuple[ErrorCode, str],
        rejected_input: tuple[ErrorCode, str],
    ) -> None:
        try:
            call()
        except GatewayError as exc:
            if exc.kind is GatewayErrorKind.INVALID_INPUT:
                code, message = rejected_input
                logger.error(
                    f"{step} error: {exc.message}",
                    extra={"transaction_id": transaction_id, "state": state.value, "error_code": code.value},
                )
            else:
                code, message = failed
                logger.warning(
                    f"{step} error: {exc.message}",
                    extra={"transaction_id": transaction_id, "state": state.value, "error_code": code.value},
                )
            raise InvalidPurchaseError(code, message, transaction_id) from exc
        except Exception as exc:
            # Unclassified collaborator failures count as operational
            code, message = failed
            logger.warning(
                f"{step} error: {exc}",
                extra={"transaction_id": transaction_id, "state": state.value, "error_code": code.value},
            )
            raise InvalidPurchaseError(code, message, transaction_id) from exc


def _raise_rejection(exc: TicketValidationError, transaction_id: Optional[str]) -> NoReturn:
    if exc.code is ErrorCode.MALFORMED_REQUEST:
        raise InvalidRequestError(exc.message, transaction_id) from exc
    raise InvalidPurchaseError(exc.code, exc.message, transaction_id) from exc


__all__ = [
    "PurchaseState",
    "TicketService",
]
