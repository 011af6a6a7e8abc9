"""
Tests for `services/purchase_service.py`.

Covers:
- Successful purchase reserves seats, then charges, then confirms with a transaction id.
- Validation failures surface before any collaborator is called.
- Seat reservation failure stops the purchase before payment.
- Collaborator failures are classified (operational vs rejected input).
- Payment failure after reservation does not release the seats.
- Every failure carries and logs the transaction id.
"""

from __future__ import annotations

import logging

import pytest

from domain.errors import (
    ErrorCode,
    InvalidPurchaseError,
    InvalidRequestError,
    Messages,
)
from domain.ticket import LineItem, TicketCategory
from gateways.interfaces import GatewayError
from gateways.payment import InMemoryPaymentService
from gateways.seat_reservation import InMemorySeatReservationService
from services.purchase_service import PurchaseState, TicketService
from services.settings import Settings

ADULT = TicketCategory.ADULT
CHILD = TicketCategory.CHILD
INFANT = TicketCategory.INFANT


def test_valid_purchase_reserves_seats_and_takes_payment(ticket_service, seat_reservation, payment) -> None:
    """ADULT=2, CHILD=1, INFANT=1 -> 3 seats, cost 65."""

    confirmation = ticket_service.purchase_tickets(
        1,
        LineItem(ADULT, 2),
        LineItem(CHILD, 1),
        LineItem(INFANT, 1),
    )

    assert seat_reservation.calls == [(1, 3)]
    assert payment.calls == [(1, 65)]
    assert confirmation.message == Messages.PURCHASE_SUCCESSFUL
    assert isinstance(confirmation.transaction_id, str)
    assert confirmation.transaction_id != ""
    assert confirmation.total_cost == 65
    assert confirmation.total_seats == 3


def test_infants_are_charged_nothing_and_get_no_seat(ticket_service, seat_reservation, payment) -> None:
    ticket_service.purchase_tickets(1, LineItem(ADULT, 2), LineItem(INFANT, 2))

    assert seat_reservation.calls == [(1, 2)]
    assert payment.calls == [(1, 50)]


def test_each_purchase_gets_a_new_transaction_id(ticket_service) -> None:
    first = ticket_service.purchase_tickets(1, LineItem(ADULT, 1))
    second = ticket_service.purchase_tickets(1, LineItem(ADULT, 1))

    assert first.transaction_id != second.transaction_id


@pytest.mark.parametrize("account_id", [0, -5, "1", 2.5])
def test_invalid_account_is_malformed_and_calls_nothing(ticket_service, seat_reservation, payment, account_id) -> None:
    with pytest.raises(InvalidRequestError) as exc_info:
        ticket_service.purchase_tickets(account_id, LineItem(ADULT, 1))

    assert exc_info.value.code is ErrorCode.MALFORMED_REQUEST
    assert exc_info.value.message == Messages.INVALID_REQUEST
    assert exc_info.value.transaction_id
    assert seat_reservation.calls == []
    assert payment.calls == []


def test_no_line_items_is_malformed(ticket_service) -> None:
    with pytest.raises(InvalidRequestError):
        ticket_service.purchase_tickets(1)


def test_object_that_is_not_a_line_item_is_malformed(ticket_service) -> None:
    with pytest.raises(InvalidRequestError):
        ticket_service.purchase_tickets(1, {"ticket_type": "ADULT", "count": 2})


@pytest.mark.parametrize(
    "line_items, code",
    [
        ((LineItem(INFANT, 2),), ErrorCode.ADULT_REQUIRED),
        ((LineItem(ADULT, 1), LineItem(INFANT, 3)), ErrorCode.TOO_MANY_INFANTS),
        ((LineItem(ADULT, 23), LineItem(CHILD, 5)), ErrorCode.EXCEEDS_ORDER_LIMIT),
        ((LineItem(ADULT, 1), LineItem(ADULT, 3), LineItem(INFANT, 2)), ErrorCode.DUPLICATE_CATEGORY),
        ((LineItem(ADULT, 0),), ErrorCode.BELOW_MINIMUM_TICKETS),
    ],
)
def test_business_rule_violations_reject_purchase(ticket_service, seat_reservation, payment, line_items, code) -> None:
    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, *line_items)

    assert exc_info.value.code is code
    assert seat_reservation.calls == []
    assert payment.calls == []


def test_order_limit_message_includes_limit(ticket_service) -> None:
    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, LineItem(ADULT, 23), LineItem(CHILD, 5))

    assert str(exc_info.value) == Messages.MAX_ALLOWED_TICKETS.format(allowed_tickets=25)


def test_seat_reservation_failure_skips_payment(ticket_service, seat_reservation, payment) -> None:
    seat_reservation.error = GatewayError.operational("No seats left")

    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, LineItem(ADULT, 2))

    assert exc_info.value.code is ErrorCode.SEAT_RESERVATION_FAILED
    assert exc_info.value.message == Messages.SEAT_RESERVATION_FAILED
    assert isinstance(exc_info.value.__cause__, GatewayError)
    assert payment.calls == []


def test_unclassified_seat_reservation_error_counts_as_operational(ticket_service, seat_reservation, payment) -> None:
    seat_reservation.error = ConnectionError("booking system unreachable")

    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, LineItem(ADULT, 2))

    assert exc_info.value.code is ErrorCode.SEAT_RESERVATION_FAILED
    assert payment.calls == []


def test_seat_reservation_rejecting_input_is_a_distinct_error(ticket_service, seat_reservation, payment) -> None:
    seat_reservation.error = GatewayError.invalid_input("accountId must be an integer")

    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, LineItem(ADULT, 2))

    assert exc_info.value.code is ErrorCode.SEAT_RESERVATION_REJECTED_INPUT
    assert exc_info.value.message == Messages.SEAT_RESERVATION_ERROR
    assert payment.calls == []


def test_payment_failure_is_rejected_after_reservation(ticket_service, seat_reservation, payment) -> None:
    payment.error = GatewayError.operational("Card declined")

    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, LineItem(ADULT, 1))

    assert exc_info.value.code is ErrorCode.PAYMENT_FAILED
    assert exc_info.value.message == Messages.PAYMENT_FAILED
    assert seat_reservation.calls == [(1, 1)]
    assert payment.calls == [(1, 25)]


def test_payment_rejecting_input_is_a_distinct_error(ticket_service, payment) -> None:
    payment.error = GatewayError.invalid_input("totalAmountToPay must be an integer")

    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, LineItem(ADULT, 1))

    assert exc_info.value.code is ErrorCode.PAYMENT_REJECTED_INPUT
    assert exc_info.value.message == Messages.PAYMENT_ERROR


def test_payment_failure_keeps_seat_reservation() -> None:
    """Seats reserved before a failed payment stay reserved (no rollback)."""

    seats = InMemorySeatReservationService(capacity=10)
    payments = InMemoryPaymentService(balances={1: 10})
    service = TicketService(payment_service=payments, seat_reservation_service=seats)

    with pytest.raises(InvalidPurchaseError) as exc_info:
        service.purchase_tickets(1, LineItem(ADULT, 2))

    assert exc_info.value.code is ErrorCode.PAYMENT_FAILED
    assert seats.seats_reserved == 2
    assert payments.payments == []


def test_failures_are_logged_with_transaction_id(ticket_service, seat_reservation, caplog) -> None:
    seat_reservation.error = GatewayError.operational("No seats left")
    caplog.set_level(logging.INFO, logger="services.purchase_service")

    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, LineItem(ADULT, 2))

    records = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(records) == 1
    assert records[0].transaction_id == exc_info.value.transaction_id
    assert records[0].state == PurchaseState.VALIDATED.value
    assert records[0].error_code == ErrorCode.SEAT_RESERVATION_FAILED.value


def test_validation_failures_are_logged_as_errors(ticket_service, caplog) -> None:
    caplog.set_level(logging.INFO, logger="services.purchase_service")

    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.purchase_tickets(1, LineItem(INFANT, 1))

    records = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(records) == 1
    assert records[0].transaction_id == exc_info.value.transaction_id
    assert records[0].error_code == ErrorCode.ADULT_REQUIRED.value


def test_successful_purchase_logs_progress(ticket_service, caplog) -> None:
    caplog.set_level(logging.INFO, logger="services.purchase_service")

    confirmation = ticket_service.purchase_tickets(1, LineItem(ADULT, 1))

    records = [r for r in caplog.records if r.name == "services.purchase_service"]
    assert [r.state for r in records] == [
        PurchaseState.SEATS_RESERVED.value,
        PurchaseState.PAID.value,
        PurchaseState.CONFIRMED.value,
    ]
    assert all(r.transaction_id == confirmation.transaction_id for r in records)


def test_from_settings_applies_order_limit_and_machine_id(seat_reservation, payment) -> None:
    service = TicketService.from_settings(
        Settings(machine_id=9, max_tickets_per_order=3),
        payment_service=payment,
        seat_reservation_service=seat_reservation,
    )

    with pytest.raises(InvalidPurchaseError) as exc_info:
        service.purchase_tickets(1, LineItem(ADULT, 4))
    assert exc_info.value.code is ErrorCode.EXCEEDS_ORDER_LIMIT
    assert "3" in exc_info.value.message

    confirmation = service.purchase_tickets(1, LineItem(ADULT, 3))
    assert (int(confirmation.transaction_id) >> 12) & 0x3FF == 9


def test_get_quote_prices_without_side_effects(ticket_service, seat_reservation, payment) -> None:
    quote = ticket_service.get_quote(1, LineItem(ADULT, 2), LineItem(CHILD, 1))

    assert quote.total_cost == 65
    assert quote.total_seats == 3
    assert seat_reservation.calls == []
    assert payment.calls == []


def test_get_quote_applies_validation(ticket_service) -> None:
    with pytest.raises(InvalidPurchaseError) as exc_info:
        ticket_service.get_quote(1, LineItem(CHILD, 1))
    assert exc_info.value.code is ErrorCode.ADULT_REQUIRED
    assert exc_info.value.transaction_id is None

    with pytest.raises(InvalidRequestError):
        ticket_service.get_quote(0, LineItem(ADULT, 1))
