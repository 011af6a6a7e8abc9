"""
In-memory ticket payment service.

Stands in for the payment provider. Recent charges are kept in a bounded log
so the caller (and tests) can inspect what was taken without the history
growing for the lifetime of the process.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Mapping, Optional

from domain.ticket import is_count
from gateways.interfaces import GatewayError, TicketPaymentService

logger = logging.getLogger(__name__)

PAYMENT_HISTORY_SIZE = 1000


@dataclass(frozen=True, slots=True)
class PaymentRecord:
    account_id: int
    amount: int


class InMemoryPaymentService(TicketPaymentService):
    """
    Payments kept in process memory.

    Args:
        balances: Optional funds per account. Accounts not listed have unlimited
            funds; a charge above the balance is an operational failure.
        history_size: Number of most recent payments kept in `payments`.
    """

    def __init__(
        self,
        balances: Optional[Mapping[int, int]] = None,
        history_size: int = PAYMENT_HISTORY_SIZE,
    ) -> None:
        self._balances: Optional[Dict[int, int]] = dict(balances) if balances is not None else None
        self._payments: Deque[PaymentRecord] = deque(maxlen=history_size)
        self._lock = threading.Lock()

    @property
    def payments(self) -> List[PaymentRecord]:
        """Most recent payments, oldest first."""
        return list(self._payments)

    def make_payment(self, account_id: int, amount: int) -> None:
        if not is_count(account_id) or account_id == 0:
            raise GatewayError.invalid_input("accountId must be an integer greater than zero")
        if not is_count(amount):
            raise GatewayError.invalid_input("totalAmountToPay must be a non-negative integer")

        with self._lock:
            if self._balances is not None and account_id in self._balances:
                balance = self._balances[account_id]
                if amount > balance:
                    raise GatewayError.operational(
                        f"Insufficient funds: charge {amount}, balance {balance}"
                    )
                self._balances[account_id] = balance - amount
            self._payments.append(PaymentRecord(account_id=account_id, amount=amount))

        logger.debug(
            "Payment taken",
            extra={"account_id": account_id, "amount": amount},
        )


__all__ = ["InMemoryPaymentService", "PaymentRecord"]
