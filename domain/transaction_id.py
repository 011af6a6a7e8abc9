"""
Domain: Snowflake-style transaction id generation.

Layout of the 64-bit value, rendered as a decimal string:

    (timestamp_ms - epoch) << 22 | machine_id << 12 | sequence

- machine_id is masked to 10 bits.
- sequence is 12 bits; up to 4096 ids per millisecond, after which the
  generator waits for the clock to move on.

Ids are unique for a single generator instance in a single process. Two
processes sharing a machine_id can collide, and a clock that moves backwards
is not detected.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

TWITTER_EPOCH_MS = 1288834974657

MACHINE_ID_BITS = 10
SEQUENCE_BITS = 12

MAX_MACHINE_ID = (1 << MACHINE_ID_BITS) - 1
SEQUENCE_MASK = (1 << SEQUENCE_BITS) - 1

MACHINE_ID_SHIFT = SEQUENCE_BITS
TIMESTAMP_SHIFT = SEQUENCE_BITS + MACHINE_ID_BITS


def _current_millis() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True, slots=True)
class TransactionIdParts:
    timestamp_ms: int
    machine_id: int
    sequence: int


class SnowflakeIdGenerator:
    """
    Thread-safe generator of monotonically increasing transaction ids.

    Args:
        machine_id: Identifies this process; only the low 10 bits are used.
        epoch_ms: Custom epoch in Unix milliseconds (default: Twitter's epoch).
        clock: Millisecond clock, injectable for tests.
    """

    def __init__(
        self,
        machine_id: int = 1,
        epoch_ms: int = TWITTER_EPOCH_MS,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.machine_id = machine_id & MAX_MACHINE_ID
        self.epoch_ms = epoch_ms
        self._clock = clock or _current_millis
        self._lock = threading.Lock()
        self._sequence = 0
        self._last_timestamp = -1

    def generate(self) -> str:
        with self._lock:
            timestamp = self._clock()

            if timestamp == self._last_timestamp:
                self._sequence = (self._sequence + 1) & SEQUENCE_MASK
                if self._sequence == 0:
                    # Sequence exhausted for this millisecond.
                    while timestamp <= self._last_timestamp:
                        timestamp = self._clock()
            else:
                self._sequence = 0

            self._last_timestamp = timestamp

            value = (
                (timestamp - self.epoch_ms) << TIMESTAMP_SHIFT
                | self.machine_id << MACHINE_ID_SHIFT
                | self._sequence
            )
            return str(value)

    def parse(self, transaction_id: str) -> TransactionIdParts:
        """Decode an id produced by this generator (same epoch)."""

        value = int(transaction_id)
        return TransactionIdParts(
            timestamp_ms=(value >> TIMESTAMP_SHIFT) + self.epoch_ms,
            machine_id=(value >> MACHINE_ID_SHIFT) & MAX_MACHINE_ID,
            sequence=value & SEQUENCE_MASK,
        )


__all__ = [
    "SnowflakeIdGenerator",
    "TWITTER_EPOCH_MS",
    "TransactionIdParts",
]
