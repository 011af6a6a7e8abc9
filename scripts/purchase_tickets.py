#!/usr/bin/env python3
"""
CLI script to purchase cinema tickets against the in-memory gateways.

Useful for trying out the order rules without running the API.

Usage:
    python scripts/purchase_tickets.py --account 1 ADULT=2 CHILD=1 INFANT=1
    python scripts/purchase_tickets.py --account 1 --seats 2 ADULT=3
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.errors import TicketServiceError
from domain.ticket import LineItem
from gateways.payment import InMemoryPaymentService
from gateways.seat_reservation import InMemorySeatReservationService
from services.logging_config import configure_logging
from services.purchase_service import TicketService
from services.settings import load_settings


def parse_line_item(value: str) -> LineItem:
    """Parse TYPE=COUNT, e.g. ADULT=2."""
    ticket_type, sep, count = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected TYPE=COUNT, got {value!r}")
    try:
        return LineItem.of(ticket_type, int(count))
    except (TypeError, ValueError) as e:
        raise argparse.ArgumentTypeError(str(e))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Purchase cinema tickets (in-memory seat reservation and payment)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two adults, one child, one infant
  python purchase_tickets.py --account 1 ADULT=2 CHILD=1 INFANT=1

  # Simulate a nearly full screen
  python purchase_tickets.py --account 1 --seats 2 ADULT=3

  # Simulate an account with limited funds
  python purchase_tickets.py --account 1 --balance 30 ADULT=2
        """
    )

    parser.add_argument(
        "--account",
        "-a",
        type=int,
        required=True,
        help="Account id paying for the tickets"
    )

    parser.add_argument(
        "--seats",
        type=int,
        default=None,
        help="Seats available (default: unlimited)"
    )

    parser.add_argument(
        "--balance",
        type=int,
        default=None,
        help="Funds available on the account (default: unlimited)"
    )

    parser.add_argument(
        "tickets",
        nargs="+",
        type=parse_line_item,
        help="Ticket lines as TYPE=COUNT (ADULT, CHILD, INFANT)"
    )

    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings)

    balances = {args.account: args.balance} if args.balance is not None else None
    service = TicketService.from_settings(
        settings,
        payment_service=InMemoryPaymentService(balances=balances),
        seat_reservation_service=InMemorySeatReservationService(capacity=args.seats),
    )

    try:
        confirmation = service.purchase_tickets(args.account, *args.tickets)
    except TicketServiceError as e:
        print(f"✗ Purchase rejected [{e.code.value}]: {e.message}")
        if e.transaction_id:
            print(f"  Transaction id: {e.transaction_id}")
        return 1

    print(f"✓ {confirmation.message}")
    print(f"  Transaction id: {confirmation.transaction_id}")
    print(f"  Seats reserved: {confirmation.total_seats}")
    print(f"  Amount paid:    {confirmation.total_cost}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
