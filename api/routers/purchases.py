"""
Purchases API Endpoints.

Endpoint for buying cinema tickets.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_ticket_service
from api.errors import to_http_exception, to_line_items
from api.models import PurchaseResponse, TicketOrderRequest
from domain.errors import TicketServiceError
from services.purchase_service import TicketService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/purchases",
    response_model=PurchaseResponse,
    summary="Purchase Tickets",
    description="Validate a ticket order, reserve seats, take payment and return a transaction id."
)
def purchase_tickets(
    request: TicketOrderRequest,
    service: TicketService = Depends(get_ticket_service),
):
    """
    Purchase cinema tickets for an account.

    **Process:**
    1. Assigns a transaction id
    2. Validates the order (ticket limits, adult/child/infant rules)
    3. Reserves one seat per adult and child ticket
    4. Takes payment (Adult 25, Child 15, Infant free)

    **Example request:**
    ```json
    {
      "account_id": 1,
      "tickets": [
        {"ticket_type": "ADULT", "quantity": 2},
        {"ticket_type": "CHILD", "quantity": 1}
      ]
    }
    ```

    **Success response:**
    ```json
    {
      "message": "Tickets purchased successfully",
      "transaction_id": "1879237112836460544",
      "total_cost": 65,
      "total_seats": 3
    }
    ```

    **Failure response (422):**
    ```json
    {
      "detail": {
        "code": "ADULT_REQUIRED",
        "message": "Child and Infant tickets cannot be purchased without an Adult ticket",
        "transaction_id": "1879237112836460545"
      }
    }
    ```
    """
    line_items = to_line_items(request.tickets)

    try:
        confirmation = service.purchase_tickets(request.account_id, *line_items)
    except TicketServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("Unexpected error during ticket purchase")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to purchase tickets: {str(e)}"
        )

    return PurchaseResponse(
        message=confirmation.message,
        transaction_id=confirmation.transaction_id,
        total_cost=confirmation.total_cost,
        total_seats=confirmation.total_seats,
    )
