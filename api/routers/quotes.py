"""
Quotes API Endpoints.

Endpoint for pricing a ticket order without buying it.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_ticket_service
from api.errors import to_http_exception, to_line_items
from api.models import QuoteLineItem, QuoteResponse, TicketOrderRequest
from domain.errors import TicketServiceError
from services.purchase_service import TicketService

router = APIRouter()


@router.post(
    "/quotes",
    response_model=QuoteResponse,
    summary="Calculate Ticket Quote",
    description="Validate a ticket order and return its price and seat count. No seats are reserved."
)
def calculate_quote(
    request: TicketOrderRequest,
    service: TicketService = Depends(get_ticket_service),
):
    """
    Calculate the cost of a ticket order.

    The order is checked against the same rules as a purchase, so a quote that
    succeeds describes a purchase that would pass validation.
    """
    line_items = to_line_items(request.tickets)

    try:
        quote = service.get_quote(request.account_id, *line_items)
    except TicketServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to calculate quote: {str(e)}"
        )

    return QuoteResponse(
        items=[
            QuoteLineItem(
                ticket_type=item.category.value,
                quantity=item.count,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
            )
            for item in quote.items
        ],
        total_cost=quote.total_cost,
        total_seats=quote.total_seats,
        total_tickets=quote.total_tickets,
        currency=quote.currency,
        created_at=quote.created_at,
    )
