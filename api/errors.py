"""
Translation of ticket service errors into HTTP errors.

- MALFORMED_REQUEST -> 400
- business rule rejections -> 422
- collaborator operational failure -> 503
- collaborator refused our input -> 502
"""

from typing import Iterable, Tuple

from fastapi import HTTPException

from api.models import ErrorResponse, TicketLine
from domain.errors import ErrorCode, Messages, TicketServiceError
from domain.ticket import LineItem

_STATUS_BY_CODE = {
    ErrorCode.MALFORMED_REQUEST: 400,
    ErrorCode.SEAT_RESERVATION_FAILED: 503,
    ErrorCode.PAYMENT_FAILED: 503,
    ErrorCode.SEAT_RESERVATION_REJECTED_INPUT: 502,
    ErrorCode.PAYMENT_REJECTED_INPUT: 502,
}


def to_http_exception(error: TicketServiceError) -> HTTPException:
    detail = ErrorResponse(
        code=error.code.value,
        message=error.message,
        transaction_id=error.transaction_id,
    )
    return HTTPException(
        status_code=_STATUS_BY_CODE.get(error.code, 422),
        detail=detail.model_dump(),
    )


def to_line_items(tickets: Iterable[TicketLine]) -> Tuple[LineItem, ...]:
    """Convert API ticket lines; unknown types or bad quantities are a 400."""
    try:
        return tuple(LineItem.of(line.ticket_type, line.quantity) for line in tickets)
    except (TypeError, ValueError):
        detail = ErrorResponse(
            code=ErrorCode.MALFORMED_REQUEST.value,
            message=Messages.INVALID_REQUEST,
        )
        raise HTTPException(status_code=400, detail=detail.model_dump())
