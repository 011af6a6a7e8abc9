"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
Business rules are not duplicated here; they are enforced by the services.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Ticket Models
# ============================================================================

class TicketLine(BaseModel):
    """One ticket type and how many of it to buy."""
    ticket_type: str = Field(..., description="ADULT, CHILD or INFANT")
    quantity: int = Field(..., strict=True, description="Number of tickets of this type")


class TicketOrderRequest(BaseModel):
    """Account plus requested ticket lines."""
    account_id: int = Field(..., strict=True, description="Account paying for the tickets")
    tickets: List[TicketLine] = Field(
        ...,
        description="One entry per ticket type"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "account_id": 1,
                "tickets": [
                    {"ticket_type": "ADULT", "quantity": 2},
                    {"ticket_type": "CHILD", "quantity": 1},
                    {"ticket_type": "INFANT", "quantity": 1}
                ]
            }
        }


# ============================================================================
# Quote Models
# ============================================================================

class QuoteLineItem(BaseModel):
    """Single priced line in a quote."""
    ticket_type: str
    quantity: int
    unit_price: int
    subtotal: int


class QuoteResponse(BaseModel):
    """Price breakdown for a ticket order."""
    items: List[QuoteLineItem]
    total_cost: int
    total_seats: int
    total_tickets: int
    currency: str
    created_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "items": [
                    {"ticket_type": "ADULT", "quantity": 2, "unit_price": 25, "subtotal": 50},
                    {"ticket_type": "CHILD", "quantity": 1, "unit_price": 15, "subtotal": 15}
                ],
                "total_cost": 65,
                "total_seats": 3,
                "total_tickets": 3,
                "currency": "GBP",
                "created_at": "2025-01-01T12:00:00Z"
            }
        }


# ============================================================================
# Purchase Models
# ============================================================================

class PurchaseResponse(BaseModel):
    """Confirmation of a completed purchase."""
    message: str
    transaction_id: str
    total_cost: int
    total_seats: int

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Tickets purchased successfully",
                "transaction_id": "1879237112836460544",
                "total_cost": 65,
                "total_seats": 3
            }
        }


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Error detail returned for rejected requests."""
    code: str
    message: str
    transaction_id: Optional[str] = None
