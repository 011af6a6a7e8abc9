"""
Cinema Tickets API - Main Application.

Builds the FastAPI app for ticket quotes and purchases. Request bodies that
do not match the models are answered with the same 400 MALFORMED_REQUEST
payload the ticket service uses for malformed orders.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api import __version__
from api.dependencies import get_settings
from api.models import ErrorResponse
from api.routers import purchases, quotes
from domain.errors import ErrorCode, Messages
from services.logging_config import configure_logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "cinema-tickets-api"
API_PREFIX = "/api/v1"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(
        f"Malformed request body for {request.url.path}",
        extra={"errors": exc.errors()},
    )
    detail = ErrorResponse(
        code=ErrorCode.MALFORMED_REQUEST.value,
        message=Messages.INVALID_REQUEST,
    )
    return JSONResponse(status_code=400, content={"detail": detail.model_dump()})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    application = FastAPI(
        title="Cinema Tickets API",
        description="Quote and purchase cinema tickets",
        version=__version__,
    )
    application.add_exception_handler(RequestValidationError, request_validation_handler)

    @application.get("/health", tags=["Health"])
    def health_check():
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": __version__,
            "environment": settings.environment,
        }

    @application.get("/", tags=["Root"])
    def root():
        """List the ticket endpoints."""
        return {
            "service": SERVICE_NAME,
            "version": __version__,
            "endpoints": {
                "quotes": f"{API_PREFIX}/quotes",
                "purchases": f"{API_PREFIX}/purchases",
            },
        }

    application.include_router(quotes.router, prefix=API_PREFIX, tags=["Quotes"])
    application.include_router(purchases.router, prefix=API_PREFIX, tags=["Purchases"])
    return application


app = create_app()
