"""FastAPI application entry point for the Payment Gateway."""

import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from payment_gateway import __version__
from payment_gateway.api.models import FIELD_ERROR_MESSAGES
from payment_gateway.api.routes import (
    INTERNAL_ERROR_MESSAGE,
    error_response,
    rejection_response,
    router as payments_router,
)
from payment_gateway.clients.bank_client import CORRELATION_ID_HEADER, BankHttpClient
from payment_gateway.config import Settings, settings as default_settings
from payment_gateway.domain.exceptions import PaymentNotFound
from payment_gateway.domain.services import PaymentGatewayService
from payment_gateway.domain.validator import PaymentValidator
from payment_gateway.infrastructure.repository import InMemoryPaymentRepository
from payment_gateway.logging_config import configure_logging

logger = structlog.get_logger()

MALFORMED_JSON_MESSAGE = "Malformed JSON request"


def format_validation_errors(errors: list[dict[str, Any]]) -> list[str]:
    """Turn pydantic/FastAPI validation errors into "<field>: <message>" strings."""
    messages: list[str] = []
    for error in errors:
        if error.get("type") == "json_invalid":
            return [MALFORMED_JSON_MESSAGE]

        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if not field:
            messages.append(MALFORMED_JSON_MESSAGE)
        elif error.get("type") == "missing":
            messages.append(f"{field}: is required")
        else:
            message = FIELD_ERROR_MESSAGES.get(field, error.get("msg", "invalid value"))
            messages.append(f"{field}: {message}")
    return messages


def build_gateway_service(settings: Settings) -> PaymentGatewayService:
    """Wire the repository, bank client and validator explicitly."""
    bank_client = BankHttpClient(
        base_url=settings.bank_base_url,
        connect_timeout_seconds=settings.bank_connect_timeout_seconds,
        read_timeout_seconds=settings.bank_read_timeout_seconds,
    )
    return PaymentGatewayService(
        repository=InMemoryPaymentRepository(),
        bank_client=bank_client,
        validator=PaymentValidator(),
    )


def create_app(
    settings: Settings | None = None,
    gateway_service: PaymentGatewayService | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to use (defaults to the global settings)
        gateway_service: Pre-built service (tests inject one with a fake bank)
    """
    settings = settings or default_settings
    configure_logging(settings)

    if gateway_service is None:
        gateway_service = build_gateway_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager.

        Closes the bank client's connection pool on shutdown.
        """
        logger.info("starting_payment_gateway", environment=settings.environment)

        yield

        logger.info("shutting_down_payment_gateway")
        await app.state.gateway_service.bank_client.close()
        logger.info("payment_gateway_shutdown_complete")

    app = FastAPI(
        title="Payment Gateway",
        description="Card payment processing and retrieval",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.gateway_service = gateway_service
    app.state.api_keys = settings.parsed_api_keys()
    # Production never runs open, even without configured keys
    app.state.api_key_required = settings.environment == "production"

    if not app.state.api_keys:
        if app.state.api_key_required:
            logger.error("api_keys_not_configured", environment=settings.environment)
        else:
            logger.warning("api_key_authentication_disabled")

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        """Attach a correlation id to the request and echo it on the response."""
        incoming = request.headers.get(CORRELATION_ID_HEADER, "")
        correlation_id = incoming.strip() or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        try:
            response = await call_next(request)
        except Exception:
            # Exception handlers run outside this middleware; answer here to keep the header
            logger.exception(
                "unhandled_error",
                path=request.url.path,
                correlation_id=correlation_id,
            )
            response = error_response(INTERNAL_ERROR_MESSAGE, 500)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = format_validation_errors(exc.errors())
        logger.warning(
            "request_validation_failed",
            path=request.url.path,
            error_count=len(errors),
        )
        return rejection_response(errors)

    @app.exception_handler(PaymentNotFound)
    async def payment_not_found_handler(request: Request, exc: PaymentNotFound) -> JSONResponse:
        return error_response("Payment not found", 404)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404:
            message = "Resource not found"
        else:
            message = str(exc.detail)
        return error_response(message, exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path)
        return error_response(INTERNAL_ERROR_MESSAGE, 500)

    app.include_router(payments_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.service_name,
            "environment": settings.environment,
        }

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "Payment Gateway",
            "version": __version__,
            "status": "running",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "payment_gateway.api.main:app",
        host="0.0.0.0",
        port=8090,
        log_level=default_settings.log_level.lower(),
    )
