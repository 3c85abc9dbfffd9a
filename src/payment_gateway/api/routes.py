"""Payment endpoints: POST /api/v1/payments and GET /api/v1/payments/{id}."""

import uuid

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from payment_gateway.api.dependencies import Context, GatewayService
from payment_gateway.api.models import (
    ErrorResponseJSON,
    PaymentRequestJSON,
    PaymentSummaryJSON,
    RejectionResponseJSON,
)
from payment_gateway.domain.services import (
    PaymentBankUnavailable,
    PaymentProcessed,
    PaymentRejected,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])

BANK_UNAVAILABLE_MESSAGE = "Payment processor unavailable, retry later"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def rejection_response(errors: list[str]) -> JSONResponse:
    """400 response carrying a list of validation errors."""
    return JSONResponse(
        content=RejectionResponseJSON(errors=errors).model_dump(),
        status_code=400,
    )


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        content=ErrorResponseJSON(message=message).model_dump(),
        status_code=status_code,
    )


@router.post(
    "",
    status_code=201,
    response_model=PaymentSummaryJSON,
    responses={
        400: {"model": RejectionResponseJSON, "description": "Payment rejected (validation)"},
        500: {"model": ErrorResponseJSON, "description": "Internal server error"},
        503: {"model": ErrorResponseJSON, "description": "Bank unavailable"},
    },
)
async def create_payment(
    payment: PaymentRequestJSON,
    service: GatewayService,
    context: Context,
) -> JSONResponse:
    """Process a payment.

    Validates the request, authorizes it with the acquiring bank, stores
    the summary and returns it.

    Returns:
        201 with the summary (Authorized or Declined), 400 with errors when
        rejected, 503 when the bank is unavailable, 500 otherwise
    """
    outcome = await service.process_payment(payment.to_domain(), context)

    if isinstance(outcome, PaymentProcessed):
        return JSONResponse(
            content=PaymentSummaryJSON.from_domain(outcome.summary).model_dump(),
            status_code=201,
        )

    if isinstance(outcome, PaymentRejected):
        return rejection_response(outcome.errors)

    if isinstance(outcome, PaymentBankUnavailable):
        return error_response(BANK_UNAVAILABLE_MESSAGE, 503)

    return error_response(INTERNAL_ERROR_MESSAGE, 500)


@router.get(
    "/{payment_id}",
    response_model=PaymentSummaryJSON,
    responses={
        400: {"model": RejectionResponseJSON, "description": "Malformed payment id"},
        404: {"model": ErrorResponseJSON, "description": "Payment not found"},
    },
)
async def get_payment(
    payment_id: str,
    service: GatewayService,
    context: Context,
) -> JSONResponse:
    """Retrieve a payment summary by id.

    Raises:
        PaymentNotFound: Rendered as 404 by the application's error handlers
    """
    try:
        payment_uuid = uuid.UUID(payment_id)
    except ValueError:
        logger.warning(
            "invalid_payment_id",
            payment_id=payment_id,
            correlation_id=context.correlation_id,
        )
        return rejection_response(["id: invalid value"])

    summary = service.get_payment(payment_uuid, context)

    return JSONResponse(
        content=PaymentSummaryJSON.from_domain(summary).model_dump(),
        status_code=200,
    )
