"""Domain layer for the Payment Gateway."""

from payment_gateway.domain.exceptions import (
    BankUnavailable,
    PaymentGatewayError,
    PaymentNotFound,
)
from payment_gateway.domain.models import (
    AuthorizationRequest,
    AuthorizationResult,
    PaymentRequest,
    PaymentStatus,
    PaymentSummary,
    RequestContext,
)

__all__ = [
    "AuthorizationRequest",
    "AuthorizationResult",
    "BankUnavailable",
    "PaymentGatewayError",
    "PaymentNotFound",
    "PaymentRequest",
    "PaymentStatus",
    "PaymentSummary",
    "RequestContext",
]
