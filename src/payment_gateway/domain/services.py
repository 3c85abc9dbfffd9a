"""Domain service for payment processing.

This module orchestrates a payment from validation through bank authorization
to the stored summary, and serves summary lookups by id.

Payment processing returns one of four outcome variants instead of raising
for expected conditions:

    PaymentProcessed       - bank answered (Authorized or Declined), summary stored
    PaymentRejected        - business-rule violations, bank never called
    PaymentBankUnavailable - bank unreachable or reported 503, nothing stored
    PaymentFailed          - any other authorization failure, nothing stored
"""

import uuid
from dataclasses import dataclass, field

import structlog

from payment_gateway.clients.bank_client import BankClient
from payment_gateway.domain.card_data import extract_last_four, mask_card_number
from payment_gateway.domain.exceptions import BankUnavailable, PaymentNotFound
from payment_gateway.domain.models import (
    AuthorizationRequest,
    PaymentRequest,
    PaymentStatus,
    PaymentSummary,
    RequestContext,
)
from payment_gateway.domain.validator import PaymentValidator
from payment_gateway.infrastructure.repository import InMemoryPaymentRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PaymentProcessed:
    summary: PaymentSummary


@dataclass(frozen=True)
class PaymentRejected:
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PaymentBankUnavailable:
    message: str


@dataclass(frozen=True)
class PaymentFailed:
    message: str


PaymentOutcome = PaymentProcessed | PaymentRejected | PaymentBankUnavailable | PaymentFailed


class PaymentGatewayService:
    """Domain service for payment operations.

    Each call is independent; the repository is the only shared state.
    Steps of one payment are strictly sequential: validate fully, then call
    the bank once, then store.
    """

    def __init__(
        self,
        repository: InMemoryPaymentRepository,
        bank_client: BankClient,
        validator: PaymentValidator | None = None,
    ) -> None:
        self.repository = repository
        self.bank_client = bank_client
        self.validator = validator or PaymentValidator()

    async def process_payment(
        self,
        request: PaymentRequest,
        context: RequestContext | None = None,
    ) -> PaymentOutcome:
        """Validate, authorize and record a payment.

        Args:
            request: Inbound payment request
            context: Per-request context (correlation id, merchant)

        Returns:
            One of PaymentProcessed, PaymentRejected, PaymentBankUnavailable, PaymentFailed
        """
        correlation_id = context.correlation_id if context else None
        log = _bind(logger, context)

        log.info(
            "payment_request_received",
            card_number=mask_card_number(request.card_number),
            currency=request.currency,
            amount=request.amount,
        )

        errors = self.validator.validate(request)
        if errors:
            log.warning("payment_rejected", error_count=len(errors), errors=errors)
            return PaymentRejected(errors=errors)

        bank_request = AuthorizationRequest.from_payment_request(request)

        try:
            result = await self.bank_client.authorize(
                bank_request, correlation_id=correlation_id
            )
        except BankUnavailable as e:
            log.error("payment_bank_unavailable", error=str(e))
            return PaymentBankUnavailable(message=str(e))
        except Exception:
            log.exception("payment_authorization_failed")
            return PaymentFailed(message="Unexpected error during authorization")

        status = PaymentStatus.AUTHORIZED if result.authorized else PaymentStatus.DECLINED
        last_four = extract_last_four(request.card_number)

        summary = PaymentSummary(
            id=uuid.uuid4(),
            status=status,
            card_number_last_four=last_four,
            expiry_month=request.expiry_month,
            expiry_year=request.expiry_year,
            currency=request.currency,
            amount=request.amount,
        )
        self.repository.add(summary)

        log.info(
            "payment_completed",
            payment_id=str(summary.id),
            status=status.value,
            currency=summary.currency,
            amount=summary.amount,
            last4=last_four,
        )

        return PaymentProcessed(summary=summary)

    def get_payment(
        self,
        payment_id: uuid.UUID,
        context: RequestContext | None = None,
    ) -> PaymentSummary:
        """Look up a stored payment summary.

        Raises:
            PaymentNotFound: If no summary is stored under payment_id
        """
        log = _bind(logger, context)
        log.debug("payment_lookup", payment_id=str(payment_id))

        summary = self.repository.get(payment_id)
        if summary is None:
            log.warning("payment_not_found", payment_id=str(payment_id))
            raise PaymentNotFound(payment_id)

        return summary


def _bind(log, context: RequestContext | None):
    if context is None:
        return log
    if context.merchant_id:
        return log.bind(correlation_id=context.correlation_id, merchant_id=context.merchant_id)
    return log.bind(correlation_id=context.correlation_id)
