"""Payment domain models.

Request-side models (PaymentRequest, AuthorizationRequest) carry the full card
number and CVV and are never persisted; their repr is masked so they can't leak
into logs or tracebacks. PaymentSummary is the only stored entity.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any

from payment_gateway.domain.card_data import mask_card_number, mask_cvv


class PaymentStatus(str, Enum):
    """Payment status as exposed to merchants."""

    AUTHORIZED = "Authorized"
    DECLINED = "Declined"
    # Never stored; only used in rejection responses
    REJECTED = "Rejected"


@dataclass(frozen=True, repr=False)
class PaymentRequest:
    """Inbound card payment request (sensitive - never persisted or logged unmasked)."""

    card_number: str
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int
    cvv: str

    @property
    def expiry_date(self) -> str:
        """Expiry in the MM/YYYY form the bank expects."""
        return f"{self.expiry_month:02d}/{self.expiry_year}"

    def __repr__(self) -> str:
        return (
            f"PaymentRequest(card_number={mask_card_number(self.card_number)!r}, "
            f"expiry_month={self.expiry_month}, expiry_year={self.expiry_year}, "
            f"currency={self.currency!r}, amount={self.amount}, "
            f"cvv={mask_cvv(self.cvv)!r})"
        )


@dataclass(frozen=True, repr=False)
class AuthorizationRequest:
    """Outbound authorization request in the bank's contract shape."""

    card_number: str
    expiry_date: str
    currency: str
    amount: int
    cvv: str

    @classmethod
    def from_payment_request(cls, request: PaymentRequest) -> "AuthorizationRequest":
        return cls(
            card_number=request.card_number,
            expiry_date=request.expiry_date,
            currency=request.currency,
            amount=request.amount,
            cvv=request.cvv,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON body for the bank call."""
        return {
            "card_number": self.card_number,
            "expiry_date": self.expiry_date,
            "currency": self.currency,
            "amount": self.amount,
            "cvv": self.cvv,
        }

    def __repr__(self) -> str:
        return (
            f"AuthorizationRequest(card_number={mask_card_number(self.card_number)!r}, "
            f"expiry_date={self.expiry_date!r}, currency={self.currency!r}, "
            f"amount={self.amount}, cvv={mask_cvv(self.cvv)!r})"
        )


@dataclass(frozen=True)
class AuthorizationResult:
    """
    Bank decision for an authorization request.

    The authorization code is opaque and forwarded as-is; it is empty when
    the payment was not authorized.
    """

    authorized: bool
    authorization_code: str = ""


@dataclass(frozen=True)
class PaymentSummary:
    """
    Non-sensitive record of a processed payment.

    Holds at most the last four digits of the card and never the CVV.
    Immutable once created.
    """

    id: uuid.UUID
    status: PaymentStatus
    card_number_last_four: int
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "status": self.status.value,
            "card_number_last_four": self.card_number_last_four,
            "expiry_month": self.expiry_month,
            "expiry_year": self.expiry_year,
            "currency": self.currency,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class RequestContext:
    """Per-request values passed explicitly down the call chain."""

    correlation_id: str
    merchant_id: str | None = None
