"""Pydantic models for JSON API requests/responses.

The request model is the schema-validation layer in front of the business
rules: it enforces field formats, the PaymentValidator enforces policy.
"""

from pydantic import BaseModel, ConfigDict, Field

from payment_gateway.domain.models import PaymentRequest, PaymentStatus, PaymentSummary

# Per-field messages used when schema validation rejects a request
FIELD_ERROR_MESSAGES = {
    "card_number": "must be 14-19 digits",
    "expiry_month": "must be between 1 and 12",
    "expiry_year": "must be a valid year",
    "currency": "must be a 3-letter uppercase ISO 4217 code",
    "amount": "must be a positive integer",
    "cvv": "must be 3-4 digits",
}


class PaymentRequestJSON(BaseModel):
    """JSON request model for processing a payment."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "card_number": "2222405343248877",
                "expiry_month": 4,
                "expiry_year": 2030,
                "currency": "GBP",
                "amount": 100,
                "cvv": "123",
            }
        }
    )

    card_number: str = Field(
        ..., description="Card number (14-19 digits)", pattern=r"^[0-9]{14,19}$", repr=False
    )
    expiry_month: int = Field(..., description="Expiry month (1-12)", ge=1, le=12)
    expiry_year: int = Field(..., description="Expiry year (must be in the future)")
    currency: str = Field(..., description="ISO 4217 currency code", pattern=r"^[A-Z]{3}$")
    amount: int = Field(..., description="Amount in minor units", gt=0)
    cvv: str = Field(
        ..., description="Card verification value (3-4 digits)", pattern=r"^[0-9]{3,4}$", repr=False
    )

    def to_domain(self) -> PaymentRequest:
        return PaymentRequest(
            card_number=self.card_number,
            expiry_month=self.expiry_month,
            expiry_year=self.expiry_year,
            currency=self.currency,
            amount=self.amount,
            cvv=self.cvv,
        )


class PaymentSummaryJSON(BaseModel):
    """JSON response model for a processed or retrieved payment."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "status": "Authorized",
                "card_number_last_four": 8877,
                "expiry_month": 4,
                "expiry_year": 2030,
                "currency": "GBP",
                "amount": 100,
            }
        }
    )

    id: str = Field(..., description="Payment identifier")
    status: str = Field(..., description="Payment status (Authorized, Declined)")
    card_number_last_four: int = Field(..., description="Last four digits of the card")
    expiry_month: int = Field(..., description="Expiry month")
    expiry_year: int = Field(..., description="Expiry year")
    currency: str = Field(..., description="ISO 4217 currency code")
    amount: int = Field(..., description="Amount in minor units")

    @classmethod
    def from_domain(cls, summary: PaymentSummary) -> "PaymentSummaryJSON":
        return cls(**summary.to_dict())


class RejectionResponseJSON(BaseModel):
    """JSON response model for a rejected request."""

    status: str = Field(default=PaymentStatus.REJECTED.value, description="Always Rejected")
    errors: list[str] = Field(default_factory=list, description="Validation error messages")


class ErrorResponseJSON(BaseModel):
    """JSON response model for non-validation errors."""

    message: str = Field(..., description="Error message")
