"""Business-rule validation for payment requests."""

from collections.abc import Callable
from datetime import date, datetime, timezone

from payment_gateway.domain.models import PaymentRequest

# Fixed policy; not configurable
ALLOWED_CURRENCIES: tuple[str, ...] = ("USD", "EUR", "GBP")

EXPIRY_IN_PAST = "Expiry date must be in the future"
EXPIRY_INVALID = "Invalid expiry month/year"
CURRENCY_NOT_SUPPORTED = "Currency must be one of: " + ", ".join(ALLOWED_CURRENCIES)
AMOUNT_NOT_POSITIVE = "Amount must be greater than 0"

Clock = Callable[[], date]


def utc_today() -> date:
    """Current date in UTC."""
    return datetime.now(timezone.utc).date()


class PaymentValidator:
    """
    Stateless rule evaluator for payment requests.

    Every rule runs on every call and all violations are returned together,
    so a merchant can fix everything from a single response.

    Rules:
    - Expiry month/year strictly after the current month (current month is rejected)
    - Currency, uppercased, in ALLOWED_CURRENCIES
    - Amount > 0 (also enforced by the input schema)
    """

    def __init__(self, clock: Clock = utc_today) -> None:
        """
        Args:
            clock: Returns today's date; injected so tests can pin the current month
        """
        self.clock = clock

    def validate(self, request: PaymentRequest) -> list[str]:
        """Return the list of violations for a request (empty when valid)."""
        errors: list[str] = []

        expiry_error = self._check_expiry(request.expiry_month, request.expiry_year)
        if expiry_error:
            errors.append(expiry_error)

        currency = (request.currency or "").upper()
        if currency not in ALLOWED_CURRENCIES:
            errors.append(CURRENCY_NOT_SUPPORTED)

        if request.amount is None or request.amount <= 0:
            errors.append(AMOUNT_NOT_POSITIVE)

        return errors

    def _check_expiry(self, month: int, year: int) -> str | None:
        try:
            expiry = date(year, month, 1)
        except (TypeError, ValueError, OverflowError):
            return EXPIRY_INVALID

        today = self.clock()
        if (expiry.year, expiry.month) <= (today.year, today.month):
            return EXPIRY_IN_PAST
        return None
