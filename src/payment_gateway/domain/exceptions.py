"""Custom exceptions for the Payment Gateway."""


class PaymentGatewayError(Exception):
    """Base exception for payment gateway errors."""

    pass


class BankUnavailable(PaymentGatewayError):
    """
    Raised when the acquiring bank cannot be reached or reports unavailability.

    Covers:
    - Timeouts, refused connections, DNS failures (no response at all)
    - The bank answering 503
    - An empty or unparseable success body

    Not retried. The caller gets a retry-later signal.
    """

    pass


class PaymentNotFound(PaymentGatewayError):
    """Raised when no payment summary is stored under the requested id."""

    def __init__(self, payment_id):
        super().__init__(f"Payment {payment_id} not found")
        self.payment_id = payment_id
