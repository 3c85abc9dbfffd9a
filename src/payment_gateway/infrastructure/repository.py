"""In-memory storage for payment summaries.

Summaries live for the lifetime of the process. There is no eviction and no
delete operation.
"""

import threading
import uuid

import structlog

from payment_gateway.domain.models import PaymentSummary

logger = structlog.get_logger(__name__)


class InMemoryPaymentRepository:
    """Thread-safe id -> PaymentSummary store.

    Constructed explicitly and injected into the gateway service; there is no
    module-level instance. Summaries are frozen, so a reader always sees a
    complete record.
    """

    def __init__(self) -> None:
        self._payments: dict[uuid.UUID, PaymentSummary] = {}
        self._lock = threading.Lock()

    def add(self, summary: PaymentSummary) -> None:
        """Store a summary under its id."""
        with self._lock:
            self._payments[summary.id] = summary

        logger.debug("payment_summary_stored", payment_id=str(summary.id))

    def get(self, payment_id: uuid.UUID) -> PaymentSummary | None:
        """Return the summary for an id, or None if absent."""
        with self._lock:
            return self._payments.get(payment_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._payments)
