"""Acquiring bank client for payment authorization."""

import time
from abc import ABC, abstractmethod

import httpx
import structlog

from payment_gateway.domain.exceptions import BankUnavailable
from payment_gateway.domain.models import AuthorizationRequest, AuthorizationResult

logger = structlog.get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-Id"


class BankClient(ABC):
    """
    Interface to the acquiring bank.

    Implementations make exactly one attempt per call. Declines are NOT
    exceptions - they return AuthorizationResult(authorized=False).
    """

    @abstractmethod
    async def authorize(
        self,
        request: AuthorizationRequest,
        correlation_id: str | None = None,
    ) -> AuthorizationResult:
        """
        Ask the bank to authorize a payment.

        Args:
            request: Authorization request in the bank's contract shape
            correlation_id: Request correlation id to forward, if any

        Returns:
            AuthorizationResult with the bank's decision

        Raises:
            BankUnavailable: The bank could not be reached or reported unavailability
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""


class BankHttpClient(BankClient):
    """
    HTTP client for the bank's POST /payments endpoint.

    Error mapping:
    - Timeout / connection / DNS errors -> BankUnavailable
    - 503 -> BankUnavailable
    - Empty or unparseable 2xx body -> BankUnavailable
    - Any other non-2xx -> httpx.HTTPStatusError (propagated, not mapped)
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout_seconds: float = 10.0,
        read_timeout_seconds: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the bank client.

        Args:
            base_url: Base URL of the bank (e.g., "http://localhost:8080")
            connect_timeout_seconds: Connect timeout in seconds
            read_timeout_seconds: Read timeout in seconds
            http_client: Pre-built AsyncClient (used to run against an in-process bank)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(read_timeout_seconds, connect=connect_timeout_seconds)
        self.http_client = http_client or httpx.AsyncClient(timeout=self.timeout)

        logger.info(
            "bank_client_initialized",
            base_url=self.base_url,
            connect_timeout_seconds=connect_timeout_seconds,
            read_timeout_seconds=read_timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def authorize(
        self,
        request: AuthorizationRequest,
        correlation_id: str | None = None,
    ) -> AuthorizationResult:
        url = f"{self.base_url}/payments"
        log = logger.bind(correlation_id=correlation_id) if correlation_id else logger

        headers = {"Content-Type": "application/json"}
        if correlation_id:
            headers[CORRELATION_ID_HEADER] = correlation_id

        log.info(
            "bank_call_started",
            currency=request.currency,
            amount=request.amount,
        )

        start = time.perf_counter()
        try:
            response = await self.http_client.post(
                url,
                headers=headers,
                json=request.to_dict(),
            )

        except httpx.TimeoutException as e:
            log.error(
                "bank_call_timeout",
                duration_ms=_elapsed_ms(start),
                error=str(e),
            )
            raise BankUnavailable("Bank request timed out") from e

        except httpx.RequestError as e:
            # Connection refused, DNS failure, etc.
            log.error(
                "bank_call_request_error",
                duration_ms=_elapsed_ms(start),
                error=str(e),
            )
            raise BankUnavailable(f"Bank request error: {e}") from e

        duration_ms = _elapsed_ms(start)

        if response.status_code == 503:
            log.error(
                "bank_call_failed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            raise BankUnavailable("Bank returned 503")

        if not response.is_success:
            log.error(
                "bank_call_failed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            response.raise_for_status()

        try:
            body = response.json()
        except ValueError as e:
            log.error(
                "bank_response_unparseable",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            raise BankUnavailable("Empty or unparseable bank response body") from e

        if not isinstance(body, dict):
            log.error(
                "bank_response_unparseable",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            raise BankUnavailable("Empty or unparseable bank response body")

        authorized = body.get("authorized") is True
        authorization_code = body.get("authorization_code") or ""

        log.info(
            "bank_call_completed",
            authorized=authorized,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        return AuthorizationResult(
            authorized=authorized,
            authorization_code=str(authorization_code),
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
