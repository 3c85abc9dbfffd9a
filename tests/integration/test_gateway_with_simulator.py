"""
Integration tests: gateway -> real BankHttpClient -> in-process bank simulator.

No network is used; both applications run over httpx.ASGITransport.
"""

import uuid

import httpx
import pytest
import pytest_asyncio

from payment_gateway.api.main import create_app
from payment_gateway.clients.bank_client import BankHttpClient
from payment_gateway.config import Settings
from payment_gateway.domain.exceptions import BankUnavailable
from payment_gateway.domain.models import AuthorizationRequest
from payment_gateway.domain.services import PaymentGatewayService
from payment_gateway.infrastructure.repository import InMemoryPaymentRepository
from payment_gateway.simulator.app import app as simulator_app

pytestmark = pytest.mark.integration

BANK_URL = "http://bank.test"
GATEWAY_URL = "http://gateway.test"


def payment_body(card_number: str) -> dict:
    return {
        "card_number": card_number,
        "expiry_month": 4,
        "expiry_year": 2030,
        "currency": "GBP",
        "amount": 100,
        "cvv": "123",
    }


@pytest_asyncio.fixture
async def bank_client():
    http_client = httpx.AsyncClient(transport=httpx.ASGITransport(app=simulator_app))
    client = BankHttpClient(base_url=BANK_URL, http_client=http_client)
    yield client
    await client.close()


@pytest.fixture
def gateway_app(bank_client, validator):
    service = PaymentGatewayService(
        repository=InMemoryPaymentRepository(),
        bank_client=bank_client,
        validator=validator,
    )
    return create_app(Settings(environment="test", api_keys=""), gateway_service=service)


@pytest_asyncio.fixture
async def gateway(gateway_app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=gateway_app), base_url=GATEWAY_URL
    ) as client:
        yield client


@pytest.mark.asyncio
class TestBankHttpClientAgainstSimulator:
    """Test the HTTP contract between BankHttpClient and the simulator."""

    async def test_odd_card_authorized(self, bank_client):
        result = await bank_client.authorize(
            AuthorizationRequest(
                card_number="2222405343248877",
                expiry_date="04/2030",
                currency="GBP",
                amount=100,
                cvv="123",
            )
        )

        assert result.authorized is True
        assert uuid.UUID(result.authorization_code)

    async def test_even_card_declined(self, bank_client):
        result = await bank_client.authorize(
            AuthorizationRequest(
                card_number="2222405343248878",
                expiry_date="04/2030",
                currency="GBP",
                amount=100,
                cvv="123",
            )
        )

        assert result.authorized is False
        assert result.authorization_code == ""

    async def test_zero_card_unavailable(self, bank_client):
        with pytest.raises(BankUnavailable):
            await bank_client.authorize(
                AuthorizationRequest(
                    card_number="2222405343248870",
                    expiry_date="04/2030",
                    currency="GBP",
                    amount=100,
                    cvv="123",
                ),
                correlation_id="corr-503",
            )


@pytest.mark.asyncio
class TestGatewayEndToEnd:
    """Test full POST -> GET flows through both applications."""

    async def test_authorized_payment_round_trip(self, gateway):
        created = await gateway.post(
            "/api/v1/payments",
            json=payment_body("2222405343248877"),
            headers={"X-Correlation-Id": "corr-e2e"},
        )

        assert created.status_code == 201
        assert created.headers["X-Correlation-Id"] == "corr-e2e"
        summary = created.json()
        assert summary["status"] == "Authorized"
        assert summary["card_number_last_four"] == 8877

        fetched = await gateway.get(f"/api/v1/payments/{summary['id']}")

        assert fetched.status_code == 200
        assert fetched.json() == summary

    async def test_declined_payment_is_retrievable(self, gateway):
        created = await gateway.post("/api/v1/payments", json=payment_body("2222405343248112"))

        assert created.status_code == 201
        assert created.json()["status"] == "Declined"
        assert created.json()["card_number_last_four"] == 8112

        fetched = await gateway.get(f"/api/v1/payments/{created.json()['id']}")
        assert fetched.json()["status"] == "Declined"

    async def test_bank_unavailable_returns_503(self, gateway):
        response = await gateway.post("/api/v1/payments", json=payment_body("2222405343248870"))

        assert response.status_code == 503
        assert response.json() == {"message": "Payment processor unavailable, retry later"}

    async def test_rejected_payment_not_stored(self, gateway):
        body = payment_body("2222405343248877")
        body["currency"] = "JPY"

        response = await gateway.post("/api/v1/payments", json=body)

        assert response.status_code == 400
        assert response.json() == {
            "status": "Rejected",
            "errors": ["Currency must be one of: USD, EUR, GBP"],
        }
