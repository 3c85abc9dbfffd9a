"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- A fixed clock pinned to 2025-01-15
- Sample payment requests and summaries
- A gateway service wired to a mocked bank client
"""

import uuid
from datetime import date
from unittest.mock import AsyncMock

import pytest

from payment_gateway.clients.bank_client import BankClient
from payment_gateway.domain.models import (
    AuthorizationResult,
    PaymentRequest,
    PaymentStatus,
    PaymentSummary,
)
from payment_gateway.domain.services import PaymentGatewayService
from payment_gateway.domain.validator import PaymentValidator
from payment_gateway.infrastructure.repository import InMemoryPaymentRepository

FIXED_TODAY = date(2025, 1, 15)


@pytest.fixture
def fixed_clock():
    """Clock that always reports 2025-01-15."""
    return lambda: FIXED_TODAY


@pytest.fixture
def validator(fixed_clock):
    return PaymentValidator(clock=fixed_clock)


@pytest.fixture
def valid_payment_request():
    """Valid request: card ending 8877, expiring 12/2030, 10.50 USD."""
    return PaymentRequest(
        card_number="2222405343248877",
        expiry_month=12,
        expiry_year=2030,
        currency="USD",
        amount=1050,
        cvv="123",
    )


@pytest.fixture
def sample_summary():
    return PaymentSummary(
        id=uuid.uuid4(),
        status=PaymentStatus.AUTHORIZED,
        card_number_last_four=8877,
        expiry_month=12,
        expiry_year=2030,
        currency="USD",
        amount=1050,
    )


@pytest.fixture
def repository():
    return InMemoryPaymentRepository()


@pytest.fixture
def mock_bank_client():
    """Bank client mock that authorizes by default."""
    bank_client = AsyncMock(spec=BankClient)
    bank_client.authorize.return_value = AuthorizationResult(
        authorized=True, authorization_code="auth-code-1"
    )
    return bank_client


@pytest.fixture
def gateway_service(repository, mock_bank_client, validator):
    return PaymentGatewayService(
        repository=repository,
        bank_client=mock_bank_client,
        validator=validator,
    )
