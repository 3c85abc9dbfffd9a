"""Clients for external services."""

from payment_gateway.clients.bank_client import BankClient, BankHttpClient

__all__ = [
    "BankClient",
    "BankHttpClient",
]
