"""
Acquiring bank simulator for local runs and tests.

Implements the authorization convention the gateway is built against. The
outcome depends only on the last digit of the card number:

    odd (1, 3, 5, 7, 9)  -> authorized, random authorization code
    even (2, 4, 6, 8)    -> declined, empty authorization code
    0                    -> 503 Service Unavailable

A request missing any field gets 400 with an error_message.

Endpoints:
    POST /payments

Port:
    Default: 8080 (HTTP)
"""

import uuid

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from payment_gateway.domain.card_data import mask_card_number

logger = structlog.get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Not all required properties were sent in the request"

app = FastAPI(title="Bank Simulator")


class BankPaymentJSON(BaseModel):
    """Payment request as sent by the gateway. All fields are checked by hand."""

    card_number: str | None = None
    expiry_date: str | None = None
    currency: str | None = None
    amount: int | None = None
    cvv: str | None = None


def decide(card_number: str) -> str:
    """Map a card number to "authorized", "declined" or "unavailable"."""
    last_digit = card_number[-1:]
    if last_digit == "0":
        return "unavailable"
    if last_digit in ("1", "3", "5", "7", "9"):
        return "authorized"
    return "declined"


@app.post("/payments")
async def create_payment(request: BankPaymentJSON) -> JSONResponse:
    """Simulate an authorization decision."""
    if any(value is None or value == "" for value in request.model_dump().values()):
        logger.warning("simulator_missing_fields")
        return JSONResponse(status_code=400, content={"error_message": MISSING_FIELDS_MESSAGE})

    outcome = decide(request.card_number)
    logger.info(
        "simulator_decision",
        card_number=mask_card_number(request.card_number),
        outcome=outcome,
    )

    if outcome == "unavailable":
        return JSONResponse(status_code=503, content={})

    if outcome == "authorized":
        return JSONResponse(
            status_code=200,
            content={"authorized": True, "authorization_code": str(uuid.uuid4())},
        )

    return JSONResponse(status_code=200, content={"authorized": False, "authorization_code": ""})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
