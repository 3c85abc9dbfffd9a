"""FastAPI dependencies for authentication, request context and service injection."""

from typing import Annotated

import structlog
from fastapi import Depends, Header, HTTPException, Request, status

from payment_gateway.domain.models import RequestContext
from payment_gateway.domain.services import PaymentGatewayService

logger = structlog.get_logger(__name__)

API_KEY_HEADER = "X-API-Key"


def get_gateway_service(request: Request) -> PaymentGatewayService:
    """Provide the gateway service built by the application factory."""
    return request.app.state.gateway_service


GatewayService = Annotated[PaymentGatewayService, Depends(get_gateway_service)]


async def verify_api_key(
    request: Request,
    x_api_key: Annotated[str | None, Header(alias=API_KEY_HEADER)] = None,
) -> str | None:
    """Resolve the merchant for the X-API-Key header.

    Authentication is disabled when no API keys are configured, except in
    production where every request is refused until keys are set.

    Returns:
        Merchant id for the key, or None when authentication is disabled

    Raises:
        HTTPException: 401 if the key is missing or no keys are configured in
            production, 403 if it is unknown
    """
    api_keys: dict[str, str] = request.app.state.api_keys
    if not api_keys:
        if request.app.state.api_key_required:
            logger.warning("api_key_rejected_no_keys_configured", path=request.url.path)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
        return None

    if not x_api_key or not x_api_key.strip():
        logger.warning("api_key_missing", path=request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    merchant_id = api_keys.get(x_api_key.strip())
    if merchant_id is None:
        logger.warning("api_key_invalid", path=request.url.path)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return merchant_id


MerchantId = Annotated[str | None, Depends(verify_api_key)]


def get_request_context(request: Request, merchant_id: MerchantId) -> RequestContext:
    """Build the per-request context from the correlation middleware's state."""
    return RequestContext(
        correlation_id=request.state.correlation_id,
        merchant_id=merchant_id,
    )


Context = Annotated[RequestContext, Depends(get_request_context)]
