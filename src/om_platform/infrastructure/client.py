"""httpx client for the trading platform REST API.

Every call is a synchronous request/response. Transport failures, non-2xx
statuses (body kept as diagnostic text) and unparseable bodies all surface as
PlatformGatewayError; nothing is retried here.
"""
import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from config.settings import settings
from src.om_common.errors import PlatformGatewayError
from src.om_platform.domain.models import (
    OfferDetail,
    OfferToCreate,
    OfferToTake,
    PaymentAccount,
    TradeDetails,
)

logger = logging.getLogger(__name__)

PAYMENT_ACCOUNTS_PATH = "/api/v1/payment-accounts"
OFFERS_PATH = "/api/v1/offers"
TAKE_OFFER_PATH = "/api/v1/offers/{offer_id}/take"
PAYMENT_STARTED_PATH = "/api/v1/trades/{trade_id}/payment-started"
PAYMENT_RECEIVED_PATH = "/api/v1/trades/{trade_id}/payment-received"

_M = TypeVar("_M", bound=BaseModel)


class TradingPlatformClient:
    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=settings.PLATFORM_API_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def register_account(self, account: PaymentAccount) -> PaymentAccount:
        resp = await self._post("register_account", PAYMENT_ACCOUNTS_PATH, account)
        return self._parse("register_account", resp, PaymentAccount)

    async def publish_offer(self, offer: OfferToCreate) -> OfferDetail:
        resp = await self._post("publish_offer", OFFERS_PATH, offer)
        return self._parse("publish_offer", resp, OfferDetail)

    async def take_offer(self, offer_id: str, account_id: str, amount: int) -> TradeDetails:
        body = OfferToTake(payment_account_id=account_id, amount=amount)
        resp = await self._post("take_offer", TAKE_OFFER_PATH.format(offer_id=offer_id), body)
        return self._parse("take_offer", resp, TradeDetails)

    async def mark_payment_started(self, trade_id: str) -> None:
        await self._post(
            "payment_started", PAYMENT_STARTED_PATH.format(trade_id=trade_id), None
        )

    async def mark_payment_received(self, trade_id: str) -> None:
        await self._post(
            "payment_received", PAYMENT_RECEIVED_PATH.format(trade_id=trade_id), None
        )

    async def _post(
        self, operation: str, path: str, payload: BaseModel | None
    ) -> httpx.Response:
        body = payload.model_dump(by_alias=True) if payload is not None else None
        logger.info("platform %s: sending request to %s", operation, path)
        try:
            resp = await self._client.post(path, json=body)
        except httpx.HTTPError as exc:
            logger.error("platform %s: sending request failure: %s", operation, exc)
            raise PlatformGatewayError(operation, str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            logger.error(
                "platform %s: response failure status=%d body=%s",
                operation,
                resp.status_code,
                resp.text,
            )
            raise PlatformGatewayError(operation, resp.text, status=resp.status_code)
        return resp

    @staticmethod
    def _parse(operation: str, resp: httpx.Response, model: type[_M]) -> _M:
        try:
            return model.model_validate_json(resp.content)
        except ValidationError as exc:
            logger.error("platform %s: malformed response: %s", operation, exc)
            raise PlatformGatewayError(operation, f"malformed response: {exc}") from exc
