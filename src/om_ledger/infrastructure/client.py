"""httpx client for the Ethplorer transaction lookup API."""
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from config.settings import settings
from src.om_common.errors import LedgerError
from src.om_ledger.domain.models import TransactionInfo

logger = logging.getLogger(__name__)

GET_TX_PATH = "/getTxInfo/{tx_id}"


class EthplorerClient:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        api_key: str | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=settings.LEDGER_API_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
        self._api_key = api_key if api_key is not None else settings.LEDGER_API_KEY

    async def aclose(self) -> None:
        await self._client.aclose()

    async def lookup_transaction(self, tx_id: str) -> TransactionInfo:
        path = GET_TX_PATH.format(tx_id=tx_id)
        logger.info("ledger: looking up transaction %s", tx_id)
        try:
            resp = await self._client.get(path, params={"apiKey": self._api_key})
        except httpx.HTTPError as exc:
            logger.error("ledger: sending request failure: %s", exc)
            raise LedgerError(str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            logger.error(
                "ledger: response failure status=%d body=%s", resp.status_code, resp.text
            )
            raise LedgerError(resp.text, status=resp.status_code)

        try:
            payload: Any = resp.json()
        except ValueError as exc:
            raise LedgerError(f"malformed response: {exc}") from exc

        # Ethplorer reports lookup errors in the body, sometimes with a 200
        if isinstance(payload, dict) and "error" in payload:
            error = payload["error"]
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            logger.error("ledger: lookup error for %s: %s", tx_id, message)
            raise LedgerError(message)

        try:
            return TransactionInfo.model_validate(payload)
        except ValidationError as exc:
            logger.error("ledger: malformed response: %s", exc)
            raise LedgerError(f"malformed response: {exc}") from exc
