"""TradingPlatform Protocol — contract the orchestrator and verifier depend on."""
from typing import Protocol

from src.om_platform.domain.models import (
    OfferDetail,
    OfferToCreate,
    PaymentAccount,
    TradeDetails,
)


class TradingPlatformProtocol(Protocol):
    async def register_account(self, account: PaymentAccount) -> PaymentAccount: ...

    async def publish_offer(self, offer: OfferToCreate) -> OfferDetail: ...

    async def take_offer(self, offer_id: str, account_id: str, amount: int) -> TradeDetails: ...

    async def mark_payment_started(self, trade_id: str) -> None: ...

    async def mark_payment_received(self, trade_id: str) -> None: ...
