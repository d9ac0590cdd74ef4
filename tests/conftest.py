"""Shared test fixtures.

The trading platform and blockchain explorer are replaced by AsyncMocks whose
defaults behave like a healthy platform: accounts get id "acc-<name>", the
published offer is "offer-1" and taking it yields trade "trade-1".
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.om_ledger.domain.models import TransactionInfo
from src.om_matching.application.service import Exchange, build_exchange, get_exchange
from src.om_platform.domain.models import (
    OfferDetail,
    OfferToCreate,
    PaymentAccount,
    TradeDetails,
)


async def _register(account: PaymentAccount) -> PaymentAccount:
    return account.model_copy(update={"id": f"acc-{account.name}"})


async def _publish(offer: OfferToCreate) -> OfferDetail:
    return OfferDetail(
        id="offer-1",
        direction=offer.direction,
        price=offer.fixed_price,
        amount=offer.amount,
        min_amount=offer.min_amount,
        maker_payment_account_id=offer.account_id,
    )


async def _take(offer_id: str, account_id: str, amount: int) -> TradeDetails:
    return TradeDetails(
        id="trade-1",
        trade_amount=amount,
        taker_fee_tx_id="fee-tx-1",
        state="DEPOSIT_PUBLISHED",
        taker_payment_account_id=account_id,
    )


@pytest.fixture
def platform() -> AsyncMock:
    mock = AsyncMock()
    mock.register_account.side_effect = _register
    mock.publish_offer.side_effect = _publish
    mock.take_offer.side_effect = _take
    mock.mark_payment_started.return_value = None
    mock.mark_payment_received.return_value = None
    return mock


@pytest.fixture
def ledger() -> AsyncMock:
    mock = AsyncMock()
    mock.lookup_transaction.return_value = TransactionInfo(
        hash="0xtx", success=True, from_address="", to_address=""
    )
    return mock


@pytest.fixture
def exchange(platform: AsyncMock, ledger: AsyncMock) -> Exchange:
    return build_exchange(platform=platform, ledger=ledger)


@pytest.fixture
async def client(exchange: Exchange) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to an exchange with mocked external services."""
    from src.main import app

    app.dependency_overrides[get_exchange] = lambda: exchange
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
