# src/om_matching/application/service.py
"""Composition root: one ExchangeState shared by engine, orchestrator and verifier."""
from dataclasses import dataclass

from src.om_ledger.domain.protocol import LedgerProtocol
from src.om_ledger.infrastructure.client import EthplorerClient
from src.om_matching.engine.engine import MatchingEngine
from src.om_matching.engine.state import ExchangeState
from src.om_platform.domain.protocol import TradingPlatformProtocol
from src.om_platform.infrastructure.client import TradingPlatformClient
from src.om_settlement.domain.verifier import SettlementVerifier
from src.om_trade.domain.orchestrator import FailureHook, TradeOrchestrator


@dataclass
class Exchange:
    state: ExchangeState
    platform: TradingPlatformProtocol
    ledger: LedgerProtocol
    orchestrator: TradeOrchestrator
    engine: MatchingEngine
    verifier: SettlementVerifier

    async def aclose(self) -> None:
        for client in (self.platform, self.ledger):
            aclose = getattr(client, "aclose", None)
            if aclose is not None:
                await aclose()


def build_exchange(
    platform: TradingPlatformProtocol | None = None,
    ledger: LedgerProtocol | None = None,
    on_failure: FailureHook | None = None,
) -> Exchange:
    state = ExchangeState()
    if platform is None:
        platform = TradingPlatformClient()
    if ledger is None:
        ledger = EthplorerClient()
    orchestrator = TradeOrchestrator(state, platform, on_failure=on_failure)
    return Exchange(
        state=state,
        platform=platform,
        ledger=ledger,
        orchestrator=orchestrator,
        engine=MatchingEngine(state, orchestrator),
        verifier=SettlementVerifier(state, platform, ledger),
    )


_exchange: Exchange | None = None


def get_exchange() -> Exchange:
    global _exchange  # noqa: PLW0603
    if _exchange is None:
        _exchange = build_exchange()
    return _exchange


async def close_exchange() -> None:
    global _exchange  # noqa: PLW0603
    if _exchange is not None:
        await _exchange.aclose()
        _exchange = None
