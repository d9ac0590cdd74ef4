"""Unit tests for ExchangeState atomic operations."""
import asyncio

import pytest

from src.om_common.enums import JournalStatus, SettlementStep, TradeStatus
from src.om_common.errors import (
    JournalNotFoundError,
    JournalNotResumableError,
    SettlementInProgressError,
    TradeAlreadySettledError,
    TransactionAlreadyUsedError,
)
from src.om_matching.domain.models import Offer, PaymentAccountBinding, TradeRecord
from src.om_matching.engine.state import ExchangeState


def _offer(submitter: str, direction: str, amount: int = 100) -> Offer:
    return Offer(
        submitter_id=submitter,
        token="ETH",
        price=5000,
        amount=amount,
        direction=direction,
        settlement_wallet=f"0x{submitter}",
    )


@pytest.fixture
def state() -> ExchangeState:
    ids = iter(f"m-{i}" for i in range(1, 100))
    return ExchangeState(match_id_factory=lambda: next(ids))


class TestMatchOrRest:
    async def test_no_match_rests_offer(self, state: ExchangeState) -> None:
        assert await state.match_or_rest(_offer("alice", "BUY")) is None
        assert state.book.get("BUY", "alice") is not None

    async def test_match_removes_counter_offer_and_opens_journal(
        self, state: ExchangeState
    ) -> None:
        await state.match_or_rest(_offer("alice", "BUY"))
        journal = await state.match_or_rest(_offer("bob", "SELL"))
        assert journal is not None
        assert journal.match_id == "m-1"
        assert journal.buy_offer.submitter_id == "alice"
        assert journal.sell_offer.submitter_id == "bob"
        assert journal.status == JournalStatus.IN_FLIGHT
        assert len(state.book) == 0  # incoming never rested, counter removed

    async def test_match_creates_bidirectional_binding(self, state: ExchangeState) -> None:
        await state.match_or_rest(_offer("bob", "SELL"))
        await state.match_or_rest(_offer("alice", "BUY"))
        assert await state.counterparty_of("alice") == "bob"
        assert await state.counterparty_of("bob") == "alice"

    async def test_concurrent_takers_match_once(self, state: ExchangeState) -> None:
        await state.match_or_rest(_offer("alice", "BUY"))
        results = await asyncio.gather(
            state.match_or_rest(_offer("bob", "SELL")),
            state.match_or_rest(_offer("carol", "SELL")),
        )
        journals = [r for r in results if r is not None]
        assert len(journals) == 1
        # the loser rests in the SELL book
        assert len(state.book.sells) == 1


class TestCounterpartyWallet:
    async def test_unmatched_is_empty(self, state: ExchangeState) -> None:
        assert await state.counterparty_wallet("alice") == ""

    async def test_matched_without_binding_is_empty(self, state: ExchangeState) -> None:
        await state.match_or_rest(_offer("alice", "BUY"))
        await state.match_or_rest(_offer("bob", "SELL"))
        assert await state.counterparty_wallet("alice") == ""

    async def test_returns_counterparty_wallet(self, state: ExchangeState) -> None:
        await state.match_or_rest(_offer("alice", "BUY"))
        await state.match_or_rest(_offer("bob", "SELL"))
        await state.put_binding(PaymentAccountBinding("bob", "acc-bob", "0xbob"))
        assert await state.counterparty_wallet("alice") == "0xbob"


class TestTrades:
    async def test_trade_indexed_under_both_parties(self, state: ExchangeState) -> None:
        trade = TradeRecord("t-1", "alice", "bob", 100, 5000)
        await state.put_trade(trade)
        assert await state.find_trade("alice") is trade
        assert await state.find_trade("bob") is trade
        assert await state.find_trade("carol") is None


class TestSettlementClaims:
    async def test_second_claim_on_same_trade_is_in_progress(
        self, state: ExchangeState
    ) -> None:
        trade = TradeRecord("t-1", "alice", "bob", 100, 5000)
        await state.claim_settlement(trade, "0xtx1")
        with pytest.raises(SettlementInProgressError):
            await state.claim_settlement(trade, "0xtx2")

    async def test_transaction_id_is_exclusive_across_trades(
        self, state: ExchangeState
    ) -> None:
        await state.claim_settlement(TradeRecord("t-1", "alice", "bob", 100, 5000), "0xtx")
        with pytest.raises(TransactionAlreadyUsedError):
            await state.claim_settlement(TradeRecord("t-2", "carol", "dave", 1, 1), "0xtx")

    async def test_settled_trade_cannot_be_claimed(self, state: ExchangeState) -> None:
        trade = TradeRecord("t-1", "alice", "bob", 100, 5000, status=TradeStatus.PAYMENT_RECEIVED)
        with pytest.raises(TradeAlreadySettledError):
            await state.claim_settlement(trade, "0xtx")

    async def test_unsettled_finish_releases_transaction(self, state: ExchangeState) -> None:
        trade = TradeRecord("t-1", "alice", "bob", 100, 5000)
        await state.claim_settlement(trade, "0xtx")
        await state.finish_settlement(trade, "0xtx", settled=False)
        assert not await state.is_transaction_claimed("0xtx")
        await state.claim_settlement(trade, "0xtx")

    async def test_settled_finish_keeps_transaction(self, state: ExchangeState) -> None:
        trade = TradeRecord("t-1", "alice", "bob", 100, 5000)
        await state.claim_settlement(trade, "0xtx")
        await state.finish_settlement(trade, "0xtx", settled=True)
        assert await state.is_transaction_claimed("0xtx")
        # the trade itself is free again, the transaction is not
        with pytest.raises(TransactionAlreadyUsedError):
            await state.claim_settlement(trade, "0xtx")


class TestJournals:
    async def _journal(self, state: ExchangeState):  # type: ignore[no-untyped-def]
        await state.match_or_rest(_offer("alice", "BUY"))
        journal = await state.match_or_rest(_offer("bob", "SELL"))
        assert journal is not None
        return journal

    async def test_record_step_sets_outputs(self, state: ExchangeState) -> None:
        journal = await self._journal(state)
        await state.record_step(journal, SettlementStep.BUYER_REGISTERED, buyer_account_id="a1")
        assert journal.buyer_account_id == "a1"
        assert journal.next_step == SettlementStep.OFFER_PUBLISHED

    async def test_last_step_completes_journal(self, state: ExchangeState) -> None:
        journal = await self._journal(state)
        for step in SettlementStep:
            await state.record_step(journal, step)
        assert journal.status == JournalStatus.COMPLETED
        assert journal.next_step is None

    async def test_get_unknown_journal_raises(self, state: ExchangeState) -> None:
        with pytest.raises(JournalNotFoundError):
            await state.get_journal("nope")

    async def test_only_failed_journal_resumes(self, state: ExchangeState) -> None:
        journal = await self._journal(state)
        with pytest.raises(JournalNotResumableError):
            await state.begin_resume(journal.match_id)
        await state.fail_journal(journal, "boom")
        resumed = await state.begin_resume(journal.match_id)
        assert resumed.status == JournalStatus.IN_FLIGHT
        assert resumed.attempts == 2

    async def test_list_journals_filters_by_status(self, state: ExchangeState) -> None:
        journal = await self._journal(state)
        await state.fail_journal(journal, "boom")
        assert await state.list_journals(JournalStatus.FAILED) == [journal]
        assert await state.list_journals(JournalStatus.COMPLETED) == []
