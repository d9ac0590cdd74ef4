"""ExchangeState — the single owner of all mutable in-memory state.

Offer book, account bindings, match bindings, trade index, settlement
journals, claimed transaction ids and trades being settled live here and are only touched through
the methods below, each holding one asyncio.Lock for the duration of its map
operations. No method awaits anything but the lock, so no outbound call ever
runs while it is held.

Nothing is evicted: all maps grow for the lifetime of the process.
"""
import asyncio
import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from src.om_common.datetime_utils import utc_now
from src.om_common.enums import JournalStatus, SettlementStep, TradeStatus
from src.om_common.errors import (
    JournalNotFoundError,
    JournalNotResumableError,
    SettlementInProgressError,
    TradeAlreadySettledError,
    TransactionAlreadyUsedError,
)
from src.om_common.id_generator import generate_match_id
from src.om_matching.domain.models import Offer, PaymentAccountBinding, TradeRecord
from src.om_matching.engine.matching_algo import find_match, split_by_direction
from src.om_matching.engine.offer_book import OfferBook
from src.om_trade.domain.journal import JournalStep, SettlementJournal

logger = logging.getLogger(__name__)


class ExchangeState:
    def __init__(self, match_id_factory: Callable[[], str] = generate_match_id) -> None:
        self._lock = asyncio.Lock()
        self._match_id_factory = match_id_factory
        self.book = OfferBook()
        self._bindings: dict[str, PaymentAccountBinding] = {}
        self._counterparties: dict[str, str] = {}
        self._trades: dict[str, TradeRecord] = {}
        self._journals: dict[str, SettlementJournal] = {}
        self._claimed_tx_ids: set[str] = set()
        self._settling_trade_ids: set[str] = set()
        self._registration_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    # --- Offer book ---

    async def match_or_rest(self, offer: Offer) -> SettlementJournal | None:
        """Atomically take a compatible counter-offer out of the book, or rest `offer`.

        On a match, both match bindings and the settlement journal are created
        in the same critical section, so a match is never half-visible.
        """
        async with self._lock:
            counter = find_match(offer, self.book)
            if counter is None:
                previous = self.book.add(offer)
                if previous is not None:
                    logger.info(
                        "replaced open %s offer of %s", offer.direction, offer.submitter_id
                    )
                return None

            self.book.remove(counter)
            buy, sell = split_by_direction(offer, counter)
            self._counterparties[buy.submitter_id] = sell.submitter_id
            self._counterparties[sell.submitter_id] = buy.submitter_id
            journal = SettlementJournal(
                match_id=self._match_id_factory(), buy_offer=buy, sell_offer=sell
            )
            self._journals[journal.match_id] = journal
            logger.info(
                "matched %s (BUY) with %s (SELL) as %s",
                buy.submitter_id,
                sell.submitter_id,
                journal.match_id,
            )
            return journal

    async def open_offers(self) -> dict[str, list[Offer]]:
        async with self._lock:
            return self.book.snapshot()

    # --- Bindings ---

    def registration_lock(self, submitter_id: str) -> asyncio.Lock:
        """Per-submitter lock serializing check-then-register of an account binding."""
        return self._registration_locks[submitter_id]

    async def get_binding(self, submitter_id: str) -> PaymentAccountBinding | None:
        async with self._lock:
            return self._bindings.get(submitter_id)

    async def put_binding(self, binding: PaymentAccountBinding) -> None:
        async with self._lock:
            self._bindings[binding.submitter_id] = binding

    async def counterparty_of(self, submitter_id: str) -> str | None:
        async with self._lock:
            return self._counterparties.get(submitter_id)

    async def counterparty_wallet(self, submitter_id: str) -> str:
        """Settlement wallet of the submitter's counterparty, "" when unmatched."""
        async with self._lock:
            counterparty = self._counterparties.get(submitter_id)
            if counterparty is None:
                return ""
            binding = self._bindings.get(counterparty)
            return binding.settlement_wallet if binding is not None else ""

    # --- Trades ---

    async def put_trade(self, trade: TradeRecord) -> None:
        async with self._lock:
            self._trades[trade.buyer_submitter_id] = trade
            self._trades[trade.seller_submitter_id] = trade

    async def find_trade(self, submitter_id: str) -> TradeRecord | None:
        async with self._lock:
            return self._trades.get(submitter_id)

    async def set_trade_status(self, trade: TradeRecord, status: TradeStatus) -> None:
        async with self._lock:
            trade.status = status

    async def claim_settlement(self, trade: TradeRecord, tx_id: str) -> None:
        """Reserve `trade` and `tx_id` for one payment settlement.

        Raises if the trade is settled or already being settled, or if the
        transaction id was claimed before. Pair with `finish_settlement`.
        """
        async with self._lock:
            if trade.status == TradeStatus.PAYMENT_RECEIVED:
                raise TradeAlreadySettledError(trade.trade_id)
            if trade.trade_id in self._settling_trade_ids:
                raise SettlementInProgressError(trade.trade_id)
            if tx_id in self._claimed_tx_ids:
                raise TransactionAlreadyUsedError(tx_id)
            self._settling_trade_ids.add(trade.trade_id)
            self._claimed_tx_ids.add(tx_id)

    async def finish_settlement(self, trade: TradeRecord, tx_id: str, settled: bool) -> None:
        """Drop the in-flight mark; an unsettled attempt gives the transaction id back."""
        async with self._lock:
            self._settling_trade_ids.discard(trade.trade_id)
            if not settled:
                self._claimed_tx_ids.discard(tx_id)

    async def is_transaction_claimed(self, tx_id: str) -> bool:
        async with self._lock:
            return tx_id in self._claimed_tx_ids

    # --- Journals ---

    async def get_journal(self, match_id: str) -> SettlementJournal:
        async with self._lock:
            journal = self._journals.get(match_id)
        if journal is None:
            raise JournalNotFoundError(match_id)
        return journal

    async def list_journals(self, status: JournalStatus | None = None) -> list[SettlementJournal]:
        async with self._lock:
            journals = list(self._journals.values())
        if status is None:
            return journals
        return [j for j in journals if j.status == status]

    async def record_step(
        self, journal: SettlementJournal, step: SettlementStep, **outputs: Any
    ) -> None:
        async with self._lock:
            for name, value in outputs.items():
                setattr(journal, name, value)
            journal.steps.append(JournalStep(step=step, at=utc_now()))
            if journal.next_step is None:
                journal.status = JournalStatus.COMPLETED
                journal.error = None

    async def fail_journal(self, journal: SettlementJournal, error: str) -> None:
        async with self._lock:
            journal.status = JournalStatus.FAILED
            journal.error = error

    async def begin_resume(self, match_id: str) -> SettlementJournal:
        """Move a FAILED journal back to IN_FLIGHT; only one resume can win."""
        async with self._lock:
            journal = self._journals.get(match_id)
            if journal is None:
                raise JournalNotFoundError(match_id)
            if journal.status != JournalStatus.FAILED:
                raise JournalNotResumableError(match_id, journal.status.value)
            journal.status = JournalStatus.IN_FLIGHT
            journal.attempts += 1
            return journal
