"""TradeOrchestrator — turns a match into an executing platform trade.

Sequence (each step feeds the next):
  1. register or reuse the buyer's payment account
  2. publish a BUY offer on the buyer's behalf
  3. register or reuse the seller's payment account
  4. take the published offer on the seller's behalf → TradeRecord

A failed step aborts the rest and nothing is rolled back; the platform stays
the source of truth. The journal keeps what did complete so `resume` can pick
up from the first missing step.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable

from config.settings import settings
from src.om_common.enums import SettlementStep
from src.om_common.errors import InternalStateError, PlatformGatewayError
from src.om_matching.domain.models import Offer, PaymentAccountBinding, TradeRecord
from src.om_matching.engine.state import ExchangeState
from src.om_platform.domain.models import OfferToCreate, PaymentAccount, TradeDetails
from src.om_platform.domain.protocol import TradingPlatformProtocol
from src.om_trade.domain.journal import SettlementJournal

logger = logging.getLogger(__name__)

FailureHook = Callable[[SettlementJournal, Exception], Awaitable[None]]


async def log_failure(journal: SettlementJournal, error: Exception) -> None:
    logger.error(
        "match %s failed before %s (attempt %d): %s",
        journal.match_id,
        journal.next_step.value if journal.next_step else "completion",
        journal.attempts,
        error,
    )


class TradeOrchestrator:
    def __init__(
        self,
        state: ExchangeState,
        platform: TradingPlatformProtocol,
        on_failure: FailureHook | None = None,
    ) -> None:
        self._state = state
        self._platform = platform
        self._on_failure: FailureHook = on_failure or log_failure

    async def settle(self, journal: SettlementJournal) -> TradeRecord:
        try:
            return await self._run(journal)
        except asyncio.CancelledError:
            # the caller went away mid-call; leave the match resumable
            logger.warning(
                "match %s cancelled before %s",
                journal.match_id,
                journal.next_step.value if journal.next_step else "completion",
            )
            await self._state.fail_journal(journal, "cancelled")
            raise
        except Exception as exc:
            await self._state.fail_journal(journal, str(exc))
            await self._on_failure(journal, exc)
            raise

    async def resume(self, match_id: str) -> TradeRecord:
        journal = await self._state.begin_resume(match_id)
        logger.info("resuming match %s at %s", match_id, journal.next_step)
        return await self.settle(journal)

    async def ensure_binding(self, offer: Offer) -> PaymentAccountBinding:
        """Return the submitter's cached binding, registering an account on first use."""
        async with self._state.registration_lock(offer.submitter_id):
            binding = await self._state.get_binding(offer.submitter_id)
            if binding is not None:
                logger.info("reusing payment account of %s", offer.submitter_id)
                return binding

            account = await self._platform.register_account(
                PaymentAccount(
                    name=offer.submitter_id,
                    trade_currencies=settings.PLATFORM_TRADE_CURRENCIES,
                    payment_method=settings.PLATFORM_PAYMENT_METHOD,
                    payment_details=offer.settlement_wallet,
                    selected_trade_currency=settings.PLATFORM_SELECTED_CURRENCY,
                )
            )
            if not account.id:
                raise PlatformGatewayError("register_account", "response carries no account id")
            binding = PaymentAccountBinding(
                submitter_id=offer.submitter_id,
                external_account_id=account.id,
                settlement_wallet=account.payment_details or offer.settlement_wallet,
            )
            await self._state.put_binding(binding)
            logger.info("registered payment account %s for %s", account.id, offer.submitter_id)
            return binding

    async def _run(self, journal: SettlementJournal) -> TradeRecord:
        buy, sell = journal.buy_offer, journal.sell_offer

        if not journal.is_done(SettlementStep.BUYER_REGISTERED):
            buyer = await self.ensure_binding(buy)
            await self._state.record_step(
                journal,
                SettlementStep.BUYER_REGISTERED,
                buyer_account_id=buyer.external_account_id,
            )

        if not journal.is_done(SettlementStep.OFFER_PUBLISHED):
            if journal.buyer_account_id is None:
                raise InternalStateError(f"journal of match {journal.match_id} lost step outputs")
            detail = await self._platform.publish_offer(
                OfferToCreate(
                    fund_using_bisq_wallet=True,
                    account_id=journal.buyer_account_id,
                    direction="BUY",
                    market_pair=settings.PLATFORM_MARKET_PAIR,
                    fixed_price=buy.price,
                    amount=buy.amount,
                    min_amount=buy.amount,
                    buyer_security_deposit=settings.PLATFORM_BUYER_SECURITY_DEPOSIT,
                )
            )
            if not detail.id:
                raise PlatformGatewayError("publish_offer", "response carries no offer id")
            await self._state.record_step(
                journal, SettlementStep.OFFER_PUBLISHED, platform_offer_id=detail.id
            )
            logger.info("published offer %s for %s", detail.id, buy.submitter_id)

        if not journal.is_done(SettlementStep.SELLER_REGISTERED):
            seller = await self.ensure_binding(sell)
            await self._state.record_step(
                journal,
                SettlementStep.SELLER_REGISTERED,
                seller_account_id=seller.external_account_id,
            )

        if journal.is_done(SettlementStep.OFFER_TAKEN):
            trade = await self._state.find_trade(buy.submitter_id)
            if trade is None:
                raise InternalStateError(f"trade of completed match {journal.match_id} missing")
            return trade

        if journal.platform_offer_id is None or journal.seller_account_id is None:
            raise InternalStateError(f"journal of match {journal.match_id} lost step outputs")
        details = await self._platform.take_offer(
            journal.platform_offer_id, journal.seller_account_id, buy.amount
        )
        if not details.id:
            raise PlatformGatewayError("take_offer", "response carries no trade id")
        trade = _to_trade_record(details, buy, sell)
        await self._state.put_trade(trade)
        await self._state.record_step(journal, SettlementStep.OFFER_TAKEN, trade_id=trade.trade_id)
        logger.info(
            "took offer %s for %s, trade %s",
            journal.platform_offer_id,
            sell.submitter_id,
            trade.trade_id,
        )
        return trade


def _to_trade_record(details: TradeDetails, buy: Offer, sell: Offer) -> TradeRecord:
    return TradeRecord(
        trade_id=details.id,
        buyer_submitter_id=buy.submitter_id,
        seller_submitter_id=sell.submitter_id,
        amount=details.trade_amount or buy.amount,
        price=details.trade_price or buy.price,
        offer_fee_tx_id=details.taker_fee_tx_id,
        payout_tx_id=details.payout_tx_id,
        state=details.state,
    )
