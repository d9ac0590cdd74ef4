"""SettlementVerifier — gate payment release behind an on-chain transaction.

The payer claims a transaction id; the explorer must report it successful and
sent from the payer's settlement wallet to the counterparty's. Only then are
the platform's payment-started and payment-received transitions invoked, in
that order.
"""
import logging

from config.settings import settings
from src.om_common.enums import TradeStatus
from src.om_common.errors import (
    AddressMismatchError,
    InternalStateError,
    MatchNotFoundError,
    MissingParameterError,
    TransactionAlreadyUsedError,
    TransactionIncompleteError,
)
from src.om_ledger.domain.models import TransactionInfo
from src.om_ledger.domain.protocol import LedgerProtocol
from src.om_matching.domain.models import TradeRecord
from src.om_matching.engine.state import ExchangeState
from src.om_platform.domain.protocol import TradingPlatformProtocol

logger = logging.getLogger(__name__)


def normalize_address(address: str) -> str:
    """Case-fold a hex address. Opt-in only; the default comparison is exact."""
    return address.strip().lower()


def check_transaction(
    tx: TransactionInfo,
    tx_id: str,
    payer_wallet: str,
    payee_wallet: str,
    normalize: bool = False,
) -> None:
    """Raise unless `tx` succeeded and moved funds payer → payee."""
    if not tx.success:
        raise TransactionIncompleteError(tx_id)
    _check_address("sender", tx.from_address, payer_wallet, normalize)
    _check_address("receiver", tx.to_address, payee_wallet, normalize)


def _check_address(role: str, actual: str | None, expected: str, normalize: bool) -> None:
    # a null address (e.g. contract creation) never matches a wallet
    if actual is None:
        raise AddressMismatchError(role, expected, "null")
    if normalize:
        matches = normalize_address(actual) == normalize_address(expected)
    else:
        matches = actual == expected
    if not matches:
        raise AddressMismatchError(role, expected, actual)


class SettlementVerifier:
    def __init__(
        self,
        state: ExchangeState,
        platform: TradingPlatformProtocol,
        ledger: LedgerProtocol,
        normalize_addresses: bool | None = None,
    ) -> None:
        self._state = state
        self._platform = platform
        self._ledger = ledger
        self._normalize = (
            settings.LEDGER_NORMALIZE_ADDRESSES
            if normalize_addresses is None
            else normalize_addresses
        )

    async def verify_and_settle(self, claimed_tx_id: str, payer_submitter_id: str) -> TradeRecord:
        if not claimed_tx_id:
            raise MissingParameterError("transaction_id")
        if not payer_submitter_id:
            raise MissingParameterError("account")

        counterparty = await self._state.counterparty_of(payer_submitter_id)
        if counterparty is None:
            raise MatchNotFoundError(payer_submitter_id)
        payer = await self._state.get_binding(payer_submitter_id)
        payee = await self._state.get_binding(counterparty)
        if payer is None or payee is None:
            missing = payer_submitter_id if payer is None else counterparty
            raise InternalStateError(f"payment account binding of {missing} missing")

        if await self._state.is_transaction_claimed(claimed_tx_id):
            raise TransactionAlreadyUsedError(claimed_tx_id)

        tx = await self._ledger.lookup_transaction(claimed_tx_id)
        check_transaction(
            tx, claimed_tx_id, payer.settlement_wallet, payee.settlement_wallet, self._normalize
        )
        logger.info("transaction %s is valid, proceed to finishing trade", claimed_tx_id)

        trade = await self._state.find_trade(payer_submitter_id)
        if trade is None:
            raise InternalStateError(f"trade of {payer_submitter_id} missing")
        await self._state.claim_settlement(trade, claimed_tx_id)

        settled = False
        try:
            await self._advance_payment(trade)
            settled = True
        finally:
            # also runs on cancellation, so an interrupted payer can retry
            await self._state.finish_settlement(trade, claimed_tx_id, settled)
        logger.info("trade %s completed successfully", trade.trade_id)
        return trade

    async def _advance_payment(self, trade: TradeRecord) -> None:
        if trade.status == TradeStatus.PAYMENT_STARTED:
            # an earlier attempt got past payment-started
            logger.info("trade %s already marked payment started", trade.trade_id)
        else:
            await self._platform.mark_payment_started(trade.trade_id)
            await self._state.set_trade_status(trade, TradeStatus.PAYMENT_STARTED)
        await self._platform.mark_payment_received(trade.trade_id)
        await self._state.set_trade_status(trade, TradeStatus.PAYMENT_RECEIVED)
