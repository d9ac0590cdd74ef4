"""Matching domain models — pure dataclasses, no web or HTTP client dependency."""
from dataclasses import dataclass

from src.om_common.enums import TradeStatus


@dataclass(frozen=True)
class Offer:
    """A submitter's intent to buy or sell a fixed amount at a fixed price."""

    submitter_id: str
    token: str
    price: int  # smallest unit
    amount: int  # smallest unit
    direction: str  # BUY / SELL
    settlement_wallet: str


@dataclass(frozen=True)
class PaymentAccountBinding:
    """Cached platform account of a submitter, created on first match."""

    submitter_id: str
    external_account_id: str
    settlement_wallet: str


@dataclass
class TradeRecord:
    """Platform-assigned trade, indexed under both buyer and seller."""

    trade_id: str
    buyer_submitter_id: str
    seller_submitter_id: str
    amount: int
    price: int
    offer_fee_tx_id: str = ""
    payout_tx_id: str = ""
    state: str = ""  # platform state, verbatim
    status: TradeStatus = TradeStatus.TAKEN


@dataclass
class SubmitResult:
    """Outcome of a submission. matched=False is a normal result, not an error."""

    matched: bool
    match_id: str | None = None
    trade: TradeRecord | None = None
