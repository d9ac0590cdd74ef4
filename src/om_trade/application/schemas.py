# src/om_trade/application/schemas.py
from datetime import datetime

from pydantic import BaseModel

from src.om_matching.domain.models import TradeRecord
from src.om_trade.domain.journal import SettlementJournal


class TradeRecordResponse(BaseModel):
    trade_id: str
    buyer_submitter_id: str
    seller_submitter_id: str
    amount: int
    price: int
    offer_fee_tx_id: str
    payout_tx_id: str
    state: str
    status: str

    @classmethod
    def from_record(cls, trade: TradeRecord) -> "TradeRecordResponse":
        return cls(
            trade_id=trade.trade_id,
            buyer_submitter_id=trade.buyer_submitter_id,
            seller_submitter_id=trade.seller_submitter_id,
            amount=trade.amount,
            price=trade.price,
            offer_fee_tx_id=trade.offer_fee_tx_id,
            payout_tx_id=trade.payout_tx_id,
            state=trade.state,
            status=trade.status.value,
        )


class JournalStepResponse(BaseModel):
    step: str
    at: datetime


class JournalResponse(BaseModel):
    match_id: str
    buyer_submitter_id: str
    seller_submitter_id: str
    status: str
    next_step: str | None
    steps: list[JournalStepResponse]
    buyer_account_id: str | None
    platform_offer_id: str | None
    seller_account_id: str | None
    trade_id: str | None
    error: str | None
    attempts: int
    opened_at: datetime

    @classmethod
    def from_journal(cls, journal: SettlementJournal) -> "JournalResponse":
        return cls(
            match_id=journal.match_id,
            buyer_submitter_id=journal.buy_offer.submitter_id,
            seller_submitter_id=journal.sell_offer.submitter_id,
            status=journal.status.value,
            next_step=journal.next_step.value if journal.next_step else None,
            steps=[JournalStepResponse(step=s.step.value, at=s.at) for s in journal.steps],
            buyer_account_id=journal.buyer_account_id,
            platform_offer_id=journal.platform_offer_id,
            seller_account_id=journal.seller_account_id,
            trade_id=journal.trade_id,
            error=journal.error,
            attempts=journal.attempts,
            opened_at=journal.opened_at,
        )


class JournalListResponse(BaseModel):
    items: list[JournalResponse]
