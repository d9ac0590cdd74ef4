"""Per-match step-completion log for the orchestration sequence.

The platform gives no transactional guarantees across the four calls, so each
completed step and its output (account ids, published offer id, trade id) is
recorded. A failed match can then be resumed from the first missing step
instead of being lost or re-published.
"""
from dataclasses import dataclass, field
from datetime import datetime

from src.om_common.datetime_utils import utc_now
from src.om_common.enums import JournalStatus, SettlementStep
from src.om_matching.domain.models import Offer

STEP_ORDER: tuple[SettlementStep, ...] = (
    SettlementStep.BUYER_REGISTERED,
    SettlementStep.OFFER_PUBLISHED,
    SettlementStep.SELLER_REGISTERED,
    SettlementStep.OFFER_TAKEN,
)


@dataclass(frozen=True)
class JournalStep:
    step: SettlementStep
    at: datetime


@dataclass
class SettlementJournal:
    match_id: str
    buy_offer: Offer
    sell_offer: Offer
    status: JournalStatus = JournalStatus.IN_FLIGHT
    steps: list[JournalStep] = field(default_factory=list)
    buyer_account_id: str | None = None
    platform_offer_id: str | None = None
    seller_account_id: str | None = None
    trade_id: str | None = None
    error: str | None = None
    attempts: int = 1
    opened_at: datetime = field(default_factory=utc_now)

    def is_done(self, step: SettlementStep) -> bool:
        return any(s.step == step for s in self.steps)

    @property
    def next_step(self) -> SettlementStep | None:
        for step in STEP_ORDER:
            if not self.is_done(step):
                return step
        return None
