"""MatchingEngine — entry point for offer submission."""
import logging

from src.om_matching.domain.models import Offer, SubmitResult
from src.om_matching.engine.matching_algo import validate_offer
from src.om_matching.engine.state import ExchangeState
from src.om_trade.domain.orchestrator import TradeOrchestrator

logger = logging.getLogger(__name__)


class MatchingEngine:
    def __init__(self, state: ExchangeState, orchestrator: TradeOrchestrator) -> None:
        self._state = state
        self._orchestrator = orchestrator

    async def submit(self, offer: Offer) -> SubmitResult:
        """Match `offer` against the opposite book or rest it in its own.

        The matched counter-offer leaves the book before orchestration starts
        and is not put back if orchestration fails; the error propagates and
        the failed journal remains available for resume.
        """
        validate_offer(offer)
        logger.info(
            "searching match for %s %s %s x%d @%d",
            offer.submitter_id,
            offer.direction,
            offer.token,
            offer.amount,
            offer.price,
        )
        journal = await self._state.match_or_rest(offer)
        if journal is None:
            logger.info("no match for %s, offer saved", offer.submitter_id)
            return SubmitResult(matched=False)

        trade = await self._orchestrator.settle(journal)
        return SubmitResult(matched=True, match_id=journal.match_id, trade=trade)
