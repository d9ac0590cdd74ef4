from dataclasses import dataclass, field

from src.om_common.enums import OfferDirection
from src.om_matching.domain.models import Offer


@dataclass
class OfferBook:
    """Open offers per direction, keyed by submitter_id (one per submitter per side)."""

    buys: dict[str, Offer] = field(default_factory=dict)
    sells: dict[str, Offer] = field(default_factory=dict)

    def side(self, direction: str) -> dict[str, Offer]:
        return self.buys if direction == OfferDirection.BUY else self.sells

    def add(self, offer: Offer) -> Offer | None:
        """Rest an offer; returns the submitter's previous offer on that side, if any."""
        book = self.side(offer.direction)
        previous = book.get(offer.submitter_id)
        book[offer.submitter_id] = offer
        return previous

    def remove(self, offer: Offer) -> None:
        self.side(offer.direction).pop(offer.submitter_id, None)

    def get(self, direction: str, submitter_id: str) -> Offer | None:
        return self.side(direction).get(submitter_id)

    def snapshot(self) -> dict[str, list[Offer]]:
        return {
            OfferDirection.BUY.value: list(self.buys.values()),
            OfferDirection.SELL.value: list(self.sells.values()),
        }

    def __len__(self) -> int:
        return len(self.buys) + len(self.sells)
