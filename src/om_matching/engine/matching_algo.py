"""Exact-equality matching against the opposite book.

No price/time priority and no partial fills: the first compatible offer in
the book's iteration order wins.
"""
from src.om_common.enums import OfferDirection
from src.om_common.errors import InvalidOfferError
from src.om_matching.domain.models import Offer
from src.om_matching.engine.offer_book import OfferBook

_DIRECTIONS = frozenset(d.value for d in OfferDirection)


def validate_offer(offer: Offer) -> None:
    if offer.direction not in _DIRECTIONS:
        raise InvalidOfferError(f"direction must be BUY or SELL, got {offer.direction!r}")


def is_compatible(incoming: Offer, resting: Offer) -> bool:
    return (
        resting.submitter_id != incoming.submitter_id
        and resting.token == incoming.token
        and resting.amount == incoming.amount
        and resting.price == incoming.price
    )


def find_match(incoming: Offer, ob: OfferBook) -> Offer | None:
    opposite = OfferDirection(incoming.direction).opposite
    for resting in ob.side(opposite).values():
        if is_compatible(incoming, resting):
            return resting
    return None


def split_by_direction(incoming: Offer, resting: Offer) -> tuple[Offer, Offer]:
    """Return (buy_offer, sell_offer)."""
    if incoming.direction == OfferDirection.BUY:
        return incoming, resting
    return resting, incoming
