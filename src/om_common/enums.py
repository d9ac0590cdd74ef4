"""Global enums shared by matching, orchestration and settlement."""

from enum import Enum


class OfferDirection(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

    @property
    def opposite(self) -> "OfferDirection":
        return OfferDirection.SELL if self is OfferDirection.BUY else OfferDirection.BUY


class SettlementStep(str, Enum):
    """Orchestration steps, in the order they must complete."""
    BUYER_REGISTERED = "BUYER_REGISTERED"
    OFFER_PUBLISHED = "OFFER_PUBLISHED"
    SELLER_REGISTERED = "SELLER_REGISTERED"
    OFFER_TAKEN = "OFFER_TAKEN"


class JournalStatus(str, Enum):
    IN_FLIGHT = "IN_FLIGHT"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class TradeStatus(str, Enum):
    """Local view of the payment lifecycle; the platform's own state is kept verbatim."""
    TAKEN = "TAKEN"
    PAYMENT_STARTED = "PAYMENT_STARTED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
