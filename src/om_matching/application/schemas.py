# src/om_matching/application/schemas.py
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from src.om_matching.domain.models import Offer
from src.om_trade.application.schemas import TradeRecordResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SubmitOfferRequest(BaseModel):
    """Offer body. Also accepts the camelCase names of the legacy /buy and /sell API."""

    submitter_id: str = Field(validation_alias=AliasChoices("submitter_id", "accountName"))
    token: str
    price: int
    amount: int
    # Required on POST /offers; implied by the route on /offers/buy and /offers/sell
    direction: Literal["BUY", "SELL"] | None = None
    settlement_wallet: str = Field(
        "", validation_alias=AliasChoices("settlement_wallet", "ethereumWallet")
    )

    def to_offer(self, direction: str | None = None) -> Offer:
        return Offer(
            submitter_id=self.submitter_id,
            token=self.token,
            price=self.price,
            amount=self.amount,
            direction=direction or self.direction or "",
            settlement_wallet=self.settlement_wallet,
        )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class OfferResponse(BaseModel):
    submitter_id: str
    token: str
    price: int
    amount: int
    direction: str
    settlement_wallet: str

    @classmethod
    def from_offer(cls, offer: Offer) -> "OfferResponse":
        return cls(
            submitter_id=offer.submitter_id,
            token=offer.token,
            price=offer.price,
            amount=offer.amount,
            direction=offer.direction,
            settlement_wallet=offer.settlement_wallet,
        )


class SubmitOfferResponse(BaseModel):
    matched: bool
    match_id: str | None = None
    trade: TradeRecordResponse | None = None


class OpenOffersResponse(BaseModel):
    buy: list[OfferResponse]
    sell: list[OfferResponse]


class CounterpartyWalletResponse(BaseModel):
    account: str
    wallet: str  # "" when the account has no match yet
