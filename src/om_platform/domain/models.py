"""Request/response payloads of the trading platform REST API (Bisq).

Field names are snake_case in Python and camelCase on the wire. Responses
carry far more fields than are listed here; unknown ones are ignored.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PlatformModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PaymentAccount(PlatformModel):
    name: str = Field(alias="accountName")
    trade_currencies: list[str] = Field(default_factory=list)
    payment_method: str = ""
    id: str = ""
    payment_details: str = ""  # settlement wallet address
    selected_trade_currency: str = ""


class OfferToCreate(PlatformModel):
    fund_using_bisq_wallet: bool = True
    offer_id: str = ""
    account_id: str
    direction: str
    price_type: str = ""
    market_pair: str
    percentage_from_market_price: int = 0
    fixed_price: int
    amount: int
    min_amount: int
    buyer_security_deposit: int


class OfferDetail(PlatformModel):
    id: str
    direction: str = ""
    price: int = 0
    amount: int = 0
    min_amount: int = 0
    state: str = ""
    maker_payment_account_id: str = ""
    offer_fee_payment_tx_id: str = ""
    currency_code: str = ""
    base_currency_code: str = ""
    counter_currency_code: str = ""


class OfferToTake(PlatformModel):
    payment_account_id: str
    amount: int


class TradeDetails(PlatformModel):
    id: str
    offer: OfferDetail | None = None
    buyer_payment_account: PaymentAccount | None = None
    seller_payment_account: PaymentAccount | None = None
    taker_fee_tx_id: str = ""
    deposit_tx_id: str = ""
    payout_tx_id: str = ""
    trade_amount: int = 0
    trade_price: int = 0
    state: str = ""
    dispute_state: str = ""
    trade_period_state: str = ""
    taker_payment_account_id: str = ""
    error_message: str = ""
    counter_currency_tx_id: str = ""
