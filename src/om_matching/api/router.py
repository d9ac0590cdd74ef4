"""Offer REST API — submit offers, inspect the book, look up the payment target."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.om_common.enums import OfferDirection
from src.om_common.errors import MissingParameterError
from src.om_common.response import ApiResponse, respond
from src.om_matching.application.schemas import (
    CounterpartyWalletResponse,
    OfferResponse,
    OpenOffersResponse,
    SubmitOfferRequest,
    SubmitOfferResponse,
)
from src.om_matching.application.service import Exchange, get_exchange
from src.om_trade.application.schemas import TradeRecordResponse

router = APIRouter(prefix="/offers", tags=["offers"])

MATCHED_MESSAGE = "Your offer was matched successfully."
SAVED_MESSAGE = "Your offer was saved successfully."


async def _submit(
    body: SubmitOfferRequest, exchange: Exchange, request: Request, direction: str | None = None
) -> ApiResponse:
    result = await exchange.engine.submit(body.to_offer(direction))
    data = SubmitOfferResponse(
        matched=result.matched,
        match_id=result.match_id,
        trade=TradeRecordResponse.from_record(result.trade) if result.trade else None,
    )
    return respond(
        request, data.model_dump(), MATCHED_MESSAGE if result.matched else SAVED_MESSAGE
    )


@router.post("")
async def submit_offer(
    body: SubmitOfferRequest,
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
) -> ApiResponse:
    return await _submit(body, exchange, request)


@router.post("/buy")
async def submit_buy_offer(
    body: SubmitOfferRequest,
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
) -> ApiResponse:
    return await _submit(body, exchange, request, OfferDirection.BUY.value)


@router.post("/sell")
async def submit_sell_offer(
    body: SubmitOfferRequest,
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
) -> ApiResponse:
    return await _submit(body, exchange, request, OfferDirection.SELL.value)


@router.get("/book")
async def open_offers(
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
) -> ApiResponse:
    snapshot = await exchange.state.open_offers()
    data = OpenOffersResponse(
        buy=[OfferResponse.from_offer(o) for o in snapshot[OfferDirection.BUY.value]],
        sell=[OfferResponse.from_offer(o) for o in snapshot[OfferDirection.SELL.value]],
    )
    return respond(request, data.model_dump())


@router.get("/counterparty-wallet")
async def counterparty_wallet(
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
    account: str | None = Query(None, description="Submitter ID"),
) -> ApiResponse:
    if not account:
        raise MissingParameterError("account")
    wallet = await exchange.state.counterparty_wallet(account)
    return respond(request, CounterpartyWalletResponse(account=account, wallet=wallet).model_dump())
