from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.om_common.errors import TradeNotFoundError
from src.om_common.response import ApiResponse, respond
from src.om_matching.application.service import Exchange, get_exchange
from src.om_trade.application.schemas import TradeRecordResponse

router = APIRouter(prefix="/trades", tags=["trades"])


@router.get("/{submitter_id}")
async def get_trade(
    submitter_id: str,
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
) -> ApiResponse:
    """Trade of either party, looked up by buyer or seller submitter ID."""
    trade = await exchange.state.find_trade(submitter_id)
    if trade is None:
        raise TradeNotFoundError(submitter_id)
    return respond(request, TradeRecordResponse.from_record(trade).model_dump())
