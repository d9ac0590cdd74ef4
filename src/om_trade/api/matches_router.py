"""Settlement journal API — inspect in-flight/failed matches and resume them.

Resume is operator-driven: nothing in the service retries a failed match
on its own.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.om_common.enums import JournalStatus
from src.om_common.response import ApiResponse, respond
from src.om_matching.application.service import Exchange, get_exchange
from src.om_trade.application.schemas import (
    JournalListResponse,
    JournalResponse,
    TradeRecordResponse,
)

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("")
async def list_matches(
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
    status: JournalStatus | None = Query(None, description="Filter by journal status"),
) -> ApiResponse:
    journals = await exchange.state.list_journals(status)
    data = JournalListResponse(items=[JournalResponse.from_journal(j) for j in journals])
    return respond(request, data.model_dump(mode="json"))


@router.get("/{match_id}")
async def get_match(
    match_id: str,
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
) -> ApiResponse:
    journal = await exchange.state.get_journal(match_id)
    return respond(request, JournalResponse.from_journal(journal).model_dump(mode="json"))


@router.post("/{match_id}/resume")
async def resume_match(
    match_id: str,
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
) -> ApiResponse:
    trade = await exchange.orchestrator.resume(match_id)
    return respond(request, TradeRecordResponse.from_record(trade).model_dump())
