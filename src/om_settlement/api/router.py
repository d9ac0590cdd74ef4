from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.om_common.errors import MissingParameterError
from src.om_common.response import ApiResponse, respond
from src.om_matching.application.service import Exchange, get_exchange
from src.om_settlement.application.schemas import PaymentSentRequest
from src.om_trade.application.schemas import TradeRecordResponse

router = APIRouter(prefix="/trades", tags=["settlement"])


@router.post("/payment-sent")
async def payment_sent(
    body: PaymentSentRequest,
    exchange: Annotated[Exchange, Depends(get_exchange)],
    request: Request,
    account: str | None = Query(None, description="Submitter ID of the payer"),
) -> ApiResponse:
    """Verify the payer's on-chain transaction, then complete the trade on the platform."""
    if not account:
        raise MissingParameterError("account")
    trade = await exchange.verifier.verify_and_settle(body.transaction_id, account)
    return respond(
        request,
        TradeRecordResponse.from_record(trade).model_dump(),
        "trade completed successfully",
    )
