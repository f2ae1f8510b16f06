"""Trade REST endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from pnl_server.errors import InsufficientPosition, InvalidInput
from pnl_server.message_models import TradeModel, TradesModel
from pnl_server.services import AccountingContext
from pnl_server.state import get_context

router = APIRouter(prefix="/api", tags=["Trades"])


@router.post("/trade", response_model=TradeModel)
async def submit_trade(request: Request, context: AccountingContext = Depends(get_context)):
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be JSON")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    try:
        trade = context.submit_trade(
            data.get("instrument", data.get("ticker")),
            data.get("side"),
            data.get("quantity", data.get("qty")),
            data.get("price"),
            data.get("timestamp"),
        )
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except InsufficientPosition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return TradeModel.model_validate(trade)


@router.get("/trades", response_model=TradesModel)
async def list_trades(limit: int | None = None, context: AccountingContext = Depends(get_context)):
    if limit is not None and limit < 1:
        raise HTTPException(status_code=400, detail="limit must be positive")
    return [TradeModel.model_validate(trade) for trade in context.list_trades(limit)]
