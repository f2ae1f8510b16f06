"""Portfolio and PnL REST endpoints."""

from decimal import Decimal
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from pnl_server.errors import InvalidInput
from pnl_server.message_models import PnLModel, PortfolioModel, PositionModel
from pnl_server.models import Instrument
from pnl_server.money import to_decimal
from pnl_server.services import AccountingContext
from pnl_server.state import get_context

router = APIRouter(prefix="/api", tags=["Portfolio"])


def parse_price_overrides(context: AccountingContext,
                          overrides: Optional[List[str]]) -> Optional[Dict[Instrument, Decimal]]:
    """Merge ``SYMBOL:PRICE`` query values on top of the reference prices."""
    if not overrides:
        return None
    prices = dict(context.reference_prices)
    for item in overrides:
        symbol, sep, value = item.partition(":")
        if not sep:
            raise HTTPException(status_code=400, detail=f"Invalid price override: {item}")
        try:
            instrument = Instrument(symbol.strip().upper())
            price = to_decimal(value)
        except (ValueError, InvalidInput):
            raise HTTPException(status_code=400, detail=f"Invalid price override: {item}")
        if price < 0:
            raise HTTPException(status_code=400, detail=f"Invalid price override: {item}")
        prices[instrument] = price
    return prices


@router.get("/portfolio", response_model=PortfolioModel)
async def get_portfolio(price: Optional[List[str]] = Query(default=None),
                        context: AccountingContext = Depends(get_context)):
    snapshot = context.fetch_portfolio(parse_price_overrides(context, price))
    return {
        instrument: PositionModel.model_validate(view)
        for instrument, view in snapshot.items()
    }


@router.get("/pnl", response_model=PnLModel)
async def get_pnl(price: Optional[List[str]] = Query(default=None),
                  context: AccountingContext = Depends(get_context)):
    pnl = context.fetch_aggregate_pnl(parse_price_overrides(context, price))
    return PnLModel.model_validate(pnl)
