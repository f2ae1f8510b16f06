"""Construction of the accounting context shared by the REST endpoints."""

from typing import Optional

from fastapi import Request

from pnl_server.services import AccountingContext, PositionAccountant, TradeLog
from pnl_server.settings import Settings, settings as default_settings


def create_context(config: Optional[Settings] = None) -> AccountingContext:
    """Build a fresh accounting session from settings."""
    config = config or default_settings
    accountant = PositionAccountant(TradeLog())
    return AccountingContext(accountant, config.reference_prices.as_price_source())


def get_context(request: Request) -> AccountingContext:
    """FastAPI dependency returning the context owned by the running app."""
    return request.app.state.accounting
