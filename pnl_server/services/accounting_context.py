"""Accounting session bridging the HTTP layer and the position accountant."""

import logging
import time
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from pnl_server.errors import InvalidInput
from pnl_server.message_models import TradeRequest
from pnl_server.models import AggregatePnL, Instrument, PositionView, Trade
from .position_accountant import PositionAccountant, PriceSource

logger = logging.getLogger(__name__)

_FIELD_ERRORS = {
    "instrument": "Invalid instrument",
    "ticker": "Invalid instrument",
    "side": "Invalid side",
}


def _describe_validation_error(exc: ValidationError) -> str:
    for error in exc.errors():
        loc = error.get("loc") or ("",)
        if loc[0] in _FIELD_ERRORS:
            return _FIELD_ERRORS[loc[0]]
    return "Invalid quantity, price, or timestamp"


class AccountingContext:
    """One user's trading session: raw-input validation plus position accounting.

    The accountant never picks prices on its own. When a caller omits a
    price source, the reference table configured here is handed to it.
    """

    def __init__(self, accountant: Optional[PositionAccountant] = None,
                 reference_prices: Optional[Mapping[Instrument, Decimal]] = None):
        self.accountant = accountant or PositionAccountant()
        self.reference_prices: Dict[Instrument, Decimal] = dict(reference_prices or {})

    def submit_trade(self, instrument: Any, side: Any, quantity: Any, price: Any,
                     timestamp: Any = None) -> Trade:
        """Validate raw trade fields and apply the trade.

        Raises:
            InvalidInput: a field is missing, unknown or malformed.
            InsufficientPosition: a sell exceeds the held quantity.
        """
        raw = {
            "instrument": instrument,
            "side": side,
            "quantity": quantity,
            "price": price,
            "timestamp": timestamp,
        }
        try:
            request = TradeRequest.model_validate(raw)
        except ValidationError as exc:
            message = _describe_validation_error(exc)
            logger.info("Rejected trade input %s: %s", raw, message)
            raise InvalidInput(message) from exc

        submission = request.to_submission(default_timestamp=int(time.time() * 1000))
        return self.accountant.apply_trade(submission)

    def _resolve_prices(self, price_source: Optional[PriceSource]) -> PriceSource:
        if price_source is None:
            logger.debug("No price source supplied, using reference prices")
            return self.reference_prices
        return price_source

    def fetch_portfolio(self, price_source: Optional[PriceSource] = None) -> Dict[Instrument, PositionView]:
        return self.accountant.get_portfolio_snapshot(self._resolve_prices(price_source))

    def fetch_aggregate_pnl(self, price_source: Optional[PriceSource] = None) -> AggregatePnL:
        return self.accountant.get_aggregate_pnl(self._resolve_prices(price_source))

    def list_trades(self, limit: Optional[int] = None) -> List[Trade]:
        """Get trade history, oldest first."""
        return self.accountant.trade_log.trades(limit)
