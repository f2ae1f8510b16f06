"""Services for the PnL tracker."""

from .trade_log import TradeLog
from .position_accountant import PositionAccountant, PriceSource
from .accounting_context import AccountingContext

__all__ = [
    'TradeLog',
    'PositionAccountant',
    'PriceSource',
    'AccountingContext',
]
