"""Position data models."""

from dataclasses import dataclass, field
from decimal import Decimal

from pnl_server.money import ZERO


@dataclass
class Position:
    """Held units of one instrument under weighted-average cost.

    ``average_cost`` is 0 whenever ``quantity`` is 0. ``realized_pnl``
    accumulates across the position's whole life and is never reset.
    """
    quantity: Decimal = field(default=ZERO)
    average_cost: Decimal = field(default=ZERO)
    realized_pnl: Decimal = field(default=ZERO)

    @property
    def is_flat(self) -> bool:
        return self.quantity == 0

    def unrealized_pnl(self, market_price: Decimal) -> Decimal:
        return (market_price - self.average_cost) * self.quantity

    def copy(self) -> 'Position':
        return Position(self.quantity, self.average_cost, self.realized_pnl)


@dataclass(frozen=True)
class PositionView:
    """Read-only valuation of an open position."""
    quantity: Decimal
    average_cost: Decimal
    unrealized_pnl: Decimal
    realized_pnl: Decimal


@dataclass(frozen=True)
class AggregatePnL:
    realized_pnl: Decimal
    unrealized_pnl: Decimal
