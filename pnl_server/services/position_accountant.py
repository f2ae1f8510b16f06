"""Service applying trades to positions and deriving PnL."""

import logging
import threading
from decimal import Decimal, Overflow
from typing import Dict, Mapping, Optional

from pnl_server.errors import InsufficientPosition, InvalidInput
from pnl_server.models import (
    AggregatePnL,
    Instrument,
    Position,
    PositionView,
    Side,
    Trade,
    TradeSubmission,
)
from pnl_server.money import ZERO, accounting_context, to_decimal
from .trade_log import TradeLog

logger = logging.getLogger(__name__)

PriceSource = Mapping[Instrument, Decimal]


class PositionAccountant:
    """Tracks positions under weighted-average cost and derives PnL views.

    Every mutation and every read runs under one re-entrant lock. A trade
    is applied as a whole or not at all, and aggregate reads see all
    instruments at the same point in the trade sequence.
    """

    def __init__(self, trade_log: Optional[TradeLog] = None):
        self.trade_log = trade_log if trade_log is not None else TradeLog()
        self._positions: Dict[Instrument, Position] = {}
        self._lock = threading.RLock()

    def apply_trade(self, submission: TradeSubmission) -> Trade:
        """Apply a validated trade and record it in the trade log.

        Raises:
            InsufficientPosition: a sell exceeds the held quantity. The
                position and the trade log are left untouched.
            InvalidInput: the resulting position cannot be represented.
                Nothing is stored.
        """
        quantity = to_decimal(submission.quantity)
        price = to_decimal(submission.price)
        instrument = submission.instrument
        side = submission.side

        with self._lock, accounting_context():
            current = self._positions.get(instrument) or Position()

            if side is Side.SELL and quantity > current.quantity:
                logger.warning(
                    "Rejected sell of %s %s: only %s held",
                    quantity, instrument.value, current.quantity,
                )
                raise InsufficientPosition(instrument.value, quantity, current.quantity)

            try:
                if side is Side.BUY:
                    updated = self._buy(current, quantity, price)
                else:
                    updated = self._sell(current, quantity, price)
            except Overflow as exc:
                logger.warning(
                    "Rejected %s of %s %s: amount overflows",
                    side.value, quantity, instrument.value,
                )
                raise InvalidInput("Trade amount out of range") from exc

            self._positions[instrument] = updated
            trade = self.trade_log.append(submission)

        logger.info("Recorded trade %s", trade.to_dict())
        return trade

    @staticmethod
    def _buy(position: Position, quantity: Decimal, price: Decimal) -> Position:
        total_cost = position.average_cost * position.quantity + price * quantity
        new_quantity = position.quantity + quantity
        return Position(
            quantity=new_quantity,
            average_cost=total_cost / new_quantity,
            realized_pnl=position.realized_pnl,
        )

    @staticmethod
    def _sell(position: Position, quantity: Decimal, price: Decimal) -> Position:
        realized = (price - position.average_cost) * quantity
        new_quantity = position.quantity - quantity
        return Position(
            quantity=new_quantity,
            # a flat position must not carry its old cost into the next one
            average_cost=position.average_cost if new_quantity else ZERO,
            realized_pnl=position.realized_pnl + realized,
        )

    def get_portfolio_snapshot(self, price_source: PriceSource) -> Dict[Instrument, PositionView]:
        """Value every open position against ``price_source``.

        Flat positions are left out. An instrument missing from the price
        source is valued at 0.
        """
        snapshot: Dict[Instrument, PositionView] = {}
        with self._lock, accounting_context():
            for instrument, position in self._positions.items():
                if position.is_flat:
                    continue
                market_price = _market_price(price_source, instrument)
                snapshot[instrument] = PositionView(
                    quantity=position.quantity,
                    average_cost=position.average_cost,
                    unrealized_pnl=position.unrealized_pnl(market_price),
                    realized_pnl=position.realized_pnl,
                )
        return snapshot

    def get_aggregate_pnl(self, price_source: PriceSource) -> AggregatePnL:
        """Sum realized and unrealized PnL over every position, flat ones included."""
        realized = ZERO
        unrealized = ZERO
        with self._lock, accounting_context():
            for instrument, position in self._positions.items():
                realized += position.realized_pnl
                unrealized += position.unrealized_pnl(_market_price(price_source, instrument))
        return AggregatePnL(realized_pnl=realized, unrealized_pnl=unrealized)

    def position(self, instrument: Instrument) -> Optional[Position]:
        """Get a copy of the internal position for an instrument, if ever traded."""
        with self._lock:
            position = self._positions.get(Instrument(instrument))
            return position.copy() if position else None

    def instruments(self) -> list[Instrument]:
        """List every instrument that has a position, open or flat."""
        with self._lock:
            return list(self._positions)


def _market_price(price_source: PriceSource, instrument: Instrument) -> Decimal:
    price = price_source.get(instrument)
    if price is None:
        return ZERO
    return to_decimal(price)
