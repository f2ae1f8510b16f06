"""Data models for the PnL tracker."""

from .instrument import Instrument, Side
from .position import AggregatePnL, Position, PositionView
from .trade import Trade, TradeSubmission

__all__ = [
    'Instrument',
    'Side',
    'Position',
    'PositionView',
    'AggregatePnL',
    'Trade',
    'TradeSubmission',
]
