"""Tradable instruments and trade sides."""

from enum import Enum


class Instrument(str, Enum):
    """Closed set of symbols the tracker accepts."""
    BTC = "BTC"
    ETH = "ETH"
    SOL = "SOL"


class Side(str, Enum):
    BUY = "buy"
    SELL = "sell"
