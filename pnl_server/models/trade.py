"""Trade data models."""

from dataclasses import dataclass
from decimal import Decimal
import math
from typing import Union

from pnl_server.errors import InvalidInput
from pnl_server.money import format_decimal, to_decimal
from .instrument import Instrument, Side

Timestamp = Union[int, float]


@dataclass(frozen=True)
class TradeSubmission:
    """A trade that has passed boundary validation and may enter the core.

    Quantity and price are normalized to ``Decimal`` on construction and
    must be strictly positive. The timestamp must be a finite number.
    """
    instrument: Instrument
    side: Side
    quantity: Decimal
    price: Decimal
    timestamp: Timestamp

    def __post_init__(self):
        quantity = to_decimal(self.quantity)
        price = to_decimal(self.price)
        if quantity <= 0:
            raise InvalidInput("Quantity must be positive")
        if price <= 0:
            raise InvalidInput("Price must be positive")
        timestamp = self.timestamp
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise InvalidInput("Timestamp must be a number")
        if isinstance(timestamp, float) and not math.isfinite(timestamp):
            raise InvalidInput("Timestamp must be a finite number")
        object.__setattr__(self, 'instrument', Instrument(self.instrument))
        object.__setattr__(self, 'side', Side(self.side))
        object.__setattr__(self, 'quantity', quantity)
        object.__setattr__(self, 'price', price)


@dataclass(frozen=True)
class Trade:
    """Represents an accepted trade as stored in the trade log."""
    id: str
    instrument: Instrument
    side: Side
    quantity: Decimal
    price: Decimal
    timestamp: Timestamp

    @classmethod
    def from_submission(cls, trade_id: str, submission: TradeSubmission) -> 'Trade':
        """Create a recorded trade from a validated submission."""
        return cls(
            id=trade_id,
            instrument=submission.instrument,
            side=submission.side,
            quantity=submission.quantity,
            price=submission.price,
            timestamp=submission.timestamp,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'instrument': self.instrument.value,
            'side': self.side.value,
            'quantity': format_decimal(self.quantity),
            'price': format_decimal(self.price),
            'timestamp': self.timestamp,
        }
