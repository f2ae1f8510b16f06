"""Exceptions raised by the accounting core and its input boundary."""

from decimal import Decimal


class PnLError(Exception):
    """Base class for accounting errors."""


class InvalidInput(PnLError, ValueError):
    """Raw trade input could not be turned into a valid submission."""


class InsufficientPosition(PnLError, ValueError):
    """A sell asked for more units than are currently held."""

    def __init__(self, instrument: str, requested: Decimal, held: Decimal):
        self.instrument = instrument
        self.requested = requested
        self.held = held
        super().__init__(f"Cannot sell more {instrument} than you hold")
