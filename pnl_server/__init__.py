"""Single-user trade tracker with weighted-average cost PnL accounting."""

__version__ = "0.1.0"
