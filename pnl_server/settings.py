"""Application settings and environment configuration."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict
import os

from pnl_server.models import Instrument
from pnl_server.money import to_decimal


def _get_env(name: str, default: str) -> str:
    return os.getenv(name, default)


def _get_env_int(name: str, default: int) -> int:
    return int(os.getenv(name, default))


def _get_env_decimal(name: str, default: str) -> Decimal:
    return to_decimal(os.getenv(name, default))


@dataclass
class ReferencePrices:
    """Static price table used when a caller supplies no market prices."""
    btc: Decimal = field(default_factory=lambda: _get_env_decimal("REFERENCE_PRICE_BTC", "44000"))
    eth: Decimal = field(default_factory=lambda: _get_env_decimal("REFERENCE_PRICE_ETH", "3500"))
    sol: Decimal = field(default_factory=lambda: _get_env_decimal("REFERENCE_PRICE_SOL", "180"))

    def as_price_source(self) -> Dict[Instrument, Decimal]:
        return {
            Instrument.BTC: self.btc,
            Instrument.ETH: self.eth,
            Instrument.SOL: self.sol,
        }


@dataclass
class Settings:
    host: str = field(default_factory=lambda: _get_env("PNL_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _get_env_int("PNL_PORT", 3000))
    log_level: str = field(default_factory=lambda: _get_env("PNL_LOG_LEVEL", "INFO"))
    reference_prices: ReferencePrices = field(default_factory=ReferencePrices)


settings = Settings()
