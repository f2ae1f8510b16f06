"""Shared fixtures for the PnL tracker tests."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from pnl_server.models import Instrument, Side, TradeSubmission
from pnl_server.server import create_app
from pnl_server.services import AccountingContext, PositionAccountant, TradeLog

REFERENCE_PRICES = {
    Instrument.BTC: Decimal("44000"),
    Instrument.ETH: Decimal("3500"),
    Instrument.SOL: Decimal("180"),
}


def make_trade(instrument, side, quantity, price, timestamp=1700000000):
    return TradeSubmission(
        instrument=Instrument(instrument),
        side=Side(side),
        quantity=quantity,
        price=price,
        timestamp=timestamp,
    )


@pytest.fixture
def accountant():
    """Fresh accountant with an empty trade log."""
    return PositionAccountant(TradeLog())


@pytest.fixture
def context(accountant):
    return AccountingContext(accountant, REFERENCE_PRICES)


@pytest.fixture
def client(context):
    """HTTP client bound to an app that owns ``context``."""
    with TestClient(create_app(context)) as test_client:
        yield test_client
