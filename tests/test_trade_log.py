"""Tests for the append-only trade log."""

from decimal import Decimal

from pnl_server.models import Instrument, Side, Trade
from pnl_server.services import TradeLog

from conftest import make_trade


def test_append_assigns_unique_ids_in_order():
    log = TradeLog()
    first = log.append(make_trade("BTC", "buy", "1", "40000", timestamp=1))
    second = log.append(make_trade("ETH", "buy", "2", "3000", timestamp=2))

    assert isinstance(first, Trade)
    assert first.id != second.id
    assert len(log) == 2
    assert [trade.id for trade in log.trades()] == [first.id, second.id]


def test_append_keeps_submission_fields():
    log = TradeLog()
    trade = log.append(make_trade("SOL", "sell", "10", "150.5", timestamp=1234.5))

    assert trade.instrument is Instrument.SOL
    assert trade.side is Side.SELL
    assert trade.quantity == Decimal("10")
    assert trade.price == Decimal("150.5")
    assert trade.timestamp == 1234.5


def test_timestamps_are_stored_as_given():
    log = TradeLog()
    log.append(make_trade("BTC", "buy", "1", "1", timestamp=50))
    log.append(make_trade("BTC", "buy", "1", "1", timestamp=10))

    assert [trade.timestamp for trade in log] == [50, 10]


def test_trades_returns_copy_and_limit():
    log = TradeLog()
    ids = [log.append(make_trade("BTC", "buy", "1", "100")).id for _ in range(5)]

    snapshot = log.trades()
    snapshot.clear()
    assert len(log) == 5
    assert [trade.id for trade in log.trades(limit=2)] == ids[-2:]


def test_to_dict_renders_decimals_as_strings():
    trade = TradeLog().append(make_trade("BTC", "buy", "0.50", "42000.00", timestamp=7))

    assert trade.to_dict() == {
        "id": trade.id,
        "instrument": "BTC",
        "side": "buy",
        "quantity": "0.5",
        "price": "42000",
        "timestamp": 7,
    }


def test_len_is_consistent_under_concurrent_appends():
    from concurrent.futures import ThreadPoolExecutor

    log = TradeLog()

    def append(_):
        log.append(make_trade("BTC", "buy", "1", "100"))
        return len(log)

    with ThreadPoolExecutor(max_workers=8) as executor:
        sizes = list(executor.map(append, range(100)))

    assert len(log) == 100
    assert all(1 <= size <= 100 for size in sizes)
