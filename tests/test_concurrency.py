"""Concurrent access to a single accountant."""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from pnl_server.errors import InsufficientPosition
from pnl_server.models import Instrument

from conftest import make_trade


def test_concurrent_buys_are_all_applied(accountant):
    def buy(_):
        return accountant.apply_trade(make_trade("BTC", "buy", "1", "100"))

    with ThreadPoolExecutor(max_workers=8) as executor:
        trades = list(executor.map(buy, range(200)))

    position = accountant.position(Instrument.BTC)
    assert position.quantity == Decimal("200")
    assert position.average_cost == Decimal("100")
    assert len({trade.id for trade in trades}) == 200
    assert len(accountant.trade_log) == 200


def test_concurrent_sells_never_go_negative(accountant):
    accountant.apply_trade(make_trade("ETH", "buy", "100", "3000"))

    def sell(_):
        try:
            accountant.apply_trade(make_trade("ETH", "sell", "1", "3100"))
            return True
        except InsufficientPosition:
            return False

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(sell, range(150)))

    position = accountant.position(Instrument.ETH)
    assert results.count(True) == 100
    assert position.quantity == 0
    assert position.average_cost == 0
    assert position.realized_pnl == Decimal("10000")
    assert len(accountant.trade_log) == 101


def test_readers_see_consistent_aggregates(accountant):
    accountant.apply_trade(make_trade("SOL", "buy", "1000", "150"))
    prices = {}

    def sell(_):
        accountant.apply_trade(make_trade("SOL", "sell", "1", "160"))

    def read(_):
        pnl = accountant.get_aggregate_pnl(prices)
        # with no market price each held unit counts -150, each sold unit +10
        sold = pnl.realized_pnl / 10
        held = -pnl.unrealized_pnl / 150
        return sold + held == 1000

    with ThreadPoolExecutor(max_workers=8) as executor:
        writes = [executor.submit(sell, i) for i in range(300)]
        reads = [executor.submit(read, i) for i in range(300)]
        assert all(future.result() for future in reads)
        for future in writes:
            future.result()

    assert accountant.get_aggregate_pnl(prices).realized_pnl == Decimal("3000")
