from datetime import datetime, timedelta

import pytest

from coinflow.ml.model.vector import Level, Tick, TradeSignal
from coinflow.processor.pipeline import (
    audit,
    deriv,
    error,
    no_process,
    process,
    process_with_close,
    void,
)

START = datetime(2024, 1, 1, 12, 0, 0)


def _trade(price, volume=1.0, at=START):
    return TradeSignal(
        coin="BTC", tick=Tick(level=Level(price=price, volume=volume), time=at)
    )


def test_void_passes_trades_through():
    trades = [_trade(1.0), _trade(2.0)]
    out = list(void("x")(iter(trades)))
    assert len(out) == len(trades)
    assert all(a is b for a, b in zip(out, trades))


def test_audit_format():
    assert audit("ml", "started") == "[ml] started"


def test_error_format():
    assert error("ml", ValueError("bad")) == "[ml] error: bad"


def test_process_calls_logic_for_each_trade():
    seen = []
    trades = [_trade(1.0), _trade(2.0), _trade(3.0)]
    out = list(process("p", seen.append)(trades))
    assert seen == trades
    assert out == trades


def test_process_keeps_going_after_error():
    def failing(trade):
        raise ValueError("boom")

    trades = [_trade(1.0), _trade(2.0)]
    assert list(process("p", failing)(trades)) == trades


def test_process_with_close_runs_shutdown_when_input_ends():
    calls = []
    stage = process_with_close("p", lambda t: None, lambda: calls.append("closed"))
    gen = stage(iter([_trade(5.0)]))
    assert next(gen).tick.price == 5.0
    assert calls == []
    with pytest.raises(StopIteration):
        next(gen)
    assert calls == ["closed"]


def test_no_process_passes_through():
    trades = [_trade(1.0)]
    assert list(no_process("n")(trades)) == trades


def test_deriv_first_trade_has_no_move():
    enrich = deriv()
    trade = enrich(_trade(100.0))
    assert trade.tick.move.velocity == 0.0
    assert trade.tick.move.momentum == 0.0


def test_deriv_same_time_gives_zero_move():
    enrich = deriv()
    enrich(_trade(100.0))
    trade = enrich(_trade(120.0))
    assert trade.tick.move.velocity == 0.0
    assert trade.tick.move.momentum == 0.0


def test_deriv_rising_price_with_constant_volume():
    enrich = deriv()
    enrich(_trade(100.0))
    trade = enrich(_trade(110.0, at=START + timedelta(seconds=10)))
    assert trade.tick.move.velocity == pytest.approx(0.01)
    assert trade.tick.move.momentum == pytest.approx(trade.tick.move.velocity)


def test_deriv_falling_price_is_negative():
    enrich = deriv()
    enrich(_trade(100.0))
    trade = enrich(_trade(90.0, at=START + timedelta(seconds=5)))
    assert trade.tick.move.velocity < 0
    assert trade.tick.move.momentum < 0