from datetime import timedelta

from coinflow.ml.model.vector import (
    Key,
    Level,
    Meta,
    Tick,
    TradeSignal,
    Type,
    Vector,
)


def test_key_match():
    key = Key(coin="BTC", duration=timedelta(minutes=15))
    assert key.match("BTC") is True
    assert key.match("ETH") is False


def test_key_to_string_depends_on_duration():
    a = Key(coin="BTC", duration=timedelta(minutes=15), strategy="s")
    b = Key(coin="BTC", duration=timedelta(minutes=5), strategy="s")
    assert a.to_string().startswith("BTC")
    assert a.to_string() != b.to_string()


def test_key_hash_equal_for_equal_keys():
    a = Key(coin="BTC", duration=timedelta(minutes=15), strategy="x")
    b = Key(coin="BTC", duration=timedelta(minutes=15), strategy="x")
    c = Key(coin="BTC", duration=timedelta(minutes=15), strategy="y")
    assert a.hash() == b.hash()
    assert a.hash() != c.hash()


def test_key_usable_as_dict_key():
    table = {Key(coin="BTC"): 1}
    assert table[Key(coin="BTC")] == 1


def test_type_inverse():
    assert Type.BUY.inverse() is Type.SELL
    assert Type.SELL.inverse() is Type.BUY
    assert Type.NONE.inverse() is Type.NONE
    for t in Type:
        assert t.inverse().inverse() is t


def test_tick_exposes_level():
    tick = Tick(level=Level(price=5.0, volume=2.0))
    assert tick.price == 5.0
    assert tick.volume == 2.0


def test_trade_signal_defaults():
    signal = TradeSignal(coin="BTC")
    assert signal.tick.price == 0.0
    assert signal.meta.size == 0
    assert signal.tick.type is Type.NONE


def test_vector_str_lists_values():
    vector = Vector(meta=Meta(), prev_in=[1.0], prev_out=[2.0], new_in=[3.0])
    text = str(vector)
    assert text.endswith("\npreI:1.000000,\npreO:2.000000,\nnewI:3.000000,")