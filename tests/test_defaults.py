from datetime import timedelta

from coinflow.ml.defaults import (
    DEFAULT_COINS,
    coin_config,
    config,
    config_key,
    default_config,
    for_coin,
    model_config,
    trader_config,
    with_config,
)
from coinflow.ml.model.schema import Segments
from coinflow.ml.model.vector import BTC, ETH, Key
from coinflow.ml.net.network import BaseNetwork, base_network_constructor
from coinflow.ml.net.poly import POLY_KEY


def test_config_key():
    key = config_key(BTC, 15)
    assert key == Key(coin=BTC, duration=timedelta(minutes=15), strategy="BTC_15")


def test_config_for_given_coins():
    cfg = config(BTC, ETH)
    assert set(cfg.segments) == {config_key(BTC, 15), config_key(ETH, 15)}
    assert all(s.stats.live for s in cfg.segments.values())


def test_config_defaults_to_default_coins():
    cfg = config()
    assert {k.coin for k in cfg.segments} == set(DEFAULT_COINS)


def test_with_config_keeps_live_flags():
    cfg = with_config({BTC: True, ETH: False})
    assert cfg.segments[config_key(BTC, 15)].stats.live is True
    assert cfg.segments[config_key(ETH, 15)].stats.live is False


def test_coin_config_settings():
    cfg = coin_config({BTC: lambda coin: for_coin(coin, True)})
    assert cfg.position.open_value == 100
    assert cfg.position.stop_loss == 0.020
    assert cfg.position.take_profit == 0.020
    assert cfg.position.tracking_config[0]["samples"] == 5
    assert cfg.option.debug is True and cfg.option.log is False
    assert cfg.buffer.interval == timedelta(seconds=10)
    assert cfg.segment.interval == timedelta(minutes=15)


def test_for_coin_adds_to_existing():
    existing = {config_key(ETH, 15): Segments()}
    result = for_coin(BTC, False)(existing)
    assert set(result) == {config_key(ETH, 15), config_key(BTC, 15)}


def test_model_config():
    model = model_config(0.7)
    assert model.buffer_size == 64
    assert model.threshold == 0.7
    assert len(model.size) == 128
    assert len(model.features) == 8


def test_trader_config():
    trader = trader_config(True)
    assert trader.weight == 1
    assert trader.live is True
    assert trader.buffer_time == 0


def test_default_config_models():
    segments = default_config(True)
    assert segments.stats.look_back == 8
    assert segments.stats.look_ahead == 3
    assert [m.detail.hash for m in segments.stats.model] == [
        "gru_1_64_1",
        "x2",
        "x3",
        "x1",
        "hmm_5_2",
    ]
    assert segments.trader.live is False


def test_default_polynomial_models_build_a_network():
    segments = default_config(True)
    segments.stats.model = [m for m in segments.stats.model if m.detail.type == POLY_KEY]
    net = base_network_constructor(8, 3)(config_key(BTC, 15), segments)
    assert isinstance(net, BaseNetwork)
    multi = list(net.networks)[-1]
    assert multi.hash == "x2|x3|x1"
    assert multi.index == len(segments.stats.model)