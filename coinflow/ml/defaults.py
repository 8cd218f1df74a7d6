"""Default configurations for the ml processing of coins."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable, Mapping

from coinflow.ml.model.schema import (
    Buffer,
    Config,
    ConfigSegment,
    Detail,
    Model,
    Option,
    Position,
    SegmentConfig,
    Segments,
    Stats,
    Trader,
    add_config,
)
from coinflow.ml.model.vector import AAVE, BTC, DOT, ETH, KAVA, LINK, MATIC, SOL, XRP, Key
from coinflow.ml.net.network import GRU_KEY, HMM_KEY
from coinflow.ml.net.poly import POLY_KEY

DEFAULT_COINS = (BTC, DOT, ETH, LINK, SOL, MATIC, AAVE, XRP, KAVA)


def coin_config(coins: Mapping[str, ConfigSegment]) -> Config:
    """Build the full config from a segment generator per coin."""
    segments: SegmentConfig = {}
    for coin, gen in coins.items():
        segments = add_config(segments, gen(coin))
    return Config(
        segments=segments,
        position=Position(
            open_value=100,
            stop_loss=0.020,
            take_profit=0.020,
            tracking_config=[
                {
                    "duration": timedelta(seconds=30),
                    "samples": 5,
                    "threshold": [0.00001, 0.000001],
                }
            ],
        ),
        option=Option(trace={}, log=False, debug=True, benchmark=True),
        buffer=Buffer(interval=timedelta(seconds=10), history=True),
        segment=Buffer(interval=timedelta(minutes=15), history=True),
    )


def with_config(coins: Mapping[str, bool]) -> Config:
    """Config for the given coins, each with its own live flag."""
    generators: dict[str, ConfigSegment] = {
        c: (lambda coin, live=live: for_coin(coin, live)) for c, live in coins.items()
    }
    return coin_config(generators)


def config(*args: str) -> Config:
    """Config for the given coins, all live; the default set if none given."""
    if not args:
        return config(*DEFAULT_COINS)
    return coin_config({c: (lambda coin: for_coin(coin, True)) for c in args})


def model_config(precision: float) -> Model:
    return Model(
        buffer_size=64,
        threshold=precision,
        size=[0] * 128,
        features=[0] * 8,
    )


def trader_config(live: bool) -> Trader:
    return Trader(buffer_time=0, price_threshold=0, weight=1, live=live)


def config_key(coin: str, d: int) -> Key:
    """The key of a coin's segment of ``d`` minutes."""
    return Key(coin=coin, duration=timedelta(minutes=d), strategy=f"{coin}_{d}")


def for_coin(coin: str, live: bool) -> Callable[[SegmentConfig], SegmentConfig]:
    """Add the coin's default 15-minute segment to a segment config."""

    def add(sgm: SegmentConfig) -> SegmentConfig:
        sgm[config_key(coin, 15)] = default_config(live)
        return sgm

    return add


def default_config(live: bool) -> Segments:
    return Segments(
        stats=Stats(
            look_back=8,
            look_ahead=3,
            gap=0.5,
            live=live,
            model=[
                Model(
                    detail=Detail(type=GRU_KEY, hash="gru_1_64_1"),
                    size=[1, 64, 1],
                    learning_rate=0.01,
                    threshold=0,
                    max_epochs=100,
                    spread=1,
                ),
                Model(
                    detail=Detail(type=POLY_KEY, hash="x2"),
                    buffer_size=2,
                    features=[2, 1],
                    spread=1,
                    multi=True,
                ),
                Model(
                    detail=Detail(type=POLY_KEY, hash="x3"),
                    buffer_size=4,
                    features=[3, 1],
                    spread=1,
                    multi=True,
                ),
                Model(
                    detail=Detail(type=POLY_KEY, hash="x1"),
                    buffer_size=2,
                    features=[1, 1],
                    spread=1,
                    multi=True,
                ),
                Model(
                    detail=Detail(type=HMM_KEY, hash="hmm_5_2"),
                    features=[5, 2],
                    buffer_size=0,
                    spread=1,
                ),
            ],
        ),
        trader=trader_config(False),
    )