import pytest

from coinflow.ml.model.vector import Key, Vector
from coinflow.ml.net.dataset import (
    DOT_FIRE,
    DOT_SNOW,
    DOT_WATER,
    DataSet,
    converge,
    from_emoji,
    from_emojis,
    last,
    last_at,
    quantify,
    quantify_all,
    same_or_nothing,
    strip,
    to_emoji,
    to_emojis,
    to_series,
)


def test_strip():
    inp = [[1], [2], [3]]
    out = [[1], [2], [3], [4], [5]]
    i, o = strip(out, inp)
    assert i == [[3], [4], [5]]
    assert o == [[1], [2], [3]]


def test_strip_empty():
    assert strip([], [[1], [2]]) == ([], [])


def test_push_fills_after_windows_are_full():
    ds = DataSet(2, 1)
    key = Key(coin="BTC")
    results = [
        ds.push(key, Vector(prev_in=[float(i)], prev_out=[10.0 + i], new_in=[100.0 + i]))
        for i in range(4)
    ]
    assert [filled for _, filled in results] == [False, False, True, True]
    assert results[0][0] == [[0.0], [100.0]]
    assert results[3][0] == [[2.0], [3.0], [103.0]]
    assert ds.inputs == [[2.0], [3.0]]
    assert ds.outputs == [[13.0]]


def test_push_wrong_key_raises():
    ds = DataSet(2, 1, key=Key(coin="BTC", strategy="a"))
    with pytest.raises(ValueError):
        ds.push(Key(coin="ETH"), Vector())


def test_series_and_last():
    x = [[1.0, 2.0], [3.0, 4.0]]
    y = [[5.0, 6.0], [7.0, 8.0]]
    assert to_series(0, x, None) == [1.0, 3.0]
    assert to_series(1, x, y) == [2.0, 4.0, 8.0]
    assert last(y) == [7.0, 8.0]
    assert last_at(0, y) == 7.0


def test_emoji_round_trip():
    values = [2.0, -2.0, 0.1]
    emojis = to_emojis(values, 0.5)
    assert emojis == [DOT_FIRE, DOT_WATER, DOT_SNOW]
    assert from_emojis(emojis) == [1.0, -1.0, 0.0]
    assert to_emoji(0.5, 0.5) == DOT_SNOW
    assert from_emoji("unknown") == 0.0


def test_same_or_nothing_and_converge():
    assert same_or_nothing([1.0, 1.0, 1.0]) == 1.0
    assert same_or_nothing([1.0, -1.0]) == 0.0
    assert converge([-1.0, -1.0]) == [[-1.0]]
    assert converge([1.0, 0.0]) == [[0.0]]


def test_quantify():
    assert quantify(0.6, 0.5) == 1.0
    assert quantify(-0.6, 0.5) == -1.0
    assert quantify(0.5, 0.5) == 0.0
    assert quantify_all([0.6, -0.6, 0.0], 0.5) == [1.0, -1.0, 0.0]