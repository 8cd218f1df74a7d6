import pytest

from coinflow.ml.model.schema import Detail, Model, Segments, Stats
from coinflow.ml.model.vector import BTC, Key, Vector
from coinflow.ml.net.multi import MultiNetwork
from coinflow.ml.net.network import (
    GRU_KEY,
    BaseNetwork,
    Tracker,
    base_network_constructor,
    new_network,
)
from coinflow.ml.net.poly import POLY_KEY, Polynomial


def _poly_model(hash_, multi=True):
    return Model(
        detail=Detail(type=POLY_KEY, hash=hash_),
        buffer_size=2,
        features=[1, 1],
        spread=0.5,
        multi=multi,
    )


def _network(*hashes):
    segments = Segments(stats=Stats(model=[_poly_model(h) for h in hashes]))
    return base_network_constructor(2, 1)(Key(coin=BTC), segments)


def _vector(v):
    return Vector(prev_in=[v], prev_out=[v], new_in=[v])


def test_new_network_polynomial():
    cfg = _poly_model("a")
    net = new_network(POLY_KEY, cfg)
    assert isinstance(net, Polynomial)
    assert net.config == cfg


def test_new_network_unknown():
    with pytest.raises(ValueError, match="unknown network detail"):
        new_network(GRU_KEY, Model())


def test_details_and_multi():
    net = _network("a", "b")
    details = list(net.networks)
    assert details[0] == Detail(type=POLY_KEY, hash="a", index=0)
    assert details[1] == Detail(type=POLY_KEY, hash="b", index=1)
    multi = details[2]
    assert multi == Detail(type=f"{POLY_KEY}:{POLY_KEY}", hash="a|b", index=2)
    assert isinstance(net.networks[multi], MultiNetwork)
    assert net.configs[multi] == Model()
    assert set(net.trackers) == set(net.networks)


def test_empty_hash_gets_random_one():
    net = _network("")
    assert len(list(net.networks)[0].hash) == 5


def test_push_readiness_and_outputs():
    net = _network("a", "b")
    key = Key(coin=BTC)
    results = [net.push(key, _vector(float(i))) for i in range(1, 5)]
    assert [ready for _, ready in results] == [False, False, True, True]
    # the polynomial buffers fill on the fourth vector only
    assert results[2][0] == {}
    out = results[3][0]
    assert set(out) == set(net.networks)
    details = list(net.networks)
    assert out[details[2]] == out[details[0]]
    for detail, prediction in out.items():
        assert net.trackers[detail].stats.prediction == prediction
        assert net.trackers[detail].metrics.loss == 0.01


def test_push_tracks_performance():
    net = _network("a")
    key = Key(coin=BTC)
    for i in range(1, 21):
        net.push(key, _vector(float(i)))
    metrics = net.trackers[list(net.networks)[0]].metrics
    assert metrics.total > 0
    assert metrics.match + metrics.false <= metrics.total


def test_tracker():
    tracker = Tracker(12)
    assert tracker.stats.decisions == [0] * 12
    assert tracker.stats.prediction == []
    tracker.set_last([[1.0]])
    assert tracker.stats.prediction == [[1.0]]


def test_base_network_without_generators():
    net = BaseNetwork(Key(coin=BTC), 2, 1)
    assert list(net.networks) == [Detail(type="", hash="", index=0)]