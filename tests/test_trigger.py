import uuid
from datetime import timedelta

from coinflow.api.trigger import ConsumerKey, new_trigger


def test_trigger_keeps_key_id():
    key = ConsumerKey(id="abc", key="ml", prefix="?ml")
    trigger = new_trigger(key)
    assert trigger.id == "abc"
    assert trigger.key == key


def test_trigger_generates_id():
    trigger = new_trigger(ConsumerKey(key="ml"))
    assert str(uuid.UUID(trigger.id)) == trigger.id


def test_generated_ids_differ():
    key = ConsumerKey()
    ids = {new_trigger(key).id for _ in range(5)}
    assert len(ids) == 5
    assert all(str(uuid.UUID(i)) == i for i in ids)


def test_setters_chain():
    trigger = new_trigger(ConsumerKey(id="a"))
    result = (
        trigger.with_id("b")
        .with_description("desc")
        .with_timeout(timedelta(seconds=5))
        .with_defaults("x", "y")
    )
    assert result is trigger
    assert trigger.id == "b"
    assert trigger.description == "desc"
    assert trigger.timeout == timedelta(seconds=5)
    assert trigger.default == ["x", "y"]