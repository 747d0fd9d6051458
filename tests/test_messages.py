from datetime import timedelta

from app.schemas.response import MessageStatus
from app.services.messages import MessageStore


def test_submit_stores_pending_message(clock):
    store = MessageStore(clock=clock)
    message = store.submit("Ana", "ana@example.com", "Hello", "Hi there")

    assert message.status is MessageStatus.PENDING
    assert message.created_at == clock()
    assert message.id == int(clock().timestamp() * 1000)
    assert store.count() == 1


def test_submit_accepts_missing_fields(clock):
    store = MessageStore(clock=clock)
    message = store.submit(None, None, None, None)

    assert message.email is None
    assert store.count() == 1


def test_newest_message_comes_first(clock):
    store = MessageStore(clock=clock)
    store.submit("a", "a@example.com", "first", "")
    clock.advance(seconds=1)
    second = store.submit("b", "b@example.com", "second", "")

    assert store.recent(1) == [second]
    assert [m.subject for m in store.recent(10)] == ["second", "first"]


def test_ids_are_unique_within_same_instant(clock):
    store = MessageStore(clock=clock)
    ids = [store.submit("x", "x@example.com", str(i), "").id for i in range(5)]

    assert len(set(ids)) == 5
    assert ids == sorted(ids)


def test_count_since_is_strictly_after(clock):
    store = MessageStore(clock=clock)
    store.submit("a", "a@example.com", "old", "")
    assert store.count_since(clock()) == 0

    clock.advance(seconds=1)
    assert store.count_since(clock()) == 0

    store.submit("b", "b@example.com", "new", "")
    assert store.count_since(clock() - timedelta(seconds=1)) == 1
    assert store.count_since(clock() - timedelta(seconds=2)) == 2


def test_recent_returns_fewer_when_store_is_small(clock):
    store = MessageStore(clock=clock)
    store.submit("a", "a@example.com", "only", "")

    assert len(store.recent(10)) == 1
    assert store.recent(0) == []


def test_log_is_capped_but_total_keeps_counting(clock):
    store = MessageStore(max_messages=3, clock=clock)
    for i in range(5):
        store.submit("x", "x@example.com", f"s{i}", "")

    assert store.count() == 5
    assert [m.subject for m in store.recent(10)] == ["s4", "s3", "s2"]


def test_zero_cap_keeps_everything(clock):
    store = MessageStore(max_messages=0, clock=clock)
    for i in range(1500):
        store.submit("x", "x@example.com", f"s{i}", "")

    assert len(store.recent(2000)) == 1500
