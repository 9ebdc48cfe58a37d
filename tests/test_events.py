import pytest

from evtarget.events import ListenerKey, listen, listen_once, unlisten_by_key
from evtarget.target import EventTarget


def make_counter(result=None):
    calls = []

    def listener(*args):
        calls.append(args)
        return result

    return listener, calls


def test_listen_calls_add_listener(monkeypatch):
    target = EventTarget()
    added = []
    original = target.add_listener

    def spy(event_type, entry):
        added.append(event_type)
        return original(event_type, entry)

    monkeypatch.setattr(target, "add_listener", spy)
    listen(target, "foo", lambda evt: None)
    assert added == ["foo"]


def test_listen_returns_key():
    target = EventTarget()
    key = listen(target, "foo", lambda evt: None)
    assert isinstance(key, ListenerKey)
    assert key.target is target
    assert key.types == ("foo",)


def test_listen_does_not_add_same_listener_twice():
    target = EventTarget()
    listener, calls = make_counter()
    key1 = listen(target, "foo", listener)
    key2 = listen(target, "foo", listener)

    assert len(target.get_listeners("foo")) == 1
    assert key1.listener is key2.listener

    target.dispatch_event("foo")
    assert len(calls) == 1


def test_listeners_same_only_when_all_args_equal():
    target = EventTarget()
    listener, calls = make_counter()
    key1 = listen(target, "foo", listener, {})
    key2 = listen(target, "foo", listener, {})
    listen(target, "foo", listener, None)

    assert key1.listener is not key2.listener
    assert target.get_listeners("foo")[:2] == [key1.listener, key2.listener]
    assert len(target.get_listeners("foo")) == 3

    target.dispatch_event("foo")
    assert len(calls) == 3


def test_bound_methods_of_same_instance_are_duplicates():
    class Handler:
        def __init__(self):
            self.count = 0

        def on_foo(self, evt):
            self.count += 1

    target = EventTarget()
    handler = Handler()
    listen(target, "foo", handler.on_foo)
    listen(target, "foo", handler.on_foo)
    target.dispatch_event("foo")
    assert handler.count == 1


def test_listen_stops_propagation_when_false_returned():
    target = EventTarget()
    listener1, calls1 = make_counter(result=False)
    listener2, calls2 = make_counter()
    listen(target, "bar", listener1)
    listen(target, "bar", listener2)

    assert target.dispatch_event("bar") is False
    assert len(calls1) == 1
    assert len(calls2) == 0
    # stopping does not unregister anything
    assert len(target.get_listeners("bar")) == 2


def test_receiver_is_passed_first():
    target = EventTarget()
    listener, calls = make_counter()
    that = {}
    listen(target, "bar", listener, that)
    target.dispatch_event("bar")
    assert calls[0][0] is that
    assert calls[0][1].type == "bar"


def test_listen_once_creates_one_off_listener():
    target = EventTarget()
    listener, calls = make_counter()
    listen_once(target, "foo", listener)
    target.dispatch_event("foo")
    assert len(calls) == 1
    target.dispatch_event("foo")
    assert len(calls) == 1
    assert target.get_listeners("foo") is None


def test_listen_once_adds_same_listener_twice():
    target = EventTarget()
    listener, calls = make_counter()
    listen_once(target, "foo", listener)
    listen_once(target, "foo", listener)
    target.dispatch_event("foo")
    target.dispatch_event("foo")
    target.dispatch_event("foo")
    assert len(calls) == 2


def test_listen_once_not_deduplicated_against_listen():
    target = EventTarget()
    listener, calls = make_counter()
    listen(target, "foo", listener)
    listen_once(target, "foo", listener)
    target.dispatch_event("foo")
    target.dispatch_event("foo")
    assert len(calls) == 3


def test_listen_once_called_with_receiver():
    target = EventTarget()
    listener, calls = make_counter()
    that = {}
    listen_once(target, "bar", listener, that)
    target.dispatch_event("bar")
    assert calls[0][0] is that


def test_listen_once_stops_propagation_when_false_returned():
    target = EventTarget()
    listener1, calls1 = make_counter(result=False)
    listener2, calls2 = make_counter()
    listen_once(target, "bar", listener1)
    listen_once(target, "bar", listener2)
    target.dispatch_event("bar")
    assert len(calls1) == 1
    assert len(calls2) == 0
    # the stopping once-listener is gone, the other one is still waiting
    remaining = target.get_listeners("bar")
    assert len(remaining) == 1
    assert remaining[0].callback is listener2


def test_unlisten_by_key_unregisters():
    target = EventTarget()
    key = listen(target, "foo", lambda evt: None)
    unlisten_by_key(key)
    assert target.get_listeners("foo") is None
    assert not target.has_listener("foo")


def test_unlisten_by_key_works_with_multiple_types():
    target = EventTarget()
    key = listen(target, ["foo", "bar"], lambda evt: None)
    assert key.types == ("foo", "bar")
    unlisten_by_key(key)
    assert target.get_listeners("foo") is None
    assert target.get_listeners("bar") is None


def test_unlisten_by_key_is_idempotent():
    target = EventTarget()
    other, other_calls = make_counter()
    listen(target, "foo", other)
    key = listen(target, "foo", lambda evt: None)

    unlisten_by_key(key)
    unlisten_by_key(key)
    unlisten_by_key(None)

    assert len(target.get_listeners("foo")) == 1
    target.dispatch_event("foo")
    assert len(other_calls) == 1


def test_consumed_key_does_not_remove_fresh_registration():
    target = EventTarget()
    listener, calls = make_counter()
    key1 = listen(target, "foo", listener)
    unlisten_by_key(key1)
    listen(target, "foo", listener)
    unlisten_by_key(key1)
    target.dispatch_event("foo")
    assert len(calls) == 1


def test_unlisten_once_key_before_dispatch():
    target = EventTarget()
    listener, calls = make_counter()
    key = listen_once(target, "foo", listener)
    unlisten_by_key(key)
    target.dispatch_event("foo")
    assert calls == []


def test_key_does_not_keep_target_alive():
    import gc

    target = EventTarget()
    key = listen(target, "foo", lambda evt: None)
    del target
    gc.collect()
    assert key.target is None
    unlisten_by_key(key)  # no-op


def test_non_callable_listener_rejected():
    target = EventTarget()
    with pytest.raises(TypeError):
        listen(target, "foo", "not callable")


def test_source_without_weakref_support_rejected_before_registering():
    class SlotSource:
        __slots__ = ("inner",)

        def __init__(self):
            self.inner = EventTarget()

        def add_listener(self, event_type, entry):
            return self.inner.add_listener(event_type, entry)

        def remove_listener(self, event_type, entry):
            return self.inner.remove_listener(event_type, entry)

        def dispatch_event(self, event):
            return self.inner.dispatch_event(event)

    source = SlotSource()
    with pytest.raises(TypeError, match="__weakref__"):
        listen(source, "foo", lambda evt: None)
    assert not source.inner.has_listener()


def test_slotted_source_with_weakref_slot_accepted():
    class SlotSource:
        __slots__ = ("inner", "__weakref__")

        def __init__(self):
            self.inner = EventTarget()

        def add_listener(self, event_type, entry):
            return self.inner.add_listener(event_type, entry)

        def remove_listener(self, event_type, entry):
            return self.inner.remove_listener(event_type, entry)

        def dispatch_event(self, event):
            return self.inner.dispatch_event(event)

    source = SlotSource()
    key = listen(source, "foo", lambda evt: None)
    assert key.target is source
    unlisten_by_key(key)
    assert not source.inner.has_listener()
