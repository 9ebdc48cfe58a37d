# Subscribe / unsubscribe-by-key API layered over any event source.
from __future__ import annotations
import logging
import weakref
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Protocol, Tuple, Union

from .models import EventType, type_name
from .target import ListenerEntry

logger = logging.getLogger(__name__)

TypeOrTypes = Union[str, EventType, Iterable[Union[str, EventType]]]


class Listenable(Protocol):
    """
    What an object must expose to be used as an event source.

    Keys refer to the source through a weak reference, so it must also be
    weak-referenceable (a class using __slots__ needs a `__weakref__` slot).
    """

    def add_listener(self, event_type, entry: ListenerEntry) -> ListenerEntry: ...

    def remove_listener(self, event_type, entry: ListenerEntry) -> bool: ...

    def dispatch_event(self, event) -> bool: ...


@dataclass(frozen=True)
class ListenerKey:
    """
    Handle returned by listen()/listen_once(), used only to cancel.

    Holds a weak reference to the target and the (type, entry) pairs
    registered by one call.
    """
    _target_ref: Callable[[], Optional[Any]]
    bindings: Tuple[Tuple[str, ListenerEntry], ...]

    @property
    def target(self) -> Optional[Any]:
        return self._target_ref()

    @property
    def types(self) -> Tuple[str, ...]:
        return tuple(t for t, _ in self.bindings)

    @property
    def listener(self) -> Optional[ListenerEntry]:
        return self.bindings[0][1] if self.bindings else None

    @property
    def listeners(self) -> List[ListenerEntry]:
        return [entry for _, entry in self.bindings]


def normalize_types(type_or_types: TypeOrTypes) -> List[str]:
    """One type or an iterable of types, as a list of registry keys."""
    if isinstance(type_or_types, str):
        return [type_name(type_or_types)]
    return [type_name(t) for t in type_or_types]


def _weak_target(target: Listenable) -> Callable[[], Optional[Any]]:
    try:
        return weakref.ref(target)
    except TypeError:
        raise TypeError(
            f"Event source {type(target).__name__} must support weak references; "
            "add '__weakref__' to its __slots__"
        ) from None


def _subscribe(target: Listenable, type_or_types: TypeOrTypes, callback, receiver, once: bool) -> ListenerKey:
    target_ref = _weak_target(target)
    bindings = []
    for event_type in normalize_types(type_or_types):
        entry = target.add_listener(event_type, ListenerEntry(callback, receiver, once))
        bindings.append((event_type, entry))
    logger.debug("Subscribed %r to %s (once=%s)", callback, [t for t, _ in bindings], once)
    return ListenerKey(target_ref, tuple(bindings))


def listen(target: Listenable, type_or_types: TypeOrTypes, callback: Callable[..., Any],
           receiver: Any = None) -> ListenerKey:
    """
    Subscribe `callback` to one or more event types on `target`.

    With a receiver the callback is called as callback(receiver, event),
    otherwise as callback(event). Listening again with the same callback
    and the same receiver object reuses the existing registration.
    """
    return _subscribe(target, type_or_types, callback, receiver, once=False)


def listen_once(target: Listenable, type_or_types: TypeOrTypes, callback: Callable[..., Any],
                receiver: Any = None) -> ListenerKey:
    """Like listen(), but each registration removes itself after its first call."""
    return _subscribe(target, type_or_types, callback, receiver, once=True)


def unlisten_by_key(key: Optional[ListenerKey]) -> None:
    """Cancel every registration recorded in `key`. Safe to repeat."""
    if key is None:
        return
    target = key.target
    if target is None:
        return
    for event_type, entry in key.bindings:
        target.remove_listener(event_type, entry)
    logger.debug("Unlistened key for %s", list(key.types))
