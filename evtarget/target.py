# Listener registry and synchronous dispatch for a single event source.
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .models import BaseEvent, type_name

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ListenerEntry:
    """One registration of a callback for one event type."""
    callback: Callable[..., Any]
    receiver: Optional[Any] = None
    once: bool = False

    def same_as(self, other: ListenerEntry) -> bool:
        """
        True when `other` is a duplicate subscription of this entry.

        Callbacks compare with ==, so two bound-method objects of the same
        method on the same instance match. Receivers compare by reference.
        Once-entries never match anything: each listen_once call is its own
        registration.
        """
        if self.once or other.once:
            return False
        return self.callback == other.callback and self.receiver is other.receiver

    def invoke(self, event: Any) -> Any:
        """
        Call the listener. Without a receiver it gets only the event; the
        dispatching target (or its delegate) is reachable as `event.target`.
        """
        if self.receiver is None:
            return self.callback(event)
        return self.callback(self.receiver, event)


class EventTarget:
    """
    Holds, per event type, the ordered listener entries and dispatches
    events to them synchronously.

    An EventTarget can be composed into another object; pass that object
    as `target` and it is reported as `event.target` on dispatch.
    """

    def __init__(self, target: Optional[Any] = None) -> None:
        self._listeners: Dict[str, List[ListenerEntry]] = {}
        self._event_target = target

    def add_listener(self, event_type, entry: ListenerEntry) -> ListenerEntry:
        """Register `entry`, or return the already registered duplicate."""
        if not callable(entry.callback):
            raise TypeError(f"Listener for '{type_name(event_type)}' is not callable: {entry.callback!r}")

        key = type_name(event_type)
        entries = self._listeners.setdefault(key, [])
        for existing in entries:
            if existing.same_as(entry):
                logger.debug("Listener %r already registered for '%s'", existing.callback, key)
                return existing

        entries.append(entry)
        logger.debug("Added listener %r for '%s' (%d total)", entry.callback, key, len(entries))
        return entry

    def remove_listener(self, event_type, entry: ListenerEntry) -> bool:
        """Remove exactly `entry`. Returns False if it was not registered."""
        key = type_name(event_type)
        entries = self._listeners.get(key)
        if not entries:
            return False

        for i, existing in enumerate(entries):
            if existing is entry:
                del entries[i]
                break
        else:
            return False

        if not entries:
            del self._listeners[key]
        logger.debug("Removed listener %r for '%s'", entry.callback, key)
        return True

    def dispatch_event(self, event) -> bool:
        """
        Invoke the listeners of the event's type in registration order.

        `event` is a type string (wrapped in a BaseEvent) or an event object
        with a `type` attribute. An unset `target` is filled in when the
        event accepts the assignment; read-only events go through as they
        are. Iteration runs over a copy of the listener list taken here, so
        listeners added or removed by a callback only take effect from the
        next dispatch. Once-entries are the exception:
        each is unregistered right before its call and skipped if something
        else already unregistered it.

        Returns False when a listener returned False or stopped propagation.
        """
        if isinstance(event, str):
            event = BaseEvent(event)
        if getattr(event, "target", None) is None:
            try:
                event.target = self._event_target if self._event_target is not None else self
            except AttributeError:
                # frozen dataclasses, namedtuples, __slots__ without `target`
                logger.debug("Event %r is read-only, dispatching without a target", event)

        key = type_name(event.type)
        entries = self._listeners.get(key)
        if not entries:
            logger.debug("Dispatching '%s' with no listeners", key)
            return True

        snapshot = list(entries)
        logger.debug("Dispatching '%s' to %d listeners", key, len(snapshot))
        for entry in snapshot:
            if entry.once and not self.remove_listener(key, entry):
                continue
            result = entry.invoke(event)
            if result is False or getattr(event, "propagation_stopped", False):
                logger.debug("Propagation of '%s' stopped by %r", key, entry.callback)
                return False
        return True

    def get_listeners(self, event_type) -> Optional[List[ListenerEntry]]:
        """Registered entries for a type, or None when there are none."""
        entries = self._listeners.get(type_name(event_type))
        return list(entries) if entries else None

    def has_listener(self, event_type=None) -> bool:
        if event_type is None:
            return bool(self._listeners)
        return type_name(event_type) in self._listeners

    def clear(self) -> None:
        """Drop every listener of every type."""
        self._listeners.clear()
