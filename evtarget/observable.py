from __future__ import annotations
import logging
from typing import Any, Callable, Iterable, Optional, Union

from .events import ListenerKey, TypeOrTypes, listen, listen_once, normalize_types, unlisten_by_key
from .models import EventType
from .target import EventTarget, ListenerEntry

logger = logging.getLogger(__name__)


class Disposable:
    """Base for objects that release resources exactly once."""

    def __init__(self) -> None:
        self.disposed = False

    def dispose(self) -> None:
        if not self.disposed:
            self.disposed = True
            self.dispose_internal()

    def dispose_internal(self) -> None:
        pass


class Observable(EventTarget, Disposable):
    """
    EventTarget with on/once/un shortcuts and a revision counter.

    changed() bumps the revision and notifies 'change' listeners.
    """

    def __init__(self, target: Optional[Any] = None) -> None:
        EventTarget.__init__(self, target)
        Disposable.__init__(self)
        self._revision = 0

    def on(self, type_or_types: TypeOrTypes, callback: Callable[..., Any], receiver: Any = None) -> ListenerKey:
        return listen(self, type_or_types, callback, receiver)

    def once(self, type_or_types: TypeOrTypes, callback: Callable[..., Any], receiver: Any = None) -> ListenerKey:
        return listen_once(self, type_or_types, callback, receiver)

    def un(self, type_or_types: TypeOrTypes, callback: Callable[..., Any], receiver: Any = None) -> None:
        """Remove the listen() registration matching callback and receiver."""
        wanted = ListenerEntry(callback, receiver)
        for event_type in normalize_types(type_or_types):
            for entry in self.get_listeners(event_type) or []:
                if entry.same_as(wanted):
                    self.remove_listener(event_type, entry)
                    break

    def changed(self) -> None:
        self._revision += 1
        self.dispatch_event(EventType.CHANGE)

    def get_revision(self) -> int:
        return self._revision

    def dispose_internal(self) -> None:
        logger.debug("Disposing %r", self)
        self.clear()


def un_by_key(key: Union[ListenerKey, Iterable[ListenerKey], None]) -> None:
    """unlisten_by_key() for a single key or a list of keys."""
    if isinstance(key, ListenerKey) or key is None:
        unlisten_by_key(key)
        return
    for k in key:
        unlisten_by_key(k)
