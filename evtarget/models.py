from dataclasses import dataclass, field
from typing import Any, Optional
from enum import Enum


class EventType(str, Enum):
    # Generic change notification (Observable.changed)
    CHANGE = "change"
    ERROR = "error"

    # Property changes on observable objects
    PROPERTYCHANGE = "propertychange"

    # Pointer / interaction
    CLICK = "click"
    POINTERMOVE = "pointermove"

    # Lifecycle
    LOAD = "load"
    DISPOSE = "dispose"


def type_name(event_type) -> str:
    """Normalise an EventType member or plain string to the registry key."""
    if isinstance(event_type, EventType):
        return event_type.value
    return event_type


@dataclass
class BaseEvent:
    """
    Structured event passed to listeners.

    `target` is filled in by EventTarget.dispatch_event when left unset.
    Calling stop_propagation() from a listener has the same effect as the
    listener returning False.
    """
    type: str
    target: Optional[Any] = None
    propagation_stopped: bool = field(default=False, init=False)
    default_prevented: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.type = type_name(self.type)

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True
