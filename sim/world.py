from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Optional, Tuple
import logging

from evtarget.events import ListenerKey, listen, listen_once, unlisten_by_key
from evtarget.models import BaseEvent, EventType
from evtarget.observable import Observable, un_by_key
from evtarget.target import EventTarget, ListenerEntry
import config

logger = logging.getLogger(__name__)

Coordinate = Tuple[float, float]

# Radius (m, at zoom 0) within which a click hits an existing marker
HIT_RADIUS_M = 300.0


@dataclass
class PropertyChangeEvent(BaseEvent):
    key: str = ""
    old_value: Any = None


@dataclass
class PointerEvent(BaseEvent):
    coordinate: Coordinate = (0.0, 0.0)
    pixel: Optional[Tuple[int, int]] = None


class MapView(Observable):
    """
    Center / zoom state of the map. Every change fires 'change:<key>'
    followed by 'propertychange'.
    """

    def __init__(self, center: Coordinate = (0.0, 0.0), zoom: int = 0) -> None:
        super().__init__()
        self._values: Dict[str, Any] = {"center": center, "zoom": zoom}

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any, silent: bool = False) -> None:
        old = self._values.get(key)
        self._values[key] = value
        if silent or old == value:
            return
        self.dispatch_event(PropertyChangeEvent(f"change:{key}", key=key, old_value=old))
        self.dispatch_event(PropertyChangeEvent(EventType.PROPERTYCHANGE, key=key, old_value=old))

    def get_center(self) -> Coordinate:
        return self._values["center"]

    def set_center(self, center: Coordinate) -> None:
        self.set("center", (float(center[0]), float(center[1])))

    def get_zoom(self) -> int:
        return self._values["zoom"]

    def set_zoom(self, zoom: int) -> None:
        self.set("zoom", max(config.ZOOM_MIN, min(config.ZOOM_MAX, int(zoom))))

    def get_resolution(self) -> float:
        return config.resolution_for_zoom(self.get_zoom())

    def pan(self, dx_px: float, dy_px: float) -> None:
        """Move the center by a screen-space offset."""
        res = self.get_resolution()
        cx, cy = self.get_center()
        self.set_center((cx + dx_px / res, cy + dy_px / res))


class World:
    """
    Demo map: a view, named markers, and a rolling log of the events that
    went through the listeners.

    The World is itself an event source by composing an EventTarget; its
    own 'click' listeners are registered in this order:
      1. log the click
      2. (optional) stopper returning False
      3. add or select a marker
    """

    def __init__(self, markers: Dict[str, Coordinate], log_lines: int = config.HUD_LOG_LINES) -> None:
        self._target = EventTarget(self)
        self.view = MapView()
        self.markers: Dict[str, Coordinate] = dict(markers)
        self.selected: Optional[str] = None
        self.log: Deque[str] = deque(maxlen=log_lines)

        self.time_s: float = 0.0
        self.paused: bool = False
        self.stopper_enabled: bool = False
        self.once_armed: Optional[ListenerKey] = None

        self._view_keys: List[ListenerKey] = []
        self._click_keys: List[ListenerKey] = []
        self._wire_view()
        self._wire_clicks()

    # --- EventTarget capability set (delegated) --------------------------

    def add_listener(self, event_type, entry: ListenerEntry) -> ListenerEntry:
        return self._target.add_listener(event_type, entry)

    def remove_listener(self, event_type, entry: ListenerEntry) -> bool:
        return self._target.remove_listener(event_type, entry)

    def dispatch_event(self, event) -> bool:
        return self._target.dispatch_event(event)

    def get_listeners(self, event_type) -> Optional[List[ListenerEntry]]:
        return self._target.get_listeners(event_type)

    # --- wiring -----------------------------------------------------------

    def _wire_view(self) -> None:
        self._view_keys = [
            self.view.on(["change:center", "change:zoom"], self._on_view_property),
        ]

    def _wire_clicks(self) -> None:
        un_by_key(self._click_keys)
        self._click_keys = [listen(self, EventType.CLICK, self._log_click)]
        if self.stopper_enabled:
            self._click_keys.append(listen(self, EventType.CLICK, self._stop_click))
        self._click_keys.append(listen(self, EventType.CLICK, self._place_marker))

    def _record(self, line: str) -> None:
        self.log.append(f"{self.time_s:6.1f}s {line}")
        logger.info(line)

    # --- listeners --------------------------------------------------------

    def _on_view_property(self, event: PropertyChangeEvent) -> None:
        self._record(f"{event.type}: {event.old_value} -> {self.view.get(event.key)}")

    def _log_click(self, event: PointerEvent) -> None:
        x, y = event.coordinate
        self._record(f"click at ({x:.0f}, {y:.0f})")

    def _stop_click(self, event: PointerEvent) -> bool:
        self._record("click stopped")
        return False

    def _place_marker(self, event: PointerEvent) -> None:
        hit = self.marker_at(event.coordinate)
        if hit is not None:
            self.selected = hit
            self._record(f"selected {hit}")
            return
        name = f"M{len(self.markers) + 1}"
        while name in self.markers:
            name += "'"
        self.markers[name] = event.coordinate
        self.selected = name
        self._record(f"placed {name}")

    def _fire_once(self, event: PointerEvent) -> None:
        self.once_armed = None
        self._record("one-shot listener fired")

    # --- controls ---------------------------------------------------------

    def marker_at(self, coordinate: Coordinate) -> Optional[str]:
        radius = HIT_RADIUS_M * config.resolution_for_zoom(0) / self.view.get_resolution()
        for name, (mx, my) in self.markers.items():
            if (mx - coordinate[0]) ** 2 + (my - coordinate[1]) ** 2 <= radius ** 2:
                return name
        return None

    def click(self, coordinate: Coordinate, pixel: Optional[Tuple[int, int]] = None) -> bool:
        return self.dispatch_event(PointerEvent(EventType.CLICK, coordinate=coordinate, pixel=pixel))

    def toggle_stopper(self) -> None:
        self.stopper_enabled = not self.stopper_enabled
        self._wire_clicks()
        self._record(f"stopper {'ON' if self.stopper_enabled else 'OFF'}")

    def toggle_once(self) -> None:
        """Arm a one-shot click listener, or disarm the pending one."""
        if self.once_armed is not None:
            unlisten_by_key(self.once_armed)
            self.once_armed = None
            self._record("one-shot disarmed")
            return
        self.once_armed = listen_once(self, EventType.CLICK, self._fire_once)
        self._record("one-shot armed")

    def listener_count(self, event_type) -> int:
        return len(self.get_listeners(event_type) or [])

    def step(self, dt: float) -> None:
        if not self.paused:
            self.time_s += dt

    def reset(self, markers: Dict[str, Coordinate]) -> None:
        self.markers = dict(markers)
        self.selected = None
        self.time_s = 0.0
        self.view.set_center((0.0, 0.0))
        self.view.set_zoom(0)

    def close(self) -> None:
        un_by_key(self._click_keys)
        un_by_key(self._view_keys)
        unlisten_by_key(self.once_armed)
        self._click_keys = []
        self._view_keys = []
        self.once_armed = None
        self.view.dispose()
