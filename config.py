# Global knobs for the interactive demo
SCREEN_W, SCREEN_H = 1200, 800
PIXELS_PER_M = 0.05         # at zoom 0
DT = 1/30.0                 # frame step (s)

# View limits / steps
ZOOM_MIN = -4
ZOOM_MAX = 8
PAN_STEP_M = 500.0          # per arrow key press, at zoom 0

# HUD
HUD_LOG_LINES = 18
HUD_PANEL_FRACTION = 0.34

# Colors
BG_COLOR = (12, 12, 18)

# Logging level for run.py (the evtarget package only emits debug records)
LOG_LEVEL = "INFO"


def resolution_for_zoom(zoom: int) -> float:
    """Screen pixels per metre at a zoom level (each level doubles)."""
    zoom = max(ZOOM_MIN, min(ZOOM_MAX, zoom))
    return PIXELS_PER_M * (2.0 ** zoom)
