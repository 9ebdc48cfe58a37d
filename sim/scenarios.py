from typing import Dict, Tuple

Marker = Tuple[float, float]


def harbour() -> Dict[str, Marker]:
    return {
        "PIER": (-2000.0, 0.0),
        "LIGHT": (3500.0, 1200.0),
    }

def crossing() -> Dict[str, Marker]:
    return {
        "NORTH": (0.0, 4000.0),
        "SOUTH": (0.0, -4000.0),
        "EAST": (4000.0, 0.0),
        "WEST": (-4000.0, 0.0),
    }

def empty() -> Dict[str, Marker]:
    return {}

SCENARIOS = {
    "1": harbour,
    "2": crossing,
    "3": empty,
}
