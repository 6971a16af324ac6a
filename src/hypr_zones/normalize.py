"""Boundary snapping and rounding applied before layouts are written.

Drags, splits and merges are independent floating point edits, so two zones
meant to share an edge slowly drift apart. Saved as-is, that shows up as a
hairline gap or a one pixel overlap in the plugin. Normalizing pulls every
trailing edge onto the nearest leading edge of another zone and rounds all
values to the precision the config file can hold.
"""

from typing import List, Optional

from .zone import Zone


# 0.1% - one decimal place in the percentage values of the config file
PRECISION_DIGITS = 3

# Trailing edges closer than this to another zone's leading edge snap onto it
SNAP_THRESHOLD = 0.005

# Coordinates closer than this to the border snap onto it
BORDER_EPSILON = 0.005


def _round(value: float) -> float:
    # + 0.0 turns -0.0 into 0.0
    return round(value, PRECISION_DIGITS) + 0.0


def _round_zone(zone: Zone) -> None:
    zone.x = _round(zone.x)
    zone.y = _round(zone.y)
    zone.width = _round(zone.width)
    zone.height = _round(zone.height)


def _closest_leading_edge(edge: float, candidates: List[float]) -> Optional[float]:
    best = None
    best_distance = SNAP_THRESHOLD
    for candidate in candidates:
        distance = abs(candidate - edge)
        if distance < best_distance:
            best = candidate
            best_distance = distance
    return best


def _snap_to_neighbors(zones: List[Zone]) -> None:
    for zone in zones:
        others = [z for z in zones if z is not zone]

        right = zone.x2
        target = _closest_leading_edge(right, [z.x for z in others])
        if target is not None and target != right and target > zone.x:
            zone.width = target - zone.x

        bottom = zone.y2
        target = _closest_leading_edge(bottom, [z.y for z in others])
        if target is not None and target != bottom and target > zone.y:
            zone.height = target - zone.y


def _snap_to_border(zone: Zone) -> None:
    if 0 < abs(zone.x) < BORDER_EPSILON:
        zone.width += zone.x
        zone.x = 0.0
    if 0 < abs(zone.y) < BORDER_EPSILON:
        zone.height += zone.y
        zone.y = 0.0
    if 0 < abs(1 - zone.x2) < BORDER_EPSILON:
        zone.width = 1 - zone.x
    if 0 < abs(1 - zone.y2) < BORDER_EPSILON:
        zone.height = 1 - zone.y


def normalize_zones(zones: List[Zone]) -> List[Zone]:
    """
    Return normalized copies of ``zones``.

    1. round every coordinate and size to 0.1%
    2. snap each trailing edge onto the closest other zone's leading edge
    3. snap edges near the border onto 0 or 1
    4. round again

    The input list is not modified. Applying this twice gives the same
    result as applying it once.
    """
    result = [zone.copy() for zone in zones]

    for zone in result:
        _round_zone(zone)

    _snap_to_neighbors(result)

    for zone in result:
        _snap_to_border(zone)
        _round_zone(zone)

    return result


def normalize_layout(layout):
    """Normalized clone of a layout"""
    normalized = layout.clone()
    normalized.zones = normalize_zones(layout.zones)
    return normalized


def normalize_layouts(layouts: list) -> list:
    return [normalize_layout(layout) for layout in layouts]
