"""Structural zone edits: split, merge and reset"""

from typing import List, Optional

from .zone import Zone, Orientation, next_zone_index


# Smallest extent (pixels) a zone must have along an axis to be split on it
MIN_SPLIT_PX = 300

MERGE_EPSILON = 1e-3


def can_split(zone: Zone, orientation: Orientation, axis_length: float) -> bool:
    """Check that the zone is at least MIN_SPLIT_PX wide (or tall) on the split axis"""
    return zone.size_along(orientation) * axis_length >= MIN_SPLIT_PX


def split_zone(zones: List[Zone], zone: Zone, orientation: Orientation,
               axis_length: float) -> Optional[Zone]:
    """
    Bisect a zone.

    ``Orientation.VERTICAL`` puts a vertical divider in the middle (left and
    right halves), ``Orientation.HORIZONTAL`` a horizontal one. The original
    zone keeps the first half; the second half is appended as a new zone.

    Args:
        zones: Zones of the layout, mutated in place
        zone: Zone to split (must be in ``zones``)
        orientation: Orientation of the new divider
        axis_length: Pixel length of the split axis

    Returns:
        The new zone, or None if the zone is too small to split
    """
    if zone not in zones or not can_split(zone, orientation, axis_length):
        return None

    new_index = next_zone_index(zones)

    if orientation is Orientation.VERTICAL:
        half = zone.width / 2
        zone.width = half
        new_zone = Zone(new_index, f"Zone {new_index + 1}",
                        zone.x + half, zone.y, half, zone.height)
    else:
        half = zone.height / 2
        zone.height = half
        new_zone = Zone(new_index, f"Zone {new_index + 1}",
                        zone.x, zone.y + half, zone.width, half)

    zones.append(new_zone)
    return new_zone


def _close(a: float, b: float) -> bool:
    return abs(a - b) < MERGE_EPSILON


def shares_full_edge(zone: Zone, other: Zone) -> bool:
    """True when the two zones form a rectangle together"""
    if _close(zone.y, other.y) and _close(zone.height, other.height):
        if _close(zone.x2, other.x) or _close(other.x2, zone.x):
            return True
    if _close(zone.x, other.x) and _close(zone.width, other.width):
        if _close(zone.y2, other.y) or _close(other.y2, zone.y):
            return True
    return False


def find_mergeable_neighbor(zones: List[Zone], zone: Zone) -> Optional[Zone]:
    """Find the first zone sharing a complete edge with ``zone``"""
    for other in zones:
        if other.index == zone.index:
            continue
        if shares_full_edge(zone, other):
            return other
    return None


def merge_zones(zones: List[Zone], zone: Zone, neighbor: Zone) -> bool:
    """
    Grow ``zone`` to the bounding box of both zones and drop ``neighbor``.

    Pairs that only partially share an edge are refused, since their
    bounding box would cover area owned by other zones.

    Returns:
        True if the zones were merged
    """
    if zone is neighbor or neighbor not in zones or not shares_full_edge(zone, neighbor):
        return False

    min_x = min(zone.x, neighbor.x)
    min_y = min(zone.y, neighbor.y)
    max_x = max(zone.x2, neighbor.x2)
    max_y = max(zone.y2, neighbor.y2)

    zone.x = min_x
    zone.y = min_y
    zone.width = max_x - min_x
    zone.height = max_y - min_y

    zones.remove(neighbor)
    return True


def reset_zones() -> List[Zone]:
    """A single zone covering the whole usable area"""
    return [Zone(0, "Zone 1", 0.0, 0.0, 1.0, 1.0)]
