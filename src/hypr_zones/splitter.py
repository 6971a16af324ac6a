"""Splitter dragging: connected walls of zones and absolute-from-start resizing"""

from typing import List, Set, Dict, Tuple
from dataclasses import dataclass, field
from enum import Enum

from .zone import Zone, SplitterSegment, Orientation, find_zone


# Tolerance for "this edge lies on the dragged line"
LINE_EPSILON = 1e-2

# Smallest size a zone may be dragged to, in pixels
MIN_ZONE_PX = 200


class Side(Enum):
    """Which side of a line a zone sits on (LEFT also means top)"""
    LEFT = "left"
    RIGHT = "right"


def _edge_on_line(zone: Zone, line_position: float,
                  orientation: Orientation, side: Side) -> bool:
    if orientation is Orientation.VERTICAL:
        edge = zone.x2 if side is Side.LEFT else zone.x
    else:
        edge = zone.y2 if side is Side.LEFT else zone.y
    return abs(edge - line_position) < LINE_EPSILON


def _touches_along_line(zone: Zone, other: Zone, orientation: Orientation) -> bool:
    if orientation is Orientation.VERTICAL:
        return (abs(zone.y2 - other.y) < LINE_EPSILON or
                abs(other.y2 - zone.y) < LINE_EPSILON)
    return (abs(zone.x2 - other.x) < LINE_EPSILON or
            abs(other.x2 - zone.x) < LINE_EPSILON)


def find_zones_along_line(zones: List[Zone], start_index: int, line_position: float,
                          orientation: Orientation, side: Side) -> Set[int]:
    """
    Collect the wall of zones that has to move together with a splitter.

    Starting from one zone known to touch the line, keep adding zones whose
    edge on ``side`` lies on the line and that are flush against a zone
    already collected, until a full pass adds nothing.

    Args:
        zones: Zones of the layout
        start_index: Index of the zone the splitter belongs to
        line_position: Coordinate of the line (x for vertical, y for horizontal)
        orientation: Orientation of the line
        side: Side of the line the wall is on

    Returns:
        Set of zone indices, always containing ``start_index``
    """
    result = {start_index}
    changed = True

    while changed:
        changed = False
        for zone in zones:
            if zone.index in result:
                continue
            if not _edge_on_line(zone, line_position, orientation, side):
                continue

            for connected_index in result:
                connected = find_zone(zones, connected_index)
                if connected is not None and _touches_along_line(zone, connected, orientation):
                    result.add(zone.index)
                    changed = True
                    break

    return result


@dataclass
class DragSession:
    """Everything captured when a splitter drag starts.

    The zone sets, original sizes and axis length are frozen for the whole
    drag so every motion event is computed from the same starting state.
    """

    segment: SplitterSegment
    left_zones: Tuple[int, ...]
    right_zones: Tuple[int, ...]
    original_sizes: Dict[int, float] = field(default_factory=dict)
    start_pointer: float = 0.0
    start_position: float = 0.0
    usable_size: float = 0.0
    applied_delta: float = 0.0

    @property
    def orientation(self) -> Orientation:
        return self.segment.orientation

    @property
    def min_size(self) -> float:
        """MIN_ZONE_PX as a fraction of the axis length"""
        if self.usable_size <= 0:
            return 0.0
        return MIN_ZONE_PX / self.usable_size

    def delta_limits(self) -> Tuple[float, float]:
        """Allowed range of the splitter offset so no zone drops below min_size"""
        min_delta = float("-inf")
        max_delta = float("inf")
        for index in self.left_zones:
            min_delta = max(min_delta, self.min_size - self.original_sizes[index])
        for index in self.right_zones:
            max_delta = min(max_delta, self.original_sizes[index] - self.min_size)
        return min_delta, max_delta


def begin_drag(zones: List[Zone], segment: SplitterSegment,
               pointer: float, usable_size: float):
    """
    Capture drag state for a splitter.

    Args:
        zones: Zones of the layout
        segment: The splitter being pressed
        pointer: Pointer coordinate on the drag axis
        usable_size: Pixel length of the drag axis

    Returns:
        DragSession, or None if the segment no longer matches the zones
    """
    reference = find_zone(zones, segment.left_zones[0])
    if reference is None:
        return None

    orientation = segment.orientation
    line = reference.x2 if orientation is Orientation.VERTICAL else reference.y2

    left: List[int] = []
    right: List[int] = []
    for index in segment.left_zones:
        for found in sorted(find_zones_along_line(zones, index, line, orientation, Side.LEFT)):
            if found not in left:
                left.append(found)
    for index in segment.right_zones:
        for found in sorted(find_zones_along_line(zones, index, line, orientation, Side.RIGHT)):
            if found not in right:
                right.append(found)

    original_sizes = {}
    for index in left + right:
        zone = find_zone(zones, index)
        if zone is None:
            return None
        original_sizes[index] = zone.size_along(orientation)

    return DragSession(
        segment=segment,
        left_zones=tuple(left),
        right_zones=tuple(right),
        original_sizes=original_sizes,
        start_pointer=pointer,
        start_position=line,
        usable_size=usable_size,
    )


def apply_drag_delta(zones: List[Zone], session: DragSession, total_delta: float) -> float:
    """
    Move the dragged line ``total_delta`` away from where it started.

    Sizes are recomputed from the values captured at drag start, never
    accumulated. When the zones are already too small for any movement the
    layout is left untouched.

    Returns:
        The delta actually applied after clamping
    """
    min_delta, max_delta = session.delta_limits()
    if min_delta > max_delta:
        return 0.0

    delta = max(min_delta, min(max_delta, total_delta))
    vertical = session.orientation is Orientation.VERTICAL

    for index in session.left_zones:
        zone = find_zone(zones, index)
        size = session.original_sizes[index] + delta
        if vertical:
            zone.width = size
        else:
            zone.height = size

    for index in session.right_zones:
        zone = find_zone(zones, index)
        size = session.original_sizes[index] - delta
        if vertical:
            zone.x = session.start_position + delta
            zone.width = size
        else:
            zone.y = session.start_position + delta
            zone.height = size

    session.applied_delta = delta
    return delta


def drag_to(zones: List[Zone], session: DragSession, pointer: float, origin: float) -> float:
    """
    Follow the pointer during a drag.

    Args:
        zones: Zones of the layout
        session: Active drag
        pointer: Pointer coordinate on the drag axis
        origin: Pixel coordinate where the usable area starts on that axis

    Returns:
        The delta applied
    """
    if session.usable_size <= 0:
        return 0.0
    mouse_percent = (pointer - origin) / session.usable_size
    return apply_drag_delta(zones, session, mouse_percent - session.start_position)
