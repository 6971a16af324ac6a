"""Zone data structures and splitter derivation for HyprZones"""

from typing import List, Dict, Tuple
from dataclasses import dataclass, asdict, replace
from enum import Enum


# Two edges closer than this are considered the same line
SEGMENT_EPSILON = 1e-3


class Orientation(Enum):
    """Direction of a shared boundary (or of the divider created by a split)"""
    VERTICAL = "vertical"      # zones side by side
    HORIZONTAL = "horizontal"  # zones stacked


@dataclass
class Zone:
    """A named rectangle in normalized (0.0-1.0) monitor coordinates"""

    index: int
    name: str
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        """Validate zone dimensions"""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Zone dimensions must be positive: width={self.width}, height={self.height}")

    @property
    def x2(self) -> float:
        """Right edge of zone"""
        return self.x + self.width

    @property
    def y2(self) -> float:
        """Bottom edge of zone"""
        return self.y + self.height

    def size_along(self, orientation: Orientation) -> float:
        """Width for vertical boundaries, height for horizontal ones"""
        return self.width if orientation is Orientation.VERTICAL else self.height

    def copy(self) -> 'Zone':
        return replace(self)

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Zone':
        return cls(**data)

    def __repr__(self) -> str:
        return (f"Zone #{self.index} '{self.name}'"
                f"({self.x:.3f}, {self.y:.3f}, {self.width:.3f}, {self.height:.3f})")


@dataclass(frozen=True)
class SplitterSegment:
    """Shared boundary between exactly two adjacent zones.

    ``position`` is the x coordinate for vertical segments and the y
    coordinate for horizontal ones; ``start``/``end`` bound the overlap on
    the perpendicular axis. ``left_zones`` holds the zone on the left (or
    top) side, ``right_zones`` the one on the right (or bottom) side.
    """

    orientation: Orientation
    position: float
    start: float
    end: float
    left_zones: Tuple[int, ...]
    right_zones: Tuple[int, ...]

    @property
    def top_zones(self) -> Tuple[int, ...]:
        return self.left_zones

    @property
    def bottom_zones(self) -> Tuple[int, ...]:
        return self.right_zones

    @property
    def length(self) -> float:
        return self.end - self.start

    @property
    def key(self) -> Tuple[Orientation, Tuple[int, ...], Tuple[int, ...]]:
        """Identity of the boundary that survives moving it"""
        return self.orientation, self.left_zones, self.right_zones


def _vertical_segment(left: Zone, right: Zone):
    if abs(left.x2 - right.x) >= SEGMENT_EPSILON:
        return None
    start = max(left.y, right.y)
    end = min(left.y2, right.y2)
    if end - start <= SEGMENT_EPSILON:
        return None
    return SplitterSegment(Orientation.VERTICAL, left.x2, start, end,
                           (left.index,), (right.index,))


def _horizontal_segment(top: Zone, bottom: Zone):
    if abs(top.y2 - bottom.y) >= SEGMENT_EPSILON:
        return None
    start = max(top.x, bottom.x)
    end = min(top.x2, bottom.x2)
    if end - start <= SEGMENT_EPSILON:
        return None
    return SplitterSegment(Orientation.HORIZONTAL, top.y2, start, end,
                           (top.index,), (bottom.index,))


def get_splitter_segments(zones: List[Zone]) -> List[SplitterSegment]:
    """
    Find the bounded splitter segments between adjacent zones.

    Every pair of zones sharing an edge gets its own segment, limited to the
    span where the two zones actually overlap. Collinear segments are never
    merged, so each segment controls exactly one boundary.

    Args:
        zones: Zones of the layout

    Returns:
        List of segments, in pair order
    """
    segments = []

    for i, a in enumerate(zones):
        for b in zones[i + 1:]:
            for segment in (_vertical_segment(a, b), _vertical_segment(b, a),
                            _horizontal_segment(a, b), _horizontal_segment(b, a)):
                if segment is not None:
                    segments.append(segment)

    return segments


def find_zone(zones: List[Zone], index: int):
    """Look up a zone by its identity index"""
    for zone in zones:
        if zone.index == index:
            return zone
    return None


def next_zone_index(zones: List[Zone]) -> int:
    return max((z.index for z in zones), default=-1) + 1


TEMPLATE_NAMES = ("columns", "rows", "grid", "priority-grid")


def template_zones(template: str, columns: int = 2, rows: int = 2) -> List[Zone]:
    """
    Generate the zones of one of the plugin's layout templates

    Args:
        template: 'columns', 'rows', 'grid' or 'priority-grid'
        columns: Number of columns (columns and grid)
        rows: Number of rows (rows and grid)

    Returns:
        List of zones tiling the unit square
    """
    if template not in TEMPLATE_NAMES:
        raise ValueError(f"Unknown template: {template}")
    if columns < 1 or rows < 1:
        raise ValueError(f"Template needs at least one column and row: {columns}x{rows}")

    if template == "columns":
        width = 1.0 / columns
        return [Zone(c, f"Column {c + 1}", c * width, 0.0, width, 1.0)
                for c in range(columns)]

    if template == "rows":
        height = 1.0 / rows
        return [Zone(r, f"Row {r + 1}", 0.0, r * height, 1.0, height)
                for r in range(rows)]

    if template == "grid":
        width = 1.0 / columns
        height = 1.0 / rows
        zones = []
        for r in range(rows):
            for c in range(columns):
                zones.append(Zone(r * columns + c, f"Cell {r + 1}x{c + 1}",
                                  c * width, r * height, width, height))
        return zones

    # Main zone plus a two-row side column
    return [
        Zone(0, "Main", 0.0, 0.0, 0.6, 1.0),
        Zone(1, "Top Right", 0.6, 0.0, 0.4, 0.5),
        Zone(2, "Bottom Right", 0.6, 0.5, 0.4, 0.5),
    ]
