"""Percentage <-> pixel projection for zones and splitters"""

from dataclasses import dataclass

from .zone import Zone, SplitterSegment, Orientation


# Edges this close to 0 or 1 are treated as the outer border of the usable area
EDGE_EPSILON = 1e-3


@dataclass
class MonitorGeometry:
    """Usable area of a monitor in pixels (after margins)"""
    x: float
    y: float
    width: float
    height: float

    def axis_length(self, orientation: Orientation) -> float:
        """Pixel length of the axis a splitter of this orientation moves along"""
        return self.width if orientation is Orientation.VERTICAL else self.height

    def axis_origin(self, orientation: Orientation) -> float:
        return self.x if orientation is Orientation.VERTICAL else self.y


@dataclass
class PixelRect:
    x: float
    y: float
    width: float
    height: float

    def contains_point(self, x: float, y: float) -> bool:
        return (self.x <= x < self.x + self.width and
                self.y <= y < self.y + self.height)


@dataclass
class PixelSplitter(PixelRect):
    segment: SplitterSegment = None


def _is_internal_start(value: float) -> bool:
    return value > EDGE_EPSILON


def _is_internal_end(value: float) -> bool:
    return value < 1 - EDGE_EPSILON


def zone_to_pixels(zone: Zone, monitor: MonitorGeometry,
                   spacing_h: float, spacing_v: float) -> PixelRect:
    """
    Project a zone onto the monitor's usable area.

    Each edge that is an internal boundary is inset by half the gap for its
    axis, so two neighbours end up exactly one gap apart while edges on the
    outer border stay flush. ``spacing_h`` is the gap between stacked rows
    (top/bottom insets) and ``spacing_v`` the gap between side-by-side
    columns (left/right insets).

    Args:
        zone: Zone in normalized coordinates
        monitor: Usable area in pixels
        spacing_h: Gap between vertically stacked zones
        spacing_v: Gap between horizontally adjacent zones

    Returns:
        Pixel rectangle including the monitor origin
    """
    left = zone.x * monitor.width
    right = zone.x2 * monitor.width
    top = zone.y * monitor.height
    bottom = zone.y2 * monitor.height

    if _is_internal_start(zone.x):
        left += spacing_v / 2
    if _is_internal_end(zone.x2):
        right -= spacing_v / 2
    if _is_internal_start(zone.y):
        top += spacing_h / 2
    if _is_internal_end(zone.y2):
        bottom -= spacing_h / 2

    return PixelRect(
        x=monitor.x + left,
        y=monitor.y + top,
        width=max(0.0, right - left),
        height=max(0.0, bottom - top),
    )


def splitter_to_pixels(segment: SplitterSegment, monitor: MonitorGeometry,
                       spacing_h: float, spacing_v: float,
                       thickness: float) -> PixelSplitter:
    """Hit area for a splitter: a bar of ``thickness`` pixels centred on the shared line"""
    if segment.orientation is Orientation.VERTICAL:
        center = monitor.x + segment.position * monitor.width
        start = segment.start * monitor.height
        end = segment.end * monitor.height
        if _is_internal_start(segment.start):
            start += spacing_h / 2
        if _is_internal_end(segment.end):
            end -= spacing_h / 2
        return PixelSplitter(
            x=center - thickness / 2,
            y=monitor.y + start,
            width=thickness,
            height=max(0.0, end - start),
            segment=segment,
        )

    center = monitor.y + segment.position * monitor.height
    start = segment.start * monitor.width
    end = segment.end * monitor.width
    if _is_internal_start(segment.start):
        start += spacing_v / 2
    if _is_internal_end(segment.end):
        end -= spacing_v / 2
    return PixelSplitter(
        x=monitor.x + start,
        y=center - thickness / 2,
        width=max(0.0, end - start),
        height=thickness,
        segment=segment,
    )


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def pixel_to_percent(pixel: float, total_size: float, origin: float = 0.0) -> float:
    """Convert a pixel coordinate to a fraction of ``total_size``, clamped to [0, 1]"""
    if total_size <= 0:
        return 0.0
    return clamp((pixel - origin) / total_size, 0.0, 1.0)
