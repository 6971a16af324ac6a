"""Percentage/pixel projection tests"""

import pytest

from hypr_zones.geometry import (
    MonitorGeometry,
    PixelRect,
    zone_to_pixels,
    splitter_to_pixels,
    pixel_to_percent,
    clamp,
)
from hypr_zones.zone import Zone, Orientation, get_splitter_segments


class TestZoneToPixels:
    """Half-gap inset projection tests"""

    def test_full_zone_has_no_inset(self, monitor):
        rect = zone_to_pixels(Zone(0, "Z", 0, 0, 1, 1), monitor, 10, 40)
        assert rect == PixelRect(0, 0, 1920, 1080)

    def test_columns_separated_by_spacing_v(self, monitor, halves):
        left, right = (zone_to_pixels(z, monitor, 10, 40) for z in halves)

        assert left.x == 0
        assert left.width == pytest.approx(940)
        assert right.x == pytest.approx(980)
        assert right.width == pytest.approx(940)
        assert right.x - (left.x + left.width) == pytest.approx(40)
        # Rows untouched: both columns span the full height
        assert left.y == 0 and left.height == 1080

    def test_rows_separated_by_spacing_h(self, monitor):
        top = zone_to_pixels(Zone(0, "T", 0, 0, 1, 0.5), monitor, 10, 40)
        bottom = zone_to_pixels(Zone(1, "B", 0, 0.5, 1, 0.5), monitor, 10, 40)

        assert top.height == pytest.approx(535)
        assert bottom.y == pytest.approx(545)
        assert bottom.y - (top.y + top.height) == pytest.approx(10)
        assert top.x == 0 and top.width == 1920

    def test_monitor_origin_included(self):
        monitor = MonitorGeometry(x=22, y=97, width=1000, height=500)
        rect = zone_to_pixels(Zone(0, "Z", 0.5, 0, 0.5, 1), monitor, 0, 0)

        assert rect == PixelRect(522, 97, 500, 500)

    def test_tiny_zone_never_negative(self, monitor):
        rect = zone_to_pixels(Zone(0, "Z", 0.5, 0.5, 0.001, 0.001), monitor, 100, 100)
        assert rect.width == 0
        assert rect.height == 0


class TestSplitterToPixels:
    """Splitter hit-area tests"""

    def test_vertical_splitter_centred_on_line(self, monitor, halves):
        segment = get_splitter_segments(halves)[0]
        rect = splitter_to_pixels(segment, monitor, 10, 40, 12)

        assert rect.x == pytest.approx(954)
        assert rect.width == 12
        assert rect.y == 0
        assert rect.height == pytest.approx(1080)
        assert rect.segment is segment
        assert rect.contains_point(960, 500)
        assert not rect.contains_point(940, 500)

    def test_internal_end_inset(self, monitor, left_column_split):
        segments = get_splitter_segments(left_column_split)
        upper = next(s for s in segments
                     if s.orientation is Orientation.VERTICAL and s.start == 0.0)
        rect = splitter_to_pixels(upper, monitor, 10, 40, 12)

        # Ends at the internal row boundary, inset by half of spacing_h
        assert rect.y == 0
        assert rect.height == pytest.approx(535)

    def test_horizontal_splitter(self, monitor, left_column_split):
        segment = next(s for s in get_splitter_segments(left_column_split)
                       if s.orientation is Orientation.HORIZONTAL)
        rect = splitter_to_pixels(segment, monitor, 10, 40, 12)

        assert rect.y == pytest.approx(534)
        assert rect.height == 12
        assert rect.x == 0
        assert rect.width == pytest.approx(940)


class TestConversions:
    """Helper conversion tests"""

    def test_pixel_to_percent(self):
        assert pixel_to_percent(960, 1920) == 0.5
        assert pixel_to_percent(982, 1920, origin=22) == 0.5

    def test_pixel_to_percent_clamps(self):
        assert pixel_to_percent(-50, 1920) == 0.0
        assert pixel_to_percent(5000, 1920) == 1.0

    def test_pixel_to_percent_zero_size(self):
        assert pixel_to_percent(100, 0) == 0.0

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2

    def test_axis_helpers(self):
        monitor = MonitorGeometry(22, 97, 1876, 961)
        assert monitor.axis_length(Orientation.VERTICAL) == 1876
        assert monitor.axis_length(Orientation.HORIZONTAL) == 961
        assert monitor.axis_origin(Orientation.VERTICAL) == 22
        assert monitor.axis_origin(Orientation.HORIZONTAL) == 97
