"""Split, merge and reset tests"""

import pytest

from hypr_zones.operations import (
    MIN_SPLIT_PX,
    can_split,
    split_zone,
    shares_full_edge,
    find_mergeable_neighbor,
    merge_zones,
    reset_zones,
)
from hypr_zones.splitter import begin_drag, apply_drag_delta
from hypr_zones.zone import Zone, Orientation, SplitterSegment, get_splitter_segments


class TestSplit:
    """Zone bisection tests"""

    def test_split_full_screen_vertically(self):
        zones = reset_zones()

        new_zone = split_zone(zones, zones[0], Orientation.VERTICAL, 1920)

        assert new_zone is not None
        assert len(zones) == 2
        left, right = zones
        assert (left.x, left.y, left.width, left.height) == (0.0, 0.0, 0.5, 1.0)
        assert (right.x, right.y, right.width, right.height) == (0.5, 0.0, 0.5, 1.0)
        assert get_splitter_segments(zones) == [
            SplitterSegment(Orientation.VERTICAL, 0.5, 0.0, 1.0, (0,), (1,))
        ]

    def test_new_zone_identity(self):
        zones = reset_zones()
        new_zone = split_zone(zones, zones[0], Orientation.VERTICAL, 1920)

        assert new_zone.index == 1
        assert new_zone.name == "Zone 2"

    def test_index_after_merge_gap(self):
        zones = [Zone(0, "A", 0, 0, 0.5, 1), Zone(2, "C", 0.5, 0, 0.5, 1)]
        new_zone = split_zone(zones, zones[1], Orientation.HORIZONTAL, 1080)

        assert new_zone.index == 3
        assert new_zone.name == "Zone 4"

    def test_split_horizontally(self):
        zones = reset_zones()
        split_zone(zones, zones[0], Orientation.HORIZONTAL, 1080)

        top, bottom = zones
        assert top.height == 0.5
        assert bottom.y == 0.5
        assert bottom.width == 1.0

    def test_too_small_to_split(self):
        zones = [Zone(0, "A", 0, 0, 0.1, 1), Zone(1, "B", 0.1, 0, 0.9, 1)]

        assert split_zone(zones, zones[0], Orientation.VERTICAL, 1920) is None
        assert len(zones) == 2
        assert zones[0].width == 0.1

    def test_split_guard_threshold(self):
        zone = Zone(0, "A", 0, 0, 0.5, 1)
        assert can_split(zone, Orientation.VERTICAL, MIN_SPLIT_PX * 2)
        assert not can_split(zone, Orientation.VERTICAL, MIN_SPLIT_PX * 2 - 1)

    def test_split_zone_not_in_list(self, halves):
        stranger = Zone(9, "X", 0, 0, 1, 1)
        assert split_zone(halves, stranger, Orientation.VERTICAL, 1920) is None


class TestMerge:
    """Zone merge tests"""

    def test_merge_halves(self, halves):
        left, right = halves

        assert merge_zones(halves, left, right)

        assert halves == [Zone(0, "Left", 0.0, 0.0, 1.0, 1.0)]

    def test_merge_keeps_first_zone_identity(self, halves):
        left, right = halves
        merge_zones(halves, right, left)

        assert len(halves) == 1
        assert halves[0].index == 1
        assert halves[0].x == 0.0
        assert halves[0].width == 1.0

    def test_partial_edge_refused(self, left_column_split):
        zone, neighbor = left_column_split[0], left_column_split[2]

        assert not shares_full_edge(zone, neighbor)
        assert not merge_zones(left_column_split, zone, neighbor)
        assert len(left_column_split) == 3
        assert zone.height == 0.5

    def test_find_neighbor(self, left_column_split):
        assert find_mergeable_neighbor(left_column_split, left_column_split[0]).index == 1
        assert find_mergeable_neighbor(left_column_split, left_column_split[2]) is None

    def test_full_edge_with_tolerance(self):
        a = Zone(0, "A", 0.0, 0.0, 0.5, 1.0)
        b = Zone(1, "B", 0.5004, 0.0, 0.4996, 1.0)
        assert shares_full_edge(a, b)

    def test_merge_with_self_refused(self, halves):
        assert not merge_zones(halves, halves[0], halves[0])


class TestReset:
    def test_reset(self):
        zones = reset_zones()
        assert len(zones) == 1
        assert zones[0].index == 0
        assert zones[0].name == "Zone 1"
        assert zones[0].width * zones[0].height == pytest.approx(1.0)


class TestTiling:
    """Edits keep the zones tiling the unit square"""

    @staticmethod
    def _assert_tiles(zones):
        assert sum(z.width * z.height for z in zones) == pytest.approx(1.0)
        for i, a in enumerate(zones):
            for b in zones[i + 1:]:
                overlap_w = min(a.x2, b.x2) - max(a.x, b.x)
                overlap_h = min(a.y2, b.y2) - max(a.y, b.y)
                assert overlap_w <= 1e-9 or overlap_h <= 1e-9

    def test_split_then_merge_restores(self):
        zones = [Zone(0, "A", 0.2, 0.1, 0.6, 0.8)]
        split_zone(zones, zones[0], Orientation.HORIZONTAL, 2000)

        assert merge_zones(zones, zones[0], zones[1])

        zone = zones[0]
        assert (zone.x, zone.y, zone.width, zone.height) == pytest.approx((0.2, 0.1, 0.6, 0.8))

    def test_edit_sequence(self):
        zones = reset_zones()
        split_zone(zones, zones[0], Orientation.VERTICAL, 1920)
        split_zone(zones, zones[1], Orientation.HORIZONTAL, 1080)
        split_zone(zones, zones[0], Orientation.HORIZONTAL, 1080)
        self._assert_tiles(zones)

        segment = next(s for s in get_splitter_segments(zones)
                       if s.orientation is Orientation.VERTICAL)
        session = begin_drag(zones, segment, 960, 1920)
        apply_drag_delta(zones, session, 0.15)
        self._assert_tiles(zones)

        zone = zones[0]
        assert merge_zones(zones, zone, find_mergeable_neighbor(zones, zone))
        self._assert_tiles(zones)
