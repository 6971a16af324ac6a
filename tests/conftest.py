"""Shared fixtures"""

import pytest

from hypr_zones.geometry import MonitorGeometry
from hypr_zones.layout_library import LayoutLibrary
from hypr_zones.zone import Zone


@pytest.fixture
def monitor():
    """1920x1080 usable area at the origin"""
    return MonitorGeometry(x=0, y=0, width=1920, height=1080)


@pytest.fixture
def halves():
    return [
        Zone(0, "Left", 0.0, 0.0, 0.5, 1.0),
        Zone(1, "Right", 0.5, 0.0, 0.5, 1.0),
    ]


@pytest.fixture
def three_columns():
    return [
        Zone(0, "A", 0.0, 0.0, 0.25, 1.0),
        Zone(1, "B", 0.25, 0.0, 0.5, 1.0),
        Zone(2, "C", 0.75, 0.0, 0.25, 1.0),
    ]


@pytest.fixture
def left_column_split():
    """Left half split into two rows, right half whole"""
    return [
        Zone(0, "Top Left", 0.0, 0.0, 0.5, 0.5),
        Zone(1, "Bottom Left", 0.0, 0.5, 0.5, 0.5),
        Zone(2, "Right", 0.5, 0.0, 0.5, 1.0),
    ]


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "hyprzones.toml"


@pytest.fixture
def library(config_path):
    return LayoutLibrary(str(config_path))
