"""Hyprland access through hyprctl: monitor queries and plugin commands"""

import json
import subprocess
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple, Dict

from .geometry import MonitorGeometry


HYPRCTL = "hyprctl"

# Transforms 1, 3, 5, 7 rotate the output by 90 or 270 degrees
PORTRAIT_TRANSFORMS = (1, 3, 5, 7)


class NoMonitorsError(RuntimeError):
    """hyprctl returned no monitors (or could not be run)"""

    def __init__(self):
        super().__init__(
            "No monitors found!\n\n"
            "Please configure your monitors first (e.g. with nwg-displays)."
        )


@dataclass
class Margins:
    """Fixed space kept free around the zones (status bar + outer gaps)"""
    top: int = 97
    bottom: int = 22
    left: int = 22
    right: int = 22

    @classmethod
    def parse(cls, value: str) -> 'Margins':
        """Parse "TOP,BOTTOM,LEFT,RIGHT" """
        parts = [int(part) for part in value.split(",")]
        if len(parts) != 4 or any(part < 0 for part in parts):
            raise ValueError(f"Expected four non-negative integers, got '{value}'")
        return cls(*parts)


@dataclass
class HyprMonitor:
    """Monitor as reported by `hyprctl monitors -j`"""
    id: int
    name: str
    x: int
    y: int
    width: int
    height: int
    scale: float = 1.0
    transform: int = 0
    focused: bool = False
    active_workspace: int = 1
    reserved: Tuple[int, int, int, int] = (0, 0, 0, 0)

    @classmethod
    def from_dict(cls, data: Dict) -> 'HyprMonitor':
        workspace = data.get("activeWorkspace") or {}
        reserved = tuple(data.get("reserved") or (0, 0, 0, 0))
        return cls(
            id=int(data.get("id", 0)),
            name=str(data["name"]),
            x=int(data.get("x", 0)),
            y=int(data.get("y", 0)),
            width=int(data["width"]),
            height=int(data["height"]),
            scale=float(data.get("scale", 1.0)),
            transform=int(data.get("transform", 0)),
            focused=bool(data.get("focused", False)),
            active_workspace=int(workspace.get("id", 1)),
            reserved=reserved if len(reserved) == 4 else (0, 0, 0, 0),
        )

    def __repr__(self) -> str:
        focus = " focused" if self.focused else ""
        return f"HyprMonitor('{self.name}', {self.width}x{self.height}@{self.scale}{focus})"


def _run(args: List[str]) -> Optional[str]:
    """Run hyprctl, returning stdout or None on failure"""
    try:
        result = subprocess.run([HYPRCTL] + args, capture_output=True, text=True, check=True)
        return result.stdout
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"Error running {HYPRCTL} {' '.join(args)}: {e}", file=sys.stderr)
        return None


def fetch_monitors() -> List[HyprMonitor]:
    """
    Query Hyprland's monitors

    Returns:
        List of monitors, empty if hyprctl failed or returned garbage
    """
    output = _run(["monitors", "-j"])
    if output is None:
        return []

    try:
        return [HyprMonitor.from_dict(entry) for entry in json.loads(output)]
    except (ValueError, KeyError, TypeError) as e:
        print(f"Error parsing monitor list: {e}", file=sys.stderr)
        return []


def effective_dimensions(monitor: HyprMonitor) -> Tuple[int, int]:
    """Width/height after rotation"""
    if monitor.transform in PORTRAIT_TRANSFORMS:
        return monitor.height, monitor.width
    return monitor.width, monitor.height


def pick_monitor(monitors: List[HyprMonitor], prefer: Optional[str] = None) -> HyprMonitor:
    """
    Choose the monitor to edit: the preferred one, else the focused one, else the first

    Raises:
        NoMonitorsError: if ``monitors`` is empty
    """
    if not monitors:
        raise NoMonitorsError()

    if prefer:
        for monitor in monitors:
            if monitor.name == prefer:
                return monitor

    for monitor in monitors:
        if monitor.focused:
            return monitor

    return monitors[0]


def usable_area(monitor: HyprMonitor, margins: Margins) -> MonitorGeometry:
    """Logical usable area of a monitor, relative to its own top-left corner"""
    width, height = effective_dimensions(monitor)
    scale = monitor.scale if monitor.scale > 0 else 1.0
    logical_width = round(width / scale)
    logical_height = round(height / scale)

    return MonitorGeometry(
        x=margins.left,
        y=margins.top,
        width=max(1, logical_width - margins.left - margins.right),
        height=max(1, logical_height - margins.top - margins.bottom),
    )


def reload_config() -> bool:
    """Ask the plugin to re-read hyprzones.toml"""
    return _run(["hyprzones:reload"]) is not None


def show_zones() -> bool:
    return _run(["dispatch", "hyprzones:show"]) is not None


def hide_zones() -> bool:
    return _run(["dispatch", "hyprzones:hide"]) is not None
