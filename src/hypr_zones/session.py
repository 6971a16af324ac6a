"""Editor session: the single owner of the layout being edited and of the active drag"""

import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from . import hyprctl
from .geometry import MonitorGeometry, PixelRect, PixelSplitter, zone_to_pixels, splitter_to_pixels
from .hyprctl import Margins
from .layout_library import Layout, LayoutLibrary, default_layout
from .normalize import normalize_layout
from .operations import (split_zone, find_mergeable_neighbor, merge_zones, reset_zones, can_split)
from .splitter import DragSession, begin_drag, drag_to
from .zone import Zone, SplitterSegment, Orientation, find_zone, get_splitter_segments, template_zones


@dataclass
class EditorSettings:
    """Tunables of the editor window"""
    margins: Margins = field(default_factory=Margins)
    splitter_thickness: int = 12
    reload_plugin_on_save: bool = True


class EditorSession:
    """
    State of one editing session.

    Zones are mutated in place by split/merge/drag; ``original_layout`` is
    the snapshot taken on load or save and is what ``revert`` returns to.
    """

    def __init__(self, library: LayoutLibrary, monitor: MonitorGeometry,
                 settings: Optional[EditorSettings] = None):
        self.library = library
        self.monitor = monitor
        self.settings = settings or EditorSettings()

        self.monitor_name = ""
        self.workspace_id = 1

        self.current_layout: Layout = default_layout()
        self.original_layout: Layout = self.current_layout.clone()
        self.has_changes = False

        self.drag: Optional[DragSession] = None

        # Callbacks
        self.on_changed: Optional[Callable[[], None]] = None

    @property
    def zones(self) -> List[Zone]:
        return self.current_layout.zones

    def zone(self, index: int) -> Optional[Zone]:
        return find_zone(self.zones, index)

    def _changed(self):
        self.has_changes = True
        self._notify()

    def _notify(self):
        if self.on_changed:
            self.on_changed()

    # Loading

    def set_layout(self, layout: Layout):
        """Start editing ``layout`` (a copy is kept as the revert point)"""
        self.drag = None
        self.current_layout = layout.clone()
        self.original_layout = layout.clone()
        self.has_changes = False
        self._notify()

    def load(self, name: str) -> bool:
        layout = self.library.load_layout(name)
        if layout is None:
            return False
        self.set_layout(layout)
        return True

    def load_for(self, monitor_name: str, workspace_id: int):
        """Load the layout mapped to a monitor/workspace, falling back to the default"""
        self.monitor_name = monitor_name
        self.workspace_id = workspace_id
        layout = self.library.get_layout_for(monitor_name, workspace_id)
        self.set_layout(layout or default_layout())

    def set_monitor(self, monitor: MonitorGeometry):
        self.drag = None
        self.monitor = monitor
        self._notify()

    # Structural edits

    def can_split(self, index: int, orientation: Orientation) -> bool:
        zone = self.zone(index)
        if zone is None:
            return False
        return can_split(zone, orientation, self.monitor.axis_length(orientation))

    def split(self, index: int, orientation: Orientation) -> Optional[Zone]:
        zone = self.zone(index)
        if zone is None:
            return None
        new_zone = split_zone(self.zones, zone, orientation, self.monitor.axis_length(orientation))
        if new_zone is not None:
            self._changed()
        return new_zone

    def mergeable_neighbor(self, index: int) -> Optional[Zone]:
        zone = self.zone(index)
        if zone is None or len(self.zones) < 2:
            return None
        return find_mergeable_neighbor(self.zones, zone)

    def merge(self, index: int) -> bool:
        """Merge a zone with its first full-edge neighbour"""
        neighbor = self.mergeable_neighbor(index)
        if neighbor is None:
            return False
        merged = merge_zones(self.zones, self.zone(index), neighbor)
        if merged:
            self._changed()
        return merged

    def reset(self):
        """Replace all zones with a single full-screen zone"""
        self.drag = None
        self.current_layout.zones = reset_zones()
        self._changed()

    def apply_template(self, template: str, columns: int = 2, rows: int = 2) -> bool:
        """Replace the zones with one of the plugin's templates"""
        try:
            zones = template_zones(template, columns, rows)
        except ValueError as e:
            print(f"Cannot apply template: {e}", file=sys.stderr)
            return False

        self.drag = None
        layout = self.current_layout
        layout.zones = zones
        layout.template = template
        layout.columns = columns
        layout.rows = rows
        self._changed()
        return True

    def revert(self):
        """Throw away unsaved edits"""
        self.drag = None
        self.current_layout = self.original_layout.clone()
        self.has_changes = False
        self._notify()

    # Geometry for rendering

    def splitters(self) -> List[SplitterSegment]:
        return get_splitter_segments(self.zones)

    def zone_rects(self) -> List[Tuple[Zone, PixelRect]]:
        layout = self.current_layout
        return [(zone, zone_to_pixels(zone, self.monitor, layout.spacing_h, layout.spacing_v))
                for zone in self.zones]

    def splitter_rects(self) -> List[PixelSplitter]:
        layout = self.current_layout
        return [splitter_to_pixels(segment, self.monitor, layout.spacing_h, layout.spacing_v,
                                   self.settings.splitter_thickness)
                for segment in self.splitters()]

    def splitter_at(self, x: float, y: float) -> Optional[SplitterSegment]:
        for rect in self.splitter_rects():
            if rect.contains_point(x, y):
                return rect.segment
        return None

    def zone_at(self, x: float, y: float) -> Optional[Zone]:
        for zone, rect in self.zone_rects():
            if rect.contains_point(x, y):
                return zone
        return None

    # Dragging

    def begin_drag(self, segment: SplitterSegment, pointer_x: float, pointer_y: float) -> bool:
        orientation = segment.orientation
        pointer = pointer_x if orientation is Orientation.VERTICAL else pointer_y
        self.drag = begin_drag(self.zones, segment, pointer, self.monitor.axis_length(orientation))
        return self.drag is not None

    def drag_to(self, pointer_x: float, pointer_y: float) -> float:
        if self.drag is None:
            return 0.0
        orientation = self.drag.orientation
        pointer = pointer_x if orientation is Orientation.VERTICAL else pointer_y
        previous = self.drag.applied_delta
        delta = drag_to(self.zones, self.drag, pointer, self.monitor.axis_origin(orientation))
        if delta != previous:
            self._changed()
        return delta

    def end_drag(self):
        self.drag = None

    @property
    def is_dragging(self) -> bool:
        return self.drag is not None

    # Persistence

    def save(self, name: Optional[str] = None, overwrite: bool = True) -> bool:
        """
        Normalize and store the current layout, then ask the plugin to reload

        Args:
            name: Save under this name instead of the current one
            overwrite: Replace a stored layout with the same name

        Returns:
            True if the layout was written
        """
        if name:
            self.current_layout.name = name

        normalized = normalize_layout(self.current_layout)
        if not self.library.save_layout(normalized, overwrite=overwrite):
            return False

        self.drag = None
        self.current_layout = normalized
        self.original_layout = normalized.clone()
        self.has_changes = False

        if self.settings.reload_plugin_on_save:
            hyprctl.reload_config()

        self._notify()
        return True
