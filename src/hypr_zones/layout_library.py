"""Layout library management for HyprZones

Reads and writes named zone layouts and monitor/workspace-to-layout mappings
in the plugin's config file (~/.config/hypr/hyprzones.toml).
"""

import json
import os
import sys
import tempfile
import tomllib
from dataclasses import dataclass
from typing import List, Optional, Dict

from .zone import Zone, TEMPLATE_NAMES, template_zones
from .normalize import normalize_layouts


DEFAULT_CONFIG_PATH = "~/.config/hypr/hyprzones.toml"
CONFIG_ENV_VAR = "HYPRZONES_CONFIG"
WILDCARD = "*"


class Layout:
    """A named partition of a monitor into zones

    ``hotkey``, ``template``, ``columns`` and ``rows`` belong to the plugin:
    the editor only carries them through so a save keeps them intact.
    """

    def __init__(self, name: str, zones: List[Zone], spacing_h: int = 10, spacing_v: int = 40,
                 hotkey: str = "", template: str = "", columns: int = 0, rows: int = 0):
        self.name = name
        self.zones = zones
        self.spacing_h = spacing_h
        self.spacing_v = spacing_v
        self.hotkey = hotkey
        self.template = template
        self.columns = columns
        self.rows = rows

    def clone(self) -> 'Layout':
        return Layout(self.name, [zone.copy() for zone in self.zones],
                      self.spacing_h, self.spacing_v,
                      hotkey=self.hotkey, template=self.template,
                      columns=self.columns, rows=self.rows)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "spacing_h": self.spacing_h,
            "spacing_v": self.spacing_v,
            "hotkey": self.hotkey,
            "template": self.template,
            "columns": self.columns,
            "rows": self.rows,
            "zones": [zone.to_dict() for zone in self.zones]
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Layout('{self.name}', {len(self.zones)} zones)"


def default_layout() -> Layout:
    """Two side-by-side halves, used when nothing is stored"""
    return Layout("default", [
        Zone(0, "Left", 0.0, 0.0, 0.5, 1.0),
        Zone(1, "Right", 0.5, 0.0, 0.5, 1.0),
    ], spacing_h=10, spacing_v=40)


def layout_from_template(name: str, template: str, columns: int = 2, rows: int = 2) -> Layout:
    """
    Build a layout from one of the plugin's templates

    Raises:
        ValueError: for unknown templates or fewer than one column/row
    """
    return Layout(name, template_zones(template, columns, rows),
                  template=template, columns=columns, rows=rows)


@dataclass
class LayoutMapping:
    """Binds a monitor (or "*") and a workspace spec (or "*") to a layout name"""
    monitor: str
    workspaces: str
    layout: str

    @property
    def specificity(self) -> int:
        """Higher wins: explicit workspaces outrank an explicit monitor"""
        score = 0
        if self.workspaces.strip() not in ("", WILDCARD):
            score += 2
        if self.monitor != WILDCARD:
            score += 1
        return score


def workspace_matches(workspace_id: int, spec: str) -> bool:
    """
    Check a workspace against a spec.

    Accepts "*" (or empty), a single number, a comma separated list
    ("1,3,5") or an inclusive range ("1-5"). Malformed parts never match.
    """
    spec = spec.strip()
    if spec in ("", WILDCARD):
        return True

    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            if "-" in token[1:]:
                dash = token.index("-", 1)
                start = int(token[:dash])
                end = int(token[dash + 1:])
                if start <= workspace_id <= end:
                    return True
            elif int(token) == workspace_id:
                return True
        except ValueError:
            continue

    return False


def _percent(value: float) -> str:
    """Fraction -> percentage with at most one decimal ("50", "33.3")"""
    tenths = round(value * 1000)
    if tenths % 10 == 0:
        return str(tenths // 10)
    return f"{tenths / 10:.1f}"


def _toml_string(value: str) -> str:
    # JSON string escapes are a subset of TOML basic string escapes
    return json.dumps(value, ensure_ascii=False)


def _toml_scalar(value) -> Optional[str]:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return _toml_string(value)
    return None


class LayoutLibrary:
    """Manages the layouts and mappings stored in the plugin config file"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize layout library

        Args:
            config_path: Path of the TOML config. Defaults to $HYPRZONES_CONFIG,
                then ~/.config/hypr/hyprzones.toml
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH

        self.config_path = os.path.expanduser(config_path)

    # Reading

    def _read_config(self) -> Dict:
        """Parse the config file; missing or broken files read as empty"""
        try:
            if not os.path.exists(self.config_path):
                return {}

            with open(self.config_path, 'rb') as f:
                return tomllib.load(f)

        except Exception as e:
            print(f"Error reading config '{self.config_path}': {e}", file=sys.stderr)
            return {}

    @staticmethod
    def _parse_layout(data: Dict) -> Optional[Layout]:
        name = data.get("name")
        if not name:
            return None

        legacy_spacing = int(data.get("spacing", 10))
        zones = []
        for position, zone_data in enumerate(data.get("zones", [])):
            try:
                zones.append(Zone(
                    index=position,
                    name=str(zone_data.get("name", f"Zone {position + 1}")),
                    x=float(zone_data.get("x", 0)) / 100,
                    y=float(zone_data.get("y", 0)) / 100,
                    width=float(zone_data.get("width", 100)) / 100,
                    height=float(zone_data.get("height", 100)) / 100,
                ))
            except (TypeError, ValueError) as e:
                print(f"Skipping invalid zone {position} in layout '{name}': {e}", file=sys.stderr)

        return Layout(
            name=str(name),
            zones=zones,
            spacing_h=int(data.get("spacing_h", legacy_spacing)),
            spacing_v=int(data.get("spacing_v", legacy_spacing)),
            hotkey=str(data.get("hotkey", "")),
            template=str(data.get("template", "")),
            columns=int(data.get("columns", 0)),
            rows=int(data.get("rows", 0)),
        )

    def load_all_layouts(self) -> List[Layout]:
        """
        Load all layouts

        Returns:
            List of Layout objects in file order
        """
        try:
            layouts = []
            for data in self._read_config().get("layouts", []):
                layout = self._parse_layout(data)
                if layout:
                    layouts.append(layout)
            return layouts

        except Exception as e:
            print(f"Error loading layouts: {e}", file=sys.stderr)
            return []

    def list_layouts(self) -> List[str]:
        """List all layout names in file order"""
        return [layout.name for layout in self.load_all_layouts()]

    def layout_exists(self, name: str) -> bool:
        return name in self.list_layouts()

    def load_layout(self, name: str) -> Optional[Layout]:
        """
        Load layout by name

        Args:
            name: Layout name

        Returns:
            Layout object or None if not found
        """
        for layout in self.load_all_layouts():
            if layout.name == name:
                return layout
        return None

    def load_all_mappings(self) -> List[LayoutMapping]:
        """Load monitor/workspace mappings in file order"""
        try:
            mappings = []
            for data in self._read_config().get("mappings", []):
                if not data.get("layout"):
                    continue
                mappings.append(LayoutMapping(
                    monitor=str(data.get("monitor", WILDCARD)) or WILDCARD,
                    workspaces=str(data.get("workspaces", WILDCARD)) or WILDCARD,
                    layout=str(data["layout"]),
                ))
            return mappings

        except Exception as e:
            print(f"Error loading mappings: {e}", file=sys.stderr)
            return []

    # Writing

    def _render_config(self, layouts: List[Layout], mappings: List[LayoutMapping],
                       settings: Dict) -> str:
        lines = []

        for key, value in settings.items():
            rendered = _toml_scalar(value)
            if rendered is not None:
                lines.append(f"{key} = {rendered}")
        if lines:
            lines.append("")

        for layout in layouts:
            lines.append("[[layouts]]")
            lines.append(f"name = {_toml_string(layout.name)}")
            lines.append(f"spacing_h = {int(layout.spacing_h)}")
            lines.append(f"spacing_v = {int(layout.spacing_v)}")

            if layout.hotkey:
                lines.append(f"hotkey = {_toml_string(layout.hotkey)}")
            if layout.template:
                lines.append(f"template = {_toml_string(layout.template)}")
                if layout.columns > 0:
                    lines.append(f"columns = {int(layout.columns)}")
                if layout.rows > 0:
                    lines.append(f"rows = {int(layout.rows)}")

            for zone in layout.zones:
                lines.append("")
                lines.append("[[layouts.zones]]")
                lines.append(f"name = {_toml_string(zone.name)}")
                lines.append(f"x = {_percent(zone.x)}")
                lines.append(f"y = {_percent(zone.y)}")
                lines.append(f"width = {_percent(zone.width)}")
                lines.append(f"height = {_percent(zone.height)}")

            lines.append("")

        if mappings:
            lines.append("# Monitor/Workspace to Layout mappings")
            for mapping in mappings:
                lines.append("[[mappings]]")
                lines.append(f"monitor = {_toml_string(mapping.monitor)}")
                lines.append(f"workspaces = {_toml_string(mapping.workspaces)}")
                lines.append(f"layout = {_toml_string(mapping.layout)}")
                lines.append("")

        return "\n".join(lines)

    def _write_config(self, layouts: List[Layout], mappings: List[LayoutMapping]) -> bool:
        """Rewrite the config file, keeping the plugin's own top-level settings"""
        try:
            settings = {key: value for key, value in self._read_config().items()
                        if key not in ("layouts", "mappings")}
            content = self._render_config(normalize_layouts(layouts), mappings, settings)

            directory = os.path.dirname(self.config_path) or "."
            os.makedirs(directory, exist_ok=True)

            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".hyprzones-", suffix=".toml")
            try:
                with os.fdopen(fd, 'w') as f:
                    f.write(content)
                os.replace(tmp_path, self.config_path)
            except BaseException:
                os.unlink(tmp_path)
                raise

            return True

        except Exception as e:
            print(f"Error saving config '{self.config_path}': {e}", file=sys.stderr)
            return False

    def save_layout(self, layout: Layout, overwrite: bool = True) -> bool:
        """
        Save layout to the config file

        Args:
            layout: Layout to save
            overwrite: Replace a stored layout with the same name

        Returns:
            True if successful, False otherwise
        """
        layouts = self.load_all_layouts()
        existing = [i for i, stored in enumerate(layouts) if stored.name == layout.name]

        if existing:
            if not overwrite:
                print(f"Layout '{layout.name}' already exists", file=sys.stderr)
                return False
            layouts[existing[0]] = layout
        else:
            layouts.append(layout)

        return self._write_config(layouts, self.load_all_mappings())

    def delete_layout(self, name: str) -> bool:
        """
        Delete a layout and the mappings that point to it

        Returns:
            True if successful, False otherwise
        """
        layouts = self.load_all_layouts()
        remaining = [layout for layout in layouts if layout.name != name]
        if len(remaining) == len(layouts):
            print(f"Layout '{name}' does not exist", file=sys.stderr)
            return False

        mappings = [m for m in self.load_all_mappings() if m.layout != name]
        return self._write_config(remaining, mappings)

    def rename_layout(self, old_name: str, new_name: str) -> bool:
        """
        Rename a layout, re-pointing its mappings

        Returns:
            True if successful, False otherwise
        """
        if not new_name or old_name == new_name:
            return False

        layouts = self.load_all_layouts()
        names = [layout.name for layout in layouts]

        if old_name not in names:
            print(f"Layout '{old_name}' does not exist", file=sys.stderr)
            return False

        if new_name in names:
            print(f"Layout '{new_name}' already exists", file=sys.stderr)
            return False

        layouts[names.index(old_name)].name = new_name

        mappings = self.load_all_mappings()
        for mapping in mappings:
            if mapping.layout == old_name:
                mapping.layout = new_name

        return self._write_config(layouts, mappings)

    def save_mappings(self, mappings: List[LayoutMapping]) -> bool:
        return self._write_config(self.load_all_layouts(), mappings)

    def add_mapping(self, mapping: LayoutMapping) -> bool:
        """Add a mapping; an identical monitor/workspaces pair gets its layout replaced"""
        mappings = self.load_all_mappings()
        for existing in mappings:
            if existing.monitor == mapping.monitor and existing.workspaces == mapping.workspaces:
                existing.layout = mapping.layout
                break
        else:
            mappings.append(mapping)
        return self.save_mappings(mappings)

    def remove_mapping(self, position: int) -> bool:
        """Remove the mapping at ``position`` (file order)"""
        mappings = self.load_all_mappings()
        if not 0 <= position < len(mappings):
            return False
        del mappings[position]
        return self.save_mappings(mappings)

    # Resolution

    def can_add_mapping(self, monitor: str, workspaces: str) -> bool:
        """
        Admission policy for new mappings.

        A global wildcard blocks everything. A monitor-wide wildcard blocks
        specific workspaces on that monitor and the other way round.
        """
        monitor = monitor or WILDCARD
        workspaces = workspaces or WILDCARD
        mappings = self.load_all_mappings()

        if any(m.monitor == WILDCARD and m.workspaces == WILDCARD for m in mappings):
            return False

        if monitor == WILDCARD and workspaces == WILDCARD and mappings:
            return False

        if workspaces == WILDCARD:
            if any(m.monitor == monitor or (monitor != WILDCARD and m.monitor == WILDCARD)
                   for m in mappings):
                return False
        elif any(m.monitor == monitor and m.workspaces == WILDCARD for m in mappings):
            return False

        return True

    def get_active_layout_name(self, monitor: str, workspace_id: int) -> Optional[str]:
        """
        Get the layout name mapped to a monitor/workspace

        The most specific matching mapping wins; among equally specific ones
        the first in the file does.

        Returns:
            Layout name or None if no mapping matches
        """
        best = None
        for mapping in self.load_all_mappings():
            if mapping.monitor not in (WILDCARD, monitor):
                continue
            if not workspace_matches(workspace_id, mapping.workspaces):
                continue
            if best is None or mapping.specificity > best.specificity:
                best = mapping

        return best.layout if best else None

    def get_layout_for(self, monitor: str, workspace_id: int) -> Optional[Layout]:
        """
        Get the layout for a monitor/workspace (loads the layout object)

        Falls back to the first stored layout when nothing is mapped or the
        mapped layout is missing.
        """
        layouts = self.load_all_layouts()
        if not layouts:
            return None

        name = self.get_active_layout_name(monitor, workspace_id)
        for layout in layouts:
            if layout.name == name:
                return layout

        return layouts[0]


def main():
    """Command-line interface for layout library management"""
    import argparse

    parser = argparse.ArgumentParser(description='HyprZones Layout Library Manager')
    parser.add_argument('--config', metavar='PATH', help='Config file (default: ~/.config/hypr/hyprzones.toml)')
    parser.add_argument('--list', action='store_true', help='List all layouts')
    parser.add_argument('--show', metavar='NAME', help='Show layout details')
    parser.add_argument('--delete', metavar='NAME', help='Delete a layout')
    parser.add_argument('--rename', nargs=2, metavar=('OLD', 'NEW'), help='Rename a layout')
    parser.add_argument('--map', nargs=3, metavar=('MONITOR', 'WORKSPACES', 'LAYOUT'),
                        help='Map a monitor ("*" for all) and workspaces ("*", "1,3", "1-5") to a layout')
    parser.add_argument('--unmap', type=int, metavar='POSITION', help='Remove mapping by position (see --list-mappings)')
    parser.add_argument('--list-mappings', action='store_true', help='List monitor/workspace mappings')
    parser.add_argument('--resolve', nargs=2, metavar=('MONITOR', 'WORKSPACE'),
                        help='Show which layout applies to a monitor/workspace')
    parser.add_argument('--create', metavar='NAME', help='Create a layout from a template')
    parser.add_argument('--template', choices=TEMPLATE_NAMES, default='columns',
                        help='Template for --create (default: columns)')
    parser.add_argument('--columns', type=int, default=2, help='Columns for --create (default: 2)')
    parser.add_argument('--rows', type=int, default=2, help='Rows for --create (default: 2)')

    args = parser.parse_args()

    library = LayoutLibrary(args.config)

    if args.list:
        layouts = library.load_all_layouts()
        if layouts:
            print(f"Available layouts ({len(layouts)}):")
            print("-" * 60)
            for layout in layouts:
                print(f"  {layout.name:20} - {len(layout.zones)} zones")
        else:
            print("No layouts found.")

    elif args.show:
        layout = library.load_layout(args.show)
        if layout:
            print(f"Layout: {layout.name}")
            if layout.hotkey:
                print(f"Hotkey: {layout.hotkey}")
            if layout.template:
                print(f"Template: {layout.template} ({layout.columns}x{layout.rows})")
            print(f"Spacing: {layout.spacing_h}px rows, {layout.spacing_v}px columns")
            print(f"Zones: {len(layout.zones)}")
            print("-" * 60)
            for zone in layout.zones:
                print(f"  {zone}")
        else:
            print(f"Layout '{args.show}' not found.")

    elif args.create:
        try:
            layout = layout_from_template(args.create, args.template, args.columns, args.rows)
        except ValueError as e:
            parser.error(str(e))
        if library.save_layout(layout, overwrite=False):
            print(f"Created layout '{layout.name}' ({len(layout.zones)} zones)")
        else:
            print(f"Failed to create layout '{args.create}'")

    elif args.delete:
        if library.delete_layout(args.delete):
            print(f"Deleted layout '{args.delete}'")
        else:
            print(f"Failed to delete layout '{args.delete}'")

    elif args.rename:
        old_name, new_name = args.rename
        if library.rename_layout(old_name, new_name):
            print(f"Renamed layout '{old_name}' → '{new_name}'")
        else:
            print(f"Failed to rename layout '{old_name}'")

    elif args.map:
        monitor, workspaces, layout_name = args.map
        if not library.layout_exists(layout_name):
            print(f"Layout '{layout_name}' does not exist")
        elif not library.can_add_mapping(monitor, workspaces):
            print(f"Mapping {monitor} / {workspaces} conflicts with an existing mapping")
        elif library.add_mapping(LayoutMapping(monitor, workspaces, layout_name)):
            print(f"Mapped {monitor} / {workspaces} → layout '{layout_name}'")
        else:
            print("Failed to save mapping")

    elif args.unmap is not None:
        if library.remove_mapping(args.unmap):
            print(f"Removed mapping {args.unmap}")
        else:
            print(f"No mapping at position {args.unmap}")

    elif args.list_mappings:
        mappings = library.load_all_mappings()
        print("Monitor / Workspaces → Layout mappings:")
        print("-" * 60)
        for position, mapping in enumerate(mappings):
            monitor = "All" if mapping.monitor == WILDCARD else mapping.monitor
            workspaces = "All" if mapping.workspaces == WILDCARD else mapping.workspaces
            print(f"  [{position}] {monitor} / {workspaces} → {mapping.layout}")

        if not mappings:
            print("  No mappings configured.")

    elif args.resolve:
        monitor, workspace = args.resolve
        try:
            workspace_id = int(workspace)
        except ValueError:
            parser.error(f"invalid workspace id: {workspace}")
        name = library.get_active_layout_name(monitor, workspace_id)
        if name:
            print(f"{monitor} / workspace {workspace_id} → {name}")
        else:
            print(f"{monitor} / workspace {workspace_id} → (no mapping)")

    else:
        parser.print_help()


if __name__ == '__main__':
    main()
