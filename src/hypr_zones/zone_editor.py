"""
Zone Editor - Fullscreen overlay GUI for partitioning a monitor into zones

Draws the zones of the current layout over the desktop and lets the user:
- Drag splitters between zones to resize whole walls of zones at once
- Split the selected zone in half, or merge it with a neighbour
- Save layouts and assign them to monitors/workspaces

Controls:
- Click zone: Select zone
- Drag splitter: Resize neighbouring zones
- V: Split selected zone left/right
- B: Split selected zone top/bottom
- M: Merge selected zone with a neighbour
- R: Reset to a single zone
- U: Undo all changes since the last save
- S: Save layout
- L: Toggle layout manager
- P: Toggle plugin zone preview
- D: Toggle dimension display
- F1: Toggle help
- Escape: Close layout manager / hide editor
"""

import gi
gi.require_version('Gtk', '3.0')
gi.require_version('Gdk', '3.0')
from gi.repository import Gtk, Gdk, GLib
import cairo
from typing import Optional

from . import hyprctl
from .layout_library import LayoutMapping, WILDCARD
from .session import EditorSession
from .zone import Zone, Orientation, TEMPLATE_NAMES


def header_markup(layout, has_changes: bool) -> str:
    changed = " *" if has_changes else ""
    name = GLib.markup_escape_text(layout.name, -1)
    return f"<b>Current: {name}{changed} ({len(layout.zones)} zones)</b>"


def layout_row_markup(name: str, is_current: bool) -> str:
    escaped = GLib.markup_escape_text(name, -1)
    return f"<b>{escaped}</b> ★" if is_current else escaped


class ZoneEditorOverlay(Gtk.Window):
    """Fullscreen transparent overlay for zone editing"""

    # Visual constants
    BACKGROUND_COLOR = (0.0, 0.0, 0.0, 0.35)
    ZONE_FILL_COLOR = (0.3, 0.5, 0.8, 0.3)
    ZONE_BORDER_COLOR = (0.2, 0.4, 0.7, 0.8)
    SELECTED_FILL_COLOR = (0.8, 0.5, 0.3, 0.4)
    SELECTED_BORDER_COLOR = (0.7, 0.4, 0.2, 1.0)
    SPLITTER_COLOR = (1.0, 1.0, 1.0, 0.35)
    SPLITTER_ACTIVE_COLOR = (1.0, 0.6, 0.2, 0.9)

    HELP_BG_COLOR = (0.1, 0.1, 0.1, 0.85)
    HELP_TEXT_COLOR = (1.0, 1.0, 1.0, 1.0)

    HELP_LINES = [
        "ZONE EDITOR - HELP",
        "",
        "Mouse:",
        "  Click zone         - Select zone",
        "  Drag splitter      - Resize neighbouring zones",
        "",
        "Keyboard Shortcuts:",
        "  V       - Split selected zone left/right",
        "  B       - Split selected zone top/bottom",
        "  M       - Merge selected zone with neighbour",
        "  R       - Reset to a single zone",
        "  U       - Undo changes since last save",
        "  S       - Save layout",
        "  L       - Toggle layout manager",
        "  P       - Toggle plugin zone preview",
        "  D       - Toggle dimension display",
        "  F1      - Toggle this help",
        "  ESC     - Hide editor",
    ]

    def __init__(self, session: EditorSession):
        super().__init__()

        self.session = session
        self.session.on_changed = self._on_session_changed

        self.selected_index: Optional[int] = None
        self.hover_splitter = False

        self.status_message = ""
        self.show_help = False
        self.show_dimensions = True
        self.preview_visible = False

        self.layout_manager: Optional[LayoutManagerWindow] = None

        self._setup_window()
        self._setup_events()
        self._update_status()

    def _setup_window(self):
        """Setup fullscreen transparent window"""
        self.set_title("HyprZones Editor")
        screen = self.get_screen()
        visual = screen.get_rgba_visual()
        if visual:
            self.set_visual(visual)

        self.set_app_paintable(True)
        self.set_decorated(False)
        self.set_skip_taskbar_hint(True)
        self.fullscreen()
        self.set_keep_above(True)
        self.set_accept_focus(True)

    def _setup_events(self):
        """Setup event handlers"""
        self.connect("draw", self.on_draw)
        self.connect("button-press-event", self.on_button_press)
        self.connect("button-release-event", self.on_button_release)
        self.connect("motion-notify-event", self.on_motion)
        self.connect("key-press-event", self.on_key_press)
        self.connect("delete-event", self._on_delete)

        self.add_events(
            Gdk.EventMask.BUTTON_PRESS_MASK |
            Gdk.EventMask.BUTTON_RELEASE_MASK |
            Gdk.EventMask.POINTER_MOTION_MASK |
            Gdk.EventMask.KEY_PRESS_MASK
        )

    def _on_delete(self, widget, event):
        self.hide_editor()
        return True

    def _on_session_changed(self):
        if self.selected_index is not None and self.session.zone(self.selected_index) is None:
            self.selected_index = None
        if self.layout_manager and self.layout_manager.get_visible():
            # Lists come from disk; only the header changes while dragging
            if self.session.is_dragging:
                self.layout_manager.update_header()
            else:
                self.layout_manager.refresh()
        self.queue_draw()

    def _update_status(self, message: Optional[str] = None):
        layout = self.session.current_layout
        changed = " *" if self.session.has_changes else ""
        base = f"Editing: {layout.name}{changed} ({len(layout.zones)} zones) - F1 for help"
        self.status_message = f"{message}  |  {base}" if message else base
        self.queue_draw()

    @property
    def selected_zone(self) -> Optional[Zone]:
        if self.selected_index is None:
            return None
        return self.session.zone(self.selected_index)

    def show_editor(self):
        """Show the overlay, turning the plugin's zone preview off"""
        if self.preview_visible:
            hyprctl.hide_zones()
            self.preview_visible = False
        self._update_status()
        self.show_all()
        self.present()

    def hide_editor(self):
        self.session.end_drag()
        if self.layout_manager:
            self.layout_manager.hide()
        self.hide()

    # Drawing

    def on_draw(self, widget, cr: cairo.Context):
        """Draw zones, splitters and UI"""
        cr.set_source_rgba(0, 0, 0, 0)
        cr.set_operator(cairo.OPERATOR_SOURCE)
        cr.paint()
        cr.set_operator(cairo.OPERATOR_OVER)

        cr.set_source_rgba(*self.BACKGROUND_COLOR)
        cr.paint()

        alloc = self.get_allocation()

        for zone, rect in self.session.zone_rects():
            self._draw_zone(cr, zone, rect, zone.index == self.selected_index)

        active = self.session.drag.segment.key if self.session.drag else None
        for rect in self.session.splitter_rects():
            color = self.SPLITTER_ACTIVE_COLOR if rect.segment.key == active else self.SPLITTER_COLOR
            cr.set_source_rgba(*color)
            cr.rectangle(rect.x, rect.y, rect.width, rect.height)
            cr.fill()

        if self.show_help:
            self._draw_help(cr, alloc.width, alloc.height)
        else:
            self._draw_status_bar(cr, alloc.width, alloc.height)

        return False

    def _draw_zone(self, cr: cairo.Context, zone: Zone, rect, is_selected: bool):
        """Draw a single zone with its label"""
        x, y, w, h = int(rect.x), int(rect.y), int(rect.width), int(rect.height)

        cr.set_source_rgba(*(self.SELECTED_FILL_COLOR if is_selected else self.ZONE_FILL_COLOR))
        cr.rectangle(x, y, w, h)
        cr.fill()

        if is_selected:
            cr.set_source_rgba(*self.SELECTED_BORDER_COLOR)
            cr.set_line_width(3)
        else:
            cr.set_source_rgba(*self.ZONE_BORDER_COLOR)
            cr.set_line_width(2)
        cr.rectangle(x, y, w, h)
        cr.stroke()

        if zone.name:
            cr.set_source_rgb(1, 1, 1)
            cr.select_font_face("Sans", cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_BOLD)
            cr.set_font_size(18)
            extents = cr.text_extents(zone.name)
            cr.move_to(x + (w - extents.width) / 2, y + (h + extents.height) / 2)
            cr.show_text(zone.name)

        if self.show_dimensions:
            self._draw_zone_dimensions(cr, zone, x, y, w, h)

    def _draw_zone_dimensions(self, cr: cairo.Context, zone: Zone, x: int, y: int, w: int, h: int):
        """Percentages top-left, pixel size bottom-right"""
        cr.select_font_face("Sans", cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_BOLD)
        cr.set_font_size(12)

        padding = 6
        margin = 10

        labels = [
            (f"{zone.width * 100:.1f}% × {zone.height * 100:.1f}%", False),
            (f"{w} × {h}", True),
        ]
        for text, bottom_right in labels:
            extents = cr.text_extents(text)
            bg_width = extents.width + 2 * padding
            bg_height = extents.height + 2 * padding
            if bottom_right:
                bg_x = x + w - bg_width - margin
                bg_y = y + h - bg_height - margin
            else:
                bg_x = x + margin
                bg_y = y + margin

            cr.set_source_rgba(0.0, 0.0, 0.0, 0.47)
            cr.rectangle(bg_x, bg_y, bg_width, bg_height)
            cr.fill()

            cr.set_source_rgb(1.0, 1.0, 1.0)
            cr.move_to(bg_x + padding, bg_y + padding + extents.height)
            cr.show_text(text)

    def _draw_status_bar(self, cr: cairo.Context, width: int, height: int):
        """Draw status bar at bottom of screen"""
        bar_height = 40

        cr.set_source_rgba(*self.HELP_BG_COLOR)
        cr.rectangle(0, height - bar_height, width, bar_height)
        cr.fill()

        cr.set_source_rgba(*self.HELP_TEXT_COLOR)
        cr.select_font_face("Sans", cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_NORMAL)
        cr.set_font_size(14)
        cr.move_to(20, height - bar_height + 25)
        cr.show_text(self.status_message)

    def _draw_help(self, cr: cairo.Context, width: int, height: int):
        """Draw help panel"""
        panel_width = 500
        panel_height = 40 + 18 * len(self.HELP_LINES)
        panel_x = (width - panel_width) // 2
        panel_y = (height - panel_height) // 2

        cr.set_source_rgba(*self.HELP_BG_COLOR)
        cr.rectangle(panel_x, panel_y, panel_width, panel_height)
        cr.fill()

        cr.set_source_rgba(1, 1, 1, 0.5)
        cr.set_line_width(2)
        cr.rectangle(panel_x, panel_y, panel_width, panel_height)
        cr.stroke()

        cr.set_source_rgba(*self.HELP_TEXT_COLOR)
        cr.select_font_face("Monospace", cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_NORMAL)
        cr.set_font_size(14)

        y_offset = panel_y + 30
        for line in self.HELP_LINES:
            cr.move_to(panel_x + 20, y_offset)
            cr.show_text(line)
            y_offset += 18

    # Pointer

    def _set_cursor(self, name: str):
        window = self.get_window()
        if window:
            window.set_cursor(Gdk.Cursor.new_from_name(self.get_display(), name))

    def on_button_press(self, widget, event):
        """Start a splitter drag or select a zone"""
        if event.button != 1:
            return False

        segment = self.session.splitter_at(event.x, event.y)
        if segment and self.session.begin_drag(segment, event.x, event.y):
            self.queue_draw()
            return True

        zone = self.session.zone_at(event.x, event.y)
        self.selected_index = zone.index if zone else None
        if zone:
            self._update_status(f"Selected: {zone.name}")
        else:
            self.queue_draw()
        return True

    def on_button_release(self, widget, event):
        if event.button != 1 or not self.session.is_dragging:
            return False

        self.session.end_drag()
        self._update_status("Resized zones")
        return True

    def on_motion(self, widget, event):
        if self.session.is_dragging:
            self.session.drag_to(event.x, event.y)
            return True

        segment = self.session.splitter_at(event.x, event.y)
        if segment and not self.hover_splitter:
            self._set_cursor("col-resize" if segment.orientation is Orientation.VERTICAL else "row-resize")
            self.hover_splitter = True
        elif not segment and self.hover_splitter:
            self._set_cursor("default")
            self.hover_splitter = False
        return False

    # Keyboard

    def _split_selected(self, orientation: Orientation):
        zone = self.selected_zone
        if zone is None:
            self._update_status("Select a zone first")
            return
        new_zone = self.session.split(zone.index, orientation)
        if new_zone:
            self._update_status(f"Split {zone.name} → {new_zone.name}")
        else:
            self._update_status(f"{zone.name} is too small to split")

    def _merge_selected(self):
        zone = self.selected_zone
        if zone is None:
            self._update_status("Select a zone first")
            return
        neighbor = self.session.mergeable_neighbor(zone.index)
        if neighbor and self.session.merge(zone.index):
            self._update_status(f"Merged {neighbor.name} into {zone.name}")
        else:
            self._update_status(f"{zone.name} has no neighbour sharing a full edge")

    def save_layout(self, name: Optional[str] = None):
        if self.session.save(name):
            self._update_status(f"Saved layout '{self.session.current_layout.name}'")
        else:
            self._update_status("Failed to save layout")

    def toggle_layout_manager(self):
        if self.layout_manager is None:
            self.layout_manager = LayoutManagerWindow(self)
        if self.layout_manager.get_visible():
            self.layout_manager.hide()
        else:
            self.layout_manager.refresh()
            self.layout_manager.show_all()
            self.layout_manager.present()

    def on_key_press(self, widget, event):
        """Handle keyboard shortcuts"""
        keyname = Gdk.keyval_name(event.keyval)

        if keyname == 'Escape':
            if self.show_help:
                self.show_help = False
                self.queue_draw()
            elif self.layout_manager and self.layout_manager.get_visible():
                self.layout_manager.hide()
            else:
                self.hide_editor()
            return True

        if keyname == 'F1':
            self.show_help = not self.show_help
            self.queue_draw()
            return True

        if keyname in ('v', 'V'):
            self._split_selected(Orientation.VERTICAL)
        elif keyname in ('b', 'B'):
            self._split_selected(Orientation.HORIZONTAL)
        elif keyname in ('m', 'M'):
            self._merge_selected()
        elif keyname in ('r', 'R'):
            self.selected_index = None
            self.session.reset()
            self._update_status("Reset to a single zone")
        elif keyname in ('u', 'U'):
            self.session.revert()
            self._update_status("Reverted to last saved state")
        elif keyname in ('s', 'S'):
            self.save_layout()
        elif keyname in ('l', 'L'):
            self.toggle_layout_manager()
        elif keyname in ('p', 'P'):
            self.preview_visible = not self.preview_visible
            if self.preview_visible:
                hyprctl.show_zones()
            else:
                hyprctl.hide_zones()
            self._update_status(f"Plugin preview: {'ON' if self.preview_visible else 'OFF'}")
        elif keyname in ('d', 'D'):
            self.show_dimensions = not self.show_dimensions
            self._update_status(f"Dimension display: {'ON' if self.show_dimensions else 'OFF'}")
        else:
            return False

        return True


class LayoutManagerWindow(Gtk.Window):
    """Utility window listing stored layouts and monitor/workspace mappings"""

    def __init__(self, editor: ZoneEditorOverlay):
        super().__init__(type=Gtk.WindowType.TOPLEVEL)

        self.editor = editor
        self.session = editor.session
        self.library = editor.session.library

        self.set_title("HyprZones Layouts")
        self.set_default_size(420, 560)
        self.set_keep_above(True)
        self.set_type_hint(Gdk.WindowTypeHint.UTILITY)
        self.set_skip_taskbar_hint(True)
        self.set_transient_for(editor)

        self.connect("delete-event", lambda w, e: w.hide() or True)
        self.connect("key-press-event", self._on_key_press)

        self._create_ui()

    def _create_ui(self):
        vbox = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=10)
        vbox.set_margin_start(15)
        vbox.set_margin_end(15)
        vbox.set_margin_top(15)
        vbox.set_margin_bottom(15)
        self.add(vbox)

        # === Layouts ===
        self.header = Gtk.Label()
        self.header.set_halign(Gtk.Align.START)
        vbox.pack_start(self.header, False, False, 0)

        self.name_entry = Gtk.Entry()
        self.name_entry.set_placeholder_text("Layout name")
        vbox.pack_start(self.name_entry, False, False, 0)

        scrolled = Gtk.ScrolledWindow()
        scrolled.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        scrolled.set_vexpand(True)
        vbox.pack_start(scrolled, True, True, 0)

        self.layout_listbox = Gtk.ListBox()
        self.layout_listbox.set_selection_mode(Gtk.SelectionMode.SINGLE)
        self.layout_listbox.set_activate_on_single_click(False)
        self.layout_listbox.connect("row-selected", self._on_layout_selected)
        self.layout_listbox.connect("row-activated", lambda box, row: self._on_load())
        scrolled.add(self.layout_listbox)

        button_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=5)
        button_box.set_homogeneous(True)
        vbox.pack_start(button_box, False, False, 0)

        for label, handler in (("Load", self._on_load), ("Save", self._on_save),
                               ("Rename", self._on_rename), ("Delete", self._on_delete)):
            button = Gtk.Button(label=label)
            button.connect("clicked", lambda btn, h=handler: h())
            button_box.pack_start(button, True, True, 0)

        template_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=5)
        vbox.pack_start(template_box, False, False, 0)

        self.template_combo = Gtk.ComboBoxText()
        for template in TEMPLATE_NAMES:
            self.template_combo.append(template, template)
        self.template_combo.set_active_id(TEMPLATE_NAMES[0])
        template_box.pack_start(self.template_combo, True, True, 0)

        self.columns_spin = Gtk.SpinButton.new_with_range(1, 8, 1)
        self.columns_spin.set_value(2)
        self.columns_spin.set_tooltip_text("Columns")
        template_box.pack_start(self.columns_spin, False, False, 0)

        self.rows_spin = Gtk.SpinButton.new_with_range(1, 8, 1)
        self.rows_spin.set_value(2)
        self.rows_spin.set_tooltip_text("Rows")
        template_box.pack_start(self.rows_spin, False, False, 0)

        apply_btn = Gtk.Button(label="Apply Template")
        apply_btn.connect("clicked", lambda btn: self._on_apply_template())
        template_box.pack_start(apply_btn, False, False, 0)

        # === Mappings ===
        mappings_header = Gtk.Label()
        mappings_header.set_markup("<b>Mappings</b>")
        mappings_header.set_halign(Gtk.Align.START)
        vbox.pack_start(mappings_header, False, False, 5)

        mappings_scrolled = Gtk.ScrolledWindow()
        mappings_scrolled.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        mappings_scrolled.set_vexpand(True)
        vbox.pack_start(mappings_scrolled, True, True, 0)

        self.mapping_listbox = Gtk.ListBox()
        self.mapping_listbox.set_selection_mode(Gtk.SelectionMode.NONE)
        mappings_scrolled.add(self.mapping_listbox)

        add_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=5)
        vbox.pack_start(add_box, False, False, 0)

        self.monitor_combo = Gtk.ComboBoxText()
        self.monitor_combo.append(WILDCARD, "All monitors")
        for monitor in hyprctl.fetch_monitors():
            self.monitor_combo.append(monitor.name, monitor.name)
        self.monitor_combo.set_active_id(WILDCARD)
        self.monitor_combo.connect("changed", lambda combo: self._update_add_button())
        add_box.pack_start(self.monitor_combo, False, False, 0)

        self.workspace_entry = Gtk.Entry()
        self.workspace_entry.set_placeholder_text("* or 1,3 or 1-5")
        self.workspace_entry.set_width_chars(10)
        self.workspace_entry.connect("changed", lambda entry: self._update_add_button())
        add_box.pack_start(self.workspace_entry, True, True, 0)

        self.layout_combo = Gtk.ComboBoxText()
        add_box.pack_start(self.layout_combo, False, False, 0)

        self.add_button = Gtk.Button(label="+")
        self.add_button.connect("clicked", lambda btn: self._on_add_mapping())
        add_box.pack_start(self.add_button, False, False, 0)

        close_btn = Gtk.Button(label="Close Editor")
        close_btn.connect("clicked", lambda btn: self.editor.hide_editor())
        vbox.pack_start(close_btn, False, False, 5)

    def update_header(self):
        self.header.set_markup(header_markup(self.session.current_layout, self.session.has_changes))

    def refresh(self):
        """Rebuild both lists from the config file"""
        layout = self.session.current_layout
        self.update_header()

        for child in self.layout_listbox.get_children():
            self.layout_listbox.remove(child)

        self.layout_combo.remove_all()

        for stored in self.library.load_all_layouts():
            row = Gtk.ListBoxRow()
            row.layout_name = stored.name

            hbox = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=10)
            hbox.set_margin_start(10)
            hbox.set_margin_end(10)
            hbox.set_margin_top(5)
            hbox.set_margin_bottom(5)

            label = Gtk.Label()
            label.set_markup(layout_row_markup(stored.name, stored.name == layout.name))
            label.set_halign(Gtk.Align.START)
            hbox.pack_start(label, True, True, 0)

            count_label = Gtk.Label(label=f"{len(stored.zones)} zones")
            count_label.get_style_context().add_class("dim-label")
            hbox.pack_start(count_label, False, False, 0)

            row.add(hbox)
            self.layout_listbox.add(row)
            self.layout_combo.append(stored.name, stored.name)

        self.layout_combo.set_active_id(layout.name)
        self.layout_listbox.show_all()

        for child in self.mapping_listbox.get_children():
            self.mapping_listbox.remove(child)

        for position, mapping in enumerate(self.library.load_all_mappings()):
            self.mapping_listbox.add(self._mapping_row(position, mapping))
        self.mapping_listbox.show_all()

        self._update_add_button()

    def _mapping_row(self, position: int, mapping: LayoutMapping) -> Gtk.ListBoxRow:
        row = Gtk.ListBoxRow()
        hbox = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=10)
        hbox.set_margin_start(10)
        hbox.set_margin_end(10)

        monitor = "All" if mapping.monitor == WILDCARD else mapping.monitor
        workspaces = "All" if mapping.workspaces == WILDCARD else mapping.workspaces
        label = Gtk.Label(label=f"{monitor} / WS {workspaces} → {mapping.layout}")
        label.set_halign(Gtk.Align.START)
        hbox.pack_start(label, True, True, 0)

        delete_btn = Gtk.Button(label="×")
        delete_btn.connect("clicked", lambda btn: self._on_remove_mapping(position))
        hbox.pack_start(delete_btn, False, False, 0)

        row.add(hbox)
        return row

    def _selected_name(self) -> str:
        return self.name_entry.get_text().strip()

    def _on_layout_selected(self, listbox, row):
        if row is not None and hasattr(row, 'layout_name'):
            self.name_entry.set_text(row.layout_name)

    def _on_load(self):
        name = self._selected_name()
        if name and self.session.load(name):
            self.editor.selected_index = None
            self.editor._update_status(f"Loaded layout '{name}'")

    def _on_apply_template(self):
        template = self.template_combo.get_active_id()
        columns = self.columns_spin.get_value_as_int()
        rows = self.rows_spin.get_value_as_int()
        if template and self.session.apply_template(template, columns, rows):
            self.editor.selected_index = None
            self.editor._update_status(f"Applied template '{template}' ({len(self.session.zones)} zones)")

    def _on_save(self):
        name = self._selected_name() or self.session.current_layout.name
        self.editor.save_layout(name)
        self.refresh()

    def _on_rename(self):
        row = self.layout_listbox.get_selected_row()
        new_name = self._selected_name()
        if row is None or not new_name or new_name == row.layout_name:
            return

        old_name = row.layout_name
        if self.library.rename_layout(old_name, new_name):
            if self.session.current_layout.name == old_name:
                self.session.current_layout.name = new_name
                self.session.original_layout.name = new_name
            hyprctl.reload_config()
            self.editor._update_status(f"Renamed layout: {old_name} → {new_name}")
        else:
            self._show_error("Failed to rename layout",
                             f"Could not rename '{old_name}' to '{new_name}'. "
                             f"The new name may already exist.")
        self.refresh()

    def _on_delete(self):
        row = self.layout_listbox.get_selected_row()
        if row is None:
            return

        confirm = Gtk.MessageDialog(
            transient_for=self,
            modal=True,
            message_type=Gtk.MessageType.QUESTION,
            buttons=Gtk.ButtonsType.YES_NO,
            text=f"Delete layout '{row.layout_name}'?"
        )
        confirm.format_secondary_text("Mappings pointing to it are removed as well.")
        response = confirm.run()
        confirm.destroy()

        if response == Gtk.ResponseType.YES and self.library.delete_layout(row.layout_name):
            hyprctl.reload_config()
            self.name_entry.set_text("")
            self.editor._update_status(f"Deleted layout: {row.layout_name}")
        self.refresh()

    def _update_add_button(self):
        monitor = self.monitor_combo.get_active_id() or WILDCARD
        workspaces = self.workspace_entry.get_text().strip() or WILDCARD
        self.add_button.set_sensitive(
            self.layout_combo.get_active_id() is not None and
            self.library.can_add_mapping(monitor, workspaces)
        )

    def _on_add_mapping(self):
        layout_name = self.layout_combo.get_active_id()
        if not layout_name:
            return
        monitor = self.monitor_combo.get_active_id() or WILDCARD
        workspaces = self.workspace_entry.get_text().strip() or WILDCARD
        if self.library.add_mapping(LayoutMapping(monitor, workspaces, layout_name)):
            hyprctl.reload_config()
        self.workspace_entry.set_text("")
        self.refresh()

    def _on_remove_mapping(self, position: int):
        if self.library.remove_mapping(position):
            hyprctl.reload_config()
        self.refresh()

    def _show_error(self, title: str, message: str):
        dialog = Gtk.MessageDialog(
            transient_for=self,
            modal=True,
            message_type=Gtk.MessageType.ERROR,
            buttons=Gtk.ButtonsType.OK,
            text=title
        )
        dialog.format_secondary_text(message)
        dialog.run()
        dialog.destroy()

    def _on_key_press(self, widget, event):
        if Gdk.keyval_name(event.keyval) == 'Escape':
            self.hide()
            return True
        return False
