"""
HyprZones Editor application

Single-instance Gtk application. Later invocations forward their command
(toggle, show, hide, quit) to the running instance, so a Hyprland keybind
like ``bind = SUPER, Z, exec, hyprzones-editor toggle`` opens and closes the
editor without restarting it.
"""

import argparse
import signal
import sys
from typing import List, Optional

import gi
gi.require_version('Gtk', '3.0')
from gi.repository import Gtk, Gio, GLib

from . import hyprctl
from .hyprctl import Margins, NoMonitorsError
from .layout_library import LayoutLibrary
from .session import EditorSession, EditorSettings
from .zone_editor import ZoneEditorOverlay


APPLICATION_ID = "dev.hyprzones.Editor"

COMMANDS = ('toggle', 'show', 'hide', 'quit', 'exit')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hyprzones-editor',
        description='HyprZones Editor - Visual zone layout editor for Hyprland'
    )
    parser.add_argument(
        'command',
        nargs='?',
        choices=COMMANDS,
        default='toggle',
        help='Command for the running editor (default: toggle)'
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Config file (default: $HYPRZONES_CONFIG or ~/.config/hypr/hyprzones.toml)'
    )
    parser.add_argument(
        '--margins',
        type=Margins.parse,
        metavar='TOP,BOTTOM,LEFT,RIGHT',
        help='Space kept free around the zones in pixels (default: 97,22,22,22)'
    )
    parser.add_argument(
        '--monitor',
        metavar='NAME',
        help='Edit this monitor instead of the focused one'
    )
    parser.add_argument(
        '--no-reload',
        action='store_true',
        help='Do not ask the plugin to reload after saving'
    )
    return parser


class HyprZonesApplication(Gtk.Application):
    """Owns the editor window; created once per login session"""

    def __init__(self):
        super().__init__(
            application_id=APPLICATION_ID,
            flags=Gio.ApplicationFlags.HANDLES_COMMAND_LINE
        )
        self.session: Optional[EditorSession] = None
        self.editor: Optional[ZoneEditorOverlay] = None
        self.preferred_monitor: Optional[str] = None

    def do_startup(self):
        Gtk.Application.do_startup(self)

        # Keep running while the editor is hidden
        self.hold()

        for signum in (signal.SIGINT, signal.SIGTERM):
            GLib.unix_signal_add(GLib.PRIORITY_DEFAULT, signum, self._on_signal, signum)

    def _on_signal(self, signum):
        print(f"\nReceived signal {signum}, shutting down...")
        self.quit()
        return GLib.SOURCE_REMOVE

    def do_command_line(self, command_line):
        args = build_parser().parse_args(command_line.get_arguments()[1:])

        if self.session is None:
            settings = EditorSettings(reload_plugin_on_save=not args.no_reload)
            if args.margins:
                settings.margins = args.margins
            self.preferred_monitor = args.monitor
            if not self._create_editor(LayoutLibrary(args.config), settings):
                self.quit()
                return 1

        self.run_command(args.command)
        return 0

    def _create_editor(self, library: LayoutLibrary, settings: EditorSettings) -> bool:
        try:
            monitor = hyprctl.pick_monitor(hyprctl.fetch_monitors(), self.preferred_monitor)
        except NoMonitorsError as e:
            self._show_error(str(e))
            return False

        self.session = EditorSession(library, hyprctl.usable_area(monitor, settings.margins), settings)
        self.session.load_for(monitor.name, monitor.active_workspace)

        self.editor = ZoneEditorOverlay(self.session)
        self.add_window(self.editor)
        return True

    def _show_error(self, message: str):
        dialog = Gtk.MessageDialog(
            modal=True,
            message_type=Gtk.MessageType.ERROR,
            buttons=Gtk.ButtonsType.OK,
            text="HyprZones Editor"
        )
        dialog.format_secondary_text(message)
        dialog.run()
        dialog.destroy()

    def refresh(self) -> bool:
        """Reload the layout for whatever monitor/workspace is active now"""
        try:
            monitor = hyprctl.pick_monitor(hyprctl.fetch_monitors(), self.preferred_monitor)
        except NoMonitorsError as e:
            print(f"Error: {e}", file=sys.stderr)
            return False

        self.session.set_monitor(hyprctl.usable_area(monitor, self.session.settings.margins))
        self.session.load_for(monitor.name, monitor.active_workspace)
        self.editor.selected_index = None
        return True

    def run_command(self, command: str):
        if command in ('quit', 'exit'):
            self.quit()
        elif command == 'hide':
            self.editor.hide_editor()
        elif command == 'show':
            self.refresh()
            self.editor.show_editor()
        elif self.editor.get_visible():
            self.editor.hide_editor()
        else:
            self.refresh()
            self.editor.show_editor()


def main(argv: Optional[List[str]] = None):
    """Main entry point for the editor"""
    argv = sys.argv if argv is None else argv

    # Fail fast on bad arguments before contacting a running instance
    build_parser().parse_args(argv[1:])

    app = HyprZonesApplication()
    sys.exit(app.run(argv))


if __name__ == '__main__':
    main()
