"""Editor session tests"""

import pytest

from hypr_zones import hyprctl
from hypr_zones.layout_library import Layout, LayoutMapping
from hypr_zones.geometry import MonitorGeometry
from hypr_zones.session import EditorSession, EditorSettings
from hypr_zones.zone import Orientation, template_zones


@pytest.fixture
def reloads(monkeypatch):
    """Record plugin reload requests instead of running hyprctl"""
    calls = []
    monkeypatch.setattr(hyprctl, "reload_config", lambda: calls.append(True) or True)
    return calls


@pytest.fixture
def session(library, monitor, reloads):
    return EditorSession(library, monitor)


class TestLoading:
    """Layout selection tests"""

    def test_starts_with_default(self, session):
        assert session.current_layout.name == "default"
        assert len(session.zones) == 2
        assert not session.has_changes

    def test_load_for_empty_store_uses_default(self, session):
        session.load_for("DP-1", 3)

        assert session.monitor_name == "DP-1"
        assert session.workspace_id == 3
        assert session.current_layout.name == "default"

    def test_load_for_uses_mapping(self, session, library):
        library.save_layout(Layout("Main", template_zones("columns", 2)))
        library.save_layout(Layout("Grid", template_zones("grid", 3, 3)))
        library.add_mapping(LayoutMapping("DP-1", "3", "Grid"))

        session.load_for("DP-1", 3)
        assert session.current_layout.name == "Grid"

        session.load_for("DP-1", 4)
        assert session.current_layout.name == "Main"

    def test_load_by_name(self, session, library):
        library.save_layout(Layout("Grid", template_zones("grid", 3, 3)))

        assert session.load("Grid")
        assert len(session.zones) == 9
        assert not session.load("missing")

    def test_loaded_layout_is_a_copy(self, session, library):
        layout = Layout("Main", template_zones("columns", 2))
        session.set_layout(layout)
        session.split(0, Orientation.HORIZONTAL)

        assert len(layout.zones) == 2


class TestEditing:
    """Structural edit tests"""

    def test_split_marks_changed(self, session):
        events = []
        session.on_changed = lambda: events.append(True)

        new_zone = session.split(0, Orientation.HORIZONTAL)

        assert new_zone.index == 2
        assert session.has_changes
        assert events

    def test_split_refused(self, session):
        session.set_layout(Layout("Narrow", template_zones("grid", 3, 3)))
        # A third of 1080 = 360 px still allows one split, 180 px does not
        first = session.split(0, Orientation.HORIZONTAL)
        assert first is not None
        assert session.split(0, Orientation.HORIZONTAL) is None

    def test_split_unknown_zone(self, session):
        assert session.split(42, Orientation.VERTICAL) is None
        assert not session.has_changes

    def test_merge(self, session):
        assert session.mergeable_neighbor(0).index == 1
        assert session.merge(0)
        assert len(session.zones) == 1
        assert session.zones[0].width == 1.0

    def test_merge_without_neighbor(self, session):
        session.reset()
        assert session.mergeable_neighbor(0) is None
        assert not session.merge(0)

    def test_reset_and_revert(self, session):
        session.reset()
        assert len(session.zones) == 1
        assert session.has_changes

        session.revert()
        assert len(session.zones) == 2
        assert not session.has_changes

    def test_can_split(self, session):
        assert session.can_split(0, Orientation.VERTICAL)
        assert not session.can_split(7, Orientation.VERTICAL)


class TestTemplates:
    """Applying plugin templates"""

    def test_apply_template(self, session):
        session.begin_drag(session.splitters()[0], 960, 500)

        assert session.apply_template("grid", 3, 2)

        assert len(session.zones) == 6
        layout = session.current_layout
        assert (layout.template, layout.columns, layout.rows) == ("grid", 3, 2)
        assert session.has_changes
        assert not session.is_dragging

    def test_template_saved(self, session, library):
        session.apply_template("priority-grid", 1, 1)
        session.save("Focus")

        stored = library.load_layout("Focus")
        assert [z.name for z in stored.zones] == ["Main", "Top Right", "Bottom Right"]
        assert stored.template == "priority-grid"

    def test_invalid_template(self, session, capsys):
        assert not session.apply_template("columns", 0)
        assert len(session.zones) == 2
        assert not session.has_changes
        assert "Cannot apply template" in capsys.readouterr().err

    def test_hotkey_kept_through_edit_and_save(self, session, library):
        library.save_layout(Layout("Keys", template_zones("columns", 2), hotkey="SUPER+3"))
        session.load("Keys")
        session.split(0, Orientation.HORIZONTAL)
        session.save()

        assert library.load_layout("Keys").hotkey == "SUPER+3"


class TestGeometry:
    """Pixel geometry tests"""

    def test_zone_rects(self, session):
        rects = session.zone_rects()

        assert [zone.index for zone, _ in rects] == [0, 1]
        assert rects[0][1].width == pytest.approx(940)

    def test_hit_testing(self, session):
        segment = session.splitter_at(960, 500)

        assert segment is not None
        assert segment.orientation is Orientation.VERTICAL
        assert session.splitter_at(400, 500) is None
        assert session.zone_at(400, 500).index == 0
        assert session.zone_at(1500, 500).index == 1
        assert session.zone_at(960, 500) is None

    def test_splitter_rects_thickness(self, library, monitor, reloads):
        session = EditorSession(library, monitor, EditorSettings(splitter_thickness=20))
        rect = session.splitter_rects()[0]
        assert rect.width == 20


class TestDragging:
    """Drag through the session"""

    def test_drag_cycle(self, session):
        segment = session.splitter_at(960, 500)

        assert session.begin_drag(segment, 960, 500)
        assert session.is_dragging

        session.drag_to(1152, 700)
        assert session.zones[0].width == pytest.approx(0.6)
        assert session.zones[1].x == pytest.approx(0.6)
        assert session.has_changes

        session.end_drag()
        assert not session.is_dragging
        assert session.drag_to(1500, 500) == 0.0

    def test_press_without_move_keeps_clean(self, session):
        events = []
        session.on_changed = lambda: events.append(True)

        session.begin_drag(session.splitters()[0], 960, 500)
        session.drag_to(960, 500)
        session.drag_to(960, 800)
        session.end_drag()

        assert not session.has_changes
        assert events == []

    def test_clamped_drag_notifies_once(self, session):
        events = []
        session.on_changed = lambda: events.append(True)
        session.begin_drag(session.splitters()[0], 960, 500)

        session.drag_to(5000, 500)
        session.drag_to(6000, 500)

        assert len(events) == 1
        assert session.has_changes

    def test_drag_without_room_keeps_clean(self, library, reloads):
        narrow = EditorSession(library, MonitorGeometry(0, 0, 300, 1080))
        narrow.begin_drag(narrow.splitters()[0], 150, 500)

        assert narrow.drag_to(250, 500) == 0.0
        assert not narrow.has_changes

    def test_dragged_segment_still_identified_after_move(self, session):
        session.begin_drag(session.splitters()[0], 960, 500)
        session.drag_to(1152, 500)

        moved = session.splitters()[0]
        assert moved != session.drag.segment
        assert moved.key == session.drag.segment.key

    def test_revert_cancels_drag(self, session):
        session.begin_drag(session.splitters()[0], 960, 500)
        session.revert()
        assert not session.is_dragging


class TestSaving:
    """Persistence tests"""

    def test_save_normalizes_and_reloads(self, session, library, reloads):
        session.begin_drag(session.splitters()[0], 960, 500)
        session.drag_to(1151, 500)
        session.end_drag()

        assert session.save("Work")

        assert not session.has_changes
        assert reloads == [True]
        stored = library.load_layout("Work")
        assert stored.zones[0].width == pytest.approx(0.599)
        assert stored.zones[1].x == pytest.approx(0.599)
        assert session.original_layout == session.current_layout

    def test_revert_after_save(self, session):
        session.save("Work")
        session.reset()
        session.revert()

        assert len(session.zones) == 2
        assert session.current_layout.name == "Work"

    def test_save_without_reload(self, library, monitor, reloads):
        session = EditorSession(library, monitor, EditorSettings(reload_plugin_on_save=False))

        assert session.save()

        assert reloads == []
        assert library.list_layouts() == ["default"]

    def test_save_no_overwrite(self, session, library):
        library.save_layout(Layout("Taken", template_zones("columns", 1)))

        assert not session.save("Taken", overwrite=False)
        assert len(library.load_layout("Taken").zones) == 1
