"""Tests for yearprogress.core.controller – state ownership, ticks and setters."""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import List

import pytest

from yearprogress.core.calendar import Calendar
from yearprogress.core.controller import ProgressController
from yearprogress.core.preferences import PreferenceStore, Preferences
from yearprogress.core.strings import StringTable
from yearprogress.core.styles import DisplayStyle, IconAnimationStyle, frames_for


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class RecordingStore(PreferenceStore):
    """In-memory store that remembers every save."""

    def __init__(self, initial: Preferences) -> None:
        super().__init__(Path("unused.json"))
        self._initial = initial
        self.saved: List[Preferences] = []

    def load(self) -> Preferences:
        return self._initial

    def save(self, preferences: Preferences) -> None:
        self.saved.append(preferences)


@pytest.fixture(scope="module")
def strings() -> StringTable:
    return StringTable("en")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 7, 2))


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore(Preferences(target_date=datetime(2024, 7, 12)))


@pytest.fixture()
def controller(store: RecordingStore, clock: FakeClock, strings: StringTable) -> ProgressController:
    return ProgressController(store, Calendar(), strings, clock=clock)


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------

class TestStartup:
    def test_loads_preferences_from_store(self, controller: ProgressController):
        assert controller.preferences.target_date == datetime(2024, 7, 12)

    def test_computes_initial_snapshot(self, controller: ProgressController):
        assert controller.snapshot is not None
        assert controller.snapshot.dday_text == "D-10"
        assert controller.snapshot.current_instant == datetime(2024, 7, 2)

    def test_animation_starts_at_zero(self, controller: ProgressController):
        assert controller.animation_frame == 0

    def test_explicit_preferences_skip_load(self, store, clock, strings):
        prefs = Preferences(target_date=datetime(2024, 7, 2), display_style=DisplayStyle.SHOW_DDAY)
        c = ProgressController(store, Calendar(), strings, clock=clock, preferences=prefs)
        assert c.preferences is prefs
        assert c.compact_label() == "D-Day"

    def test_startup_does_not_save(self, controller: ProgressController, store: RecordingStore):
        assert store.saved == []


# ---------------------------------------------------------------------------
# Statistics tick
# ---------------------------------------------------------------------------

class TestRefresh:
    def test_follows_the_clock(self, controller: ProgressController, clock: FakeClock):
        clock.now = datetime(2024, 7, 11, 23, 59)
        assert controller.refresh() is True
        assert controller.snapshot.dday_text == "D-1"

    def test_snapshot_replaced_wholesale(self, controller: ProgressController, clock: FakeClock):
        before = controller.snapshot
        clock.now += timedelta(seconds=1)
        controller.refresh()
        assert controller.snapshot is not before
        assert before.current_instant == datetime(2024, 7, 2)

    def test_calendar_failure_keeps_previous_snapshot(self, controller: ProgressController, clock: FakeClock):
        before = controller.snapshot
        clock.now = datetime(9999, 12, 15)
        assert controller.refresh() is False
        assert controller.snapshot is before

    def test_first_year_keeps_previous_snapshot(self, controller: ProgressController, clock: FakeClock):
        before = controller.snapshot
        clock.now = datetime(1, 1, 3)
        assert controller.refresh() is False
        assert controller.snapshot is before

    def test_first_year_at_startup_leaves_no_snapshot(self, store, strings):
        c = ProgressController(store, Calendar(), strings, clock=FakeClock(datetime(1, 1, 3)))
        assert c.snapshot is None

    def test_no_save_on_tick(self, controller: ProgressController, store: RecordingStore, clock: FakeClock):
        clock.now += timedelta(hours=5)
        controller.refresh()
        controller.advance_animation()
        assert store.saved == []

    def test_snapshot_none_when_first_computation_fails(self, store, strings):
        c = ProgressController(store, Calendar(), strings, clock=FakeClock(datetime(9999, 12, 31)))
        assert c.snapshot is None
        assert c.compact_label() == ""
        assert c.icon_frame() == frames_for(IconAnimationStyle.FILLING_PIE)[0]


# ---------------------------------------------------------------------------
# Animation tick
# ---------------------------------------------------------------------------

class TestAnimation:
    def test_cycles_through_frames(self, controller: ProgressController):
        seen = [controller.advance_animation() for _ in range(4)]
        assert seen == [1, 2, 3, 0]

    def test_snapshot_carries_frame_index(self, controller: ProgressController, clock: FakeClock):
        before = controller.snapshot
        controller.advance_animation()
        assert controller.snapshot.animation_frame_index == 1
        assert before.animation_frame_index == 0
        clock.now += timedelta(seconds=1)
        controller.refresh()
        assert controller.snapshot.animation_frame_index == 1

    def test_icon_frame_combines_progress_and_animation(self, controller: ProgressController):
        frames = frames_for(IconAnimationStyle.FILLING_PIE)
        # year progress 0.5 -> base frame 1
        assert controller.icon_frame() == frames[1]
        controller.advance_animation()
        assert controller.icon_frame() == frames[2]

    def test_icon_style_change_keeps_index_in_range(self, controller: ProgressController):
        controller.set_icon_style(IconAnimationStyle.MOON)
        for _ in range(7):
            controller.advance_animation()
        assert controller.animation_frame == 7
        controller.set_icon_style(IconAnimationStyle.CLOCK)
        assert controller.animation_frame == 1
        assert controller.icon_frame() in frames_for(IconAnimationStyle.CLOCK)


# ---------------------------------------------------------------------------
# Setters
# ---------------------------------------------------------------------------

class TestSetters:
    def test_target_date_updates_snapshot_immediately(self, controller: ProgressController):
        controller.set_target_date(datetime(2024, 7, 5))
        assert controller.snapshot.dday_text == "D-3"

    def test_target_date_saved(self, controller: ProgressController, store: RecordingStore):
        controller.set_target_date(datetime(2024, 8, 1))
        assert store.saved[-1].target_date == datetime(2024, 8, 1)

    def test_display_style(self, controller: ProgressController, store: RecordingStore):
        assert controller.compact_label() == "50%"
        controller.set_display_style(DisplayStyle.SHOW_DDAY)
        assert controller.compact_label() == "D-10"
        assert store.saved[-1].display_style is DisplayStyle.SHOW_DDAY

    def test_display_style_from_raw_value(self, controller: ProgressController):
        controller.set_display_style("showDDay")
        assert controller.preferences.display_style is DisplayStyle.SHOW_DDAY

    def test_icon_style_saved(self, controller: ProgressController, store: RecordingStore):
        controller.set_icon_style(IconAnimationStyle.BATTERY)
        assert store.saved[-1].icon_style is IconAnimationStyle.BATTERY

    def test_theme_color_normalized(self, controller: ProgressController, store: RecordingStore):
        controller.set_theme_color("#a1b2c3")
        assert controller.preferences.theme_color == "#A1B2C3"
        assert store.saved[-1].theme_color == "#A1B2C3"

    def test_theme_color_reset_to_accent(self, controller: ProgressController):
        controller.set_theme_color("#112233")
        controller.set_theme_color(None)
        assert controller.preferences.theme_color is None

    def test_theme_color_invalid(self, controller: ProgressController, store: RecordingStore):
        with pytest.raises(ValueError):
            controller.set_theme_color("teal")
        assert controller.preferences.theme_color is None
        assert store.saved == []

    def test_preferences_replaced_not_mutated(self, controller: ProgressController):
        before = controller.preferences
        controller.set_icon_style(IconAnimationStyle.HOURGLASS)
        assert controller.preferences is not before
        assert before.icon_style is IconAnimationStyle.FILLING_PIE

    def test_failed_save_keeps_memory_state(self, tmp_path: Path, clock: FakeClock, strings: StringTable):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        store = PreferenceStore(blocker / "preferences.json")
        c = ProgressController(store, Calendar(), strings, clock=clock)
        c.set_display_style(DisplayStyle.SHOW_DDAY)
        c.set_target_date(datetime(2024, 7, 3))
        assert c.preferences.display_style is DisplayStyle.SHOW_DDAY
        assert c.snapshot.dday_text == "D-1"


# ---------------------------------------------------------------------------
# Listeners
# ---------------------------------------------------------------------------

class TestListeners:
    def test_notified_on_every_change(self, controller: ProgressController):
        calls: List[int] = []
        controller.add_listener(lambda: calls.append(1))
        controller.refresh()
        controller.advance_animation()
        controller.set_display_style(DisplayStyle.SHOW_DDAY)
        controller.set_icon_style(IconAnimationStyle.MOON)
        controller.set_theme_color("#000000")
        controller.set_target_date(datetime(2025, 1, 1))
        assert len(calls) == 6

    def test_not_notified_when_snapshot_kept(self, controller: ProgressController, clock: FakeClock):
        calls: List[int] = []
        controller.add_listener(lambda: calls.append(1))
        clock.now = datetime(9999, 12, 15)
        controller.refresh()
        assert calls == []
