from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Callable, List, Optional

from yearprogress.core.calendar import Calendar, CalendarError
from yearprogress.core.engine import (
    ProgressSnapshot,
    advance_animation_frame,
    compute_snapshot,
    current_icon_frame,
)
from yearprogress.core.preferences import Preferences, PreferenceStore, normalize_color
from yearprogress.core.strings import StringTable
from yearprogress.core.styles import DisplayStyle, IconAnimationStyle, frame_count

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ProgressController:
    """Owns the preferences, the current snapshot and the animation frame.

    The statistics tick calls :meth:`refresh` and the animation tick calls
    :meth:`advance_animation`. Each of the three state values is a single
    reference that is only ever replaced, so readers always see either the
    old or the new value.
    """

    def __init__(
        self,
        store: PreferenceStore,
        calendar: Calendar,
        strings: StringTable,
        clock: Callable[[], datetime] = datetime.now,
        preferences: Optional[Preferences] = None,
    ) -> None:
        self._store = store
        self._calendar = calendar
        self._strings = strings
        self._clock = clock
        self._preferences = preferences if preferences is not None else store.load()
        self._snapshot: Optional[ProgressSnapshot] = None
        self._animation_frame = 0
        self._listeners: List[Listener] = []
        self.refresh()

    @property
    def preferences(self) -> Preferences:
        return self._preferences

    @property
    def snapshot(self) -> Optional[ProgressSnapshot]:
        """Latest good snapshot; ``None`` only if no computation ever succeeded."""
        return self._snapshot

    @property
    def animation_frame(self) -> int:
        return self._animation_frame

    @property
    def strings(self) -> StringTable:
        return self._strings

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    def refresh(self) -> bool:
        """Recompute the snapshot. Returns False when the previous one was kept."""
        now = self._clock()
        try:
            snapshot = compute_snapshot(
                now,
                self._preferences.target_date,
                self._calendar,
                self._strings,
                animation_frame_index=self._animation_frame,
            )
        except CalendarError as e:
            logger.warning("Keeping previous snapshot: %s", e)
            return False
        self._snapshot = snapshot
        self._notify()
        return True

    def advance_animation(self) -> int:
        self._animation_frame = advance_animation_frame(
            self._preferences.icon_style, self._animation_frame
        )
        self._replace_frame_in_snapshot()
        self._notify()
        return self._animation_frame

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def icon_frame(self) -> str:
        progress = self._snapshot.year_progress if self._snapshot else 0.0
        return current_icon_frame(self._preferences.icon_style, progress, self._animation_frame)

    def compact_label(self) -> str:
        if self._snapshot is None:
            return ""
        if self._preferences.display_style is DisplayStyle.SHOW_DDAY:
            return self._snapshot.dday_text
        return self._snapshot.year_progress_text

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_target_date(self, target_date: datetime) -> None:
        self._replace(target_date=target_date)
        self.refresh()

    def set_display_style(self, style: DisplayStyle) -> None:
        self._replace(display_style=DisplayStyle(style))
        self._notify()

    def set_icon_style(self, style: IconAnimationStyle) -> None:
        style = IconAnimationStyle(style)
        self._replace(icon_style=style)
        self._animation_frame %= frame_count(style)
        self._replace_frame_in_snapshot()
        self._notify()

    def set_theme_color(self, color: Optional[str]) -> None:
        """Set ``#RRGGBB`` or ``None`` to follow the platform accent color."""
        if color is not None:
            normalized = normalize_color(color)
            if normalized is None:
                raise ValueError(f"Expected a #RRGGBB color, got {color!r}")
            color = normalized
        self._replace(theme_color=color)
        self._notify()

    def _replace_frame_in_snapshot(self) -> None:
        if self._snapshot is not None:
            self._snapshot = dataclasses.replace(
                self._snapshot, animation_frame_index=self._animation_frame
            )

    def _replace(self, **changes) -> None:
        self._preferences = dataclasses.replace(self._preferences, **changes)
        self._store.save(self._preferences)
