from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from yearprogress.core.styles import (
    DEFAULT_DISPLAY_STYLE,
    DEFAULT_ICON_STYLE,
    DisplayStyle,
    IconAnimationStyle,
    parse_display_style,
    parse_icon_style,
)

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "YEARPROGRESS_HOME"
_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def default_target_date(now: Optional[datetime] = None) -> datetime:
    """Last day of the year containing ``now``, at midnight."""
    now = now or datetime.now()
    return datetime(now.year, 12, 31)


def normalize_color(raw: object) -> Optional[str]:
    """Return ``#RRGGBB`` (upper case) or ``None`` if ``raw`` is not such a color."""
    if isinstance(raw, str) and _HEX_COLOR.match(raw.strip()):
        return raw.strip().upper()
    return None


@dataclass(frozen=True)
class Preferences:
    """User settings. Replaced as a whole on every change.

    ``theme_color`` is ``None`` to follow the platform accent color.
    """

    target_date: datetime = field(default_factory=default_target_date)
    display_style: DisplayStyle = DEFAULT_DISPLAY_STYLE
    icon_style: IconAnimationStyle = DEFAULT_ICON_STYLE
    theme_color: Optional[str] = None


def default_store_dir() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".yearprogress"


class PreferenceStore:
    """Persists preferences to ~/.yearprogress/preferences.json.

    Loading never fails: each missing or corrupt value falls back to its
    default. Saving is best effort; write errors are logged and dropped.
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or default_store_dir() / "preferences.json"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> Preferences:
        defaults = Preferences()
        payload = self._read()
        if not payload:
            return defaults

        target_date = defaults.target_date
        raw_date = payload.get("targetDate")
        if raw_date is not None:
            try:
                target_date = datetime.fromisoformat(str(raw_date))
            except ValueError:
                logger.warning("Ignoring invalid targetDate %r in %s", raw_date, self._file_path)
            else:
                # stored values are wall-clock; drop any offset written by hand
                target_date = target_date.replace(tzinfo=None)

        display_style = self._parse(payload, "displayStyle", parse_display_style, defaults.display_style)
        icon_style = self._parse(payload, "iconStyle", parse_icon_style, defaults.icon_style)

        theme_color = None
        raw_color = payload.get("themeColor")
        if raw_color is not None:
            theme_color = normalize_color(raw_color)
            if theme_color is None:
                logger.warning("Ignoring invalid themeColor %r in %s", raw_color, self._file_path)

        return Preferences(
            target_date=target_date,
            display_style=display_style,
            icon_style=icon_style,
            theme_color=theme_color,
        )

    def save(self, preferences: Preferences) -> None:
        payload = {
            "targetDate": preferences.target_date.isoformat(),
            "displayStyle": preferences.display_style.value,
            "iconStyle": preferences.icon_style.value,
            "themeColor": preferences.theme_color,
        }
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save preferences to %s: %s", self._file_path, e)

    def _read(self) -> Dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load preferences from %s: %s", self._file_path, e)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring preferences in %s: expected a JSON object", self._file_path)
            return {}
        return payload

    def _parse(self, payload: Dict[str, Any], key: str, parser, default):
        raw = payload.get(key)
        if raw is None:
            return default
        value = parser(raw)
        if value is None:
            logger.warning("Ignoring invalid %s %r in %s", key, raw, self._file_path)
            return default
        return value
