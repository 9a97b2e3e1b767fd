"""Application entry point and setup for Year Progress."""

import logging
import os
import sys

from PySide6.QtCore import QLocale
from PySide6.QtWidgets import QApplication

from yearprogress.core.calendar import Calendar
from yearprogress.core.controller import ProgressController
from yearprogress.core.preferences import PreferenceStore
from yearprogress.core.strings import StringTable
from yearprogress.ui.tray import TrayApp

LANGUAGE_ENV_VAR = "YEARPROGRESS_LANG"


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def detect_language() -> str:
    """Language for the string table: env override, else the system locale."""
    override = os.environ.get(LANGUAGE_ENV_VAR)
    if override:
        return override.strip().lower()
    name = QLocale.system().name()  # e.g. "ko_KR"
    return name.split("_", 1)[0].lower() or "en"


def calendar_for_locale(locale: QLocale) -> Calendar:
    """Week rules of the system locale (Qt numbers weekdays Monday=1..Sunday=7)."""
    first_day = locale.firstDayOfWeek().value - 1
    # Monday-first locales use ISO week numbering
    if first_day == 0:
        return Calendar.iso()
    return Calendar(first_weekday=first_day, minimum_days_in_first_week=1)


def run() -> None:
    """Initialize the application, load preferences, and start the tray icon."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Year Progress")
    app.setApplicationDisplayName("Year Progress")
    app.setQuitOnLastWindowClosed(False)

    strings = StringTable(detect_language())
    store = PreferenceStore()
    controller = ProgressController(store, calendar_for_locale(QLocale.system()), strings)
    logging.info("Loaded preferences from %s", store.file_path)

    tray = TrayApp(app, controller)
    tray.start()

    sys.exit(app.exec())
