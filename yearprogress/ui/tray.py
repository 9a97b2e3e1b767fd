"""System tray icon driving the two update timers."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QPoint, QTimer
from PySide6.QtGui import QAction, QCursor, QGuiApplication
from PySide6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from yearprogress.core.controller import ProgressController
from yearprogress.ui.glyphs import labeled_glyph_icon
from yearprogress.ui.panel import ProgressPanel, resolve_theme_color

logger = logging.getLogger(__name__)

STATS_INTERVAL_MS = 1000
ANIMATION_INTERVAL_MS = 200


class TrayApp(QObject):
    """Tray icon plus popup panel.

    The statistics timer refreshes the snapshot once a second; the animation
    timer advances the glyph frame five times a second. Both only replace
    controller state, so the icon and panel are redrawn from whatever the
    controller holds when its listeners fire.
    """

    def __init__(self, app: QApplication, controller: ProgressController) -> None:
        super().__init__()
        self._app = app
        self._controller = controller
        self._panel: Optional[ProgressPanel] = None
        self._last_icon_key: Optional[tuple[str, str, str]] = None

        self._tray = QSystemTrayIcon(self)
        self._menu = QMenu()
        strings = controller.strings
        show_action = QAction(strings.text("menu_show_panel"), self._menu)
        show_action.triggered.connect(self.toggle_panel)
        quit_action = QAction(strings.text("button_quit"), self._menu)
        quit_action.triggered.connect(self.quit)
        self._menu.addAction(show_action)
        self._menu.addSeparator()
        self._menu.addAction(quit_action)
        self._tray.setContextMenu(self._menu)
        self._tray.activated.connect(self._on_activated)

        controller.add_listener(self._on_state_changed)
        self._update_tray()

        self._stats_timer = QTimer(self)
        self._stats_timer.setInterval(STATS_INTERVAL_MS)
        self._stats_timer.timeout.connect(controller.refresh)

        self._animation_timer = QTimer(self)
        self._animation_timer.setInterval(ANIMATION_INTERVAL_MS)
        self._animation_timer.timeout.connect(controller.advance_animation)

    def start(self) -> None:
        self._tray.show()
        self._stats_timer.start()
        self._animation_timer.start()
        if not QSystemTrayIcon.isSystemTrayAvailable():
            logger.warning("System tray is not available; showing the panel instead")
            self.toggle_panel()
        logger.info("Tray started (%s)", self._controller.compact_label())

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _on_state_changed(self) -> None:
        self._update_tray()
        if self._panel is not None and self._panel.isVisible():
            self._panel.refresh()

    def _update_tray(self) -> None:
        color = resolve_theme_color(self._controller.preferences.theme_color)
        glyph = self._controller.icon_frame()
        label = self._controller.compact_label()
        icon_key = (glyph, color.name(), label)
        if icon_key != self._last_icon_key:
            self._tray.setIcon(labeled_glyph_icon(glyph, color, label))
            self._last_icon_key = icon_key
        self._tray.setToolTip(label)

    # ------------------------------------------------------------------
    # Panel
    # ------------------------------------------------------------------

    def _on_activated(self, reason) -> None:
        if reason == QSystemTrayIcon.Trigger:
            self.toggle_panel()

    def _ensure_panel(self) -> ProgressPanel:
        if self._panel is None:
            self._panel = ProgressPanel(self._controller, on_quit=self.quit)
        return self._panel

    def toggle_panel(self) -> None:
        panel = self._ensure_panel()
        if panel.isVisible():
            panel.hide()
            return
        panel.refresh()
        panel.adjustSize()
        panel.move(self._panel_position(panel.width(), panel.height()))
        panel.show()
        panel.raise_()
        panel.activateWindow()

    def _panel_position(self, width: int, height: int) -> QPoint:
        """Below the tray icon when it sits at the top of the screen, above it otherwise."""
        anchor = self._tray.geometry().center()
        if anchor.isNull():
            anchor = QCursor.pos()
        screen = QGuiApplication.screenAt(anchor) or QGuiApplication.primaryScreen()
        if screen is None:
            return anchor
        geo = screen.availableGeometry()
        x = min(max(anchor.x() - width // 2, geo.left() + 8), geo.right() - width - 8)
        if anchor.y() < geo.center().y():
            y = geo.top() + 8
        else:
            y = geo.bottom() - height - 8
        return QPoint(x, y)

    def quit(self) -> None:
        self._stats_timer.stop()
        self._animation_timer.stop()
        if self._panel is not None:
            self._panel.hide()
        self._tray.hide()
        self._app.quit()
