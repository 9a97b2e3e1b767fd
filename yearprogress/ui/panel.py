"""Popup panel: D-Day header, statistics and settings."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Optional

from PySide6.QtCore import QDate, QLocale, Qt
from PySide6.QtGui import QColor, QGuiApplication, QPalette
from PySide6.QtWidgets import (
    QButtonGroup,
    QColorDialog,
    QDateEdit,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from yearprogress.core.controller import ProgressController
from yearprogress.core.styles import (
    DisplayStyle,
    IconAnimationStyle,
    frames_for,
    title_key,
)
from yearprogress.ui.colors import PanelColors, blend_hex, rgba, text_color_for
from yearprogress.ui.glyphs import render_glyph
from yearprogress.ui.widgets import InfoRow, ProgressBar, StyleOptionRow

PANEL_WIDTH = 320


def resolve_theme_color(theme_color: Optional[str]) -> QColor:
    """The user's color, or the platform accent when none is set."""
    if theme_color:
        return QColor(theme_color)
    palette = QGuiApplication.palette()
    role = getattr(QPalette.ColorRole, "Accent", QPalette.ColorRole.Highlight)
    color = palette.color(role)
    return color if color.isValid() else QColor(PanelColors.FALLBACK_ACCENT)


def _divider() -> QFrame:
    line = QFrame()
    line.setFixedHeight(1)
    line.setStyleSheet(f"background: {PanelColors.DIVIDER}; border: none;")
    return line


class ProgressPanel(QWidget):
    """Detail and settings popup shown from the tray icon.

    Reads everything from the controller and sends edits back through its
    setters; it keeps no state of its own beyond widget references.
    """

    def __init__(self, controller: ProgressController, on_quit: Callable[[], None]) -> None:
        super().__init__(None, Qt.Popup | Qt.FramelessWindowHint)
        self._controller = controller
        self._on_quit = on_quit
        self._strings = controller.strings
        self._style_rows: Dict[str, StyleOptionRow] = {}
        self._display_buttons: Dict[DisplayStyle, QPushButton] = {}
        self._accent_hex = PanelColors.FALLBACK_ACCENT

        self.setObjectName("progressPanel")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setFixedWidth(PANEL_WIDTH)
        self._build_ui()
        self.refresh()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        s = self._strings
        muted = QColor(PanelColors.TEXT_MUTED)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        # Header
        header = QVBoxLayout()
        header.setContentsMargins(16, 16, 16, 16)
        header.setSpacing(2)
        self._target_label = QLabel("")
        self._target_label.setAlignment(Qt.AlignCenter)
        self._target_label.setStyleSheet(f"color: {PanelColors.TEXT_SECONDARY}; font-size: 12px;")
        self._dday_label = QLabel("")
        self._dday_label.setAlignment(Qt.AlignCenter)
        header.addWidget(self._target_label)
        header.addWidget(self._dday_label)
        layout.addLayout(header)
        layout.addWidget(_divider())

        # Statistics
        stats = QVBoxLayout()
        stats.setContentsMargins(16, 14, 16, 14)
        stats.setSpacing(12)
        self._remaining_row = InfoRow(render_glyph("clock", muted, 16), s.text("stats_remaining_time_title"))
        self._day_row = InfoRow(render_glyph("calendar", muted, 16), s.text("stats_day_of_year_title"))
        self._week_row = InfoRow(render_glyph("calendar", muted, 16), s.text("stats_week_of_year_title"))
        self._quarter_row = InfoRow(render_glyph("chart.pie.fill", muted, 16), "")
        self._quarter_bar = ProgressBar(color=PanelColors.QUARTER_FILL, height=5)
        stats.addWidget(self._remaining_row)
        stats.addWidget(self._day_row)
        stats.addWidget(self._week_row)
        quarter_box = QVBoxLayout()
        quarter_box.setSpacing(4)
        quarter_box.addWidget(self._quarter_row)
        quarter_box.addWidget(self._quarter_bar)
        stats.addLayout(quarter_box)
        layout.addLayout(stats)
        layout.addWidget(_divider())

        # Settings
        settings = QVBoxLayout()
        settings.setContentsMargins(16, 14, 16, 14)
        settings.setSpacing(10)
        title = QLabel(s.text("settings_title"))
        title.setStyleSheet(f"color: {PanelColors.TEXT_PRIMARY}; font-size: 14px; font-weight: 700;")
        settings.addWidget(title)

        date_row = QHBoxLayout()
        date_row.addWidget(self._caption(s.text("settings_dday_datepicker")))
        date_row.addStretch(1)
        self._date_edit = QDateEdit()
        self._date_edit.setCalendarPopup(True)
        self._date_edit.setDisplayFormat(QLocale().dateFormat(QLocale.ShortFormat))
        self._date_edit.dateChanged.connect(self._on_date_changed)
        date_row.addWidget(self._date_edit)
        settings.addLayout(date_row)

        settings.addWidget(self._caption(s.text("settings_menubar_text_style")))
        segments = QHBoxLayout()
        segments.setSpacing(0)
        self._display_group = QButtonGroup(self)
        self._display_group.setExclusive(True)
        for style in DisplayStyle:
            button = QPushButton(s.text(title_key(style)))
            button.setCheckable(True)
            button.setCursor(Qt.PointingHandCursor)
            button.clicked.connect(lambda _checked=False, st=style: self._controller.set_display_style(st))
            self._display_group.addButton(button)
            self._display_buttons[style] = button
            segments.addWidget(button)
        settings.addLayout(segments)

        settings.addWidget(self._caption(s.text("settings_icon_style")))
        style_list = QWidget()
        style_layout = QVBoxLayout(style_list)
        style_layout.setContentsMargins(0, 0, 0, 0)
        style_layout.setSpacing(0)
        for style in IconAnimationStyle:
            row = StyleOptionRow(
                key=style.value,
                icon=render_glyph(frames_for(style)[0], QColor(PanelColors.TEXT_PRIMARY), 16),
                title=s.text(title_key(style)),
                on_click=lambda key: self._controller.set_icon_style(IconAnimationStyle(key)),
            )
            self._style_rows[style.value] = row
            style_layout.addWidget(row)
        scroll = QScrollArea()
        scroll.setWidget(style_list)
        scroll.setWidgetResizable(True)
        scroll.setFixedHeight(120)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        settings.addWidget(scroll)

        color_row = QHBoxLayout()
        color_row.addWidget(self._caption(s.text("settings_theme_color")))
        color_row.addStretch(1)
        self._color_button = QPushButton()
        self._color_button.setFixedSize(44, 22)
        self._color_button.setCursor(Qt.PointingHandCursor)
        self._color_button.clicked.connect(self._pick_color)
        color_row.addWidget(self._color_button)
        settings.addLayout(color_row)
        layout.addLayout(settings)

        # Footer
        quit_button = QPushButton(s.text("button_quit"))
        quit_button.setObjectName("quitButton")
        quit_button.setCursor(Qt.PointingHandCursor)
        quit_button.clicked.connect(self._on_quit)
        layout.addWidget(quit_button)

    @staticmethod
    def _caption(text: str) -> QLabel:
        label = QLabel(text)
        label.setStyleSheet(f"color: {PanelColors.TEXT_SECONDARY}; font-size: 12px;")
        return label

    def _apply_styles(self) -> None:
        accent = self._accent_hex
        self.setStyleSheet(
            f"""
            QWidget#progressPanel {{
                background: {PanelColors.BG};
                border: 1px solid {PanelColors.BORDER};
                border-radius: 12px;
            }}
            QPushButton:checkable {{
                background: {PanelColors.CARD_BG};
                color: {PanelColors.TEXT_PRIMARY};
                border: 1px solid {PanelColors.BORDER};
                padding: 4px 10px;
                font-size: 12px;
            }}
            QPushButton:checkable:checked {{
                background: {accent};
                color: {text_color_for(accent)};
                border: 1px solid {blend_hex(accent, "#000000", 0.15)};
                font-weight: 700;
            }}
            QPushButton#quitButton {{
                background: {PanelColors.FOOTER_BG};
                color: {PanelColors.TEXT_PRIMARY};
                border: none;
                border-top: 1px solid {PanelColors.DIVIDER};
                border-bottom-left-radius: 12px;
                border-bottom-right-radius: 12px;
                padding: 10px;
                font-size: 13px;
            }}
            QPushButton#quitButton:hover {{
                background: {rgba(accent, 0.12)};
            }}
            """
        )
        self._dday_label.setStyleSheet(f"color: {accent}; font-size: 44px; font-weight: 800;")
        self._color_button.setStyleSheet(
            f"""
            QPushButton {{
                background: {accent};
                border: 1px solid {blend_hex(accent, "#000000", 0.25)};
                border-radius: 6px;
            }}
            """
        )

    # ------------------------------------------------------------------
    # State -> widgets
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        prefs = self._controller.preferences
        snapshot = self._controller.snapshot

        accent_hex = resolve_theme_color(prefs.theme_color).name().upper()
        if accent_hex != self._accent_hex or not self.styleSheet():
            self._accent_hex = accent_hex
            self._apply_styles()

        target = prefs.target_date
        target_qdate = QDate(target.year, target.month, target.day)
        self._target_label.setText(QLocale().toString(target_qdate, QLocale.LongFormat))
        if self._date_edit.date() != target_qdate:
            self._date_edit.blockSignals(True)
            self._date_edit.setDate(target_qdate)
            self._date_edit.blockSignals(False)

        for style, button in self._display_buttons.items():
            button.setChecked(style is prefs.display_style)
        for key, row in self._style_rows.items():
            row.set_selected(key == prefs.icon_style.value, self._accent_hex)

        if snapshot is None:
            return
        self._dday_label.setText(snapshot.dday_text)
        self._remaining_row.set_value(snapshot.remaining_time_text)
        self._day_row.set_value(snapshot.day_of_year_text)
        self._week_row.set_value(snapshot.week_of_year_text)
        self._quarter_row.set_title(snapshot.quarter_title_text)
        self._quarter_row.set_value(snapshot.quarter_progress_text)
        self._quarter_bar.set_value(snapshot.quarter_progress)

    # ------------------------------------------------------------------
    # Widgets -> controller
    # ------------------------------------------------------------------

    def _on_date_changed(self, qdate: QDate) -> None:
        if not qdate.isValid():
            return
        self._controller.set_target_date(datetime(qdate.year(), qdate.month(), qdate.day()))

    def _pick_color(self) -> None:
        initial = QColor(self._accent_hex)
        color = QColorDialog.getColor(initial, self, self._strings.text("settings_theme_color"))
        if color.isValid():
            self._controller.set_theme_color(color.name().upper())
