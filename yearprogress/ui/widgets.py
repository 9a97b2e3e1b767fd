"""Small building blocks for the progress panel."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPainter, QPixmap
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QSizePolicy, QWidget

from yearprogress.ui.colors import PanelColors, rgba


class InfoRow(QWidget):
    """Glyph, muted title on the left, bold value on the right."""

    def __init__(self, icon: QPixmap, title: str, value: str = "", parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self._icon = QLabel()
        self._icon.setFixedWidth(20)
        self._icon.setAlignment(Qt.AlignCenter)
        self._icon.setPixmap(icon)

        self._title = QLabel(title)
        self._title.setStyleSheet(f"color: {PanelColors.TEXT_SECONDARY}; font-size: 13px;")

        self._value = QLabel(value)
        self._value.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        self._value.setStyleSheet(
            f"color: {PanelColors.TEXT_PRIMARY}; font-size: 14px; font-weight: 600;"
        )

        layout.addWidget(self._icon)
        layout.addWidget(self._title)
        layout.addStretch(1)
        layout.addWidget(self._value)

    def set_title(self, title: str) -> None:
        self._title.setText(title)

    def set_value(self, value: str) -> None:
        self._value.setText(value)


class ProgressBar(QWidget):
    """Rounded bar filled to a fraction in [0, 1]."""

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        color: str = PanelColors.QUARTER_FILL,
        track_color: str = PanelColors.PROGRESS_TRACK,
        height: int = 5,
    ) -> None:
        super().__init__(parent)
        self._value = 0.0
        self._color = color
        self._track_color = track_color
        self.setFixedHeight(height)
        self.setMinimumWidth(100)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

    def set_value(self, value: float) -> None:
        self._value = max(0.0, min(1.0, float(value)))
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        radius = self.height() / 2

        painter.setBrush(QColor(self._track_color))
        painter.drawRoundedRect(0, 0, self.width(), self.height(), radius, radius)

        fill_width = int(self._value * self.width())
        if fill_width > 0:
            painter.setBrush(QColor(self._color))
            painter.drawRoundedRect(0, 0, fill_width, self.height(), radius, radius)


class StyleOptionRow(QFrame):
    """Clickable row in the icon style list, with a check mark when selected."""

    def __init__(
        self,
        key: str,
        icon: QPixmap,
        title: str,
        on_click: Callable[[str], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._key = key
        self._on_click = on_click
        self._selected = False
        self._accent = PanelColors.FALLBACK_ACCENT

        self.setObjectName("styleOptionRow")
        self.setCursor(Qt.PointingHandCursor)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 6, 12, 6)
        layout.setSpacing(8)

        self._icon = QLabel()
        self._icon.setFixedWidth(20)
        self._icon.setPixmap(icon)
        self._title = QLabel(title)
        self._title.setStyleSheet(f"color: {PanelColors.TEXT_PRIMARY}; font-size: 13px;")
        self._check = QLabel("✓")
        self._check.setVisible(False)

        layout.addWidget(self._icon)
        layout.addWidget(self._title)
        layout.addStretch(1)
        layout.addWidget(self._check)
        self._apply_style()

    @property
    def key(self) -> str:
        return self._key

    def set_icon(self, icon: QPixmap) -> None:
        self._icon.setPixmap(icon)

    def set_selected(self, selected: bool, accent: str) -> None:
        self._selected = selected
        self._accent = accent
        self._check.setVisible(selected)
        self._apply_style()

    def _apply_style(self) -> None:
        background = rgba(self._accent, 0.15) if self._selected else "transparent"
        self.setStyleSheet(
            f"""
            QFrame#styleOptionRow {{
                background: {background};
                border-radius: 8px;
            }}
            QFrame#styleOptionRow:hover {{
                background: {rgba(self._accent, 0.22 if self._selected else 0.08)};
            }}
            """
        )
        self._check.setStyleSheet(f"color: {self._accent}; font-size: 14px; font-weight: 900;")

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._on_click(self._key)
        super().mousePressEvent(event)
