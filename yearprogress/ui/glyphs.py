"""QPainter drawings for the icon style frames and the panel row glyphs."""

from __future__ import annotations

import math

from PySide6.QtCore import QPointF, QRect, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QIcon, QPainter, QPainterPath, QPen, QPixmap

ICON_SIZES = (16, 20, 24, 32, 48, 64)

MOON_PHASES = {
    "moon.new": 0.0,
    "moon.waxing.crescent": 0.125,
    "moon.first.quarter": 0.25,
    "moon.waxing.gibbous": 0.375,
    "moon.full": 0.5,
    "moon.waning.gibbous": 0.625,
    "moon.last.quarter": 0.75,
    "moon.waning.crescent": 0.875,
}


def labeled_glyph_icon(glyph_id: str, color: QColor, label: str) -> QIcon:
    """Tray icon with the short status label drawn under the glyph."""
    icon = QIcon()
    for size in ICON_SIZES:
        icon.addPixmap(render_labeled_glyph(glyph_id, color, label, size))
    return icon


def render_labeled_glyph(glyph_id: str, color: QColor, label: str, size: int = 32) -> QPixmap:
    if not label:
        return render_glyph(glyph_id, color, size)

    glyph_size = max(8, int(size * 0.6))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    p.setRenderHint(QPainter.Antialiasing, True)
    p.setRenderHint(QPainter.TextAntialiasing, True)
    p.drawPixmap((size - glyph_size) // 2, 0, render_glyph(glyph_id, color, glyph_size))

    # shrink the font until the label fits the strip below the glyph
    target = QRect(0, glyph_size, size, size - glyph_size)
    font = QFont()
    font.setBold(True)
    font_size = max(6, target.height())
    font.setPixelSize(font_size)
    p.setFont(font)
    text_rect = p.fontMetrics().tightBoundingRect(label)
    while (text_rect.width() > target.width() or text_rect.height() > target.height()) and font_size > 6:
        font_size -= 1
        font.setPixelSize(font_size)
        p.setFont(font)
        text_rect = p.fontMetrics().tightBoundingRect(label)

    p.setPen(color)
    p.drawText(target, Qt.AlignCenter, label)
    p.end()
    return pm


def render_glyph(glyph_id: str, color: QColor, size: int = 32) -> QPixmap:
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    p.setRenderHint(QPainter.Antialiasing, True)
    stroke = max(1.0, size / 14.0)
    rect = QRectF(stroke, stroke, size - 2 * stroke, size - 2 * stroke)

    family = glyph_id.split(".", 1)[0]
    if family == "circle":
        _paint_circle(p, rect, glyph_id, color, stroke)
    elif family == "clock":
        _paint_clock(p, rect, glyph_id.endswith(".fill"), color, stroke)
    elif family == "battery":
        _paint_battery(p, rect, glyph_id, color, stroke)
    elif family == "hourglass":
        _paint_hourglass(p, rect, glyph_id, color, stroke)
    elif family == "calendar":
        _paint_calendar(p, rect, color, stroke)
    elif glyph_id == "chart.pie.fill":
        _paint_chart_pie(p, rect, color)
    elif family == "moon" and glyph_id in MOON_PHASES:
        _paint_moon(p, rect, MOON_PHASES[glyph_id], color, stroke)
    else:
        p.setPen(color)
        font = p.font()
        font.setPixelSize(int(size * 0.8))
        font.setBold(True)
        p.setFont(font)
        p.drawText(rect, Qt.AlignCenter, "?")

    p.end()
    return pm


def _paint_circle(p: QPainter, rect: QRectF, glyph_id: str, color: QColor, stroke: float) -> None:
    pen = QPen(color, stroke)
    if glyph_id == "circle.dotted":
        pen.setStyle(Qt.DotLine)
        pen.setCapStyle(Qt.RoundCap)
    p.setPen(pen)
    p.setBrush(Qt.NoBrush)
    p.drawEllipse(rect)

    p.setPen(Qt.NoPen)
    p.setBrush(color)
    if glyph_id == "circle.filled":
        p.drawEllipse(rect)
    elif glyph_id == "circle.lefthalf.filled":
        p.drawPie(rect, 90 * 16, 180 * 16)
    elif glyph_id == "circle.righthalf.filled":
        p.drawPie(rect, -90 * 16, 180 * 16)


def _paint_clock(p: QPainter, rect: QRectF, filled: bool, color: QColor, stroke: float) -> None:
    center = rect.center()
    radius = rect.width() / 2
    p.setPen(QPen(color, stroke))
    p.setBrush(color if filled else Qt.NoBrush)
    p.drawEllipse(rect)

    if filled:
        # hands are cut out of the filled face
        p.setCompositionMode(QPainter.CompositionMode_Clear)
    hand = QPen(color, stroke * 1.2)
    hand.setCapStyle(Qt.RoundCap)
    p.setPen(hand)
    p.drawLine(center, QPointF(center.x(), center.y() - radius * 0.6))
    p.drawLine(center, QPointF(center.x() + radius * 0.45, center.y()))
    p.setCompositionMode(QPainter.CompositionMode_SourceOver)


def _paint_battery(p: QPainter, rect: QRectF, glyph_id: str, color: QColor, stroke: float) -> None:
    try:
        level = int(glyph_id.rsplit(".", 1)[1])
    except (IndexError, ValueError):
        level = 0
    level = max(0, min(level, 100))

    nub_w = rect.width() * 0.08
    body = QRectF(rect.left(), rect.top() + rect.height() * 0.25,
                  rect.width() - nub_w - stroke, rect.height() * 0.5)
    radius = body.height() * 0.2
    p.setPen(QPen(color, stroke))
    p.setBrush(Qt.NoBrush)
    p.drawRoundedRect(body, radius, radius)

    p.setPen(Qt.NoPen)
    p.setBrush(color)
    nub = QRectF(body.right() + stroke * 0.5, body.top() + body.height() * 0.3,
                 nub_w, body.height() * 0.4)
    p.drawRoundedRect(nub, nub_w / 2, nub_w / 2)

    if level:
        inset = stroke * 1.5
        inner = body.adjusted(inset, inset, -inset, -inset)
        inner.setWidth(inner.width() * level / 100.0)
        p.drawRoundedRect(inner, radius / 2, radius / 2)


def _paint_hourglass(p: QPainter, rect: QRectF, glyph_id: str, color: QColor, stroke: float) -> None:
    left = rect.left() + rect.width() * 0.2
    right = rect.right() - rect.width() * 0.2
    mid_x = rect.center().x()
    mid_y = rect.center().y()

    top = QPainterPath()
    top.moveTo(left, rect.top())
    top.lineTo(right, rect.top())
    top.lineTo(mid_x, mid_y)
    top.closeSubpath()

    bottom = QPainterPath()
    bottom.moveTo(left, rect.bottom())
    bottom.lineTo(right, rect.bottom())
    bottom.lineTo(mid_x, mid_y)
    bottom.closeSubpath()

    pen = QPen(color, stroke)
    pen.setJoinStyle(Qt.RoundJoin)
    p.setPen(pen)
    p.setBrush(color if glyph_id == "hourglass.tophalf.filled" else Qt.NoBrush)
    p.drawPath(top)
    p.setBrush(color if glyph_id == "hourglass.bottomhalf.filled" else Qt.NoBrush)
    p.drawPath(bottom)


def _paint_moon(p: QPainter, rect: QRectF, phase: float, color: QColor, stroke: float) -> None:
    """Phase 0 is new, 0.5 full; the lit side grows from the right."""
    dim = QColor(color)
    dim.setAlphaF(0.35)
    p.setPen(QPen(dim, stroke))
    p.setBrush(Qt.NoBrush)
    p.drawEllipse(rect)
    if phase == 0.0:
        return

    disk = QPainterPath()
    disk.addEllipse(rect)

    waxing = phase < 0.5
    half = QPainterPath()
    half.moveTo(rect.center())
    half.arcTo(rect, -90 if waxing else 90, 180)
    half.closeSubpath()

    terminator_w = abs(math.cos(2 * math.pi * phase)) * rect.width()
    terminator = QPainterPath()
    terminator.addEllipse(
        QRectF(rect.center().x() - terminator_w / 2, rect.top(), terminator_w, rect.height())
    )

    # crescents lose the terminator ellipse, gibbous phases gain it
    crescent = phase < 0.25 or phase > 0.75
    lit = half.subtracted(terminator) if crescent else half.united(terminator)
    if phase == 0.5:
        lit = disk

    p.setPen(Qt.NoPen)
    p.setBrush(color)
    p.drawPath(lit.intersected(disk))


def _paint_calendar(p: QPainter, rect: QRectF, color: QColor, stroke: float) -> None:
    body = rect.adjusted(0, rect.height() * 0.1, 0, 0)
    radius = rect.width() * 0.15
    p.setPen(QPen(color, stroke))
    p.setBrush(Qt.NoBrush)
    p.drawRoundedRect(body, radius, radius)

    p.setPen(Qt.NoPen)
    p.setBrush(color)
    p.drawRect(QRectF(body.left(), body.top() + radius / 2, body.width(), body.height() * 0.2))
    dot = rect.width() * 0.12
    for row in range(2):
        for col in range(3):
            x = body.left() + body.width() * (0.2 + 0.3 * col) - dot / 2
            y = body.top() + body.height() * (0.5 + 0.25 * row) - dot / 2
            p.drawRect(QRectF(x, y, dot, dot))


def _paint_chart_pie(p: QPainter, rect: QRectF, color: QColor) -> None:
    p.setPen(Qt.NoPen)
    p.setBrush(color)
    p.drawPie(rect, 90 * 16, 270 * 16)
    wedge = rect.translated(rect.width() * 0.06, -rect.height() * 0.06)
    p.drawPie(wedge, 0, 90 * 16)
