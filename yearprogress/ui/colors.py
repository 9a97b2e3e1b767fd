"""Panel palette and color helpers."""

from typing import Optional, Tuple


class PanelColors:
    """Neutral popup palette; the theme color is layered on top."""

    BG = "#F7F8FA"
    CARD_BG = "#FFFFFF"
    BORDER = "#E1E5EA"
    DIVIDER = "#E9ECF0"
    FOOTER_BG = "#EEF0F3"

    TEXT_PRIMARY = "#1C2430"
    TEXT_SECONDARY = "#5F6B7A"
    TEXT_MUTED = "#8A94A3"

    PROGRESS_TRACK = "#E3E7EC"
    QUARTER_FILL = "#34C759"

    FALLBACK_ACCENT = "#007AFF"


def parse_hex(color: str) -> Optional[Tuple[int, int, int]]:
    """``#RRGGBB`` -> (r, g, b), or ``None`` when malformed."""
    color = color.strip()
    if not (color.startswith("#") and len(color) == 7):
        return None
    try:
        return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)
    except ValueError:
        return None


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b. Malformed input returns a."""
    rgb_a = parse_hex(a)
    rgb_b = parse_hex(b)
    if rgb_a is None or rgb_b is None:
        return a
    t = max(0.0, min(1.0, float(t)))
    mixed = (int(x + (y - x) * t) for x, y in zip(rgb_a, rgb_b))
    return "#{:02X}{:02X}{:02X}".format(*mixed)


def rgba(color: str, alpha: float) -> str:
    """Stylesheet ``rgba(...)`` for a #RRGGBB color; alpha is clamped to [0, 1]."""
    rgb = parse_hex(color) or parse_hex(PanelColors.FALLBACK_ACCENT)
    alpha = max(0.0, min(1.0, float(alpha)))
    return f"rgba({rgb[0]}, {rgb[1]}, {rgb[2]}, {alpha:.2f})"


def text_color_for(background: str) -> str:
    """Black or white, whichever reads better on ``background``."""
    rgb = parse_hex(background)
    if rgb is None:
        return PanelColors.TEXT_PRIMARY
    r, g, b = rgb
    luminance = (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255.0
    return "#000000" if luminance > 0.6 else "#FFFFFF"
