"""Palette and color helpers for the problem list and progress screens."""

from dsasheet.core.catalog import CODING_NINJAS, GFG, LEETCODE, YOUTUBE, Difficulty


class SheetColors:
    """Light theme palette."""

    BG = "#f5f5f5"
    CARD_BG = "#ffffff"
    CARD_BORDER = "#e6e6e6"
    HEADER = "#ff6347"

    PRIMARY = "#2196F3"
    SUCCESS = "#4CAF50"
    DANGER = "#F44336"
    RESET = "#ff5252"

    TEXT_PRIMARY = "#333333"
    TEXT_SECONDARY = "#666666"
    TEXT_MUTED = "#888888"

    TRACK = "#e0e0e0"
    FILTER_IDLE = "#f0f0f0"


DIFFICULTY_COLORS = {
    Difficulty.EASY: "#4CAF50",
    Difficulty.MEDIUM: "#FF9800",
    Difficulty.HARD: "#F44336",
}

LINK_COLORS = {
    LEETCODE: "#ffa116",
    GFG: "#2f8d46",
    CODING_NINJAS: "#f28c06",
    YOUTUBE: "#ff0000",
}


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b. Invalid input returns a."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        start = [int(a[i:i + 2], 16) for i in (1, 3, 5)]
        end = [int(b[i:i + 2], 16) for i in (1, 3, 5)]
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r, g, bl = (int(x + (y - x) * t) for x, y in zip(start, end))
    return f"#{r:02X}{g:02X}{bl:02X}"


def progress_color(percentage: float) -> str:
    """Bar fill for a completion percentage: red through amber to green."""
    ratio = max(0.0, min(100.0, float(percentage))) / 100.0
    if ratio < 0.5:
        return blend_hex(SheetColors.DANGER, DIFFICULTY_COLORS[Difficulty.MEDIUM], ratio * 2)
    return blend_hex(DIFFICULTY_COLORS[Difficulty.MEDIUM], SheetColors.SUCCESS, (ratio - 0.5) * 2)
