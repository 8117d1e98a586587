"""Layout, color, and rendering constants."""
from __future__ import annotations

from tick_aging.calendar import DAY_SECONDS, YEAR_SECONDS

# Layout
SCREEN_W = 960
SCREEN_H = 640
HEADER_H = 56
LOG_H = 96
ROW_H = 20
FPS = 60

# Simulated seconds per real second
WARP_RATES: list[tuple[str, float]] = [
    ("1 day/s", DAY_SECONDS),
    ("1 week/s", DAY_SECONDS * 7),
    ("100 days/s", DAY_SECONDS * 100),
    ("1 year/s", YEAR_SECONDS),
    ("10 years/s", YEAR_SECONDS * 10),
]

# Table columns: (title, width)
COLUMNS: list[tuple[str, int]] = [
    ("Name", 170),
    ("Trait", 100),
    ("Age", 60),
    ("Lifespan", 90),
    ("Born", 190),
    ("Died", 130),
    ("Flags", 200),
]

# UI colors
COLOR_BG = (20, 20, 30)
COLOR_HEADER_BG = (25, 25, 35)
COLOR_LOG_BG = (18, 18, 25)
COLOR_ROW_ALT = (26, 26, 36)
COLOR_ROW_SELECTED = (50, 60, 90)
COLOR_TEXT = (200, 200, 200)
COLOR_TEXT_DIM = (130, 130, 140)
COLOR_FROZEN = (120, 180, 240)

WARNING_COLORS: dict[str, tuple[int, int, int]] = {
    "critical": (230, 70, 60),
    "warning": (230, 190, 70),
}

LOG_COLORS: dict[str, tuple[int, int, int]] = {
    "death": (220, 60, 60),
    "freeze": (120, 180, 240),
    "thaw": (160, 200, 240),
    "hire": (100, 220, 100),
    "save": (200, 200, 100),
    "default": (170, 170, 170),
}
