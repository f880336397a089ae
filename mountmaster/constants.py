import os
from typing import NamedTuple

APP_NAME = "MountMaster"
APP_VERSION = "1.0"
SETTINGS_ORG = "MountMaster"
SETTINGS_APP = "MountMaster"
PROJECT_FILTER = "Mount Files (*.mount)"

MM_PER_INCH = 25.4

MODE_FIXED_BOARD = "FixedBoard"
MODE_CUSTOM_BORDERS = "CustomBorders"
PORTRAIT = "portrait"
LANDSCAPE = "landscape"
CUSTOM_PRESET = "Custom"

# Used when a board preset name is not in PAPER_SIZES (A2)
FALLBACK_BOARD = (420.0, 594.0)


class PaperSize(NamedTuple):
    name: str
    width: float  # mm
    height: float  # mm


PAPER_SIZES = [
    PaperSize("A0", 841, 1189),
    PaperSize("A1", 594, 841),
    PaperSize("A2", 420, 594),
    PaperSize("A3", 297, 420),
    PaperSize("A4", 210, 297),
    PaperSize("A5", 148, 210),
    PaperSize("Letter", 215.9, 279.4),
    PaperSize("Legal", 215.9, 355.6),
    PaperSize("Tabloid", 279.4, 431.8),
]

COMMON_PHOTO_SIZES = [
    PaperSize('4x6"', 101.6, 152.4),
    PaperSize('5x7"', 127, 177.8),
    PaperSize('8x10"', 203.2, 254),
    PaperSize('11x14"', 279.4, 355.6),
    PaperSize('12x16"', 304.8, 406.4),
    PaperSize('16x20"', 406.4, 508),
    PaperSize("A4", 210, 297),
    PaperSize("A3", 297, 420),
]

# Starting config, all lengths in mm
DEFAULTS = {
    "photo_width": 203.2,    # 8"
    "photo_height": 254.0,   # 10"
    "photo_border": 6.35,    # 0.25"
    "underlap": 12.7,        # 0.5"
    "mount_offset": 7.62,    # 0.3"
    "min_border_width": 50.8,
    "board_preset": "A2",
    "custom_board": (420.0, 594.0),
    "mode": MODE_FIXED_BOARD,
    "manual_borders": (50.0, 50.0, 50.0, 50.0),  # top, bottom, left, right
    "orientation": PORTRAIT,
}

# Diagram colours
BOARD_COLOR = "#E2E8F0"
BOARD_EDGE_COLOR = "#475569"
PAPER_EDGE_COLOR = "#94A3B8"
APERTURE_EDGE_COLOR = "#CBD5E1"
IMAGE_COLOR = "#3B82F6"
IMAGE_EDGE_COLOR = "#2563EB"
LABEL_COLOR = "#475569"
ARROW_COLOR = "#64748B"

GEMINI_MODEL = os.environ.get("MOUNTMASTER_GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
ADVICE_ERROR_TEXT = "Failed to get advice. Ensure API key is set."
