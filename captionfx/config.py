"""Engine configuration and filesystem paths."""

import os
from pathlib import Path

# Base directory is the project root (captionfx).
BASE_DIR = Path(__file__).resolve().parents[1]

OUTPUTS_DIR = BASE_DIR / "outputs"
FONTS_DIR = OUTPUTS_DIR / "fonts"
LOG_LEVEL = os.getenv("CAPTIONFX_LOG_LEVEL", "INFO").upper()

# Canvas the dialogue coordinates are expressed in.
PLAY_RES_X = 1280
PLAY_RES_Y = 720
CANVAS_CENTER_X = PLAY_RES_X // 2
DEFAULT_VERTICAL_POSITION = 50
DEFAULT_FONT_SIZE = 50
DEFAULT_FONT_FAMILY = "Arial"

DEFAULT_CURSOR_X = 670
DEFAULT_CURSOR_Y = 0
SHAKE_INTENSITY = 5.0

FADE_IN_MS = 100
WORD_FADE_IN_MS = 10
POP_SCALE_MS = 150
SHRINK_MS = 450
PAIR_LINE_SPACING = 35
BOX_CHAR_WIDTH = 11
BOX_PADDING = 12
BOX_HEIGHT = 45

DEFAULT_PALETTE = ["0BF431", "2121FF", "1DE0FE", "FFFF00"]
DEFAULT_GLOW_PALETTE = ["2BFF51", "1914B3", "1DE0FE", "FFFF00"]
DEFAULT_PAIR_COLOR_SETS = [["0BF431", "2121FF"], ["1DE0FE", "FFFF00"]]
WAVY_PALETTE = ["00FF00", "FFFF00", "00FFFF"]
BOLD_FONT = "@Montserrat"
THIN_FONT = "@Montserrat Thin"


def ensure_directories() -> None:
    """Create required directories if they do not exist."""
    OUTPUTS_DIR.mkdir(parents=True, exist_ok=True)
    FONTS_DIR.mkdir(parents=True, exist_ok=True)
