"""Font discovery and text metrics backed by fontTools."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from fontTools.ttLib import TTFont, TTLibError

from captionfx.config import BOX_CHAR_WIDTH, FONTS_DIR

logger = logging.getLogger(__name__)

FONT_EXTENSIONS = {".ttf", ".otf"}


def find_font_file(font_family: Optional[str], search_dirs: Optional[Iterable[Path]] = None) -> Optional[Path]:
    """Find a font file whose name starts with the family name."""
    if not font_family:
        return None
    needle = font_family.replace(" ", "").lower()
    dirs = list(search_dirs) if search_dirs is not None else [FONTS_DIR]
    for base in dirs:
        if not base.exists():
            continue
        for path in sorted(base.rglob("*")):
            if path.suffix.lower() in FONT_EXTENSIONS and path.stem.replace(" ", "").lower().startswith(needle):
                return path
    return None


def resolve_font_path(style: Dict[str, Any]) -> Optional[Path]:
    """Use the explicit font_path, else a file for font_family in the fonts directory."""
    font_path = style.get("font_path")
    if font_path:
        return Path(font_path)
    return find_font_file(style.get("font_family"))


def _decode_name(record) -> Optional[str]:
    try:
        return record.toUnicode().strip()
    except UnicodeDecodeError:
        return record.string.decode("utf-8", errors="ignore").strip() or None


@dataclass(frozen=True)
class FontMetrics:
    family: Optional[str]
    units_per_em: int
    advances: Dict[int, int]
    notdef_advance: int


def _read_metrics(path: str) -> FontMetrics:
    with TTFont(path) as font:
        family = None
        for record in font["name"].names:
            if record.nameID == 16:
                family = _decode_name(record)
                break
            if record.nameID == 1 and family is None:
                family = _decode_name(record)
        cmap = font.getBestCmap() or {}
        metrics = font["hmtx"].metrics
        advances = {code: metrics.get(glyph, (0, 0))[0] for code, glyph in cmap.items()}
        return FontMetrics(
            family=family,
            units_per_em=font["head"].unitsPerEm,
            advances=advances,
            notdef_advance=metrics.get(".notdef", (0, 0))[0],
        )


@lru_cache(maxsize=32)
def _cached_metrics(path: str, mtime_ns: int) -> FontMetrics:
    return _read_metrics(path)


def font_metrics(font_path: Path) -> FontMetrics:
    """Read family and advance widths once per file version; no handle stays open."""
    path = Path(font_path)
    return _cached_metrics(str(path), path.stat().st_mtime_ns)


def detect_font_family(font_path: Path) -> Optional[str]:
    """Return the typographic (or legacy) family name stored in a font file."""
    return font_metrics(font_path).family


def text_width_px(text: str, font_path: Optional[Path], font_size: float) -> float:
    """Measure the advance width of ``text`` at ``font_size`` pixels.

    Without a readable font file the width falls back to a fixed per-character estimate.
    """
    estimate = float(len(text) * BOX_CHAR_WIDTH)
    if not font_path:
        return estimate
    try:
        font = font_metrics(font_path)
    except (OSError, TTLibError):
        logger.warning("Could not read font metrics from %s; estimating width", font_path)
        return estimate
    total = sum(font.advances.get(ord(char), font.notdef_advance) for char in text)
    width = total * font_size / font.units_per_em
    logger.debug("Measured %r at %spx with %s: %.1f", text, font_size, font_path, width)
    return width
