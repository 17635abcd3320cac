"""Color notation conversion to the ASS packed color format."""

from __future__ import annotations

import math
import re
from typing import Any, List, Optional, Sequence

from captionfx.services.errors import InvalidColorFormat, InvalidStyleValue

_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
_RGBA_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*(\d*\.?\d+))?\s*\)$"
)
_TRANSPARENT = {"transparent", "#00000000", "rgba(0,0,0,0)", "rgba(255, 255, 255, 0)"}

WHITE = "&H00FFFFFF&"
BLACK = "&H000000&"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, matching browser rounding."""
    return int(math.floor(value + 0.5))


def alpha_hex(value: float) -> str:
    """Return an alpha/byte value as two uppercase hex digits."""
    byte = max(0, min(255, round_half_up(value)))
    return f"{byte:02X}"


def normalize_color(value: Any) -> str:
    """Convert #RRGGBB or rgb(a)(...) notation to &HAABBGGRR& form."""
    if not isinstance(value, str):
        raise InvalidColorFormat(f"Color must be a string, got {type(value).__name__}")
    color = value.strip()
    if color.startswith("#"):
        if not _HEX_RE.match(color):
            raise InvalidColorFormat(
                f"Invalid hex color {value!r}",
                "Use the #RRGGBB format.",
            )
        rr = color[1:3].upper()
        gg = color[3:5].upper()
        bb = color[5:7].upper()
        return f"&H00{bb}{gg}{rr}&"
    if color.startswith("rgb"):
        match = _RGBA_RE.match(color)
        if not match:
            raise InvalidColorFormat(
                f"Invalid rgba color {value!r}",
                "Use the rgba(r, g, b, a) format.",
            )
        channels = [int(match.group(index)) for index in (1, 2, 3)]
        if any(channel > 255 for channel in channels):
            raise InvalidColorFormat(f"Color channel out of range in {value!r}")
        opacity = 1.0
        if match.group(4) is not None:
            opacity = float(match.group(4))
            if opacity < 0.0 or opacity > 1.0:
                raise InvalidColorFormat(
                    f"Alpha out of range in {value!r}",
                    "Alpha must be between 0 and 1.",
                )
        rr, gg, bb = (f"{channel:02X}" for channel in channels)
        aa = alpha_hex((1.0 - opacity) * 255)
        return f"&H{aa}{bb}{gg}{rr}&"
    raise InvalidColorFormat(
        f"Unsupported color format {value!r}",
        "Use HEX (#RRGGBB) or RGBA (rgba(r, g, b, a)).",
    )


def strip_color(native: str) -> str:
    """Drop the &H prefix and & suffix from a native color."""
    return native.replace("&H", "", 1).replace("&", "")


def bare_color(value: Any) -> str:
    """Normalize a color and return the hex digits only."""
    return strip_color(normalize_color(value))


def normalize_palette(colors: Optional[Sequence[Any]]) -> Optional[List[str]]:
    """Normalize an author palette element-wise to bare hex values."""
    if colors is None:
        return None
    if isinstance(colors, str) or not isinstance(colors, Sequence):
        raise InvalidStyleValue("Palettes must be a list of colors")
    if not colors:
        raise InvalidStyleValue("Palettes must contain at least one color")
    return [bare_color(color) for color in colors]


def is_transparent(value: Any) -> bool:
    """Return True when a background color should be treated as absent."""
    if not value:
        return True
    color = str(value).strip()
    if color in _TRANSPARENT:
        return True
    compact = color.replace(" ", "")
    return compact.startswith("rgba(") and compact.count(",") == 3 and compact.endswith(",0)")
