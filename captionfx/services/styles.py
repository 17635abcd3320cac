"""Style configuration defaults, merging and validation."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from captionfx.services.colors import is_transparent, normalize_color
from captionfx.services.errors import InvalidStyleValue

# Author-facing camelCase keys accepted from JSON payloads.
STYLE_KEY_ALIASES = {
    "alternateColors": "alternate_colors",
    "alternateShadowColors": "alternate_shadow_colors",
    "shadowColor": "shadow_color",
    "textOutlineColor": "text_outline_color",
    "textOutlineWidth": "text_outline_width",
    "shadowStrength": "shadow_strength",
    "fontSize": "font_size",
    "fontFamily": "font_family",
    "fontPath": "font_path",
    "verticalPosition": "vertical_position",
    "backgroundColor": "background_color",
    "textAlign": "text_align",
    "textTransform": "text_transform",
    "wordsPerGroup": "words_per_group",
}

_NON_NEGATIVE = ("text_outline_width", "shadow_strength")
_COLOR_KEYS = ("color", "shadow_color", "text_outline_color")
_TEXT_ALIGNS = {"left", "center", "right"}
_TEXT_TRANSFORMS = {"none", "uppercase", "lowercase"}


def default_style() -> Dict[str, Any]:
    """Return default styling values.

    Options left as None are unset: each animation falls back to its own
    documented default for them (for example its own shadow strength).
    """
    return {
        "color": None,
        "alternate_colors": None,
        "alternate_shadow_colors": None,
        "shadow_color": None,
        "text_outline_color": None,
        "text_outline_width": None,
        "shadow_strength": None,
        "font_size": None,
        "font_family": "Arial",
        "font_path": None,
        "vertical_position": None,
        "animation": None,
        "animation2": None,
        "background_color": None,
        "text_align": "center",
        "text_transform": "none",
        "words_per_group": 2,
    }


def style_from_payload(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Translate camelCase payload keys to the internal snake_case names."""
    if not payload:
        return {}
    return {STYLE_KEY_ALIASES.get(key, key): value for key, value in payload.items()}


def normalize_style(style: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge user style with defaults."""
    defaults = default_style()
    if not style:
        return defaults
    merged = defaults.copy()
    merged.update({key: value for key, value in style_from_payload(style).items() if value is not None})
    return merged


def _number(style: Dict[str, Any], key: str) -> Optional[float]:
    value = style.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidStyleValue(f"{key} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidStyleValue(f"{key} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidStyleValue(f"{key} must be a finite number, got {value!r}")
    return number


def validate_style(style: Dict[str, Any]) -> Dict[str, Any]:
    """Check numeric ranges and enumerations; returns a copy with numbers coerced."""
    checked = dict(style)
    for key in _NON_NEGATIVE:
        value = _number(checked, key)
        if value is not None and value < 0:
            raise InvalidStyleValue(f"{key} must not be negative")
        checked[key] = value
    position = _number(checked, "vertical_position")
    if position is not None and not 0 <= position <= 100:
        raise InvalidStyleValue("vertical_position must be between 0 and 100")
    checked["vertical_position"] = position
    font_size = _number(checked, "font_size")
    if font_size is not None and font_size <= 0:
        raise InvalidStyleValue("font_size must be positive")
    checked["font_size"] = font_size
    group = _number(checked, "words_per_group")
    if group is not None:
        if group < 1 or group != int(group):
            raise InvalidStyleValue("words_per_group must be a whole number of at least 1")
        checked["words_per_group"] = int(group)
    for key in _COLOR_KEYS:
        if checked.get(key):
            normalize_color(checked[key])
    if not is_transparent(checked.get("background_color")):
        normalize_color(checked["background_color"])
    for key in ("alternate_colors", "alternate_shadow_colors"):
        palette = checked.get(key)
        if palette is not None and (isinstance(palette, str) or not palette):
            raise InvalidStyleValue(f"{key} must be a non-empty list of colors")
    if str(checked.get("text_align") or "center") not in _TEXT_ALIGNS:
        raise InvalidStyleValue("text_align must be left, center or right")
    if str(checked.get("text_transform") or "none") not in _TEXT_TRANSFORMS:
        raise InvalidStyleValue("text_transform must be none, uppercase or lowercase")
    return checked


def prepare_style(style: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge defaults and validate in one step."""
    return validate_style(normalize_style(style))
