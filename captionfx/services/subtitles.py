"""ASS document generation from animated caption events."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from fontTools.ttLib import TTLibError

from captionfx.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_VERTICAL_POSITION,
    PLAY_RES_X,
    PLAY_RES_Y,
)
from captionfx.services.colors import BLACK, WHITE, is_transparent, normalize_color, round_half_up
from captionfx.services.fonts import detect_font_family, resolve_font_path
from captionfx.services.layers import BACKGROUND_STYLE_NAME, DEFAULT_STYLE_NAME, DialogueEvent, fmt_num
from captionfx.services.motion import MotionState, NextPosition
from captionfx.services.registry import resolve_strategy
from captionfx.services.styles import prepare_style
from captionfx.services.timing import Cue, tokenize

logger = logging.getLogger(__name__)

_ALIGNMENTS = {"left": 1, "center": 2, "right": 3}


def format_ass_time(seconds: float) -> str:
    total_cs = max(0, int(round(seconds * 100)))
    hours, remainder = divmod(total_cs, 3600 * 100)
    minutes, remainder = divmod(remainder, 60 * 100)
    secs, cs = divmod(remainder, 100)
    return f"{hours}:{minutes:02}:{secs:02}.{cs:02}"


def _header_color(value: Optional[str], default: str) -> str:
    """Style lines take &HAABBGGRR without the trailing ampersand."""
    native = normalize_color(value) if value else default
    digits = native[2:].rstrip("&").rjust(8, "0")
    return f"&H{digits}"


def _font_name(style: Dict[str, Any]) -> str:
    family = style.get("font_family") or DEFAULT_FONT_FAMILY
    font_path = resolve_font_path(style)
    if not font_path:
        return family
    try:
        detected = detect_font_family(font_path)
    except (OSError, TTLibError):
        logger.warning("Could not read font family from %s", font_path)
        return family
    return detected or family


def ass_header(style: Optional[Dict[str, Any]] = None) -> str:
    """Build the [Script Info], [V4+ Styles] and [Events] sections."""
    style = prepare_style(style)
    font = _font_name(style)
    size = int(style.get("font_size") or DEFAULT_FONT_SIZE)
    primary = _header_color(style.get("color"), WHITE)
    outline = _header_color(style.get("text_outline_color"), BLACK)
    background = style.get("background_color")
    back = "&H80000000" if is_transparent(background) else _header_color(background, BLACK)
    outline_width = style.get("text_outline_width")
    outline_width = fmt_num(outline_width) if outline_width is not None else "2"
    alignment = _ALIGNMENTS.get(style.get("text_align") or "center", 2)
    position = style.get("vertical_position")
    position = DEFAULT_VERTICAL_POSITION if position is None else position
    margin_v = round_half_up(PLAY_RES_Y * (100 - position) / 100)
    header_lines = [
        "[Script Info]",
        "ScriptType: v4.00+",
        "WrapStyle: 0",
        "ScaledBorderAndShadow: yes",
        f"PlayResX: {PLAY_RES_X}",
        f"PlayResY: {PLAY_RES_Y}",
        "",
        "[V4+ Styles]",
        "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, "
        "Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, "
        "MarginR, MarginV, Encoding",
        (
            f"Style: {DEFAULT_STYLE_NAME},"
            f"{font},{size},"
            f"{primary},{primary},{outline},&H00000000,"
            "-1,0,0,0,100,100,"
            "0,0,"
            f"1,{outline_width},0,{alignment},10,10,{margin_v},1"
        ),
        (
            f"Style: {BACKGROUND_STYLE_NAME},"
            f"{font},{size},"
            f"{back},{back},{back},{back},"
            "0,0,0,0,100,100,"
            "0,0,"
            f"3,0,0,5,10,10,{margin_v},1"
        ),
        "",
        "[Events]",
        "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text",
    ]
    return "\n".join(header_lines)


def cues_from_payload(items: Iterable[Dict[str, Any]]) -> List[Cue]:
    """Build cues from ``{"text", "start", "end"}`` mappings."""
    cues: List[Cue] = []
    for item in items:
        cues.append(Cue(item["text"], float(item["start"]), float(item["end"])))
    return cues


def render_cues(
    cues: Iterable[Cue],
    style: Optional[Dict[str, Any]] = None,
    animation: Optional[str] = None,
    cursor: Optional[MotionState] = None,
    next_position: Optional[NextPosition] = None,
) -> Tuple[List[DialogueEvent], Optional[MotionState]]:
    """Animate cues in time order, threading the cursor and word index between them."""
    cue_list = list(cues)
    ordered = sorted(cue_list, key=lambda cue: cue.start)
    if ordered != cue_list:
        logger.warning("Cues were not in time order; rendering them sorted by start")
    strategy = resolve_strategy(style, animation)
    events: List[DialogueEvent] = []
    word_index = 0
    for cue in ordered:
        result = strategy.run(cue, style, cursor, next_position, word_index)
        events.extend(result.events)
        cursor = result.cursor
        word_index += len(tokenize(cue.text))
    logger.info("Rendered %d cues into %d events with %s", len(ordered), len(events), strategy.name)
    return events, cursor


def generate_ass(
    cues: Iterable[Cue],
    style: Optional[Dict[str, Any]] = None,
    animation: Optional[str] = None,
    cursor: Optional[MotionState] = None,
    next_position: Optional[NextPosition] = None,
    format_time: Callable[[float], str] = format_ass_time,
) -> str:
    """Render a complete ASS document for the given cues."""
    events, _ = render_cues(cues, style, animation, cursor, next_position)
    lines: List[str] = [ass_header(style)]
    lines.extend(event.to_line(format_time) for event in events)
    return "\n".join(lines).strip() + "\n"


def write_ass_file(
    cues: Iterable[Cue],
    output_path: Path,
    style: Optional[Dict[str, Any]] = None,
    animation: Optional[str] = None,
    cursor: Optional[MotionState] = None,
    next_position: Optional[NextPosition] = None,
) -> Path:
    """Generate an ASS document and write it to ``output_path``."""
    document = generate_ass(cues, style, animation, cursor, next_position)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document, encoding="utf-8")
    logger.info("Wrote %s", output_path)
    return output_path
