"""Dialogue event assembly from timed units and per-layer tag builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from captionfx.services.motion import MotionTracker
from captionfx.services.timing import SubInterval

BEFORE = "before"
ACTIVE = "active"
AFTER = "after"

DEFAULT_STYLE_NAME = "Default"
BACKGROUND_STYLE_NAME = "Background"
SPACE = " "
LINE_BREAK = "\\N"
BOX_PATH = "m 0 0 l 100 0 100 100 0 100"

# (state, token index, interval being rendered) -> override tag body without braces
TagStyler = Callable[[str, int, SubInterval], str]


def fmt_num(value: Any) -> str:
    """Format a numeric tag argument without float noise or a trailing .0."""
    if isinstance(value, int):
        return str(value)
    rounded = round(float(value), 3)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.3f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class DialogueEvent:
    layer: int
    start: float
    end: float
    style_name: str
    text: str

    def to_line(self, format_time: Callable[[float], str]) -> str:
        """Render the event as an ASS Dialogue line."""
        return (
            f"Dialogue: {self.layer},{format_time(self.start)},{format_time(self.end)},"
            f"{self.style_name},,0,0,0,,{self.text}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layer": self.layer,
            "start": self.start,
            "end": self.end,
            "style": self.style_name,
            "text": self.text,
        }


@dataclass(frozen=True)
class LayerSpec:
    """One z-ordered pass over the same timing.

    ``solo`` layers render only the active token instead of the whole line;
    ``prefix`` is a tag block placed ahead of the first token.
    """

    layer: int
    styler: TagStyler
    solo: bool = False
    style_name: str = DEFAULT_STYLE_NAME
    prefix: str = ""


def token_state(index: int, active: int) -> str:
    if index < active:
        return BEFORE
    if index == active:
        return ACTIVE
    return AFTER


def wrap(tags: str, text: str) -> str:
    return f"{{{tags}}}{text}"


def compose_text(
    tokens: Sequence[str],
    active: int,
    styler: TagStyler,
    interval: SubInterval,
    separator: str = SPACE,
    move_tag: str = "",
    solo: bool = False,
) -> str:
    """Wrap every token in the tag block chosen by its state relative to ``active``."""
    if solo:
        return wrap(move_tag + styler(ACTIVE, active, interval), tokens[active])
    parts: List[str] = []
    for index, token in enumerate(tokens):
        state = token_state(index, active)
        tags = styler(state, index, interval)
        if state == ACTIVE:
            tags = move_tag + tags
        parts.append(wrap(tags, token))
    return separator.join(parts)


def assemble(
    intervals: Sequence[SubInterval],
    layers: Sequence[LayerSpec],
    separator: str = SPACE,
    tracker: Optional[MotionTracker] = None,
    group_scoped: bool = False,
) -> List[DialogueEvent]:
    """Emit one event per (layer, interval) pair.

    The tracker advances once per interval in temporal order; every layer of that
    interval shares the resulting move tag. Group-scoped assembly renders only the
    interval's own group members, highlighting its slot.
    """
    line_tokens = [interval.unit for interval in intervals]
    events: List[DialogueEvent] = []
    for interval in intervals:
        move_tag = tracker.move_tag(interval.end - interval.start) if tracker else ""
        if group_scoped:
            unit_tokens: Sequence[str] = interval.members
            active = interval.slot
        else:
            unit_tokens = line_tokens
            active = interval.index
        for spec in layers:
            text = compose_text(unit_tokens, active, spec.styler, interval, separator, move_tag, spec.solo)
            if spec.prefix:
                text = wrap(spec.prefix, text)
            events.append(DialogueEvent(spec.layer, interval.start, interval.end, spec.style_name, text))
    return events


def box_event(
    start: float,
    end: float,
    x: float,
    y: float,
    width: float,
    height: float,
    color: str,
    layer: int = 0,
) -> DialogueEvent:
    """Vector rectangle scaled to ``width`` x ``height`` pixels, centered on (x, y)."""
    tags = (
        f"\\pos({fmt_num(x)},{fmt_num(y)})\\an5\\p1\\bord0\\shad0\\1c{color}"
        f"\\fscx{fmt_num(width)}\\fscy{fmt_num(height)}"
    )
    return DialogueEvent(layer, start, end, BACKGROUND_STYLE_NAME, wrap(tags, BOX_PATH))
