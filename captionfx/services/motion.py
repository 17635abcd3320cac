"""Shake motion cursor threading across timed units and cues."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from captionfx.config import DEFAULT_CURSOR_X, DEFAULT_CURSOR_Y, PLAY_RES_Y, SHAKE_INTENSITY
from captionfx.services.colors import round_half_up


@dataclass(frozen=True)
class MotionState:
    """On-screen cursor carried from one unit (and cue) to the next."""

    x: float = DEFAULT_CURSOR_X
    y: float = DEFAULT_CURSOR_Y

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


DEFAULT_CURSOR = MotionState()

NextPosition = Callable[[float, float, float], MotionState]


@dataclass(frozen=True)
class MoveRange:
    from_x: float
    from_y: float
    to_x: float
    to_y: float

    def tag(self) -> str:
        """Render the \\move override for this range."""
        return (
            f"\\move({round_half_up(self.from_x)},{round_half_up(self.from_y)},"
            f"{round_half_up(self.to_x)},{round_half_up(self.to_y)})"
        )


def shake_position(x: float, y: float, duration: float, rng: Optional[random.Random] = None) -> MotionState:
    """Jitter the cursor uniformly within +/- half the shake intensity."""
    source = rng or random
    half = SHAKE_INTENSITY / 2
    return MotionState(x + source.uniform(-half, half), y + source.uniform(-half, half))


def motion_enabled(style: Dict[str, Any]) -> bool:
    return style.get("animation2") == "Shake"


def vertical_margin(style: Dict[str, Any], default: int = 0) -> int:
    """Convert vertical_position (percent from top) to a pixel margin."""
    position = style.get("vertical_position")
    if position is None:
        return default
    return round_half_up(PLAY_RES_Y * (100 - float(position)) / 100)


def advance(
    cursor: MotionState,
    duration: float,
    next_position: NextPosition,
    margin_v: float = 0,
) -> Tuple[MoveRange, MotionState]:
    """Advance the cursor over one unit and describe the move it implies."""
    target = next_position(cursor.x, cursor.y, duration)
    move = MoveRange(cursor.x, cursor.y + margin_v, target.x, target.y + margin_v)
    return move, target


class MotionTracker:
    """Per-invocation wrapper that threads the cursor through successive units."""

    def __init__(
        self,
        cursor: Optional[MotionState],
        enabled: bool,
        next_position: Optional[NextPosition] = None,
        margin_v: float = 0,
    ) -> None:
        self.cursor = cursor or DEFAULT_CURSOR
        self.enabled = enabled
        self.next_position = next_position or shake_position
        self.margin_v = margin_v

    def step(self, duration: float, offset_y: float = 0) -> Optional[MoveRange]:
        """Advance one unit; returns None when motion is disabled."""
        if not self.enabled:
            return None
        move, self.cursor = advance(self.cursor, duration, self.next_position, self.margin_v + offset_y)
        return move

    def move_tag(self, duration: float, offset_y: float = 0) -> str:
        move = self.step(duration, offset_y)
        return move.tag() if move else ""
