"""Named lookup of caption animations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from captionfx.services.errors import UnknownAnimation
from captionfx.services.motion import MotionState, NextPosition
from captionfx.services.strategies import STRATEGIES, AnimationResult, Strategy
from captionfx.services.timing import Cue

logger = logging.getLogger(__name__)

DEFAULT_ANIMATION = "plain"

REGISTRY: Dict[str, Strategy] = {strategy.name: strategy for strategy in STRATEGIES}

# Names used by saved styles from the earlier caption editor.
LEGACY_ANIMATIONS: Dict[str, str] = {
    "HormoziViralSentence": "reveal_words_viral",
    "weakGlitch": "reveal_words",
    "PewDiePie": "reveal_words_outline",
    "HormoziViralWord": "word_by_word",
    "HormoziViralSentence2": "palette_cycle",
    "hormoziViral": "palette_cycle",
    "hormozi": "palette_cycle",
    "quickfox": "highlight_single",
    "tiktokstyle": "highlight_single",
    "Girlboss": "girlboss",
    "ThinToBold": "thin_to_bold",
    "GreenToRedPair": "alternating_pairs",
    "ShrinkingPairs": "shrinking_pairs",
    "alternatingBoldThinAnimation": "bold_thin",
    "Wavycolors": "wavy_colors",
    "RevealEnlarge": "reveal_enlarge",
    "TrendingAli": "trending_box",
    "Enlarge": "enlarge",
    "fullDisplayColorsFill3": "full_fill",
    "whiteImpact": "impact",
    "impactFull": "impact_full",
    "SimpleDisplay": "floating_display",
    "none": "plain",
}

_LOOKUP: Dict[str, str] = {
    **{name.lower(): target for name, target in LEGACY_ANIMATIONS.items()},
    **{name.lower(): name for name in REGISTRY},
}


def get_strategy(name: str) -> Strategy:
    """Look up a strategy by id or legacy name, ignoring case."""
    key = _LOOKUP.get(str(name).strip().lower())
    if key is None:
        raise UnknownAnimation(
            f"Unknown animation {name!r}",
            "GET /animations lists the available names.",
        )
    return REGISTRY[key]


def available_strategies() -> List[Dict[str, Any]]:
    aliases: Dict[str, List[str]] = {}
    for legacy, target in LEGACY_ANIMATIONS.items():
        aliases.setdefault(target, []).append(legacy)
    return [
        {
            "id": strategy.name,
            "granularity": strategy.granularity,
            "description": strategy.description,
            "aliases": aliases.get(strategy.name, []),
        }
        for strategy in STRATEGIES
    ]


def resolve_strategy(style: Optional[Dict[str, Any]], animation: Optional[str] = None) -> Strategy:
    """Pick the strategy named explicitly, else by the style's ``animation`` option."""
    name = animation or (style or {}).get("animation") or DEFAULT_ANIMATION
    strategy = get_strategy(name)
    logger.debug("Resolved animation %r to %s", name, strategy.name)
    return strategy


def animate(
    cue: Cue,
    style: Optional[Dict[str, Any]] = None,
    animation: Optional[str] = None,
    cursor: Optional[MotionState] = None,
    next_position: Optional[NextPosition] = None,
    word_start_index: int = 0,
) -> AnimationResult:
    """Resolve and run the animation for a single cue."""
    strategy = resolve_strategy(style, animation)
    return strategy.run(cue, style, cursor, next_position, word_start_index)
