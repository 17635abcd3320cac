"""Caption animation strategies.

Every animation is a ``Strategy`` value: a segmentation granularity plus either a
per-unit layer set (rendered by the layer assembler) or a custom emitter for the
few effects that are not a single pass over the units. Shared color, glow and
palette rules live here so that individual animations only state what differs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from captionfx.config import (
    BOLD_FONT,
    BOX_HEIGHT,
    BOX_PADDING,
    CANVAS_CENTER_X,
    DEFAULT_FONT_SIZE,
    DEFAULT_GLOW_PALETTE,
    DEFAULT_PAIR_COLOR_SETS,
    DEFAULT_PALETTE,
    DEFAULT_VERTICAL_POSITION,
    FADE_IN_MS,
    PAIR_LINE_SPACING,
    PLAY_RES_Y,
    POP_SCALE_MS,
    SHRINK_MS,
    THIN_FONT,
    WAVY_PALETTE,
    WORD_FADE_IN_MS,
)
from captionfx.services.colors import (
    BLACK,
    WHITE,
    alpha_hex,
    is_transparent,
    normalize_color,
    normalize_palette,
    round_half_up,
    strip_color,
)
from captionfx.services.fonts import resolve_font_path, text_width_px
from captionfx.services.layers import (
    ACTIVE,
    AFTER,
    BEFORE,
    DEFAULT_STYLE_NAME,
    LINE_BREAK,
    SPACE,
    DialogueEvent,
    LayerSpec,
    assemble,
    box_event,
    fmt_num,
    wrap,
)
from captionfx.services.motion import MotionState, MotionTracker, NextPosition, motion_enabled, vertical_margin
from captionfx.services.styles import prepare_style
from captionfx.services.timing import (
    CHAR,
    LINE,
    WORD,
    WORD_PAIR,
    WORD_QUAD_GROUP,
    Cue,
    SubInterval,
    divide_window,
    segment,
    tokenize,
)

logger = logging.getLogger(__name__)

HIDDEN = "\\alpha&HFF&"


@dataclass(frozen=True)
class RenderContext:
    cue: Cue
    style: Dict[str, Any]
    intervals: List[SubInterval]
    tracker: MotionTracker
    word_start_index: int = 0


@dataclass(frozen=True)
class AnimationResult:
    events: List[DialogueEvent]
    cursor: MotionState

    def lines(self, format_time: Callable[[float], str]) -> List[str]:
        return [event.to_line(format_time) for event in self.events]


LayerBuilder = Callable[[RenderContext], List[LayerSpec]]
Emitter = Callable[[RenderContext], List[DialogueEvent]]


@dataclass(frozen=True)
class Strategy:
    """One animation: how a cue is segmented and which layers it paints."""

    name: str
    granularity: str
    layers: Optional[LayerBuilder] = None
    separator: str = SPACE
    group_scoped: bool = False
    static_layers: Optional[Emitter] = None
    emit: Optional[Emitter] = None
    motion: bool = True
    description: str = ""

    def run(
        self,
        cue: Cue,
        style: Optional[Dict[str, Any]] = None,
        cursor: Optional[MotionState] = None,
        next_position: Optional[NextPosition] = None,
        word_start_index: int = 0,
    ) -> AnimationResult:
        """Render one cue; the returned cursor is unchanged when motion is off."""
        prepared = prepare_style(style)
        cue = _transform_cue(cue, prepared)
        intervals = segment(cue, self.granularity, prepared.get("words_per_group") or 2)
        tracker = MotionTracker(
            cursor,
            self.motion and motion_enabled(prepared),
            next_position,
            vertical_margin(prepared),
        )
        context = RenderContext(cue, prepared, intervals, tracker, word_start_index)
        events: List[DialogueEvent] = []
        if self.static_layers:
            events.extend(self.static_layers(context))
        if self.emit:
            events.extend(self.emit(context))
        elif self.layers:
            events.extend(
                assemble(
                    intervals,
                    self.layers(context),
                    separator=self.separator,
                    tracker=tracker,
                    group_scoped=self.group_scoped,
                )
            )
        events.sort(key=lambda event: event.start)
        logger.debug("%s rendered %d events for %r", self.name, len(events), cue.text)
        return AnimationResult(events, tracker.cursor)


def _transform_cue(cue: Cue, style: Dict[str, Any]) -> Cue:
    transform = style.get("text_transform")
    if transform == "uppercase":
        return Cue(cue.text.upper(), cue.start, cue.end)
    if transform == "lowercase":
        return Cue(cue.text.lower(), cue.start, cue.end)
    return cue


# -- shared style rules -------------------------------------------------------


@dataclass(frozen=True)
class Glow:
    strength: float
    shadow_alpha: str
    blur_alpha: str
    enabled: bool = True


def _strength(style: Dict[str, Any], default: float) -> float:
    value = style.get("shadow_strength")
    return default if value is None else float(value)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _bounded_alpha(value: float, low: int) -> str:
    return alpha_hex(_clamp(round_half_up(value), low, 255))


def _reveal_glow(style: Dict[str, Any], default: float = 0) -> Glow:
    """Dampened strength for reveal effects: x0.8 above 1, x0.5 otherwise."""
    raw = _strength(style, default)
    strength = raw * 0.8 if raw > 1 else raw * 0.5
    return Glow(strength, alpha_hex(150 - strength * 20), alpha_hex(120 - strength * 20), raw > 0)


def _cycle_glow(style: Dict[str, Any], default: float, low: float = 0) -> Glow:
    strength = _clamp(_strength(style, default), low, 5)
    return Glow(strength, _bounded_alpha(150 - strength * 20, 50), _bounded_alpha(120 - strength * 20, 20), strength > 0)


def _soft_glow(style: Dict[str, Any], default: float) -> Glow:
    """Boosted strength (+0.2 above 1) with gentler alpha slopes."""
    raw = _clamp(_strength(style, default), 0, 5)
    strength = raw + 0.2 if raw > 1 else raw
    return Glow(strength, _bounded_alpha(133 - strength * 24, 50), _bounded_alpha(96 - strength * 28, 20), raw > 0)


def _pair_glow(style: Dict[str, Any], factor: float) -> Glow:
    raw = style.get("shadow_strength")
    strength = raw * factor if raw else 1.0
    enabled = raw is None or raw > 0
    return Glow(strength, alpha_hex(140 - strength * 0.5), alpha_hex(120 - strength * 0.5), enabled)


def _glow_tags(
    fill: str,
    border: float,
    blur: float,
    glow: Glow,
    yshad: Optional[float] = None,
    edge: Optional[str] = None,
    back: Optional[str] = None,
) -> str:
    tags = (
        f"\\c{fill}\\bord{fmt_num(border)}\\blur{fmt_num(blur)}"
        f"\\3c{edge or fill}\\3a&H{glow.shadow_alpha}&"
        f"\\4c{back or fill}\\4a&H{glow.blur_alpha}&"
    )
    if yshad is not None:
        tags += f"\\xshad0\\yshad{fmt_num(yshad)}"
    return tags


def _fade_in(duration_ms: int) -> str:
    return f"\\alpha&HFF&\\t(0,{duration_ms},\\alpha&H00&)"


def _native(bare: str) -> str:
    return f"&H{bare}&"


def _color(style: Dict[str, Any], key: str, default: str) -> str:
    value = style.get(key)
    return normalize_color(value) if value else default


def _palette(style: Dict[str, Any], key: str, default: Sequence[str]) -> List[str]:
    colors = normalize_palette(style.get(key)) or list(default)
    return [_native(color) for color in colors]


def _primary_palette(style: Dict[str, Any], default: Sequence[str] = DEFAULT_PALETTE) -> List[str]:
    """Explicit palette, then the primary color, then the built-in palette."""
    if style.get("alternate_colors"):
        return _palette(style, "alternate_colors", default)
    if style.get("color"):
        return [normalize_color(style["color"])]
    return [_native(color) for color in default]


def _glow_palette(style: Dict[str, Any], primary: List[str], default: Optional[Sequence[str]] = None) -> List[str]:
    """Glow colors are index-matched to the primary palette."""
    if style.get("alternate_shadow_colors"):
        return _palette(style, "alternate_shadow_colors", DEFAULT_GLOW_PALETTE)
    if style.get("alternate_colors") or style.get("color") or default is None:
        return primary
    return [_native(color) for color in default]


def _pick(palette: Sequence[str], index: int) -> str:
    return palette[index % len(palette)]


def _outline(style: Dict[str, Any]) -> str:
    return _color(style, "text_outline_color", BLACK)


def _outline_width(style: Dict[str, Any], default: float = 0, scale: float = 1.0) -> float:
    value = style.get("text_outline_width")
    return (default if value is None else value) * scale


# -- sequential reveal --------------------------------------------------------


def _reveal_layers(viral: bool) -> LayerBuilder:
    def build(ctx: RenderContext) -> List[LayerSpec]:
        style = ctx.style
        glow = _reveal_glow(style)
        border = 0.05 * glow.strength
        fade = _fade_in(FADE_IN_MS)
        offset = ctx.word_start_index

        if viral:
            colors = _primary_palette(style)
            glows = _glow_palette(style, colors, DEFAULT_GLOW_PALETTE)
            white_glow = "&HFFFFFF&"

            def text(state: str, index: int, _: SubInterval) -> str:
                if state == BEFORE:
                    return f"\\c{WHITE}\\bord0"
                if state == ACTIVE:
                    return f"{fade}\\c{_pick(colors, offset + index)}\\bord0"
                return HIDDEN

            def shadow(state: str, index: int, _: SubInterval) -> str:
                if state == BEFORE:
                    return _glow_tags(white_glow, border, 1.5 * glow.strength, glow, -0.5)
                if state == ACTIVE:
                    color = _pick(glows, offset + index)
                    return fade + _glow_tags(color, border, 1.5 * glow.strength, glow, -0.5)
                return HIDDEN

        else:
            shadow_color = _color(style, "shadow_color", BLACK)

            def text(state: str, index: int, _: SubInterval) -> str:
                if state == BEFORE:
                    return f"\\c{WHITE}\\bord0"
                if state == ACTIVE:
                    return f"{fade}\\c{WHITE}\\bord0"
                return f"\\c{WHITE}\\bord0{HIDDEN}"

            def shadow(state: str, index: int, _: SubInterval) -> str:
                tags = _glow_tags(shadow_color, border, 2 * glow.strength, glow, -0.5)
                if state == BEFORE:
                    return tags
                if state == ACTIVE:
                    return fade + tags
                return HIDDEN

        return [LayerSpec(0, shadow), LayerSpec(1, text)]

    return build


def _outline_reveal_layers(ctx: RenderContext) -> List[LayerSpec]:
    style = ctx.style
    base = (
        f"\\c{_color(style, 'color', WHITE)}\\3c{_outline(style)}"
        f"\\bord{fmt_num(_outline_width(style, scale=0.75))}"
    )

    def text(state: str, index: int, _: SubInterval) -> str:
        return base + HIDDEN if state == AFTER else base

    return [LayerSpec(1, text)]


def _word_by_word_layers(ctx: RenderContext) -> List[LayerSpec]:
    style = ctx.style
    strength = _strength(style, 1) or 1
    glow = Glow(strength, alpha_hex(150 - strength * 20), alpha_hex(120 - strength * 20))
    width = _outline_width(style, scale=0.75)
    colors = _primary_palette(style, [strip_color(WHITE)])
    glows = _glow_palette(style, colors)
    fade = _fade_in(WORD_FADE_IN_MS)
    offset = ctx.word_start_index

    def shadow(state: str, index: int, _: SubInterval) -> str:
        return fade + _glow_tags(_pick(glows, offset + index), width, 3 * strength, glow, -0.5)

    def text(state: str, index: int, _: SubInterval) -> str:
        return f"{fade}\\c{_pick(colors, offset + index)}\\bord{fmt_num(width)}"

    return [LayerSpec(0, shadow, solo=True), LayerSpec(1, text, solo=True)]


# -- palette highlight --------------------------------------------------------


def _cycle_layers(single: bool) -> LayerBuilder:
    def build(ctx: RenderContext) -> List[LayerSpec]:
        style = ctx.style
        if single:
            glow = _cycle_glow(style, 3, low=0.5)
            colors = [_color(style, "color", normalize_color("#FFFF00"))]
        else:
            glow = _cycle_glow(style, 3)
            colors = _palette(style, "alternate_colors", DEFAULT_PALETTE)
        glows = _glow_palette(style, colors)
        outline = f"\\bord{fmt_num(_outline_width(style, default=2))}\\3c{_outline(style)}\\shad0"
        border = max(0.1, 0.1 * glow.strength)
        blur = max(1, 2 * glow.strength)
        offset = ctx.word_start_index

        def text(state: str, index: int, _: SubInterval) -> str:
            color = _pick(colors, offset + index) if state == ACTIVE else WHITE
            return f"\\c{color}{outline}"

        def shadow(state: str, index: int, _: SubInterval) -> str:
            if state != ACTIVE:
                return HIDDEN
            return _glow_tags(_pick(glows, offset + index), border, blur, glow, -1)

        layers = [LayerSpec(1, text)]
        if glow.enabled:
            layers.insert(0, LayerSpec(0, shadow))
        return layers

    return build


def _girlboss_layers(ctx: RenderContext) -> List[LayerSpec]:
    style = ctx.style
    glow = _soft_glow(style, 1)
    color = _color(style, "color", normalize_color("#F361D8"))
    outline = f"\\bord{fmt_num(_outline_width(style, default=2))}\\3c{_outline(style)}\\shad0"
    border = max(0.1, 0.1 * glow.strength)
    blur = max(1, 3 * glow.strength)

    def shadow(state: str, index: int, _: SubInterval) -> str:
        return _glow_tags(WHITE if state == AFTER else color, border, blur, glow)

    def text(state: str, index: int, _: SubInterval) -> str:
        return f"\\c{WHITE if state == AFTER else color}{outline}"

    layers = [LayerSpec(2, text)]
    if glow.enabled:
        layers.insert(0, LayerSpec(1, shadow))
    return layers


def _full_fill_static(ctx: RenderContext) -> List[DialogueEvent]:
    cue = ctx.cue
    return [
        DialogueEvent(0, cue.start, cue.end, DEFAULT_STYLE_NAME, wrap("\\c&H000000&\\bord2\\blur0.8", cue.text)),
        DialogueEvent(1, cue.start, cue.end, DEFAULT_STYLE_NAME, wrap(f"\\c{WHITE}\\bord0", cue.text)),
    ]


def _full_fill_layers(ctx: RenderContext) -> List[LayerSpec]:
    color = _color(ctx.style, "color", WHITE)

    def fill(state: str, index: int, _: SubInterval) -> str:
        return f"\\c{WHITE if state == AFTER else color}\\bord0"

    return [LayerSpec(2, fill)]


def _impact_layers(full: bool) -> LayerBuilder:
    def build(ctx: RenderContext) -> List[LayerSpec]:
        style = ctx.style
        glow = _cycle_glow(style, 2, low=0.5 if full else 0)
        outline = _outline(style)
        width = max(2, style.get("text_outline_width") or 3)
        border = max(0.5, 0.5 * glow.strength)
        blur = max(1, 2 * glow.strength)

        def shadow(state: str, index: int, _: SubInterval) -> str:
            return _glow_tags(WHITE, border, blur, glow, -1, edge=outline)

        def text(state: str, index: int, _: SubInterval) -> str:
            return f"\\c{WHITE}\\bord{fmt_num(width)}\\3c{outline}\\shad0"

        layers = [LayerSpec(1, text, solo=True)]
        if glow.enabled:
            layers.insert(0, LayerSpec(0, shadow, solo=True))
        return layers

    return build


def _reveal_enlarge_layers(ctx: RenderContext) -> List[LayerSpec]:
    style = ctx.style
    glow = _reveal_glow(style, default=1)
    colors = _palette(style, "alternate_colors", DEFAULT_PALETTE)
    glows = _glow_palette(style, colors, DEFAULT_GLOW_PALETTE)
    width = fmt_num(_outline_width(style, default=2) or 2)
    outline = _outline(style)
    grow = f"\\fscx100\\fscy100\\t(0,{POP_SCALE_MS},\\fscx120\\fscy120)"
    offset = ctx.word_start_index

    def text(state: str, index: int, _: SubInterval) -> str:
        if state == ACTIVE:
            return f"{grow}\\c{_pick(colors, offset + index)}\\bord{width}\\3c{outline}"
        return f"\\fscx100\\fscy100\\c{WHITE}\\bord{width}\\3c{outline}"

    def shadow(state: str, index: int, _: SubInterval) -> str:
        fill = _pick(glows, offset + index) if state == ACTIVE else outline
        tags = _glow_tags(fill, float(width), 1.5 * glow.strength, glow, -0.5, edge=outline, back=outline)
        return (grow if state == ACTIVE else "\\fscx100\\fscy100") + tags

    layers = [LayerSpec(1, text)]
    if glow.enabled:
        layers.insert(0, LayerSpec(0, shadow))
    return layers


# -- grouped words ------------------------------------------------------------


def _thin_to_bold_layers(ctx: RenderContext) -> List[LayerSpec]:
    style = ctx.style
    glow = _soft_glow(style, 1.5)
    color = _color(style, "color", WHITE)
    outline = f"\\bord{fmt_num(_outline_width(style, default=2))}\\3c{_outline(style)}"
    bold = f"\\fn{BOLD_FONT}\\fscx120\\fscy120"
    thin = f"\\fn{THIN_FONT}"
    border = max(0.1, 0.1 * glow.strength)
    blur = max(1, 4 * glow.strength)

    def text(state: str, index: int, _: SubInterval) -> str:
        return f"\\c{color}{outline}{bold if state == ACTIVE else thin}"

    def shadow(state: str, index: int, _: SubInterval) -> str:
        if state == ACTIVE:
            return _glow_tags(color, border, blur, glow, -1) + bold
        return f"\\c{color}{outline}\\shad0{thin}"

    layers = [LayerSpec(1, text)]
    if glow.enabled:
        layers.insert(0, LayerSpec(0, shadow))
    return layers


def _pair_color_sets(style: Dict[str, Any], key: str) -> Optional[List[List[str]]]:
    colors = normalize_palette(style.get(key))
    if not colors:
        return None
    pair = [_native(colors[0]), _native(colors[1 % len(colors)])]
    return [pair, pair]


def _alternating_pairs_layers(ctx: RenderContext) -> List[LayerSpec]:
    style = ctx.style
    glow = _pair_glow(style, 1.0)
    color_sets = _pair_color_sets(style, "alternate_colors") or [
        [_native(color) for color in pair] for pair in DEFAULT_PAIR_COLOR_SETS
    ]
    glow_sets = _pair_color_sets(style, "alternate_shadow_colors") or color_sets
    outline = f"\\3c{_outline(style)}\\bord{fmt_num(_outline_width(style, scale=0.75))}"

    def text(state: str, index: int, interval: SubInterval) -> str:
        if state == ACTIVE:
            color = color_sets[interval.word_index % 2][index]
            return f"\\c{color}{outline}\\fscx150\\fscy150"
        return f"\\c{WHITE}{outline}\\fscx100\\fscy100"

    def shadow(state: str, index: int, interval: SubInterval) -> str:
        if state == ACTIVE:
            color = glow_sets[interval.word_index % 2][index]
            return "\\alpha&HE0&" + _glow_tags(color, 3, 10 * glow.strength, glow) + "\\fscx150\\fscy150"
        return "\\alpha&HE0&" + _glow_tags("&HFFFFFF&", 0, 0, glow) + "\\fscx100\\fscy100"

    layers = [LayerSpec(1, text)]
    if glow.enabled:
        layers.insert(0, LayerSpec(0, shadow))
    return layers


def _shrinking_pairs_emit(ctx: RenderContext) -> List[DialogueEvent]:
    style = ctx.style
    cue = ctx.cue
    glow = _pair_glow(style, 0.7)
    color = _color(style, "color", _native("0BF431"))
    outline = f"\\3c{_outline(style)}\\bord{fmt_num(_outline_width(style, scale=0.75))}"
    shrink = f"\\fscx120\\fscy120\\t(0,{SHRINK_MS},\\fscx100\\fscy100)"
    settled = "\\fscx100\\fscy100"
    margin = vertical_margin(style)
    events: List[DialogueEvent] = []
    for interval in ctx.intervals:
        offset = interval.index * PAIR_LINE_SPACING
        move = ctx.tracker.step(interval.end - interval.start, offset)
        if move:
            position = move.tag()
            resting = f"\\pos({round_half_up(move.to_x)},{round_half_up(move.to_y)})"
        else:
            position = resting = f"\\pos({round_half_up(ctx.tracker.cursor.x)},{margin + offset})"
        pair = interval.unit
        text = wrap(f"{position}\\c{color}{outline}{shrink}", pair)
        events.append(DialogueEvent(1, interval.start, interval.end, DEFAULT_STYLE_NAME, text))
        if glow.enabled:
            tags = f"{position}\\alpha&HE0&{_glow_tags(color, 3, 10 * glow.strength, glow)}{shrink}"
            events.append(DialogueEvent(0, interval.start, interval.end, DEFAULT_STYLE_NAME, wrap(tags, pair)))
        if interval.end >= cue.end:
            continue
        # Earlier pairs stay on screen in white until the cue ends.
        text = wrap(f"{resting}\\c{WHITE}{outline}{settled}", pair)
        events.append(DialogueEvent(1, interval.end, cue.end, DEFAULT_STYLE_NAME, text))
        if glow.enabled:
            tags = f"{resting}\\alpha&HE0&{_glow_tags('&HFFFFFF&', 3, 10 * glow.strength, glow)}{settled}"
            events.append(DialogueEvent(0, interval.end, cue.end, DEFAULT_STYLE_NAME, wrap(tags, pair)))
    return events


# -- character effects --------------------------------------------------------


def _bold_thin_emit(ctx: RenderContext) -> List[DialogueEvent]:
    style = ctx.style
    color = _color(style, "color", normalize_color("#FEFD02"))
    glow_color = _color(style, "color", normalize_color("#FEFF22"))
    bold_glow = f"\\blur4\\bord3\\3c{glow_color}\\4c{glow_color}\\3a&HB0&\\4a&HB0&"
    thin_glow = f"\\blur2\\bord1.5\\3c{glow_color}\\4c{glow_color}\\3a&HC5&\\4a&HC5&"
    words = tokenize(ctx.cue.text)

    def weight(word_index: int) -> tuple:
        if (word_index // 2) % 2 == 1:
            return f"\\fn{BOLD_FONT}", bold_glow
        return f"\\fn{THIN_FONT}", thin_glow

    events: List[DialogueEvent] = []
    for interval in ctx.intervals:
        move = ctx.tracker.move_tag(interval.end - interval.start)
        font, glow = weight(interval.word_index)
        chars: List[str] = []
        for slot, char in enumerate(interval.members):
            if slot < interval.slot:
                chars.append(wrap(f"\\c{color}{font}{glow}\\shad0", char))
            elif slot == interval.slot:
                chars.append(
                    wrap(
                        f"{move}\\an5\\c{color}{font}\\bord0\\blur0"
                        f"\\alpha&HFF&\\t(0,200,\\alpha&H00&)\\t(200,201,{glow})",
                        char,
                    )
                )
            else:
                chars.append(wrap(HIDDEN, char))
        parts: List[str] = []
        for word_index, word in enumerate(words):
            if word_index < interval.word_index:
                past_font, past_glow = weight(word_index)
                parts.append(wrap(f"\\c{color}{past_font}{past_glow}\\shad0", word))
            elif word_index == interval.word_index:
                parts.append("".join(chars) if chars else wrap(move, ""))
            else:
                parts.append(wrap(HIDDEN, word))
        events.append(DialogueEvent(0, interval.start, interval.end, DEFAULT_STYLE_NAME, " ".join(parts)))
    return events


def _wavy_colors_emit(ctx: RenderContext) -> List[DialogueEvent]:
    style = ctx.style
    colors = _palette(style, "alternate_colors", WAVY_PALETTE)
    width = fmt_num(_outline_width(style, default=2))
    outline = _outline(style)
    events: List[DialogueEvent] = []
    for interval in ctx.intervals:
        word = interval.unit
        if not word:
            continue
        color = _pick(colors, ctx.word_start_index + interval.index)
        char_sets = [word[index : index + 4] for index in range(0, len(word), 4)]
        word_ms = (interval.end - interval.start) * 1000
        stretch = (
            f"{{\\t(0,{fmt_num(word_ms * 0.25)},\\fscx100\\fscy150)}}"
            f"{{\\t({fmt_num(word_ms * 0.25)},{fmt_num(word_ms * 0.5)},\\fscx100\\fscy100)}}"
        )
        colored = f"\\3c{color}\\bord{width}\\c{color}\\blur8\\alpha&H60&\\shad5"
        plain = f"\\c{WHITE}\\bord{width}\\3c{outline}\\blur0\\alpha&H00&\\shad0"
        for active, (start, end) in enumerate(divide_window(interval.start, interval.end, len(char_sets))):
            display = "".join(
                wrap(colored if index == active else plain, chars) for index, chars in enumerate(char_sets)
            )
            events.append(DialogueEvent(0, start, end, DEFAULT_STYLE_NAME, stretch + display))
    return events


def _floating_display_emit(ctx: RenderContext) -> List[DialogueEvent]:
    cue = ctx.cue
    chars = list(cue.text)
    char_width = 31
    base_y = 460
    cycle = 0.7
    steps = 30
    drift = 300
    trail_steps = 5
    trail_distance = 150
    main_end = cue.end - 0.25
    start_x = CANVAS_CENTER_X - len(chars) * char_width / 2
    trail_start = max(cue.start, main_end)
    events: List[DialogueEvent] = []
    for index, char in enumerate(chars):
        if char == " ":
            continue
        phase = index / len(chars) * math.pi * 2
        x = start_x + index * char_width
        cycles = math.ceil((main_end - cue.start) / cycle) if main_end > cue.start else 0
        for cycle_index in range(cycles):
            cycle_start = cue.start + cycle_index * cycle
            for step in range(steps):
                start = cycle_start + step * cycle / steps
                end = cycle_start + (step + 1) * cycle / steps
                if end > main_end:
                    break
                y = base_y + math.sin(step / steps * math.pi * 2 + phase) * 0.4
                current_x = x + drift * (start - cue.start) / (main_end - cue.start)
                events.append(
                    DialogueEvent(0, start, end, DEFAULT_STYLE_NAME, wrap(f"\\pos({fmt_num(current_x)},{fmt_num(y)})", char))
                )
        for trail in range(trail_steps):
            offset = trail_distance * trail / trail_steps
            fade = math.floor(trail / trail_steps * 255)
            tags = f"\\pos({fmt_num(x + drift + offset)},{base_y})\\alpha&H{fade:02X}&"
            events.append(DialogueEvent(0, trail_start, cue.end, DEFAULT_STYLE_NAME, wrap(tags, char)))
    return events


# -- whole-cue effects --------------------------------------------------------


def _box_position(style: Dict[str, Any]) -> int:
    position = style.get("vertical_position")
    position = DEFAULT_VERTICAL_POSITION if position is None else position
    return round_half_up(PLAY_RES_Y * position / 100)


def _trending_box_static(ctx: RenderContext) -> List[DialogueEvent]:
    style = ctx.style
    background = style.get("background_color")
    color = WHITE if is_transparent(background) else normalize_color(background)
    text_width = text_width_px(ctx.cue.text, resolve_font_path(style), style.get("font_size") or DEFAULT_FONT_SIZE)
    width = round_half_up(text_width) + BOX_PADDING * 2
    return [box_event(ctx.cue.start, ctx.cue.end, CANVAS_CENTER_X, _box_position(style), width, BOX_HEIGHT, color)]


def _trending_box_layers(ctx: RenderContext) -> List[LayerSpec]:
    color = _color(ctx.style, "color", BLACK)

    def text(state: str, index: int, _: SubInterval) -> str:
        alpha = "&H80&" if state == AFTER else "&H00&"
        return f"\\c{color}\\alpha{alpha}\\bord0"

    prefix = f"\\pos({CANVAS_CENTER_X},{_box_position(ctx.style)})\\an5"
    return [LayerSpec(1, text, prefix=prefix)]


def _enlarge_emit(ctx: RenderContext) -> List[DialogueEvent]:
    style = ctx.style
    cue = ctx.cue
    words = tokenize(cue.text)
    half = math.ceil(len(words) / 2)
    first, second = " ".join(words[:half]), " ".join(words[half:])
    outline = f"\\3c{_outline(style)}\\bord{fmt_num(_outline_width(style, scale=0.75))}"
    position = f"\\pos({CANVAS_CENTER_X},{vertical_margin(style, default=PLAY_RES_Y // 2)})\\an5"
    font_size = style.get("font_size")
    scale = fmt_num(font_size / 48 * 150 if font_size else 150)
    pop_ms = fmt_num(cue.duration * 0.2 * 1000)
    text = f"{{\\t(0,{pop_ms},\\fscx{scale}\\fscy{scale})}}" + wrap(f"{position}\\c{WHITE}{outline}", first)
    if second:
        text += " " + wrap(f"{position}\\c{_color(style, 'color', WHITE)}{outline}", second)
    return [DialogueEvent(1, cue.start, cue.end, DEFAULT_STYLE_NAME, text)]


def _plain_emit(ctx: RenderContext) -> List[DialogueEvent]:
    cue = ctx.cue
    background = ctx.style.get("background_color")
    move = ctx.tracker.move_tag(cue.duration)
    if is_transparent(background):
        tags = "\\alpha&H00&\\1a&H00&\\3a&HFF&\\4a&HFF&\\bord0\\shad0"
    else:
        color = normalize_color(background)
        tags = f"\\alpha&H00&\\1a&H00&\\3a&H00&\\4a&H00&\\bord2\\3c{color}\\4c{color}\\shad0"
    return [DialogueEvent(0, cue.start, cue.end, DEFAULT_STYLE_NAME, wrap(move + tags, cue.text))]


STRATEGIES: List[Strategy] = [
    Strategy("reveal_words", WORD, _reveal_layers(viral=False), description="Sequential fade-in reveal over a soft shadow."),
    Strategy("reveal_words_viral", WORD, _reveal_layers(viral=True), description="Sequential reveal with palette-colored active word."),
    Strategy("reveal_words_outline", WORD, _outline_reveal_layers, description="Single-layer outlined reveal."),
    Strategy("word_by_word", WORD, _word_by_word_layers, description="One word on screen at a time with glow."),
    Strategy("palette_cycle", WORD, _cycle_layers(single=False), description="Active word cycles through the palette."),
    Strategy("highlight_single", WORD, _cycle_layers(single=True), description="Active word in a single highlight color."),
    Strategy("girlboss", WORD, _girlboss_layers, description="Progressive color fill with glow."),
    Strategy("full_fill", WORD, _full_fill_layers, static_layers=_full_fill_static, description="Static base layers with per-word fill."),
    Strategy("impact", WORD, _impact_layers(full=False), description="White impact text, one word at a time."),
    Strategy("impact_full", LINE, _impact_layers(full=True), description="White impact text for the whole cue."),
    Strategy("reveal_enlarge", WORD, _reveal_enlarge_layers, description="Active word grows in palette color."),
    Strategy("thin_to_bold", WORD_PAIR, _thin_to_bold_layers, separator=LINE_BREAK, description="Stacked pairs, active pair bold."),
    Strategy(
        "alternating_pairs",
        WORD_QUAD_GROUP,
        _alternating_pairs_layers,
        separator=LINE_BREAK,
        group_scoped=True,
        description="Two stacked pairs per group, active pair enlarged.",
    ),
    Strategy("shrinking_pairs", WORD_PAIR, emit=_shrinking_pairs_emit, description="Pairs shrink in from 120% and settle white."),
    Strategy("bold_thin", CHAR, emit=_bold_thin_emit, description="Character reveal alternating bold and thin word blocks."),
    Strategy("wavy_colors", WORD, emit=_wavy_colors_emit, motion=False, description="Character sets flash color with a stretch."),
    Strategy(
        "trending_box",
        WORD,
        _trending_box_layers,
        static_layers=_trending_box_static,
        motion=False,
        description="Per-word reveal over a static background box.",
    ),
    Strategy("enlarge", LINE, emit=_enlarge_emit, motion=False, description="Whole-cue pop with two-tone halves."),
    Strategy("floating_display", LINE, emit=_floating_display_emit, motion=False, description="Wobbling characters drifting right."),
    Strategy("plain", LINE, emit=_plain_emit, description="Unanimated text with optional background."),
]
