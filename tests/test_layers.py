from captionfx.services.layers import (
    DialogueEvent,
    LayerSpec,
    assemble,
    box_event,
    compose_text,
    fmt_num,
    token_state,
)
from captionfx.services.motion import MotionState, MotionTracker
from captionfx.services.timing import WORD, WORD_QUAD_GROUP, Cue, segment


def state_styler(state, index, interval):
    return state


def test_fmt_num():
    assert fmt_num(2) == "2"
    assert fmt_num(2.0) == "2"
    assert fmt_num(1.5) == "1.5"
    assert fmt_num(0.1 * 3) == "0.3"
    assert fmt_num(-0.5) == "-0.5"


def test_token_states():
    assert [token_state(i, 1) for i in range(3)] == ["before", "active", "after"]


def test_compose_text_wraps_each_token():
    interval = segment(Cue("a b c", 0, 3), WORD)[1]
    text = compose_text(["a", "b", "c"], 1, state_styler, interval)
    assert text == "{before}a {active}b {after}c"


def test_compose_text_with_line_break_and_move():
    interval = segment(Cue("a b", 0, 2), WORD)[0]
    text = compose_text(["a", "b"], 0, state_styler, interval, separator="\\N", move_tag="\\move(1,2,3,4)")
    assert text == "{\\move(1,2,3,4)active}a\\N{after}b"


def test_solo_layer_renders_only_active_token():
    interval = segment(Cue("a b c", 0, 3), WORD)[2]
    assert compose_text(["a", "b", "c"], 2, state_styler, interval, solo=True) == "{active}c"


def test_assemble_emits_one_event_per_layer_and_interval():
    intervals = segment(Cue("a b", 0, 2), WORD)
    layers = [LayerSpec(0, lambda s, i, u: "glow"), LayerSpec(1, state_styler)]
    events = assemble(intervals, layers)
    assert [(e.layer, e.start, e.end) for e in events] == [(0, 0, 1), (1, 0, 1), (0, 1, 2), (1, 1, 2)]
    assert events[3].text == "{before}a {active}b"


def test_layers_share_one_move_per_interval():
    intervals = segment(Cue("a b", 0, 2), WORD)
    tracker = MotionTracker(None, True, lambda x, y, d: MotionState(x + 1, y))
    layers = [LayerSpec(0, state_styler), LayerSpec(1, state_styler)]
    events = assemble(intervals, layers, tracker=tracker)
    assert "\\move(670,0,671,0)" in events[0].text
    assert "\\move(670,0,671,0)" in events[1].text
    assert "\\move(671,0,672,0)" in events[2].text
    assert tracker.cursor == MotionState(672, 0)


def test_group_scoped_assembly_uses_group_members():
    intervals = segment(Cue("a b c d e f", 0, 4), WORD_QUAD_GROUP)
    events = assemble(intervals, [LayerSpec(1, state_styler)], separator="\\N", group_scoped=True)
    assert [e.text for e in events] == [
        "{active}a b\\N{after}c d",
        "{before}a b\\N{active}c d",
        "{active}e f",
    ]


def test_prefix_wraps_the_line():
    intervals = segment(Cue("a", 0, 1), WORD)
    events = assemble(intervals, [LayerSpec(1, state_styler, prefix="\\pos(1,2)")])
    assert events[0].text == "{\\pos(1,2)}{active}a"


def test_box_event_draws_scaled_rectangle():
    event = box_event(0, 2, 640, 360, 145, 45, "&H00FFFFFF&")
    assert event.style_name == "Background"
    assert event.text == (
        "{\\pos(640,360)\\an5\\p1\\bord0\\shad0\\1c&H00FFFFFF&\\fscx145\\fscy45}m 0 0 l 100 0 100 100 0 100"
    )


def test_dialogue_line_format():
    event = DialogueEvent(2, 1.0, 2.5, "Default", "{\\bord0}hi")
    line = event.to_line(lambda seconds: f"t{seconds}")
    assert line == "Dialogue: 2,t1.0,t2.5,Default,,0,0,0,,{\\bord0}hi"
    assert event.to_dict() == {"layer": 2, "start": 1.0, "end": 2.5, "style": "Default", "text": "{\\bord0}hi"}
