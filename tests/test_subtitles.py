import logging

from captionfx.services.motion import MotionState
from captionfx.services.subtitles import (
    ass_header,
    cues_from_payload,
    format_ass_time,
    generate_ass,
    render_cues,
    write_ass_file,
)
from captionfx.services.timing import Cue


def step_right(x, y, duration):
    return MotionState(x + 10, y)


def test_format_ass_time():
    assert format_ass_time(0) == "0:00:00.00"
    assert format_ass_time(3661.5) == "1:01:01.50"
    assert format_ass_time(-2) == "0:00:00.00"


def test_header_defaults():
    header = ass_header()
    assert "PlayResX: 1280" in header
    assert "PlayResY: 720" in header
    assert "ScaledBorderAndShadow: yes" in header
    assert "Style: Default,Arial,50,&H00FFFFFF,&H00FFFFFF,&H00000000," in header
    assert "Style: Background," in header
    assert header.endswith("Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text")


def test_header_alignment_and_margin():
    header = ass_header({"textAlign": "right", "verticalPosition": 75, "color": "#FF0000"})
    assert ",3,10,10,180,1" in header
    assert "&H000000FF,&H000000FF" in header


def test_header_keeps_fractional_outline_width():
    header = ass_header({"text_outline_width": 1.5})
    assert ",1,1.5,0,2,10,10," in header


def test_header_falls_back_when_font_is_unreadable(tmp_path):
    header = ass_header({"font_family": "Roboto", "font_path": str(tmp_path / "missing.ttf")})
    assert "Style: Default,Roboto,50," in header


def test_cues_from_payload():
    cues = cues_from_payload([{"text": "hi", "start": "1", "end": 2}])
    assert cues == [Cue("hi", 1.0, 2.0)]


def test_render_cues_sorts_and_warns(caplog):
    cues = [Cue("later", 2, 3), Cue("first", 0, 1)]
    with caplog.at_level(logging.WARNING, logger="captionfx"):
        events, _ = render_cues(cues, {"animation": "plain"})
    assert events[0].start == 0
    assert "not in time order" in caplog.text


def test_render_cues_threads_word_index():
    events, _ = render_cues([Cue("a b", 0, 2), Cue("c d", 2, 4)], {"animation": "palette_cycle"})
    third_word = [e for e in events if e.layer == 1 and e.start == 2][0]
    assert third_word.text.startswith("{\\c&H1DE0FE&")


def test_render_cues_threads_cursor():
    style = {"animation": "plain", "animation2": "Shake"}
    events, cursor = render_cues([Cue("a", 0, 1), Cue("b", 1, 2)], style, next_position=step_right)
    assert "\\move(680,0,690,0)" in events[1].text
    assert cursor == MotionState(690, 0)


def test_generate_ass_document():
    document = generate_ass([Cue("hello world", 0, 2)], {"animation": "reveal_words"})
    lines = document.splitlines()
    assert lines[0] == "[Script Info]"
    dialogue = [line for line in lines if line.startswith("Dialogue:")]
    assert len(dialogue) == 4
    assert dialogue[-1].startswith("Dialogue: 1,0:00:01.00,0:00:02.00,Default,,0,0,0,,")
    assert document.endswith("\n")


def test_write_ass_file(tmp_path):
    path = write_ass_file([Cue("hi", 0, 1)], tmp_path / "out" / "captions.ass")
    assert path.read_text(encoding="utf-8").startswith("[Script Info]")
