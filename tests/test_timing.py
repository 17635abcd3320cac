import pytest

from captionfx.services.errors import EmptyCue, InvalidStyleValue
from captionfx.services.timing import (
    CHAR,
    GRANULARITIES,
    LINE,
    WORD,
    WORD_PAIR,
    WORD_QUAD_GROUP,
    Cue,
    divide_window,
    group_words,
    segment,
    tokenize,
)


def test_two_words_split_the_window_evenly():
    intervals = segment(Cue("hello world", 0, 2), WORD)
    assert [(i.unit, i.start, i.end) for i in intervals] == [("hello", 0, 1), ("world", 1, 2)]


@pytest.mark.parametrize("granularity", GRANULARITIES)
def test_sub_intervals_cover_the_cue(granularity):
    """Intervals are contiguous and the last one ends exactly at the cue end."""
    cue = Cue("the quick brown fox jumps over a lazy dog", 1.1, 4.3)
    intervals = segment(cue, granularity)
    assert intervals[0].start == cue.start
    assert intervals[-1].end == cue.end
    for previous, current in zip(intervals, intervals[1:]):
        assert current.start == previous.end
        assert current.end > current.start


def test_consecutive_spaces_keep_empty_tokens():
    assert tokenize("a  b") == ["a", "", "b"]
    assert [i.unit for i in segment(Cue("a  b", 0, 3), WORD)] == ["a", "", "b"]


@pytest.mark.parametrize("text", ["", "   "])
def test_blank_text_raises_empty_cue(text):
    with pytest.raises(EmptyCue):
        segment(Cue(text, 0, 1), WORD)


def test_cue_window_must_not_be_empty():
    with pytest.raises(EmptyCue):
        Cue("hello", 2, 2)


def test_characters_divide_their_word_window():
    intervals = segment(Cue("ab cd", 0, 2), CHAR)
    assert [(i.unit, i.start, i.end) for i in intervals] == [
        ("a", 0, 0.5),
        ("b", 0.5, 1),
        ("c", 1, 1.5),
        ("d", 1.5, 2),
    ]
    assert [(i.word_index, i.slot) for i in intervals] == [(0, 0), (0, 1), (1, 0), (1, 1)]
    assert intervals[3].members == ("c", "d")


def test_word_pairs_leave_a_short_last_group():
    intervals = segment(Cue("a b c d e", 0, 3), WORD_PAIR)
    assert [i.unit for i in intervals] == ["a b", "c d", "e"]
    assert intervals[0].members == ("a b", "c d", "e")


def test_pair_size_follows_group_size():
    intervals = segment(Cue("a b c d e f", 0, 2), WORD_PAIR, group_size=3)
    assert [i.unit for i in intervals] == ["a b c", "d e f"]


def test_quad_groups_split_group_window_between_pairs():
    intervals = segment(Cue("a b c d e f", 0, 4), WORD_QUAD_GROUP)
    assert [(i.unit, i.start, i.end) for i in intervals] == [
        ("a b", 0, 1),
        ("c d", 1, 2),
        ("e f", 2, 4),
    ]
    assert [(i.word_index, i.slot) for i in intervals] == [(0, 0), (0, 1), (1, 0)]
    assert intervals[1].members == ("a b", "c d")


def test_line_is_a_single_unit():
    intervals = segment(Cue("one two", 0, 1), LINE)
    assert len(intervals) == 1
    assert intervals[0].members == ("one", "two")


def test_divide_window_pins_last_end():
    windows = divide_window(0.1, 0.7, 3)
    assert windows[-1][1] == 0.7
    assert len(windows) == 3


def test_group_size_must_be_positive():
    with pytest.raises(InvalidStyleValue):
        group_words(["a"], 0)


def test_unknown_granularity():
    with pytest.raises(ValueError):
        segment(Cue("a", 0, 1), "sentence")
