"""Cue tokenization and equal-duration time segmentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from captionfx.services.errors import EmptyCue, InvalidStyleValue

CHAR = "char"
WORD = "word"
WORD_PAIR = "wordPair"
WORD_QUAD_GROUP = "wordQuadGroup"
LINE = "line"
GRANULARITIES = (CHAR, WORD, WORD_PAIR, WORD_QUAD_GROUP, LINE)


@dataclass(frozen=True)
class Cue:
    """One timed transcript segment."""

    text: str
    start: float
    end: float

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise EmptyCue("Cue text must be a string")
        if not self.end > self.start:
            raise EmptyCue(
                f"Cue window [{self.start}, {self.end}) is empty",
                "The cue end must be later than its start.",
            )

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class SubInterval:
    """A timed slice of a cue.

    ``index`` is the position in the segmented sequence, ``word_index`` the
    source word (or group) the unit belongs to, ``slot`` its position inside that
    word or group and ``members`` the sibling units rendered alongside it.
    """

    unit: str
    start: float
    end: float
    index: int
    word_index: int = 0
    slot: int = 0
    members: Tuple[str, ...] = ()


def tokenize(text: str) -> List[str]:
    """Split cue text on single spaces, keeping empty tokens."""
    tokens = text.split(" ")
    if not any(tokens):
        raise EmptyCue("Cue text has no words")
    return tokens


def divide_window(start: float, end: float, count: int) -> List[Tuple[float, float]]:
    """Split [start, end) into ``count`` equal windows ending exactly at ``end``."""
    step = (end - start) / count
    windows = [(start + index * step, start + (index + 1) * step) for index in range(count)]
    windows[-1] = (windows[-1][0], end)
    return windows


def group_words(words: Sequence[str], size: int) -> List[str]:
    """Join consecutive words into groups of ``size``; the last may be short."""
    if size < 1:
        raise InvalidStyleValue("Group size must be at least 1")
    return [" ".join(words[index : index + size]) for index in range(0, len(words), size)]


def quad_groups(words: Sequence[str]) -> List[List[str]]:
    """Partition words into groups of four rendered as up to two stacked pairs."""
    groups: List[List[str]] = []
    for index in range(0, len(words), 4):
        pairs = [" ".join(words[index : index + 2])]
        if index + 2 < len(words):
            pairs.append(" ".join(words[index + 2 : index + 4]))
        groups.append(pairs)
    return groups


def segment(cue: Cue, granularity: str, group_size: int = 2) -> List[SubInterval]:
    """Return contiguous sub-intervals covering the cue window."""
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity {granularity!r}")
    words = tokenize(cue.text)
    if granularity == LINE:
        return [SubInterval(cue.text, cue.start, cue.end, 0, members=tuple(words))]

    if granularity == WORD:
        windows = divide_window(cue.start, cue.end, len(words))
        return [
            SubInterval(word, start, end, index, word_index=index)
            for index, (word, (start, end)) in enumerate(zip(words, windows))
        ]

    if granularity == CHAR:
        intervals: List[SubInterval] = []
        for word_index, (word_start, word_end) in enumerate(divide_window(cue.start, cue.end, len(words))):
            word = words[word_index]
            if not word:
                intervals.append(SubInterval("", word_start, word_end, len(intervals), word_index=word_index))
                continue
            chars = tuple(word)
            for slot, (start, end) in enumerate(divide_window(word_start, word_end, len(chars))):
                intervals.append(
                    SubInterval(chars[slot], start, end, len(intervals), word_index=word_index, slot=slot, members=chars)
                )
        return intervals

    if granularity == WORD_PAIR:
        pairs = group_words(words, group_size)
        windows = divide_window(cue.start, cue.end, len(pairs))
        return [
            SubInterval(pair, start, end, index, word_index=index, members=tuple(pairs))
            for index, (pair, (start, end)) in enumerate(zip(pairs, windows))
        ]

    intervals = []
    groups = quad_groups(words)
    for group_index, (group_start, group_end) in enumerate(divide_window(cue.start, cue.end, len(groups))):
        members = tuple(groups[group_index])
        for slot, (start, end) in enumerate(divide_window(group_start, group_end, len(members))):
            intervals.append(
                SubInterval(members[slot], start, end, len(intervals), word_index=group_index, slot=slot, members=members)
            )
    return intervals
