import random

from captionfx.services.motion import (
    DEFAULT_CURSOR,
    MotionState,
    MotionTracker,
    MoveRange,
    advance,
    motion_enabled,
    shake_position,
    vertical_margin,
)


def step_right(x, y, duration):
    return MotionState(x + 10, y + 1)


def test_default_cursor():
    assert DEFAULT_CURSOR == MotionState(670, 0)


def test_advance_applies_vertical_offset():
    move, target = advance(MotionState(670, 0), 1.0, step_right, margin_v=100)
    assert move == MoveRange(670, 100, 680, 101)
    assert target == MotionState(680, 1)


def test_tracker_chains_moves():
    """Each move starts where the previous one ended."""
    tracker = MotionTracker(None, True, step_right)
    moves = [tracker.step(0.5) for _ in range(4)]
    assert (moves[0].from_x, moves[0].from_y) == (670, 0)
    for previous, current in zip(moves, moves[1:]):
        assert (current.from_x, current.from_y) == (previous.to_x, previous.to_y)
    assert tracker.cursor == MotionState(710, 4)


def test_disabled_tracker_passes_cursor_through():
    cursor = MotionState(100, 200)
    tracker = MotionTracker(cursor, False, step_right)
    assert tracker.step(1.0) is None
    assert tracker.move_tag(1.0) == ""
    assert tracker.cursor == cursor


def test_move_tag_rounds_half_up():
    assert MoveRange(0.5, 1.5, 2.49, -0.5).tag() == "\\move(1,2,2,0)"


def test_vertical_margin():
    assert vertical_margin({"vertical_position": 75}) == 180
    assert vertical_margin({}) == 0
    assert vertical_margin({}, default=360) == 360


def test_motion_only_for_shake():
    assert motion_enabled({"animation2": "Shake"})
    assert not motion_enabled({"animation2": None})
    assert not motion_enabled({})


def test_shake_stays_within_intensity():
    rng = random.Random(7)
    for _ in range(50):
        moved = shake_position(100, 100, 0.2, rng)
        assert abs(moved.x - 100) <= 2.5
        assert abs(moved.y - 100) <= 2.5
