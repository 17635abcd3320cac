import pytest

from captionfx.services.errors import UnknownAnimation
from captionfx.services.registry import (
    LEGACY_ANIMATIONS,
    REGISTRY,
    animate,
    available_strategies,
    get_strategy,
    resolve_strategy,
)
from captionfx.services.subtitles import format_ass_time
from captionfx.services.timing import Cue


def test_every_legacy_name_points_at_a_strategy():
    for legacy, target in LEGACY_ANIMATIONS.items():
        assert get_strategy(legacy) is REGISTRY[target]


def test_lookup_ignores_case():
    assert get_strategy("trendingali").name == "trending_box"
    assert get_strategy("Palette_Cycle").name == "palette_cycle"


def test_unknown_animation():
    with pytest.raises(UnknownAnimation) as excinfo:
        get_strategy("sparkles")
    assert excinfo.value.error_payload["code"] == "UNKNOWN_ANIMATION"


def test_missing_animation_falls_back_to_plain():
    assert resolve_strategy(None).name == "plain"
    assert resolve_strategy({"animation": "none"}).name == "plain"


def test_explicit_name_wins_over_style():
    assert resolve_strategy({"animation": "Girlboss"}, "impact").name == "impact"


def test_catalogue_lists_aliases():
    catalogue = {entry["id"]: entry for entry in available_strategies()}
    assert set(catalogue) == set(REGISTRY)
    assert "TrendingAli" in catalogue["trending_box"]["aliases"]
    assert catalogue["bold_thin"]["granularity"] == "char"


def test_animate_runs_resolved_strategy():
    result = animate(Cue("hello world", 0, 2), {"animation": "HormoziViralSentence"})
    assert len(result.events) == 4
    assert result.lines(format_ass_time)[0].startswith("Dialogue: 0,0:00:00.00,0:00:01.00,Default,,0,0,0,,")
