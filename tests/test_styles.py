import pytest

from captionfx.services.errors import InvalidColorFormat, InvalidStyleValue
from captionfx.services.styles import default_style, normalize_style, prepare_style


def test_defaults_when_no_style():
    assert normalize_style(None) == default_style()


def test_camel_case_keys_are_mapped():
    style = normalize_style({"textOutlineWidth": 3, "verticalPosition": 40, "fontSize": None})
    assert style["text_outline_width"] == 3
    assert style["vertical_position"] == 40
    assert style["font_size"] is None


def test_numbers_are_coerced():
    style = prepare_style({"shadow_strength": "1.5", "words_per_group": 3.0})
    assert style["shadow_strength"] == 1.5
    assert style["words_per_group"] == 3


@pytest.mark.parametrize(
    "style",
    [
        {"text_outline_width": -1},
        {"shadow_strength": -0.1},
        {"vertical_position": 101},
        {"font_size": 0},
        {"words_per_group": 1.5},
        {"alternate_colors": "#FF0000"},
        {"alternate_colors": []},
        {"text_align": "justify"},
        {"text_transform": "title"},
        {"shadow_strength": True},
        {"shadow_strength": "strong"},
    ],
)
def test_out_of_range_values_rejected(style):
    with pytest.raises(InvalidStyleValue):
        prepare_style(style)


def test_colors_checked_up_front():
    with pytest.raises(InvalidColorFormat):
        prepare_style({"text_outline_color": "black"})
    with pytest.raises(InvalidColorFormat):
        prepare_style({"background_color": "#12"})
    assert prepare_style({"background_color": "transparent"})["background_color"] == "transparent"


@pytest.mark.parametrize("key", ["shadow_strength", "text_outline_width", "font_size", "vertical_position"])
@pytest.mark.parametrize("value", ["nan", "inf", float("-inf")])
def test_non_finite_numbers_rejected(key, value):
    with pytest.raises(InvalidStyleValue):
        prepare_style({key: value})
