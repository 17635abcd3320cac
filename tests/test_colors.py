import pytest

from captionfx.services.colors import (
    alpha_hex,
    bare_color,
    is_transparent,
    normalize_color,
    normalize_palette,
    round_half_up,
)
from captionfx.services.errors import InvalidColorFormat, InvalidStyleValue


def test_white_hex_is_opaque_white():
    assert normalize_color("#FFFFFF") == "&H00FFFFFF&"


def test_hex_reverses_channel_order():
    assert normalize_color("#12AB34") == "&H0034AB12&"
    assert normalize_color("  #12ab34 ") == "&H0034AB12&"


def test_half_alpha_rgba():
    assert normalize_color("rgba(0,0,0,0.5)") == "&H80000000&"


def test_rgb_without_alpha_is_opaque():
    assert normalize_color("rgb(255, 0, 0)") == "&H000000FF&"
    assert normalize_color("rgba(1, 2, 3)") == "&H00030201&"


@pytest.mark.parametrize(
    "value",
    ["#ABC", "#ABCDEF0", "#GGGGGG", "rgba(256,0,0,1)", "rgba(0,0,0,1.5)", "rgba(0,0)", "hsl(0,0%,0%)", "red", ""],
)
def test_invalid_colors_raise(value):
    with pytest.raises(InvalidColorFormat) as excinfo:
        normalize_color(value)
    assert excinfo.value.error_payload["code"] == "INVALID_COLOR"


def test_non_string_color_raises():
    with pytest.raises(InvalidColorFormat):
        normalize_color(123)


@pytest.mark.parametrize("value", ["#000000", "#FFFFFF", "#12AB34", "#FE0A9C"])
def test_hex_decodes_back_to_input(value):
    bare = bare_color(value)
    bgr = bare[-6:]
    assert f"#{bgr[4:6]}{bgr[2:4]}{bgr[0:2]}" == value


@pytest.mark.parametrize("opacity", [0, 0.2, 0.4, 0.6, 0.8, 1])
def test_alpha_is_stored_inverted(opacity):
    decoded = int(bare_color(f"rgba(10, 20, 30, {opacity})")[:2], 16)
    assert 255 - decoded == round_half_up(opacity * 255)


def test_normalization_is_idempotent():
    assert normalize_color("rgba(10,20,30,0.25)") == normalize_color("rgba(10,20,30,0.25)")


def test_alpha_hex_clamps_and_pads():
    assert alpha_hex(-4) == "00"
    assert alpha_hex(10) == "0A"
    assert alpha_hex(300) == "FF"


def test_palette_normalized_element_wise():
    assert normalize_palette(["#FF0000", "rgba(0,255,0,1)"]) == ["000000FF", "0000FF00"]
    assert normalize_palette(None) is None


@pytest.mark.parametrize("palette", ["#FF0000", [], 5])
def test_bad_palettes_raise(palette):
    with pytest.raises(InvalidStyleValue):
        normalize_palette(palette)


def test_transparent_backgrounds():
    assert is_transparent(None)
    assert is_transparent("transparent")
    assert is_transparent("rgba(12, 34, 56, 0)")
    assert not is_transparent("#000000")
    assert not is_transparent("rgba(0,0,0,0.5)")


def test_alpha_ties_round_half_up():
    # (1 - 0.1) * 255 = 229.5
    assert normalize_color("rgba(0, 0, 0, 0.1)") == "&HE6000000&"
