"""Tests for the color arithmetic helpers."""

from __future__ import annotations

import pytest

from facetheme import color as colors
from facetheme.errors import ConstructionFailure, InvalidColor


def _channels(value: str) -> list[int]:
    return [round(channel * 255) for channel in colors.normalize(value)]


def _assert_close(actual: str, expected: str) -> None:
    for got, want in zip(_channels(actual), _channels(expected)):
        assert abs(got - want) <= 1, (actual, expected)


def test_normalize_accepts_hex_widths() -> None:
    assert colors.normalize("#ffffff") == (1.0, 1.0, 1.0)
    assert colors.normalize("#000") == (0.0, 0.0, 0.0)
    assert colors.normalize("#ffff00000000") == (1.0, 0.0, 0.0)
    assert colors.normalize("  #FFF  ") == (1.0, 1.0, 1.0)


def test_normalize_accepts_rgb_triples() -> None:
    assert colors.normalize((0.5, 0.25, 1)) == (0.5, 0.25, 1.0)


@pytest.mark.parametrize("value", ["#12345", "#gggggg", "", "   ", 42, (2, 0, 0), None])
def test_normalize_rejects_invalid_colors(value: object) -> None:
    with pytest.raises(InvalidColor):
        colors.normalize(value)


@pytest.mark.parametrize("value", ["#-1-1-1", "# f f f", "#+f+f+f", "#f_ff_ff_f", "#0x0"])
def test_normalize_rejects_malformed_hex_digits(value: str) -> None:
    with pytest.raises(InvalidColor):
        colors.normalize(value)


@pytest.mark.parametrize("value", [(float("nan"), 0.0, 0.0), (0.0, float("inf"), 0.0)])
def test_non_finite_channels_are_invalid(value: tuple) -> None:
    with pytest.raises(InvalidColor):
        colors.normalize(value)
    with pytest.raises(InvalidColor):
        colors.blend(value, "#000000", 0.5)


def test_invalid_color_is_a_construction_failure_and_value_error() -> None:
    with pytest.raises(InvalidColor) as excinfo:
        colors.normalize("#xyz")

    assert isinstance(excinfo.value, ConstructionFailure)
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.value == "#xyz"


def test_blend_endpoints_return_each_input() -> None:
    assert colors.blend("#ff0000", "#0000ff", 1) == "#ff0000"
    assert colors.blend("#ff0000", "#0000ff", 0) == "#0000ff"


def test_blend_rounds_halves_up() -> None:
    assert colors.blend("#ff0000", "#0000ff", 0.5) == "#800080"


def test_blend_matches_weighted_mix() -> None:
    assert colors.blend("#ffffff", "#000000", 0.2) == "#333333"
    _assert_close(colors.blend("#282c34", "#21252b", 0.5), "#24292f")


def test_blend_is_monotonic_in_alpha() -> None:
    alphas = [0.0, 0.25, 0.5, 0.75, 1.0]
    results = [colors.normalize(colors.blend("#102030", "#f0e0d0", alpha)) for alpha in alphas]

    for channel in range(3):
        values = [result[channel] for result in results]
        assert values == sorted(values, reverse=True)


def test_blend_accepts_rgb_triples() -> None:
    assert colors.blend((1.0, 1.0, 1.0), "#000000", 1) == "#ffffff"


def test_blend_returns_first_when_input_absent_or_unrecognized() -> None:
    assert colors.blend(None, "#ffffff", 0.5) is None
    assert colors.blend("#ffffff", None, 0.5) == "#ffffff"
    assert colors.blend(42, "#ffffff", 0.5) == 42
    marker = {"not": "a color"}
    assert colors.blend(marker, "#ffffff", 0.5) is marker


def test_blend_distributes_over_tiers() -> None:
    assert colors.blend(["#ffffff", "#000000"], "#000000", 0.5) == ["#808080", "#000000"]
    assert colors.blend("#ffffff", ["#000000", "#ffffff"], 0.5) == ["#808080", "#ffffff"]


def test_blend_pairs_tiers_by_position() -> None:
    result = colors.blend(["#ffffff", "#ffffff", "#ffffff"], ["#000000"], 0.5)

    assert result == ["#808080", None, None]


def test_blend_keeps_absent_tier_entries_absent() -> None:
    assert colors.blend(["#ffffff", None], "#000000", 1) == ["#ffffff", None]


@pytest.mark.parametrize("alpha", [-0.1, 1.5, "0.5", True])
def test_blend_rejects_bad_alpha(alpha: object) -> None:
    with pytest.raises(ValueError):
        colors.blend("#ffffff", "#000000", alpha)  # type: ignore[arg-type]


def test_darken_and_lighten_follow_blend() -> None:
    assert colors.darken("#ffffff", 0.8) == "#333333"
    assert colors.darken("#ffffff", 0.8) == colors.blend("#ffffff", "#000000", 0.2)
    assert colors.lighten("#000000", 0.8) == colors.blend("#000000", "#ffffff", 0.2)
    assert colors.darken("#51afef", 1) == "#000000"
    assert colors.lighten("#51afef", 1) == "#ffffff"


def test_zero_alpha_shading_is_identity() -> None:
    assert colors.darken("#51afef", 0) == "#51afef"
    assert colors.lighten("#51afef", 0) == "#51afef"


def test_darken_and_lighten_distribute_over_tiers() -> None:
    tiers = ["#ffffff", "#808080"]

    assert colors.darken(tiers, 0.5) == [colors.darken("#ffffff", 0.5), colors.darken("#808080", 0.5)]
    assert colors.lighten(tiers, 0.3) == [colors.lighten("#ffffff", 0.3), colors.lighten("#808080", 0.3)]


def test_darken_recurses_into_nested_tiers() -> None:
    assert colors.darken([["#ffffff"], "#ffffff"], 0.8) == [["#333333"], "#333333"]


def test_to_hex_and_predicates() -> None:
    assert colors.to_hex("#FFF") == "#ffffff"
    assert colors.is_rgb_triple((0.1, 0.2, 0.3))
    assert not colors.is_rgb_triple(["#fff", "#000", "#111"])
    assert colors.is_tiered(["#fff", "#000", "#111"])
    assert not colors.is_tiered((0.1, 0.2, 0.3))
    assert colors.is_color("#fff")
    assert not colors.is_color(["#fff"])


def test_contrast_ratio_extremes() -> None:
    assert colors.contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert colors.contrast_ratio("#51afef", "#51afef") == pytest.approx(1.0)


def test_named_colors_resolve_through_qt() -> None:
    pytest.importorskip("PySide6.QtGui")

    assert colors.normalize("white") == pytest.approx((1.0, 1.0, 1.0))
    assert colors.blend("white", "black", 0.5) == "#808080"
    with pytest.raises(InvalidColor):
        colors.normalize("definitely-not-a-color")
