"""
Tests for per-notation fallback resolution.
"""

import math

import pytest

from colorcore.errors import RenderFailure
from colorcore.fallback import FallbackResolver, invalid_result, to_linear_rgb
from colorcore.models import NOTATION_LABELS, OKLCHColor, P3Color, RGBColor

REFERENCE_OKLCH = OKLCHColor(l=0.7432, c=0.2194, h=51.36)
FIGMA_ORANGE = P3Color(r=1.0, g=128 / 255, b=0.0, alpha=1.0)
OUT_OF_P3 = OKLCHColor(l=0.7, c=0.5, h=150)


@pytest.fixture
def resolver(detector):
    return FallbackResolver(detector)


class TestReferenceScenario:
    @pytest.mark.parametrize("notation,expected", [
        ("rgb", "rgb(255, 126, 0)"),
        ("hex", "#FF7E00"),
        ("hex-alpha", "#FF7E00FF"),
        ("hsl", "hsl(29.54 100% 50%)"),
        ("oklch", "oklch(74.32% 0.2194 51.36)"),
    ])
    def test_oklch_input(self, resolver, notation, expected):
        assert resolver.resolve(REFERENCE_OKLCH, notation).rendered_text == expected

    @pytest.mark.parametrize("notation,expected", [
        ("p3", "color(display-p3 1.0000 0.5020 0.0000)"),
        ("linear-rgb", "vec(1.17638, 0.18288, -0.03661, 1.00000)"),
        ("oklch", "oklch(74.32% 0.2194 51.36)"),
        ("oklab", "oklab(74.32% 0.14 0.2)"),
        ("figma-p3", "#FF8000FF"),
        ("rgb", "rgb(255, 126, 0)"),
        ("hex", "#FF7E00"),
    ])
    def test_figma_p3_input(self, resolver, notation, expected):
        assert resolver.resolve(FIGMA_ORANGE, notation).rendered_text == expected

    def test_p3_color_reports_p3_without_warnings(self, resolver):
        result = resolver.resolve(FIGMA_ORANGE, "p3")
        assert result.gamut == "p3"
        assert result.fallback_space == "srgb"
        assert not result.warnings.out_of_gamut
        assert not result.warnings.used_fallback

    def test_srgb_notations_report_srgb(self, resolver):
        result = resolver.resolve(FIGMA_ORANGE, "rgb")
        assert result.gamut == "srgb"
        assert result.fallback_space == "srgb"
        assert not result.warnings.used_fallback

    def test_preview_is_srgb_fallback(self, resolver):
        assert resolver.resolve(FIGMA_ORANGE, "oklch").preview_hex == "#FF7E00FF"

    def test_label(self, resolver):
        assert resolver.resolve(FIGMA_ORANGE, "linear-rgb").label == "VEC"


class TestWarnings:
    @pytest.mark.parametrize("notation", ["p3", "oklch", "oklab", "linear-rgb", "figma-p3"])
    def test_out_of_p3_flags_wide_gamut_notations(self, resolver, notation):
        result = resolver.resolve(OUT_OF_P3, notation)
        assert result.gamut == "out"
        assert result.warnings.out_of_gamut
        assert not result.warnings.used_fallback

    @pytest.mark.parametrize("notation", ["rgb", "hex", "hex-alpha", "hsl"])
    def test_out_of_p3_uses_fallback_for_srgb_notations(self, resolver, notation):
        result = resolver.resolve(OUT_OF_P3, notation)
        assert result.gamut == "srgb"
        assert result.warnings.used_fallback
        assert not result.warnings.out_of_gamut

    @pytest.mark.parametrize("notation", ["rgb", "p3", "oklch", "linear-rgb"])
    def test_srgb_color_has_no_warnings(self, resolver, notation):
        result = resolver.resolve(RGBColor(r=0.2, g=0.4, b=0.6), notation)
        assert result.gamut == "srgb"
        assert not result.warnings.used_fallback
        assert not result.warnings.out_of_gamut

    def test_wide_gamut_values_are_not_clamped(self, resolver):
        text = resolver.resolve(OUT_OF_P3, "p3").rendered_text
        assert text.startswith("color(display-p3 -")


class TestDegradedResults:
    def test_unconvertible_color(self, resolver):
        color = RGBColor(r=math.nan, g=0.0, b=0.0)
        rgb = resolver.resolve(color, "rgb")
        assert rgb.rendered_text == "rgb(0, 0, 0)"
        assert rgb.warnings.used_fallback

        p3 = resolver.resolve(color, "p3")
        assert p3.rendered_text == "Invalid Color"
        assert p3.preview_hex == "#000000"
        assert p3.gamut == "out"
        assert p3.warnings.used_fallback and p3.warnings.out_of_gamut

    def test_detector_errors_are_absorbed(self):
        class BrokenDetector:
            def detect(self, color):
                raise RuntimeError("boom")

        result = FallbackResolver(BrokenDetector()).resolve(RGBColor(r=0.2, g=0.4, b=0.6), "hex")
        assert result == invalid_result("hex")

    def test_unknown_notation_has_no_source(self, resolver, detector):
        color = RGBColor(r=0.2, g=0.4, b=0.6)
        with pytest.raises(RenderFailure):
            resolver.source_color(color, "cmyk", detector.detect(color))

    def test_invalid_result_shape(self):
        result = invalid_result("oklab")
        assert result.label == NOTATION_LABELS["oklab"]
        assert result.fallback_space == "srgb"


class TestLinearRGB:
    def test_decodes_negative_channels_symmetrically(self):
        linear = to_linear_rgb(RGBColor(r=-0.5, g=0.5, b=0.02))
        assert linear.r == pytest.approx(-linear.g)
        assert linear.b == pytest.approx(0.02 / 12.92)

    def test_keeps_values_above_one(self):
        linear = to_linear_rgb(RGBColor(r=1.2, g=0.0, b=0.0))
        assert linear.r > 1.0
