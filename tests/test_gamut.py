"""
Tests for gamut detection and its report cache.
"""

import math
import threading

import pytest

from colorcore.gamut import GamutDetector, proxy_color
from colorcore.mapping import in_gamut
from colorcore.models import HSLColor, OKLCHColor, P3Color, RGBColor


class TestClassification:
    def test_srgb_color(self, detector):
        report = detector.detect(RGBColor(r=1.0, g=0.0, b=0.0))
        assert report.original_space == "srgb"
        assert report.fallback_space == "srgb"
        assert report.in_gamut is True
        assert report.needs_fallback is False
        assert report.rgb_projection is not None
        assert report.p3_projection is not None

    def test_p3_only_color_always_needs_fallback(self, detector):
        report = detector.detect(P3Color(r=1.0, g=0.0, b=0.0))
        assert report.original_space == "p3"
        assert report.in_gamut is True
        assert report.needs_fallback is True

    def test_color_outside_p3(self, detector):
        report = detector.detect(OKLCHColor(l=0.7, c=0.5, h=150))
        assert report.original_space == "out"
        assert report.in_gamut is False
        assert report.needs_fallback is True

    def test_pure_white_short_circuits(self, detector):
        report = detector.detect(OKLCHColor(l=1.0, c=0.0, h=0.0))
        assert report.original_space == "srgb"
        assert report.rgb_projection.channels() == (1.0, 1.0, 1.0)

    @pytest.mark.parametrize("color", [
        RGBColor(r=1.0, g=1.0, b=1.0),
        RGBColor(r=128 / 255, g=128 / 255, b=128 / 255),
        RGBColor(r=10 / 255, g=10 / 255, b=10 / 255),
    ])
    def test_srgb_projection_skips_the_proxy_round_trip(self, detector, color):
        assert detector.detect(color).rgb_projection.channels() == color.channels()

    def test_classify(self, detector):
        assert detector.classify(RGBColor(r=0.2, g=0.4, b=0.6)) == "srgb"

    @pytest.mark.parametrize("color", [
        RGBColor(r=0.2, g=0.4, b=0.6),
        RGBColor(r=0.0, g=0.0, b=0.0),
        HSLColor(h=200, s=0.5, l=0.4),
        OKLCHColor(l=0.5, c=0.05, h=90),
        P3Color(r=0.5, g=0.5, b=0.5),
    ])
    def test_srgb_report_projection_is_in_gamut(self, detector, color):
        report = detector.detect(color)
        assert report.original_space == "srgb"
        assert in_gamut(report.rgb_projection)

    @pytest.mark.parametrize("color", [
        P3Color(r=1.0, g=0.0, b=0.0),
        OKLCHColor(l=0.7, c=0.5, h=150),
        OKLCHColor(l=0.6, c=0.4, h=300),
    ])
    def test_fallback_projection_is_in_gamut(self, detector, color):
        report = detector.detect(color)
        assert report.original_space != "srgb"
        assert in_gamut(report.rgb_projection)

    def test_projection_failure_degrades_to_out(self, detector):
        report = detector.detect(RGBColor(r=math.nan, g=0.0, b=0.0))
        assert report.original_space == "out"
        assert report.fallback_space == "srgb"
        assert report.needs_fallback is True
        assert report.rgb_projection is None
        assert report.p3_projection is None

    def test_projection_failure_is_not_cached(self, detector):
        detector.detect(RGBColor(r=math.inf, g=0.0, b=0.0))
        assert len(detector) == 0


class TestCache:
    def test_repeat_queries_hit_the_cache(self, detector):
        color = RGBColor(r=0.1, g=0.2, b=0.3)
        first = detector.detect(color)
        second = detector.detect(RGBColor(r=0.1, g=0.2, b=0.3))
        assert first is second
        assert len(detector) == 1

    def test_alpha_is_part_of_the_key(self, detector):
        detector.detect(RGBColor(r=0.1, g=0.2, b=0.3))
        detector.detect(RGBColor(r=0.1, g=0.2, b=0.3, alpha=0.5))
        assert len(detector) == 2

    def test_detectors_do_not_share_state(self):
        one, two = GamutDetector(), GamutDetector()
        one.detect(RGBColor(r=0.1, g=0.2, b=0.3))
        assert len(one) == 1
        assert len(two) == 0

    def test_clear(self, detector):
        detector.detect(RGBColor(r=0.1, g=0.2, b=0.3))
        detector.clear()
        assert len(detector) == 0

    def test_concurrent_detection(self, detector):
        colors = [RGBColor(r=i / 20, g=0.5, b=1 - i / 20) for i in range(20)]
        results = {}

        def worker(n):
            results[n] = [detector.detect(c).original_space for c in colors]

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(detector) == len(colors)
        assert all(spaces == ["srgb"] * len(colors) for spaces in results.values())


class TestProxy:
    def test_proxy_is_oklch_and_keeps_alpha(self):
        proxy = proxy_color(RGBColor(r=1.0, g=0.0, b=0.0, alpha=0.4))
        assert proxy.mode == "oklch"
        assert proxy.alpha == 0.4
        assert proxy.l == pytest.approx(0.62796, abs=1e-4)

    def test_proxy_of_white_is_identity(self):
        white = OKLCHColor(l=1.0, c=0.0, h=0.0)
        assert proxy_color(white) is white
