"""
Gamut detection with a per-detector report cache.
"""

import logging
import threading
from typing import Dict, Optional

from . import adapter
from .errors import ProjectionFailure
from .mapping import EPSILON, P3_MAX, fit_to_srgb, in_gamut
from .models import Color, Gamut, GamutReport, OKLCHColor, P3Color, RGBColor

logger = logging.getLogger(__name__)

__all__ = ["GamutDetector", "proxy_color", "in_gamut", "EPSILON", "P3_MAX"]


def _is_pure_white(color: Color) -> bool:
    return color.mode == "oklch" and color.l == 1 and color.c == 0


def proxy_color(color: Color) -> Optional[OKLCHColor]:
    """Project ``color`` into OKLCH by way of XYZ D65, keeping its alpha."""
    if _is_pure_white(color):
        return color
    xyz = adapter.convert(color, "xyz65")
    if xyz is None:
        return None
    return adapter.convert(xyz, "oklch")


def _out_of_everything() -> GamutReport:
    return GamutReport(
        original_space="out",
        fallback_space="srgb",
        in_gamut=False,
        needs_fallback=True,
    )


class GamutDetector:
    """Classifies colors against the sRGB and Display P3 gamuts.

    Reports are cached per detector, keyed on the color's model, rounded
    channels and alpha. Entries are never invalidated; drop the detector
    (or call :meth:`clear`) to start fresh.
    """

    def __init__(self):
        self._cache: Dict[tuple, GamutReport] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def classify(self, color: Color) -> Gamut:
        return self.detect(color).original_space

    def detect(self, color: Color) -> GamutReport:
        key = color.cache_key()
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Gamut cache hit for %s", key)
            return cached

        try:
            report = self._compute(color)
        except (ProjectionFailure, ValueError, ArithmeticError):
            logger.warning("Gamut detection failed for %s", color, exc_info=True)
            return _out_of_everything()

        with self._lock:
            report = self._cache.setdefault(key, report)
        return report

    def _compute(self, color: Color) -> GamutReport:
        if _is_pure_white(color):
            logger.debug("Space detection: pure white, srgb")
            return GamutReport(
                original_space="srgb",
                p3_projection=P3Color(r=1.0, g=1.0, b=1.0, alpha=color.alpha),
                rgb_projection=RGBColor(r=1.0, g=1.0, b=1.0, alpha=color.alpha),
                in_gamut=True,
                needs_fallback=False,
            )

        proxy = proxy_color(color)
        if proxy is None:
            raise ProjectionFailure(f"cannot project {color.mode} color into OKLCH")

        rgb = adapter.convert(proxy, "rgb")
        p3 = adapter.convert(proxy, "p3")

        if rgb is not None and in_gamut(rgb, EPSILON):
            logger.debug("Space detection: srgb %s", _describe(rgb))
            # the proxy only classifies; render from the direct conversion
            direct_rgb = adapter.convert(color, "rgb")
            direct_p3 = adapter.convert(color, "p3")
            if direct_rgb is not None and direct_p3 is not None:
                rgb, p3 = direct_rgb, direct_p3
            return GamutReport(
                original_space="srgb",
                p3_projection=p3,
                rgb_projection=rgb,
                in_gamut=True,
                needs_fallback=False,
            )

        fallback = fit_to_srgb(proxy)
        if p3 is not None and in_gamut(p3, EPSILON):
            logger.debug("Space detection: p3 %s", _describe(p3))
            return GamutReport(
                original_space="p3",
                p3_projection=p3,
                rgb_projection=fallback,
                in_gamut=True,
                # the consumer never renders P3 natively
                needs_fallback=True,
            )

        logger.debug("Space detection: outside sRGB and P3")
        return GamutReport(
            original_space="out",
            p3_projection=p3,
            rgb_projection=fallback,
            in_gamut=False,
            needs_fallback=True,
        )


def _describe(color: Color) -> str:
    return " ".join(f"{name}={value:.4f}" for name, value in zip(color.CHANNELS, color.channels()))
