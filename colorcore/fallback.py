"""
Per-notation fallback resolution.

Decides, for one color and one output notation, which color actually gets
rendered (the exact value, a gamut-mapped sRGB stand-in, or a projection)
and which warnings go with it.
"""

import logging
from typing import Optional

from . import adapter
from .errors import RenderFailure
from .formats import format_hex_alpha, render
from .gamut import GamutDetector
from .mapping import map_to_gamut
from .models import (
    NOTATION_LABELS,
    WIDE_GAMUT_NOTATIONS,
    Color,
    ConversionResult,
    GamutReport,
    Notation,
    RGBColor,
    Warnings,
    is_srgb_notation,
)

logger = logging.getLogger(__name__)

INVALID_TEXT = "Invalid Color"
INVALID_PREVIEW = "#000000"


def invalid_result(notation: Notation) -> ConversionResult:
    """Placeholder record for a notation that could not be rendered."""
    return ConversionResult(
        notation=notation,
        label=NOTATION_LABELS.get(notation, notation),
        rendered_text=INVALID_TEXT,
        preview_hex=INVALID_PREVIEW,
        gamut="out",
        fallback_space="srgb",
        warnings=Warnings(used_fallback=True, out_of_gamut=True),
    )


def to_linear_rgb(color: Color) -> Optional[RGBColor]:
    """Gamma-decode ``color``'s sRGB channels without clamping."""
    rgb = adapter.convert(color, "rgb")
    if rgb is None:
        return None
    r, g, b = (adapter.srgb_to_linear(v) for v in rgb.channels())
    return RGBColor(r=r, g=g, b=b, alpha=rgb.alpha)


class FallbackResolver:
    def __init__(self, detector: Optional[GamutDetector] = None):
        self.detector = detector if detector is not None else GamutDetector()

    def resolve(self, color: Color, notation: Notation) -> ConversionResult:
        try:
            report = self.detector.detect(color)
            source = self.source_color(color, notation, report)
            text = render(notation, source)
            preview = format_hex_alpha(self._srgb(color, report))
        except Exception:
            logger.warning("Failed to format %s", notation.upper(), exc_info=True)
            return invalid_result(notation)

        out = report.original_space == "out"
        if is_srgb_notation(notation):
            gamut, fallback_space = "srgb", "srgb"
            warnings = Warnings(used_fallback=out, out_of_gamut=False)
        else:
            gamut, fallback_space = report.original_space, report.fallback_space
            warnings = Warnings(used_fallback=False, out_of_gamut=out)

        return ConversionResult(
            notation=notation,
            label=NOTATION_LABELS[notation],
            rendered_text=text,
            preview_hex=preview,
            gamut=gamut,
            fallback_space=fallback_space,
            warnings=warnings,
        )

    def source_color(self, color: Color, notation: Notation, report: GamutReport) -> Color:
        """The color ``notation`` should be rendered from."""
        if is_srgb_notation(notation):
            return self._srgb(color, report)

        if notation not in WIDE_GAMUT_NOTATIONS:
            raise RenderFailure(f"Unknown notation {notation!r}")

        if notation == "figma-p3":
            if color.mode == "p3":
                return color
            source = report.p3_projection or adapter.convert(color, "p3")
        elif notation == "linear-rgb":
            source = to_linear_rgb(color)
        else:
            # original values, out-of-gamut channels untouched
            source = adapter.convert(color, notation)

        if source is None:
            raise RenderFailure(f"Cannot express {color.mode} color as {notation}")
        return source

    @staticmethod
    def _srgb(color: Color, report: GamutReport) -> RGBColor:
        if report.rgb_projection is not None:
            return report.rgb_projection
        return map_to_gamut(color)
