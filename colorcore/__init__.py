from .converter import DEFAULT_NOTATIONS, ColorConverter, parse_color, sniff_notation
from .errors import ColorError, ParseFailure, ProjectionFailure, RenderFailure
from .fallback import FallbackResolver
from .formats import render
from .gamut import GamutDetector
from .mapping import fit_to_srgb, in_gamut, map_to_gamut
from .models import Color, Conversion, ConversionResult, GamutReport, Notation

__all__ = [
    "DEFAULT_NOTATIONS",
    "ColorConverter",
    "parse_color",
    "sniff_notation",
    "ColorError",
    "ParseFailure",
    "ProjectionFailure",
    "RenderFailure",
    "FallbackResolver",
    "render",
    "GamutDetector",
    "fit_to_srgb",
    "in_gamut",
    "map_to_gamut",
    "Color",
    "Conversion",
    "ConversionResult",
    "GamutReport",
    "Notation",
]
