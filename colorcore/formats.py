"""
Text renderers, one per output notation.

Each renderer takes a color already resolved into the model it expects and
returns the canonical string. The formats are exact contracts::

    rgb(255, 126, 0)            #FF7E00            #FF7E00FF
    hsl(29.54 100% 50%)         color(display-p3 1.0000 0.5020 0.0000)
    oklch(74.32% 0.2194 51.36)  oklab(74.32% 0.14 0.2)
    vec(1.17638, 0.18288, -0.03661, 1.00000)       #FF8000FF (Figma P3)
"""

import math
from typing import Callable, Dict

from .errors import RenderFailure
from .mapping import P3_MAX
from .models import Color, Notation, OKLABColor, OKLCHColor, P3Color, RGBColor

# Channel spread below which a color counts as gray
ACHROMATIC_DELTA = 1e-6


def _expect(color: Color, mode: str, notation: str) -> None:
    if color.mode != mode:
        raise RenderFailure(f"{notation} needs a {mode} color, got {color.mode}")


# sRGB notations --------------------------------------------------

def format_rgb(color: RGBColor) -> str:
    """``rgb(R, G, B)``, with `` / A`` appended when translucent."""
    _expect(color, "rgb", "rgb")
    values = ", ".join(str(to_byte(v)) for v in color.channels())
    if color.alpha is not None and color.alpha < 1:
        return f"rgb({values} / {color.alpha:.3f})"
    return f"rgb({values})"


def format_hex(color: RGBColor) -> str:
    """Opaque ``#RRGGBB``."""
    _expect(color, "rgb", "hex")
    return "#" + "".join(hex_byte(v) for v in color.channels())


def format_hex_alpha(color: RGBColor) -> str:
    _expect(color, "rgb", "hex-alpha")
    return "#" + "".join(hex_byte(v) for v in (*color.channels(), color.opacity()))


def rgb_to_hsl(color: RGBColor):
    """Convert clamped sRGB channels to (hue degrees, saturation, lightness).

    Near-gray colors get hue and saturation 0.
    """
    r, g, b = (clamp(v, 0, 1) for v in color.channels())
    max_val = max(r, g, b)
    min_val = min(r, g, b)
    delta = max_val - min_val
    l = (max_val + min_val) / 2
    h = s = 0.0
    if delta > ACHROMATIC_DELTA:
        s = delta / (1 - abs(2 * l - 1))
        if max_val == r:
            h = ((g - b) / delta) % 6
        elif max_val == g:
            h = (b - r) / delta + 2
        else:
            h = (r - g) / delta + 4
        h *= 60
    return h, s, l


def format_hsl(color: RGBColor) -> str:
    _expect(color, "rgb", "hsl")
    h, s, l = rgb_to_hsl(color)
    h = round_half_up(h * 100) / 100
    if h >= 360:
        h -= 360
    s = round_half_up(s * 1000) / 10
    l = round_half_up(l * 1000) / 10
    return f"hsl({number(h)} {number(s)}% {number(l)}%)"


# Wide-gamut notations --------------------------------------------

def format_p3(color: P3Color) -> str:
    _expect(color, "p3", "p3")
    r, g, b = (fixed(v, 4) for v in color.channels())
    return f"color(display-p3 {r} {g} {b})"


def format_oklch(color: OKLCHColor) -> str:
    _expect(color, "oklch", "oklch")
    return f"oklch({fixed(color.l * 100, 2)}% {fixed(color.c, 4)} {fixed(color.h, 2)})"


def format_oklab(color: OKLABColor) -> str:
    _expect(color, "oklab", "oklab")
    return f"oklab({fixed(color.l * 100, 2)}% {fixed(color.a, 2)} {fixed(color.b, 1)})"


def format_linear_rgb(color: RGBColor) -> str:
    """Render a color whose rgb channels are already linear-light."""
    _expect(color, "rgb", "linear-rgb")
    values = (*color.channels(), color.opacity())
    return "vec(" + ", ".join(fixed(v, 5) for v in values) + ")"


def format_figma_p3(color: P3Color) -> str:
    _expect(color, "p3", "figma-p3")
    channels = (clamp(v, 0, P3_MAX) for v in color.channels())
    return "#" + "".join(hex_byte(v) for v in (*channels, color.opacity()))


FORMATTERS: Dict[str, Callable[[Color], str]] = {
    "rgb": format_rgb,
    "hex": format_hex,
    "hex-alpha": format_hex_alpha,
    "hsl": format_hsl,
    "p3": format_p3,
    "oklch": format_oklch,
    "oklab": format_oklab,
    "linear-rgb": format_linear_rgb,
    "figma-p3": format_figma_p3,
}


def render(notation: Notation, color: Color) -> str:
    """Render ``color`` in ``notation``."""
    formatter = FORMATTERS.get(notation)
    if formatter is None:
        raise RenderFailure(f"Unknown notation {notation!r}")
    return formatter(color)


# Formatting helpers ---------------------------------------------

def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp value between lo and hi."""
    return max(lo, min(hi, v))


def round_half_up(x: float) -> int:
    """Round halves upwards, like ``Math.round``."""
    return math.floor(x + 0.5)


def to_byte(v: float) -> int:
    """Map a [0, 1] channel onto 0..255, clamping first."""
    return round_half_up(clamp(v, 0, 1) * 255)


def hex_byte(v: float) -> str:
    """Two uppercase hex digits for a [0, 1] channel."""
    return format(to_byte(v), "02X")


def fixed(x: float, digits: int) -> str:
    """Fixed-point text that never reads as negative zero."""
    text = f"{x:.{digits}f}"
    if text.startswith("-") and not text.strip("-0."):
        return text[1:]
    return text


def number(x: float) -> str:
    """Shortest text for an already rounded value: 100.0 -> '100'."""
    text = f"{x:g}"
    return "0" if text == "-0" else text
