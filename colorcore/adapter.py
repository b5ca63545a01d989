"""
Color model adapter backed by coloraide.

Exposes the two primitives the pipeline needs, ``parse`` and ``convert``,
over the closed :data:`colorcore.models.Color` union. Both return ``None``
for anything they cannot handle; neither raises.
"""

import logging
import math
from typing import Optional

from coloraide import Color as _Coloraide

from .models import Color, make_color

logger = logging.getLogger(__name__)

# Our model tags -> coloraide space names
SPACES = {
    "rgb": "srgb",
    "hsl": "hsl",
    "oklch": "oklch",
    "oklab": "oklab",
    "p3": "display-p3",
    "xyz65": "xyz-d65",
}
MODES = {space: mode for mode, space in SPACES.items()}

HUE_CHANNEL = {"hsl": 0, "oklch": 2}


def _native(color: Color) -> _Coloraide:
    return _Coloraide(SPACES[color.mode], list(color.channels()), color.opacity())


def _from_native(native: _Coloraide, alpha: Optional[float], lenient: bool = False) -> Optional[Color]:
    mode = MODES.get(native.space())
    if mode is None:
        # lab(), hwb(), color(rec2020 ...) and friends land in XYZ D65
        native = native.convert("xyz-d65")
        mode = "xyz65"

    coords = []
    for i, value in enumerate(native.coords()):
        if math.isnan(value) and (lenient or i == HUE_CHANNEL.get(mode)):
            # "none" channel, or the hue of an achromatic color
            value = 0.0
        if not math.isfinite(value):
            return None
        coords.append(value)
    return make_color(mode, coords, alpha)


def _native_alpha(native: _Coloraide) -> Optional[float]:
    alpha = native.alpha()
    if math.isnan(alpha):
        return None
    return max(0.0, min(1.0, alpha))


def parse(text: str) -> Optional[Color]:
    """Parse any CSS color string coloraide understands."""
    try:
        native = _Coloraide(text.strip())
    except (ValueError, TypeError) as exc:
        logger.debug("Unparseable color %r: %s", text, exc)
        return None
    return _from_native(native, _native_alpha(native), lenient=True)


def convert(color: Color, target: str) -> Optional[Color]:
    """Convert ``color`` into the ``target`` model, keeping its alpha."""
    if not all(math.isfinite(v) for v in color.channels()):
        return None
    if color.mode == target:
        return color
    try:
        native = _native(color).convert(SPACES[target])
    except (ValueError, TypeError, KeyError, ArithmeticError) as exc:
        logger.debug("Cannot convert %s to %s: %s", color.mode, target, exc)
        return None
    return _from_native(native, color.alpha)


# sRGB transfer function ------------------------------------------
# Both directions mirror the curve for negative inputs so out-of-gamut
# channels survive a round trip.

def srgb_to_linear(v: float) -> float:
    """Gamma-decode one sRGB channel."""
    if abs(v) < 0.04045:
        return v / 12.92
    return math.copysign(((abs(v) + 0.055) / 1.055) ** 2.4, v)


def linear_to_srgb(v: float) -> float:
    """Gamma-encode one linear-light channel."""
    if abs(v) <= 0.0031308:
        return v * 12.92
    return math.copysign(1.055 * abs(v) ** (1 / 2.4) - 0.055, v)
