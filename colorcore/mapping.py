"""
Gamut boundary tests and gamut mapping into sRGB.

Two mappers live here. Both hold OKLCH lightness and hue fixed and search
over chroma:

* :func:`map_to_gamut` reduces chroma until the color fits, so the result
  keeps the input's exact lightness and hue.
* :func:`fit_to_srgb` is the CSS Color 4 algorithm. It stops once the
  clipped candidate is within a just noticeable difference of the
  unclipped one. It trades a little lightness for chroma and matches what
  browsers show for wide-gamut colors.
"""

import logging
import math
from typing import Optional

from . import adapter
from .models import BLACK, Color, OKLCHColor, RGBColor

logger = logging.getLogger(__name__)

EPSILON = 1e-6
P3_MAX = 1.6  # P3 channels may extend up to 1.6

CHROMA_STEP = 1e-6
JND = 0.02
JND_EPSILON = 0.0001


# Gamut tests -----------------------------------------------------

def _within(channels, upper: float, epsilon: float) -> bool:
    """Every channel in [-epsilon, upper + epsilon]."""
    return all(-epsilon <= v <= upper + epsilon for v in channels)


def in_gamut(color: Color, epsilon: float = EPSILON) -> bool:
    """Whether ``color`` is representable in its own RGB space.

    P3 colors are tested against P3's extended range, everything else is
    converted to sRGB first.
    """
    if color.mode == "p3":
        return _within(color.channels(), P3_MAX, epsilon)
    if color.mode != "rgb":
        color = adapter.convert(color, "rgb")
        if color is None:
            return False
    return _within(color.channels(), 1.0, epsilon)


def clip(color: RGBColor) -> RGBColor:
    """Clamp every sRGB channel into [0, 1]."""
    r, g, b = (max(0.0, min(1.0, v)) for v in color.channels())
    return RGBColor(r=r, g=g, b=b, alpha=color.alpha)


def _black(alpha: Optional[float]) -> RGBColor:
    return BLACK.model_copy(update={"alpha": alpha})


def _srgb_at(origin: OKLCHColor, chroma: float) -> Optional[RGBColor]:
    candidate = origin.model_copy(update={"c": chroma})
    return adapter.convert(candidate, "rgb")


# Chroma reduction ------------------------------------------------

def map_to_gamut(color: Color) -> RGBColor:
    """Nearest in-gamut sRGB color with the same OKLCH lightness and hue.

    Binary search over chroma, starting at the input's chroma with a step of
    half of it. Rather than stopping at the first fitting candidate of the
    c, c/2, c/4 ... sequence, the search steps back up after every hit, so
    it settles within ``CHROMA_STEP`` of the gamut boundary. Returns black
    when no candidate fits, e.g. for lightness outside [0, 1].
    """
    origin = adapter.convert(color, "oklch")
    if origin is None:
        return _black(color.alpha)

    chroma = origin.c
    step = chroma / 2
    found = None

    candidate = _srgb_at(origin, chroma)
    if candidate is not None and in_gamut(candidate):
        return candidate

    chroma -= step
    while step > CHROMA_STEP:
        step /= 2
        candidate = _srgb_at(origin, chroma)
        if candidate is not None and in_gamut(candidate):
            found = candidate
            chroma += step
        else:
            chroma -= step

    if found is None:
        logger.debug("No in-gamut chroma for %s, falling back to black", color)
        return _black(color.alpha)
    return found


# CSS Color 4 gamut mapping ---------------------------------------

def _delta_eok(a: Color, b: Color) -> float:
    lab_a = adapter.convert(a, "oklab")
    lab_b = adapter.convert(b, "oklab")
    if lab_a is None or lab_b is None:
        return math.inf
    return math.dist(lab_a.channels(), lab_b.channels())


def fit_to_srgb(color: Color) -> RGBColor:
    """Map ``color`` into sRGB with the CSS Color 4 algorithm.

    Bisects chroma in OKLCH and returns the clipped candidate once its
    deltaEOK from the unclipped candidate falls within the JND.
    """
    origin = adapter.convert(color, "oklch")
    if origin is None:
        return _black(color.alpha)

    if origin.l >= 1.0:
        return RGBColor(r=1.0, g=1.0, b=1.0, alpha=color.alpha)
    if origin.l <= 0.0:
        return _black(color.alpha)

    current = _srgb_at(origin, origin.c)
    if current is None:
        return map_to_gamut(color)
    if in_gamut(current, epsilon=0):
        return current

    clipped = clip(current)
    if _delta_eok(clipped, origin) < JND:
        return clipped

    low, high = 0.0, origin.c
    low_in_gamut = True
    while high - low > JND_EPSILON:
        chroma = (low + high) / 2
        candidate = origin.model_copy(update={"c": chroma})
        current = adapter.convert(candidate, "rgb")
        if current is None:
            high = chroma
            continue
        if low_in_gamut and in_gamut(current, epsilon=0):
            low = chroma
            continue

        clipped = clip(current)
        delta = _delta_eok(clipped, candidate)
        if delta < JND:
            if JND - delta < JND_EPSILON:
                return clipped
            low_in_gamut = False
            low = chroma
        else:
            high = chroma

    return clipped
