"""
Conversion orchestration: text in, one rendered record per notation out.

Parsing recognizes two grammars of its own before handing the text to the
color model adapter:

* Figma P3 shorthand, ``Figma P3 #RRGGBBAA`` or a bare ``#RRGGBBAA``:
  Display P3 channels and alpha written as bytes.
* ``vec(r, g, b[, a])``: linear-light sRGB.
"""

import logging
import re
from typing import List, Optional, Sequence

from . import adapter
from .errors import ParseFailure
from .fallback import FallbackResolver
from .gamut import GamutDetector
from .models import Color, Conversion, ConversionResult, Notation, P3Color, RGBColor

logger = logging.getLogger(__name__)

DEFAULT_NOTATIONS: Sequence[Notation] = (
    "figma-p3",
    "oklch",
    "p3",
    "oklab",
    "linear-rgb",
    "hex",
    "hex-alpha",
    "rgb",
    "hsl",
)

# Regular expression patterns
num = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?"
ws = r"\s*"
comma = f"{ws},{ws}"

FIGMA_P3_RE = re.compile(r"^Figma P3\s+#([0-9a-f]{8})$", re.IGNORECASE)
P3_HEX_RE = re.compile(r"^#([0-9a-f]{8})$", re.IGNORECASE)
VEC_RE = re.compile(
    f"^vec{ws}\\({ws}({num}){comma}({num}){comma}({num})(?:{comma}({num}))?{ws}\\)$",
    re.IGNORECASE,
)


def parse_figma_p3(text: str) -> Optional[P3Color]:
    """Parse Figma P3 shorthand, bytes divided by 255."""
    s = text.strip()
    m = FIGMA_P3_RE.match(s) if s.startswith("Figma P3") else P3_HEX_RE.match(s)
    if not m:
        return None
    h = m.group(1)
    r, g, b, a = (int(h[i:i + 2], 16) / 255 for i in range(0, 8, 2))
    return P3Color(r=r, g=g, b=b, alpha=a)


def parse_linear_rgb(text: str) -> Optional[RGBColor]:
    """Parse ``vec(r, g, b[, a])`` into a gamma-encoded sRGB color."""
    m = VEC_RE.match(text.strip())
    if not m:
        return None
    r, g, b = (adapter.linear_to_srgb(float(v)) for v in m.groups()[:3])
    alpha = m.group(4)
    return RGBColor(
        r=r,
        g=g,
        b=b,
        alpha=None if alpha is None else max(0.0, min(1.0, float(alpha))),
    )


def parse_color(text: str) -> Optional[Color]:
    """Parse any supported input grammar; ``None`` when nothing matches."""
    s = text.strip()
    if not s:
        return None
    if s.startswith("Figma P3") or P3_HEX_RE.match(s):
        return parse_figma_p3(s)
    if s.lower().startswith("vec"):
        return parse_linear_rgb(s)
    return adapter.parse(s)


def sniff_notation(text: str) -> Notation:
    """Guess which notation the raw input was written in (advisory only)."""
    s = text.strip()
    lowered = s.lower()
    if s.startswith("Figma P3") or P3_HEX_RE.match(s):
        return "figma-p3"
    if lowered.startswith("#"):
        return "hex"
    if lowered.startswith("rgb"):
        return "rgb"
    if lowered.startswith("hsl"):
        return "hsl"
    if lowered.startswith("oklch"):
        return "oklch"
    if lowered.startswith("oklab"):
        return "oklab"
    if lowered.startswith("color(display-p3"):
        return "p3"
    if lowered.startswith("vec"):
        return "linear-rgb"
    return "rgb"


class ColorConverter:
    """Drives parse, detection, fallback resolution and rendering.

    One converter owns one gamut cache; build a new converter to start a
    fresh session.
    """

    def __init__(self, detector: Optional[GamutDetector] = None):
        self.detector = detector if detector is not None else GamutDetector()
        self.resolver = FallbackResolver(self.detector)

    def parse_strict(self, text: str) -> Color:
        color = parse_color(text)
        if color is None:
            raise ParseFailure(f"Invalid color input: {text!r}")
        return color

    def convert_all(
        self,
        text: str,
        notations: Sequence[Notation] = DEFAULT_NOTATIONS,
    ) -> List[ConversionResult]:
        """Render ``text`` in every requested notation, in order.

        Returns an empty list when the text is not a color.
        """
        try:
            color = self.parse_strict(text)
        except ParseFailure as exc:
            logger.debug("%s", exc)
            return []
        return self.render_all(color, notations)

    def render_all(
        self,
        color: Color,
        notations: Sequence[Notation] = DEFAULT_NOTATIONS,
    ) -> List[ConversionResult]:
        """Render an already parsed color in every requested notation."""
        return [self.resolver.resolve(color, notation) for notation in notations]

    def convert(
        self,
        text: str,
        notations: Sequence[Notation] = DEFAULT_NOTATIONS,
    ) -> Conversion:
        return Conversion(
            input_text=text,
            input_notation=sniff_notation(text),
            results=self.convert_all(text, notations),
        )
