"""
Value types shared by the conversion pipeline.

Colors are a closed, discriminated union of frozen pydantic models, one per
supported color model. Channels are plain floats and may lie outside a
model's canonical range (that is how out-of-gamut colors are represented).
"""

from typing import Annotated, ClassVar, Dict, List, Literal, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field

# Type definitions
ColorMode = Literal["rgb", "hsl", "oklch", "oklab", "p3", "xyz65"]

Gamut = Literal["srgb", "p3", "out"]

Notation = Literal[
    "rgb",
    "hex",
    "hex-alpha",
    "hsl",
    "p3",
    "oklch",
    "oklab",
    "linear-rgb",
    "figma-p3",
]

SRGB_NOTATIONS: Tuple[Notation, ...] = ("rgb", "hex", "hex-alpha", "hsl")
WIDE_GAMUT_NOTATIONS: Tuple[Notation, ...] = ("p3", "oklch", "oklab", "linear-rgb", "figma-p3")

NOTATION_LABELS: Dict[str, str] = {
    "rgb": "RGB",
    "hex": "HEX",
    "hex-alpha": "HEX/RGBA",
    "hsl": "HSL",
    "p3": "CSS P3",
    "oklch": "OKLCH",
    "oklab": "OKLAB",
    "linear-rgb": "VEC",
    "figma-p3": "FIGMA P3",
}


def is_srgb_notation(notation: str) -> bool:
    """True for notations that can only express sRGB colors."""
    return notation in SRGB_NOTATIONS


# Colors ----------------------------------------------------------

class _ColorBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    CHANNELS: ClassVar[Tuple[str, ...]] = ()

    alpha: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    def channels(self) -> Tuple[float, ...]:
        """Channel values in ``CHANNELS`` order."""
        return tuple(getattr(self, name) for name in self.CHANNELS)

    def opacity(self) -> float:
        """Alpha with the "absent means opaque" rule applied."""
        return 1.0 if self.alpha is None else self.alpha

    def cache_key(self) -> tuple:
        """Hashable identity for the gamut cache."""
        return (
            self.mode,
            tuple(round(v, 10) for v in self.channels()),
            None if self.alpha is None else round(self.alpha, 10),
        )


class RGBColor(_ColorBase):
    CHANNELS: ClassVar[Tuple[str, ...]] = ("r", "g", "b")
    mode: Literal["rgb"] = "rgb"
    r: float
    g: float
    b: float


class HSLColor(_ColorBase):
    """Hue in degrees, saturation and lightness as fractions."""

    CHANNELS: ClassVar[Tuple[str, ...]] = ("h", "s", "l")
    mode: Literal["hsl"] = "hsl"
    h: float
    s: float
    l: float


class OKLCHColor(_ColorBase):
    CHANNELS: ClassVar[Tuple[str, ...]] = ("l", "c", "h")
    mode: Literal["oklch"] = "oklch"
    l: float
    c: float
    h: float


class OKLABColor(_ColorBase):
    CHANNELS: ClassVar[Tuple[str, ...]] = ("l", "a", "b")
    mode: Literal["oklab"] = "oklab"
    l: float
    a: float
    b: float


class P3Color(_ColorBase):
    CHANNELS: ClassVar[Tuple[str, ...]] = ("r", "g", "b")
    mode: Literal["p3"] = "p3"
    r: float
    g: float
    b: float


class XYZ65Color(_ColorBase):
    CHANNELS: ClassVar[Tuple[str, ...]] = ("x", "y", "z")
    mode: Literal["xyz65"] = "xyz65"
    x: float
    y: float
    z: float


Color = Annotated[
    Union[RGBColor, HSLColor, OKLCHColor, OKLABColor, P3Color, XYZ65Color],
    Field(discriminator="mode"),
]

COLOR_TYPES: Dict[str, Type[_ColorBase]] = {
    "rgb": RGBColor,
    "hsl": HSLColor,
    "oklch": OKLCHColor,
    "oklab": OKLABColor,
    "p3": P3Color,
    "xyz65": XYZ65Color,
}


def make_color(mode: str, channels, alpha: Optional[float] = None) -> Color:
    """Build the variant for ``mode`` from positional channel values."""
    cls = COLOR_TYPES[mode]
    values = dict(zip(cls.CHANNELS, (float(v) for v in channels)))
    return cls(alpha=alpha, **values)


BLACK = RGBColor(r=0.0, g=0.0, b=0.0)


# Reports and results ---------------------------------------------

class GamutReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_space: Gamut
    fallback_space: Gamut = "srgb"
    p3_projection: Optional[P3Color] = None
    rgb_projection: Optional[RGBColor] = None
    in_gamut: bool
    needs_fallback: bool


class Warnings(BaseModel):
    model_config = ConfigDict(frozen=True)

    used_fallback: bool = False
    out_of_gamut: bool = False


class ConversionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    notation: Notation
    label: str
    rendered_text: str
    preview_hex: str = Field(..., description="sRGB #RRGGBBAA swatch color")
    gamut: Gamut
    fallback_space: Gamut = "srgb"
    warnings: Warnings = Field(default_factory=Warnings)


class Conversion(BaseModel):
    model_config = ConfigDict(frozen=True)

    input_text: str
    input_notation: Notation
    results: List[ConversionResult]
