"""
Error taxonomy for the conversion pipeline.

None of these escape the public pipeline: the converter, detector and
resolver catch them and turn them into data (empty results, degraded
reports, "Invalid Color" records).
"""


class ColorError(Exception):
    """Base class for color pipeline errors."""


class ParseFailure(ColorError):
    """Input text matches no supported grammar."""


class ProjectionFailure(ColorError):
    """The color model adapter could not convert a color."""


class RenderFailure(ColorError):
    """A formatter received a color it cannot render."""
