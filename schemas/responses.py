from pydantic import BaseModel, Field
from typing import List, Optional

from colorcore.models import ConversionResult, Gamut, Notation


class SuccessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None


class ConvertResponse(SuccessResponse):
    input_notation: Notation = Field(..., description="Notation the input appears to be written in")
    results: List[ConversionResult]


class GamutResponse(SuccessResponse):
    gamut: Gamut
    in_gamut: bool
    needs_fallback: bool
    fallback: str = Field(..., description="sRGB fallback as #RRGGBBAA")


class MapResponse(SuccessResponse):
    rgb: str
    hex: str
    chroma_reduced: bool = Field(..., description="Whether chroma had to be lowered to fit sRGB")
