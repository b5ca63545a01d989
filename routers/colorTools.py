"""
Color gamut tools: conversion into every output notation, gamut detection
and sRGB gamut mapping.

Input: any CSS color coloraide understands, Figma P3 shorthand
(``Figma P3 #RRGGBBAA`` or a bare ``#RRGGBBAA``) or linear ``vec(r, g, b[, a])``.
Output notations: rgb, hex, hex-alpha, hsl, p3, oklch, oklab, linear-rgb,
figma-p3.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from colorcore import ColorConverter, ParseFailure, map_to_gamut
from colorcore.converter import DEFAULT_NOTATIONS, sniff_notation
from colorcore.formats import format_hex, format_hex_alpha, format_rgb
from schemas.requests import ColorCodeRequest, ColorConvertRequest
from schemas.responses import ConvertResponse, GamutResponse, MapResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_converter(request: Request) -> ColorConverter:
    """The application's converter; it owns the gamut cache for the process."""
    converter = getattr(request.app.state, "converter", None)
    if converter is None:
        converter = request.app.state.converter = ColorConverter()
    return converter


def _parse_or_400(converter: ColorConverter, code: str):
    try:
        return converter.parse_strict(code)
    except ParseFailure:
        logger.info("Rejected color input %r", code)
        raise HTTPException(status_code=400, detail="Invalid color input")


@router.post("/convert_color", response_model=ConvertResponse, operation_id="convert_color", description="Convert a color into every requested output notation, with gamut warnings and sRGB fallbacks")
async def convert_color(request: ColorConvertRequest, converter: ColorConverter = Depends(get_converter)):
    """Parse a color and render it in each target notation."""
    targets = DEFAULT_NOTATIONS if request.targets is None else request.targets
    color = _parse_or_400(converter, request.code)
    results = converter.render_all(color, targets)
    return ConvertResponse(
        input_notation=sniff_notation(request.code),
        results=results,
    )


@router.post("/detect_gamut", response_model=GamutResponse, operation_id="detect_gamut", description="Classify a color as inside sRGB, inside Display P3 only, or outside both")
async def detect_gamut(request: ColorCodeRequest, converter: ColorConverter = Depends(get_converter)):
    """Report which gamut a color falls in and its sRGB fallback."""
    color = _parse_or_400(converter, request.code)
    report = converter.detector.detect(color)
    fallback = report.rgb_projection if report.rgb_projection is not None else map_to_gamut(color)
    return GamutResponse(
        message=f"{request.code} is {report.original_space}",
        gamut=report.original_space,
        in_gamut=report.in_gamut,
        needs_fallback=report.needs_fallback,
        fallback=format_hex_alpha(fallback),
    )


@router.post("/map_to_srgb", response_model=MapResponse, operation_id="map_to_srgb", description="Map a color into sRGB by lowering OKLCH chroma, keeping lightness and hue")
async def map_to_srgb(request: ColorCodeRequest, converter: ColorConverter = Depends(get_converter)):
    """Chroma-reduce a color until it fits sRGB."""
    color = _parse_or_400(converter, request.code)
    mapped = map_to_gamut(color)
    return MapResponse(
        rgb=format_rgb(mapped),
        hex=format_hex(mapped),
        chroma_reduced=converter.detector.classify(color) != "srgb",
    )
