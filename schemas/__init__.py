from .requests import ColorCodeRequest, ColorConvertRequest
from .responses import ConvertResponse, GamutResponse, MapResponse, SuccessResponse

__all__ = [
    "ColorCodeRequest",
    "ColorConvertRequest",
    "ConvertResponse",
    "GamutResponse",
    "MapResponse",
    "SuccessResponse",
]
