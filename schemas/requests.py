from pydantic import BaseModel, Field
from typing import List, Optional

from colorcore.models import Notation


class ColorConvertRequest(BaseModel):
    code: str = Field(..., description="The color to convert (CSS, Figma P3 or vec() notation)")
    targets: Optional[List[Notation]] = Field(
        None,
        description="Output notations in the order wanted; all of them when omitted",
    )


class ColorCodeRequest(BaseModel):
    code: str = Field(..., description="The color to inspect (CSS, Figma P3 or vec() notation)")
