from typing import List
from pydantic import Field

from ._base import CamelInput

class MixLineInput(CamelInput):
    oil_id: int = Field(..., ge=1)
    ticals: float = Field(..., gt=0, description="Weight in ticals (1 viss = 100 ticals)")

class MixQuoteRequest(CamelInput):
    items: List[MixLineInput] = Field(..., min_length=1)
    note: str | None = None
