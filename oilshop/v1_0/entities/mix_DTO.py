from typing import List, Optional

from .response_DTO import CamelOutput

class MixLineDTO(CamelOutput):
    oil_id: int
    name_en: str
    name_my: str
    price_per_unit: float
    ticals: float
    quantity: float
    line_amount: float

class SaleItemPayloadDTO(CamelOutput):
    oil_id: int
    quantity: float
    line_amount: float

class SalePayloadDTO(CamelOutput):
    """Body that can be posted as-is to /sales/confirm."""
    total_amount: float
    total_quantity: float
    sale_type: str
    note: Optional[str] = None
    items: List[SaleItemPayloadDTO]

class MixQuoteDTO(CamelOutput):
    lines: List[MixLineDTO]
    total_ticals: float
    total_quantity: float
    total_amount: float
    sale_type: str
    sale_payload: SalePayloadDTO
