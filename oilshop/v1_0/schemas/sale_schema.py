from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from oilshop.v1_0.models import SaleType
from ._base import CamelInput

class SaleItemInput(CamelInput):
    oil_id: int = Field(..., ge=1)
    quantity: float = Field(..., gt=0, description="Viss-equivalent quantity")
    line_amount: float = Field(..., ge=0, description="Client-computed amount in MMK")

class SaleConfirm(CamelInput):
    total_amount: float = Field(..., gt=0)
    total_quantity: float = Field(..., gt=0)
    sale_type: SaleType
    note: Optional[str] = Field(default=None, max_length=500)
    items: List[SaleItemInput] = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "totalAmount": 12000.0,
                "totalQuantity": 3.5,
                "saleType": "MIX",
                "note": "optional note",
                "items": [
                    {"oilId": 1, "quantity": 2.0, "lineAmount": 7000.0},
                    {"oilId": 2, "quantity": 1.5, "lineAmount": 5000.0},
                ],
            }
        }
    }

class SaleInsert(BaseModel):
    total_amount: float = Field(..., gt=0)
    total_quantity: float = Field(..., gt=0)
    sale_type: SaleType
    note: Optional[str] = None
    created_at: datetime

class SaleItemCreate(BaseModel):
    sale_id: int = Field(..., ge=1)
    oil_id: int = Field(..., ge=1)
    oil_name_snapshot: str
    quantity: float = Field(..., gt=0)
    line_amount: float = Field(..., ge=0)
