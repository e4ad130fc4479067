from typing import Optional
from pydantic import BaseModel, Field

from oilshop.v1_0.models import OilStatus, OilUnit

class OilCreate(BaseModel):
    """Schema used to add an oil to the catalog."""
    name_en: str = Field(..., min_length=1, max_length=120)
    name_my: str = Field(..., min_length=1, max_length=120)
    description_en: str = Field(..., min_length=1)
    description_my: str = Field(..., min_length=1)
    price_per_unit: float = Field(..., gt=0, description="Price per unit in MMK")
    unit: OilUnit = OilUnit.VISS
    image_url: Optional[str] = Field(default=None, max_length=500)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name_en": "Palm Oil",
                "name_my": "ထန်းဆီ",
                "description_en": "Pure refined palm oil.",
                "description_my": "သန့်စင်ထားသော ထန်းဆီ",
                "price_per_unit": 3500.0,
                "unit": "viss",
                "image_url": None,
            }
        }
    }

class OilUpdate(BaseModel):
    """Partial update; only the fields present in the body are changed."""
    name_en: Optional[str] = Field(default=None, min_length=1, max_length=120)
    name_my: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description_en: Optional[str] = Field(default=None, min_length=1)
    description_my: Optional[str] = Field(default=None, min_length=1)
    price_per_unit: Optional[float] = Field(default=None, gt=0)
    unit: Optional[OilUnit] = None
    image_url: Optional[str] = Field(default=None, max_length=500)
    status: Optional[OilStatus] = None
    is_active: Optional[bool] = Field(default=None, description="Shortcut for status")
