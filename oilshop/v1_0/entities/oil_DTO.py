from dataclasses import dataclass
from typing import Optional
from datetime import datetime

@dataclass(slots=True)
class OilDTO:
    """Catalog row as shown to customers and the owner."""
    id: int
    name_en: str
    name_my: str
    description_en: str
    description_my: str
    price_per_unit: float
    unit: str
    status: str
    is_active: bool
    created_at: Optional[datetime]
    image_url: Optional[str] = None
