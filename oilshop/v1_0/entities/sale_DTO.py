from dataclasses import dataclass
from typing import Optional
from datetime import datetime

from .response_DTO import CamelOutput

@dataclass(slots=True)
class SaleDTO:
    id: int
    total_amount: float
    total_quantity: float
    sale_type: str
    note: Optional[str]
    created_at: datetime
    item_count: int = 0

class MonthlySummaryDTO(CamelOutput):
    year: int
    month: int
    total_sales_value: float
