from datetime import datetime
from typing import List, Literal, Optional

from .response_DTO import CamelOutput

# -------- daily --------

class DailyPeriodDTO(CamelOutput):
    type: Literal["day"] = "day"
    timezone: str
    utc_offset_minutes: int
    date_local: str
    start_local: str
    end_local_exclusive: str
    start_utc: str
    end_utc_exclusive: str

class DailyTotalsDTO(CamelOutput):
    total_sales_amount: float
    transactions_count: int

class TopOilDTO(CamelOutput):
    oil_id: int
    oil_name_snapshot: Optional[str]
    revenue: float
    quantity_sold: float

class DailyReportDTO(CamelOutput):
    period: DailyPeriodDTO
    currency: str = "MMK"
    quantity_definition: str = "viss-equivalent"
    totals: DailyTotalsDTO
    top_oils_by_revenue: List[TopOilDTO]
    generated_at: datetime

# -------- monthly --------

class MonthlyPeriodDTO(CamelOutput):
    year: int
    month: int
    timezone: str
    utc_offset_minutes: int
    start_local: str
    end_local_exclusive: str
    start_utc: str
    end_utc_exclusive: str
    label: str

class CurrencyDTO(CamelOutput):
    code: str = "MMK"
    minor_unit: int = 0

class QuantityDefinitionDTO(CamelOutput):
    base_unit: str = "viss_equivalent"
    display_unit: str = "viss"
    conversion: str = "1 viss = 100 ticals"
    precision: int = 3
    meaning: str = (
        "All quantities are standardized to viss-equivalent at time of sale. "
        "They are not raw entered units."
    )

class MonthlyTotalsDTO(CamelOutput):
    total_sales_amount: float
    transactions: int

class OilBreakdownDTO(CamelOutput):
    oil_id: int
    oil_name_snapshot: Optional[str]
    unit: Optional[str]
    quantity_sold: float
    revenue: float
    line_count: int

class MonthlyReportDTO(CamelOutput):
    period: MonthlyPeriodDTO
    currency: CurrencyDTO
    quantity_definition: QuantityDefinitionDTO
    totals: MonthlyTotalsDTO
    by_oil: List[OilBreakdownDTO]
    generated_at: datetime
