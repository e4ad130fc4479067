from .auth_DTO import LoginDTO
from .mix_DTO import MixLineDTO, MixQuoteDTO, SaleItemPayloadDTO, SalePayloadDTO
from .oil_DTO import OilDTO
from .report_DTO import (
    DailyPeriodDTO, DailyTotalsDTO, TopOilDTO, DailyReportDTO,
    MonthlyPeriodDTO, CurrencyDTO, QuantityDefinitionDTO, MonthlyTotalsDTO,
    OilBreakdownDTO, MonthlyReportDTO,
)
from .response_DTO import CamelOutput, ResponseDTO, ListResponseDTO, MessageDTO
from .sale_DTO import SaleDTO, MonthlySummaryDTO
from .user_DTO import UserDTO


__all__ = [
    "LoginDTO",
    "MixLineDTO", "MixQuoteDTO", "SaleItemPayloadDTO", "SalePayloadDTO",
    "OilDTO",
    "DailyPeriodDTO", "DailyTotalsDTO", "TopOilDTO", "DailyReportDTO",
    "MonthlyPeriodDTO", "CurrencyDTO", "QuantityDefinitionDTO", "MonthlyTotalsDTO",
    "OilBreakdownDTO", "MonthlyReportDTO",
    "CamelOutput", "ResponseDTO", "ListResponseDTO", "MessageDTO",
    "SaleDTO", "MonthlySummaryDTO",
    "UserDTO",
]
