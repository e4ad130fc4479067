from .auth_service import AuthService
from .mix_service import MixService
from .oil_service import OilService
from .report_service import ReportService
from .sale_service import SaleService
__all__=[
    "AuthService",
    "MixService",
    "OilService",
    "ReportService",
    "SaleService",
    ]
