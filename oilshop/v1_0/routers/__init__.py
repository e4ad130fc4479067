from .auth_router import router as auth_router
from .oil_router import router as oil_router
from .mix_router import router as mix_router
from .sale_router import router as sale_router
from .report_router import router as report_router
defined_routers = [
    auth_router,
    oil_router,
    mix_router,
    sale_router,
    report_router,
    ]
