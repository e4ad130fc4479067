from .auth_schema import LoginRequest, ChangePasswordRequest
from .mix_schema import MixLineInput, MixQuoteRequest
from .oil_schema import OilCreate, OilUpdate
from .sale_schema import (
    SaleItemInput,
    SaleConfirm,
    SaleItemCreate,
    SaleInsert
    )
__all__ = [
    "LoginRequest", "ChangePasswordRequest",
    "MixLineInput", "MixQuoteRequest",
    "OilCreate", "OilUpdate",
    "SaleItemInput", "SaleConfirm", "SaleItemCreate", "SaleInsert",
]
