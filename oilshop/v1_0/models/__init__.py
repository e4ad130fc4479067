from .base import Base
from .enums import OilStatus, OilUnit, SaleType
from .oil import Oil
from .sale_item import SaleItem
from .sale import Sale
from .user import User
__all__ = [
    "Base",
    "OilStatus",
    "OilUnit",
    "SaleType",
    "Oil",
    "SaleItem",
    "Sale",
    "User",
]
