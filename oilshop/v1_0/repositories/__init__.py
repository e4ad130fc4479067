from .base_repository import BaseRepository
from .oil_repository import OilRepository
from .sale_item_repository import SaleItemRepository
from .sale_repository import SaleRepository
from .user_repository import UserRepository
__all__ = [
    "BaseRepository",
    "OilRepository",
    "SaleItemRepository",
    "SaleRepository",
    "UserRepository",
]
