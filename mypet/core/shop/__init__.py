"""상점/경제 Core — 순수 Python, DB 무관"""

from .catalog import ShopCatalog, load_default_catalog
from .effects import KIND_BONUSES, resolve_effect
from .models import InventoryView, ItemCategory, PurchaseRecord, ShopItem

__all__ = [
    "ShopCatalog",
    "load_default_catalog",
    "KIND_BONUSES",
    "resolve_effect",
    "InventoryView",
    "ItemCategory",
    "PurchaseRecord",
    "ShopItem",
]
