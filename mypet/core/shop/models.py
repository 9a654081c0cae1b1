"""상점 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ItemCategory(str, Enum):
    FOOD = "food"
    SOAP = "soap"
    MEDKIT = "medkit"


@dataclass(frozen=True)
class ShopItem:
    """카탈로그 항목 — 불변. shop_items.json에서 로드."""

    item_id: str  # "basic_food"
    display_name: str
    category: ItemCategory
    price: int  # 양수

    # 바이탈 이름 → 부호 있는 델타. 없는 키는 영향 없음.
    base_effects: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "name": self.display_name,
            "category": self.category.value,
            "price": self.price,
            "effects": dict(self.base_effects),
        }


@dataclass
class InventoryView:
    """조회용 — 인벤토리 행 + 카탈로그 항목 (카탈로그에서 사라졌으면 None)"""

    item_id: str
    quantity: int
    created_at: datetime
    updated_at: datetime
    item: Optional[ShopItem] = None


@dataclass(frozen=True)
class PurchaseRecord:
    """구매 기록 — append-only. price_paid는 구매 당시 가격."""

    pet_id: str
    item_id: str
    price_paid: int
    created_at: datetime
