"""상점 카탈로그 — JSON 로드 + 조회"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from mypet.core.pet.vitals import VITALS

from .models import ItemCategory, ShopItem

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[2] / "data" / "shop_items.json"


class ShopCatalog:
    """
    상점 카탈로그.
    읽기 전용으로 공유되므로 로드 이후 잠금 불필요.
    """

    def __init__(self) -> None:
        self._items: dict[str, ShopItem] = {}

    def load_from_json(self, path: str | Path = DEFAULT_CATALOG_PATH) -> int:
        """shop_items.json 로드. 반환: 로드된 수량.

        가격이 양수가 아니거나 바이탈이 아닌 효과 키가 있거나 필드 타입이 틀리면
        해당 항목은 경고 후 건너뛴다.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw_list: list[dict] = json.load(f)

        count = 0
        for raw in raw_list:
            try:
                item = self._parse_item(raw)
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                label = raw.get("item_id", "?") if isinstance(raw, dict) else repr(raw)
                logger.warning("Failed to load shop item: %s — %s", label, e)
                continue
            self._items[item.item_id] = item
            count += 1

        logger.info("Loaded %d shop items from %s", count, path)
        return count

    @staticmethod
    def _parse_item(raw: dict) -> ShopItem:
        price = int(raw["price"])
        if price <= 0:
            raise ValueError(f"price must be positive, got {price}")

        effects = {k: int(v) for k, v in raw.get("effects", {}).items()}
        unknown = set(effects) - set(VITALS)
        if unknown:
            raise ValueError(f"unknown effect keys: {sorted(unknown)}")

        return ShopItem(
            item_id=raw["item_id"],
            display_name=raw.get("display_name", raw["item_id"]),
            category=ItemCategory(raw["category"]),
            price=price,
            base_effects=effects,
        )

    def register(self, item: ShopItem) -> None:
        if item.item_id in self._items:
            logger.warning("Overwriting existing shop item: %s", item.item_id)
        self._items[item.item_id] = item

    def find_item(self, item_id: str) -> Optional[ShopItem]:
        """없으면 None. 예외를 던지지 않는다."""
        return self._items.get(item_id)

    def get_all(self) -> list[ShopItem]:
        return list(self._items.values())

    def count(self) -> int:
        return len(self._items)


def load_default_catalog() -> ShopCatalog:
    catalog = ShopCatalog()
    catalog.load_from_json(DEFAULT_CATALOG_PATH)
    return catalog
