"""상점 Service — 구매, 인벤토리, 구매 기록

buy/use_item의 모든 부수효과(코인, 인벤토리, 기록, 바이탈)는
한 트랜잭션에서 commit한다. 중간 실패 시 전부 롤백.
"""

from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from mypet.core.errors import NotFoundError
from mypet.core.event_bus import EventBus, GameEvent
from mypet.core.event_types import EventTypes
from mypet.core.locks import PetLockRegistry
from mypet.core.logging import get_logger
from mypet.core.pet.models import Pet, utc_now
from mypet.core.shop.catalog import ShopCatalog
from mypet.core.shop.economy import (
    DEFAULT_HISTORY_LIMIT,
    clamp_history_limit,
    consumed_quantity,
    debit,
    stacked_quantity,
)
from mypet.core.shop.models import InventoryView, PurchaseRecord, ShopItem
from mypet.db.mapping import _model_to_pet, _sync_pet_to_model, load_pet_row
from mypet.db.models import InventoryModel, PurchaseModel

logger = get_logger(__name__)


class ShopService:
    """카탈로그 조회 + 경제 원장"""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        event_bus: EventBus,
        catalog: ShopCatalog,
        locks: PetLockRegistry,
        history_page_size: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._session_factory = session_factory
        self._bus = event_bus
        self._catalog = catalog
        self._locks = locks
        self._history_page_size = history_page_size

    # === 카탈로그 ===

    def list_items(self) -> list[ShopItem]:
        return self._catalog.get_all()

    def find_item(self, item_id: str) -> Optional[ShopItem]:
        return self._catalog.find_item(item_id)

    def _require_item(self, item_id: str) -> ShopItem:
        item = self._catalog.find_item(item_id)
        if item is None:
            raise NotFoundError("This item does not exist", code="ITEM_NOT_FOUND")
        return item

    # === 구매 ===

    def buy(self, pet_id: str, item_id: str, owner_id: Optional[str] = None) -> Pet:
        """코인 차감 + 인벤토리 +1 + 구매 기록.

        잔액 부족이면 NOT_ENOUGH_COINS, 아무것도 바뀌지 않는다.
        """
        item = self._require_item(item_id)

        with self._locks.hold(pet_id), self._session_factory() as db:
            row = load_pet_row(db, pet_id, owner_id)
            pet = _model_to_pet(row)
            pet.coins = debit(pet.coins, item.price)
            _sync_pet_to_model(pet, row)

            now = utc_now()
            entry = self._find_entry(db, pet_id, item.item_id)
            if entry is None:
                db.add(
                    InventoryModel(
                        pet_id=pet_id,
                        item_id=item.item_id,
                        quantity=stacked_quantity(None),
                        created_at=now,
                        updated_at=now,
                    )
                )
            else:
                entry.quantity = stacked_quantity(entry.quantity)
                entry.updated_at = now

            db.add(
                PurchaseModel(
                    pet_id=pet_id,
                    item_id=item.item_id,
                    price=item.price,
                    created_at=now,
                )
            )
            db.commit()

        logger.info(
            "Pet %s bought %s for %d (coins left=%d)",
            pet_id,
            item.item_id,
            item.price,
            pet.coins,
        )
        self._bus.emit_root(
            GameEvent(
                event_type=EventTypes.ITEM_PURCHASED,
                data={"pet_id": pet_id, "item_id": item.item_id, "price": item.price},
                source="shop_service",
            )
        )
        self._publish_pet(pet)
        return pet

    # === 사용 ===

    def use_item(
        self, pet_id: str, item_id: str, owner_id: Optional[str] = None
    ) -> tuple[Pet, int]:
        """아이템 효과 적용 + 수량 -1. 남은 수량 반환 (삭제되면 0)."""
        item = self._require_item(item_id)

        with self._locks.hold(pet_id), self._session_factory() as db:
            row = load_pet_row(db, pet_id, owner_id)
            entry = self._find_entry(db, pet_id, item.item_id)
            remaining = consumed_quantity(entry.quantity if entry else None)

            pet = _model_to_pet(row)
            effects = pet.apply_effect(item)
            _sync_pet_to_model(pet, row)

            if remaining > 0:
                entry.quantity = remaining
                entry.updated_at = utc_now()
            else:
                db.delete(entry)
            db.commit()

        logger.info(
            "Pet %s used %s %s (remaining=%d)", pet_id, item.item_id, effects, remaining
        )
        self._bus.emit_root(
            GameEvent(
                event_type=EventTypes.ITEM_USED,
                data={"pet_id": pet_id, "item_id": item.item_id, "remaining": remaining},
                source="shop_service",
            )
        )
        self._publish_pet(pet)
        return pet, remaining

    # === 조회 ===

    def get_inventory(
        self, pet_id: str, owner_id: Optional[str] = None
    ) -> list[InventoryView]:
        """최근 갱신순. 카탈로그에서 사라진 아이템은 item=None."""
        with self._session_factory() as db:
            load_pet_row(db, pet_id, owner_id)
            rows = (
                db.query(InventoryModel)
                .filter(InventoryModel.pet_id == pet_id)
                .order_by(InventoryModel.updated_at.desc(), InventoryModel.id.desc())
                .all()
            )
            return [
                InventoryView(
                    item_id=r.item_id,
                    quantity=r.quantity,
                    created_at=r.created_at,
                    updated_at=r.updated_at,
                    item=self._catalog.find_item(r.item_id),
                )
                for r in rows
            ]

    def get_purchase_history(
        self,
        pet_id: str,
        limit: Optional[int] = None,
        owner_id: Optional[str] = None,
    ) -> list[PurchaseRecord]:
        """최근 구매순, 최대 limit건 (기본 history_page_size)."""
        limit = clamp_history_limit(limit, self._history_page_size)
        with self._session_factory() as db:
            load_pet_row(db, pet_id, owner_id)
            rows = (
                db.query(PurchaseModel)
                .filter(PurchaseModel.pet_id == pet_id)
                .order_by(PurchaseModel.created_at.desc(), PurchaseModel.id.desc())
                .limit(limit)
                .all()
            )
            return [
                PurchaseRecord(
                    pet_id=r.pet_id,
                    item_id=r.item_id,
                    price_paid=r.price,
                    created_at=r.created_at,
                )
                for r in rows
            ]

    # === 헬퍼 ===

    @staticmethod
    def _find_entry(db: Session, pet_id: str, item_id: str) -> Optional[InventoryModel]:
        return (
            db.query(InventoryModel)
            .filter(InventoryModel.pet_id == pet_id, InventoryModel.item_id == item_id)
            .first()
        )

    def _publish_pet(self, pet: Pet) -> None:
        self._bus.emit_root(
            GameEvent(
                event_type=EventTypes.PET_UPDATED,
                data={"pet_id": pet.id, "owner_id": pet.owner_id, "pet": pet.to_dict()},
                source="shop_service",
            )
        )
