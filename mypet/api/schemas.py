"""API request/response schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from mypet.core.pet.models import Pet
from mypet.core.shop.models import InventoryView, PurchaseRecord, ShopItem


# === Request Schemas ===


class CreatePetRequest(BaseModel):
    """펫 생성 요청"""

    name: str = Field(..., min_length=1, max_length=50, description="펫 이름")
    kind: str = Field(..., description="펫 종류: dog, cat, monkey")


class BuyRequest(BaseModel):
    """구매 요청"""

    pet_id: str = Field(..., min_length=1, description="펫 ID")
    item_id: str = Field(..., min_length=1, description="아이템 ID")


class UseItemRequest(BaseModel):
    """아이템 사용 요청"""

    pet_id: str = Field(..., min_length=1, description="펫 ID")
    item_id: str = Field(..., min_length=1, description="아이템 ID")


class FinishGameRequest(BaseModel):
    """미니게임 종료 보고"""

    score: int = Field(..., description="최종 점수")
    coins_earned: int = Field(..., description="획득 코인")


# === Response Schemas ===


class PetInfo(BaseModel):
    """펫 상태"""

    id: str
    owner_id: str
    name: str
    kind: str
    age: int
    health: int
    hunger: int
    happiness: int
    energy: int
    cleanliness: int
    coins: int
    created_at: datetime

    @classmethod
    def from_pet(cls, pet: Pet) -> "PetInfo":
        return cls(
            id=pet.id,
            owner_id=pet.owner_id,
            name=pet.name,
            kind=pet.kind.value,
            age=pet.age,
            health=pet.health,
            hunger=pet.hunger,
            happiness=pet.happiness,
            energy=pet.energy,
            cleanliness=pet.cleanliness,
            coins=pet.coins,
            created_at=pet.created_at,
        )


class ShopItemInfo(BaseModel):
    """카탈로그 항목"""

    id: str
    name: str
    category: str
    price: int
    effects: dict[str, int] = {}

    @classmethod
    def from_item(cls, item: ShopItem) -> "ShopItemInfo":
        return cls(**item.to_dict())


class InventoryItemInfo(BaseModel):
    """인벤토리 행"""

    item_id: str
    quantity: int
    created_at: datetime
    updated_at: datetime
    item: Optional[ShopItemInfo] = None

    @classmethod
    def from_view(cls, view: InventoryView) -> "InventoryItemInfo":
        return cls(
            item_id=view.item_id,
            quantity=view.quantity,
            created_at=view.created_at,
            updated_at=view.updated_at,
            item=ShopItemInfo.from_item(view.item) if view.item else None,
        )


class PurchaseInfo(BaseModel):
    """구매 기록"""

    item_id: str
    price: int
    created_at: datetime

    @classmethod
    def from_record(cls, record: PurchaseRecord) -> "PurchaseInfo":
        return cls(
            item_id=record.item_id,
            price=record.price_paid,
            created_at=record.created_at,
        )


class UseItemResponse(BaseModel):
    """아이템 사용 결과"""

    pet: PetInfo
    item_id: str
    remaining_quantity: int


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None


class DeletedResponse(BaseModel):
    success: bool = True
    data: Optional[dict[str, Any]] = None
