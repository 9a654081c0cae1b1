"""Inventory API endpoints."""

from fastapi import APIRouter, Depends, Query

from mypet.api.deps import get_owner_id, get_shop_service
from mypet.api.schemas import (
    ErrorResponse,
    InventoryItemInfo,
    PetInfo,
    UseItemRequest,
    UseItemResponse,
)
from mypet.services.shop_service import ShopService

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get(
    "",
    response_model=list[InventoryItemInfo],
    responses={404: {"model": ErrorResponse}},
)
def get_inventory(
    pet_id: str = Query(..., min_length=1),
    owner_id: str = Depends(get_owner_id),
    service: ShopService = Depends(get_shop_service),
) -> list[InventoryItemInfo]:
    """펫 인벤토리 (최근 갱신순)"""
    return [InventoryItemInfo.from_view(v) for v in service.get_inventory(pet_id, owner_id)]


@router.post(
    "/use",
    response_model=UseItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def use_item(
    request: UseItemRequest,
    owner_id: str = Depends(get_owner_id),
    service: ShopService = Depends(get_shop_service),
) -> UseItemResponse:
    """아이템 사용 — 효과 적용 후 수량 -1"""
    pet, remaining = service.use_item(request.pet_id, request.item_id, owner_id)
    return UseItemResponse(
        pet=PetInfo.from_pet(pet),
        item_id=request.item_id,
        remaining_quantity=remaining,
    )
