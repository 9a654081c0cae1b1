"""Shop API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from mypet.api.deps import get_owner_id, get_shop_service
from mypet.api.schemas import (
    BuyRequest,
    ErrorResponse,
    PetInfo,
    PurchaseInfo,
    ShopItemInfo,
)
from mypet.services.shop_service import ShopService

router = APIRouter(prefix="/shop", tags=["shop"])


@router.get("/items", response_model=list[ShopItemInfo])
def list_items(service: ShopService = Depends(get_shop_service)) -> list[ShopItemInfo]:
    """상점 진열 목록"""
    return [ShopItemInfo.from_item(i) for i in service.list_items()]


@router.post(
    "/buy",
    response_model=PetInfo,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def buy_item(
    request: BuyRequest,
    owner_id: str = Depends(get_owner_id),
    service: ShopService = Depends(get_shop_service),
) -> PetInfo:
    """
    아이템 구매

    코인 차감, 인벤토리 추가, 구매 기록을 한 번에 처리한다.
    """
    pet = service.buy(request.pet_id, request.item_id, owner_id)
    return PetInfo.from_pet(pet)


@router.get(
    "/history",
    response_model=list[PurchaseInfo],
    responses={404: {"model": ErrorResponse}},
)
def purchase_history(
    pet_id: str = Query(..., min_length=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    owner_id: str = Depends(get_owner_id),
    service: ShopService = Depends(get_shop_service),
) -> list[PurchaseInfo]:
    """최근 구매 기록"""
    records = service.get_purchase_history(pet_id, limit, owner_id)
    return [PurchaseInfo.from_record(r) for r in records]
