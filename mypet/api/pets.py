"""Pet API endpoints."""

from fastapi import APIRouter, Depends

from mypet.api.deps import get_owner_id, get_pet_service
from mypet.api.schemas import (
    CreatePetRequest,
    DeletedResponse,
    ErrorResponse,
    FinishGameRequest,
    PetInfo,
)
from mypet.services.pet_service import PetService

router = APIRouter(prefix="/pets", tags=["pets"])


@router.get("", response_model=list[PetInfo])
def list_pets(
    owner_id: str = Depends(get_owner_id),
    service: PetService = Depends(get_pet_service),
) -> list[PetInfo]:
    """소유자의 펫 목록"""
    return [PetInfo.from_pet(p) for p in service.list_pets(owner_id)]


@router.post(
    "",
    response_model=PetInfo,
    responses={400: {"model": ErrorResponse}},
)
def create_pet(
    request: CreatePetRequest,
    owner_id: str = Depends(get_owner_id),
    service: PetService = Depends(get_pet_service),
) -> PetInfo:
    """
    펫 생성

    소유자당 최대 3마리, 종류별 1마리.
    """
    pet = service.create_pet(owner_id, request.name, request.kind)
    return PetInfo.from_pet(pet)


@router.get(
    "/{pet_id}",
    response_model=PetInfo,
    responses={404: {"model": ErrorResponse}},
)
def get_pet(
    pet_id: str,
    owner_id: str = Depends(get_owner_id),
    service: PetService = Depends(get_pet_service),
) -> PetInfo:
    return PetInfo.from_pet(service.get_pet(pet_id, owner_id))


@router.delete(
    "/{pet_id}",
    response_model=DeletedResponse,
    responses={404: {"model": ErrorResponse}},
)
def delete_pet(
    pet_id: str,
    owner_id: str = Depends(get_owner_id),
    service: PetService = Depends(get_pet_service),
) -> DeletedResponse:
    """펫 삭제 — 인벤토리와 구매 기록도 함께 삭제"""
    service.delete_pet(pet_id, owner_id)
    return DeletedResponse(data={"pet_id": pet_id})


@router.post(
    "/{pet_id}/actions/{action}",
    response_model=PetInfo,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def apply_action(
    pet_id: str,
    action: str,
    owner_id: str = Depends(get_owner_id),
    service: PetService = Depends(get_pet_service),
) -> PetInfo:
    """
    펫 액션 실행

    - feed: hunger -15, health +5 (완전히 배부르면 +15 코인)
    - play: happiness +20, energy -10, hunger +10
    - sleep: energy +30, hunger +15
    - heal: health +25, happiness -10
    - clean: cleanliness 0, happiness +10 (더러웠으면 +20 코인)
    """
    pet = service.apply_action(pet_id, action, owner_id)
    return PetInfo.from_pet(pet)


@router.post(
    "/{pet_id}/finish-game",
    response_model=PetInfo,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def finish_game(
    pet_id: str,
    request: FinishGameRequest,
    owner_id: str = Depends(get_owner_id),
    service: PetService = Depends(get_pet_service),
) -> PetInfo:
    """미니게임 종료 — 점수와 획득 코인 보고"""
    pet = service.finish_game(pet_id, request.score, request.coins_earned, owner_id)
    return PetInfo.from_pet(pet)
