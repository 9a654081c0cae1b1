"""ORM ↔ Core 변환 + 공용 조회

서비스끼리 직접 import하지 않으므로 펫 행 조회/변환은 여기 둔다.
"""

from typing import Optional

from sqlalchemy.orm import Session

from mypet.core.errors import NotFoundError
from mypet.core.pet.models import Pet, PetKind
from mypet.db.models import PetModel


def _model_to_pet(model: PetModel) -> Pet:
    """ORM → Core"""
    return Pet(
        id=model.pet_id,
        owner_id=model.owner_id,
        name=model.name,
        kind=PetKind(model.kind),
        age=model.age,
        health=model.health,
        hunger=model.hunger,
        happiness=model.happiness,
        energy=model.energy,
        cleanliness=model.cleanliness,
        coins=model.coins,
        created_at=model.created_at,
    )


def _pet_to_model(pet: Pet) -> PetModel:
    """Core → ORM (신규 행)"""
    return PetModel(
        pet_id=pet.id,
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


def _sync_pet_to_model(pet: Pet, model: PetModel) -> None:
    """변경 가능한 필드만 기존 행에 반영. id/owner/kind/created_at은 불변."""
    model.name = pet.name
    model.age = pet.age
    model.health = pet.health
    model.hunger = pet.hunger
    model.happiness = pet.happiness
    model.energy = pet.energy
    model.cleanliness = pet.cleanliness
    model.coins = pet.coins


def find_pet_row(
    db: Session, pet_id: str, owner_id: Optional[str] = None
) -> Optional[PetModel]:
    """owner_id가 주어지면 소유자 범위로 제한."""
    q = db.query(PetModel).filter(PetModel.pet_id == pet_id)
    if owner_id is not None:
        q = q.filter(PetModel.owner_id == owner_id)
    return q.first()


def load_pet_row(db: Session, pet_id: str, owner_id: Optional[str] = None) -> PetModel:
    """없거나 다른 소유자의 펫이면 PET_NOT_FOUND."""
    row = find_pet_row(db, pet_id, owner_id)
    if row is None:
        raise NotFoundError(
            "Pet not found or access denied", code="PET_NOT_FOUND"
        )
    return row
