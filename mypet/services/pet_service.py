"""펫 Service — Core↔DB 연결, EventBus 통신

Service → Core, Service → DB 허용.
Service → Service 금지, EventBus 경유.
모든 read-modify-write는 PetLockRegistry로 펫 단위 직렬화.
"""

from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from mypet.core.errors import InvalidInputError
from mypet.core.event_bus import EventBus, GameEvent
from mypet.core.event_types import EventTypes
from mypet.core.locks import PetLockRegistry
from mypet.core.logging import get_logger
from mypet.core.pet.models import Pet, PetKind, apply_action
from mypet.core.shop.economy import validate_game_result
from mypet.db.mapping import (
    _model_to_pet,
    _pet_to_model,
    _sync_pet_to_model,
    load_pet_row,
)
from mypet.db.models import PetModel

logger = get_logger(__name__)

MAX_NAME_LENGTH = 50


class PetService:
    """펫 생성/조회/삭제 + 액션 처리"""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        event_bus: EventBus,
        locks: PetLockRegistry,
        max_pets_per_owner: int = 3,
        max_game_coins: int = 500,
    ):
        self._session_factory = session_factory
        self._bus = event_bus
        self._locks = locks
        self._max_pets_per_owner = max_pets_per_owner
        self._max_game_coins = max_game_coins

    # === 생성/조회 ===

    def create_pet(self, owner_id: str, name: str, kind: str) -> Pet:
        """펫 생성 + DB 저장.

        정책: 소유자당 최대 max_pets_per_owner마리, 종류별 1마리.
        검증 실패 시 아무것도 저장하지 않는다.
        """
        if not owner_id:
            raise InvalidInputError("owner_id is required", code="OWNER_ID_REQUIRED")
        pet_kind = PetKind.parse(kind)
        clean_name = (name or "").strip()
        if not clean_name or len(clean_name) > MAX_NAME_LENGTH:
            raise InvalidInputError(
                f"name must be 1..{MAX_NAME_LENGTH} characters", code="INVALID_NAME"
            )

        # 같은 소유자의 동시 생성 요청이 한도를 넘지 않도록 소유자 단위로 잠근다
        with self._locks.hold(f"owner:{owner_id}"), self._session_factory() as db:
            owned = db.query(PetModel).filter(PetModel.owner_id == owner_id).all()
            if len(owned) >= self._max_pets_per_owner:
                raise InvalidInputError(
                    f"An owner can have at most {self._max_pets_per_owner} pets",
                    code="PET_LIMIT_REACHED",
                )
            if any(row.kind == pet_kind.value for row in owned):
                raise InvalidInputError(
                    f"Owner already has a {pet_kind.value}",
                    code="DUPLICATE_PET_KIND",
                )

            pet = Pet(name=clean_name, kind=pet_kind, owner_id=owner_id)
            db.add(_pet_to_model(pet))
            db.commit()

        logger.info("Created pet %s (%s, owner=%s)", pet.id, pet.kind.value, owner_id)
        self._publish(EventTypes.PET_CREATED, pet)
        return pet

    def get_pet(self, pet_id: str, owner_id: Optional[str] = None) -> Pet:
        """없으면 PET_NOT_FOUND."""
        with self._session_factory() as db:
            return _model_to_pet(load_pet_row(db, pet_id, owner_id))

    def list_pets(self, owner_id: str) -> list[Pet]:
        """소유자의 펫 목록 (생성순)."""
        with self._session_factory() as db:
            rows = (
                db.query(PetModel)
                .filter(PetModel.owner_id == owner_id)
                .order_by(PetModel.created_at, PetModel.pet_id)
                .all()
            )
            return [_model_to_pet(r) for r in rows]

    # === 상태 전이 ===

    def apply_action(
        self, pet_id: str, action: str, owner_id: Optional[str] = None
    ) -> Pet:
        """feed/play/sleep/heal/clean 실행 후 저장."""
        with self._locks.hold(pet_id), self._session_factory() as db:
            row = load_pet_row(db, pet_id, owner_id)
            pet = _model_to_pet(row)
            reward = apply_action(pet, action)
            _sync_pet_to_model(pet, row)
            db.commit()

        logger.debug("Pet %s: %s (reward=%d)", pet_id, action, reward)
        self._publish(EventTypes.PET_UPDATED, pet)
        return pet

    def finish_game(
        self,
        pet_id: str,
        score: int,
        coins_earned: int,
        owner_id: Optional[str] = None,
    ) -> Pet:
        """미니게임 종료 보고. 획득 코인을 펫 잔액에 더한다."""
        validate_game_result(score, coins_earned, self._max_game_coins)

        with self._locks.hold(pet_id), self._session_factory() as db:
            row = load_pet_row(db, pet_id, owner_id)
            pet = _model_to_pet(row)
            pet.coins += coins_earned
            _sync_pet_to_model(pet, row)
            db.commit()

        logger.info(
            "Pet %s finished game: score=%d, coins=+%d", pet_id, score, coins_earned
        )
        self._publish(EventTypes.PET_UPDATED, pet)
        return pet

    # === 삭제 ===

    def delete_pet(self, pet_id: str, owner_id: Optional[str] = None) -> None:
        """펫 삭제. 인벤토리와 구매 기록도 함께 삭제."""
        with self._locks.hold(pet_id), self._session_factory() as db:
            row = load_pet_row(db, pet_id, owner_id)
            deleted_owner = row.owner_id
            db.delete(row)
            db.commit()

        logger.info("Deleted pet %s (owner=%s)", pet_id, deleted_owner)
        self._bus.emit_root(
            GameEvent(
                event_type=EventTypes.PET_DELETED,
                data={"pet_id": pet_id, "owner_id": deleted_owner},
                source="pet_service",
            )
        )

    # === EventBus ===

    def _publish(self, event_type: str, pet: Pet) -> None:
        self._bus.emit_root(
            GameEvent(
                event_type=event_type,
                data={"pet_id": pet.id, "owner_id": pet.owner_id, "pet": pet.to_dict()},
                source="pet_service",
            )
        )
