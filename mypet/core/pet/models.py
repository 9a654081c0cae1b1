"""펫 도메인 모델 (DB 무관)

상태 전이 규칙 전부 여기에 있다. 모든 수치 변경은 적용 직후 [0, 100] 클램프.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

from mypet.core.errors import InvalidInputError
from mypet.core.pet.vitals import VITALS, clamp

if TYPE_CHECKING:
    from mypet.core.shop.models import ShopItem

# tick 피해 단계 (hunger 임계값 → 피해량). 오름차순 평가, 뒤가 앞을 덮어쓴다.
HUNGER_DAMAGE_TIERS: tuple[tuple[int, int], ...] = ((80, 1), (95, 3), (100, 5))
SADNESS_DAMAGE = 1
FILTH_DAMAGE = 1
DECAY_HEALTH_FLOOR = 1

FEED_REWARD = 15
CLEAN_REWARD = 20


def utc_now() -> datetime:
    """naive UTC. SQLite DateTime 왕복 시 tzinfo가 사라지므로 처음부터 제거."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PetKind(str, Enum):
    DOG = "dog"
    CAT = "cat"
    MONKEY = "monkey"

    @classmethod
    def parse(cls, value: str) -> "PetKind":
        try:
            return cls(value)
        except ValueError:
            raise InvalidInputError(
                f"Unknown pet kind: {value!r}", code="INVALID_PET_KIND"
            ) from None


class PetAction(str, Enum):
    FEED = "feed"
    PLAY = "play"
    SLEEP = "sleep"
    HEAL = "heal"
    CLEAN = "clean"


@dataclass
class Pet:
    """소유자별 펫 개체"""

    name: str
    kind: PetKind
    owner_id: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    age: int = 0

    # 바이탈 (hunger/cleanliness는 높을수록 나쁨)
    health: int = 100
    hunger: int = 0
    happiness: int = 0
    energy: int = 0
    cleanliness: int = 0

    coins: int = 0
    created_at: datetime = field(default_factory=utc_now)

    def _shift(self, attr: str, delta: int) -> None:
        setattr(self, attr, clamp(getattr(self, attr) + delta))

    # === 상태 전이 ===

    def tick(self) -> int:
        """주기적 감쇠. 가한 피해량을 반환.

        방치만으로는 죽지 않는다: health 하한 1.
        """
        self._shift("hunger", 1)
        self._shift("happiness", -1)
        self._shift("cleanliness", 1)

        damage = 0
        for threshold, tier_damage in HUNGER_DAMAGE_TIERS:
            if self.hunger >= threshold:
                damage = tier_damage

        # 배고픔 피해가 없을 때만
        if damage == 0 and self.happiness == 0:
            damage = SADNESS_DAMAGE
        if self.cleanliness == 100:
            damage += FILTH_DAMAGE

        if damage > 0:
            self._shift("health", -damage)
        self.health = max(self.health, DECAY_HEALTH_FLOOR)
        return damage

    def feed(self) -> int:
        """hunger -15, health +5. 배고픈 상태에서 완전히 배부르게 되면 +15 코인."""
        was_hungry = self.hunger > 0
        self._shift("hunger", -15)
        self._shift("health", 5)
        if was_hungry and self.hunger == 0:
            self.coins += FEED_REWARD
            return FEED_REWARD
        return 0

    def play(self) -> int:
        self._shift("happiness", 20)
        self._shift("energy", -10)
        self._shift("hunger", 10)
        return 0

    def sleep(self) -> int:
        self._shift("energy", 30)
        self._shift("hunger", 15)
        return 0

    def heal(self) -> int:
        """약은 맛이 없다: happiness -10."""
        self._shift("health", 25)
        self._shift("happiness", -10)
        return 0

    def clean(self) -> int:
        """cleanliness 0으로 리셋, happiness +10. 조금이라도 더러웠으면 +20 코인."""
        was_dirty = self.cleanliness > 0
        self.cleanliness = 0
        self._shift("happiness", 10)
        if was_dirty:
            self.coins += CLEAN_REWARD
            return CLEAN_REWARD
        return 0

    def apply_deltas(self, deltas: Mapping[str, int]) -> None:
        """바이탈 델타 일괄 적용. 0이거나 바이탈이 아닌 키는 무시."""
        for attr, delta in deltas.items():
            if delta and attr in VITALS:
                self._shift(attr, delta)

    def apply_effect(self, item: "ShopItem") -> dict[str, int]:
        """아이템 효과 적용. 종별 보너스는 Effect Resolver가 계산. 코인 변화 없음."""
        from mypet.core.shop.effects import resolve_effect

        effects = resolve_effect(self.kind, item)
        self.apply_deltas(effects)
        return effects

    # === 직렬화 ===

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "kind": self.kind.value,
            "age": self.age,
            "health": self.health,
            "hunger": self.hunger,
            "happiness": self.happiness,
            "energy": self.energy,
            "cleanliness": self.cleanliness,
            "coins": self.coins,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pet":
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        elif created_at is None:
            created_at = utc_now()

        return cls(
            id=data["id"],
            owner_id=data["owner_id"],
            name=data["name"],
            kind=PetKind(data["kind"]),
            age=data.get("age", 0),
            health=data.get("health", 100),
            hunger=data.get("hunger", 0),
            happiness=data.get("happiness", 0),
            energy=data.get("energy", 0),
            cleanliness=data.get("cleanliness", 0),
            coins=data.get("coins", 0),
            created_at=created_at,
        )


def apply_action(pet: Pet, action: str) -> int:
    """액션 이름으로 전이 실행. 보상 코인 반환.

    알 수 없는 액션은 변경 전에 거부.
    """
    try:
        parsed = PetAction(action)
    except ValueError:
        raise InvalidInputError(
            f"Unknown action: {action!r}", code="UNKNOWN_ACTION"
        ) from None

    transition = getattr(pet, parsed.value)
    return transition()
