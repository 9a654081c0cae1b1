"""Effect Resolver — 펫 종류별 아이템 효과 계산

종별 보정은 아래 표 하나로만 정의한다. 분기 코드 추가 금지.
보정은 기본 효과에 더해진다 (대체 아님). 아이템 규칙과 카테고리 규칙이
둘 다 맞으면 둘 다 적용.
"""

from mypet.core.pet.models import PetKind

from .models import ItemCategory, ShopItem


def item_rule(item_id: str) -> str:
    return f"item:{item_id}"


def category_rule(category: ItemCategory) -> str:
    return f"category:{category.value}"


# (kind, rule) → 보너스 델타
KIND_BONUSES: dict[tuple[PetKind, str], dict[str, int]] = {
    # 원숭이: 바나나를 좋아함
    (PetKind.MONKEY, item_rule("banana_snack")): {"happiness": 10, "energy": 5},
    (PetKind.MONKEY, category_rule(ItemCategory.FOOD)): {"happiness": 5},
    # 개: 음식이면 에너지, 목욕 좋아함
    (PetKind.DOG, category_rule(ItemCategory.FOOD)): {"energy": 5},
    (PetKind.DOG, category_rule(ItemCategory.SOAP)): {"happiness": 5},
    # 고양이: 까다로움
    (PetKind.CAT, item_rule("basic_food")): {"happiness": 5},
    (PetKind.CAT, item_rule("premium_food")): {"happiness": 10, "energy": 5},
    (PetKind.CAT, category_rule(ItemCategory.SOAP)): {"happiness": -5},
}


def matching_bonuses(kind: PetKind, item: ShopItem) -> list[dict[str, int]]:
    """(kind, item)에 해당하는 보너스 목록. 아이템 규칙 먼저."""
    rules = (item_rule(item.item_id), category_rule(item.category))
    return [KIND_BONUSES[(kind, r)] for r in rules if (kind, r) in KIND_BONUSES]


def resolve_effect(kind: PetKind | str, item: ShopItem) -> dict[str, int]:
    """유효 델타 맵 계산. 클램프는 Pet 쪽에서."""
    kind = PetKind(kind)
    effects = dict(item.base_effects)
    for bonus in matching_bonuses(kind, item):
        for attr, delta in bonus.items():
            effects[attr] = effects.get(attr, 0) + delta
    return effects
