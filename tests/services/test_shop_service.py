"""ShopService 테스트 — 구매 원자성, 인벤토리, 구매 기록"""

import pytest

from mypet.core.errors import InsufficientFundsError, InsufficientStockError, NotFoundError
from mypet.core.event_types import EventTypes
from mypet.db.models import InventoryModel, PurchaseModel
from mypet.services.shop_service import ShopService


@pytest.fixture()
def pet(pet_service):
    return pet_service.create_pet("owner-1", "Rex", "dog")


@pytest.fixture()
def rich_pet(pet_service, pet):
    return pet_service.finish_game(pet.id, score=100, coins_earned=100)


def _counts(session_factory):
    with session_factory() as db:
        return db.query(InventoryModel).count(), db.query(PurchaseModel).count()


class TestCatalogQueries:
    def test_list_items(self, shop_service):
        assert len(shop_service.list_items()) == 5

    def test_find_item(self, shop_service):
        assert shop_service.find_item("soap_basic").price == 15
        assert shop_service.find_item("nope") is None


class TestBuy:
    def test_buy_debits_and_stacks(self, shop_service, rich_pet):
        after = shop_service.buy(rich_pet.id, "basic_food")
        assert after.coins == 90

        inventory = shop_service.get_inventory(rich_pet.id)
        assert [(v.item_id, v.quantity) for v in inventory] == [("basic_food", 1)]
        assert inventory[0].item.display_name == "Basic food"

    def test_buy_twice_increments(self, shop_service, rich_pet):
        shop_service.buy(rich_pet.id, "basic_food")
        after = shop_service.buy(rich_pet.id, "basic_food")
        assert after.coins == 80
        inventory = shop_service.get_inventory(rich_pet.id)
        assert [(v.item_id, v.quantity) for v in inventory] == [("basic_food", 2)]

    def test_exact_balance(self, shop_service, pet_service, pet):
        pet_service.finish_game(pet.id, score=1, coins_earned=10)
        assert shop_service.buy(pet.id, "basic_food").coins == 0

    def test_insufficient_funds_changes_nothing(self, shop_service, pet_service, pet, session_factory):
        pet_service.finish_game(pet.id, score=1, coins_earned=20)
        with pytest.raises(InsufficientFundsError) as exc:
            shop_service.buy(pet.id, "premium_food")
        assert exc.value.code == "NOT_ENOUGH_COINS"
        assert pet_service.get_pet(pet.id).coins == 20
        assert _counts(session_factory) == (0, 0)

    def test_unknown_item(self, shop_service, rich_pet):
        with pytest.raises(NotFoundError) as exc:
            shop_service.buy(rich_pet.id, "golden_apple")
        assert exc.value.code == "ITEM_NOT_FOUND"

    def test_unknown_item_checked_before_pet(self, shop_service):
        with pytest.raises(NotFoundError) as exc:
            shop_service.buy("nope", "golden_apple")
        assert exc.value.code == "ITEM_NOT_FOUND"

    def test_unknown_pet(self, shop_service):
        with pytest.raises(NotFoundError) as exc:
            shop_service.buy("nope", "basic_food")
        assert exc.value.code == "PET_NOT_FOUND"

    def test_other_owner(self, shop_service, rich_pet, session_factory):
        with pytest.raises(NotFoundError):
            shop_service.buy(rich_pet.id, "basic_food", owner_id="owner-2")
        assert _counts(session_factory) == (0, 0)

    def test_buy_does_not_apply_effects(self, shop_service, rich_pet):
        after = shop_service.buy(rich_pet.id, "medkit_small")
        assert after.health == rich_pet.health
        assert after.hunger == rich_pet.hunger

    def test_emits_events(self, shop_service, bus, rich_pet):
        purchased, updated = [], []
        bus.subscribe(EventTypes.ITEM_PURCHASED, purchased.append)
        bus.subscribe(EventTypes.PET_UPDATED, updated.append)
        shop_service.buy(rich_pet.id, "basic_food")
        assert purchased[0].data == {"pet_id": rich_pet.id, "item_id": "basic_food", "price": 10}
        assert updated[0].data["pet"]["coins"] == 90


class TestUseItem:
    def test_use_applies_effect_and_decrements(self, shop_service, pet_service, rich_pet):
        pet_service.apply_action(rich_pet.id, "play")  # hunger 10
        shop_service.buy(rich_pet.id, "soap_basic")
        shop_service.buy(rich_pet.id, "soap_basic")

        pet, remaining = shop_service.use_item(rich_pet.id, "soap_basic")
        assert remaining == 1
        # dog: soap 카테고리 보너스 happiness +5
        assert pet.happiness == 20 + 5 + 5
        assert pet.coins == 70
        assert [(v.item_id, v.quantity) for v in shop_service.get_inventory(rich_pet.id)] == [
            ("soap_basic", 1)
        ]

    def test_last_use_removes_row(self, shop_service, rich_pet, session_factory):
        shop_service.buy(rich_pet.id, "basic_food")
        _, remaining = shop_service.use_item(rich_pet.id, "basic_food")
        assert remaining == 0
        assert shop_service.get_inventory(rich_pet.id) == []
        assert _counts(session_factory) == (0, 1)

    def test_not_in_inventory(self, shop_service, pet_service, rich_pet):
        with pytest.raises(InsufficientStockError) as exc:
            shop_service.use_item(rich_pet.id, "basic_food")
        assert exc.value.code == "ITEM_NOT_IN_INVENTORY"
        assert pet_service.get_pet(rich_pet.id) == rich_pet

    def test_use_after_exhausted(self, shop_service, rich_pet):
        shop_service.buy(rich_pet.id, "basic_food")
        shop_service.use_item(rich_pet.id, "basic_food")
        with pytest.raises(InsufficientStockError):
            shop_service.use_item(rich_pet.id, "basic_food")

    def test_unknown_item(self, shop_service, rich_pet):
        with pytest.raises(NotFoundError) as exc:
            shop_service.use_item(rich_pet.id, "golden_apple")
        assert exc.value.code == "ITEM_NOT_FOUND"

    def test_unknown_pet(self, shop_service):
        with pytest.raises(NotFoundError) as exc:
            shop_service.use_item("nope", "basic_food")
        assert exc.value.code == "PET_NOT_FOUND"

    def test_monkey_banana(self, shop_service, pet_service):
        monkey = pet_service.create_pet("owner-1", "Momo", "monkey")
        pet_service.finish_game(monkey.id, score=1, coins_earned=15)
        shop_service.buy(monkey.id, "banana_snack")
        pet, _ = shop_service.use_item(monkey.id, "banana_snack")
        assert (pet.happiness, pet.energy, pet.hunger) == (25, 5, 0)


class TestHistory:
    def test_newest_first(self, shop_service, rich_pet):
        for item_id in ["basic_food", "soap_basic", "medkit_small"]:
            shop_service.buy(rich_pet.id, item_id)
        history = shop_service.get_purchase_history(rich_pet.id)
        assert [r.item_id for r in history] == ["medkit_small", "soap_basic", "basic_food"]
        assert [r.price_paid for r in history] == [30, 15, 10]

    def test_limit(self, shop_service, rich_pet):
        for _ in range(4):
            shop_service.buy(rich_pet.id, "basic_food")
        assert len(shop_service.get_purchase_history(rich_pet.id, limit=2)) == 2

    def test_default_page_size(self, session_factory, bus, catalog, locks, pet_service, rich_pet):
        service = ShopService(session_factory, bus, catalog, locks, history_page_size=3)
        for _ in range(5):
            service.buy(rich_pet.id, "basic_food")
        assert len(service.get_purchase_history(rich_pet.id)) == 3

    def test_empty(self, shop_service, pet):
        assert shop_service.get_purchase_history(pet.id) == []

    def test_other_owner(self, shop_service, pet):
        with pytest.raises(NotFoundError):
            shop_service.get_purchase_history(pet.id, owner_id="owner-2")


class TestInventoryOrder:
    def test_most_recently_updated_first(self, shop_service, rich_pet):
        shop_service.buy(rich_pet.id, "basic_food")
        shop_service.buy(rich_pet.id, "soap_basic")
        assert [v.item_id for v in shop_service.get_inventory(rich_pet.id)] == [
            "soap_basic",
            "basic_food",
        ]
        shop_service.buy(rich_pet.id, "basic_food")
        assert [v.item_id for v in shop_service.get_inventory(rich_pet.id)] == [
            "basic_food",
            "soap_basic",
        ]

    def test_missing_pet(self, shop_service):
        with pytest.raises(NotFoundError):
            shop_service.get_inventory("nope")


class TestLockCleanup:
    def test_failed_calls_leave_no_locks(self, shop_service, rich_pet, locks):
        for i in range(50):
            with pytest.raises(NotFoundError):
                shop_service.use_item(f"bogus-{i}", "basic_food")
            with pytest.raises(NotFoundError):
                shop_service.buy(f"bogus-{i}", "basic_food")
        with pytest.raises(InsufficientStockError):
            shop_service.use_item(rich_pet.id, "basic_food")
        assert len(locks) == 0
