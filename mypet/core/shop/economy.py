"""경제 규칙 — 구매 가능 여부, 인벤토리 수량, 미니게임 보상 검증

순수 함수. 저장은 ShopService가 담당.
"""

from mypet.core.errors import InsufficientFundsError, InsufficientStockError, InvalidInputError

DEFAULT_HISTORY_LIMIT = 20


def can_afford(coins: int, price: int) -> bool:
    return coins >= price


def ensure_affordable(coins: int, price: int) -> None:
    if not can_afford(coins, price):
        raise InsufficientFundsError(
            f"Not enough coins: have {coins}, need {price}"
        )


def debit(coins: int, price: int) -> int:
    """잔액 차감. 부족하면 InsufficientFundsError."""
    ensure_affordable(coins, price)
    return coins - price


def stacked_quantity(current: int | None) -> int:
    """구매 1건 반영 후 수량. 항목이 없으면 1."""
    return (current or 0) + 1


def consumed_quantity(current: int | None) -> int:
    """사용 1건 반영 후 수량. 0이면 호출자가 행을 삭제한다."""
    if current is None or current <= 0:
        raise InsufficientStockError("You don't have this item in your inventory")
    return current - 1


def clamp_history_limit(limit: int | None, default: int = DEFAULT_HISTORY_LIMIT) -> int:
    if limit is None or limit <= 0:
        return default
    return limit


def validate_game_result(score: int, coins_earned: int, max_coins: int) -> None:
    """미니게임 결과 기본 검증. 안티치트 아님."""
    if score < 0:
        raise InvalidInputError(
            f"score must be >= 0, got {score}", code="INVALID_GAME_RESULT"
        )
    if not 0 <= coins_earned <= max_coins:
        raise InvalidInputError(
            f"coins_earned must be within [0, {max_coins}], got {coins_earned}",
            code="INVALID_GAME_RESULT",
        )
