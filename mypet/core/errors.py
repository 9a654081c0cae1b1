"""도메인 에러 — 분류된 실패 결과

서비스는 변경 전에 검증하고, 실패 시 아래 예외를 발생시킨다.
API 계층이 code를 ErrorResponse로 변환한다.
"""


class PetError(Exception):
    """모든 도메인 실패의 기반. code는 클라이언트에 그대로 전달된다."""

    code: str = "PET_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code

    @property
    def message(self) -> str:
        return str(self)


class NotFoundError(PetError):
    """펫, 아이템 또는 인벤토리 항목 없음"""

    code = "NOT_FOUND"


class InvalidInputError(PetError):
    """잘못된 입력 — 변경 전에 거부"""

    code = "INVALID_INPUT"


class InsufficientFundsError(PetError):
    """구매 거부. 펫 상태는 그대로."""

    code = "NOT_ENOUGH_COINS"


class InsufficientStockError(PetError):
    """아이템 사용 거부 (수량 <= 0)"""

    code = "ITEM_NOT_IN_INVENTORY"
