"""펫 단위 직렬화

load → compute → commit 구간을 pet_id별 락으로 감싼다.
tick과 요청 핸들러가 같은 레지스트리를 공유해야 한다.
서로 다른 펫은 서로 막지 않는다.

락은 보유/대기 중인 호출자가 있는 동안만 레지스트리에 남는다.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class PetLockRegistry:
    """pet_id → threading.Lock. 필요할 때 생성, 마지막 사용자가 놓으면 제거."""

    def __init__(self) -> None:
        self._locks: dict[str, _Entry] = {}
        self._guard = threading.Lock()

    def _checkout(self, pet_id: str) -> _Entry:
        with self._guard:
            entry = self._locks.get(pet_id)
            if entry is None:
                entry = _Entry()
                self._locks[pet_id] = entry
            entry.users += 1
            return entry

    def _checkin(self, pet_id: str, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[pet_id]

    @contextmanager
    def hold(self, pet_id: str) -> Iterator[None]:
        """pet_id에 대한 read-modify-write 구간."""
        entry = self._checkout(pet_id)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(pet_id, entry)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
