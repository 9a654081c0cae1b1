"""소유자 알림 — pet_updated 이벤트를 접속 중인 소유자에게 전달

전송 수단(WebSocket 등)은 sender 콜백으로 주입. 전달 실패는 로그만 남긴다.
상태 계산과 저장은 이미 끝난 뒤이므로 알림은 정확성과 무관.
"""

import itertools
import threading
from typing import Any, Callable

from mypet.core.event_bus import EventBus, GameEvent
from mypet.core.event_types import EventTypes
from mypet.core.logging import get_logger

logger = get_logger(__name__)

Sender = Callable[[dict[str, Any]], None]


class OwnerNotifier:
    """owner_id → 접속별 sender"""

    def __init__(self, event_bus: EventBus):
        self._bus = event_bus
        self._senders: dict[str, dict[int, Sender]] = {}
        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self._register_event_handlers()

    def _register_event_handlers(self) -> None:
        """EventBus 구독"""
        self._bus.subscribe(EventTypes.PET_UPDATED, self._on_pet_updated)
        self._bus.subscribe(EventTypes.PET_DELETED, self._on_pet_deleted)

    def register(self, owner_id: str, sender: Sender) -> int:
        """접속 등록. 해제용 토큰 반환."""
        token = next(self._tokens)
        with self._lock:
            self._senders.setdefault(owner_id, {})[token] = sender
        logger.debug("Owner %s connected (token=%d)", owner_id, token)
        return token

    def unregister(self, owner_id: str, token: int) -> None:
        with self._lock:
            conns = self._senders.get(owner_id)
            if conns is None:
                return
            conns.pop(token, None)
            if not conns:
                del self._senders[owner_id]
        logger.debug("Owner %s disconnected (token=%d)", owner_id, token)

    def is_online(self, owner_id: str) -> bool:
        with self._lock:
            return owner_id in self._senders

    def send(self, owner_id: str, message: dict[str, Any]) -> int:
        """소유자의 모든 접속에 전달. 성공한 전달 수 반환."""
        with self._lock:
            senders = list(self._senders.get(owner_id, {}).values())

        delivered = 0
        for sender in senders:
            try:
                sender(message)
            except Exception as e:
                logger.warning("Notify failed for owner %s: %s", owner_id, e)
                continue
            delivered += 1
        return delivered

    # === EventBus 핸들러 ===

    def _on_pet_updated(self, event: GameEvent) -> None:
        owner_id = event.data.get("owner_id")
        pet = event.data.get("pet")
        if not owner_id or pet is None:
            return
        self.send(owner_id, {"event": "pet-update", "pet": pet})

    def _on_pet_deleted(self, event: GameEvent) -> None:
        owner_id = event.data.get("owner_id")
        if not owner_id:
            return
        self.send(owner_id, {"event": "pet-deleted", "pet_id": event.data.get("pet_id")})
