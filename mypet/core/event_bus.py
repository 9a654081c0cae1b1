"""EventBus - 서비스 간 이벤트 통신 인프라

규칙:
- 서비스는 다른 서비스를 직접 import하지 않는다
- 이벤트는 식별자와 직렬화된 상태만 전달한다 (ORM 객체 금지)
- 전파 깊이 최대 MAX_DEPTH 단계
- 한 체인 안에서 동일 source가 같은 펫에 대해 같은 이벤트를 두 번 발행하지 않는다

요청 핸들러는 스레드풀에서, tick은 워커 스레드에서 돌기 때문에
깊이/중복 추적은 스레드별로 유지한다.
"""

import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Set

from mypet.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 한 체인 내 이벤트 전파 최대 깊이


@dataclass
class GameEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: 이벤트 유형 (예: "pet_updated")
        data: 이벤트 데이터 (pet_id 등 ID 위주)
        source: 발행한 서비스 이름
    """

    event_type: str
    data: Dict[str, Any]
    source: str

    # 내부 추적용 (외부에서 설정하지 않음)
    _depth: int = field(default=0, repr=False)

    @property
    def chain_key(self) -> str:
        return f"{self.source}:{self.event_type}:{self.data.get('pet_id', '')}"


# 핸들러 타입: GameEvent를 받는 callable
EventHandler = Callable[[GameEvent], None]


class _ChainState(threading.local):
    def __init__(self) -> None:
        self.depth: int = 0
        self.emitted: Set[str] = set()


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe("pet_updated", notifier.handle_pet_updated)
        bus.emit(GameEvent(event_type="pet_updated", data={"pet_id": "abc"}, source="pet_service"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._handlers_lock = threading.Lock()
        self._chain = _ChainState()

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 등록"""
        with self._handlers_lock:
            self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 해제"""
        with self._handlers_lock:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")
                return
        logger.debug(f"EventBus 구독 해제: {event_type} → {handler.__qualname__}")

    def emit(self, event: GameEvent) -> None:
        """이벤트 발행. 등록된 핸들러를 동기 호출.

        안전장치:
        1. 전파 깊이 MAX_DEPTH 초과 시 무시
        2. 같은 체인에서 동일 chain_key 중복 발행 시 무시
        핸들러 예외는 로그만 남기고 발행자에게 전파하지 않는다.
        """
        chain = self._chain
        if chain.depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} 무시됨"
            )
            return

        key = event.chain_key
        if key in chain.emitted:
            logger.warning(f"EventBus 중복 이벤트 차단: {key}")
            return

        chain.emitted.add(key)
        event._depth = chain.depth

        with self._handlers_lock:
            handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            logger.debug(f"EventBus: {event.event_type} 구독자 없음")
            return

        logger.debug(
            f"EventBus 전파: {event.event_type} (source={event.source}, "
            f"depth={chain.depth}, handlers={len(handlers)})"
        )

        chain.depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            chain.depth -= 1

    def emit_root(self, event: GameEvent) -> None:
        """요청/틱 진입점에서 발행. 핸들러 밖이면 이전 체인 추적을 지우고 시작."""
        if self._chain.depth == 0:
            self._chain.emitted.clear()
        self.emit(event)

    def reset_chain(self) -> None:
        """요청/틱 종료 시 호출. 현재 스레드의 중복 추적 초기화."""
        self._chain.emitted.clear()
        self._chain.depth = 0

    def clear(self) -> None:
        """모든 구독 해제 (테스트용)"""
        with self._handlers_lock:
            self._handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        """등록된 총 핸들러 수"""
        return sum(len(h) for h in self._handlers.values())
