"""Tick Scheduler — 주기적으로 모든 펫에 감쇠 적용

체력/접속 여부와 무관하게 저장된 모든 펫을 처리한다.
펫마다 락 + 세션을 따로 잡으므로 한 펫의 실패가 나머지를 막지 않는다.
"""

import asyncio
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session, sessionmaker

from mypet.core.event_bus import EventBus, GameEvent
from mypet.core.event_types import EventTypes
from mypet.core.locks import PetLockRegistry
from mypet.core.logging import get_logger
from mypet.core.pet.models import Pet
from mypet.db.mapping import _model_to_pet, _sync_pet_to_model, find_pet_row
from mypet.db.models import PetModel

logger = get_logger(__name__)


@dataclass
class TickReport:
    """한 번의 tick 결과"""

    processed: int = 0
    failed: int = 0
    failed_pet_ids: list[str] = field(default_factory=list)


class TickScheduler:
    """고정 주기 감쇠 드라이버"""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        event_bus: EventBus,
        locks: PetLockRegistry,
        interval_seconds: float = 30.0,
    ):
        self._session_factory = session_factory
        self._bus = event_bus
        self._locks = locks
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    # === 1회 실행 ===

    def run_tick(self) -> TickReport:
        """모든 펫에 tick() 적용. 펫 단위로 실패 격리."""
        report = TickReport()
        for pet_id in self._all_pet_ids():
            try:
                pet = self._tick_one(pet_id)
            except Exception:
                logger.exception("Tick failed for pet %s", pet_id)
                report.failed += 1
                report.failed_pet_ids.append(pet_id)
                continue
            if pet is None:
                # 목록 조회 이후 삭제됨
                continue
            report.processed += 1
            self._notify(pet)

        logger.debug("Tick done: processed=%d, failed=%d", report.processed, report.failed)
        self._bus.emit_root(
            GameEvent(
                event_type=EventTypes.TICK_COMPLETED,
                data={"processed": report.processed, "failed": report.failed},
                source="tick_scheduler",
            )
        )
        return report

    def _all_pet_ids(self) -> list[str]:
        with self._session_factory() as db:
            return [pid for (pid,) in db.query(PetModel.pet_id).all()]

    def _tick_one(self, pet_id: str) -> Optional[Pet]:
        with self._locks.hold(pet_id), self._session_factory() as db:
            row = find_pet_row(db, pet_id)
            if row is None:
                return None
            pet = _model_to_pet(row)
            pet.tick()
            _sync_pet_to_model(pet, row)
            db.commit()
            return pet

    def _notify(self, pet: Pet) -> None:
        """소유자 알림은 best-effort. 구독자 에러는 EventBus가 삼킨다."""
        self._bus.emit_root(
            GameEvent(
                event_type=EventTypes.PET_UPDATED,
                data={"pet_id": pet.id, "owner_id": pet.owner_id, "pet": pet.to_dict()},
                source="tick_scheduler",
            )
        )

    # === 백그라운드 루프 ===

    def start(self) -> None:
        """실행 중인 이벤트 루프에 주기 태스크 등록."""
        if self.running:
            logger.warning("Tick scheduler already running")
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info("Tick scheduler started (every %.1fs)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Tick scheduler stopped")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                # DB I/O는 워커 스레드에서
                await run_in_threadpool(self.run_tick)
            except Exception:
                logger.exception("Tick run failed")
