"""WebSocket push — 소유자에게 펫 상태 갱신 전달

계산은 하지 않는다. OwnerNotifier가 넘겨준 payload를 그대로 보낸다.
"""

import asyncio
from contextlib import suppress

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool

from mypet.config import settings
from mypet.core.logging import get_logger
from mypet.services.notifier import OwnerNotifier
from mypet.services.pet_service import PetService

logger = get_logger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def pet_updates(websocket: WebSocket) -> None:
    """접속 시 현재 펫 상태를 보내고, 이후 갱신을 push."""
    owner_id = websocket.cookies.get(settings.OWNER_COOKIE_NAME) or websocket.query_params.get(
        "owner_id"
    )
    if not owner_id:
        await websocket.close(code=1008)
        return

    notifier: OwnerNotifier = websocket.app.state.notifier
    pet_service: PetService = websocket.app.state.pet_service

    await websocket.accept()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    # tick/요청 스레드에서 호출되므로 이벤트 루프로 넘긴다
    def _enqueue(message: dict) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, message)

    token = notifier.register(owner_id, _enqueue)

    async def _pump() -> None:
        while True:
            message = await queue.get()
            await websocket.send_json(message)

    pump = asyncio.create_task(_pump())
    try:
        pets = await run_in_threadpool(pet_service.list_pets, owner_id)
        for pet in pets:
            await queue.put({"event": "pet-update", "pet": pet.to_dict()})
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("WebSocket closed for owner %s", owner_id)
    finally:
        notifier.unregister(owner_id, token)
        pump.cancel()
        # 끊긴 소켓에 보내다 죽은 경우 포함
        with suppress(asyncio.CancelledError, WebSocketDisconnect, RuntimeError):
            await pump
