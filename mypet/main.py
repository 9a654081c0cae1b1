"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from mypet.api.errors import register_error_handlers
from mypet.api.health import router as health_router
from mypet.api.inventory import router as inventory_router
from mypet.api.pets import router as pets_router
from mypet.api.shop import router as shop_router
from mypet.api.ws import router as ws_router
from mypet.config import settings
from mypet.core.event_bus import EventBus
from mypet.core.locks import PetLockRegistry
from mypet.core.logging import get_logger, setup_logging
from mypet.core.shop.catalog import load_default_catalog
from mypet.db.database import SessionLocal, engine as db_engine
from mypet.db.models import Base
from mypet.services.notifier import OwnerNotifier
from mypet.services.pet_service import PetService
from mypet.services.shop_service import ShopService
from mypet.services.tick_scheduler import TickScheduler

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def init_services(app: FastAPI, session_factory=SessionLocal) -> None:
    """서비스 조립 후 app.state에 등록. 테스트도 이 함수를 쓴다.

    tick과 요청 핸들러가 같은 PetLockRegistry를 공유해야 한다.
    """
    event_bus = EventBus()
    locks = PetLockRegistry()
    catalog = load_default_catalog()

    app.state.event_bus = event_bus
    app.state.locks = locks
    app.state.catalog = catalog
    app.state.notifier = OwnerNotifier(event_bus)
    app.state.pet_service = PetService(
        session_factory,
        event_bus,
        locks,
        max_pets_per_owner=settings.MAX_PETS_PER_OWNER,
        max_game_coins=settings.MAX_GAME_COINS,
    )
    app.state.shop_service = ShopService(
        session_factory,
        event_bus,
        catalog,
        locks,
        history_page_size=settings.HISTORY_PAGE_SIZE,
    )
    app.state.tick_scheduler = TickScheduler(
        session_factory,
        event_bus,
        locks,
        interval_seconds=settings.TICK_INTERVAL_SECONDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    init_services(app)
    logger.info("Services initialized (%d shop items).", app.state.catalog.count())

    scheduler: TickScheduler = app.state.tick_scheduler
    if settings.TICK_ENABLED:
        scheduler.start()

    yield

    logger.info("Shutting down...")
    await scheduler.stop()


def create_app() -> FastAPI:
    app = FastAPI(title="MyPet", lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(pets_router)
    app.include_router(shop_router)
    app.include_router(inventory_router)
    app.include_router(ws_router)
    return app


app = create_app()
