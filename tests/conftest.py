"""Shared test fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mypet.api.errors import register_error_handlers
from mypet.api.health import router as health_router
from mypet.api.inventory import router as inventory_router
from mypet.api.pets import router as pets_router
from mypet.api.shop import router as shop_router
from mypet.api.ws import router as ws_router
from mypet.core.event_bus import EventBus
from mypet.core.locks import PetLockRegistry
from mypet.core.pet.models import Pet, PetKind
from mypet.core.shop.catalog import ShopCatalog, load_default_catalog
from mypet.db.database import build_engine, get_db
from mypet.db.models import Base
from mypet.main import init_services
from mypet.services.notifier import OwnerNotifier
from mypet.services.pet_service import PetService
from mypet.services.shop_service import ShopService
from mypet.services.tick_scheduler import TickScheduler


def make_pet(**overrides) -> Pet:
    """테스트용 펫. 바이탈 기본값 50."""
    values = {
        "name": "TestPet",
        "kind": PetKind.DOG,
        "owner_id": "owner-1",
        "id": "pet-1",
        "age": 0,
        "health": 50,
        "hunger": 50,
        "happiness": 50,
        "energy": 50,
        "cleanliness": 50,
        "coins": 0,
    }
    values.update(overrides)
    return Pet(**values)


@pytest.fixture()
def session_factory() -> sessionmaker[Session]:
    """인메모리 SQLite (FK 활성) + 테이블 생성"""
    engine = build_engine("sqlite:///:memory:", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture()
def file_session_factory(tmp_path) -> sessionmaker[Session]:
    """파일 SQLite. 스레드마다 별도 커넥션이 필요한 동시성 테스트용"""
    engine = build_engine(f"sqlite:///{tmp_path / 'mypet.db'}")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def locks() -> PetLockRegistry:
    return PetLockRegistry()


@pytest.fixture()
def catalog() -> ShopCatalog:
    return load_default_catalog()


@pytest.fixture()
def pet_service(session_factory, bus, locks) -> PetService:
    return PetService(session_factory, bus, locks)


@pytest.fixture()
def shop_service(session_factory, bus, catalog, locks) -> ShopService:
    return ShopService(session_factory, bus, catalog, locks)


@pytest.fixture()
def scheduler(session_factory, bus, locks) -> TickScheduler:
    return TickScheduler(session_factory, bus, locks, interval_seconds=0.01)


@pytest.fixture()
def notifier(bus) -> OwnerNotifier:
    return OwnerNotifier(bus)


@pytest.fixture()
def app(session_factory) -> FastAPI:
    """lifespan 없이 라우터 + 서비스만 조립"""
    application = FastAPI()
    register_error_handlers(application)
    application.include_router(health_router)
    application.include_router(pets_router)
    application.include_router(shop_router)
    application.include_router(inventory_router)
    application.include_router(ws_router)
    init_services(application, session_factory=session_factory)

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = _override_get_db
    return application


@pytest.fixture()
def client(app) -> TestClient:
    """FastAPI TestClient, owner_id 쿠키 고정"""
    tc = TestClient(app)
    tc.cookies.set("owner_id", "owner-1")
    return tc


@pytest.fixture()
def pet_factory():
    return make_pet
