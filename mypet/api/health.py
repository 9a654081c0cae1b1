"""Health check — DB 연결, tick 스케줄러, 카탈로그 상태"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mypet.core.logging import get_logger
from mypet.db.database import get_db

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)) -> dict[str, Any]:
    """DB가 응답하면 ok. 스케줄러가 멈춰 있어도 서비스는 가능하므로 상태만 보고."""
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning("Health check: database unreachable (%s)", e)
        database = "disconnected"

    state = request.app.state
    scheduler = getattr(state, "tick_scheduler", None)
    catalog = getattr(state, "catalog", None)
    return {
        "status": "ok" if database == "connected" else "error",
        "database": database,
        "scheduler": "running" if scheduler is not None and scheduler.running else "stopped",
        "shop_items": catalog.count() if catalog is not None else 0,
    }
