"""도메인 에러 → HTTP 응답 변환"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mypet.api.schemas import ErrorResponse
from mypet.core.errors import (
    InsufficientFundsError,
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
    PetError,
)
from mypet.core.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_ERROR: dict[type[PetError], int] = {
    NotFoundError: 404,
    InvalidInputError: 400,
    InsufficientFundsError: 400,
    InsufficientStockError: 400,
}


def status_for(exc: PetError) -> int:
    for error_type, status in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status
    return 400


async def pet_error_handler(request: Request, exc: PetError) -> JSONResponse:
    status = status_for(exc)
    logger.info(
        "Declined %s %s: %s (%s)", request.method, request.url.path, exc.code, exc
    )
    body = ErrorResponse(error=exc.code, detail=exc.message)
    return JSONResponse(status_code=status, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PetError, pet_error_handler)
