"""라우터 공용 의존성"""

import uuid

from fastapi import Request, Response

from mypet.config import settings
from mypet.services.pet_service import PetService
from mypet.services.shop_service import ShopService


def get_owner_id(request: Request, response: Response) -> str:
    """쿠키의 owner_id. 없으면 새로 발급해 쿠키로 내려준다."""
    owner_id = request.cookies.get(settings.OWNER_COOKIE_NAME)
    if owner_id:
        return owner_id

    owner_id = str(uuid.uuid4())
    response.set_cookie(
        settings.OWNER_COOKIE_NAME,
        owner_id,
        httponly=True,
        max_age=settings.OWNER_COOKIE_MAX_AGE,
    )
    return owner_id


def get_pet_service(request: Request) -> PetService:
    """PetService 인스턴스 반환 (의존성 주입)"""
    service: PetService = request.app.state.pet_service
    return service


def get_shop_service(request: Request) -> ShopService:
    """ShopService 인스턴스 반환 (의존성 주입)"""
    service: ShopService = request.app.state.shop_service
    return service
