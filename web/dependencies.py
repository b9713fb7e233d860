"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from typing import AsyncGenerator

from fastapi import Depends

from adapters.interfaces import IMovementSource
from adapters.movements.rest_client import MovementRestClient
from core.config.loader import Settings, get_settings
from web.services.ledger_service import LedgerService


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_movement_source(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[IMovementSource, None]:
    """Movement 원천 반환 (요청 단위)

    요청마다 새로 조회하므로 클라이언트도 요청 종료 시 닫음.
    """
    config = settings.movement_source
    client = MovementRestClient(
        base_url=config.base_url,
        timeout=config.timeout,
        page_size=config.page_size,
        max_pages=config.max_pages,
        max_retries=config.max_retries,
    )
    try:
        yield client
    finally:
        await client.close()


def get_ledger_service(
    source: IMovementSource = Depends(get_movement_source),
    settings: Settings = Depends(get_app_settings),
) -> LedgerService:
    """원장 서비스 반환"""
    return LedgerService(source, settings.ledger)
