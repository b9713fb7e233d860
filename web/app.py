"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config.loader import get_settings
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import health, ledger
from web.routes.health import API_VERSION

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    원장은 저장하지 않으므로 초기화할 리소스 없음. 설정만 검증.
    """
    settings = get_settings()
    logger.info(
        "Web 시작",
        extra={
            "movement_source": settings.movement_source.base_url,
            "grouping_strictness": settings.ledger.grouping_strictness.value,
        },
    )
    yield
    logger.info("Web 종료")


app = FastAPI(
    title="Tire Stock Ledger API",
    description="타이어 재고 이동 → 재고 원장 변환 API",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (대시보드 프론트엔드용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(ledger.router)
