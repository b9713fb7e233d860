"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.responses import (
    HealthResponse,
    LedgerEntryResponse,
    LedgerResponse,
    LedgerSummaryDetailResponse,
    LedgerSummaryResponse,
    MovementResponse,
    MovementStatsResponse,
)

__all__ = [
    "HealthResponse",
    "LedgerEntryResponse",
    "LedgerResponse",
    "LedgerSummaryDetailResponse",
    "LedgerSummaryResponse",
    "MovementResponse",
    "MovementStatsResponse",
]
