"""
재고 원장 API 라우트

Movement 조회 후 원장을 매 요청 처음부터 계산.
검색/정렬/페이지는 계산된 원장에만 적용.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, Response

from adapters.interfaces import MovementSourceError
from adapters.models import MovementQuery
from core.config.loader import Settings
from core.types import SortOrder
from web.dependencies import get_app_settings, get_ledger_service
from web.models.responses import LedgerResponse, LedgerSummaryDetailResponse
from web.services.export_service import csv_filename, export_csv, render_report
from web.services.ledger_service import LedgerResult, LedgerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ledger", tags=["Ledger"])


def _build_query(
    start_date: date | None,
    end_date: date | None,
    tire_id: int | None,
    size: str | None,
) -> MovementQuery:
    """조회 조건 생성 (기간 역전 시 400)"""
    try:
        return MovementQuery(
            start_date=start_date,
            end_date=end_date,
            tire_id=tire_id,
            size=size or None,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


async def _reconcile(service: LedgerService, query: MovementQuery) -> LedgerResult:
    """원장 계산 (조회 실패 시 502, 원장 없음)"""
    try:
        return await service.reconcile(query)
    except MovementSourceError as e:
        raise HTTPException(
            status_code=502,
            detail=f"Movement 조회 실패: {e.message}",
        ) from e


@router.get("", response_model=LedgerResponse)
async def get_ledger(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    tire_id: int | None = Query(default=None, alias="tire"),
    size: str | None = Query(default=None),
    q: str | None = Query(default=None, description="검색어"),
    sort_by: str = Query(default="date"),
    order: SortOrder = Query(default=SortOrder.ASC),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
    service: LedgerService = Depends(get_ledger_service),
):
    """재고 원장 조회"""
    query = _build_query(start_date, end_date, tire_id, size)
    result = await _reconcile(service, query)

    try:
        return service.view(result, q, sort_by, order, page, limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/summary", response_model=LedgerSummaryDetailResponse)
async def get_ledger_summary(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    tire_id: int | None = Query(default=None, alias="tire"),
    size: str | None = Query(default=None),
    service: LedgerService = Depends(get_ledger_service),
):
    """원장 합계 및 이동 유형별 통계"""
    query = _build_query(start_date, end_date, tire_id, size)
    result = await _reconcile(service, query)

    return {
        "summary": result.summary.to_dict(),
        "stats": [s.to_dict() for s in result.stats],
        "skipped_records": result.skipped_records,
    }


@router.get("/export.csv")
async def export_ledger_csv(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    tire_id: int | None = Query(default=None, alias="tire"),
    size: str | None = Query(default=None),
    service: LedgerService = Depends(get_ledger_service),
    settings: Settings = Depends(get_app_settings),
):
    """원장 CSV 다운로드 (UTF-8 BOM)"""
    query = _build_query(start_date, end_date, tire_id, size)
    result = await _reconcile(service, query)

    content = export_csv(result.entries, settings.presentation)
    filename = csv_filename(query)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/report", response_class=HTMLResponse)
async def get_ledger_report(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    tire_id: int | None = Query(default=None, alias="tire"),
    size: str | None = Query(default=None),
    service: LedgerService = Depends(get_ledger_service),
    settings: Settings = Depends(get_app_settings),
):
    """인쇄용 원장 리포트 (HTML)"""
    query = _build_query(start_date, end_date, tire_id, size)
    result = await _reconcile(service, query)

    html = render_report(
        result.entries,
        settings.presentation,
        query,
        summary=result.summary,
    )
    return HTMLResponse(content=html)
