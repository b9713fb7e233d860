"""
재고 원장 서비스

Movement 조회 → 원장 계산 → 조회 뷰(검색/정렬/페이지) 구성.
원장은 요청마다 처음부터 다시 계산 (캐시/저장 없음).
"""

import logging
from dataclasses import dataclass
from typing import Any

from adapters.interfaces import IMovementSource, MovementSourceError
from adapters.models import MovementQuery
from core.config.loader import LedgerConfig
from core.ledger import (
    LedgerEntry,
    LedgerSummary,
    MovementStats,
    StockLedgerBuilder,
    filter_entries,
    movement_stats,
    paginate,
    sort_entries,
    summarize,
)
from core.types import SortOrder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerResult:
    """원장 계산 결과 (요청 기간 전체, 시간순)"""

    query: MovementQuery
    entries: list[LedgerEntry]
    summary: LedgerSummary
    stats: list[MovementStats]
    skipped_records: int = 0


class LedgerService:
    """재고 원장 서비스

    Args:
        source: Movement 원천
        ledger_config: 원장 설정 (위치, 그룹핑 엄격도)
    """

    def __init__(self, source: IMovementSource, ledger_config: LedgerConfig):
        self.source = source
        self.builder = StockLedgerBuilder(
            location=ledger_config.location,
            strictness=ledger_config.grouping_strictness,
        )

    async def reconcile(self, query: MovementQuery) -> LedgerResult:
        """요청 기간 원장 계산

        조회가 실패하면 계산하지 않고 예외를 그대로 전달
        (이전 결과와 섞인 부분 원장을 만들지 않음).

        Args:
            query: 조회 조건

        Returns:
            LedgerResult

        Raises:
            MovementSourceError: Movement 조회 실패
        """
        try:
            batch = await self.source.fetch_movements(query)
        except MovementSourceError as e:
            logger.error(
                f"Movement 조회 실패, 원장 계산 중단: {e}",
                extra={"status_code": e.status_code},
            )
            raise

        entries = self.builder.build(batch.movements)
        summary = summarize(entries)

        if batch.skipped_records:
            logger.warning(
                f"잘못된 Movement 레코드 {batch.skipped_records}건 제외 후 원장 계산"
            )

        logger.info(
            "원장 계산 완료",
            extra={
                "movements": len(batch.movements),
                "entries": summary.total_entries,
                "closing_stock": summary.closing_stock,
            },
        )

        return LedgerResult(
            query=query,
            entries=entries,
            summary=summary,
            stats=movement_stats(batch.movements),
            skipped_records=batch.skipped_records,
        )

    @staticmethod
    def view(
        result: LedgerResult,
        search: str | None = None,
        sort_by: str = "date",
        order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 50,
    ) -> dict[str, Any]:
        """표시용 조회 뷰

        검색/정렬/페이지는 계산이 끝난 원장에만 적용 (잔고 불변).

        Raises:
            ValueError: 지원하지 않는 정렬 컬럼
        """
        visible = filter_entries(result.entries, search)
        visible = sort_entries(visible, sort_by, order)
        page_entries, total_pages = paginate(visible, page, limit)

        return {
            "entries": [e.to_dict() for e in page_entries],
            "summary": result.summary.to_dict(),
            "stats": [s.to_dict() for s in result.stats],
            "total_entries": len(visible),
            "page": page,
            "limit": limit,
            "total_pages": total_pages,
            "skipped_records": result.skipped_records,
        }
