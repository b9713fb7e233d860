"""
원장 조회 뷰

검색, 표시 정렬, 페이지 분할, 합계/유형별 통계.
모두 계산이 끝난 원장을 읽기만 하며 잔고를 다시 계산하지 않음.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from core.domain.movement import Movement
from core.ledger.entry_builder import LedgerEntry
from core.types import SortOrder


@dataclass(frozen=True)
class LedgerSummary:
    """원장 합계"""

    total_entries: int
    total_quantity_in: int
    total_quantity_out: int
    opening_stock: int
    closing_stock: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_entries": self.total_entries,
            "total_quantity_in": self.total_quantity_in,
            "total_quantity_out": self.total_quantity_out,
            "opening_stock": self.opening_stock,
            "closing_stock": self.closing_stock,
        }


@dataclass(frozen=True)
class MovementStats:
    """이동 유형별 통계"""

    movement_type: str
    count: int
    unique_tires: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "movement_type": self.movement_type,
            "count": self.count,
            "unique_tires": self.unique_tires,
        }


# 표시 정렬 키 (화면 컬럼 → 정렬 값)
SORT_KEYS: dict[str, Callable[[LedgerEntry], Any]] = {
    "date": lambda e: e.date,
    "user_name": lambda e: e.user_name.lower(),
    "type": lambda e: e.type.lower(),
    "reference": lambda e: e.reference.lower(),
    "document_no": lambda e: e.document_no,
    "quantity_in": lambda e: e.quantity_in,
    "quantity_out": lambda e: e.quantity_out,
    "closing_stock": lambda e: e.closing_stock,
}


def summarize(entries: Sequence[LedgerEntry]) -> LedgerSummary:
    """원장 합계 계산

    Args:
        entries: 시간순 원장 (StockLedgerBuilder.build 결과 그대로)

    Returns:
        LedgerSummary (빈 원장이면 모두 0)
    """
    if not entries:
        return LedgerSummary(
            total_entries=0,
            total_quantity_in=0,
            total_quantity_out=0,
            opening_stock=0,
            closing_stock=0,
        )

    return LedgerSummary(
        total_entries=len(entries),
        total_quantity_in=sum(e.quantity_in for e in entries),
        total_quantity_out=sum(e.quantity_out for e in entries),
        opening_stock=entries[0].opening_stock,
        closing_stock=entries[-1].closing_stock,
    )


def movement_stats(movements: Sequence[Movement]) -> list[MovementStats]:
    """이동 유형별 건수 및 고유 타이어 수

    count 내림차순, 동률이면 유형 이름순.
    """
    counts: dict[str, int] = {}
    tires: dict[str, set[Any]] = {}

    for movement in movements:
        counts[movement.movement_type] = counts.get(movement.movement_type, 0) + 1
        # tire_id가 없으면 시리얼 번호로 식별
        tire_key = movement.tire_id if movement.tire_id is not None else movement.serial_number
        tires.setdefault(movement.movement_type, set()).add(tire_key)

    stats = [
        MovementStats(
            movement_type=movement_type,
            count=count,
            unique_tires=len(tires[movement_type]),
        )
        for movement_type, count in counts.items()
    ]
    return sorted(stats, key=lambda s: (-s.count, s.movement_type))


def matches_search(entry: LedgerEntry, query: str) -> bool:
    """검색어 일치 여부 (대소문자 무시)

    대상: 사용자, 참조, 문서 번호, 유형, 시리얼 번호, 규격
    """
    needle = query.strip().lower()
    if not needle:
        return True

    haystacks = (
        entry.user_name,
        entry.reference,
        entry.document_no,
        entry.type,
        entry.movement.serial_number,
        entry.movement.size,
    )
    return any(needle in value.lower() for value in haystacks)


def filter_entries(entries: Sequence[LedgerEntry], query: str | None) -> list[LedgerEntry]:
    """검색어로 원장 필터링 (순서 유지)"""
    if not query:
        return list(entries)
    return [e for e in entries if matches_search(e, query)]


def sort_entries(
    entries: Sequence[LedgerEntry],
    sort_by: str = "date",
    order: SortOrder = SortOrder.ASC,
) -> list[LedgerEntry]:
    """표시용 정렬 (새 목록 반환, 잔고 값은 그대로)

    Raises:
        ValueError: 지원하지 않는 정렬 컬럼
    """
    key = SORT_KEYS.get(sort_by)
    if key is None:
        raise ValueError(
            f"지원하지 않는 정렬 컬럼: '{sort_by}'. 유효한 값: {list(SORT_KEYS)}"
        )
    return sorted(entries, key=key, reverse=(order == SortOrder.DESC))


def paginate(
    entries: Sequence[LedgerEntry],
    page: int,
    limit: int,
) -> tuple[list[LedgerEntry], int]:
    """페이지 분할 (원장 계산 이후에만 적용)

    Args:
        page: 1부터 시작
        limit: 페이지 크기

    Returns:
        (해당 페이지 항목, 전체 페이지 수)
    """
    if limit <= 0:
        raise ValueError("limit은 1 이상이어야 합니다")

    total_pages = max(1, -(-len(entries) // limit))
    start = (max(page, 1) - 1) * limit
    return list(entries[start:start + limit]), total_pages
