"""
원장 생성기

Movement 목록을 재고 원장 항목(LedgerEntry)으로 변환.
정렬 → 그룹핑 → 분류/가격 → 잔고 누적(reduce) 순서로 처리.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from functools import reduce
from typing import Any, Iterable

from core.constants import Defaults
from core.domain.movement import Movement
from core.ledger.classifier import classify, effect_of, resolve_price, rule_for
from core.ledger.grouper import (
    TransactionGroup,
    group_movements,
    sort_movements,
)
from core.ledger.types import GroupingStrictness

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerEntry:
    """재고 원장 항목

    거래 그룹 1개에 대한 기초/기말 재고 기록 (생성 후 불변).
    closing_stock = opening_stock + quantity_in - quantity_out
    """

    id: int
    date: datetime
    user_name: str
    location: str
    opening_stock: int
    quantity_in: int
    quantity_out: int
    closing_stock: int
    price: Decimal | None
    reference: str
    document_no: str
    type: str
    movement: Movement
    movement_count: int = 1

    def is_balanced(self) -> bool:
        """잔고 산식 검증"""
        return self.closing_stock == self.opening_stock + self.quantity_in - self.quantity_out

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용 dict 변환"""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "user_name": self.user_name,
            "location": self.location,
            "opening_stock": self.opening_stock,
            "quantity_in": self.quantity_in,
            "quantity_out": self.quantity_out,
            "closing_stock": self.closing_stock,
            "price": str(self.price) if self.price is not None else None,
            "reference": self.reference,
            "document_no": self.document_no,
            "type": self.type,
            "movement_count": self.movement_count,
            "movement": self.movement.to_dict(),
        }


@dataclass(frozen=True)
class LedgerAccumulator:
    """reduce 누적 상태 (현재 재고 + 생성된 항목)

    항목은 역방향 연결 리스트로 보관 (last → previous).
    append는 새 노드 1개 생성이라 O(1), 기존 상태는 그대로 유지됨.
    """

    running_stock: int = 0
    last: LedgerEntry | None = None
    previous: LedgerAccumulator | None = field(default=None, repr=False, compare=False)

    def append(self, entry: LedgerEntry) -> LedgerAccumulator:
        """entry를 추가한 새 상태 (running_stock = entry.closing_stock)"""
        return LedgerAccumulator(
            running_stock=entry.closing_stock,
            last=entry,
            previous=self,
        )

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        """생성 순서대로 정렬된 항목"""
        collected: list[LedgerEntry] = []
        node: LedgerAccumulator | None = self
        while node is not None and node.last is not None:
            collected.append(node.last)
            node = node.previous
        collected.reverse()
        return tuple(collected)


class StockLedgerBuilder:
    """Movement → 재고 원장 변환기

    외부 상태 없음. 같은 입력이면 항상 같은 결과.

    Args:
        location: 원장 항목의 보관 위치 (기본: MAIN_WAREHOUSE)
        strictness: 거래 그룹핑 엄격도

    사용 예시:
    ```python
    builder = StockLedgerBuilder()
    entries = builder.build(movements)
    ```
    """

    def __init__(
        self,
        location: str = Defaults.LOCATION,
        strictness: GroupingStrictness = GroupingStrictness.LENIENT,
    ):
        self.location = location
        self.strictness = strictness

    def build(self, movements: Iterable[Movement]) -> list[LedgerEntry]:
        """원장 생성

        Args:
            movements: 정렬되지 않은 Movement 목록

        Returns:
            시간순 LedgerEntry 목록 (빈 입력이면 빈 목록)
        """
        groups = group_movements(sort_movements(movements), self.strictness)
        if not groups:
            return []

        self._warn_unknown_types(groups)

        result = reduce(self._apply_group, groups, LedgerAccumulator())
        return list(result.entries)

    def _apply_group(
        self,
        acc: LedgerAccumulator,
        group: TransactionGroup,
    ) -> LedgerAccumulator:
        """그룹 1개를 누적 상태에 반영"""
        return acc.append(self._to_entry(group, acc.running_stock))

    def _to_entry(self, group: TransactionGroup, opening_stock: int) -> LedgerEntry:
        """거래 그룹 → LedgerEntry"""
        quantity_in = 0
        quantity_out = 0
        for movement in group.movements:
            effect = effect_of(movement)
            quantity_in += effect.quantity_in
            quantity_out += effect.quantity_out

        closing_stock = opening_stock + quantity_in - quantity_out

        first = group.representative
        classification = classify(first)

        return LedgerEntry(
            id=first.id,
            date=first.movement_date,
            user_name=first.display_user,
            location=self.location,
            opening_stock=opening_stock,
            quantity_in=quantity_in,
            quantity_out=quantity_out,
            closing_stock=closing_stock,
            price=resolve_price(first),
            reference=classification.reference,
            document_no=classification.document_no,
            type=classification.label,
            movement=first,
            movement_count=len(group),
        )

    @staticmethod
    def _warn_unknown_types(groups: list[TransactionGroup]) -> None:
        """알 수 없는 이동 유형 경고 (유형별 1회)

        재고 효과 0으로 통과되므로 원장에는 라벨로 표시됨.
        """
        unknown: dict[str, int] = {}
        for group in groups:
            for movement in group.movements:
                if rule_for(movement.movement_type) is None:
                    unknown[movement.movement_type] = unknown.get(movement.movement_type, 0) + 1

        for movement_type, count in unknown.items():
            logger.warning(
                f"[Ledger] 알 수 없는 이동 유형: {movement_type}. "
                f"재고 효과 없이 통과 ({count}건)"
            )


def build_stock_ledger(
    movements: Iterable[Movement],
    location: str = Defaults.LOCATION,
    strictness: GroupingStrictness = GroupingStrictness.LENIENT,
) -> list[LedgerEntry]:
    """원장 생성 헬퍼

    StockLedgerBuilder(location, strictness).build(movements)의 축약형.
    """
    return StockLedgerBuilder(location=location, strictness=strictness).build(movements)
