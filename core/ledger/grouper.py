"""
시간순 정렬 및 거래 그룹핑

정렬 → 그룹핑은 잔고 누적 전 반드시 수행되어야 함.
(running balance는 시간 인과 순서에 의존)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from core.domain.movement import Movement
from core.ledger.types import GroupingStrictness


@dataclass(frozen=True)
class GroupKey:
    """거래 그룹 키 (일시, 참조, 이동 유형)"""

    movement_date: datetime
    reference: str | None
    movement_type: str


@dataclass(frozen=True)
class TransactionGroup:
    """거래 그룹

    같은 키를 가진 Movement 1개 이상. 원장 1줄에 대응.
    예: 일괄 구매 N개, 위치 교체로 생긴 2개의 이동
    """

    key: GroupKey
    movements: tuple[Movement, ...]

    @property
    def representative(self) -> Movement:
        """대표 Movement (첫 번째 멤버)"""
        return self.movements[0]

    def __len__(self) -> int:
        return len(self.movements)


def sort_movements(movements: Iterable[Movement]) -> list[Movement]:
    """movement_date 오름차순 정렬

    sorted()는 안정 정렬이므로 동일 일시는 원본 순서 유지.
    """
    return sorted(movements, key=lambda m: m.movement_date)


def group_key(
    movement: Movement,
    strictness: GroupingStrictness = GroupingStrictness.LENIENT,
) -> GroupKey:
    """Movement의 그룹 키 생성

    reference_number 우선, 없으면:
    - LENIENT: reference_type
    - STRICT: movement id (다른 Movement와 병합 불가)
    """
    if movement.reference_number:
        reference: str | None = movement.reference_number
    elif strictness == GroupingStrictness.STRICT:
        reference = f"movement:{movement.id}"
    else:
        reference = movement.reference_type

    return GroupKey(
        movement_date=movement.movement_date,
        reference=reference,
        movement_type=movement.movement_type,
    )


def group_movements(
    sorted_movements: Iterable[Movement],
    strictness: GroupingStrictness = GroupingStrictness.LENIENT,
) -> list[TransactionGroup]:
    """정렬된 Movement를 거래 그룹으로 병합

    그룹 순서는 정렬된 시퀀스에서 첫 등장 순서.
    키에 일시가 포함되므로 그룹은 항상 시간순.

    Args:
        sorted_movements: sort_movements() 결과
        strictness: 그룹핑 엄격도

    Returns:
        TransactionGroup 목록
    """
    buckets: dict[GroupKey, list[Movement]] = {}
    for movement in sorted_movements:
        buckets.setdefault(group_key(movement, strictness), []).append(movement)

    return [
        TransactionGroup(key=key, movements=tuple(members))
        for key, members in buckets.items()
    ]
