"""
Mock Movement 원천

테스트용 메모리 내 Movement 원천.
IMovementSource Protocol 준수.
"""

from dataclasses import dataclass, field
from typing import Any

from adapters.interfaces import MovementSourceError
from adapters.models import MovementBatch, MovementQuery
from core.domain.movement import parse_movements


@dataclass
class MockSourceState:
    """Mock 상태 (메모리 내 저장)"""

    # Movement API 원본 레코드
    records: list[dict[str, Any]] = field(default_factory=list)

    # 시뮬레이션 옵션
    should_fail_next_fetch: bool = False
    next_error_status: int | None = 503
    next_error_message: str = "Mock error"

    # 호출 기록
    queries: list[MovementQuery] = field(default_factory=list)
    closed: bool = False


class MockMovementSource:
    """Mock Movement 원천

    IMovementSource Protocol 구현.
    tire_id / size / 기간 필터를 메모리 내에서 적용.

    사용 예시:
    ```python
    source = MockMovementSource([{"id": 1, "movement_type": "PURCHASE_TO_STORE", ...}])
    batch = await source.fetch_movements(MovementQuery())
    ```
    """

    def __init__(self, records: list[dict[str, Any]] | None = None):
        self.state = MockSourceState(records=list(records or []))

    def add_record(self, record: dict[str, Any]) -> None:
        """레코드 추가"""
        self.state.records.append(record)

    def fail_next_fetch(self, message: str = "Mock error", status_code: int | None = 503) -> None:
        """다음 조회를 실패시킴"""
        self.state.should_fail_next_fetch = True
        self.state.next_error_message = message
        self.state.next_error_status = status_code

    async def fetch_movements(self, query: MovementQuery) -> MovementBatch:
        """Movement 조회 (메모리 내 필터)"""
        self.state.queries.append(query)

        if self.state.should_fail_next_fetch:
            self.state.should_fail_next_fetch = False
            raise MovementSourceError(
                self.state.next_error_message,
                status_code=self.state.next_error_status,
            )

        movements, skipped = parse_movements(self.state.records)

        if query.tire_id is not None:
            movements = [m for m in movements if m.tire_id == query.tire_id]
        elif query.size:
            movements = [m for m in movements if m.size == query.size]

        if query.start_date is not None:
            movements = [m for m in movements if m.movement_date.date() >= query.start_date]
        if query.end_date is not None:
            movements = [m for m in movements if m.movement_date.date() <= query.end_date]

        return MovementBatch(movements=movements, skipped_records=skipped, pages_fetched=1)

    async def close(self) -> None:
        """리소스 정리"""
        self.state.closed = True
