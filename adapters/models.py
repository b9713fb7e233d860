"""
어댑터 공통 모델

Movement 원천 조회 조건 및 결과
"""

from dataclasses import dataclass, field
from datetime import date

from core.domain.movement import Movement


@dataclass(frozen=True)
class MovementQuery:
    """Movement 조회 조건

    tire_id가 있으면 타이어별, size가 있으면 규격별, 둘 다 없으면 전체 조회.
    """

    start_date: date | None = None
    end_date: date | None = None
    tire_id: int | None = None
    size: str | None = None

    def __post_init__(self) -> None:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError(
                f"start_date가 end_date보다 늦습니다: {self.start_date} > {self.end_date}"
            )


@dataclass
class MovementBatch:
    """Movement 조회 결과 (요청 기간 전체)"""

    movements: list[Movement] = field(default_factory=list)
    skipped_records: int = 0
    pages_fetched: int = 0

    @property
    def total_records(self) -> int:
        """원본 레코드 수 (건너뛴 레코드 포함)"""
        return len(self.movements) + self.skipped_records
