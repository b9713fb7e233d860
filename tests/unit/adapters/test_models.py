"""
어댑터 공통 모델 테스트
"""

from datetime import date

import pytest

from adapters.models import MovementBatch, MovementQuery


class TestMovementQuery:
    """MovementQuery 테스트"""

    def test_defaults(self) -> None:
        """기본값은 전체 조회"""
        query = MovementQuery()

        assert query.start_date is None
        assert query.end_date is None
        assert query.tire_id is None
        assert query.size is None

    def test_same_day_range(self) -> None:
        """시작일 = 종료일 허용"""
        query = MovementQuery(start_date=date(2026, 3, 1), end_date=date(2026, 3, 1))

        assert query.start_date == query.end_date

    def test_inverted_range(self) -> None:
        """시작일이 종료일보다 늦으면 ValueError"""
        with pytest.raises(ValueError, match="start_date"):
            MovementQuery(start_date=date(2026, 3, 31), end_date=date(2026, 3, 1))

    def test_frozen(self) -> None:
        query = MovementQuery()

        with pytest.raises(AttributeError):
            query.tire_id = 3  # type: ignore


class TestMovementBatch:
    """MovementBatch 테스트"""

    def test_total_records(self, movement_factory) -> None:
        """건너뛴 레코드 포함 총 개수"""
        batch = MovementBatch(
            movements=[movement_factory("PURCHASE_TO_STORE", "2026-03-01T09:00:00Z")],
            skipped_records=2,
        )

        assert batch.total_records == 3

    def test_empty(self) -> None:
        assert MovementBatch().total_records == 0
