"""MockMovementSource 테스트"""

from datetime import date

import pytest

from adapters.interfaces import MovementSourceError
from adapters.mock.movement_source import MockMovementSource
from adapters.models import MovementQuery


@pytest.fixture
def source(sample_records) -> MockMovementSource:
    return MockMovementSource(sample_records)


class TestMockMovementSource:
    """메모리 내 조회 테스트"""

    @pytest.mark.asyncio
    async def test_fetch_all(self, source) -> None:
        """조건 없으면 전체"""
        batch = await source.fetch_movements(MovementQuery())

        assert len(batch.movements) == 6
        assert batch.pages_fetched == 1

    @pytest.mark.asyncio
    async def test_filter_by_tire(self, source) -> None:
        """tire_id 필터"""
        batch = await source.fetch_movements(MovementQuery(tire_id=4))

        assert [m.id for m in batch.movements] == [4]

    @pytest.mark.asyncio
    async def test_filter_by_size(self, source, record_factory) -> None:
        """size 필터"""
        source.add_record(record_factory("PURCHASE_TO_STORE", "2026-03-02T09:00:00Z", id=50, size="11R22.5"))

        batch = await source.fetch_movements(MovementQuery(size="11R22.5"))

        assert [m.id for m in batch.movements] == [50]

    @pytest.mark.asyncio
    async def test_filter_by_date_range(self, source) -> None:
        """기간 필터 (양 끝 포함)"""
        query = MovementQuery(start_date=date(2026, 3, 5), end_date=date(2026, 3, 20))

        batch = await source.fetch_movements(query)

        assert sorted(m.id for m in batch.movements) == [1, 4, 5]

    @pytest.mark.asyncio
    async def test_records_queries(self, source) -> None:
        """호출 기록"""
        query = MovementQuery(tire_id=1)

        await source.fetch_movements(query)

        assert source.state.queries == [query]

    @pytest.mark.asyncio
    async def test_fail_next_fetch_once(self, source) -> None:
        """다음 조회 1회만 실패"""
        source.fail_next_fetch("backend down", status_code=503)

        with pytest.raises(MovementSourceError) as exc_info:
            await source.fetch_movements(MovementQuery())
        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "backend down"

        batch = await source.fetch_movements(MovementQuery())
        assert len(batch.movements) == 6

    @pytest.mark.asyncio
    async def test_skipped_records_counted(self) -> None:
        """잘못된 레코드 개수 보고"""
        source = MockMovementSource([{"id": 1}])

        batch = await source.fetch_movements(MovementQuery())

        assert batch.movements == []
        assert batch.skipped_records == 1

    @pytest.mark.asyncio
    async def test_close(self, source) -> None:
        await source.close()

        assert source.state.closed is True
