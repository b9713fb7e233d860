"""재고 원장 생성기 테스트

잔고 산식, 연속성, 수량 보존, 멱등성, 그룹 병합, 가격 격리 검증.
"""

import logging
import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.domain.movement import parse_movements
from core.ledger.classifier import effect_of
from core.ledger.entry_builder import (
    LedgerAccumulator,
    StockLedgerBuilder,
    build_stock_ledger,
)
from core.ledger.grouper import group_movements
from core.ledger.types import GroupingStrictness


@pytest.fixture
def builder() -> StockLedgerBuilder:
    return StockLedgerBuilder()


@pytest.fixture
def sample_movements(sample_records):
    movements, skipped = parse_movements(sample_records)
    assert skipped == 0
    return movements


class TestScenarios:
    """대표 시나리오"""

    def test_purchase_then_installation(self, builder, movement_factory) -> None:
        """구매 후 장착: 0→1→0"""
        movements = [
            movement_factory(
                "PURCHASE_TO_STORE", "2026-03-01T09:00:00Z", purchase_cost=Decimal("500"),
            ),
            movement_factory("STORE_TO_VEHICLE", "2026-03-02T09:00:00Z"),
        ]

        entries = builder.build(movements)

        assert len(entries) == 2
        first, second = entries
        assert (first.opening_stock, first.quantity_in, first.quantity_out, first.closing_stock) == (0, 1, 0, 1)
        assert first.price == Decimal("500")
        assert (second.opening_stock, second.quantity_in, second.quantity_out, second.closing_stock) == (1, 0, 1, 0)
        assert second.price is None

    def test_batch_disposal_merged(self, builder, movement_factory) -> None:
        """같은 일시/참조/유형 폐기 2건 → 원장 1줄, 출고 2"""
        movements = [
            movement_factory("STORE_TO_DISPOSAL", "2026-03-01T09:00:00Z", reference_number="D-7"),
            movement_factory("STORE_TO_DISPOSAL", "2026-03-01T09:00:00Z", reference_number="D-7"),
        ]

        entries = builder.build(movements)

        assert len(entries) == 1
        assert entries[0].quantity_out == 2
        assert entries[0].quantity_in == 0
        assert entries[0].movement_count == 2
        assert entries[0].closing_stock == -2

    def test_unknown_type_passes_through(self, builder, movement_factory) -> None:
        """알 수 없는 유형: 라벨 변환, 수량 0, 잔고 유지"""
        movements = [
            movement_factory("PURCHASE_TO_STORE", "2026-03-01T09:00:00Z"),
            movement_factory("FOO_BAR", "2026-03-02T09:00:00Z"),
        ]

        entries = builder.build(movements)

        unknown = entries[1]
        assert unknown.type == "FOO BAR"
        assert (unknown.quantity_in, unknown.quantity_out) == (0, 0)
        assert unknown.opening_stock == unknown.closing_stock == 1

    def test_empty_input(self, builder) -> None:
        """빈 입력 → 빈 원장"""
        assert builder.build([]) == []


class TestSampleLedger:
    """한 달치 샘플 원장"""

    def test_entries(self, builder, sample_movements) -> None:
        """섞인 입력이 시간순 원장으로 정리됨"""
        entries = builder.build(sample_movements)

        assert [e.document_no for e in entries] == [
            "PUR-2", "INST-1", "RETREAD-SEND-4", "RETREAD-RET-5", "DSP-2026-001",
        ]
        assert [(e.opening_stock, e.closing_stock) for e in entries] == [
            (0, 2), (2, 1), (1, 0), (0, 1), (1, 0),
        ]
        assert entries[0].reference == "Michelin Depot/PO-1001"
        assert entries[0].movement_count == 2
        assert entries[0].price == Decimal("500")
        assert entries[1].reference == "KA-01-1234/FL"
        assert entries[2].price == Decimal("120.50")
        assert entries[2].reference == "Retread Co"
        assert entries[4].reference == "Sidewall damage"

    def test_entry_fields(self, builder, sample_movements) -> None:
        """위치/사용자/대표 Movement"""
        entries = builder.build(sample_movements)

        purchase = entries[0]
        assert purchase.location == "MAIN_WAREHOUSE"
        assert purchase.user_name == "jdoe"
        assert purchase.type == "Purchase"
        assert purchase.id == purchase.movement.id == 2
        assert purchase.date == purchase.movement.movement_date

    def test_custom_location(self, sample_movements) -> None:
        """location 설정 반영"""
        entries = build_stock_ledger(sample_movements, location="DEPOT_A")

        assert {e.location for e in entries} == {"DEPOT_A"}

    def test_user_falls_back_to_system(self, builder, movement_factory) -> None:
        """사용자 이름 없으면 System"""
        movement = movement_factory("PURCHASE_TO_STORE", "2026-03-01T09:00:00Z", user_name=None)

        assert builder.build([movement])[0].user_name == "System"


class TestInvariants:
    """원장 불변 조건"""

    def test_every_entry_balanced(self, builder, sample_movements) -> None:
        """closing = opening + in - out"""
        entries = builder.build(sample_movements)

        assert all(e.is_balanced() for e in entries)

    def test_continuity(self, builder, sample_movements) -> None:
        """다음 항목의 opening = 이전 항목의 closing, 첫 opening = 0"""
        entries = builder.build(sample_movements)

        assert entries[0].opening_stock == 0
        for previous, current in zip(entries, entries[1:]):
            assert current.opening_stock == previous.closing_stock

    def test_quantity_conservation(self, builder, sample_movements) -> None:
        """원장 수량 합계 = Movement 효과 합계"""
        entries = builder.build(sample_movements)

        expected_in = sum(effect_of(m).quantity_in for m in sample_movements)
        expected_out = sum(effect_of(m).quantity_out for m in sample_movements)
        assert sum(e.quantity_in for e in entries) == expected_in
        assert sum(e.quantity_out for e in entries) == expected_out
        assert entries[-1].closing_stock == expected_in - expected_out

    def test_chronological_order(self, builder, sample_movements) -> None:
        """항목 일시는 비감소"""
        entries = builder.build(sample_movements)

        dates = [e.date for e in entries]
        assert dates == sorted(dates)

    def test_idempotent(self, builder, sample_movements) -> None:
        """같은 입력 → 같은 결과"""
        assert builder.build(sample_movements) == builder.build(sample_movements)

    def test_input_order_independent(self, builder, sample_movements) -> None:
        """입력 순서를 섞어도 결과 동일 (일시가 모두 다른 그룹)"""
        shuffled = list(sample_movements)
        random.Random(7).shuffle(shuffled)

        original = builder.build(sample_movements)
        reordered = builder.build(shuffled)

        assert [(e.type, e.closing_stock) for e in reordered] == [
            (e.type, e.closing_stock) for e in original
        ]

    def test_does_not_mutate_input(self, builder, sample_movements) -> None:
        """입력 목록 변경 없음"""
        snapshot = list(sample_movements)

        builder.build(sample_movements)

        assert sample_movements == snapshot

    def test_price_from_representative_only(self, builder, movement_factory) -> None:
        """그룹 가격은 대표 Movement의 단가 (합산하지 않음)"""
        movements = [
            movement_factory(
                "PURCHASE_TO_STORE", "2026-03-01T09:00:00Z",
                reference_number="PO-1", purchase_cost=Decimal("500"),
            ),
            movement_factory(
                "PURCHASE_TO_STORE", "2026-03-01T09:00:00Z",
                reference_number="PO-1", purchase_cost=Decimal("520"),
            ),
        ]

        entries = builder.build(movements)

        assert entries[0].price == Decimal("500")
        assert entries[0].quantity_in == 2

    def test_price_isolation(self, builder, movement_factory) -> None:
        """구매/재생 의뢰 외 유형은 단가가 있어도 가격 없음"""
        movements = [
            movement_factory(
                "STORE_TO_VEHICLE", "2026-03-01T09:00:00Z", purchase_cost=Decimal("500"),
            ),
            movement_factory(
                "STORE_TO_DISPOSAL", "2026-03-02T09:00:00Z", retread_cost=Decimal("80"),
            ),
        ]

        entries = builder.build(movements)

        assert [e.price for e in entries] == [None, None]


class TestGroupingStrictness:
    """그룹핑 엄격도"""

    def _unreferenced_pair(self, movement_factory):
        return [
            movement_factory(
                "STORE_TO_DISPOSAL", "2026-03-01T09:00:00Z", reference_type="DisposalBatch",
            ),
            movement_factory(
                "STORE_TO_DISPOSAL", "2026-03-01T09:00:00Z", reference_type="DisposalBatch",
            ),
        ]

    def test_lenient_merges(self, movement_factory) -> None:
        """LENIENT: reference_type이 같으면 병합"""
        builder = StockLedgerBuilder(strictness=GroupingStrictness.LENIENT)

        entries = builder.build(self._unreferenced_pair(movement_factory))

        assert len(entries) == 1
        assert entries[0].quantity_out == 2

    def test_strict_keeps_separate(self, movement_factory) -> None:
        """STRICT: 각각 별도 항목, 기말 재고는 동일"""
        builder = StockLedgerBuilder(strictness=GroupingStrictness.STRICT)

        entries = builder.build(self._unreferenced_pair(movement_factory))

        assert len(entries) == 2
        assert [e.closing_stock for e in entries] == [-1, -2]


class TestAccumulator:
    """reduce 누적 상태"""

    def test_apply_group_returns_new_state(self, builder, movement_factory) -> None:
        """누적 상태는 새 객체로 반환 (원본 불변)"""
        group = group_movements([movement_factory("PURCHASE_TO_STORE", "2026-03-01T09:00:00Z")])[0]
        start = LedgerAccumulator(running_stock=5)

        result = builder._apply_group(start, group)

        assert start.running_stock == 5
        assert start.entries == ()
        assert result.running_stock == 6
        assert result.entries[0].opening_stock == 5

    def test_append_keeps_previous_state(self, builder, movement_factory) -> None:
        """기존 상태를 복사하지 않고 이어 붙임"""
        group = group_movements([movement_factory("PURCHASE_TO_STORE", "2026-03-01T09:00:00Z")])[0]
        start = builder._apply_group(LedgerAccumulator(), group)

        result = builder._apply_group(start, group)

        assert result.previous is start
        assert len(start.entries) == 1
        assert [e.closing_stock for e in result.entries] == [1, 2]

    def test_large_input_continuity(self, builder, movement_factory) -> None:
        """수천 개 그룹에서도 잔고 연속 및 순서 유지"""
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)
        movements = [
            movement_factory(
                "PURCHASE_TO_STORE" if i % 3 else "STORE_TO_VEHICLE",
                start + timedelta(minutes=i),
            )
            for i in range(5000)
        ]

        entries = builder.build(movements)

        assert len(entries) == 5000
        assert entries[0].opening_stock == 0
        for previous, current in zip(entries, entries[1:]):
            assert current.opening_stock == previous.closing_stock
            assert current.date > previous.date
        assert entries[-1].closing_stock == sum(
            effect_of(m).quantity_in - effect_of(m).quantity_out for m in movements
        )


class TestUnknownTypeWarning:
    """알 수 없는 유형 경고"""

    def test_warns_once_per_type(self, builder, movement_factory, caplog) -> None:
        """유형별 1회 경고"""
        movements = [
            movement_factory("FOO_BAR", "2026-03-01T09:00:00Z"),
            movement_factory("FOO_BAR", "2026-03-02T09:00:00Z"),
            movement_factory("STOCK_TAKE", "2026-03-03T09:00:00Z"),
        ]

        with caplog.at_level(logging.WARNING, logger="core.ledger.entry_builder"):
            builder.build(movements)

        messages = [r.getMessage() for r in caplog.records]
        assert sum("FOO_BAR" in m for m in messages) == 1
        assert sum("STOCK_TAKE" in m for m in messages) == 1

    def test_no_warning_for_known_types(self, builder, sample_movements, caplog) -> None:
        """알려진 유형만 있으면 경고 없음"""
        with caplog.at_level(logging.WARNING, logger="core.ledger.entry_builder"):
            builder.build(sample_movements)

        assert not caplog.records
