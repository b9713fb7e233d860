"""
pytest 공통 fixture 정의

Movement 레코드/도메인 객체 팩토리, 임시 설정 파일
"""

import tempfile
from datetime import datetime, timezone
from itertools import count
from pathlib import Path
from typing import Any, Callable

import pytest

from core.config.loader import Settings
from core.domain.movement import Movement


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_settings():
    """테스트 간 Settings 싱글턴 격리"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def movement_factory() -> Callable[..., Movement]:
    """Movement 생성 팩토리 (id 자동 증가)

    사용 예:
        m = movement_factory("PURCHASE_TO_STORE", "2026-03-01T09:00:00Z", purchase_cost=Decimal("500"))
    """
    ids = count(1)

    def _make(
        movement_type: str,
        movement_date: str | datetime,
        **overrides: Any,
    ) -> Movement:
        if isinstance(movement_date, str):
            movement_date = datetime.fromisoformat(movement_date.replace("Z", "+00:00"))
        if movement_date.tzinfo is None:
            movement_date = movement_date.replace(tzinfo=timezone.utc)
        movement_id = overrides.pop("id", None) or next(ids)
        defaults: dict[str, Any] = {
            "tire_id": movement_id,
            "serial_number": f"SN-{movement_id:04d}",
            "size": "295/80R22.5",
            "brand": "Michelin",
            "user_name": "jdoe",
        }
        defaults.update(overrides)
        return Movement(
            id=movement_id,
            movement_type=movement_type,
            movement_date=movement_date,
            **defaults,
        )

    return _make


@pytest.fixture
def record_factory() -> Callable[..., dict[str, Any]]:
    """Movement API 원본 레코드 팩토리 (id 자동 증가)"""
    ids = count(1)

    def _make(
        movement_type: str,
        movement_date: str,
        **overrides: Any,
    ) -> dict[str, Any]:
        movement_id = overrides.pop("id", None) or next(ids)
        record: dict[str, Any] = {
            "id": movement_id,
            "tire_id": movement_id,
            "serial_number": f"SN-{movement_id:04d}",
            "size": "295/80R22.5",
            "brand": "Michelin",
            "movement_type": movement_type,
            "movement_date": movement_date,
            "user_id": 7,
            "user_name": "jdoe",
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def sample_records(record_factory) -> list[dict[str, Any]]:
    """전형적인 한 달치 이동 (순서 섞임)

    구매 2개(같은 PO) → 장착 1 → 재생 의뢰 1 → 재생 입고 1 → 폐기 1
    """
    return [
        record_factory(
            "STORE_TO_VEHICLE", "2026-03-05T10:00:00Z",
            vehicle_number="KA-01-1234", position="FL",
        ),
        record_factory(
            "PURCHASE_TO_STORE", "2026-03-01T09:00:00Z",
            supplier_name="Michelin Depot", reference_number="PO-1001",
            purchase_cost=500,
        ),
        record_factory(
            "PURCHASE_TO_STORE", "2026-03-01T09:00:00Z",
            supplier_name="Michelin Depot", reference_number="PO-1001",
            purchase_cost=500,
        ),
        record_factory(
            "STORE_TO_RETREAD_SUPPLIER", "2026-03-10T08:30:00Z",
            supplier_name="Retread Co", retread_cost="120.50",
        ),
        record_factory(
            "RETREAD_SUPPLIER_TO_STORE", "2026-03-20T15:00:00Z",
            supplier_name="Retread Co",
        ),
        record_factory(
            "STORE_TO_DISPOSAL", "2026-03-25T11:00:00Z",
            disposal_reason="Sidewall damage", document_number="DSP-2026-001",
        ),
    ]


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    content = """# 테스트용 settings.yaml
movement_source:
  base_url: "http://movements.test:5000/"
  timeout: 5
  page_size: 100
  max_pages: 10
  max_retries: 2

ledger:
  location: "DEPOT_A"
  grouping_strictness: "strict"

presentation:
  currency_symbol: "€"
  currency_decimals: 2
  date_format: "%Y-%m-%d %H:%M"
"""
    path = temp_dir / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path
