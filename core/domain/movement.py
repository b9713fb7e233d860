"""
Movement 도메인 모델

타이어 1개의 재고 이동 이벤트 (불변).
Movement API 원본 레코드(dict)를 관대하게 파싱하여 생성.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from core.constants import Defaults
from core.utils.timezone import parse_iso_timestamp

logger = logging.getLogger(__name__)


class MovementParseError(Exception):
    """Movement 레코드 파싱 실패

    필수 필드(id, movement_type, movement_date)가 없거나 잘못된 경우 발생.
    선택 필드 오류는 기본값으로 대체되며 이 예외를 발생시키지 않음.
    """

    def __init__(self, message: str, record_id: Any = None):
        self.record_id = record_id
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Movement:
    """재고 이동 이벤트

    항상 타이어 1개를 의미 (수량 필드 없음).
    movement_type은 원본 문자열 그대로 보존 (신규 유형도 통과).
    """

    id: int
    movement_type: str
    movement_date: datetime

    # 타이어 정보
    tire_id: int | None = None
    serial_number: str = Defaults.UNKNOWN
    size: str = Defaults.UNKNOWN
    brand: str = Defaults.UNKNOWN
    pattern: str | None = None

    # 이동 정보
    from_location: str | None = None
    to_location: str | None = None
    user_id: int | None = None
    user_name: str | None = None
    notes: str | None = None

    # 참조 정보
    reference_id: int | None = None
    reference_type: str | None = None
    reference_number: str | None = None
    document_number: str | None = None

    # 상대방 (차량/공급처)
    vehicle_id: int | None = None
    vehicle_number: str | None = None
    position: str | None = None
    supplier_id: int | None = None
    supplier_name: str | None = None

    # 금액
    purchase_cost: Decimal | None = None
    retread_cost: Decimal | None = None

    # 기타
    disposal_reason: str | None = None
    install_odometer: int | None = None
    removal_odometer: int | None = None

    @property
    def display_user(self) -> str:
        """표시용 사용자 이름 (없으면 System)"""
        return self.user_name or Defaults.USER_NAME

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용 dict 변환 (Decimal → str, datetime → ISO)"""
        return {
            "id": self.id,
            "tire_id": self.tire_id,
            "serial_number": self.serial_number,
            "size": self.size,
            "brand": self.brand,
            "pattern": self.pattern,
            "movement_type": self.movement_type,
            "movement_date": self.movement_date.isoformat(),
            "from_location": self.from_location,
            "to_location": self.to_location,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "notes": self.notes,
            "reference_id": self.reference_id,
            "reference_type": self.reference_type,
            "reference_number": self.reference_number,
            "document_number": self.document_number,
            "vehicle_id": self.vehicle_id,
            "vehicle_number": self.vehicle_number,
            "position": self.position,
            "supplier_id": self.supplier_id,
            "supplier_name": self.supplier_name,
            "purchase_cost": str(self.purchase_cost) if self.purchase_cost is not None else None,
            "retread_cost": str(self.retread_cost) if self.retread_cost is not None else None,
            "disposal_reason": self.disposal_reason,
            "install_odometer": self.install_odometer,
            "removal_odometer": self.removal_odometer,
        }


def _text(value: Any) -> str | None:
    """선택 문자열 필드 정규화 (빈 문자열 → None)"""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _int(value: Any) -> int | None:
    """선택 정수 필드 정규화 (변환 불가 → None)"""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _money(value: Any, field_name: str, record_id: Any) -> Decimal | None:
    """금액 필드 변환

    None/빈 값은 "가격 없음"(None). 0은 Decimal("0")으로 유지.
    형식이 잘못된 값과 NaN/Infinity는 경고 후 None.
    """
    if value is None or value == "":
        return None
    try:
        # float 오차 방지를 위해 str 경유
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        result = None

    if result is None or not result.is_finite():
        logger.warning(
            "금액 필드 형식 오류, 가격 없음으로 처리",
            extra={"movement_id": record_id, "field": field_name, "value": value},
        )
        return None
    return result


def parse_movement(record: dict[str, Any]) -> Movement:
    """Movement API 레코드를 Movement로 변환

    필수 필드: id, movement_type, movement_date
    선택 필드는 누락/오류 시 기본값으로 대체 (배치 전체를 중단하지 않음).

    Args:
        record: Movement API 응답의 단일 레코드

    Returns:
        Movement 인스턴스

    Raises:
        MovementParseError: 필수 필드가 없거나 잘못된 경우
    """
    if not isinstance(record, dict):
        raise MovementParseError(f"레코드 형식 오류: {type(record).__name__}")

    record_id = record.get("id")
    movement_id = _int(record_id)
    if movement_id is None:
        raise MovementParseError("id 필드가 없거나 잘못됨", record_id=record_id)

    movement_type = _text(record.get("movement_type"))
    if movement_type is None:
        raise MovementParseError("movement_type 필드가 없음", record_id=movement_id)

    raw_date = record.get("movement_date")
    try:
        movement_date = parse_iso_timestamp(raw_date)
    except (TypeError, ValueError) as e:
        raise MovementParseError(
            f"movement_date 파싱 실패: {raw_date!r}", record_id=movement_id
        ) from e

    return Movement(
        id=movement_id,
        movement_type=movement_type,
        movement_date=movement_date,
        tire_id=_int(record.get("tire_id")),
        serial_number=_text(record.get("serial_number")) or Defaults.UNKNOWN,
        size=_text(record.get("size")) or Defaults.UNKNOWN,
        brand=_text(record.get("brand")) or Defaults.UNKNOWN,
        pattern=_text(record.get("pattern")),
        from_location=_text(record.get("from_location")),
        to_location=_text(record.get("to_location")),
        user_id=_int(record.get("user_id")),
        user_name=_text(record.get("user_name")),
        notes=_text(record.get("notes")),
        reference_id=_int(record.get("reference_id")),
        reference_type=_text(record.get("reference_type")),
        reference_number=_text(record.get("reference_number")),
        document_number=_text(record.get("document_number")),
        vehicle_id=_int(record.get("vehicle_id")),
        vehicle_number=_text(record.get("vehicle_number")),
        position=_text(record.get("position")),
        supplier_id=_int(record.get("supplier_id")),
        supplier_name=_text(record.get("supplier_name")),
        purchase_cost=_money(record.get("purchase_cost"), "purchase_cost", movement_id),
        retread_cost=_money(record.get("retread_cost"), "retread_cost", movement_id),
        disposal_reason=_text(record.get("disposal_reason")),
        install_odometer=_int(record.get("install_odometer")),
        removal_odometer=_int(record.get("removal_odometer")),
    )


def parse_movements(records: list[dict[str, Any]]) -> tuple[list[Movement], int]:
    """레코드 목록 일괄 변환

    필수 필드가 잘못된 레코드는 건너뛰고 경고 로그 (배치는 계속).

    Returns:
        (movements, skipped_count)
    """
    movements: list[Movement] = []
    skipped = 0

    for record in records:
        try:
            movements.append(parse_movement(record))
        except MovementParseError as e:
            skipped += 1
            logger.warning(
                f"Movement 레코드 건너뜀: {e.message}",
                extra={"movement_id": e.record_id},
            )

    return movements, skipped
