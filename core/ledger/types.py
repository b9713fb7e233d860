"""
재고 원장 타입 정의

LedgerEffect, GroupingStrictness 등 원장 Enum과
이동 유형별 분류 규칙 테이블 (TRANSACTION_RULES)
"""

from dataclasses import dataclass
from enum import Enum

from core.types import MovementType


class LedgerEffect(str, Enum):
    """이동 유형의 재고 효과

    str을 상속하여 JSON 직렬화 가능.
    """

    IN = "IN"  # 입고 (+1)
    OUT = "OUT"  # 출고 (+1 out)
    NONE = "NONE"  # 효과 없음 (알 수 없는 유형)

    @property
    def quantity_in(self) -> int:
        return 1 if self is LedgerEffect.IN else 0

    @property
    def quantity_out(self) -> int:
        return 1 if self is LedgerEffect.OUT else 0


class GroupingStrictness(str, Enum):
    """거래 그룹핑 엄격도

    LENIENT: reference_number가 없으면 reference_type으로 대체 (기존 동작).
             reference_type과 일시가 같은 무관한 거래가 합쳐질 수 있음.
    STRICT: reference_number가 없으면 movement id로 대체 (절대 병합되지 않음).
    """

    LENIENT = "LENIENT"
    STRICT = "STRICT"


@dataclass(frozen=True)
class TransactionRule:
    """이동 유형별 원장 분류 규칙

    유형 추가는 TRANSACTION_RULES에 한 줄 추가로 끝남.

    reference 문자열 = (reference_field 값 or reference_default)
                      + (detail_field 값이 있으면 detail_separator + 값)
    """

    effect: LedgerEffect
    label: str
    doc_prefix: str
    reference_field: str | None
    reference_default: str = ""
    detail_field: str | None = None
    detail_separator: str = ""
    price_field: str | None = None


TRANSACTION_RULES: dict[MovementType, TransactionRule] = {
    MovementType.PURCHASE_TO_STORE: TransactionRule(
        effect=LedgerEffect.IN,
        label="Purchase",
        doc_prefix="PUR",
        reference_field="supplier_name",
        reference_default="Supplier",
        detail_field="reference_number",
        detail_separator="/",
        price_field="purchase_cost",
    ),
    MovementType.STORE_TO_VEHICLE: TransactionRule(
        effect=LedgerEffect.OUT,
        label="Installation",
        doc_prefix="INST",
        reference_field="vehicle_number",
        reference_default="Vehicle",
        detail_field="position",
        detail_separator="/",
    ),
    MovementType.VEHICLE_TO_STORE: TransactionRule(
        effect=LedgerEffect.IN,
        label="Return from Vehicle",
        doc_prefix="RET",
        reference_field="vehicle_number",
        reference_default="Vehicle",
        detail_field="notes",
        detail_separator=" - ",
    ),
    MovementType.STORE_TO_RETREAD_SUPPLIER: TransactionRule(
        effect=LedgerEffect.OUT,
        label="Send for Retreading",
        doc_prefix="RETREAD-SEND",
        reference_field="supplier_name",
        reference_default="Retreader",
        price_field="retread_cost",
    ),
    MovementType.RETREAD_SUPPLIER_TO_STORE: TransactionRule(
        effect=LedgerEffect.IN,
        label="Return from Retreading",
        doc_prefix="RETREAD-RET",
        reference_field="supplier_name",
        reference_default="Retreader",
    ),
    MovementType.STORE_TO_DISPOSAL: TransactionRule(
        effect=LedgerEffect.OUT,
        label="Disposal",
        doc_prefix="DISP",
        reference_field="disposal_reason",
        reference_default="Disposed",
    ),
}


# 알 수 없는 유형 (Fallback) - 라벨은 원본 유형에서 생성
UNKNOWN_RULE = TransactionRule(
    effect=LedgerEffect.NONE,
    label="",
    doc_prefix="TRX",
    reference_field="notes",
    reference_default="",
)
