"""
거래 분류기

Movement의 movement_type을 TRANSACTION_RULES로 조회하여
재고 효과, 유형 라벨, 문서 번호, 참조 문자열, 가격을 산출.
알 수 없는 유형은 UNKNOWN_RULE로 통과 (예외 없음).
"""

from dataclasses import dataclass
from decimal import Decimal

from core.domain.movement import Movement
from core.ledger.types import (
    TRANSACTION_RULES,
    UNKNOWN_RULE,
    LedgerEffect,
    TransactionRule,
)
from core.types import MovementType


@dataclass(frozen=True)
class Classification:
    """분류 결과 (그룹 대표 Movement 기준)"""

    effect: LedgerEffect
    label: str
    document_no: str
    reference: str
    is_known: bool


def rule_for(movement_type: str) -> TransactionRule | None:
    """movement_type에 해당하는 규칙 조회

    Returns:
        TransactionRule 또는 None (알 수 없는 유형)
    """
    known = MovementType.parse(movement_type)
    if known is None:
        return None
    return TRANSACTION_RULES.get(known)


def effect_of(movement: Movement) -> LedgerEffect:
    """Movement 1건의 재고 효과"""
    rule = rule_for(movement.movement_type)
    return rule.effect if rule else LedgerEffect.NONE


def _field_text(movement: Movement, field_name: str | None) -> str | None:
    if field_name is None:
        return None
    value = getattr(movement, field_name, None)
    if value is None or value == "":
        return None
    return str(value)


def build_reference(movement: Movement, rule: TransactionRule) -> str:
    """참조 문자열 생성

    예: "Michelin Depot/PO-1001", "KA-01-1234/FL", "Disposed"
    """
    reference = _field_text(movement, rule.reference_field) or rule.reference_default
    detail = _field_text(movement, rule.detail_field)
    if detail:
        reference = f"{reference}{rule.detail_separator}{detail}"
    return reference


def build_document_no(movement: Movement, rule: TransactionRule) -> str:
    """문서 번호 (Movement의 document_number 우선, 없으면 {prefix}-{id})"""
    if movement.document_number:
        return movement.document_number
    return f"{rule.doc_prefix}-{movement.id}"


def unknown_label(movement_type: str) -> str:
    """알 수 없는 유형의 표시 라벨 ("FOO_BAR" → "FOO BAR")"""
    return movement_type.replace("_", " ")


def classify(movement: Movement) -> Classification:
    """Movement 분류

    Args:
        movement: 그룹 대표 Movement

    Returns:
        Classification
    """
    rule = rule_for(movement.movement_type)
    if rule is None:
        return Classification(
            effect=UNKNOWN_RULE.effect,
            label=unknown_label(movement.movement_type),
            document_no=build_document_no(movement, UNKNOWN_RULE),
            reference=build_reference(movement, UNKNOWN_RULE),
            is_known=False,
        )

    return Classification(
        effect=rule.effect,
        label=rule.label,
        document_no=build_document_no(movement, rule),
        reference=build_reference(movement, rule),
        is_known=True,
    )


def resolve_price(movement: Movement) -> Decimal | None:
    """가격 산출

    PURCHASE_TO_STORE → purchase_cost
    STORE_TO_RETREAD_SUPPLIER → retread_cost
    그 외 → None ("가격 없음", 0과 구분)
    """
    rule = rule_for(movement.movement_type)
    if rule is None or rule.price_field is None:
        return None
    return getattr(movement, rule.price_field)
