"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class MovementType(str, Enum):
    """타이어 재고 이동 유형

    Movement API가 내려주는 movement_type 값.
    목록에 없는 값도 원장에서는 그대로 통과시킴 (UNKNOWN 처리).
    """

    PURCHASE_TO_STORE = "PURCHASE_TO_STORE"  # 구매 입고
    STORE_TO_VEHICLE = "STORE_TO_VEHICLE"  # 차량 장착
    VEHICLE_TO_STORE = "VEHICLE_TO_STORE"  # 차량 탈거 후 반납
    STORE_TO_RETREAD_SUPPLIER = "STORE_TO_RETREAD_SUPPLIER"  # 재생 의뢰 출고
    RETREAD_SUPPLIER_TO_STORE = "RETREAD_SUPPLIER_TO_STORE"  # 재생 완료 입고
    STORE_TO_DISPOSAL = "STORE_TO_DISPOSAL"  # 폐기

    @classmethod
    def parse(cls, value: str) -> "MovementType | None":
        """문자열을 MovementType으로 변환

        Returns:
            MovementType 또는 None (알 수 없는 유형)
        """
        try:
            return cls(value)
        except ValueError:
            return None


class SortOrder(str, Enum):
    """표시 정렬 방향"""

    ASC = "asc"
    DESC = "desc"
