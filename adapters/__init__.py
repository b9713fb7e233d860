"""
어댑터 레이어

외부 서비스(재고 이동 백엔드)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    IMovementSource,
    MovementSourceError,
)
from adapters.models import (
    MovementBatch,
    MovementQuery,
)

__all__ = [
    # Interfaces
    "IMovementSource",
    "MovementSourceError",
    # Models
    "MovementBatch",
    "MovementQuery",
]
