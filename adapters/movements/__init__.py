"""
Movement 원천 어댑터

재고 이동 백엔드 REST API 연동
"""

from adapters.movements.rest_client import MovementRestClient

__all__ = [
    "MovementRestClient",
]
