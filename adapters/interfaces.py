"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Protocol, runtime_checkable

from adapters.models import MovementBatch, MovementQuery


class MovementSourceError(Exception):
    """Movement 원천 조회 실패

    네트워크/인증/서버 에러. 발생 시 원장 계산을 시작하지 않음
    (부분 데이터로 원장을 만들지 않음).
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        if status_code is not None:
            super().__init__(f"Movement API Error [{status_code}]: {message}")
        else:
            super().__init__(f"Movement API Error: {message}")


@runtime_checkable
class IMovementSource(Protocol):
    """Movement 원천 인터페이스

    요청 기간의 Movement 전체(모든 페이지)를 반환해야 함.
    running balance는 전체 기간에 대해서만 정확하기 때문.
    """

    async def fetch_movements(self, query: MovementQuery) -> MovementBatch:
        """Movement 전체 조회

        Args:
            query: 조회 조건

        Returns:
            MovementBatch

        Raises:
            MovementSourceError: 조회 실패
        """
        ...

    async def close(self) -> None:
        """리소스 정리"""
        ...
