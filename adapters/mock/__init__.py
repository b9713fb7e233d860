"""
Mock 어댑터

테스트용 Mock 구현체
"""

from adapters.mock.movement_source import MockMovementSource, MockSourceState

__all__ = [
    "MockMovementSource",
    "MockSourceState",
]
