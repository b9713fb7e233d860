"""
Protocol 인터페이스 테스트

Protocol 타입 검증 및 구현 확인.
"""

from adapters.interfaces import IMovementSource, MovementSourceError
from adapters.mock.movement_source import MockMovementSource
from adapters.movements.rest_client import MovementRestClient


class TestIMovementSource:
    """IMovementSource Protocol 테스트"""

    def test_mock_source_implements_protocol(self) -> None:
        """Mock 원천이 Protocol을 구현하는지 확인"""
        assert isinstance(MockMovementSource(), IMovementSource)

    def test_rest_client_implements_protocol(self) -> None:
        """REST 클라이언트가 Protocol을 구현하는지 확인"""
        assert isinstance(MovementRestClient(), IMovementSource)

    def test_unrelated_object_does_not(self) -> None:
        assert not isinstance(object(), IMovementSource)


class TestMovementSourceError:
    """MovementSourceError 테스트"""

    def test_with_status_code(self) -> None:
        error = MovementSourceError("not found", status_code=404)

        assert error.message == "not found"
        assert error.status_code == 404
        assert str(error) == "Movement API Error [404]: not found"

    def test_without_status_code(self) -> None:
        error = MovementSourceError("timeout")

        assert error.status_code is None
        assert str(error) == "Movement API Error: timeout"
