"""
Movement REST API 클라이언트

재고 이동 백엔드에서 요청 기간의 Movement를 모든 페이지에 걸쳐 조회.
IMovementSource Protocol 준수.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from adapters.interfaces import MovementSourceError
from adapters.models import MovementBatch, MovementQuery
from core.constants import Defaults, MovementSourceEndpoints
from core.domain.movement import parse_movements
from core.utils.timezone import format_date_param

logger = logging.getLogger(__name__)


class MovementRestClient:
    """Movement REST API 클라이언트

    IMovementSource Protocol 구현.
    페이지 일부만 받은 경우 결과를 반환하지 않고 예외 발생.

    Args:
        base_url: REST API 베이스 URL
        timeout: 요청 타임아웃 (초)
        page_size: 페이지당 레코드 수
        max_pages: 최대 페이지 수 (초과 시 에러)
        max_retries: 최대 시도 횟수 (타임아웃/네트워크 에러 시)

    사용 예시:
    ```python
    client = MovementRestClient(base_url="http://localhost:5000")
    batch = await client.fetch_movements(MovementQuery(size="295/80R22.5"))
    await client.close()
    ```
    """

    def __init__(
        self,
        base_url: str = MovementSourceEndpoints.DEFAULT_BASE_URL,
        timeout: float = Defaults.REQUEST_TIMEOUT_SEC,
        page_size: int = Defaults.PAGE_SIZE,
        max_pages: int = Defaults.MAX_PAGES,
        max_retries: int = Defaults.MAX_RETRIES,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.page_size = page_size
        self.max_pages = max_pages
        self.max_retries = max(1, max_retries)

        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def build_path(query: MovementQuery) -> str:
        """조회 조건에 맞는 API 경로

        tire_id > size > 전체 순으로 우선.
        """
        if query.tire_id is not None:
            return MovementSourceEndpoints.TIRE_MOVEMENTS.format(tire_id=query.tire_id)
        if query.size:
            return MovementSourceEndpoints.SIZE_MOVEMENTS.format(size=quote(query.size, safe=""))
        return MovementSourceEndpoints.ALL_MOVEMENTS

    def build_params(self, query: MovementQuery, page: int) -> dict[str, str]:
        """쿼리 파라미터 생성"""
        return {
            "startDate": format_date_param(query.start_date),
            "endDate": format_date_param(query.end_date),
            "details": "true",
            "page": str(page),
            "limit": str(self.page_size),
        }

    async def _request(self, path: str, params: dict[str, str]) -> Any:
        """GET 요청 실행

        Returns:
            JSON 응답

        Raises:
            MovementSourceError: HTTP 에러, 네트워크 에러, JSON 파싱 실패
        """
        url = f"{self.base_url}{path}"
        client = await self._get_client()

        for attempt in range(self.max_retries):
            try:
                response = await client.request("GET", url, params=params)
            except httpx.TimeoutException as e:
                logger.warning(
                    "Movement API 타임아웃",
                    extra={"path": path, "attempt": attempt + 1},
                )
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(1 * (attempt + 1))
                    continue
                raise MovementSourceError(f"요청 타임아웃: {path}") from e
            except httpx.RequestError as e:
                logger.error(
                    "Movement API 요청 에러",
                    extra={"path": path, "error": str(e), "attempt": attempt + 1},
                )
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(1 * (attempt + 1))
                    continue
                raise MovementSourceError(f"요청 실패: {e}") from e

            if response.status_code >= 400:
                try:
                    error_data = response.json()
                    message = error_data.get("error") or error_data.get("message") or response.text
                except Exception:
                    message = response.text
                raise MovementSourceError(str(message), status_code=response.status_code)

            try:
                return response.json()
            except ValueError as e:
                raise MovementSourceError(f"JSON 파싱 실패: {path}") from e

        # max_retries >= 1 이므로 도달하지 않음
        raise MovementSourceError("All retries failed")

    @staticmethod
    def _int_or_none(value: Any) -> int | None:
        try:
            return int(value) if value is not None else None
        except (TypeError, ValueError):
            return None

    def _extract_page(self, data: Any) -> tuple[list[dict[str, Any]], int | None]:
        """응답에서 레코드와 전체 페이지 수 추출

        응답 형식:
        - [...]  → 전체 페이지 수 모름 (None)
        - {"movements": [...], "totalPages": n}
        - {"movements": [...], "total": n}  → ceil(total / page_size)
        """
        if isinstance(data, list):
            return data, None

        if isinstance(data, dict) and isinstance(data.get("movements"), list):
            total_pages = self._int_or_none(data.get("totalPages"))
            if total_pages is None:
                total = self._int_or_none(data.get("total"))
                if total is not None:
                    total_pages = -(-total // self.page_size)
            return data["movements"], total_pages

        raise MovementSourceError(f"예상하지 못한 응답 형식: {type(data).__name__}")

    def _has_next_page(
        self,
        page: int,
        page_records: list[dict[str, Any]],
        total_pages: int | None,
    ) -> bool:
        """다음 페이지 요청 여부

        - 전체 페이지 수를 알면 page < total_pages. 중간의 빈 페이지는 에러.
        - 배열 응답은 page_size만큼 꽉 찬 경우에만 다음 페이지가 있다고 봄.

        Raises:
            MovementSourceError: 남은 페이지가 있는데 빈 페이지를 받은 경우
        """
        if total_pages is None:
            return len(page_records) == self.page_size

        if page >= total_pages:
            return False
        if not page_records:
            raise MovementSourceError(
                f"빈 페이지 수신: page={page}, totalPages={total_pages}"
            )
        return True

    async def fetch_movements(self, query: MovementQuery) -> MovementBatch:
        """요청 기간의 Movement 전체 조회 (모든 페이지)

        일부 페이지만 받은 상태로는 결과를 반환하지 않음.

        Args:
            query: 조회 조건

        Returns:
            MovementBatch

        Raises:
            MovementSourceError: 조회 실패, 중간 빈 페이지 또는 max_pages 초과
        """
        path = self.build_path(query)
        records: list[dict[str, Any]] = []
        page = 1

        while True:
            data = await self._request(path, self.build_params(query, page))
            page_records, total_pages = self._extract_page(data)
            records.extend(page_records)

            if not self._has_next_page(page, page_records, total_pages):
                break

            if page >= self.max_pages:
                raise MovementSourceError(
                    f"페이지 수 초과: page={page}, totalPages={total_pages}, "
                    f"max_pages={self.max_pages}"
                )
            page += 1

        movements, skipped = parse_movements(records)

        logger.info(
            "Movement 조회 완료",
            extra={
                "path": path,
                "pages": page,
                "records": len(records),
                "skipped": skipped,
            },
        )

        return MovementBatch(
            movements=movements,
            skipped_records=skipped,
            pages_fetched=page,
        )
