"""
타임존 유틸리티

내부 처리: UTC 원칙. Movement API의 ISO-8601 문자열을 UTC datetime으로 정규화.
"""

from datetime import date, datetime, timezone


def to_utc(dt: datetime) -> datetime:
    """datetime을 UTC로 정규화

    Args:
        dt: datetime 객체 (naive면 UTC로 간주)

    Returns:
        UTC 타임존의 datetime
    """
    if dt.tzinfo is None:
        # naive datetime은 UTC로 간주
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso_timestamp(value: str | datetime) -> datetime:
    """ISO-8601 문자열을 UTC datetime으로 변환

    "Z" 접미사, 날짜만 있는 문자열 모두 허용.

    Args:
        value: ISO-8601 문자열 또는 datetime

    Returns:
        UTC datetime

    Raises:
        ValueError: 형식이 잘못된 경우

    Example:
        >>> parse_iso_timestamp("2026-03-01T09:30:00Z")
        datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"유효하지 않은 타임스탬프: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(text))


def format_date_param(d: date | None) -> str:
    """조회 파라미터용 날짜 문자열 (YYYY-MM-DD)

    None이면 빈 문자열 (원천 API는 빈 값을 "제한 없음"으로 해석).
    """
    if d is None:
        return ""
    return d.strftime("%Y-%m-%d")


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)
