"""
유틸리티 패키지

타임존 처리 등 공통 유틸리티
"""

from core.utils.timezone import (
    to_utc,
    parse_iso_timestamp,
    format_date_param,
    now_utc,
)

__all__ = [
    "to_utc",
    "parse_iso_timestamp",
    "format_date_param",
    "now_utc",
]
