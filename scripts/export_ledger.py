"""
재고 원장 내보내기 스크립트

Movement API에서 요청 기간 전체를 조회해 원장을 계산하고
CSV 또는 인쇄용 HTML 리포트로 저장.

실행 방법:
    python scripts/export_ledger.py --start 2026-09-01 --end 2026-09-30
    python scripts/export_ledger.py --size "295/80R22.5" --format html
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from datetime import date, timedelta
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.interfaces import MovementSourceError
from adapters.models import MovementQuery
from adapters.movements.rest_client import MovementRestClient
from core.config.loader import get_settings
from core.constants import Defaults
from core.ledger import GroupingStrictness
from core.logging import setup_logging
from web.services.export_service import csv_filename, render_report, write_csv
from web.services.ledger_service import LedgerService

logger = logging.getLogger("cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="타이어 재고 원장 내보내기")
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=None,
        help=f"시작일 YYYY-MM-DD (기본: 오늘 - {Defaults.LOOKBACK_DAYS}일)",
    )
    parser.add_argument(
        "--end",
        type=date.fromisoformat,
        default=None,
        help="종료일 YYYY-MM-DD (기본: 오늘)",
    )
    parser.add_argument("--tire", type=int, default=None, help="타이어 ID")
    parser.add_argument("--size", type=str, default=None, help="타이어 규격")
    parser.add_argument(
        "--format",
        choices=["csv", "html"],
        default="csv",
        help="출력 형식",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="reference_number가 없는 이동은 병합하지 않음",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="출력 파일 경로 (기본: 현재 디렉토리)",
    )
    parser.add_argument("--settings", type=Path, default=None, help="settings.yaml 경로")
    parser.add_argument("--verbose", action="store_true", help="DEBUG 로그 출력")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging("cli", level="DEBUG" if args.verbose else Defaults.LOG_LEVEL)

    settings = get_settings(args.settings)
    ledger_config = settings.ledger
    if args.strict:
        ledger_config = replace(ledger_config, grouping_strictness=GroupingStrictness.STRICT)

    end = args.end or date.today()
    start = args.start or end - timedelta(days=Defaults.LOOKBACK_DAYS)
    try:
        query = MovementQuery(start_date=start, end_date=end, tire_id=args.tire, size=args.size)
    except ValueError as e:
        logger.error(f"잘못된 조회 조건: {e}")
        return 2

    source_config = settings.movement_source
    client = MovementRestClient(
        base_url=source_config.base_url,
        timeout=source_config.timeout,
        page_size=source_config.page_size,
        max_pages=source_config.max_pages,
        max_retries=source_config.max_retries,
    )

    try:
        result = await LedgerService(client, ledger_config).reconcile(query)
    except MovementSourceError as e:
        logger.error(f"원장 내보내기 실패: {e}")
        return 1
    finally:
        await client.close()

    if args.format == "csv":
        output = args.output or Path(csv_filename(query))
        write_csv(output, result.entries, settings.presentation)
    else:
        output = args.output or Path(csv_filename(query)).with_suffix(".html")
        output.write_text(
            render_report(result.entries, settings.presentation, query, summary=result.summary),
            encoding="utf-8",
        )

    summary = result.summary
    print("=" * 60)
    print(f"원장 항목: {summary.total_entries}")
    print(f"입고 합계: {summary.total_quantity_in}")
    print(f"출고 합계: {summary.total_quantity_out}")
    print(f"기말 재고: {summary.closing_stock}")
    if result.skipped_records:
        print(f"제외된 레코드: {result.skipped_records}")
    print(f"저장: {output}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
