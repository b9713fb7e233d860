"""
원장 내보내기 서비스

CSV (UTF-8 BOM, 전체 필드 인용) 및 인쇄용 HTML 리포트 (Jinja2).
표시 형식은 PresentationConfig로 명시적으로 전달받음.
"""

import csv
import io
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from adapters.models import MovementQuery
from core.config.loader import PresentationConfig
from core.constants import Paths
from core.ledger import LedgerEntry, LedgerSummary, summarize
from core.utils.timezone import now_utc

CSV_HEADERS = [
    "Date",
    "User Name",
    "Store Location",
    "Opening Stock",
    "Qty In",
    "Qty Out",
    "Closing Stock",
    "Price",
    "Reference",
    "Document No",
    "Type",
    "Serial Number",
    "Size",
    "Brand",
]

REPORT_TEMPLATE = "ledger_report.html"


def format_currency(amount: Decimal | None, presentation: PresentationConfig) -> str:
    """금액 표시 ("$1,500"). 가격 없음은 빈 문자열"""
    if amount is None:
        return ""
    return f"{presentation.currency_symbol}{amount:,.{presentation.currency_decimals}f}"


def format_number(value: int) -> str:
    """천 단위 구분 숫자"""
    return f"{value:,}"


def format_date(dt: datetime, presentation: PresentationConfig) -> str:
    return dt.strftime(presentation.date_format)


def csv_filename(query: MovementQuery) -> str:
    """다운로드 파일명 (tire-stock-ledger-{start}-to-{end}.csv)"""
    start = query.start_date.isoformat() if query.start_date else "start"
    end = query.end_date.isoformat() if query.end_date else "end"
    return f"tire-stock-ledger-{start}-to-{end}.csv"


def entry_row(entry: LedgerEntry, presentation: PresentationConfig) -> list[str]:
    """원장 항목 1개 → CSV 행"""
    return [
        format_date(entry.date, presentation),
        entry.user_name,
        entry.location,
        format_number(entry.opening_stock),
        format_number(entry.quantity_in),
        format_number(entry.quantity_out),
        format_number(entry.closing_stock),
        format_currency(entry.price, presentation),
        entry.reference,
        entry.document_no,
        entry.type,
        entry.movement.serial_number,
        entry.movement.size,
        entry.movement.brand,
    ]


def export_csv(entries: Sequence[LedgerEntry], presentation: PresentationConfig) -> bytes:
    """CSV 생성

    항목 1개당 1행, 모든 필드 인용, UTF-8 BOM 포함 (Excel 호환).

    Returns:
        CSV 바이트
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for entry in entries:
        writer.writerow(entry_row(entry, presentation))
    return buffer.getvalue().encode("utf-8-sig")


def write_csv(
    path: Path,
    entries: Sequence[LedgerEntry],
    presentation: PresentationConfig,
) -> Path:
    """CSV 파일 저장"""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(export_csv(entries, presentation))
    return path


def _report_environment(presentation: PresentationConfig, templates_dir: Path) -> Environment:
    """리포트용 Jinja2 환경 (표시 형식 필터 등록)"""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html"]),
    )
    env.filters["currency"] = lambda amount: format_currency(amount, presentation)
    env.filters["number"] = format_number
    env.filters["ledger_date"] = lambda dt: format_date(dt, presentation)
    return env


def render_report(
    entries: Sequence[LedgerEntry],
    presentation: PresentationConfig,
    query: MovementQuery,
    summary: LedgerSummary | None = None,
    title: str = "Tire Stock Ledger",
    templates_dir: Path = Paths.TEMPLATES_DIR,
) -> str:
    """인쇄용 HTML 리포트 생성

    원장 컬럼 + 합계 (전체 항목 수, 입고/출고 합계, 기말 재고).

    Args:
        entries: 시간순 원장
        presentation: 표시 형식
        query: 조회 조건 (기간 표시용)
        summary: 합계 (None이면 entries로 계산)
        title: 리포트 제목

    Returns:
        HTML 문자열
    """
    if summary is None:
        summary = summarize(entries)

    env = _report_environment(presentation, templates_dir)
    template = env.get_template(REPORT_TEMPLATE)
    return template.render(
        title=title,
        entries=entries,
        summary=summary,
        query=query,
        generated_at=format_date(now_utc(), presentation),
    )
