"""
타이어 재고 원장 (Stock Ledger)

순서 없는 재고 이동(Movement) 목록을 running balance가 포함된
시간순 원장으로 변환하는 순수 동기 엔진.

사용 예시:
```python
from core.ledger import StockLedgerBuilder, summarize

builder = StockLedgerBuilder(location="MAIN_WAREHOUSE")
entries = builder.build(movements)

summary = summarize(entries)
print(summary.closing_stock)
```
"""

from core.ledger.classifier import Classification, classify, resolve_price
from core.ledger.entry_builder import (
    LedgerAccumulator,
    LedgerEntry,
    StockLedgerBuilder,
    build_stock_ledger,
)
from core.ledger.grouper import (
    GroupKey,
    TransactionGroup,
    group_movements,
    sort_movements,
)
from core.ledger.summary import (
    LedgerSummary,
    MovementStats,
    filter_entries,
    movement_stats,
    paginate,
    sort_entries,
    summarize,
)
from core.ledger.types import (
    TRANSACTION_RULES,
    GroupingStrictness,
    LedgerEffect,
    TransactionRule,
)

__all__ = [
    # 핵심 클래스
    "StockLedgerBuilder",
    "LedgerEntry",
    "LedgerAccumulator",
    "TransactionGroup",
    "GroupKey",
    "Classification",
    "LedgerSummary",
    "MovementStats",
    # 함수
    "build_stock_ledger",
    "sort_movements",
    "group_movements",
    "classify",
    "resolve_price",
    "summarize",
    "movement_stats",
    "filter_entries",
    "sort_entries",
    "paginate",
    # Enum
    "LedgerEffect",
    "GroupingStrictness",
    # 상수
    "TRANSACTION_RULES",
    "TransactionRule",
]
