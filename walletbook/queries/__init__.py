"""Filtering and summary package."""

from walletbook.queries.filters import (
    filter_transactions,
    in_window,
    matches_search,
    resolve_time_window,
    week_start_date,
)
from walletbook.queries.summary import (
    UNCATEGORIZED_LABEL,
    build_report,
    calculate_category_totals,
    calculate_financial_summary,
    calculate_wallet_summaries,
)

__all__ = [
    "UNCATEGORIZED_LABEL",
    "build_report",
    "calculate_category_totals",
    "calculate_financial_summary",
    "calculate_wallet_summaries",
    "filter_transactions",
    "in_window",
    "matches_search",
    "resolve_time_window",
    "week_start_date",
]
