"""
Transaction Filter Engine

DESIGN DECISION: Filtering is a pure function of the transaction list,
the criteria and "today". The ledger store supplies today from its clock,
so time windows are testable without freezing the system clock.

Time windows:
- daily:     today only
- weekly:    from the most recent week-start day, open-ended
- monthly:   the calendar month containing today
- quarterly: the 3-month quarter containing today
- yearly:    the calendar year containing today
- custom:    inclusive start/end, either side may be open
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, Optional

from walletbook.models.ledger import (
    SearchMode,
    TimeFilter,
    TimeFilterType,
    Transaction,
    TransactionFilter,
)


DateWindow = tuple[Optional[date], Optional[date]]


def week_start_date(today: date, week_start_day: int = 6) -> date:
    """Most recent day (today included) falling on week_start_day (0=Monday)."""
    offset = (today.weekday() - week_start_day) % 7
    return today - timedelta(days=offset)


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def resolve_time_window(
    time_filter: TimeFilter,
    today: date,
    week_start_day: int = 6,
) -> DateWindow:
    """
    Compute the inclusive (start, end) window for a time filter.

    None on either side means unbounded.
    """
    filter_type = time_filter.type

    if filter_type == TimeFilterType.DAILY:
        return today, today
    if filter_type == TimeFilterType.WEEKLY:
        return week_start_date(today, week_start_day), None
    if filter_type == TimeFilterType.MONTHLY:
        return today.replace(day=1), _month_end(today.year, today.month)
    if filter_type == TimeFilterType.QUARTERLY:
        first_month = 3 * ((today.month - 1) // 3) + 1
        return date(today.year, first_month, 1), _month_end(today.year, first_month + 2)
    if filter_type == TimeFilterType.YEARLY:
        return date(today.year, 1, 1), date(today.year, 12, 31)
    return time_filter.start_date, time_filter.end_date


def in_window(value: date, window: DateWindow) -> bool:
    start, end = window
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def matches_search(transaction: Transaction, query: str) -> bool:
    """Case-insensitive substring match against the description."""
    if not transaction.description:
        return False
    return query.lower() in transaction.description.lower()


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: Optional[TransactionFilter],
    today: date,
    week_start_day: int = 6,
    search_mode: SearchMode = SearchMode.INTERSECT,
) -> list[Transaction]:
    """
    Apply filter criteria, preserving the input order.

    With SearchMode.OVERRIDE a non-empty search query replaces every other
    criterion; with SearchMode.INTERSECT it is AND-ed with them.
    """
    transactions = list(transactions)
    if criteria is None:
        return transactions

    query = criteria.search_query or ""
    if query and SearchMode(search_mode) == SearchMode.OVERRIDE:
        return [t for t in transactions if matches_search(t, query)]

    window = None
    if criteria.time_filter is not None:
        window = resolve_time_window(criteria.time_filter, today, week_start_day)

    result = []
    for transaction in transactions:
        if criteria.wallet_id and transaction.wallet_id != criteria.wallet_id:
            continue
        if criteria.category_id and transaction.category_id != criteria.category_id:
            continue
        if criteria.type is not None and transaction.type != criteria.type:
            continue
        if window is not None and not in_window(transaction.date, window):
            continue
        if query and not matches_search(transaction, query):
            continue
        result.append(transaction)

    return result
