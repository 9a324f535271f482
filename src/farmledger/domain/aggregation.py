"""Aggregation functions over farm records.

Every function here is pure: it takes sequences of domain entities (usually
from a ``Snapshot``) plus a reference date and returns new result objects.
Inputs are never mutated and no function raises for empty collections or
missing optional fields. Money is always summed as Decimal.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from farmledger.domain.entities import (
    ZERO,
    ChangeIndicator,
    ChangeKind,
    Crop,
    CropProfitability,
    CropStatus,
    DashboardMetrics,
    Equipment,
    EventKind,
    FarmStats,
    MaintenanceSummary,
    MonthBucket,
    PeriodTotals,
    Snapshot,
    Todo,
    Transaction,
    TransactionKind,
    UpcomingEvent,
)

# Percentage changes smaller than this are not worth showing.
CHANGE_THRESHOLD = Decimal("0.1")


def _sum_by_kind(transactions: Iterable[Transaction]) -> PeriodTotals:
    income = ZERO
    expenses = ZERO
    for txn in transactions:
        if txn.kind == TransactionKind.INCOME:
            income += txn.amount
        else:
            expenses += txn.amount
    return PeriodTotals(income=income, expenses=expenses)


def filter_by_date_range(
    transactions: Iterable[Transaction], start: date, end: date
) -> list[Transaction]:
    """Return transactions dated within ``[start, end]``.

    The end date is inclusive, so a transaction on ``end`` counts for the
    whole day. An inverted range (``start > end``) matches nothing.
    """
    if start > end:
        return []
    return [txn for txn in transactions if start <= txn.date <= end]


def period_totals(
    transactions: Iterable[Transaction], start: date, end: date
) -> PeriodTotals:
    """Sum income and expenses for transactions within ``[start, end]``.

    Args:
        transactions: Transactions to aggregate
        start: First day of the period
        end: Last day of the period (inclusive)

    Returns:
        PeriodTotals; all zero for an empty collection or inverted range
    """
    return _sum_by_kind(filter_by_date_range(transactions, start, end))


def month_range(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    first = date(year, month, 1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last


def monthly_series(
    transactions: Iterable[Transaction], now: date, months: int = 12
) -> tuple[MonthBucket, ...]:
    """Bucket transactions into the trailing ``months`` calendar months.

    Buckets run oldest first and end with the month containing ``now``.
    Transactions are matched on calendar year and month; anything outside
    the window is dropped.
    """
    if months < 1:
        return ()

    current = date(now.year, now.month, 1)
    keys = []
    for offset in range(months - 1, -1, -1):
        month_start = current - relativedelta(months=offset)
        keys.append((month_start.year, month_start.month))
    totals: dict[tuple[int, int], list[Decimal]] = {key: [ZERO, ZERO] for key in keys}

    for txn in transactions:
        sums = totals.get((txn.date.year, txn.date.month))
        if sums is None:
            continue
        if txn.kind == TransactionKind.INCOME:
            sums[0] += txn.amount
        else:
            sums[1] += txn.amount

    return tuple(
        MonthBucket(year=year, month=month, income=totals[(year, month)][0],
                    expenses=totals[(year, month)][1])
        for year, month in keys
    )


def category_breakdown(
    transactions: Iterable[Transaction], kind: TransactionKind, year: int
) -> dict[str, Decimal]:
    """Sum amounts by category for one kind within a calendar year.

    Only categories with at least one matching transaction are returned,
    largest amount first, ties broken by name.
    """
    sums: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        if txn.kind == kind and txn.date.year == year:
            sums[txn.category] += txn.amount

    ordered = sorted(sums.items(), key=lambda item: (-item[1], item[0]))
    return dict(ordered)


def crop_profitability(
    crop: Crop, transactions: Iterable[Transaction]
) -> CropProfitability:
    """Sum income and expenses linked to a crop."""
    totals = _sum_by_kind(txn for txn in transactions if txn.crop_id == crop.id)
    return CropProfitability(
        crop_id=crop.id,
        crop_name=crop.name,
        income=totals.income,
        expenses=totals.expenses,
    )


def crop_performance(
    crops: Sequence[Crop], transactions: Sequence[Transaction]
) -> list[CropProfitability]:
    """Profitability for every crop, in crop order."""
    return [crop_profitability(crop, transactions) for crop in crops]


def maintenance_summary(equipment: Equipment) -> MaintenanceSummary:
    """Total maintenance cost and most recent log for a piece of equipment."""
    total = ZERO
    most_recent = None
    for log in equipment.maintenance_logs:
        total += log.cost
        if most_recent is None or log.date > most_recent.date:
            most_recent = log

    return MaintenanceSummary(
        equipment_id=equipment.id,
        equipment_name=equipment.name,
        total_cost=total,
        log_count=len(equipment.maintenance_logs),
        most_recent_log=most_recent,
    )


def maintenance_costs(equipment: Sequence[Equipment]) -> list[MaintenanceSummary]:
    """Maintenance summaries for equipment that has cost anything."""
    summaries = [maintenance_summary(item) for item in equipment]
    return [summary for summary in summaries if summary.total_cost > 0]


def crop_status(crop: Crop, today: date) -> CropStatus:
    """Derive a crop's lifecycle status."""
    if crop.actual_harvest_date is not None:
        return CropStatus.HARVESTED
    if crop.estimated_harvest_date < today:
        return CropStatus.OVERDUE
    return CropStatus.GROWING


def days_to_harvest(crop: Crop, today: date) -> Optional[int]:
    """Days until the estimated harvest, negative when overdue.

    Returns None for crops that are already harvested.
    """
    if crop.actual_harvest_date is not None:
        return None
    return (crop.estimated_harvest_date - today).days


def upcoming_events(
    crops: Iterable[Crop],
    todos: Iterable[Todo],
    now: date,
    horizon_days: int = 30,
) -> tuple[UpcomingEvent, ...]:
    """Harvests due within the horizon followed by all open to-dos.

    Harvest events cover unharvested crops whose estimated harvest date
    falls in ``[now, now + horizon_days]``, soonest first. Open to-dos keep
    their store order.
    """
    horizon_end = now + timedelta(days=horizon_days)
    harvests = sorted(
        (
            crop
            for crop in crops
            if crop.actual_harvest_date is None
            and now <= crop.estimated_harvest_date <= horizon_end
        ),
        key=lambda crop: (crop.estimated_harvest_date, crop.id),
    )

    events = [
        UpcomingEvent(
            kind=EventKind.HARVEST,
            ref_id=crop.id,
            title=crop.name,
            date=crop.estimated_harvest_date,
        )
        for crop in harvests
    ]
    events.extend(
        UpcomingEvent(kind=EventKind.TODO, ref_id=todo.id, title=todo.task)
        for todo in todos
        if not todo.completed
    )
    return tuple(events)


def change_indicator(current: Decimal, previous: Decimal) -> ChangeIndicator:
    """Compare a value with the previous period's value.

    A previous value of zero never produces a percentage: it is new
    activity when the current value is positive and no change otherwise.
    """
    if previous == 0:
        if current > 0:
            return ChangeIndicator(kind=ChangeKind.NEW_ACTIVITY)
        return ChangeIndicator(kind=ChangeKind.NONE)

    change = (current - previous) / previous * 100
    if abs(change) < CHANGE_THRESHOLD:
        return ChangeIndicator(kind=ChangeKind.NONE)
    kind = ChangeKind.UP if change > 0 else ChangeKind.DOWN
    percent = abs(change).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return ChangeIndicator(kind=kind, percent=percent)


def dashboard_metrics(
    transactions: Sequence[Transaction], today: date
) -> DashboardMetrics:
    """This month's figures compared with last month's."""
    this_start, this_end = month_range(today.year, today.month)
    previous = this_start - relativedelta(months=1)
    last_start, last_end = month_range(previous.year, previous.month)

    this_month = period_totals(transactions, this_start, this_end)
    last_month = period_totals(transactions, last_start, last_end)

    return DashboardMetrics(
        today=today,
        this_month=this_month,
        last_month=last_month,
        income_change=change_indicator(this_month.income, last_month.income),
        expense_change=change_indicator(this_month.expenses, last_month.expenses),
    )


def recent_transactions(
    transactions: Iterable[Transaction], limit: int = 5
) -> list[Transaction]:
    """Newest transactions first."""
    ordered = sorted(transactions, key=lambda txn: (txn.date, txn.id), reverse=True)
    return ordered[:limit]


def rolling_window_totals(
    transactions: Iterable[Transaction], now: date, days: int
) -> PeriodTotals:
    """Totals for transactions dated after ``now - days``.

    This is a rolling-day window, unlike the calendar-month buckets of
    ``monthly_series``.
    """
    cutoff = now - timedelta(days=days)
    return _sum_by_kind(txn for txn in transactions if txn.date > cutoff)


def farm_stats(snapshot: Snapshot, today: date) -> FarmStats:
    """Count records across the snapshot."""
    crops = snapshot.crops
    active = [crop for crop in crops if crop.actual_harvest_date is None]
    return FarmStats(
        total_crops=len(crops),
        active_crops=len(active),
        harvested_crops=len(crops) - len(active),
        crops_ready_to_harvest=sum(
            1 for crop in active if crop.estimated_harvest_date <= today
        ),
        total_equipment=len(snapshot.equipment),
        total_tasks=len(snapshot.todos),
        pending_tasks=sum(1 for todo in snapshot.todos if not todo.completed),
        total_transactions=len(snapshot.transactions),
    )
