"""Summary and report domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from farmledger.constants import MONTHLY_FLOW_MONTHS, UPCOMING_HORIZON_DAYS
from farmledger.database.base import Database
from farmledger.domain import aggregation, report
from farmledger.domain.entities import (
    CropProfitability,
    DashboardMetrics,
    FarmOverview,
    MaintenanceSummary,
    MonthBucket,
    PeriodTotals,
    Snapshot,
    TransactionKind,
    UpcomingEvent,
)


class SummaryService:
    """Service for building dashboard figures and reports.

    Every method reads one snapshot from the store and hands it to the
    pure functions in ``aggregation`` and ``report``. Passing an explicit
    snapshot reuses it instead of reading the store again.
    """

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_snapshot(self) -> Snapshot:
        """Read the current state of the store."""
        return self.db.snapshot()

    def _resolve(self, snapshot: Optional[Snapshot]) -> Snapshot:
        return snapshot if snapshot is not None else self.get_snapshot()

    def period_totals(
        self, start_date: date, end_date: date, snapshot: Optional[Snapshot] = None
    ) -> PeriodTotals:
        """Income and expenses between two dates, inclusive."""
        snapshot = self._resolve(snapshot)
        return aggregation.period_totals(snapshot.transactions, start_date, end_date)

    def dashboard(self, today: date, snapshot: Optional[Snapshot] = None) -> DashboardMetrics:
        """This month's income, expenses and net compared with last month."""
        snapshot = self._resolve(snapshot)
        return aggregation.dashboard_metrics(snapshot.transactions, today)

    def monthly_flow(
        self,
        today: date,
        months: int = MONTHLY_FLOW_MONTHS,
        snapshot: Optional[Snapshot] = None,
    ) -> tuple[MonthBucket, ...]:
        """Income and expenses for the trailing calendar months."""
        snapshot = self._resolve(snapshot)
        return aggregation.monthly_series(snapshot.transactions, today, months)

    def category_breakdown(
        self, kind: TransactionKind, year: int, snapshot: Optional[Snapshot] = None
    ) -> dict[str, Decimal]:
        """Amounts by category for one kind and calendar year."""
        snapshot = self._resolve(snapshot)
        return aggregation.category_breakdown(snapshot.transactions, kind, year)

    def crop_performance(self, snapshot: Optional[Snapshot] = None) -> list[CropProfitability]:
        """Linked income, expenses and profit per crop."""
        snapshot = self._resolve(snapshot)
        return aggregation.crop_performance(snapshot.crops, snapshot.transactions)

    def maintenance_costs(
        self, snapshot: Optional[Snapshot] = None
    ) -> list[MaintenanceSummary]:
        """Maintenance summaries for equipment with any cost."""
        snapshot = self._resolve(snapshot)
        return aggregation.maintenance_costs(snapshot.equipment)

    def upcoming(
        self,
        today: date,
        horizon_days: int = UPCOMING_HORIZON_DAYS,
        snapshot: Optional[Snapshot] = None,
    ) -> tuple[UpcomingEvent, ...]:
        """Harvests due soon followed by open to-dos."""
        snapshot = self._resolve(snapshot)
        return aggregation.upcoming_events(snapshot.crops, snapshot.todos, today, horizon_days)

    def overview(self, today: date, snapshot: Optional[Snapshot] = None) -> FarmOverview:
        """Record counts, rolling 30/7-day totals and upcoming work."""
        snapshot = self._resolve(snapshot)
        return FarmOverview(
            stats=aggregation.farm_stats(snapshot, today),
            last_30_days=aggregation.rolling_window_totals(snapshot.transactions, today, 30),
            last_7_days=aggregation.rolling_window_totals(snapshot.transactions, today, 7),
            upcoming=aggregation.upcoming_events(
                snapshot.crops, snapshot.todos, today, UPCOMING_HORIZON_DAYS
            ),
        )

    def build_export(
        self,
        start_date: date,
        end_date: date,
        line_ending: str = "\n",
        snapshot: Optional[Snapshot] = None,
    ) -> str:
        """Delimited export for a period."""
        snapshot = self._resolve(snapshot)
        return report.build_export(
            snapshot.transactions,
            snapshot.crops,
            snapshot.equipment,
            start_date,
            end_date,
            line_ending=line_ending,
        )

    def build_printable_document(
        self, start_date: date, end_date: date, snapshot: Optional[Snapshot] = None
    ) -> str:
        """Plain-text summary report for a period."""
        snapshot = self._resolve(snapshot)
        return report.build_printable_document(
            snapshot.settings,
            snapshot.transactions,
            snapshot.crops,
            snapshot.equipment,
            start_date,
            end_date,
        )
