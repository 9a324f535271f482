"""Domain model entities for farmledger.

These are pure data classes representing farm records and the results
derived from them, independent of the database schema. Services and the
aggregation functions only ever see these types.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


ZERO = Decimal("0")


class TransactionKind(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class AreaUnit(str, Enum):
    """Unit used for a crop's planted area."""

    ACRES = "acres"
    HECTARES = "hectares"


class CropStatus(str, Enum):
    """Derived lifecycle state of a crop."""

    GROWING = "growing"
    OVERDUE = "overdue"
    HARVESTED = "harvested"


@dataclass(frozen=True)
class Transaction:
    """Income or expense transaction domain entity."""

    id: int
    kind: TransactionKind
    amount: Decimal
    date: date
    description: str
    category: str
    crop_id: Optional[int] = None


@dataclass(frozen=True)
class Crop:
    """Crop (planting) domain entity."""

    id: int
    name: str
    planting_date: date
    estimated_harvest_date: date
    area: Decimal
    area_unit: AreaUnit
    actual_harvest_date: Optional[date] = None
    yield_amount: Optional[Decimal] = None
    yield_unit: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class MaintenanceLog:
    """Maintenance log entry owned by a piece of equipment."""

    id: int
    equipment_id: int
    date: date
    description: str
    cost: Decimal


@dataclass(frozen=True)
class Equipment:
    """Equipment domain entity with its maintenance history."""

    id: int
    name: str
    purchase_date: date
    model: Optional[str] = None
    notes: Optional[str] = None
    maintenance_logs: tuple[MaintenanceLog, ...] = ()


@dataclass(frozen=True)
class Settings:
    """Farm-wide settings."""

    farm_name: str
    currency: str
    income_categories: tuple[str, ...]
    expense_categories: tuple[str, ...]

    def categories_for(self, kind: TransactionKind) -> tuple[str, ...]:
        """Return the configured category list for a transaction kind."""
        if kind == TransactionKind.INCOME:
            return self.income_categories
        return self.expense_categories


@dataclass(frozen=True)
class Todo:
    """To-do item."""

    id: int
    task: str
    completed: bool = False


@dataclass(frozen=True)
class Notification:
    """Notification shown in the notification panel."""

    id: int
    message: str
    timestamp: datetime
    read: bool = False
    seen: bool = False
    link: Optional[str] = None


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of every collection in the store at one point in time."""

    settings: Settings
    transactions: tuple[Transaction, ...] = ()
    crops: tuple[Crop, ...] = ()
    equipment: tuple[Equipment, ...] = ()
    todos: tuple[Todo, ...] = ()


# Aggregation results


@dataclass(frozen=True)
class PeriodTotals:
    """Income and expense sums for a period."""

    income: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class MonthBucket:
    """Income and expense sums for one calendar month."""

    year: int
    month: int
    income: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        return date(self.year, self.month, 1).strftime("%b %y")

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class CropProfitability:
    """Linked income and expenses for a single crop."""

    crop_id: int
    crop_name: str
    income: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def profit(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class MaintenanceSummary:
    """Maintenance rollup for one piece of equipment."""

    equipment_id: int
    equipment_name: str
    total_cost: Decimal = ZERO
    log_count: int = 0
    most_recent_log: Optional[MaintenanceLog] = None


class EventKind(str, Enum):
    """Kind of upcoming event."""

    HARVEST = "harvest"
    TODO = "todo"


@dataclass(frozen=True)
class UpcomingEvent:
    """A harvest or an open to-do shown in the upcoming list."""

    kind: EventKind
    ref_id: int
    title: str
    date: Optional[date] = None


class ChangeKind(str, Enum):
    """Result of comparing a value against the previous period."""

    NONE = "none"
    NEW_ACTIVITY = "new_activity"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class ChangeIndicator:
    """Period-over-period change."""

    kind: ChangeKind
    percent: Optional[Decimal] = None

    def is_favorable(self, for_income: bool) -> Optional[bool]:
        """Whether the change is good news.

        Rising income and falling expenses are favorable. New activity is
        always shown as favorable. Returns None when there is no change.
        """
        if self.kind == ChangeKind.NEW_ACTIVITY:
            return True
        if self.kind == ChangeKind.NONE:
            return None
        if for_income:
            return self.kind == ChangeKind.UP
        return self.kind == ChangeKind.DOWN


@dataclass(frozen=True)
class DashboardMetrics:
    """Figures for the dashboard stat cards."""

    today: date
    this_month: PeriodTotals
    last_month: PeriodTotals
    income_change: ChangeIndicator
    expense_change: ChangeIndicator

    @property
    def net_profit(self) -> Decimal:
        return self.this_month.net


@dataclass(frozen=True)
class FarmStats:
    """Record counts across the farm."""

    total_crops: int = 0
    active_crops: int = 0
    harvested_crops: int = 0
    crops_ready_to_harvest: int = 0
    total_equipment: int = 0
    total_tasks: int = 0
    pending_tasks: int = 0
    total_transactions: int = 0


@dataclass(frozen=True)
class FarmOverview:
    """Stats, recent activity and upcoming work for the overview screen."""

    stats: FarmStats
    last_30_days: PeriodTotals
    last_7_days: PeriodTotals
    upcoming: tuple[UpcomingEvent, ...] = ()
