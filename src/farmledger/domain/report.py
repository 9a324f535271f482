"""Report formatting: currency strings, delimited export and printable text.

Nothing in this module derives new figures. It takes aggregation results
and entity lists and lays them out.
"""

import csv
import io
import logging
import textwrap
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Sequence

from farmledger.domain import aggregation
from farmledger.domain.entities import (
    Crop,
    CropProfitability,
    Equipment,
    MonthBucket,
    Settings,
    Transaction,
    TransactionKind,
)

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "NGN": "₦",
    "KES": "KSh",
}

CENTS = Decimal("0.01")

TRANSACTION_HEADERS = ("Date", "Description", "Category", "Linked Crop", "Amount")
CROP_HEADERS = ("Crop Name", "Planting Date", "Harvest Date", "Area", "Yield")
EQUIPMENT_HEADERS = (
    "Name",
    "Model",
    "Purchase Date",
    "Maintenance Logs",
    "Total Maintenance Cost",
)

SECTION_INCOME = "Income Transactions"
SECTION_EXPENSES = "Expense Transactions"
SECTION_CROPS = "Crop Summary"
SECTION_EQUIPMENT = "Equipment Summary"

# Printable transaction lines: date, wrapped description, right-aligned amount
DESCRIPTION_WIDTH = 48


def round_money(amount: Decimal) -> Decimal:
    """Round to the currency minor unit (cents)."""
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal, currency_code: str) -> str:
    """Format an amount for display, e.g. ``$1,234.50`` or ``-€12.00``.

    Known codes get their symbol; any other code is written in front of
    the number followed by a space (``CHF 10.00``).
    """
    rounded = round_money(amount)
    code = currency_code.upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def format_amount(amount: Decimal) -> str:
    """Plain two-decimal amount for delimited output."""
    return f"{round_money(amount):.2f}"


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else ""


def format_quantity(value: Decimal) -> str:
    """Area or yield without trailing zeros, e.g. ``50`` or ``12.5``."""
    return f"{Decimal(value).normalize():f}"


def _sorted_by_date(transactions: Sequence[Transaction]) -> list[Transaction]:
    return sorted(transactions, key=lambda txn: (txn.date, txn.id))


def _crop_names(crops: Sequence[Crop]) -> dict[int, str]:
    return {crop.id: crop.name for crop in crops}


def _linked_crop(names: dict[int, str], txn: Transaction, missing: str) -> str:
    """Name of the crop a transaction is linked to, or ``missing``."""
    if txn.crop_id is None:
        return missing
    if txn.crop_id not in names:
        logger.debug("Transaction %s links to missing crop %s", txn.id, txn.crop_id)
        return missing
    return names[txn.crop_id]


def _harvest_label(crop: Crop) -> str:
    if crop.actual_harvest_date is not None:
        return format_date(crop.actual_harvest_date)
    return f"Est. {format_date(crop.estimated_harvest_date)}"


def _area_label(crop: Crop) -> str:
    return f"{format_quantity(crop.area)} {crop.area_unit.value}"


def _yield_label(crop: Crop) -> str:
    if crop.yield_amount is None:
        return "Not Recorded"
    return f"{format_quantity(crop.yield_amount)} {crop.yield_unit or ''}".strip()


def split_by_kind(
    transactions: Sequence[Transaction],
) -> tuple[list[Transaction], list[Transaction]]:
    """Split transactions into date-ordered income and expense lists."""
    ordered = _sorted_by_date(transactions)
    income = [txn for txn in ordered if txn.kind == TransactionKind.INCOME]
    expenses = [txn for txn in ordered if txn.kind == TransactionKind.EXPENSE]
    return income, expenses


def export_sections(
    transactions: Sequence[Transaction],
    crops: Sequence[Crop],
    equipment: Sequence[Equipment],
    start_date: date,
    end_date: date,
) -> list[tuple[str, tuple[str, ...], list[list[Any]]]]:
    """Build the export sections as (title, headers, rows) in fixed order."""
    in_range = aggregation.filter_by_date_range(transactions, start_date, end_date)
    income, expenses = split_by_kind(in_range)
    names = _crop_names(crops)

    def transaction_rows(items: list[Transaction]) -> list[list[Any]]:
        return [
            [
                format_date(txn.date),
                txn.description,
                txn.category,
                _linked_crop(names, txn, ""),
                format_amount(txn.amount),
            ]
            for txn in items
        ]

    crop_rows = [
        [
            crop.name,
            format_date(crop.planting_date),
            _harvest_label(crop),
            _area_label(crop),
            _yield_label(crop),
        ]
        for crop in crops
    ]

    equipment_rows = []
    for item in equipment:
        summary = aggregation.maintenance_summary(item)
        equipment_rows.append(
            [
                item.name,
                item.model or "",
                format_date(item.purchase_date),
                summary.log_count,
                format_amount(summary.total_cost),
            ]
        )

    return [
        (SECTION_INCOME, TRANSACTION_HEADERS, transaction_rows(income)),
        (SECTION_EXPENSES, TRANSACTION_HEADERS, transaction_rows(expenses)),
        (SECTION_CROPS, CROP_HEADERS, crop_rows),
        (SECTION_EQUIPMENT, EQUIPMENT_HEADERS, equipment_rows),
    ]


def build_export(
    transactions: Sequence[Transaction],
    crops: Sequence[Crop],
    equipment: Sequence[Equipment],
    start_date: date,
    end_date: date,
    line_ending: str = "\n",
) -> str:
    """Render the delimited export document.

    Sections appear in a fixed order (income, expenses, crops, equipment),
    each as a title line and a header row followed by its data rows, with
    one blank line between sections. Cells are quoted by ``csv.writer``
    when they contain a comma, a quote or a line break. An inverted date
    range yields every section with no transaction rows.

    Args:
        transactions: All transactions; only those within the range are exported
        crops: Crops to summarise
        equipment: Equipment to summarise
        start_date: First day of the report period
        end_date: Last day of the report period (inclusive)
        line_ending: "\\n" or "\\r\\n", used for every line

    Returns:
        The export as text, ready to be written as UTF-8
    """
    if line_ending not in ("\n", "\r\n"):
        raise ValueError(f"Unsupported line ending: {line_ending!r}")

    output = io.StringIO()
    writer = csv.writer(output, lineterminator=line_ending)
    sections = export_sections(transactions, crops, equipment, start_date, end_date)
    for index, (title, headers, rows) in enumerate(sections):
        if index:
            output.write(line_ending)
        writer.writerow([title])
        writer.writerow(headers)
        writer.writerows(rows)
    return output.getvalue()


def build_printable_document(
    settings: Settings,
    transactions: Sequence[Transaction],
    crops: Sequence[Crop],
    equipment: Sequence[Equipment],
    start_date: date,
    end_date: date,
) -> str:
    """Render a plain-text summary report for printing."""
    in_range = aggregation.filter_by_date_range(transactions, start_date, end_date)
    totals = aggregation.period_totals(in_range, start_date, end_date)
    income, expenses = split_by_kind(in_range)
    names = _crop_names(crops)
    currency = settings.currency

    def money(amount: Decimal) -> str:
        return format_currency(amount, currency)

    width = 80
    lines = [
        settings.farm_name.center(width).rstrip(),
        "Farm Ledger Summary".center(width).rstrip(),
        f"For the period of {format_date(start_date)} to {format_date(end_date)}"
        .center(width).rstrip(),
        "=" * width,
        "",
        "Financial Overview",
        "-" * width,
        f"{'Total Income:':<50} {money(totals.income):>29}",
        f"{'Total Expenses:':<50} {money(totals.expenses):>29}",
        f"{'Net Profit / Loss:':<50} {money(totals.net):>29}",
        "",
    ]

    def transaction_section(title: str, items: list[Transaction], empty: str) -> None:
        lines.append(title)
        lines.append("-" * width)
        if not items:
            lines.append(f"    {empty}")
        for txn in items:
            crop_name = _linked_crop(names, txn, "N/A")
            description = textwrap.wrap(txn.description, DESCRIPTION_WIDTH) or [""]
            lines.append(
                f"    {format_date(txn.date):<12}{description[0]:<{DESCRIPTION_WIDTH}}"
                f"{money(txn.amount):>16}"
            )
            lines.extend(f"{'':16}{part}" for part in description[1:])
            lines.append(f"{'':16}Category: {txn.category}  Crop: {crop_name}")
        lines.append("")

    transaction_section("Income Details", income, "No income recorded for this period.")
    transaction_section("Expense Details", expenses, "No expenses recorded for this period.")

    lines.append("Crop Summary")
    lines.append("-" * width)
    if not crops:
        lines.append("    No crops recorded.")
    for crop in crops:
        lines.append(f"    {crop.name}")
        lines.append(f"        Planted: {format_date(crop.planting_date)}")
        lines.append(f"        Harvest: {_harvest_label(crop)}")
        lines.append(f"        Area:    {_area_label(crop)}")
        lines.append(f"        Yield:   {_yield_label(crop)}")
    lines.append("")

    lines.append("Equipment Summary")
    lines.append("-" * width)
    if not equipment:
        lines.append("    No equipment recorded.")
    for item in equipment:
        summary = aggregation.maintenance_summary(item)
        lines.append(f"    {item.name}" + (f" ({item.model})" if item.model else ""))
        lines.append(f"        Purchased:        {format_date(item.purchase_date)}")
        lines.append(f"        Maintenance logs: {summary.log_count}")
        lines.append(f"        Maintenance cost: {money(summary.total_cost)}")

    return "\n".join(lines) + "\n"


def monthly_chart_series(buckets: Sequence[MonthBucket]) -> list[dict[str, Any]]:
    """Chart points for the monthly financial flow."""
    return [
        {
            "name": bucket.label,
            "key": bucket.key,
            "income": bucket.income,
            "expenses": bucket.expenses,
        }
        for bucket in buckets
    ]


def category_chart_series(breakdown: dict[str, Decimal]) -> list[dict[str, Any]]:
    """Chart slices for a category breakdown, with percentage shares."""
    total = sum(breakdown.values(), Decimal("0"))
    series = []
    for name, value in breakdown.items():
        share = Decimal("0")
        if total > 0:
            share = (value / total * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        series.append({"name": name, "value": value, "share": share})
    return series


def crop_chart_series(performances: Sequence[CropProfitability]) -> list[dict[str, Any]]:
    """Chart bars for crop performance."""
    return [
        {
            "name": item.crop_name,
            "income": item.income,
            "expenses": item.expenses,
            "profit": item.profit,
        }
        for item in performances
    ]
