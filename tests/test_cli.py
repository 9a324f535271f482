"""Tests for CLI commands."""

from datetime import date
from decimal import Decimal

from farmledger.cli.main import cli
from farmledger.domain.entities import TransactionKind


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_help_lists_commands(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for name in ("crop", "transaction", "equipment", "todo", "settings", "notification",
                 "dashboard", "overview", "report", "summary", "export"):
        assert name in result.output


class TestCropCommands:
    """Tests for the crop command group."""

    def test_add_and_list(self, cli_runner, temp_db):
        result = _invoke(
            cli_runner, temp_db, "crop", "add", "Wheat - Field A",
            "--planted", "2024-03-01", "--harvest-estimate", "2024-07-15", "--area", "50",
        )
        assert result.exit_code == 0
        assert "Created crop 'Wheat - Field A' (ID: 1)" in result.output

        result = _invoke(cli_runner, temp_db, "crop", "list", "--as-of", "2024-07-20")
        assert result.exit_code == 0
        assert "Wheat - Field A" in result.output
        assert "50 acres" in result.output
        assert "overdue" in result.output

    def test_add_rejects_harvest_before_planting(self, cli_runner, temp_db):
        result = _invoke(
            cli_runner, temp_db, "crop", "add", "Wheat",
            "--planted", "2024-03-01", "--harvest-estimate", "2024-02-01", "--area", "50",
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert temp_db.list_crops() == []

    def test_add_rejects_bad_area(self, cli_runner, temp_db):
        result = _invoke(
            cli_runner, temp_db, "crop", "add", "Wheat",
            "--planted", "2024-03-01", "--harvest-estimate", "2024-07-01", "--area", "lots",
        )

        assert result.exit_code == 1
        assert "Invalid area" in result.output

    def test_harvest_and_show(self, cli_runner, temp_db, sample_crop):
        result = _invoke(
            cli_runner, temp_db, "crop", "harvest", str(sample_crop.id),
            "--date", "2024-07-20", "--yield", "2,500", "--yield-unit", "bushels",
        )
        assert result.exit_code == 0

        result = _invoke(cli_runner, temp_db, "crop", "show", str(sample_crop.id))
        assert result.exit_code == 0
        assert "harvested" in result.output
        assert "2500 bushels" in result.output
        assert "Profit:" in result.output
        assert "$0.00" in result.output

    def test_update_and_delete(self, cli_runner, temp_db, sample_crop):
        result = _invoke(cli_runner, temp_db, "crop", "update", str(sample_crop.id), "--name", "Spelt")
        assert result.exit_code == 0

        result = _invoke(cli_runner, temp_db, "crop", "delete", str(sample_crop.id), input="y\n")
        assert result.exit_code == 0
        assert "Deleted crop 'Spelt'" in result.output

        result = _invoke(cli_runner, temp_db, "crop", "show", str(sample_crop.id))
        assert result.exit_code == 1
        assert f"Crop {sample_crop.id} not found" in result.output

    def test_delete_cancelled(self, cli_runner, temp_db, sample_crop):
        result = _invoke(cli_runner, temp_db, "crop", "delete", str(sample_crop.id), input="n\n")

        assert result.exit_code == 0
        assert "Deletion cancelled." in result.output


class TestTransactionCommands:
    """Tests for the transaction command group."""

    def test_add_and_list(self, cli_runner, temp_db, sample_crop):
        result = _invoke(
            cli_runner, temp_db, "transaction", "add", "income", "$1,000",
            "--category", "Crop Sale", "--date", "2024-01-15",
            "--description", "Wheat to mill", "--crop", str(sample_crop.id),
        )
        assert result.exit_code == 0
        assert "Created income transaction 1" in result.output

        result = _invoke(
            cli_runner, temp_db, "transaction", "list",
            "--start-date", "2024-01-01", "--end-date", "2024-01-31",
        )
        assert result.exit_code == 0
        assert "$1,000.00" in result.output
        assert "Wheat to mill [Wheat - Field A]" in result.output

    def test_add_rejects_unknown_category(self, cli_runner, temp_db):
        result = _invoke(
            cli_runner, temp_db, "transaction", "add", "expense", "20", "--category", "Snacks",
        )

        assert result.exit_code == 1
        assert "Error: Category 'Snacks' is not a configured expense category" in result.output

    def test_add_rejects_missing_crop(self, cli_runner, temp_db):
        result = _invoke(
            cli_runner, temp_db, "transaction", "add", "income", "20",
            "--category", "Crop Sale", "--crop", "9",
        )

        assert result.exit_code == 1
        assert "Crop 9 not found" in result.output

    def test_add_rejects_negative_amount(self, cli_runner, temp_db):
        result = _invoke(
            cli_runner, temp_db, "transaction", "add", "--category", "Fuel", "expense", "--", "-20",
        )

        assert result.exit_code == 1
        assert "cannot be negative" in result.output

    def test_list_filters_by_kind(self, cli_runner, temp_db, sample_farm):
        result = _invoke(cli_runner, temp_db, "transaction", "list", "--kind", "expense")

        assert result.exit_code == 0
        assert "Seeds" in result.output
        assert "Crop Sale" not in result.output

    def test_list_rejects_two_periods(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "transaction", "list", "--this-month", "--last-year")

        assert result.exit_code == 1
        assert "Only one period option" in result.output

    def test_list_empty(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "transaction", "list")

        assert result.exit_code == 0
        assert "No transactions found." in result.output

    def test_update_unlink_and_delete(self, cli_runner, temp_db, sample_farm):
        sale = str(sample_farm["sale"])

        result = _invoke(cli_runner, temp_db, "transaction", "update", sale, "--amount", "900", "--crop", "")
        assert result.exit_code == 0

        temp_db.disconnect()
        txn = temp_db.get_transaction(sample_farm["sale"])
        assert txn.amount == Decimal("900")
        assert txn.crop_id is None

        result = _invoke(cli_runner, temp_db, "transaction", "delete", sale)
        assert result.exit_code == 0
        result = _invoke(cli_runner, temp_db, "transaction", "delete", sale)
        assert result.exit_code == 1
        assert f"Transaction {sale} not found" in result.output


class TestEquipmentCommands:
    """Tests for the equipment command group."""

    def test_add_log_and_show(self, cli_runner, temp_db):
        result = _invoke(
            cli_runner, temp_db, "equipment", "add", "Tractor",
            "--purchased", "2020-04-01", "--model", "JD 5075E",
        )
        assert result.exit_code == 0
        assert "(ID: 1)" in result.output

        for description, cost, day in (("Oil change", "50", "2024-01-05"), ("Tyres", "75", "2024-02-01")):
            result = _invoke(
                cli_runner, temp_db, "equipment", "log", "1", description, "--cost", cost, "--date", day,
            )
            assert result.exit_code == 0

        result = _invoke(cli_runner, temp_db, "equipment", "show", "1")
        assert result.exit_code == 0
        assert "$125.00 over 2 log(s)" in result.output
        assert "Last service: 2024-02-01 - Tyres" in result.output

        result = _invoke(cli_runner, temp_db, "equipment", "list")
        assert "Tractor" in result.output
        assert "$125.00" in result.output

    def test_delete_log_wrong_equipment(self, cli_runner, temp_db, sample_farm, equipment_service):
        other = equipment_service.create_equipment(name="Pump", purchase_date=date(2019, 1, 1))
        log_id = temp_db.get_equipment(sample_farm["tractor"]).maintenance_logs[0].id

        result = _invoke(cli_runner, temp_db, "equipment", "delete-log", str(other), str(log_id))

        assert result.exit_code == 1
        assert "not found for equipment" in result.output

    def test_show_missing(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "equipment", "show", "4")

        assert result.exit_code == 1
        assert "Equipment 4 not found" in result.output

    def test_delete_with_yes(self, cli_runner, temp_db, sample_farm):
        result = _invoke(cli_runner, temp_db, "equipment", "delete", str(sample_farm["tractor"]), "--yes")

        assert result.exit_code == 0
        assert "Deleted equipment 'Tractor'" in result.output


class TestTodoCommands:
    """Tests for the to-do command group."""

    def test_add_toggle_list(self, cli_runner, temp_db):
        assert _invoke(cli_runner, temp_db, "todo", "add", "Fix fence").exit_code == 0
        assert _invoke(cli_runner, temp_db, "todo", "add", "Buy feed").exit_code == 0

        result = _invoke(cli_runner, temp_db, "todo", "toggle", "1")
        assert "To-do 1 marked done" in result.output

        result = _invoke(cli_runner, temp_db, "todo", "list")
        assert "[x] Fix fence" in result.output
        assert "[ ] Buy feed" in result.output

        result = _invoke(cli_runner, temp_db, "todo", "list", "--pending")
        assert "Fix fence" not in result.output

    def test_blank_task(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "todo", "add", "  ")

        assert result.exit_code == 1
        assert "Task cannot be empty" in result.output


class TestSettingsCommands:
    """Tests for the settings command group."""

    def test_show_defaults(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "settings", "show")

        assert result.exit_code == 0
        assert "Farm name: My Farm" in result.output
        assert "Currency:  USD" in result.output
        assert "  - Crop Sale" in result.output

    def test_currency_and_categories(self, cli_runner, temp_db):
        assert _invoke(cli_runner, temp_db, "settings", "currency", "eur").exit_code == 0
        assert _invoke(cli_runner, temp_db, "settings", "farm-name", "Green Acres").exit_code == 0
        assert _invoke(cli_runner, temp_db, "settings", "add-category", "expense", "Veterinary").exit_code == 0

        result = _invoke(cli_runner, temp_db, "settings", "add-category", "expense", "Veterinary")
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = _invoke(cli_runner, temp_db, "settings", "remove-category", "income", "Other")
        assert result.exit_code == 0

        temp_db.disconnect()
        settings = temp_db.get_settings()
        assert settings.farm_name == "Green Acres"
        assert settings.currency == "EUR"
        assert settings.expense_categories[-1] == "Veterinary"
        assert "Other" not in settings.income_categories

    def test_unknown_currency_symbol_note(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "settings", "currency", "CHF")

        assert result.exit_code == 0
        assert "no symbol is known for CHF" in result.output

    def test_invalid_currency(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "settings", "currency", "DOLLARS")

        assert result.exit_code == 1
        assert "three-letter code" in result.output


class TestNotificationCommands:
    """Tests for the notification command group."""

    def test_add_list_read(self, cli_runner, temp_db):
        assert _invoke(cli_runner, temp_db, "notification", "add", "Harvest due", "--link", "crops").exit_code == 0

        result = _invoke(cli_runner, temp_db, "notification", "list")
        assert result.exit_code == 0
        assert "Harvest due -> crops" in result.output

        result = _invoke(cli_runner, temp_db, "notification", "read", "--all")
        assert "Marked 1 notification(s) as read" in result.output

        temp_db.disconnect()
        notification = temp_db.list_notifications()[0]
        assert notification.read is True
        assert notification.seen is True

    def test_read_requires_id_or_all(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "notification", "read")

        assert result.exit_code == 1


class TestReportCommands:
    """Tests for dashboard, overview, report, summary and export."""

    def test_dashboard(self, cli_runner, temp_db, sample_farm):
        result = _invoke(cli_runner, temp_db, "dashboard", "--as-of", "2024-01-31")

        assert result.exit_code == 0
        assert "My Farm - January 2024" in result.output
        assert "$1,000.00" in result.output
        assert "new this month" in result.output
        assert "$800.00" in result.output
        assert "Harvest Wheat (2024-02-10, in 10 day(s))" in result.output
        assert "To-do: Fix the north fence" in result.output

    def test_dashboard_change_percent(self, cli_runner, temp_db, sample_farm, transaction_service):
        transaction_service.create_transaction(
            kind=TransactionKind.INCOME, amount=Decimal("1500"), date=date(2024, 2, 3), category="Crop Sale"
        )

        result = _invoke(cli_runner, temp_db, "dashboard", "--as-of", "2024-02-10")

        assert "up 50.0% vs last month" in result.output

    def test_overview(self, cli_runner, temp_db, sample_farm):
        result = _invoke(cli_runner, temp_db, "overview", "--as-of", "2024-01-20")

        assert result.exit_code == 0
        assert "2 total, 1 active, 1 harvested, 0 ready to harvest" in result.output
        assert "Last 7 days: income $1,000.00, expenses $0.00, net $1,000.00" in result.output

    def test_report_sections(self, cli_runner, temp_db, sample_farm):
        result = _invoke(
            cli_runner, temp_db, "report", "--as-of", "2024-02-15", "--months", "3",
            "--section", "flow", "--section", "expenses", "--section", "maintenance",
        )

        assert result.exit_code == 0
        assert "Jan 24" in result.output
        assert "Expenses by Category (2024)" in result.output
        assert "100.0%" in result.output
        assert "Tractor" in result.output
        assert "Crop Performance" not in result.output

    def test_summary_prints_document(self, cli_runner, temp_db, sample_farm):
        result = _invoke(
            cli_runner, temp_db, "summary", "--start-date", "2024-01-01", "--end-date", "2024-01-31",
        )

        assert result.exit_code == 0
        assert "Farm Ledger Summary" in result.output
        assert "For the period of 2024-01-01 to 2024-01-31" in result.output

    def test_summary_requires_range(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "summary", "--start-date", "2024-01-01")

        assert result.exit_code == 1
        assert "Both a start and an end date are required" in result.output

    def test_export_writes_file(self, cli_runner, temp_db, sample_farm, summary_service, tmp_path):
        expected = summary_service.build_export(date(2024, 1, 1), date(2024, 1, 31))
        output = tmp_path / "ledger.csv"

        result = _invoke(
            cli_runner, temp_db, "export",
            "--start-date", "2024-01-01", "--end-date", "2024-01-31", "-o", str(output),
        )

        assert result.exit_code == 0
        assert output.read_bytes() == expected.encode("utf-8")

    def test_export_crlf(self, cli_runner, temp_db, sample_farm, tmp_path):
        output = tmp_path / "ledger.csv"

        result = _invoke(
            cli_runner, temp_db, "export", "--start-date", "2024-01-01", "--end-date", "2024-01-31",
            "--line-ending", "crlf", "-o", str(output),
        )

        assert result.exit_code == 0
        data = output.read_bytes()
        assert data.startswith(b"Income Transactions\r\n")
        assert b"\n" not in data.replace(b"\r\n", b"")

    def test_export_default_filename(self, cli_runner, temp_db):
        with cli_runner.isolated_filesystem():
            result = _invoke(
                cli_runner, temp_db, "export", "--start-date", "2024-01-01", "--end-date", "2024-03-31",
            )

            assert result.exit_code == 0
            with open("farm_summary_2024-01-01_to_2024-03-31.csv", encoding="utf-8", newline="") as f:
                assert f.read().startswith("Income Transactions\n")

    def test_verbose_flag(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "--verbose", "todo", "list")

        assert result.exit_code == 0
