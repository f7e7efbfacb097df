"""
Tests for startup wiring and the session facade.

Settings are built from environment variables pointing at tmp_path, so
nothing is written to the real home directory.
"""

import itertools
import json
from decimal import Decimal

import pytest

from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.models.report import MonthlyPoint
from finance_tracker.orchestrator import FinanceSession, create_store
from finance_tracker.services.storage import (
    FileKeyValueStorage,
    InMemoryAuditSink,
    InMemoryKeyValueStorage,
)


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "finance"))
    monkeypatch.setenv("DISPLAY_CURRENCY_SYMBOL", "$")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def session():
    counter = itertools.count(1)
    store = create_store(
        storage=InMemoryKeyValueStorage(),
        id_factory=lambda: f"tx-{next(counter)}",
    )
    return FinanceSession(store)


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_env_overrides(self, settings, tmp_path):
        assert settings.storage.data_dir == tmp_path / "finance"
        assert settings.display.currency_symbol == "$"
        assert settings.display.month_label_format == "%b %Y"

    def test_invalid_log_level_is_reported(self, settings, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is False
        assert "app_error" in results


class TestCreateStore:
    """Tests for create_store."""

    def test_uses_file_storage_from_settings(self, settings, tmp_path):
        store = create_store(settings=settings)
        store.add_income({"description": "Salary", "amount": "100.00", "date": "2024-01-01"})

        saved = (tmp_path / "finance" / "income.json").read_text(encoding="utf-8")
        assert json.loads(saved)[0]["amount"] == 100.0

    def test_reloads_previous_state(self, settings):
        first = create_store(settings=settings)
        expense = first.add_expense({
            "description": "Tea", "amount": "1.20", "category": "food", "date": "2024-01-01",
        })
        first.close()

        second = create_store(settings=settings)
        assert second.expenses == (expense,)

    def test_audit_sink_receives_load_event(self):
        sink = InMemoryAuditSink()
        create_store(storage=InMemoryKeyValueStorage(), audit_sink=sink)
        assert sink.events[0].event_type.value == "store_loaded"


class TestFinanceSession:
    """Tests for the session facade."""

    def test_submit_valid_expense(self, session):
        expense, result = session.submit_expense("Lunch", "12.345", "food", "2024-01-05")
        assert result.is_valid
        assert expense.id == "tx-1"
        assert expense.amount == Decimal("12.35")
        assert session.expenses == (expense,)

    def test_submit_invalid_expense_changes_nothing(self, session):
        expense, result = session.submit_expense("Lunch", "0", "food", "2024-01-05")
        assert expense is None
        assert result.has_errors
        assert session.expenses == ()

    def test_submit_and_remove_income(self, session):
        income, _ = session.submit_income("Salary", "1,000", "2024-01-01")
        assert session.income == (income,)
        session.remove_income(income.id)
        session.remove_income(income.id)
        assert session.income == ()

    def test_views_follow_current_state(self, session):
        session.submit_income("Salary", "1000", "2024-01-01")
        session.submit_expense("Groceries", "50", "food", "2024-01-05")
        session.submit_expense("Dinner", "30", "food", "2024-02-10")
        bus, _ = session.submit_expense("Bus", "20", "transport", "2024-02-11")

        summary = session.summary()
        assert summary.total_expenses == Decimal("100.00")
        assert summary.balance == Decimal("900.00")
        assert session.expenses_by_month() == {
            "Feb 2024": Decimal("50.00"),
            "Jan 2024": Decimal("50.00"),
        }
        assert [p.label for p in session.monthly_trend()] == ["Jan 2024", "Feb 2024"]

        session.remove_expense(bus.id)

        assert [s.name for s in session.chart_distribution()] == ["food"]
        assert session.monthly_trend()[-1] == MonthlyPoint(label="Feb 2024", amount=Decimal("30.00"))

    def test_open_and_close_flushes_to_disk(self, settings, tmp_path):
        with FinanceSession.open(settings) as session:
            session.submit_expense("Bus", "2.50", "transport", "2024-01-02")

        storage = FileKeyValueStorage(tmp_path / "finance")
        saved = json.loads(storage.get("expenses"))
        assert saved[0]["description"] == "Bus"
        assert session.store.closed


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
