"""
Tests for form input validation.

A fixed `today` is passed wherever the future-date rule could fire.
"""

import datetime as dt
from decimal import Decimal

import pytest

from finance_tracker.config import AppSettings
from finance_tracker.models.transaction import ExpenseCategory, ExpenseDraft, IncomeDraft
from finance_tracker.validation import InvalidAmountError, TransactionValidator, parse_amount


TODAY = dt.date(2024, 3, 15)


@pytest.fixture
def validator():
    return TransactionValidator(AppSettings(
        max_transaction_amount=100_000,
        future_date_tolerance_days=0,
    ))


def issue_types(result, field):
    return [issue.issue_type for issue in result.issues if issue.field == field]


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize("raw, expected", [
        ("12", Decimal("12.00")),
        ("  7.5 ", Decimal("7.50")),
        ("1,234.565", Decimal("1234.57")),
        ("4.999", Decimal("5.00")),
        ("0.005", Decimal("0.01")),
        (3.1, Decimal("3.10")),
        (Decimal("2.345"), Decimal("2.35")),
    ])
    def test_valid_amounts(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw, issue_type", [
        ("", "missing"),
        ("   ", "missing"),
        ("abc", "invalid_format"),
        ("NaN", "invalid_format"),
        ("inf", "invalid_format"),
        ("0", "invalid_value"),
        ("-5", "invalid_value"),
        ("0.001", "invalid_value"),
        ("1e30", "invalid_value"),
        ("1" * 30, "invalid_value"),
        ("10,000,000,000,000", "invalid_value"),
    ])
    def test_invalid_amounts(self, raw, issue_type):
        with pytest.raises(InvalidAmountError) as exc_info:
            parse_amount(raw)
        assert exc_info.value.issue_type == issue_type


class TestExpenseValidation:
    """Tests for validate_expense."""

    def test_valid_expense(self, validator):
        result = validator.validate_expense(
            "  Groceries ", "1,050.255", "Food", "2024-03-01", today=TODAY,
        )
        assert result.is_valid
        assert result.issues == []
        assert isinstance(result.draft, ExpenseDraft)
        assert result.draft.description == "Groceries"
        assert result.draft.amount == Decimal("1050.26")
        assert result.draft.category == "food"
        assert result.draft.date == dt.date(2024, 3, 1)

    def test_accepts_enum_and_date_objects(self, validator):
        result = validator.validate_expense(
            "Bus", "2.50", ExpenseCategory.TRANSPORT, dt.date(2024, 3, 15), today=TODAY,
        )
        assert result.is_valid
        assert result.draft.category == "transport"

    def test_all_errors_reported_together(self, validator):
        result = validator.validate_expense("", "", "", "", today=TODAY)
        assert not result.is_valid
        assert result.draft is None
        assert {issue.field for issue in result.issues} == {
            "description", "amount", "category", "date",
        }
        assert result.error_count == 4

    @pytest.mark.parametrize("amount", ["1e30", "1" * 30])
    def test_huge_amount_is_rejected_not_raised(self, validator, amount):
        result = validator.validate_expense("Yacht", amount, "shopping", "2024-03-01", today=TODAY)
        assert not result.is_valid
        assert result.draft is None
        assert issue_types(result, "amount") == ["invalid_value"]

    def test_largest_amount_is_accepted(self, validator):
        result = validator.validate_expense(
            "House", "9,999,999,999,999.99", "shopping", "2024-03-01", today=TODAY,
        )
        assert result.is_valid
        assert result.draft.amount == Decimal("9999999999999.99")

    def test_unknown_category(self, validator):
        result = validator.validate_expense("Vet", "10", "pets", "2024-03-01", today=TODAY)
        assert not result.is_valid
        assert issue_types(result, "category") == ["invalid_value"]

    @pytest.mark.parametrize("value", ["01/03/2024", "2024-02-30", "March 1st"])
    def test_invalid_date(self, validator, value):
        result = validator.validate_expense("Tea", "1", "food", value, today=TODAY)
        assert issue_types(result, "date") == ["invalid_format"]

    def test_description_too_long(self, validator):
        result = validator.validate_expense("x" * 501, "1", "food", "2024-03-01", today=TODAY)
        assert issue_types(result, "description") == ["too_long"]


class TestWarnings:
    """Warnings are reported but never block a submission."""

    def test_future_date_warns(self, validator):
        result = validator.validate_income("Salary", "100", "2024-03-16", today=TODAY)
        assert result.is_valid
        assert [w.issue_type for w in result.warnings] == ["future_date"]

    def test_today_does_not_warn(self, validator):
        result = validator.validate_income("Salary", "100", "2024-03-15", today=TODAY)
        assert result.warnings == []

    def test_tolerance_days(self):
        validator = TransactionValidator(AppSettings(future_date_tolerance_days=2))
        result = validator.validate_income("Salary", "100", "2024-03-17", today=TODAY)
        assert result.warnings == []

    def test_large_amount_warns(self, validator):
        result = validator.validate_expense("Car", "250000", "shopping", "2024-03-01", today=TODAY)
        assert result.is_valid
        assert [w.issue_type for w in result.warnings] == ["suspicious_value"]


class TestIncomeValidation:
    """Tests for validate_income."""

    def test_valid_income(self, validator):
        result = validator.validate_income("Salary", "50000", "2024-03-01", today=TODAY)
        assert result.is_valid
        assert isinstance(result.draft, IncomeDraft)
        assert result.draft.amount == Decimal("50000.00")

    def test_amount_rounding_to_zero_is_an_error(self, validator):
        result = validator.validate_income("Gift", "0.004", "2024-03-01", today=TODAY)
        assert not result.is_valid
        assert issue_types(result, "amount") == ["invalid_value"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
