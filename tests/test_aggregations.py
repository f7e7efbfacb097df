"""
Tests for the aggregation engine.

Aggregations are pure, so these tests build records directly and never
touch a store.
"""

import itertools
import random
from decimal import Decimal

import pytest

from finance_tracker.models.report import CategorySlice, MonthlyPoint
from finance_tracker.models.transaction import Expense, Income
from finance_tracker.queries import aggregations


_ids = itertools.count(1)


def make_expense(amount, category="food", date="2024-01-05", description="Item"):
    return Expense(
        id=f"e-{next(_ids)}",
        description=description,
        amount=amount,
        category=category,
        date=date,
    )


def make_income(amount, date="2024-01-01"):
    return Income(
        id=f"i-{next(_ids)}",
        description="Salary",
        amount=amount,
        date=date,
    )


@pytest.fixture
def scenario():
    """Three expenses over two months and one salary payment."""
    expenses = [
        make_expense("50.00", "food", "2024-01-05"),
        make_expense("30.00", "food", "2024-02-10"),
        make_expense("20.00", "transport", "2024-02-11"),
    ]
    income = [make_income("1000.00")]
    return income, expenses


class TestTotals:
    """Tests for totals and balance."""

    def test_scenario_totals(self, scenario):
        income, expenses = scenario
        assert aggregations.total_expenses(expenses) == Decimal("100.00")
        assert aggregations.total_income(income) == Decimal("1000.00")
        assert aggregations.balance(income, expenses) == Decimal("900.00")

    def test_empty_collections(self):
        assert aggregations.total_expenses([]) == Decimal("0.00")
        assert aggregations.total_income([]) == Decimal("0.00")
        assert aggregations.balance([], []) == Decimal("0.00")
        assert aggregations.expenses_by_category([]) == {}
        assert aggregations.expenses_by_month([]) == {}
        assert aggregations.monthly_trend([]) == []

    def test_sums_are_exact(self):
        """Ten times 0.10 is exactly 1.00, not 0.9999999."""
        expenses = [make_expense("0.10") for _ in range(10)]
        assert aggregations.total_expenses(expenses) == Decimal("1.00")

    def test_balance_may_be_negative(self):
        expenses = [make_expense("120.00")]
        income = [make_income("100.00")]
        assert aggregations.balance(income, expenses) == Decimal("-20.00")


class TestGrouping:
    """Tests for per-category and per-month sums."""

    def test_by_category(self, scenario):
        _, expenses = scenario
        assert aggregations.expenses_by_category(expenses) == {
            "food": Decimal("80.00"),
            "transport": Decimal("20.00"),
        }

    def test_by_category_keeps_unknown_categories(self):
        expenses = [make_expense("5.00", "pets"), make_expense("1.00", "food")]
        assert list(aggregations.expenses_by_category(expenses)) == ["pets", "food"]

    def test_by_month_newest_first(self, scenario):
        _, expenses = scenario
        by_month = aggregations.expenses_by_month(expenses)
        assert list(by_month.items()) == [
            ("Feb 2024", Decimal("50.00")),
            ("Jan 2024", Decimal("50.00")),
        ]

    def test_by_month_custom_label_format(self, scenario):
        _, expenses = scenario
        by_month = aggregations.expenses_by_month(expenses, "%Y-%m")
        assert list(by_month) == ["2024-02", "2024-01"]

    def test_same_month_of_different_years_kept_apart(self):
        expenses = [
            make_expense("1.00", date="2023-03-01"),
            make_expense("2.00", date="2024-03-01"),
        ]
        assert aggregations.expenses_by_month(expenses) == {
            "Mar 2024": Decimal("2.00"),
            "Mar 2023": Decimal("1.00"),
        }

    def test_groupings_add_up_to_total(self):
        """Category sums and month sums both decompose the grand total."""
        rng = random.Random(7)
        expenses = [
            make_expense(
                Decimal(rng.randint(1, 99999)) / 100,
                rng.choice(["food", "transport", "health", "pets"]),
                f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}",
            )
            for _ in range(60)
        ]
        total = aggregations.total_expenses(expenses)
        assert sum(aggregations.expenses_by_category(expenses).values()) == total
        assert sum(aggregations.expenses_by_month(expenses).values()) == total

    def test_results_do_not_depend_on_input_order(self, scenario):
        _, expenses = scenario
        shuffled = list(reversed(expenses))

        assert aggregations.total_expenses(shuffled) == aggregations.total_expenses(expenses)
        assert (
            aggregations.expenses_by_category(shuffled)
            == aggregations.expenses_by_category(expenses)
        )
        assert (
            list(aggregations.expenses_by_month(shuffled).items())
            == list(aggregations.expenses_by_month(expenses).items())
        )

    def test_inputs_are_not_mutated(self, scenario):
        _, expenses = scenario
        before = list(expenses)
        aggregations.expenses_by_month(expenses)
        assert expenses == before


class TestChartData:
    """Tests for the chart-facing shapes."""

    def test_chart_distribution(self, scenario):
        _, expenses = scenario
        assert aggregations.chart_distribution(expenses) == [
            CategorySlice(name="food", value=Decimal("80.00")),
            CategorySlice(name="transport", value=Decimal("20.00")),
        ]

    def test_monthly_trend_oldest_first(self, scenario):
        _, expenses = scenario
        assert aggregations.monthly_trend(expenses) == [
            MonthlyPoint(label="Jan 2024", amount=Decimal("50.00")),
            MonthlyPoint(label="Feb 2024", amount=Decimal("50.00")),
        ]


class TestSummary:
    """Tests for the summary card figures."""

    def test_summarize_scenario(self, scenario):
        income, expenses = scenario
        summary = aggregations.summarize(income, expenses)

        assert summary.total_income == Decimal("1000.00")
        assert summary.total_expenses == Decimal("100.00")
        assert summary.balance == Decimal("900.00")
        assert summary.top_category == "food"
        assert summary.top_category_amount == Decimal("80.00")
        assert summary.income_count == 1
        assert summary.expense_count == 3
        assert summary.is_overspent is False

    def test_summarize_empty(self):
        summary = aggregations.summarize([], [])
        assert summary.top_category is None
        assert summary.top_category_amount is None
        assert summary.by_category == {}

    def test_top_category_tie_goes_to_first_seen(self):
        expenses = [
            make_expense("10.00", "transport"),
            make_expense("10.00", "food"),
        ]
        assert aggregations.summarize([], expenses).top_category == "transport"

    def test_overspent(self):
        summary = aggregations.summarize([make_income("1.00")], [make_expense("2.00")])
        assert summary.is_overspent is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
