"""
Transaction Input Validation

DESIGN DECISION: Raw form input is validated BEFORE it reaches the store.
The store trusts nothing and rejects bad amounts, but a rejection there is a
programming error. This module is where users get friendly messages.

Checks, in order:
- description: trimmed, non-empty
- amount: trimmed, thousands separators removed, finite, > 0,
  rounded half-up to cents, still > 0 after rounding, at most MAX_AMOUNT
- category (expenses only): member of the closed set
- date: ISO 'YYYY-MM-DD'

Warnings never block a submission:
- amount above the configured sanity threshold
- date further in the future than the configured tolerance

IMPORTANT: Validation NEVER silently fixes issues other than rounding
the amount to cents, which is the documented precondition of the store.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional, Union

from pydantic import ValidationError

from finance_tracker.config import AppSettings, get_settings
from finance_tracker.models.transaction import (
    MAX_AMOUNT,
    ExpenseCategory,
    ExpenseDraft,
    IncomeDraft,
    round_amount,
    to_decimal,
)
from finance_tracker.models.validation import ValidationIssue, ValidationResult


class InvalidAmountError(ValueError):
    """Amount text that cannot become a positive two-decimal amount."""

    def __init__(self, message: str, issue_type: str):
        super().__init__(message)
        self.issue_type = issue_type


def parse_amount(raw: Union[str, int, float, Decimal]) -> Decimal:
    """
    Parse user-entered amount text into a positive amount rounded to cents.

    '1,234.565' -> Decimal('1234.57')

    Raises:
        InvalidAmountError: empty, unparsable, non-finite, non-positive or too large input
    """
    text = str(raw).strip()
    if not text:
        raise InvalidAmountError("Please enter an amount", "missing")

    try:
        value = to_decimal(text.replace(",", ""))
    except ValueError:
        raise InvalidAmountError("Please enter a valid amount", "invalid_format") from None

    if value <= 0:
        raise InvalidAmountError("Amount must be greater than zero", "invalid_value")

    try:
        rounded = round_amount(value)
    except ValueError:
        raise InvalidAmountError("Amount is too large", "invalid_value") from None

    if rounded <= 0:
        raise InvalidAmountError(
            "Amount is too small (it rounds to zero)", "invalid_value"
        )
    if rounded > MAX_AMOUNT:
        raise InvalidAmountError(
            f"Amount must not exceed {MAX_AMOUNT:,}", "invalid_value"
        )
    return rounded


class TransactionValidator:
    """
    Turns raw expense / income form input into store-ready drafts.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def validate_expense(
        self,
        description: str,
        amount: Union[str, int, float, Decimal],
        category: Union[str, ExpenseCategory],
        date: Union[str, dt.date],
        today: Optional[dt.date] = None,
    ) -> ValidationResult:
        issues: list[ValidationIssue] = []

        clean_description = self._check_description(description, issues)
        clean_amount = self._check_amount(amount, issues)
        clean_category = self._check_category(category, issues)
        clean_date = self._check_date(date, issues, today)

        if any(issue.severity == "error" for issue in issues):
            return ValidationResult(issues=issues)

        return self._build(
            ExpenseDraft,
            issues,
            description=clean_description,
            amount=clean_amount,
            category=clean_category,
            date=clean_date,
        )

    def validate_income(
        self,
        description: str,
        amount: Union[str, int, float, Decimal],
        date: Union[str, dt.date],
        today: Optional[dt.date] = None,
    ) -> ValidationResult:
        issues: list[ValidationIssue] = []

        clean_description = self._check_description(description, issues)
        clean_amount = self._check_amount(amount, issues)
        clean_date = self._check_date(date, issues, today)

        if any(issue.severity == "error" for issue in issues):
            return ValidationResult(issues=issues)

        return self._build(
            IncomeDraft,
            issues,
            description=clean_description,
            amount=clean_amount,
            date=clean_date,
        )

    # ------------------------------------------------------------------

    def _build(self, model, issues: list[ValidationIssue], **fields) -> ValidationResult:
        try:
            draft = model(**fields)
        except ValidationError as e:
            for error in e.errors():
                issues.append(ValidationIssue(
                    field=".".join(str(part) for part in error["loc"]) or "draft",
                    issue_type="invalid",
                    message=error["msg"],
                    severity="error",
                ))
            return ValidationResult(issues=issues)
        return ValidationResult(issues=issues, draft=draft)

    def _check_description(
        self,
        description: str,
        issues: list[ValidationIssue],
    ) -> Optional[str]:
        text = (description or "").strip()
        if not text:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Please enter a description",
                severity="error",
            ))
            return None
        if len(text) > 500:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message="Description must be at most 500 characters",
                severity="error",
                suggested_fix="Shorten the description",
            ))
            return None
        return text

    def _check_amount(
        self,
        amount,
        issues: list[ValidationIssue],
    ) -> Optional[Decimal]:
        try:
            value = parse_amount(amount)
        except InvalidAmountError as e:
            issues.append(ValidationIssue(
                field="amount",
                issue_type=e.issue_type,
                message=str(e),
                severity="error",
            ))
            return None

        if value > Decimal(str(self._settings.max_transaction_amount)):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount {value} is unusually large",
                severity="warning",
                suggested_fix="Check for an extra digit",
            ))
        return value

    def _check_category(
        self,
        category,
        issues: list[ValidationIssue],
    ) -> Optional[str]:
        if isinstance(category, ExpenseCategory):
            return category.value
        try:
            return ExpenseCategory(str(category or "").strip().lower()).value
        except ValueError:
            allowed = ", ".join(c.value for c in ExpenseCategory)
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"Unknown category: {category!r}",
                severity="error",
                suggested_fix=f"Choose one of: {allowed}",
            ))
            return None

    def _check_date(
        self,
        value,
        issues: list[ValidationIssue],
        today: Optional[dt.date],
    ) -> Optional[dt.date]:
        if isinstance(value, dt.datetime):
            parsed = value.date()
        elif isinstance(value, dt.date):
            parsed = value
        else:
            try:
                parsed = dt.datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
            except ValueError:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message="Please enter a valid date (YYYY-MM-DD)",
                    severity="error",
                ))
                return None

        today = today or dt.date.today()
        latest = today + dt.timedelta(days=self._settings.future_date_tolerance_days)
        if parsed > latest:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date {parsed.isoformat()} is in the future",
                severity="warning",
                suggested_fix="Check the year and month",
            ))
        return parsed
