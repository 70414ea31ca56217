from datetime import date, datetime
from decimal import Decimal

import pytest

from fintrack.validation import (
    to_decimal,
    validate_payment,
    validate_shift,
    validate_status,
    validate_transaction,
)


def make_tx_candidate(**overrides):
    candidate = {
        "type": "expense",
        "category": "Groceries",
        "amount": 1200,
        "description": "Weekly shop",
        "date": "2025-01-08",
    }
    candidate.update(overrides)
    return candidate


def test_validate_transaction_normalizes_fields():
    result = validate_transaction(make_tx_candidate(category="  Groceries ", amount="1200.50"))

    assert result.is_right()
    fields = result.unwrap()
    assert fields["category"] == "Groceries"
    assert fields["amount"] == Decimal("1200.50")
    assert fields["date"] == datetime(2025, 1, 8)


def test_validate_transaction_accepts_date_objects():
    fields = validate_transaction(make_tx_candidate(date=date(2025, 1, 8))).unwrap()
    assert fields["date"] == datetime(2025, 1, 8, 0, 0)

    stamp = datetime(2025, 1, 8, 14, 30)
    assert validate_transaction(make_tx_candidate(date=stamp)).unwrap()["date"] == stamp


@pytest.mark.parametrize("amount", [0, -5, "0", Decimal("-0.01")])
def test_validate_transaction_rejects_non_positive_amount(amount):
    result = validate_transaction(make_tx_candidate(amount=amount))

    assert result.is_left()
    error = result.get_error()
    assert error.field == "amount"
    assert error.reason == "must be greater than zero"


@pytest.mark.parametrize("amount", [None, "abc", True, float("nan"), float("inf"), [1]])
def test_validate_transaction_rejects_non_numeric_amount(amount):
    error = validate_transaction(make_tx_candidate(amount=amount)).get_error()
    assert error.field == "amount"
    assert error.reason == "must be a number"


def test_validate_transaction_reports_first_failing_field():
    candidate = make_tx_candidate(type="transfer", category="", amount=0)
    error = validate_transaction(candidate).get_error()

    assert error.field == "type"
    assert "income" in error.reason and "expense" in error.reason


def test_validate_transaction_requires_text_fields():
    assert validate_transaction(make_tx_candidate(category="   ")).get_error().field == "category"
    assert validate_transaction(make_tx_candidate(description=None)).get_error().field == "description"


@pytest.mark.parametrize("value", ["2025-02-30", "yesterday", None, 20250101])
def test_validate_transaction_rejects_invalid_dates(value):
    error = validate_transaction(make_tx_candidate(date=value)).get_error()
    assert error.field == "date"
    assert error.reason == "must be a valid date"


def test_validate_transaction_rejects_non_mapping():
    error = validate_transaction(["income"]).get_error()
    assert error.field == "candidate"


def test_validate_shift_keeps_missing_adjustments_as_none():
    fields = validate_shift({"date": "2025-01-16", "hours": 8, "hourly_rate": 800}).unwrap()

    assert fields["date"] == date(2025, 1, 16)
    assert fields["bonus"] is None
    assert fields["deductions"] is None


def test_validate_shift_zero_bonus_is_not_missing():
    fields = validate_shift({"date": "2025-01-16", "hours": 8, "hourly_rate": 800, "bonus": 0}).unwrap()
    assert fields["bonus"] == Decimal(0)


def test_validate_shift_checks():
    assert validate_shift({"date": "2025-01-16", "hours": 0, "hourly_rate": 800}).get_error().field == "hours"
    assert validate_shift({"date": "2025-01-16", "hours": 8, "hourly_rate": -1}).get_error().field == "hourly_rate"
    error = validate_shift({"date": "2025-01-16", "hours": 8, "hourly_rate": 800, "deductions": -300}).get_error()
    assert error.field == "deductions"
    assert error.reason == "must not be negative"


def test_validate_payment_defaults_to_pending():
    fields = validate_payment(
        {"name": "Internet", "amount": 1200, "due_date": "2025-02-01", "type": "recurring"}
    ).unwrap()

    assert fields["status"] == "pending"
    assert fields["due_date"] == date(2025, 2, 1)


def test_validate_payment_checks_enums():
    base = {"name": "Internet", "amount": 1200, "due_date": "2025-02-01", "type": "loan"}
    assert validate_payment(base).get_error().field == "type"

    base["type"] = "credit"
    base["status"] = "late"
    assert validate_payment(base).get_error().field == "status"


def test_validate_status():
    assert validate_status("paid").unwrap() == "paid"
    assert validate_status("done").is_left()


def test_to_decimal():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(" 15 ") == Decimal(15)
    assert to_decimal(False) is None


def test_validate_payment_without_status_skips_it():
    result = validate_payment(
        {"name": "Internet", "amount": 1200, "due_date": "2025-02-01", "type": "recurring", "status": "bogus"},
        with_status=False,
    )

    assert result.is_right()
    assert "status" not in result.unwrap()
