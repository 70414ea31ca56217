"""Field checks applied to candidate records before they reach the store.

Every ``validate_*`` function takes a plain mapping (form input, seed JSON
entry) and returns ``Right(fields)`` with normalized values, or
``Left(ValidationError)`` naming the first field that failed. Nothing is
partially applied: the caller either gets every field or none.
"""
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from functools import reduce
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from fintrack.domain import PAYMENT_STATUSES, PAYMENT_TYPES, PENDING, TRANSACTION_TYPES
from fintrack.errors import ValidationError
from fintrack.functional import Either, Left, Right

Check = Callable[[Mapping[str, Any], str], Either[ValidationError, Any]]

_MISSING = object()


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return number if number.is_finite() else None


def to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def text(candidate: Mapping[str, Any], field: str) -> Either[ValidationError, str]:
    value = candidate.get(field)
    if not isinstance(value, str) or not value.strip():
        return Left(ValidationError(field, "is required"))
    return Right(value.strip())


def choice(allowed: Sequence[str]) -> Check:
    def check(candidate: Mapping[str, Any], field: str) -> Either[ValidationError, str]:
        value = candidate.get(field)
        if value not in allowed:
            return Left(ValidationError(field, f"must be one of {', '.join(allowed)}"))
        return Right(value)

    return check


def positive(candidate: Mapping[str, Any], field: str) -> Either[ValidationError, Decimal]:
    number = to_decimal(candidate.get(field))
    if number is None:
        return Left(ValidationError(field, "must be a number"))
    if number <= 0:
        return Left(ValidationError(field, "must be greater than zero"))
    return Right(number)


def optional_non_negative(
    candidate: Mapping[str, Any], field: str
) -> Either[ValidationError, Optional[Decimal]]:
    raw = candidate.get(field, _MISSING)
    if raw is _MISSING or raw is None or raw == "":
        return Right(None)
    number = to_decimal(raw)
    if number is None:
        return Left(ValidationError(field, "must be a number"))
    if number < 0:
        return Left(ValidationError(field, "must not be negative"))
    return Right(number)


def moment(candidate: Mapping[str, Any], field: str) -> Either[ValidationError, datetime]:
    parsed = to_datetime(candidate.get(field))
    if parsed is None:
        return Left(ValidationError(field, "must be a valid date"))
    return Right(parsed)


def calendar_day(candidate: Mapping[str, Any], field: str) -> Either[ValidationError, date]:
    parsed = to_datetime(candidate.get(field))
    if parsed is None:
        return Left(ValidationError(field, "must be a valid date"))
    return Right(parsed.date())


def collect(
    candidate: Mapping[str, Any], checks: Sequence[Tuple[str, Check]]
) -> Either[ValidationError, dict]:
    """Run checks in order, stopping at the first failure."""

    def step(acc: Either[ValidationError, dict], item: Tuple[str, Check]):
        field, check = item
        return acc.bind(
            lambda fields: check(candidate, field).bind(
                lambda value: Right({**fields, field: value})
            )
        )

    if not isinstance(candidate, Mapping):
        return Left(ValidationError("candidate", "must be a mapping of fields"))
    return reduce(step, checks, Right({}))


TRANSACTION_CHECKS = (
    ("type", choice(TRANSACTION_TYPES)),
    ("category", text),
    ("amount", positive),
    ("description", text),
    ("date", moment),
)

SHIFT_CHECKS = (
    ("date", calendar_day),
    ("hours", positive),
    ("hourly_rate", positive),
    ("bonus", optional_non_negative),
    ("deductions", optional_non_negative),
)

PAYMENT_CHECKS = (
    ("name", text),
    ("amount", positive),
    ("due_date", calendar_day),
    ("type", choice(PAYMENT_TYPES)),
)


def validate_transaction(candidate: Mapping[str, Any]) -> Either[ValidationError, dict]:
    return collect(candidate, TRANSACTION_CHECKS)


def validate_shift(candidate: Mapping[str, Any]) -> Either[ValidationError, dict]:
    return collect(candidate, SHIFT_CHECKS)


def validate_status(value: Any) -> Either[ValidationError, str]:
    return choice(PAYMENT_STATUSES)({"status": value}, "status")


def validate_payment(
    candidate: Mapping[str, Any], with_status: bool = True
) -> Either[ValidationError, dict]:
    """Check a payment candidate.

    ``status`` is optional and defaults to pending. With ``with_status`` off
    it is ignored entirely and left out of the result.
    """
    result = collect(candidate, PAYMENT_CHECKS)
    if result.is_left() or not with_status:
        return result
    status = candidate.get("status") or PENDING
    return validate_status(status).bind(
        lambda checked: Right({**result.unwrap(), "status": checked})
    )
