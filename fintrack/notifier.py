from datetime import date, datetime
from typing import Callable, Iterable, List, NamedTuple, Union

from fintrack.domain import PAID, Payment

CRITICAL = "critical"
WARNING = "warning"

DEFAULT_WINDOW_DAYS = 3


class Notification(NamedTuple):
    payment_id: str
    message: str
    severity: str
    days_until_due: int


def days_until_due(payment: Payment, now: Union[date, datetime]) -> int:
    today = now.date() if isinstance(now, datetime) else now
    return (payment.due_date - today).days


def _message(payment: Payment, days: int, format_amount: Callable[[object], str]) -> str:
    amount = format_amount(payment.amount)
    if days == 0:
        return f"Payment '{payment.name}' of {amount} is due today"
    unit = "day" if days == 1 else "days"
    return f"Payment '{payment.name}' of {amount} is due in {days} {unit}"


def due_notifications(
    payments: Iterable[Payment],
    now: Union[date, datetime],
    window_days: int = DEFAULT_WINDOW_DAYS,
    format_amount: Callable[[object], str] = str,
) -> List[Notification]:
    """Reminders for unpaid payments due between today and ``window_days`` ahead.

    Past-due payments are left out. Output follows the order of ``payments``.
    """
    result = []
    for p in payments:
        if p.status == PAID:
            continue
        days = days_until_due(p, now)
        if not 0 <= days <= window_days:
            continue
        severity = CRITICAL if days == 0 else WARNING
        result.append(Notification(p.id, _message(p, days, format_amount), severity, days))
    return result
