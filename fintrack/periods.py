"""Bi-monthly payroll periods.

Period 1 runs from the 30th of one month through the 14th of the next and is
paid out on the 15th. Period 2 covers the 15th through the 29th and is paid
out on the 30th. The rule only looks at the day of the month, so the 31st
belongs to period 1 and short months simply have no days >= 30.
"""
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Mapping, NamedTuple, Optional, Tuple

from fintrack.aggregation import salary_for_period
from fintrack.domain import Shift

PERIOD_1 = 1
PERIOD_2 = 2
PERIODS = (PERIOD_1, PERIOD_2)

PAYOUT_DAYS = {PERIOD_1: 15, PERIOD_2: 30}


class SalaryPeriod(NamedTuple):
    period: int
    shifts: Tuple[Shift, ...]
    total: Decimal
    payout_day: int

    @property
    def shift_count(self) -> int:
        return len(self.shifts)


def salary_period(day: date) -> int:
    if day.day >= 30 or day.day <= 14:
        return PERIOD_1
    return PERIOD_2


def _previous_month(day: date) -> Tuple[int, int]:
    if day.month == 1:
        return day.year - 1, 12
    return day.year, day.month - 1


def in_period(day: date, period: int, reference: Optional[date] = None) -> bool:
    """Whether ``day`` falls in ``period``.

    Without a reference every month counts. With one, period 2 is limited to
    the reference month and period 1 to the reference month's first half plus
    the tail (30th, 31st) of the month before.
    """
    if salary_period(day) != period:
        return False
    if reference is None:
        return True
    if (day.year, day.month) == (reference.year, reference.month):
        return period == PERIOD_2 or day.day <= 14
    return period == PERIOD_1 and day.day >= 30 and (day.year, day.month) == _previous_month(reference)


def by_period(period: int, reference: Optional[date] = None) -> Callable[[Shift], bool]:
    def _filter(s: Shift) -> bool:
        return in_period(s.date, period, reference)

    return _filter


def salary_periods(
    shifts: Iterable[Shift],
    reference: Optional[date] = None,
    payout_days: Mapping[int, int] = PAYOUT_DAYS,
) -> Tuple[SalaryPeriod, ...]:
    shifts = tuple(shifts)
    result = []
    for period in PERIODS:
        members = tuple(filter(by_period(period, reference), shifts))
        result.append(SalaryPeriod(period, members, salary_for_period(members), payout_days[period]))
    return tuple(result)
