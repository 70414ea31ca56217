from collections import defaultdict
from decimal import Decimal
from functools import reduce
from typing import Dict, Iterable, Iterator, List, NamedTuple, Sequence, Tuple, TypeVar

from fintrack.domain import EXPENSE, INCOME, Shift, Transaction

ZERO = Decimal(0)

R = TypeVar("R")


class CategoryTotal(NamedTuple):
    category: str
    total: Decimal


class CategoryShare(NamedTuple):
    category: str
    total: Decimal
    percentage: Decimal


class MonthlyTotals(NamedTuple):
    period: str        # YYYY-MM
    income: Decimal
    expense: Decimal


def of_kind(trans: Iterable[Transaction], kind: str) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.type == kind, trans))


def total_by_kind(trans: Iterable[Transaction], kind: str) -> Decimal:
    return reduce(lambda acc, t: acc + t.amount if t.type == kind else acc, trans, ZERO)


def balance(trans: Sequence[Transaction]) -> Decimal:
    return total_by_kind(trans, INCOME) - total_by_kind(trans, EXPENSE)


def shift_total(shift: Shift) -> Decimal:
    bonus = ZERO if shift.bonus is None else shift.bonus
    deductions = ZERO if shift.deductions is None else shift.deductions
    return shift.hours * shift.hourly_rate + bonus - deductions


def salary_for_period(shifts: Iterable[Shift]) -> Decimal:
    return reduce(lambda acc, s: acc + shift_total(s), shifts, ZERO)


def category_breakdown(
    trans: Iterable[Transaction], kind: str, sort: bool = False
) -> List[CategoryTotal]:
    """Sum amounts of one kind per category.

    Categories come out in the order they are first seen, or by total
    descending when ``sort`` is set (ties keep first-seen order).
    """
    totals: Dict[str, Decimal] = {}
    for t in trans:
        if t.type == kind:
            totals[t.category] = totals.get(t.category, ZERO) + t.amount

    rows = [CategoryTotal(category, total) for category, total in totals.items()]
    if sort:
        rows.sort(key=lambda row: row.total, reverse=True)
    return rows


def category_shares(trans: Sequence[Transaction], kind: str) -> List[CategoryShare]:
    rows = category_breakdown(trans, kind)
    overall = sum((row.total for row in rows), ZERO)
    return [
        CategoryShare(
            row.category,
            row.total,
            (row.total * 100 / overall).quantize(Decimal("0.01")) if overall else ZERO,
        )
        for row in rows
    ]


def top_categories(trans: Iterable[Transaction], kind: str, k: int) -> Iterator[CategoryTotal]:
    for row in category_breakdown(trans, kind, sort=True)[: max(0, k)]:
        yield row


def monthly_breakdown(trans: Iterable[Transaction]) -> List[MonthlyTotals]:
    income: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    expense: Dict[str, Decimal] = defaultdict(lambda: ZERO)

    for t in trans:
        month = f"{t.date.year:04d}-{t.date.month:02d}"
        bucket = income if t.type == INCOME else expense
        bucket[month] += t.amount

    months = sorted(set(income) | set(expense))
    return [MonthlyTotals(m, income.get(m, ZERO), expense.get(m, ZERO)) for m in months]


def recent(records: Sequence[R], limit: int) -> Tuple[R, ...]:
    return tuple(records[: max(0, limit)])
