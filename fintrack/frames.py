"""pandas views of store snapshots for the dashboard tables and charts."""
from typing import Iterable, Sequence

import pandas as pd

from fintrack.aggregation import CategoryTotal, MonthlyTotals, shift_total
from fintrack.domain import Payment, Shift, Transaction

TRANSACTION_COLUMNS = ["id", "date", "type", "category", "description", "amount"]
SHIFT_COLUMNS = ["id", "date", "hours", "hourly_rate", "bonus", "deductions", "total"]
PAYMENT_COLUMNS = ["id", "name", "amount", "due_date", "status", "type"]
MONTHLY_COLUMNS = ["period", "income", "expense", "net"]
CATEGORY_COLUMNS = ["category", "total"]


def transactions_frame(trans: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "id": t.id,
            "date": t.date,
            "type": t.type,
            "category": t.category,
            "description": t.description,
            "amount": float(t.amount),
        }
        for t in trans
    ]
    df = pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def shifts_frame(shifts: Iterable[Shift]) -> pd.DataFrame:
    rows = []
    for s in shifts:
        rows.append({
            "id": s.id,
            "date": s.date,
            "hours": float(s.hours),
            "hourly_rate": float(s.hourly_rate),
            # absent adjustments become NaN, a zero bonus stays 0.0
            "bonus": None if s.bonus is None else float(s.bonus),
            "deductions": None if s.deductions is None else float(s.deductions),
            "total": float(shift_total(s)),
        })
    df = pd.DataFrame(rows, columns=SHIFT_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def payments_frame(payments: Iterable[Payment]) -> pd.DataFrame:
    rows = [
        {
            "id": p.id,
            "name": p.name,
            "amount": float(p.amount),
            "due_date": p.due_date,
            "status": p.status,
            "type": p.type,
        }
        for p in payments
    ]
    df = pd.DataFrame(rows, columns=PAYMENT_COLUMNS)
    df["due_date"] = pd.to_datetime(df["due_date"])
    return df


def monthly_frame(months: Sequence[MonthlyTotals]) -> pd.DataFrame:
    df = pd.DataFrame(
        [(m.period, float(m.income), float(m.expense)) for m in months],
        columns=MONTHLY_COLUMNS[:3],
    )
    df["net"] = df["income"] - df["expense"]
    return df


def category_frame(rows: Sequence[CategoryTotal]) -> pd.DataFrame:
    return pd.DataFrame([(r.category, float(r.total)) for r in rows], columns=CATEGORY_COLUMNS)
