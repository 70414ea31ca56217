from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

PENDING = "pending"
PAID = "paid"
OVERDUE = "overdue"
PAYMENT_STATUSES = (PENDING, PAID, OVERDUE)

RECURRING = "recurring"
CREDIT = "credit"
DEBT = "debt"
PAYMENT_TYPES = (RECURRING, CREDIT, DEBT)


@dataclass(frozen=True)
class Transaction:
    id: str
    type: str          # income or expense
    category: str
    amount: Decimal    # always positive, sign comes from type
    description: str
    date: datetime


@dataclass(frozen=True)
class Payment:
    id: str
    name: str
    amount: Decimal
    due_date: date
    status: str        # pending, paid or overdue
    type: str          # recurring, credit or debt

    def with_status(self, status: str) -> "Payment":
        return replace(self, status=status)


@dataclass(frozen=True)
class Shift:
    id: str
    date: date
    hours: Decimal
    hourly_rate: Decimal
    bonus: Optional[Decimal] = None
    deductions: Optional[Decimal] = None
