import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from fintrack import aggregation, notifier, periods
from fintrack.config import Settings
from fintrack.domain import EXPENSE, INCOME, PAID, TRANSACTION_TYPES, Payment, Shift, Transaction
from fintrack.errors import ValidationError
from fintrack.formatting import Formatter
from fintrack.seed import load_seed
from fintrack.store import RecordStore

logger = logging.getLogger(__name__)


class Totals(NamedTuple):
    income: Decimal
    expense: Decimal
    balance: Decimal


def _check_kind(kind: str) -> str:
    if kind not in TRANSACTION_TYPES:
        raise ValidationError("type", f"must be one of {', '.join(TRANSACTION_TYPES)}")
    return kind


class FinanceService:
    """Facade the dashboard talks to: submissions go to the store, queries are computed on demand.

    Nothing derived is cached; every query reads the current store snapshot.
    """

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        settings: Optional[Settings] = None,
        formatter: Optional[Formatter] = None,
    ):
        self.settings = settings or Settings()
        self.store = store if store is not None else RecordStore()
        self.formatter = formatter or Formatter(self.settings.currency)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FinanceService":
        """Build a service whose store starts from the configured seed file, if any."""
        store = RecordStore()
        if settings.seed_path is not None:
            transactions, payments, shifts = load_seed(settings.seed_path)
            store = RecordStore(transactions, payments, shifts)
        return cls(store=store, settings=settings)

    # submissions

    def submit_transaction(self, candidate: Mapping[str, Any]) -> Transaction:
        return self.store.add_transaction(candidate)

    def submit_shift(self, candidate: Mapping[str, Any]) -> Shift:
        return self.store.add_shift(candidate)

    def submit_payment(self, candidate: Mapping[str, Any]) -> Payment:
        return self.store.add_payment(candidate)

    def mark_paid(self, payment_id: str) -> Payment:
        return self.store.set_payment_status(payment_id, PAID)

    # queries

    def totals(self) -> Totals:
        trans = self.store.list_transactions()
        income = aggregation.total_by_kind(trans, INCOME)
        expense = aggregation.total_by_kind(trans, EXPENSE)
        return Totals(income, expense, income - expense)

    def salary_periods(self, reference_date: Optional[date] = None) -> Tuple[periods.SalaryPeriod, ...]:
        return periods.salary_periods(
            self.store.list_shifts(), reference_date, self.settings.salary.payout_days
        )

    def notifications(self, reference_date: Union[date, datetime, None] = None) -> List[notifier.Notification]:
        now = reference_date if reference_date is not None else date.today()
        return notifier.due_notifications(
            self.store.list_payments(),
            now,
            window_days=self.settings.notifications.window_days,
            format_amount=self.formatter.amount,
        )

    def category_breakdown(self, kind: str, sort: bool = False) -> List[aggregation.CategoryTotal]:
        return aggregation.category_breakdown(self.store.list_transactions(), _check_kind(kind), sort=sort)

    def category_shares(self, kind: str) -> List[aggregation.CategoryShare]:
        return aggregation.category_shares(self.store.list_transactions(), _check_kind(kind))

    def monthly_breakdown(self) -> List[aggregation.MonthlyTotals]:
        return aggregation.monthly_breakdown(self.store.list_transactions())

    def transactions_of(self, kind: str) -> Tuple[Transaction, ...]:
        return aggregation.of_kind(self.store.list_transactions(), _check_kind(kind))

    def recent_transactions(self, limit: Optional[int] = None) -> Tuple[Transaction, ...]:
        return aggregation.recent(self.store.list_transactions(), self._limit(limit))

    def upcoming_payments(self, limit: Optional[int] = None) -> Tuple[Payment, ...]:
        return aggregation.recent(self.store.list_payments(), self._limit(limit))

    def _limit(self, limit: Optional[int]) -> int:
        return self.settings.dashboard.recent_limit if limit is None else limit

    def dashboard(self, reference_date: Optional[date] = None) -> Dict[str, Any]:
        """Everything the overview page shows, computed against one reference date."""
        today = reference_date if reference_date is not None else date.today()
        return {
            "totals": self.totals(),
            "recent_transactions": self.recent_transactions(),
            "upcoming_payments": self.upcoming_payments(),
            "notifications": self.notifications(today),
            "salary_periods": self.salary_periods(today),
        }
