from datetime import date
from decimal import Decimal

import pytest

from fintrack.config import REPO_ROOT, DashboardSettings, Settings
from fintrack.errors import InvalidTransitionError, NotFoundError, ValidationError
from fintrack.notifier import CRITICAL, WARNING
from fintrack.services import FinanceService


def seeded_service():
    return FinanceService.from_settings(Settings(seed_path=REPO_ROOT / "data" / "seed.json"))


def test_totals_from_seed():
    totals = seeded_service().totals()

    assert totals.income == 110000
    assert totals.expense == 20500
    assert totals.balance == 89500


def test_empty_service():
    service = FinanceService()
    assert service.totals() == (0, 0, 0)
    assert service.notifications(date(2025, 1, 1)) == []
    assert service.monthly_breakdown() == []


def test_submit_transaction_updates_totals():
    service = FinanceService()
    stored = service.submit_transaction(
        {"type": "income", "category": "Salary", "amount": "1000", "description": "Pay", "date": "2025-03-01"}
    )

    assert service.recent_transactions()[0] == stored
    assert service.totals().balance == Decimal(1000)


def test_salary_periods_from_seed():
    p1, p2 = seeded_service().salary_periods()

    assert p1.shift_count == 0
    assert p1.total == 0
    assert p2.shift_count == 4
    assert p2.total == 8400 + 6400 + 4500 + 7400


def test_salary_periods_with_reference_date():
    service = seeded_service()
    p1, p2 = service.salary_periods(date(2025, 2, 1))
    assert p2.shift_count == 0

    p1, p2 = service.salary_periods(date(2025, 1, 20))
    assert p2.shift_count == 4


def test_notifications_from_seed():
    service = seeded_service()
    notes = service.notifications(date(2025, 2, 2))

    # p1 due 02-10 is too far, p4 is paid, p3 is past due
    assert [(n.payment_id, n.severity) for n in notes] == [("p2", WARNING)]
    assert "15 000 ₽" in notes[0].message

    notes = service.notifications(date(2025, 2, 10))
    assert [(n.payment_id, n.severity) for n in notes] == [("p1", CRITICAL)]


def test_mark_paid_removes_notification():
    service = seeded_service()
    service.mark_paid("p1")

    assert service.notifications(date(2025, 2, 10)) == []
    with pytest.raises(InvalidTransitionError):
        service.store.set_payment_status("p1", "pending")


def test_mark_paid_unknown():
    with pytest.raises(NotFoundError):
        FinanceService().mark_paid("nope")


def test_submit_payment_is_pending_and_listed_first():
    service = seeded_service()
    payment = service.submit_payment(
        {"name": "Phone plan", "amount": 3500, "due_date": "2025-02-04", "type": "credit", "status": "paid"}
    )

    assert payment.status == "pending"
    assert service.upcoming_payments(1) == (payment,)


def test_category_queries():
    service = seeded_service()

    assert [r.category for r in service.category_breakdown("expense")] == ["ЖКХ", "Продукты"]
    assert [r.category for r in service.category_breakdown("expense", sort=True)] == ["Продукты", "ЖКХ"]
    assert sum(s.percentage for s in service.category_shares("income")) == 100
    assert len(service.transactions_of("income")) == 2

    with pytest.raises(ValidationError):
        service.category_breakdown("transfer")


def test_monthly_breakdown_from_seed():
    months = seeded_service().monthly_breakdown()
    assert [(m.period, m.income, m.expense) for m in months] == [("2025-01", 110000, 20500)]


def test_dashboard_bundle():
    service = seeded_service()
    board = service.dashboard(date(2025, 2, 5))

    assert board["totals"].balance == 89500
    assert len(board["recent_transactions"]) == 4
    assert [(n.payment_id, n.severity) for n in board["notifications"]] == [("p2", CRITICAL)]
    assert len(board["salary_periods"]) == 2


def test_recent_limit_from_settings():
    settings = Settings(
        seed_path=REPO_ROOT / "data" / "seed.json",
        dashboard=DashboardSettings(recent_limit=2),
    )
    service = FinanceService.from_settings(settings)

    assert [t.id for t in service.recent_transactions()] == ["t1", "t2"]
    assert len(service.upcoming_payments()) == 2
    assert len(service.recent_transactions(10)) == 4
