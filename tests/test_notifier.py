from datetime import date, datetime, timedelta
from decimal import Decimal

from fintrack.domain import Payment
from fintrack.notifier import CRITICAL, WARNING, days_until_due, due_notifications

TODAY = date(2025, 2, 1)


def make_payment(id, days_ahead, status="pending", name="Internet", amount=1200):
    return Payment(id=id, name=name, amount=Decimal(amount), due_date=TODAY + timedelta(days=days_ahead),
                   status=status, type="recurring")


def test_due_today_is_critical():
    notes = due_notifications([make_payment("p1", 0)], TODAY)

    assert len(notes) == 1
    assert notes[0].severity == CRITICAL
    assert notes[0].payment_id == "p1"
    assert notes[0].days_until_due == 0
    assert "Internet" in notes[0].message
    assert "today" in notes[0].message


def test_due_in_three_days_is_warning():
    notes = due_notifications([make_payment("p1", 3)], TODAY)

    assert len(notes) == 1
    assert notes[0].severity == WARNING
    assert "3 days" in notes[0].message


def test_due_in_four_days_is_ignored():
    assert due_notifications([make_payment("p1", 4)], TODAY) == []


def test_paid_payment_is_ignored():
    assert due_notifications([make_payment("p1", 1, status="paid")], TODAY) == []


def test_past_due_is_ignored():
    assert due_notifications([make_payment("p1", -1, status="overdue")], TODAY) == []


def test_overdue_status_within_window_still_notified():
    notes = due_notifications([make_payment("p1", 2, status="overdue")], TODAY)
    assert [n.severity for n in notes] == [WARNING]


def test_order_follows_payments():
    payments = [make_payment("p1", 3), make_payment("p2", 0), make_payment("p3", 1)]
    notes = due_notifications(payments, TODAY)

    assert [n.payment_id for n in notes] == ["p1", "p2", "p3"]


def test_now_may_be_datetime():
    payment = make_payment("p1", 1)
    assert days_until_due(payment, datetime(2025, 2, 1, 23, 59)) == 1
    assert due_notifications([payment], datetime(2025, 2, 1, 23, 59))[0].days_until_due == 1


def test_custom_window_and_formatter():
    notes = due_notifications([make_payment("p1", 5, amount=8500)], TODAY, window_days=7,
                              format_amount=lambda a: f"{a} RUB")
    assert notes[0].message == "Payment 'Internet' of 8500 RUB is due in 5 days"


def test_single_day_wording():
    notes = due_notifications([make_payment("p1", 1)], TODAY)
    assert notes[0].message.endswith("due in 1 day")
