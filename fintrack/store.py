import logging
import threading
from typing import Any, Iterable, Mapping, Optional, Tuple, TypeVar
from uuid import uuid4

from fintrack.domain import PAID, PENDING, Payment, Shift, Transaction
from fintrack.errors import InvalidTransitionError, NotFoundError, ValidationError
from fintrack.events import (
    PAYMENT_ADDED,
    PAYMENT_STATUS_CHANGED,
    SHIFT_ADDED,
    TRANSACTION_ADDED,
    EventBus,
)
from fintrack.functional import Either, Maybe, Nothing, Some
from fintrack.validation import (
    validate_payment,
    validate_shift,
    validate_status,
    validate_transaction,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


def prepend(records: Tuple[R, ...], record: R) -> Tuple[R, ...]:
    return (record,) + records


def replace_payment(payments: Tuple[Payment, ...], updated: Payment) -> Tuple[Payment, ...]:
    return tuple(updated if p.id == updated.id else p for p in payments)


def find_payment(payments: Tuple[Payment, ...], payment_id: str) -> Maybe[Payment]:
    for p in payments:
        if p.id == payment_id:
            return Some(p)
    return Nothing()


class RecordStore:
    """In-memory owner of the transaction, payment and shift collections.

    Collections are tuples rebound under a lock after each successful
    mutation, so readers always get a complete snapshot. Newly added records
    go to the front. Observers subscribed on ``bus`` are notified only after
    a mutation has been committed.
    """

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        payments: Iterable[Payment] = (),
        shifts: Iterable[Shift] = (),
        bus: Optional[EventBus] = None,
    ):
        self._transactions: Tuple[Transaction, ...] = tuple(transactions)
        self._payments: Tuple[Payment, ...] = tuple(payments)
        self._shifts: Tuple[Shift, ...] = tuple(shifts)
        self._ids = {r.id for r in self._transactions + self._payments + self._shifts}
        self._lock = threading.RLock()
        self.bus = bus if bus is not None else EventBus()

    def _next_id(self) -> str:
        new_id = uuid4().hex
        while new_id in self._ids:
            new_id = uuid4().hex
        self._ids.add(new_id)
        return new_id

    @staticmethod
    def _admit(entity: str, result: Either[ValidationError, Any]) -> Any:
        if result.is_left():
            error = result.get_error()
            logger.warning("Rejected %s: %s", entity, error)
            raise error
        return result.unwrap()

    def add_transaction(self, candidate: Mapping[str, Any]) -> Transaction:
        fields = self._admit("transaction", validate_transaction(candidate))
        with self._lock:
            record = Transaction(id=self._next_id(), **fields)
            self._transactions = prepend(self._transactions, record)
        logger.info("Added %s transaction %s (%s %s)", record.type, record.id, record.category, record.amount)
        self.bus.publish(TRANSACTION_ADDED, {"transaction": record})
        return record

    def add_shift(self, candidate: Mapping[str, Any]) -> Shift:
        fields = self._admit("shift", validate_shift(candidate))
        with self._lock:
            record = Shift(id=self._next_id(), **fields)
            self._shifts = prepend(self._shifts, record)
        logger.info("Added shift %s on %s", record.id, record.date.isoformat())
        self.bus.publish(SHIFT_ADDED, {"shift": record})
        return record

    def add_payment(self, candidate: Mapping[str, Any]) -> Payment:
        """Store a new payment; it always starts out pending."""
        fields = self._admit("payment", validate_payment(candidate, with_status=False))
        with self._lock:
            record = Payment(id=self._next_id(), status=PENDING, **fields)
            self._payments = prepend(self._payments, record)
        logger.info("Added %s payment %s (%s due %s)", record.type, record.id, record.name, record.due_date.isoformat())
        self.bus.publish(PAYMENT_ADDED, {"payment": record})
        return record

    def get_payment(self, payment_id: str) -> Maybe[Payment]:
        return find_payment(self._payments, payment_id)

    def set_payment_status(self, payment_id: str, new_status: str) -> Payment:
        status = self._admit("payment status", validate_status(new_status))
        with self._lock:
            payment = self.get_payment(payment_id).get_or_else(None)
            if payment is None:
                raise NotFoundError("Payment", payment_id)
            if payment.status == status:
                return payment
            if payment.status == PAID:
                logger.warning("Refused status change of paid payment %s to %s", payment_id, status)
                raise InvalidTransitionError(payment.status, status)
            updated = payment.with_status(status)
            self._payments = replace_payment(self._payments, updated)
        logger.info("Payment %s status %s -> %s", payment_id, payment.status, status)
        self.bus.publish(PAYMENT_STATUS_CHANGED, {"payment": updated, "previous": payment.status})
        return updated

    def list_transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def list_payments(self) -> Tuple[Payment, ...]:
        return self._payments

    def list_shifts(self) -> Tuple[Shift, ...]:
        return self._shifts
