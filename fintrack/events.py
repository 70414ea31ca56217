import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

logger = logging.getLogger(__name__)

__all__ = [
    'Event', 'EventBus', 'Handler',
    'TRANSACTION_ADDED', 'SHIFT_ADDED', 'PAYMENT_ADDED', 'PAYMENT_STATUS_CHANGED',
]

TRANSACTION_ADDED = "TRANSACTION_ADDED"
SHIFT_ADDED = "SHIFT_ADDED"
PAYMENT_ADDED = "PAYMENT_ADDED"
PAYMENT_STATUS_CHANGED = "PAYMENT_STATUS_CHANGED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event], object]


class EventBus:
    """Observers of committed store mutations, keyed by event name."""

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[object]:
        handlers = list(self._subscribers.get(name, ()))
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        results = []
        for handler in handlers:
            # observer errors are logged, never raised to the committing caller
            try:
                results.append(handler(event))
            except Exception:
                logger.exception("Handler %r failed for %s", handler, name)
        return results
