import json
import logging
from pathlib import Path
from typing import Any, Callable, List, Mapping, Tuple, Union

from fintrack.domain import Payment, Shift, Transaction
from fintrack.errors import ConfigError
from fintrack.validation import validate_payment, validate_shift, validate_transaction

logger = logging.getLogger(__name__)


def _build(kind: str, entries: List[Mapping[str, Any]], validate: Callable, factory: Callable) -> tuple:
    records = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping) or not entry.get("id"):
            raise ConfigError(f"{kind}[{index}] needs an 'id'")
        result = validate(entry)
        if result.is_left():
            error = result.get_error()
            raise ConfigError(f"{kind}[{index}] ({entry['id']}): {error}") from error
        records.append(factory(id=str(entry["id"]), **result.unwrap()))
    return tuple(records)


def load_seed(
    path: Union[str, Path],
) -> Tuple[
    Tuple[Transaction, ...],
    Tuple[Payment, ...],
    Tuple[Shift, ...],
]:
    """Read sample records, checking each one like a user submission.

    Ids and payment statuses are taken from the file as-is.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Cannot parse seed file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Seed file {path} must hold a JSON object")

    transactions = _build("transactions", data.get("transactions", []), validate_transaction, Transaction)
    payments = _build("payments", data.get("payments", []), validate_payment, Payment)
    shifts = _build("shifts", data.get("shifts", []), validate_shift, Shift)

    ids = [r.id for r in transactions + payments + shifts]
    if len(ids) != len(set(ids)):
        raise ConfigError(f"Seed file {path} reuses record ids")

    logger.info(
        "Loaded seed %s: %d transactions, %d payments, %d shifts",
        path, len(transactions), len(payments), len(shifts),
    )
    return transactions, payments, shifts
