"""Error taxonomy for the finance tracker core."""


class FinanceError(Exception):
    """Base class for every error the core raises."""


class ValidationError(ValueError, FinanceError):
    """A candidate record failed a field check."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason

    def to_dict(self) -> dict:
        return {
            "error": "validation_error",
            "field": self.field,
            "message": self.reason,
        }

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, ValidationError)
            and self.field == other.field
            and self.reason == other.reason
        )

    __hash__ = Exception.__hash__


class NotFoundError(LookupError, FinanceError):
    """An operation referenced an id the store does not hold."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} with ID {entity_id} does not exist")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(FinanceError):
    """A payment status change is not allowed."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change payment status from {current} to {requested}")
        self.current = current
        self.requested = requested


class ConfigError(FinanceError):
    """Settings or seed data could not be used."""
