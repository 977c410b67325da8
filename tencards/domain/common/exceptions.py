"""
Domain layer exceptions.

Raised when a domain value or entity would be constructed in an invalid
state. The application layer translates them into API errors.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(DomainError):
    """A value is outside what the domain accepts, e.g. source text too short."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details = {k: v for k, v in (("field", field), ("value", value)) if v is not None}
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvariantViolationError(DomainError):
    """An entity was built with fields that contradict each other or its rules."""

    def __init__(self, entity: str, rule: str) -> None:
        super().__init__(f"{entity} violates: {rule}", {"entity": entity, "rule": rule})
