"""Domain-specific exceptions. Pure domain layer — no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated."""


class InvalidAggregateIdError(DomainValidationError):
    """Raised when aggregate_id is not a non-empty string or an integer."""


class InvalidEventNameError(DomainValidationError):
    """Raised when an event name is empty or not a string."""


class InvalidAttrsError(DomainValidationError):
    """Raised when event attrs are not a JSON-serializable mapping with string keys."""


class InvalidTimeTokenError(DomainValidationError):
    """Raised when a value cannot be used as an ordering token."""
