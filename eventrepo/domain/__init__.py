"""Domain layer: event model, ordering tokens, schemas, validators, exceptions."""

from eventrepo.domain.exceptions import (
    DomainError,
    DomainValidationError,
    InvalidAggregateIdError,
    InvalidAttrsError,
    InvalidEventNameError,
    InvalidTimeTokenError,
)
from eventrepo.domain.models import EVENT_TYPE, Event
from eventrepo.domain.ordering import MAX_TIME, MIN_TIME, TimeTokenClock
from eventrepo.domain.schemas import EventDocument

__all__ = [
    "DomainError",
    "DomainValidationError",
    "EVENT_TYPE",
    "Event",
    "EventDocument",
    "InvalidAggregateIdError",
    "InvalidAttrsError",
    "InvalidEventNameError",
    "InvalidTimeTokenError",
    "MAX_TIME",
    "MIN_TIME",
    "TimeTokenClock",
]
