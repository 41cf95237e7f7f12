"""Domain validators. Pure functions."""

from eventrepo.domain.validators.event_validator import (
    validate_aggregate_id,
    validate_attrs,
    validate_event_name,
    validate_event_names,
)

__all__ = [
    "validate_aggregate_id",
    "validate_attrs",
    "validate_event_name",
    "validate_event_names",
]
