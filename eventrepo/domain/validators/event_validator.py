"""Validators for event domain rules. Pure functions, no infrastructure or storage access."""

import json
from collections.abc import Mapping
from typing import Any, Optional

from eventrepo.domain.exceptions import (
    InvalidAggregateIdError,
    InvalidAttrsError,
    InvalidEventNameError,
)


def validate_aggregate_id(aggregate_id: Any) -> None:
    """Aggregate ids are non-empty strings or integers (bool excluded). Raises InvalidAggregateIdError."""
    if isinstance(aggregate_id, bool):
        raise InvalidAggregateIdError("aggregate_id must be a string or integer, got bool")
    if isinstance(aggregate_id, int):
        return
    if not isinstance(aggregate_id, str) or not aggregate_id.strip():
        raise InvalidAggregateIdError(
            f"aggregate_id must be a non-empty string or integer, got {aggregate_id!r}"
        )


def validate_event_name(name: Any) -> None:
    """Enforce event name constraint: non-empty string. Raises InvalidEventNameError if invalid."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidEventNameError(f"event name must be a non-empty string, got {name!r}")


def validate_event_names(names: Any) -> None:
    """Validate a single name or every name in an iterable of names."""
    if isinstance(names, str):
        validate_event_name(names)
        return
    try:
        iterator = iter(names)
    except TypeError:
        raise InvalidEventNameError(
            f"names must be a string or an iterable of strings, got {type(names).__name__}"
        ) from None
    for name in iterator:
        validate_event_name(name)


def validate_attrs(attrs: Optional[Mapping]) -> None:
    """Ensure attrs is a mapping with string keys that survives JSON encoding. Raises InvalidAttrsError."""
    if attrs is None:
        return
    if not isinstance(attrs, Mapping):
        raise InvalidAttrsError(f"attrs must be a mapping, got {type(attrs).__name__}")
    if not all(isinstance(key, str) for key in attrs):
        raise InvalidAttrsError("attrs keys must be strings")
    try:
        json.dumps(dict(attrs))
    except (TypeError, ValueError) as e:
        raise InvalidAttrsError("attrs must be JSON-serializable") from e
