"""Domain model for events. Pure business semantics — no storage or wire concerns."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Union

# Tag that separates event documents from anything else sharing the database.
EVENT_TYPE = "event"

AggregateId = Union[str, int]


@dataclass(frozen=True)
class Event:
    """
    An immutable fact about an aggregate. `time` is the ordering token assigned
    by the repository at append; events from one repository sort by it.

    `attrs` is copied into a read-only mapping; nested values are not frozen.
    Events hash by (aggregate_id, name, time).
    """

    aggregate_id: AggregateId
    name: str
    time: str
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    def __hash__(self) -> int:
        return hash((self.aggregate_id, self.name, self.time))

    @property
    def type(self) -> str:
        return EVENT_TYPE
