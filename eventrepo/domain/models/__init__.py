"""Domain models. Pure business entities."""

from eventrepo.domain.models.event import EVENT_TYPE, AggregateId, Event

__all__ = [
    "AggregateId",
    "EVENT_TYPE",
    "Event",
]
