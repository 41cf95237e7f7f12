"""Pydantic schema for the stored event document. Wire names are camelCase."""

from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from eventrepo.domain.models.event import EVENT_TYPE, Event


class EventDocument(BaseModel):
    """
    Document shape persisted by storage strategies and emitted by their indexes.
    Unknown keys (storage identity/revision fields) are dropped on validation.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    aggregate_id: Union[StrictInt, StrictStr] = Field(..., alias="aggregateId")
    name: StrictStr = Field(..., min_length=1)
    type: Literal["event"] = EVENT_TYPE
    time: StrictStr = Field(..., min_length=1)
    attrs: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_event(cls, event: Event) -> "EventDocument":
        return cls(
            aggregate_id=event.aggregate_id,
            name=event.name,
            time=event.time,
            attrs=dict(event.attrs),
        )

    def to_event(self) -> Event:
        return Event(
            aggregate_id=self.aggregate_id,
            name=self.name,
            time=self.time,
            attrs=dict(self.attrs),
        )
