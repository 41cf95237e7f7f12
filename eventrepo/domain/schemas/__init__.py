"""Pydantic schemas for serialization."""

from eventrepo.domain.schemas.event import EventDocument

__all__ = ["EventDocument"]
