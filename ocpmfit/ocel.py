"""Data model for object-centric event logs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable


@dataclass(frozen=True)
class Relationship:
    """A qualified link from an event or object to an object."""

    object_id: str
    qualifier: str = ""


@dataclass(frozen=True)
class Event:
    """A single event of the log together with the objects it touches."""

    id: str
    event_type: str
    relationships: tuple[Relationship, ...] = ()
    time: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "relationships", tuple(self.relationships))

    def object_ids(self) -> list[str]:
        """Return the ids of the related objects, in relationship order."""
        return [rel.object_id for rel in self.relationships]


@dataclass(frozen=True)
class ObjectRecord:
    """An object of the log with its type."""

    id: str
    object_type: str
    relationships: tuple[Relationship, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "relationships", tuple(self.relationships))


@dataclass
class OCEL:
    """An object-centric event log."""

    events: list[Event] = field(default_factory=list)
    objects: list[ObjectRecord] = field(default_factory=list)
    object_types: list[str] = field(default_factory=list)
    event_types: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.events = list(self.events)
        self.objects = list(self.objects)
        self.object_types = list(self.object_types)
        self.event_types = list(self.event_types)

    def object_type_of(self) -> dict[str, str]:
        """Map every object id to its object type."""
        return {obj.id: obj.object_type for obj in self.objects}

    def object_type_names(self) -> list[str]:
        """Return the names of the declared object types."""
        return list(self.object_types)

    def event_by_id(self, event_id: str) -> Event:
        """Return the first event with the given id."""
        for event in self.events:
            if event.id == event_id:
                return event
        raise KeyError(f"no event with id {event_id!r}")

    @classmethod
    def from_events(
        cls,
        events: Iterable[Event],
        objects: Iterable[ObjectRecord],
    ) -> "OCEL":
        """Build a log, deriving the type lists from events and objects."""
        events = list(events)
        objects = list(objects)
        object_types = list(dict.fromkeys(obj.object_type for obj in objects))
        event_types = list(dict.fromkeys(ev.event_type for ev in events))
        return cls(events, objects, object_types, event_types)