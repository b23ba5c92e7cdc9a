"""The airport running example and JSON storage of intermediate results."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from .ocel import OCEL, Event, ObjectRecord, Relationship
from .petri import OCPN

_EVENTS = [
    ("e1", "Fuel plane", ["p1"]),
    ("e2", "Check-in", ["b1"]),
    ("e3", "Check-in", ["b2"]),
    ("e4", "Load cargo", ["p1", "b1", "b2"]),
    ("e5", "Lift off", ["p1"]),
    ("e6", "Unload", ["p1", "b1", "b2"]),
    ("e7", "Pick up @ dest", ["b1"]),
    ("e8", "Pick up @ dest", ["b2"]),
    ("e9", "Clean", ["p1"]),
    ("e10", "Fuel plane", ["p2"]),
    ("e11", "Check-in", ["b3"]),
    ("e12", "Check-in", ["b4"]),
    ("e13", "Load cargo", ["p2", "b3", "b4"]),
    ("e14", "Lift off", ["p2"]),
    ("e15", "Unload", ["p2", "b3", "b4"]),
    ("e16", "Clean", ["p2"]),
    ("e17", "Pick up @ dest", ["b3"]),
    ("e18", "Pick up @ dest", ["b4"]),
]

_OBJECT_TYPES = {
    "p1": "plane",
    "p2": "plane",
    "b1": "baggage",
    "b2": "baggage",
    "b3": "baggage",
    "b4": "baggage",
}

_EVENT_TYPES = [
    "Fuel plane",
    "Check-in",
    "Load cargo",
    "Lift off",
    "Pick up @ dest",
    "Clean",
    "Unload",
]

_PLACES = [
    ("pl1", "plane"),
    ("pl2", "baggage"),
    ("pl3", "plane"),
    ("pl4", "baggage"),
    ("pl5", "plane"),
    ("pl6", "baggage"),
    ("pl7", "plane"),
    ("pl8", "baggage"),
    ("pl9", "plane"),
    ("pl10", "plane"),
    ("pl11", "baggage"),
]

_ARCS = [
    ("pl1", "Fuel plane", "plane"),
    ("pl2", "Check-in", "baggage"),
    ("Fuel plane", "pl3", "plane"),
    ("Check-in", "pl4", "baggage"),
    ("pl3", "Load cargo", "plane"),
    ("pl4", "Load cargo", "baggage"),
    ("pl4", "Load cargo", "baggage"),
    ("Load cargo", "pl5", "plane"),
    ("Load cargo", "pl6", "baggage"),
    ("Load cargo", "pl6", "baggage"),
    ("pl5", "Lift off", "plane"),
    ("pl6", "Unload", "baggage"),
    ("pl6", "Unload", "baggage"),
    ("pl6", "tau", "baggage"),
    ("tau", "pl8", "baggage"),
    ("Lift off", "pl7", "plane"),
    ("pl7", "Unload", "plane"),
    ("Unload", "pl8", "baggage"),
    ("Unload", "pl8", "baggage"),
    ("Unload", "pl9", "plane"),
    ("pl8", "Pick up @ dest", "baggage"),
    ("pl9", "Clean", "plane"),
    ("Clean", "pl10", "plane"),
    ("Pick up @ dest", "pl11", "baggage"),
]


def running_example_ocel() -> OCEL:
    """Two flights, each with a plane and two pieces of baggage, one event per hour."""
    start = datetime(2023, 1, 1, 8, 0, 0, tzinfo=timezone(timedelta(hours=1)))
    events = [
        Event(
            event_id,
            activity,
            [Relationship(obj, _OBJECT_TYPES[obj]) for obj in objects],
            start + timedelta(hours=hour),
        )
        for hour, (event_id, activity, objects) in enumerate(_EVENTS)
    ]
    objects = [
        ObjectRecord(obj, obj_type, [Relationship(obj, obj_type)])
        for obj, obj_type in _OBJECT_TYPES.items()
    ]
    return OCEL(events, objects, ["plane", "baggage"], list(_EVENT_TYPES))


def running_example_ocpn() -> OCPN:
    """The net of the running example, marked for the first flight."""
    net = OCPN(object_to_type=dict(_OBJECT_TYPES))
    for name, object_type in _PLACES:
        net.add_place(name, object_type)
    net.add_silent_transition("tau")
    for source, target, object_type in _ARCS:
        net.add_arc(source, target, object_type)
    net.initial_marking = {"pl1": {"p1"}, "pl2": {"b1", "b2"}}
    return net


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        if all(isinstance(key, str) for key in value):
            return {key: _encode(item) for key, item in value.items()}
        return {"__items__": [[_encode(k), _encode(v)] for k, v in value.items()]}
    if isinstance(value, (set, frozenset)):
        return {"__set__": sorted((_encode(v) for v in value), key=json.dumps)}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    return value


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _decode(obj: dict) -> Any:
    if obj.keys() == {"__set__"}:
        return {_freeze(item) for item in obj["__set__"]}
    if obj.keys() == {"__items__"}:
        return {_freeze(key): value for key, value in obj["__items__"]}
    return obj


def save_json(data: Any, path: str | Path) -> None:
    """Write data as JSON, creating parent directories as needed.

    Sets and mappings with non-string keys are tagged so that
    :func:`load_json` restores them; tuples become lists, dataclasses dicts.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(_encode(data), indent=2, ensure_ascii=False), encoding="utf-8")


def load_json(path: str | Path) -> Any:
    """Read data written by :func:`save_json`."""
    return json.loads(Path(path).read_text(encoding="utf-8"), object_hook=_decode)