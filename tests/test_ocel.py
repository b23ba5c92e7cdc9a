import pytest

from ocpmfit.ocel import OCEL, Event, ObjectRecord, Relationship


def _log():
    events = [
        Event("e1", "Fuel plane", [Relationship("p1", "plane")]),
        Event(
            "e4",
            "Load cargo",
            [Relationship("p1"), Relationship("b1"), Relationship("b2")],
        ),
    ]
    objects = [
        ObjectRecord("p1", "plane"),
        ObjectRecord("b1", "baggage"),
        ObjectRecord("b2", "baggage"),
    ]
    return OCEL(events, objects, ["plane", "baggage"], ["Fuel plane", "Load cargo"])


def test_object_ids_keep_order():
    event = _log().events[1]
    assert event.object_ids() == ["p1", "b1", "b2"]


def test_relationships_stored_as_tuple_and_hashable():
    first = Event("e1", "Fuel plane", [Relationship("p1")])
    second = Event("e1", "Fuel plane", [Relationship("p1")])
    assert first == second
    assert len({first, second}) == 1


def test_object_type_of_maps_every_object():
    assert _log().object_type_of() == {
        "p1": "plane",
        "b1": "baggage",
        "b2": "baggage",
    }


def test_object_type_names():
    assert _log().object_type_names() == ["plane", "baggage"]


def test_event_by_id_found():
    assert _log().event_by_id("e4").event_type == "Load cargo"


def test_event_by_id_missing_raises():
    with pytest.raises(KeyError):
        _log().event_by_id("e99")


def test_from_events_derives_types():
    log = _log()
    derived = OCEL.from_events(log.events, log.objects)
    assert derived.object_types == ["plane", "baggage"]
    assert derived.event_types == ["Fuel plane", "Load cargo"]