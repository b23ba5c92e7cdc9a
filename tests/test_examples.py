from collections import Counter
from datetime import datetime, timedelta, timezone

import pytest

from ocpmfit.enabled_log import get_contexts_and_bindings, get_enabled_log_activities
from ocpmfit.examples import (
    load_json,
    running_example_ocel,
    running_example_ocpn,
    save_json,
)


def test_ocel_events_and_objects():
    ocel = running_example_ocel()
    assert [e.id for e in ocel.events] == [f"e{i}" for i in range(1, 19)]
    assert ocel.event_by_id("e4").object_ids() == ["p1", "b1", "b2"]
    assert ocel.event_by_id("e15").event_type == "Unload"
    assert ocel.object_type_of()["p2"] == "plane"
    assert ocel.object_type_names() == ["plane", "baggage"]


def test_ocel_times_are_hourly():
    ocel = running_example_ocel()
    start = datetime(2023, 1, 1, 8, 0, 0, tzinfo=timezone(timedelta(hours=1)))
    assert ocel.events[0].time == start
    assert ocel.events[-1].time == start + timedelta(hours=17)


def test_ocpn_structure():
    net = running_example_ocpn()
    assert len(net.places) == 11
    assert set(net.silent_transitions) == {"tau"}
    assert set(net.transitions) == {
        "Fuel plane",
        "Check-in",
        "Load cargo",
        "Lift off",
        "Unload",
        "Pick up @ dest",
        "Clean",
    }
    assert net.initial_marking == {"pl1": {"p1"}, "pl2": {"b1", "b2"}}


def test_remove_next_binding_case():
    net = running_example_ocpn()
    marking = {"pl2": {"b1", "b2"}, "pl1": {"p1"}}
    sequence = {"Check-in": [["b1"], ["b2"]]}
    assert net.remove_next_binding(sequence, marking) == ("Check-in", ["b2"])
    assert set(net.get_enabled_transitions_from_marking(marking)) == {
        "Check-in",
        "Fuel plane",
    }


def test_json_round_trip_of_context_map(tmp_path):
    ocel = running_example_ocel()
    contexts, bindings = get_contexts_and_bindings(ocel)
    enabled, context_map = get_enabled_log_activities(ocel, contexts)
    path = tmp_path / "nested" / "context_map.json"
    save_json(context_map, path)
    loaded = load_json(path)
    assert {k: (set(a), set(b)) for k, (a, b) in loaded.items()} == context_map


def test_json_round_trip_of_bindings_and_contexts(tmp_path):
    contexts, bindings = get_contexts_and_bindings(running_example_ocel())
    save_json(bindings, tmp_path / "bindings.json")
    save_json(contexts, tmp_path / "contexts.json")
    assert load_json(tmp_path / "bindings.json") == bindings
    loaded = load_json(tmp_path / "contexts.json")
    assert loaded == contexts
    assert Counter(loaded["e4"]["baggage"]) == Counter({("Check-in",): 2})


def test_json_round_trip_of_sets(tmp_path):
    data = {"e5": {"Lift off", "Pick up @ dest"}}
    save_json(data, tmp_path / "sets.json")
    assert load_json(tmp_path / "sets.json") == data


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json(tmp_path / "absent.json")