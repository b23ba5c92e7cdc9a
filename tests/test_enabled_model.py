import pytest

from ocpmfit.enabled_log import (
    get_contexts_and_bindings,
    get_enabled_log_activities,
    get_event_presets,
)
from ocpmfit.enabled_model import (
    get_binding_sequence_and_used_obj,
    get_enabled_model_activities,
    get_enabled_model_activities_for_event,
)
from ocpmfit.examples import running_example_ocel, running_example_ocpn
from ocpmfit.petri import OCPN

FIRST = {"Fuel plane", "Check-in"}
LOAD = {"Load cargo"}
LIFT = {"Lift off", "Pick up @ dest"}
UNLOAD = {"Unload", "Pick up @ dest"}
LAST = {"Pick up @ dest", "Clean"}

EXPECTED = {
    **{e: FIRST for e in ("e1", "e2", "e3", "e10", "e11", "e12")},
    **{e: LOAD for e in ("e4", "e13")},
    **{e: LIFT for e in ("e5", "e14")},
    **{e: UNLOAD for e in ("e6", "e15")},
    **{e: LAST for e in ("e7", "e8", "e9", "e16", "e17", "e18")},
}


@pytest.fixture
def ocel():
    return running_example_ocel()


@pytest.fixture
def ocpn():
    return running_example_ocpn()


@pytest.fixture
def presets(ocel):
    return get_event_presets(ocel)


@pytest.fixture
def bindings(ocel):
    return get_contexts_and_bindings(ocel)[1]


def test_binding_sequence_of_e5(presets, bindings):
    sequence, used = get_binding_sequence_and_used_obj(presets["e5"], bindings)
    assert sequence == {
        "Fuel plane": [["p1"]],
        "Check-in": [["b1"], ["b2"]],
        "Load cargo": [["p1", "b1", "b2"]],
    }
    assert used == {"p1", "b1", "b2"}


def test_binding_sequence_of_empty_preset(bindings):
    assert get_binding_sequence_and_used_obj([], bindings) == ({}, set())


def test_binding_sequence_reversed_preset_same_groups(ocel, presets, bindings):
    for event in ocel.events:
        forward, used_forward = get_binding_sequence_and_used_obj(presets[event.id], bindings)
        backward, used_backward = get_binding_sequence_and_used_obj(
            list(reversed(presets[event.id])), bindings
        )
        assert used_forward == used_backward
        assert forward.keys() == backward.keys()
        for activity in forward:
            assert sorted(forward[activity]) == sorted(backward[activity])


def test_binding_sequence_missing_binding_raises(presets):
    with pytest.raises(KeyError):
        get_binding_sequence_and_used_obj(presets["e4"], {})


def test_enabled_for_e5(ocpn, presets, bindings):
    result = get_enabled_model_activities_for_event("e5", presets["e5"], bindings, ocpn)
    assert result == {"Lift off", "Pick up @ dest"}


@pytest.mark.parametrize(
    "event_id, expected",
    [
        ("e1", FIRST),
        ("e4", LOAD),
        ("e6", UNLOAD),
        ("e7", LAST),
        ("e13", set()),
        ("e14", set()),
    ],
)
def test_enabled_for_single_events(ocpn, presets, bindings, event_id, expected):
    result = get_enabled_model_activities_for_event(
        event_id, presets[event_id], bindings, ocpn
    )
    assert result == expected


def test_replay_leaves_initial_marking_untouched(ocpn, presets, bindings):
    before = {place: set(objs) for place, objs in ocpn.initial_marking.items()}
    get_enabled_model_activities_for_event("e9", presets["e9"], bindings, ocpn)
    assert ocpn.initial_marking == before


def test_missing_initial_marking_raises(bindings):
    with pytest.raises(ValueError):
        get_enabled_model_activities_for_event("e1", [], bindings, OCPN())


def test_enabled_model_activities_per_context(ocel, ocpn, presets):
    contexts, bindings = get_contexts_and_bindings(ocel)
    _, contexts_map = get_enabled_log_activities(ocel, contexts)
    result = get_enabled_model_activities(ocpn, presets, bindings, contexts_map)
    assert result == EXPECTED


def test_events_sharing_context_share_activities(ocel, ocpn, presets):
    contexts, bindings = get_contexts_and_bindings(ocel)
    _, contexts_map = get_enabled_log_activities(ocel, contexts)
    result = get_enabled_model_activities(ocpn, presets, bindings, contexts_map)
    for event_ids, _ in contexts_map.values():
        values = [result[e] for e in event_ids]
        assert all(v == values[0] for v in values)