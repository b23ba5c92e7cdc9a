"""Activities a Petri net enables after replaying the preset of an event."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, Mapping

from .enabled_log import Bindings, ContextMap
from .ocel import Event
from .petri import OCPN, BindingSequence, Marking

log = logging.getLogger(__name__)


def get_binding_sequence_and_used_obj(
    preset: Iterable[Event],
    bindings: Bindings,
) -> tuple[BindingSequence, set[str]]:
    """Group the bindings of the preset events by activity.

    Returns, per activity, one list of object ids for every preset event of
    that activity, together with the set of all objects that occur.
    """
    sequence: BindingSequence = {}
    used: set[str] = set()
    for event in preset:
        binding = bindings[(event.id, event.event_type)]
        objects = [obj for per_type in binding.values() for obj in per_type]
        used.update(objects)
        sequence.setdefault(event.event_type, []).append(objects)
    return sequence, used


def get_enabled_model_activities_for_event(
    event_id: str,
    preset: Iterable[Event],
    bindings: Bindings,
    ocpn: OCPN,
) -> set[str]:
    """Replay the preset of an event and collect the visible transitions enabled.

    Starting from the net's initial marking, bindings of the preset are fired
    while one is enabled; otherwise every enabled silent transition is fired.
    Once the whole preset has been replayed, the visible transitions enabled
    in each reached marking are collected.
    """
    if ocpn.initial_marking is None:
        raise ValueError("the net has no initial marking")
    sequence, _ = get_binding_sequence_and_used_obj(preset, bindings)
    log.debug("replaying preset of %s: %s", event_id, sequence)

    queue: deque[Marking] = deque(
        [{place: set(objects) for place, objects in ocpn.initial_marking.items()}]
    )
    result: set[str] = set()
    while queue:
        state = queue.popleft()
        if not sequence:
            result.update(ocpn.get_enabled_transitions_from_marking(state))
        binding = ocpn.remove_next_binding(sequence, state)
        if binding is not None:
            queue.append(ocpn.execute_binding(binding, state))
        else:
            queue.extend(
                ocpn.execute_binding(silent, state)
                for silent in ocpn.get_enabled_silent_transition_bindings(state)
            )
    return result


def get_enabled_model_activities(
    ocpn: OCPN,
    presets: Mapping[str, list[Event]],
    bindings: Bindings,
    contexts_map: ContextMap,
) -> dict[str, set[str]]:
    """Return, per event id, the model activities enabled in the event's context.

    The activities found for all events that share a context are pooled and
    assigned to each of them.
    """
    log.debug("contexts map: %s", contexts_map)
    result: dict[str, set[str]] = {}
    for event_ids, _ in contexts_map.values():
        pooled: set[str] = set()
        for event_id in event_ids:
            pooled |= get_enabled_model_activities_for_event(
                event_id, presets[event_id], bindings, ocpn
            )
        for event_id in event_ids:
            result[event_id] = set(pooled)
    return result