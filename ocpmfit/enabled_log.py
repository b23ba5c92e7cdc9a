"""Presets, contexts, bindings and enabled activities taken from the log."""

from __future__ import annotations

import hashlib
import json
import logging
from collections import Counter

import networkx as nx

from .ocel import OCEL, Event

log = logging.getLogger(__name__)

Context = dict[str, Counter]
Bindings = dict[tuple[str, str], dict[str, list[str]]]
ContextMap = dict[int, tuple[set[str], set[str]]]


def construct_event_object_graph(ocel: OCEL) -> nx.DiGraph:
    """Link every event to each later event that shares an object with it."""
    log.debug("constructing event object graph")
    graph = nx.DiGraph()
    graph.add_nodes_from(event.id for event in ocel.events)
    object_sets = [set(event.object_ids()) for event in ocel.events]
    for position, (event, objects) in enumerate(zip(ocel.events, object_sets)):
        if not objects:
            continue
        later = zip(ocel.events[position + 1:], object_sets[position + 1:])
        for other, other_objects in later:
            if objects & other_objects:
                graph.add_edge(event.id, other.id)
    return graph


def get_event_presets(ocel: OCEL) -> dict[str, list[Event]]:
    """Map each event id to the events that precede it in the event object graph."""
    graph = construct_event_object_graph(ocel)
    first_by_id: dict[str, Event] = {}
    order: dict[str, int] = {}
    for position, event in enumerate(ocel.events):
        first_by_id.setdefault(event.id, event)
        order.setdefault(event.id, position)

    presets: dict[str, list[Event]] = {}
    for event in ocel.events:
        ancestors = nx.ancestors(graph, event.id) - {event.id}
        presets[event.id] = [
            first_by_id[ancestor] for ancestor in sorted(ancestors, key=order.__getitem__)
        ]
    return presets


def get_contexts_and_bindings(ocel: OCEL) -> tuple[dict[str, Context], Bindings]:
    """Compute the context and the object binding of every event.

    A context maps an object type to a counter of activity sequences, one
    sequence per object seen in the event's preset. A binding maps every
    declared object type to the objects the event touches.
    """
    object_types = ocel.object_type_names()
    type_of = ocel.object_type_of()
    presets = get_event_presets(ocel)

    contexts: dict[str, Context] = {}
    bindings: Bindings = {}
    for event in ocel.events:
        binding: dict[str, list[str]] = {ot: [] for ot in object_types}
        for object_id in event.object_ids():
            object_type = type_of[object_id]
            if object_type not in binding:
                raise KeyError(f"object type {object_type!r} is not declared")
            binding[object_type].append(object_id)
        bindings[(event.id, event.event_type)] = binding

        histories: dict[str, dict[str, list[str]]] = {}
        for prior in presets[event.id]:
            for object_id in prior.object_ids():
                per_object = histories.setdefault(type_of[object_id], {})
                per_object.setdefault(object_id, []).append(prior.event_type)

        contexts[event.id] = {
            object_type: Counter(tuple(seq) for seq in per_object.values())
            for object_type, per_object in histories.items()
        }
    return contexts, bindings


def hash_context(context: Context) -> int:
    """Return a stable 64-bit fingerprint of a context.

    Object types are taken in sorted order; for each, the activities of all
    its sequences are pooled and sorted, so counts and grouping are ignored.
    """
    digest = hashlib.blake2b(digest_size=8)
    for object_type in sorted(context):
        activities = sorted(
            activity for sequence in context[object_type] for activity in sequence
        )
        digest.update(json.dumps([object_type, activities]).encode("utf-8"))
    return int.from_bytes(digest.digest(), "big")


def get_enabled_log_activities(
    ocel: OCEL,
    contexts: dict[str, Context],
) -> tuple[dict[str, set[str]], ContextMap]:
    """Group events by context and collect the activities seen in each group.

    Returns the enabled activities per event id and, per context
    fingerprint, the event ids sharing it and their activities.
    """
    seen: ContextMap = {}
    for event_id, context in contexts.items():
        event_ids, activities = seen.setdefault(hash_context(context), (set(), set()))
        event_ids.add(event_id)
        activities.update(e.event_type for e in ocel.events if e.id == event_id)

    enabled = {
        event_id: set(activities)
        for event_ids, activities in seen.values()
        for event_id in event_ids
    }
    return enabled, seen