"""Object-centric Petri nets: construction, enabling and firing of bindings."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import networkx as nx

from .utils import is_superset, pop_object_from_binding

log = logging.getLogger(__name__)

Marking = dict[str, set[str]]
BindingSequence = dict[str, list[list[str]]]
Binding = tuple[str, list[str]]


@dataclass
class Place:
    """A place holding tokens (objects) of a single object type."""

    object_type: str
    input_transitions: list[tuple[str, str]] = field(default_factory=list)
    output_transitions: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class Transition:
    """A transition with its input and output places and their object types."""

    input_places: list[tuple[str, str]] = field(default_factory=list)
    output_places: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class Arc:
    """A typed arc between a place and a transition."""

    source: str
    target: str
    object_type: str


def _swap_remove(items: list, index: int):
    """Remove ``items[index]`` by moving the last element into its slot."""
    last = items.pop()
    if index == len(items):
        return last
    removed = items[index]
    items[index] = last
    return removed


def _copy_marking(marking: Mapping[str, set[str]]) -> Marking:
    return {place: set(objects) for place, objects in marking.items()}


@dataclass
class OCPN:
    """An object-centric Petri net with visible and silent transitions."""

    object_to_type: dict[str, str] = field(default_factory=dict)
    places: dict[str, Place] = field(default_factory=dict)
    transitions: dict[str, Transition] = field(default_factory=dict)
    silent_transitions: dict[str, Transition] = field(default_factory=dict)
    arcs: list[Arc] = field(default_factory=list)
    initial_marking: Marking | None = None
    final_marking: list[Marking] | None = None

    # ------------------------------------------------------------ building

    def _find_transition(self, name: str) -> Transition | None:
        if name in self.transitions:
            return self.transitions[name]
        return self.silent_transitions.get(name)

    def _transition(self, name: str) -> Transition:
        transition = self._find_transition(name)
        if transition is None:
            raise KeyError(f"unknown transition {name!r}")
        return transition

    def add_arc_to_transition(self, source: str, target: str, object_type: str) -> None:
        """Add an arc from place ``source`` to transition ``target``.

        Missing transitions and places are created on the fly.
        """
        transition = self._find_transition(target)
        if transition is None:
            transition = self.transitions[target] = Transition()
        transition.input_places.append((source, object_type))

        place = self.places.get(source)
        if place is None:
            place = self.places[source] = Place(object_type)
        place.output_transitions.append((target, object_type))

        self.arcs.append(Arc(source, target, object_type))

    def add_arc_from_transition(self, source: str, target: str, object_type: str) -> None:
        """Add an arc from transition ``source`` to place ``target``.

        Missing transitions and places are created on the fly.
        """
        transition = self._find_transition(source)
        if transition is None:
            transition = self.transitions[source] = Transition()
        transition.output_places.append((target, object_type))

        place = self.places.get(target)
        if place is None:
            place = self.places[target] = Place(object_type)
        place.input_transitions.append((source, object_type))

        self.arcs.append(Arc(source, target, object_type))

    def add_arc(self, source: str, target: str, object_type: str) -> None:
        """Add an arc, deciding its direction from the known nodes."""
        source_is_transition = (
            source in self.transitions or source in self.silent_transitions
        )
        target_is_both = (
            target in self.transitions and target in self.silent_transitions
        )
        if source in self.places and target not in self.places:
            self.add_arc_to_transition(source, target, object_type)
        elif source_is_transition and not target_is_both:
            self.add_arc_from_transition(source, target, object_type)
        else:
            raise ValueError(
                "source and target can't be both places or both transitions, "
                f"or the source is unknown: source={source!r}, target={target!r}"
            )

    def add_transition(self, name: str, silent: bool = False) -> None:
        """Add (or reset) a visible or silent transition without arcs."""
        table = self.silent_transitions if silent else self.transitions
        table[name] = Transition()

    def add_silent_transition(self, name: str) -> None:
        """Add (or reset) a silent transition without arcs."""
        self.add_transition(name, True)

    def add_place(self, name: str, object_type: str) -> None:
        """Add (or reset) a place of the given object type without arcs."""
        self.places[name] = Place(object_type)

    # ------------------------------------------------------------- exports

    def to_graph(self) -> nx.MultiDiGraph:
        """Return the net as a multigraph; arcs carry their object type."""
        graph = nx.MultiDiGraph()
        for name, place in self.places.items():
            graph.add_node(name, kind="place", object_type=place.object_type)
        for name in self.transitions:
            graph.add_node(name, kind="transition")
        for name in self.silent_transitions:
            graph.add_node(name, kind="silent")
        for arc in self.arcs:
            for node in (arc.source, arc.target):
                if node not in graph:
                    raise KeyError(f"arc endpoint {node!r} is not a node of the net")
            graph.add_edge(arc.source, arc.target, object_type=arc.object_type)
        return graph

    def to_dot(self) -> str:
        """Render the net in Graphviz DOT syntax."""

        def quote(text: str) -> str:
            return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'

        nodes = [*self.places, *self.transitions, *self.silent_transitions]
        index = {}
        for name in nodes:
            index.setdefault(name, len(index))
        lines = ["digraph {"]
        for name, number in index.items():
            shape = "circle" if name in self.places else "box"
            lines.append(f"    {number} [ label = {quote(name)} shape = {shape} ]")
        for arc in self.arcs:
            try:
                source, target = index[arc.source], index[arc.target]
            except KeyError as exc:
                raise KeyError(f"arc endpoint {exc.args[0]!r} is not a node of the net") from None
            lines.append(f"    {source} -> {target} [ label = {quote(arc.object_type)} ]")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def export_dot_to_file(self, path: str | Path) -> None:
        """Write the DOT rendering of the net to ``path``."""
        Path(path).write_text(self.to_dot(), encoding="utf-8")
        log.info("graph saved in %s; render with: dot -Tpng %s -o <file>.png", path, path)

    # ------------------------------------------------------------- queries

    def _collect_inputs(
        self, marking: Mapping[str, set[str]], transition: Transition
    ) -> list[str] | None:
        """Objects consumed by the transition, or None if it is not enabled."""
        involved: list[str] = []
        required = self.get_required_input_places_and_obj_types(transition)
        for (place_id, object_type), count in required.items():
            objects = marking.get(place_id)
            if objects is None:
                return None
            matching = [
                obj for obj in sorted(objects) if self.object_to_type[obj] == object_type
            ]
            involved.extend(matching)
            if len(matching) < count:
                return None
        return involved

    def get_enabled_transitions_with_breakcondition(
        self,
        marking: Mapping[str, set[str]],
        binding_sequence: Mapping[str, list[list[str]]] | None = None,
    ) -> list[Binding]:
        """Return the enabled visible transitions with the objects they involve.

        With a binding sequence, return only the first enabled transition that
        occurs in it, or an empty list if there is none.
        """
        enabled: list[Binding] = []
        for transition_id in self.get_associated_transitions_of_marking(marking, False):
            transition = self.transitions.get(transition_id)
            if transition is None:
                continue
            involved = self._collect_inputs(marking, transition)
            if involved is None:
                continue
            if binding_sequence is not None and transition_id in binding_sequence:
                return [(transition_id, list(involved))]
            enabled.append((transition_id, involved))
        if binding_sequence is not None:
            return []
        return enabled

    def get_enabled_transitions_from_marking(
        self, marking: Mapping[str, set[str]]
    ) -> list[str]:
        """Return the ids of the visible transitions enabled in the marking."""
        return [tid for tid, _ in self.get_enabled_transitions_with_breakcondition(marking)]

    def get_associated_transitions_of_marking(
        self, marking: Mapping[str, set[str]], silent: bool = False
    ) -> list[str]:
        """Return, without repeats and in discovery order, the silent or visible
        transitions fed by the marked places."""
        table = self.silent_transitions if silent else self.transitions
        found: dict[str, None] = {}
        for place_id in marking:
            place = self.places.get(place_id)
            if place is None:
                continue
            for transition_id, _ in place.output_transitions:
                if transition_id in table:
                    found.setdefault(transition_id)
        return list(found)

    def get_required_input_places_and_obj_types(
        self, transition: Transition
    ) -> dict[tuple[str, str], int]:
        """Count how many tokens each (place, object type) input must supply."""
        return dict(Counter(transition.input_places))

    def remove_next_binding(
        self,
        binding_sequence: BindingSequence,
        marking: Mapping[str, set[str]],
    ) -> Binding | None:
        """Remove from the sequence and return a binding enabled in the marking.

        Bindings of the transition are tried from last to first; the chosen one
        is replaced by the last binding, and the transition's entry is dropped
        once empty. Returns None if no binding fits.
        """
        enabled = self.get_enabled_transitions_with_breakcondition(marking, binding_sequence)
        for transition_id, involved in enabled:
            candidates = binding_sequence[transition_id]
            for index in reversed(range(len(candidates))):
                if is_superset(involved, candidates[index]):
                    objects = _swap_remove(candidates, index)
                    if not candidates:
                        del binding_sequence[transition_id]
                    return transition_id, objects
        return None

    def get_enabled_silent_transition_bindings(
        self, marking: Mapping[str, set[str]]
    ) -> list[Binding]:
        """Return every enabled silent transition reached from a marked place."""
        result: list[Binding] = []
        for place_id in marking:
            place = self.places.get(place_id)
            if place is None:
                raise KeyError(f"unknown place {place_id!r} in marking")
            for transition_id, _ in place.output_transitions:
                if transition_id not in self.silent_transitions:
                    continue
                enabled, involved = self.is_transition_enabled(marking, transition_id)
                if enabled:
                    result.append((transition_id, involved))
        return result

    # ----------------------------------------------------------- execution

    def execute_binding(
        self, binding: tuple[str, list[str]], marking: Mapping[str, set[str]]
    ) -> Marking:
        """Fire a binding and return the resulting marking; the input is unchanged."""
        transition_id, objects = binding
        transition = self._transition(transition_id)
        result = _copy_marking(marking)
        remaining = list(objects)

        for place_id, _ in transition.input_places:
            if place_id not in result:
                raise KeyError(f"input place {place_id!r} holds no tokens")
            object_type = self.places[place_id].object_type
            obj = pop_object_from_binding(remaining, object_type, self.object_to_type)
            if obj is None:
                raise ValueError(
                    f"binding of {transition_id!r} has no object of type {object_type!r} left"
                )
            result[place_id].discard(obj)
            if not result[place_id]:
                del result[place_id]

        for place_id, _ in transition.output_places:
            object_type = self.places[place_id].object_type
            result.setdefault(place_id, set()).update(
                obj for obj in objects if self.object_to_type[obj] == object_type
            )
        return result

    def is_transition_enabled(
        self, marking: Mapping[str, set[str]], transition_id: str
    ) -> tuple[bool, list[str] | None]:
        """Return whether the transition is enabled and, if so, the objects involved."""
        involved = self._collect_inputs(marking, self._transition(transition_id))
        if involved is None:
            return False, None
        return True, involved