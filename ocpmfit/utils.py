"""Small helpers on collections of object ids and contexts."""

from __future__ import annotations

import json
import string
from collections import Counter
from typing import Iterable, Mapping, TypeVar

V = TypeVar("V")


def has_intersection(a: Iterable[str], b: Iterable[str]) -> bool:
    """Return True if the two collections share at least one element."""
    return not set(a).isdisjoint(b)


def is_superset(superset: Iterable[str], subset: Iterable[str]) -> bool:
    """Return True if every element of ``subset`` is in ``superset``."""
    return set(subset) <= set(superset)


def pop_object_from_binding(
    objects: list[str],
    object_type: str,
    object_to_type: Mapping[str, str],
) -> str | None:
    """Remove and return the first object of the given type, or None."""
    for index, obj in enumerate(objects):
        if object_to_type[obj] == object_type:
            return objects.pop(index)
    return None


def _numeric_key(key: str) -> int:
    digits = "".join(ch for ch in key if ch in string.digits)
    return int(digits) if digits else 0


def sort_by_numeric_keys(data: Mapping[str, V]) -> list[tuple[str, V]]:
    """Sort entries by the number formed from the digits of each key."""
    return sorted(data.items(), key=lambda item: _numeric_key(item[0]))


def format_contexts(
    contexts: Mapping[str, Mapping[str, Counter]],
) -> str:
    """Render contexts as readable text, ordered by event id."""
    lines = ["Contexts:"]
    for event_id, context in sort_by_numeric_keys(contexts):
        lines.append(f"Event Type: {event_id}")
        for object_type, counter in context.items():
            lines.append(f"  Context: {object_type}")
            for activities, count in counter.items():
                rendered = json.dumps(list(activities), ensure_ascii=False)
                lines.append(f"    Activities: {rendered}, Count: {count}")
    lines.append("_" * 44)
    return "\n".join(lines)