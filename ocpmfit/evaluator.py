"""Fitness and precision of an object-centric Petri net against a log."""

from __future__ import annotations

import logging
import math

from .enabled_log import (
    get_contexts_and_bindings,
    get_enabled_log_activities,
    get_event_presets,
)
from .enabled_model import get_enabled_model_activities
from .ocel import OCEL
from .petri import OCPN

log = logging.getLogger(__name__)


def apply(ocel: OCEL, ocpn: OCPN) -> tuple[float, float]:
    """Return ``(fitness, precision)`` of the net with respect to the log.

    For each event the activities enabled in the log and in the model for its
    context are compared. Fitness averages the share of log activities the
    model enables; precision averages the share of model activities seen in
    the log, skipping events for which the model enables nothing. A mean over
    no events is NaN.
    """
    event_ids = [event.id for event in ocel.events]
    contexts, bindings = get_contexts_and_bindings(ocel)
    presets = get_event_presets(ocel)
    enabled_log, contexts_map = get_enabled_log_activities(ocel, contexts)
    enabled_model = get_enabled_model_activities(ocpn, presets, bindings, contexts_map)

    fitness_sum = 0.0
    precision_sum = 0.0
    counted = 0
    for event_id in event_ids:
        log_acts = enabled_log[event_id]
        model_acts = enabled_model[event_id]
        log.debug("enabled log activities for %s: %s", event_id, log_acts)
        log.debug("enabled model activities for %s: %s", event_id, model_acts)
        shared = len(log_acts & model_acts)
        fitness_sum += shared / len(log_acts)
        if model_acts:
            precision_sum += shared / len(model_acts)
            counted += 1

    fitness = fitness_sum / len(event_ids) if event_ids else math.nan
    precision = precision_sum / counted if counted else math.nan
    return fitness, precision