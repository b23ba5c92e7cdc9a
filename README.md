# ocpmfit

Measures how well an object-centric Petri net (OCPN) fits an object-centric
event log (OCEL), and how precise it is. It does this by replaying the context
of each event.

For each event, the package works out:

- its **preset**: every earlier event linked to it through shared objects in
  the event-object graph (`construct_event_object_graph`, `get_event_presets`);
- its **context**: for each object type, a count of how often each activity
  history of the preset's objects occurs;
- its **binding**: for each declared object type, the objects the event
  touches (`get_contexts_and_bindings`);
- the **enabled log activities**: the activities of all events that share the
  same context (`get_enabled_log_activities`);
- the **enabled model activities**: the visible transitions the net enables
  after the preset's bindings have been replayed from the initial marking.
  Silent transitions are fired whenever no binding of the preset can fire.
  The results are pooled over all events with the same context
  (`get_enabled_model_activities`).

**Fitness** is the mean, over all events, of the share of enabled log
activities that the model also enables.

**Precision** is the mean share of enabled model activities that the log also
shows. Events for which the model enables nothing are left out of the
precision mean. A mean over no events is `nan`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
ocpmfit
```

This evaluates the bundled running example against its Petri net and prints
the fitness and the precision. The running example is an airport log with two
planes and four pieces of baggage.

Options:

- `--show-contexts` prints the context of every event, ordered by event id.
- `--save DIR` writes the intermediate results as JSON files into `DIR`:
  `contexts.json`, `bindings.json`, `presets.json`, `context_map.json`,
  `enabled_log_activities.json` and `enabled_model_activities.json`.

## Library

```python
from ocpmfit.examples import running_example_ocel, running_example_ocpn
from ocpmfit.evaluator import apply

ocel = running_example_ocel()
ocpn = running_example_ocpn()
fitness, precision = apply(ocel, ocpn)
print(fitness, round(precision, 2))   # 1.0 0.89
```

### Logs

A log is an `OCEL` from `ocpmfit.ocel`. It holds:

- `Event`s, each with an id, an activity (`event_type`), its `Relationship`s
  to objects and an optional time;
- `ObjectRecord`s, each with an id and an object type;
- the lists of object types and event types.

`OCEL.from_events(events, objects)` builds a log and derives both type lists
from the events and objects. Every object that an event refers to must have a
type among the declared object types.

### Nets

A net is an `OCPN` from `ocpmfit.petri`, built from a mapping of object ids to
object types:

```python
from ocpmfit.petri import OCPN

net = OCPN({"p1": "plane", "b1": "baggage"})
net.add_place("pl1", "plane")
net.add_place("pl2", "baggage")
net.add_arc("pl1", "Fuel plane", "plane")
net.add_arc("pl2", "Check-in", "baggage")
net.initial_marking = {"pl1": {"p1"}, "pl2": {"b1"}}
print(net.get_enabled_transitions_from_marking(net.initial_marking))
```

How `add_arc` treats an arc depends on its source:

- If the source is a known place and the target is not a place, the arc runs
  from the place to the transition.
- If the source is a known transition, the arc runs from the transition to
  the place.
- Otherwise it raises `ValueError`.

Transitions and places that are named in an arc but do not exist yet are
created. Use `add_silent_transition` for silent transitions.

A marking is a dict that maps place ids to sets of object ids. The net can:

- check whether transitions are enabled (`is_transition_enabled`,
  `get_enabled_transitions_from_marking`,
  `get_enabled_silent_transition_bindings`);
- take the next enabled binding out of a binding sequence
  (`remove_next_binding`);
- fire a binding and return the new marking (`execute_binding`). The marking
  passed in is left unchanged.

For output, `OCPN.to_dot` and `OCPN.export_dot_to_file` write the net as
Graphviz DOT, and `OCPN.to_graph` turns it into a `networkx.MultiDiGraph`.

### Storing results

`ocpmfit.examples.save_json(data, path)` writes data as JSON and creates
parent directories as needed. `load_json(path)` reads the data back. Sets, and
mappings whose keys are not strings, come back as sets and dicts, with tuple
keys and members. Other tuples come back as lists, and dataclasses come back
as dicts.

### Diagnostics

Progress and intermediate values go to the standard `logging` module at
debug level, under the `ocpmfit` logger names.

## What it does not do

The package does not read or write OCEL files, whether in XML, JSON or
SQLite. To use your own logs and nets, build them in code from the classes
above. The command line only evaluates the bundled running example.