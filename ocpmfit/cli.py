"""Command line entry point: evaluate the running example."""

from __future__ import annotations

import argparse
from pathlib import Path

from .enabled_log import (
    get_contexts_and_bindings,
    get_enabled_log_activities,
    get_event_presets,
)
from .enabled_model import get_enabled_model_activities
from .evaluator import apply
from .examples import running_example_ocel, running_example_ocpn, save_json
from .utils import format_contexts


def main(argv: list[str] | None = None) -> int:
    """Compute fitness and precision of the running example and print them."""
    parser = argparse.ArgumentParser(
        prog="ocpmfit",
        description="Fitness and precision of the running example net against its log.",
    )
    parser.add_argument(
        "--show-contexts", action="store_true", help="print the context of every event"
    )
    parser.add_argument(
        "--save",
        metavar="DIR",
        type=Path,
        help="write intermediate results as JSON files into DIR",
    )
    args = parser.parse_args(argv)

    ocel = running_example_ocel()
    ocpn = running_example_ocpn()

    if args.show_contexts or args.save is not None:
        contexts, bindings = get_contexts_and_bindings(ocel)
        if args.show_contexts:
            print(format_contexts(contexts))
        if args.save is not None:
            presets = get_event_presets(ocel)
            enabled_log, contexts_map = get_enabled_log_activities(ocel, contexts)
            enabled_model = get_enabled_model_activities(
                ocpn, presets, bindings, contexts_map
            )
            results = {
                "contexts": contexts,
                "bindings": bindings,
                "presets": presets,
                "context_map": contexts_map,
                "enabled_log_activities": enabled_log,
                "enabled_model_activities": enabled_model,
            }
            for name, data in results.items():
                save_json(data, args.save / f"{name}.json")

    fitness, precision = apply(ocel, ocpn)
    print(f"fitness: {fitness}")
    print(f"precision: {precision}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())