#!/usr/bin/env python3
"""Tasting Order - order tasting samples by a weighted criteria configuration."""

from __future__ import annotations

import json
import logging
import sys

import pandas as pd
from pydantic import ValidationError

from tastingorder.api.service import OrderingService
from tastingorder.config import ConfigLoadError, load_configuration, load_items
from tastingorder.engine import OrderingError


def main(
    items_path: str,
    config_path: str | None = None,
    configuration_path: str | None = None,
    preset: str | None = None,
    session_type: str | None = None,
    scope_id: str | None = None,
    actor_id: str | None = None,
    preview: bool = False,
    output: str = "table",
) -> int:
    """Run one ordering and print the result."""

    try:
        service = OrderingService.from_config_file(config_path)
        items = load_items(items_path)
        configuration = load_configuration(configuration_path) if configuration_path else None
    except (FileNotFoundError, ConfigLoadError, ValidationError) as exc:
        print(f"Could not load input: {exc}", file=sys.stderr)
        return 1

    try:
        if preview:
            resolved = service.resolve_configuration(configuration, preset, session_type)
            payload = service.preview(items, list(resolved.criteria))
        else:
            payload = service.rank(
                items,
                configuration=configuration,
                configuration_id=preset,
                session_type=session_type,
                scope_id=scope_id,
                actor_id=actor_id,
            )
    except OrderingError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 2

    if preview:
        rows = [
            {"position": entry["position"], "score": round(entry["score"], 2), "item": entry["item"]}
            for entry in payload["entries"]
        ]
    else:
        rows = [
            {
                "position": score["finalPosition"],
                "sample": score["sampleId"],
                "score": round(float(score["totalScore"]), 2),
            }
            for score in payload["scores"]
        ]

    if output == "json":
        print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
    else:
        print(pd.DataFrame(rows).to_string(index=False))
    return 0


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Order tasting samples")
    parser.add_argument("--items", required=True, help="JSON/YAML file with the samples")
    parser.add_argument("--config", default=None, help="Engine config file (YAML/JSON)")
    parser.add_argument("--configuration", default=None, help="Ordering configuration file (YAML/JSON)")
    parser.add_argument("--preset", default=None, help="Built-in configuration id")
    parser.add_argument("--session-type", choices=["routine", "extra", "all"], default=None)
    parser.add_argument("--scope", default=None, help="Session id stamped on the result")
    parser.add_argument("--actor", default=None, help="User id stamped on the result")
    parser.add_argument("--preview", action="store_true", help="Lenient preview ordering")
    parser.add_argument("--output", choices=["table", "json"], default="table")
    parser.add_argument("--log-level", default="WARNING")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    sys.exit(
        main(
            items_path=args.items,
            config_path=args.config,
            configuration_path=args.configuration,
            preset=args.preset,
            session_type=args.session_type,
            scope_id=args.scope,
            actor_id=args.actor,
            preview=args.preview,
            output=args.output,
        )
    )
