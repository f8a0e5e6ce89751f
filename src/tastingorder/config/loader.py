"""Load engine config, ordering configurations and items from YAML or JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from tastingorder.engine.models import OrderingConfiguration

from .schema import EngineConfig


class ConfigLoadError(ValueError):
    """Raised when config cannot be loaded or parsed."""


def load_config(path: str | Path) -> EngineConfig:
    """Load engine config file from YAML/JSON and validate with Pydantic."""
    data = _read_document(path)
    if not isinstance(data, dict):
        raise ConfigLoadError("Config root must be a JSON/YAML object.")

    return EngineConfig.model_validate(data)


def load_configuration(path: str | Path) -> OrderingConfiguration:
    """Load an ordering configuration (criteria set) authored outside the engine."""
    data = _read_document(path)
    if not isinstance(data, dict):
        raise ConfigLoadError("Ordering configuration root must be a JSON/YAML object.")

    return OrderingConfiguration.model_validate(data)


def load_items(path: str | Path) -> list[Any]:
    """Load the list of items to order.

    Accepts either a bare list or an object with an ``items`` list.
    """
    data = _read_document(path)
    if isinstance(data, dict) and "items" in data:
        data = data["items"]
    if not isinstance(data, list):
        raise ConfigLoadError("Items file must contain a list of objects.")
    return data


def _read_document(path: str | Path) -> Any:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return _load_yaml(config_path)
    if suffix == ".json":
        return _load_json(config_path)
    raise ConfigLoadError(
        f"Unsupported config format '{suffix}'. Use .yaml/.yml or .json."
    )


def _load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as file:
        try:
            parsed = yaml.safe_load(file)
        except yaml.YAMLError as exc:
            raise ConfigLoadError(f"Invalid YAML in {path}: {exc}") from exc

    return {} if parsed is None else parsed


def _load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as file:
        try:
            parsed = json.load(file)
        except json.JSONDecodeError as exc:
            raise ConfigLoadError(f"Invalid JSON in {path}: {exc}") from exc

    return {} if parsed is None else parsed
