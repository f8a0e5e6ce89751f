"""Ordering adapter for the HTTP API and CLI."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from tastingorder.config import EngineConfig, load_config
from tastingorder.engine import (
    ConfigurationNotFoundError,
    Criterion,
    OrderingConfiguration,
    SampleOrderingEngine,
)
from tastingorder.engine.models import SessionType


def _criterion(**fields: Any) -> Criterion:
    return Criterion.model_validate(fields)


PRESET_CONFIGURATIONS: dict[str, OrderingConfiguration] = {
    "routine-default": OrderingConfiguration(
        id="routine-default",
        name="Default ordering - routine",
        description="Default for routine sessions: production date, priority and beer type",
        criteria=(
            _criterion(
                id="production-date",
                name="Production date",
                description="Recency of the production date",
                kind="date",
                weight=40,
                direction="desc",
                data_path="productionDate",
                normalization_config={"max": 30},
            ),
            _criterion(
                id="priority",
                name="Priority",
                description="Sample priority level",
                kind="enum",
                weight=30,
                direction="desc",
                options=("baixa", "media", "alta"),
                data_path="priority",
                normalization_config={"default_value": 50},
            ),
            _criterion(
                id="beer-type",
                name="Sample type",
                description="Beer style of the sample",
                kind="enum",
                weight=30,
                direction="asc",
                options=("IPA", "Lager", "Pilsner", "Weiss", "Porter"),
                data_path="type",
                normalization_config={"default_value": 50},
            ),
        ),
        is_default=True,
        session_type="routine",
        created_by="admin",
    ),
    "risk-first": OrderingConfiguration(
        id="risk-first",
        name="Risk ordering",
        description="Samples with higher risk and urgent evaluation needs first",
        criteria=(
            _criterion(
                id="risk-level",
                name="Risk level",
                kind="enum",
                weight=60,
                direction="asc",
                options=("baixo", "medio", "alto"),
                data_path="riskLevel",
            ),
            _criterion(
                id="quality-score",
                name="Quality score",
                kind="numeric",
                weight=40,
                direction="desc",
                data_path="quality.score",
                normalization_config={"min": 0, "max": 100},
            ),
        ),
        is_default=False,
        session_type="extra",
        created_by="admin",
    ),
    "test-frequency": OrderingConfiguration(
        id="test-frequency",
        name="Frequency ordering",
        description="Based on test frequency and last evaluation",
        criteria=(
            _criterion(
                id="last-tested",
                name="Last tested",
                kind="date",
                weight=50,
                direction="desc",
                data_path="lastTested",
                normalization_config={"max": 30, "default_value": 100},
            ),
            _criterion(
                id="test-frequency",
                name="Test frequency (days)",
                kind="numeric",
                weight=50,
                direction="desc",
                data_path="testFrequency",
                normalization_config={"min": 1, "max": 30},
            ),
        ),
        is_default=False,
        session_type="all",
        created_by="user1",
    ),
}


def select_configuration(
    configurations: Iterable[OrderingConfiguration],
    session_type: SessionType | None = None,
) -> OrderingConfiguration:
    """Pick the configuration to apply for a session type.

    Configurations scoped to the session type, to ``all`` or unscoped are
    candidates; the default candidate wins, otherwise the first one.
    """
    candidates = [
        configuration
        for configuration in configurations
        if session_type is None or configuration.session_type in (session_type, "all", None)
    ]
    if not candidates:
        raise ConfigurationNotFoundError(f"No ordering configuration for session type '{session_type}'.")

    for configuration in candidates:
        if configuration.is_default:
            return configuration
    return candidates[0]


class OrderingService:
    """Adapter that converts engine output into API response shape."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        presets: Mapping[str, OrderingConfiguration] | None = None,
    ) -> None:
        self.engine = SampleOrderingEngine(config=config)
        self.presets = dict(PRESET_CONFIGURATIONS if presets is None else presets)

    @classmethod
    def from_config_file(cls, path: str | Path | None) -> OrderingService:
        """Build a service from an optional engine config file."""
        if path is None:
            return cls()
        return cls(config=load_config(path))

    def list_presets(self) -> list[dict[str, object]]:
        """Return every preset configuration as a JSON-ready mapping."""
        return [
            configuration.model_dump(mode="json", by_alias=True)
            for configuration in self.presets.values()
        ]

    def resolve_configuration(
        self,
        configuration: OrderingConfiguration | Mapping[str, Any] | None = None,
        configuration_id: str | None = None,
        session_type: SessionType | None = None,
    ) -> OrderingConfiguration:
        """Resolve an explicit configuration, a preset id, or a session-type default."""
        if configuration is not None:
            if isinstance(configuration, OrderingConfiguration):
                return configuration
            return OrderingConfiguration.model_validate(configuration)

        if configuration_id is not None:
            if configuration_id not in self.presets:
                raise ConfigurationNotFoundError(f"Unknown ordering configuration '{configuration_id}'.")
            return self.presets[configuration_id]

        return select_configuration(self.presets.values(), session_type)

    def rank(
        self,
        items: Sequence[Any],
        configuration: OrderingConfiguration | Mapping[str, Any] | None = None,
        configuration_id: str | None = None,
        session_type: SessionType | None = None,
        scope_id: str | None = None,
        actor_id: str | None = None,
    ) -> dict[str, object]:
        """Rank items and return the result in the API response format."""
        resolved = self.resolve_configuration(configuration, configuration_id, session_type)
        result = self.engine.rank(items, resolved, scope_id=scope_id, actor_id=actor_id)
        return result.to_dict()

    def preview(
        self,
        items: Sequence[Any],
        criteria: Sequence[Criterion | Mapping[str, Any]],
    ) -> dict[str, object]:
        """Preview an in-progress criteria list; never raises on bad criteria."""
        entries = self.engine.preview(items, criteria)
        return {
            "entries": [
                {"item": entry.item, "score": entry.score, "position": entry.position}
                for entry in entries
            ]
        }
