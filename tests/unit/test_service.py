"""Tests for the ordering service adapter."""

from __future__ import annotations

import json

import pytest

from tastingorder.api.service import PRESET_CONFIGURATIONS, OrderingService, select_configuration
from tastingorder.engine import ConfigurationNotFoundError, OrderingConfiguration


def _config(config_id: str, session_type: str | None, is_default: bool = False) -> OrderingConfiguration:
    return OrderingConfiguration.model_validate(
        {
            "id": config_id,
            "isDefault": is_default,
            "sessionType": session_type,
            "criteria": [{"id": "c", "kind": "boolean", "weight": 10, "dataPath": "flag"}],
        }
    )


def test_presets_cover_each_session_type() -> None:
    assert set(PRESET_CONFIGURATIONS) == {"routine-default", "risk-first", "test-frequency"}
    assert {configuration.session_type for configuration in PRESET_CONFIGURATIONS.values()} == {
        "routine",
        "extra",
        "all",
    }
    assert [c.id for c in PRESET_CONFIGURATIONS.values() if c.is_default] == ["routine-default"]
    routine = PRESET_CONFIGURATIONS["routine-default"]
    assert sum(criterion.weight for criterion in routine.active_criteria) == 100


def test_select_configuration_prefers_default_for_session_type() -> None:
    configurations = [
        _config("extra-only", "extra"),
        _config("shared", "all"),
        _config("routine-default", "routine", is_default=True),
    ]

    assert select_configuration(configurations, "routine").id == "routine-default"
    assert select_configuration(configurations, "extra").id == "extra-only"
    assert select_configuration(configurations).id == "routine-default"


def test_select_configuration_raises_when_nothing_matches() -> None:
    with pytest.raises(ConfigurationNotFoundError, match="extra"):
        select_configuration([_config("routine", "routine")], "extra")


def test_resolve_configuration_sources() -> None:
    service = OrderingService()

    explicit = service.resolve_configuration({"id": "inline", "criteria": []})
    by_id = service.resolve_configuration(configuration_id="risk-first")
    by_session = service.resolve_configuration(session_type="extra")

    assert explicit.id == "inline"
    assert by_id.id == "risk-first"
    assert by_session.id == "risk-first"

    with pytest.raises(ConfigurationNotFoundError, match="missing"):
        service.resolve_configuration(configuration_id="missing")


def test_rank_with_preset_returns_response_shape() -> None:
    service = OrderingService()
    items = [
        {"id": "S-1", "riskLevel": "baixo", "quality": {"score": 90}},
        {"id": "S-2", "riskLevel": "alto", "quality": {"score": 40}},
    ]

    payload = service.rank(items, configuration_id="risk-first", scope_id="session-7", actor_id="ana")

    assert payload["configurationId"] == "risk-first"
    assert payload["scopeId"] == "session-7"
    assert payload["generatedBy"] == "ana"
    assert [score["sampleId"] for score in payload["scores"]] == ["S-2", "S-1"]
    assert [score["finalPosition"] for score in payload["scores"]] == [1, 2]
    # S-2: 100 * 0.6 + (100 - 40) * 0.4; S-1: 0 * 0.6 + (100 - 90) * 0.4
    assert payload["scores"][0]["totalScore"] == pytest.approx(84.0)
    assert payload["scores"][1]["totalScore"] == pytest.approx(4.0)


def test_preview_response_shape_and_fallback() -> None:
    service = OrderingService()
    items = [{"id": "A", "flag": False}, {"id": "B", "flag": True}]

    ok = service.preview(items, [{"id": "f", "kind": "boolean", "weight": 10, "dataPath": "flag"}])
    degraded = service.preview(items, [{"id": "f", "kind": "boolean", "weight": 0, "dataPath": "flag"}])

    assert [entry["item"]["id"] for entry in ok["entries"]] == ["B", "A"]
    assert [entry["score"] for entry in ok["entries"]] == pytest.approx([100.0, 0.0])
    assert [entry["item"]["id"] for entry in degraded["entries"]] == ["A", "B"]
    assert [entry["score"] for entry in degraded["entries"]] == [0.0, 0.0]


def test_list_presets_uses_wire_names() -> None:
    presets = OrderingService().list_presets()

    routine = next(preset for preset in presets if preset["id"] == "routine-default")
    assert routine["isDefault"] is True
    assert routine["criteria"][0]["dataPath"] == "productionDate"
    assert routine["criteria"][0]["kind"] == "date"


def test_from_config_file(tmp_path) -> None:
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"date_window_days": 7}), encoding="utf-8")

    service = OrderingService.from_config_file(path)

    assert service.engine.config.date_window_days == 7
    assert OrderingService.from_config_file(None).engine.config.date_window_days == 30
