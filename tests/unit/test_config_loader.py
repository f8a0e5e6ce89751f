from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from tastingorder.config.loader import ConfigLoadError, load_config, load_configuration, load_items
from tastingorder.engine.models import CriterionKind, SortDirection


def test_load_json_config_with_defaults(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"date_window_days": 14, "id_path": "code"}),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.date_window_days == 14
    assert config.id_path == "code"
    assert config.path_separator == "."
    assert config.min_weight == 1
    assert config.max_weight == 100


def test_load_yaml_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "path_separator: /\n" "equal_range_score: 25\n" "max_weight: 10\n",
        encoding="utf-8",
    )

    config = load_config(config_path)
    assert config.path_separator == "/"
    assert config.equal_range_score == 25.0
    assert config.max_weight == 10


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_invalid_config_value_raises_validation_error(tmp_path):
    config_path = tmp_path / "invalid.json"
    config_path.write_text(json.dumps({"date_window_days": 0}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(config_path)


def test_inverted_weight_bounds_are_rejected(tmp_path):
    config_path = tmp_path / "bounds.json"
    config_path.write_text(json.dumps({"min_weight": 50, "max_weight": 10}), encoding="utf-8")

    with pytest.raises(ValidationError, match="min_weight"):
        load_config(config_path)


def test_unknown_config_key_is_rejected(tmp_path):
    config_path = tmp_path / "extra.json"
    config_path.write_text(json.dumps({"sample_size": 10}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(config_path)


def test_unsupported_extension_raises(tmp_path):
    config_path = tmp_path / "config.txt"
    config_path.write_text("date_window_days=10", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Unsupported config format"):
        load_config(config_path)


def test_malformed_json_raises_config_load_error(tmp_path):
    config_path = tmp_path / "broken.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Invalid JSON"):
        load_config(config_path)


def test_load_configuration_accepts_ui_field_names(tmp_path):
    config_path = tmp_path / "ordering.yaml"
    config_path.write_text(
        "\n".join(
            [
                "id: config-1",
                "name: Routine",
                "isDefault: true",
                "sessionType: routine",
                "criteria:",
                "  - id: crit-1",
                "    type: date",
                "    weight: 40",
                "    direction: desc",
                "    isActive: true",
                "    dataPath: productionDate",
                "    normalizationConfig:",
                "      max: 30",
                "  - id: crit-2",
                "    kind: enum",
                "    weight: 30",
                "    options: [baixa, media, alta]",
                "    data_path: priority",
                "    normalization_config:",
                "      defaultValue: 50",
            ]
        ),
        encoding="utf-8",
    )

    configuration = load_configuration(config_path)

    assert configuration.id == "config-1"
    assert configuration.is_default is True
    assert configuration.session_type == "routine"
    first, second = configuration.criteria
    assert first.kind is CriterionKind.DATE
    assert first.direction is SortDirection.DESC
    assert first.data_path == "productionDate"
    assert first.normalization_config.max == 30
    assert second.kind is CriterionKind.ENUM
    assert second.direction is SortDirection.ASC
    assert second.options == ("baixa", "media", "alta")
    assert second.normalization_config.default_value == 50


def test_load_items_accepts_bare_list_and_wrapped_list(tmp_path):
    bare = tmp_path / "items.json"
    bare.write_text(json.dumps([{"id": "A"}, {"id": "B"}]), encoding="utf-8")
    wrapped = tmp_path / "items.yaml"
    wrapped.write_text("items:\n  - id: C\n", encoding="utf-8")

    assert [item["id"] for item in load_items(bare)] == ["A", "B"]
    assert load_items(wrapped) == [{"id": "C"}]


def test_load_items_rejects_non_list(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps({"id": "A"}), encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="list"):
        load_items(path)
