"""Tests for engine configuration schema and loading."""

import json
from pathlib import Path

import jsonschema
import pytest

from agentrelay.domain.models import EngineConfig
from agentrelay.schemas import (
    engine_config_from_dict,
    get_engine_schema,
    load_engine_config,
    load_model_block,
    validate_engine_config,
)


class TestEngineSchema:
    """Tests for the packaged engine schema."""

    def test_schema_loads(self) -> None:
        """The schema ships with the package and documents every bound."""
        schema = get_engine_schema()

        assert set(schema["properties"]) == {
            "max_retries",
            "max_iterations",
            "step_budget",
            "model",
        }

    def test_schema_defaults_match_engine(self) -> None:
        """Schema defaults agree with EngineConfig defaults."""
        props = get_engine_schema()["properties"]
        config = EngineConfig()

        assert props["max_retries"]["default"] == config.max_retries
        assert props["max_iterations"]["default"] == config.max_iterations
        assert props["step_budget"]["default"] == config.step_budget

    @pytest.mark.parametrize(
        "data",
        [
            {"max_retries": -1},
            {"step_budget": 0},
            {"max_iterations": "two"},
            {"model": {"config": {}}},
            {"unknown": True},
        ],
    )
    def test_invalid_configs_rejected(self, data: dict) -> None:
        """Out-of-range, mistyped and unknown fields fail validation."""
        with pytest.raises(jsonschema.ValidationError):
            validate_engine_config(data)


class TestLoadEngineConfig:
    """Tests for engine_config_from_dict() and the file loaders."""

    def test_partial_config_keeps_defaults(self) -> None:
        """Absent fields fall back to the defaults."""
        config = engine_config_from_dict({"max_iterations": 5})

        assert config == EngineConfig(max_iterations=5)

    def test_load_from_file(self, tmp_path: Path) -> None:
        """A configuration file yields bounds and the model block."""
        path = tmp_path / "engine.json"
        path.write_text(
            json.dumps(
                {
                    "max_retries": 0,
                    "step_budget": 40,
                    "model": {"name": "OpenAIChatModel", "config": {"model": "gpt-4o"}},
                }
            )
        )

        assert load_engine_config(path) == EngineConfig(max_retries=0, step_budget=40)
        assert load_model_block(path) == {
            "name": "OpenAIChatModel",
            "config": {"model": "gpt-4o"},
        }

    def test_model_block_optional(self, tmp_path: Path) -> None:
        """Files without a model block return None."""
        path = tmp_path / "engine.json"
        path.write_text("{}")

        assert load_model_block(path) is None
