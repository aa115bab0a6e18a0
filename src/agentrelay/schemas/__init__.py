"""Agent relay JSON Schema definitions and configuration loading.

Schemas:
    - engine.schema.json: Engine bounds and the optional model block

Usage:
    from agentrelay.schemas import load_engine_config

    config = load_engine_config("engine.json")  # Raises jsonschema.ValidationError
"""

from __future__ import annotations

import json
from importlib.resources import files
from pathlib import Path
from typing import Any

import jsonschema

from agentrelay.domain.models import EngineConfig

_ENGINE_FIELDS = ("max_retries", "max_iterations", "step_budget")


def _load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the schemas package.

    Args:
        name: Schema filename (e.g., 'engine.schema.json')

    Returns:
        Parsed JSON schema as a dictionary
    """
    schema_text = files("agentrelay.schemas").joinpath(name).read_text()
    result: dict[str, Any] = json.loads(schema_text)
    return result


def get_engine_schema() -> dict[str, Any]:
    """Get the engine.json schema."""
    return _load_schema("engine.schema.json")


def validate_engine_config(data: dict[str, Any]) -> None:
    """Validate an engine configuration against the schema.

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_engine_schema())


def engine_config_from_dict(data: dict[str, Any]) -> EngineConfig:
    """Validate `data` and build an EngineConfig; absent fields keep defaults."""
    validate_engine_config(data)
    return EngineConfig(**{k: data[k] for k in _ENGINE_FIELDS if k in data})


def load_engine_config(path: str | Path) -> EngineConfig:
    """Read, validate and convert an engine configuration file."""
    with open(path) as f:
        data = json.load(f)
    return engine_config_from_dict(data)


def load_model_block(path: str | Path) -> dict[str, Any] | None:
    """Return the validated `model` block of a configuration file, if any."""
    with open(path) as f:
        data = json.load(f)
    validate_engine_config(data)
    model: dict[str, Any] | None = data.get("model")
    return model


__all__ = [
    "get_engine_schema",
    "validate_engine_config",
    "engine_config_from_dict",
    "load_engine_config",
    "load_model_block",
]
