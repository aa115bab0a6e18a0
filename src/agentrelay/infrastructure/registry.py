"""
Model providers discovered through the `agentrelay.models` entry points.

A provider is any ModelServiceInterface class. Packages add providers in
their pyproject.toml:

    [project.entry-points."agentrelay.models"]
    MyModel = "mypackage.models:MyModel"

An engine configuration file then selects one by name:

    {"model": {"name": "MyModel", "config": {"temperature": 0.2}}}
"""

import logging
from collections.abc import Mapping
from importlib.metadata import entry_points
from typing import Any

from agentrelay.domain.interfaces import ModelServiceInterface

logger = logging.getLogger(__name__)

MODELS_GROUP = "agentrelay.models"


class ModelRegistry:
    """
    Name-to-provider lookup for one entry point group.

    Entry points are scanned on first lookup. A provider that fails to
    import is remembered with its error so that asking for it by name
    explains the failure instead of reporting it missing.
    """

    def __init__(self, group: str = MODELS_GROUP) -> None:
        self._group = group
        self._providers: dict[str, type[ModelServiceInterface]] = {}
        self._failures: dict[str, str] = {}
        self._scanned = False

    @property
    def group(self) -> str:
        return self._group

    @property
    def failures(self) -> dict[str, str]:
        """Providers whose entry point could not be loaded, with the error."""
        self._scan()
        return dict(self._failures)

    def _scan(self) -> None:
        if self._scanned:
            return
        self._scanned = True
        for ep in entry_points(group=self._group):
            if ep.name in self._providers:
                continue
            try:
                provider = ep.load()
            except Exception as e:
                self._failures[ep.name] = f"{type(e).__name__}: {e}"
                logger.warning("Model provider %r failed to load: %s", ep.name, e)
                continue
            self._providers[ep.name] = provider

    def register(self, name: str, provider: type[ModelServiceInterface]) -> None:
        """Add or replace a provider; takes precedence over entry points."""
        self._providers[name] = provider
        self._failures.pop(name, None)

    def available(self) -> list[str]:
        """Names of the providers that can be built, sorted."""
        self._scan()
        return sorted(self._providers)

    def get(self, name: str) -> type[ModelServiceInterface]:
        """
        Look up a provider class.

        Raises:
            KeyError: If the name is unknown or its entry point failed to load
        """
        self._scan()
        if name in self._providers:
            return self._providers[name]
        if name in self._failures:
            raise KeyError(
                f"Model provider '{name}' could not be loaded: {self._failures[name]}"
            )
        known = ", ".join(self.available()) or "(none)"
        raise KeyError(f"Unknown model provider '{name}'. Available: {known}")

    def create(self, name: str, **config: Any) -> ModelServiceInterface:
        """Build a provider with keyword configuration."""
        return self.get(name)(**config)

    def from_config(self, block: Mapping[str, Any]) -> ModelServiceInterface:
        """
        Build the provider described by a configuration `model` block.

        Args:
            block: Mapping with "name" and an optional "config" object

        Raises:
            KeyError: If the provider is unknown or failed to load
            ValueError: If the block has no name or a non-object config
            TypeError: If config does not fit the provider's constructor
        """
        name = block.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("model block needs a non-empty 'name'")
        config = block.get("config") or {}
        if not isinstance(config, Mapping):
            raise ValueError(f"model '{name}': 'config' must be an object")
        logger.debug("Building model provider %s", name)
        return self.create(name, **config)
