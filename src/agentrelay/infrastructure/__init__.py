"""
Infrastructure layer for the agent relay.

Contains adapters for external concerns (models, project files, event
sinks, registry).
"""

from agentrelay.infrastructure.events import (
    InMemoryEventSink,
    JsonlEventSink,
    StreamEventSink,
    read_events,
)
from agentrelay.infrastructure.llm import (
    DemoModel,
    OpenAIChatModel,
    OpenAIChatModelConfig,
    ScriptedModel,
)
from agentrelay.infrastructure.project import (
    ProjectError,
    ProjectToolbox,
    VirtualProject,
)
from agentrelay.infrastructure.registry import ModelRegistry

__all__ = [
    # Events
    "InMemoryEventSink",
    "JsonlEventSink",
    "StreamEventSink",
    "read_events",
    # Models
    "DemoModel",
    "OpenAIChatModel",
    "OpenAIChatModelConfig",
    "ScriptedModel",
    # Project
    "ProjectError",
    "ProjectToolbox",
    "VirtualProject",
    # Registry
    "ModelRegistry",
]
