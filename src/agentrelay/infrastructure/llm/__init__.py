"""
Model service adapters.
"""

from agentrelay.infrastructure.llm.mock import DemoModel, ScriptedModel, call, reply
from agentrelay.infrastructure.llm.openai_chat import (
    OpenAIChatModel,
    OpenAIChatModelConfig,
)

__all__ = [
    "DemoModel",
    "OpenAIChatModel",
    "OpenAIChatModelConfig",
    "ScriptedModel",
    "call",
    "reply",
]
