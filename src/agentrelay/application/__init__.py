"""
Application layer for the agent relay.

Contains the steps of a run and the engine that wires them together.
"""

from agentrelay.application.agent_step import AgentStep
from agentrelay.application.event_emitter import EventEmitter
from agentrelay.application.revision import RevisionDecision, nudge
from agentrelay.application.tool_invoker import ToolInvoker
from agentrelay.application.workflow import WorkflowEngine

__all__ = [
    "AgentStep",
    "EventEmitter",
    "RevisionDecision",
    "ToolInvoker",
    "WorkflowEngine",
    "nudge",
]
