"""
Agent Relay: design, implement and review agents over one shared transcript.

A workflow engine that hands a single transcript between three tool-using
agents, nudges an agent that stops without acting, and loops review back
to implementation a bounded number of times.

Example:
    from agentrelay import EngineConfig, WorkflowEngine
    from agentrelay.infrastructure import InMemoryEventSink, OpenAIChatModel, ProjectToolbox

    engine = WorkflowEngine(
        model=OpenAIChatModel(model="gpt-4o-mini"),
        sink=InMemoryEventSink(),
        config=EngineConfig(max_iterations=2),
    )
    result = engine.run("Build a counter component", ProjectToolbox())
    print(result.status, sorted(result.snapshot))
"""

# Application layer (orchestration)
from agentrelay.application.agent_step import AgentStep
from agentrelay.application.revision import RevisionDecision, nudge
from agentrelay.application.tool_invoker import ToolInvoker
from agentrelay.application.workflow import WorkflowEngine

# Domain events
from agentrelay.domain.events import AgentEvent, EventKind

# Domain exceptions
from agentrelay.domain.exceptions import (
    ModelCallFailed,
    StepBudgetExceeded,
    ToolError,
    WorkflowHalted,
)

# Domain interfaces (for type hints and custom implementations)
from agentrelay.domain.interfaces import (
    EventSinkInterface,
    ModelServiceInterface,
    ToolboxInterface,
)
from agentrelay.domain.models import (
    EngineConfig,
    ModelReply,
    Node,
    Phase,
    Role,
    RunResult,
    RunStatus,
    ToolAction,
    Turn,
    Verdict,
)
from agentrelay.domain.phases import DEFAULT_PHASES, PhaseDefinition
from agentrelay.domain.transcript import Transcript

# Infrastructure (explicit import encouraged for dependency injection)
from agentrelay.infrastructure.events import InMemoryEventSink, JsonlEventSink
from agentrelay.infrastructure.llm import DemoModel, OpenAIChatModel, ScriptedModel
from agentrelay.infrastructure.project import ProjectToolbox, VirtualProject

__version__ = "0.3.0"

__all__ = [
    # Version
    "__version__",
    # Application
    "AgentStep",
    "RevisionDecision",
    "ToolInvoker",
    "WorkflowEngine",
    "nudge",
    # Domain models
    "EngineConfig",
    "ModelReply",
    "Node",
    "Phase",
    "Role",
    "RunResult",
    "RunStatus",
    "ToolAction",
    "Turn",
    "Verdict",
    "Transcript",
    "DEFAULT_PHASES",
    "PhaseDefinition",
    # Events
    "AgentEvent",
    "EventKind",
    # Interfaces
    "EventSinkInterface",
    "ModelServiceInterface",
    "ToolboxInterface",
    # Exceptions
    "ModelCallFailed",
    "StepBudgetExceeded",
    "ToolError",
    "WorkflowHalted",
    # Infrastructure
    "InMemoryEventSink",
    "JsonlEventSink",
    "DemoModel",
    "OpenAIChatModel",
    "ScriptedModel",
    "ProjectToolbox",
    "VirtualProject",
]
