"""
Domain layer for the agent relay.

Contains the run model, routing rules and ports, with no external
dependencies.
"""

from agentrelay.domain.events import AgentEvent, EventKind
from agentrelay.domain.exceptions import (
    InvalidToolArguments,
    ModelCallFailed,
    StepBudgetExceeded,
    ToolError,
    UnknownTool,
    WorkflowHalted,
)
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
    PhaseState,
    Role,
    RunResult,
    RunStatus,
    ToolAction,
    ToolSpec,
    Turn,
    Verdict,
    WorkflowRun,
)
from agentrelay.domain.phases import DEFAULT_PHASES, PhaseDefinition
from agentrelay.domain.routing import Route, extract_design, extract_verdict, route_phase
from agentrelay.domain.transcript import Transcript

__all__ = [
    # Models
    "EngineConfig",
    "ModelReply",
    "Node",
    "Phase",
    "PhaseState",
    "Role",
    "RunResult",
    "RunStatus",
    "ToolAction",
    "ToolSpec",
    "Turn",
    "Verdict",
    "WorkflowRun",
    "Transcript",
    # Events
    "AgentEvent",
    "EventKind",
    # Phases and routing
    "DEFAULT_PHASES",
    "PhaseDefinition",
    "Route",
    "route_phase",
    "extract_design",
    "extract_verdict",
    # Interfaces
    "ModelServiceInterface",
    "ToolboxInterface",
    "EventSinkInterface",
    # Exceptions
    "WorkflowHalted",
    "ModelCallFailed",
    "StepBudgetExceeded",
    "ToolError",
    "UnknownTool",
    "InvalidToolArguments",
]
