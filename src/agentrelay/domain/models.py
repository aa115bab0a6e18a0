"""
Domain models for the agent relay.

Pure data structures describing one workflow run: the turns of the shared
transcript, per-phase counters, and the run aggregate that the engine owns.
Value objects are frozen dataclasses; only the run-scoped state holders
(PhaseState, WorkflowRun) are mutable.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentrelay.domain.transcript import Transcript


# =============================================================================
# ENUMERATIONS
# =============================================================================


class Phase(str, Enum):
    """The three specialised agent phases, in execution order."""

    DESIGN = "design"
    IMPLEMENT = "implement"
    REVIEW = "review"


class Role(str, Enum):
    """Who produced a transcript turn."""

    USER = "user"
    AGENT = "agent"
    TOOL_RESULT = "tool_result"


class Node(str, Enum):
    """States of the workflow state machine."""

    DESIGN = "design"
    DESIGN_TOOLS = "design_tools"
    DESIGN_NUDGE = "design_nudge"
    IMPLEMENT = "implement"
    IMPLEMENT_TOOLS = "implement_tools"
    IMPLEMENT_NUDGE = "implement_nudge"
    REVIEW = "review"
    REVIEW_TOOLS = "review_tools"
    REVIEW_NUDGE = "review_nudge"
    REVISION_DECISION = "revision_decision"
    DONE = "done"


class Verdict(str, Enum):
    """Outcome of the review phase."""

    APPROVED = "approved"
    NEEDS_REVISION = "needs_revision"


class RunStatus(Enum):
    """How a run terminated."""

    SUCCESS = "success"  # Reached done (approved or iterations exhausted)
    FAILED = "failed"  # Model call failed or unexpected error
    STEP_LIMIT_EXCEEDED = "step_limit_exceeded"  # Hard step budget hit


# =============================================================================
# TRANSCRIPT ENTRIES
# =============================================================================


@dataclass(frozen=True)
class ToolAction:
    """A single tool invocation requested by an agent.

    `args` is stored as a read-only mapping so a recorded action cannot
    change after it enters the transcript.
    """

    action_id: str
    name: str
    args: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", MappingProxyType(dict(self.args)))


@dataclass(frozen=True)
class Turn:
    """
    One immutable transcript entry.

    `actions` is empty for turns that request nothing; tool-result turns
    carry the `action_id` of the action they answer.
    """

    sequence: int
    role: Role
    content: str
    phase: Phase | None = None
    actions: tuple[ToolAction, ...] = ()
    action_id: str | None = None
    is_error: bool = False

    @property
    def has_actions(self) -> bool:
        return self.role is Role.AGENT and len(self.actions) > 0


@dataclass(frozen=True)
class ModelReply:
    """What the model service returns for one completion."""

    content: str
    actions: tuple[ToolAction, ...] = ()


@dataclass(frozen=True)
class ToolSpec:
    """Tool description offered to the model (parameters are JSON Schema)."""

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class EngineConfig:
    """Bounds applied to every run."""

    max_retries: int = 1  # Nudges per phase activation
    max_iterations: int = 2  # Revision loops back to implement
    step_budget: int = 80  # Total node executions per run

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.max_iterations < 0:
            raise ValueError("max_iterations must be >= 0")
        if self.step_budget < 1:
            raise ValueError("step_budget must be >= 1")


# =============================================================================
# RUN STATE
# =============================================================================


@dataclass
class PhaseState:
    """Mutable per-phase counters for the current activation."""

    retry_count: int = 0
    start_index: int | None = None

    def activate(self, index: int) -> int:
        """Set the start index if unset and return the effective one."""
        if self.start_index is None:
            self.start_index = index
        return self.start_index

    def reset(self) -> None:
        self.retry_count = 0
        self.start_index = None


@dataclass
class WorkflowRun:
    """
    Aggregate for a single user request.

    Owned by one WorkflowEngine.run() call and discarded once the terminal
    event is emitted.
    """

    run_id: str
    transcript: "Transcript"
    phases: dict[Phase, PhaseState] = field(
        default_factory=lambda: {phase: PhaseState() for phase in Phase}
    )
    iteration_count: int = 0
    design_artifact: str = ""
    review_verdict: Verdict | None = None
    review_notes: str = ""
    current: Node = Node.DESIGN
    terminal: bool = False
    steps: int = 0
    error: str = ""

    def state(self, phase: Phase) -> PhaseState:
        return self.phases[phase]


@dataclass(frozen=True)
class RunResult:
    """Final outcome of a run, built once the run is terminal."""

    run_id: str
    status: RunStatus
    snapshot: dict[str, Any]
    transcript: tuple[Turn, ...]
    iteration_count: int = 0
    design_artifact: str = ""
    review_verdict: Verdict | None = None
    steps: int = 0
    error: str = ""
    summary: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCESS
