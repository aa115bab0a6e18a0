"""
Domain exceptions for the agent relay.

WorkflowHalted subclasses end a run; ToolError subclasses never leave the
Tool Invoker and are reported back to the model instead.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentrelay.domain.models import Phase


class WorkflowHalted(Exception):
    """Base for conditions that terminate a run."""

    def __init__(self, message: str, run_id: str = ""):
        super().__init__(message)
        self.run_id = run_id


class ModelCallFailed(WorkflowHalted):
    """
    Raised when the model service fails during an Agent Step.

    The failing step has already appended its error turn and emitted
    phase_failed by the time this propagates.
    """

    def __init__(self, phase: "Phase", cause: BaseException, run_id: str = ""):
        """
        Args:
            phase: Phase whose model call failed
            cause: The exception raised by the model service
            run_id: Run the failure belongs to
        """
        super().__init__(f"{phase.value} model call failed: {cause}", run_id)
        self.phase = phase
        self.cause = cause


class StepBudgetExceeded(WorkflowHalted):
    """Raised when a run executes more nodes than its step budget allows."""

    def __init__(self, budget: int, run_id: str = ""):
        super().__init__(f"Recursion/step limit exceeded ({budget} steps)", run_id)
        self.budget = budget


class ToolError(Exception):
    """An invalid tool call. Reported to the model as a tool result."""

    pass


class UnknownTool(ToolError):
    """The requested tool does not exist or is not offered in this phase."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidToolArguments(ToolError):
    """The tool arguments do not match the tool's parameter schema."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid arguments for {name}: {reason}")
        self.name = name
        self.reason = reason
