"""
Domain interfaces (Ports) for the agent relay.

These abstract base classes are the only contact points between the
workflow engine and its collaborators: the model, the project the tools
mutate, and the observer receiving lifecycle events.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentrelay.domain.events import AgentEvent
    from agentrelay.domain.models import ModelReply, ToolAction, ToolSpec, Turn


class ModelServiceInterface(ABC):
    """
    Port for the language model.

    The engine treats the model as an opaque completion service. Any
    exception raised from complete() is a model-call failure for that
    invocation; the engine never retries it.
    """

    @abstractmethod
    def complete(
        self,
        instruction: str,
        transcript: tuple["Turn", ...],
        tools: tuple["ToolSpec", ...] = (),
    ) -> "ModelReply":
        """
        Produce the agent's next reply.

        Args:
            instruction: Phase-specific system instruction
            transcript: Scoped view of the transcript for this phase
            tools: Tools the agent may request in this phase

        Returns:
            The reply text and any requested tool actions
        """
        pass


class ToolboxInterface(ABC):
    """
    Port for the project/file collaborator.

    Tools are addressed by name. execute() may raise on invalid calls; the
    Tool Invoker converts that into an error result for the model.
    """

    @abstractmethod
    def tool_specs(self, names: tuple[str, ...]) -> tuple["ToolSpec", ...]:
        """Describe the named tools (unknown names are skipped)."""
        pass

    @abstractmethod
    def execute(self, action: "ToolAction") -> str:
        """
        Run one tool action.

        Returns:
            Human-readable result message

        Raises:
            Exception: Any error; it is reported back to the model
        """
        pass

    @abstractmethod
    def list_paths(self) -> tuple[str, ...]:
        """Paths of the files currently in the project."""
        pass

    @abstractmethod
    def snapshot(self) -> dict[str, Any]:
        """Serializable snapshot of the project state."""
        pass


class EventSinkInterface(ABC):
    """
    Port for the run observer.

    Fire-and-forget: emit() returns nothing and may raise when the
    observer has gone away. Callers must tolerate that.
    """

    @abstractmethod
    def emit(self, event: "AgentEvent") -> None:
        """Deliver one lifecycle event."""
        pass
