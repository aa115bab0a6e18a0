"""
ToolInvoker: executes the actions of an agent turn.

Collaborator errors never cross this boundary. They are written into the
tool-result turn so the agent can correct itself on its next turn.
"""

import logging

from agentrelay.application.event_emitter import EventEmitter
from agentrelay.domain.exceptions import UnknownTool
from agentrelay.domain.interfaces import ToolboxInterface
from agentrelay.domain.models import Phase, Role, ToolAction, Turn, WorkflowRun

logger = logging.getLogger(__name__)


class ToolInvoker:
    """Dispatches requested actions to the toolbox, in request order."""

    def __init__(
        self,
        toolbox: ToolboxInterface,
        emitter: EventEmitter,
        allowed: dict[Phase, tuple[str, ...]] | None = None,
    ):
        """
        Args:
            toolbox: Project collaborator executing the tools
            emitter: Lifecycle event emitter for the run
            allowed: Tool names each phase may call (None allows everything)
        """
        self._toolbox = toolbox
        self._emitter = emitter
        self._allowed = allowed

    def run(self, run: WorkflowRun, phase: Phase, turn: Turn) -> tuple[Turn, ...]:
        """
        Execute every action of `turn`.

        Returns:
            One tool-result turn per action, in the order requested
        """
        results = []
        for action in turn.actions:
            content, failed = self._execute(phase, action)
            if failed:
                logger.debug(
                    "Run %s: %s tool %s failed: %s",
                    run.run_id,
                    phase.value,
                    action.name,
                    content,
                )
            result = run.transcript.append(
                Role.TOOL_RESULT,
                content,
                phase=phase,
                action_id=action.action_id,
                is_error=failed,
            )
            self._emitter.tool_result(phase, action.name, content)
            results.append(result)
        return tuple(results)

    def _execute(self, phase: Phase, action: ToolAction) -> tuple[str, bool]:
        """Run one action, returning (content, failed)."""
        try:
            if self._allowed is not None and action.name not in self._allowed[phase]:
                raise UnknownTool(action.name)
            return self._toolbox.execute(action), False
        except Exception as e:
            return f"Error: {e}", True
