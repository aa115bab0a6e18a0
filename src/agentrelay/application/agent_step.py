"""
AgentStep: one model invocation for one phase.

Builds the phase's scoped view of the transcript, calls the model, and
appends exactly one turn with the reply (or with the error).
"""

import logging

from agentrelay.application.event_emitter import EventEmitter
from agentrelay.domain.exceptions import ModelCallFailed
from agentrelay.domain.interfaces import ModelServiceInterface, ToolboxInterface
from agentrelay.domain.models import Phase, Role, Turn, WorkflowRun
from agentrelay.domain.phases import PhaseDefinition

logger = logging.getLogger(__name__)


class AgentStep:
    """
    Runs a phase's agent against the model service.

    The only consumer of the model in a run. Cross-phase knowledge reaches
    the agent solely through the design artifact and the review notes
    rendered into its instruction.
    """

    def __init__(
        self,
        model: ModelServiceInterface,
        toolbox: ToolboxInterface,
        emitter: EventEmitter,
        definitions: dict[Phase, PhaseDefinition],
    ):
        """
        Args:
            model: Completion service
            toolbox: Project collaborator (used for tool descriptions)
            emitter: Lifecycle event emitter for the run
            definitions: Instruction, tools and nudge text per phase
        """
        self._model = model
        self._toolbox = toolbox
        self._emitter = emitter
        self._definitions = definitions

    def run(self, run: WorkflowRun, phase: Phase) -> Turn:
        """
        Invoke the model once for `phase` and record the reply.

        Returns:
            The appended agent turn

        Raises:
            ModelCallFailed: If the model raised; an error turn has been
                appended and phase_failed emitted
        """
        definition = self._definitions[phase]
        start = run.state(phase).activate(len(run.transcript))

        self._emitter.phase_started(phase, definition.started_message)

        instruction = self._instruction(run, definition)
        view = run.transcript.scoped_view(start)
        tools = self._toolbox.tool_specs(definition.tools)

        try:
            reply = self._model.complete(instruction, view, tools)
        except Exception as e:
            logger.warning("Run %s: %s model call failed: %s", run.run_id, phase.value, e)
            run.transcript.append(
                Role.AGENT, f"Error: {e}", phase=phase, is_error=True
            )
            self._emitter.phase_failed(phase, str(e))
            raise ModelCallFailed(phase, e, run.run_id) from e

        turn = run.transcript.append(
            Role.AGENT, reply.content, phase=phase, actions=reply.actions
        )
        logger.debug(
            "Run %s: %s replied with %d action(s)",
            run.run_id,
            phase.value,
            len(turn.actions),
        )

        if reply.content.strip():
            self._emitter.phase_message(phase, reply.content)
        for action in turn.actions:
            self._emitter.tool_requested(phase, action.name, action.args)

        return turn

    def _instruction(self, run: WorkflowRun, definition: PhaseDefinition) -> str:
        """Render the instruction with the artifacts this phase may see."""
        if definition.phase is Phase.IMPLEMENT:
            return definition.render(run.design_artifact, run.review_notes)
        if definition.phase is Phase.REVIEW:
            return definition.render(run.design_artifact)
        return definition.render()
