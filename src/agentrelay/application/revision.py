"""
Nudge and Revision Decision steps.

Both are bounded: a nudge is only ever routed while the phase has retries
left, and the revision loop stops at the iteration cap whatever the
verdict says.
"""

import logging

from agentrelay.application.event_emitter import EventEmitter
from agentrelay.domain.models import (
    EngineConfig,
    Node,
    Phase,
    Role,
    Turn,
    Verdict,
    WorkflowRun,
)
from agentrelay.domain.phases import PhaseDefinition
from agentrelay.domain.routing import extract_verdict

logger = logging.getLogger(__name__)


def nudge(run: WorkflowRun, definition: PhaseDefinition) -> Turn:
    """Append the corrective instruction and count the retry."""
    phase = definition.phase
    turn = run.transcript.append(Role.USER, definition.nudge, phase=phase)
    run.state(phase).retry_count += 1
    logger.info(
        "Run %s: nudged %s (retry %d)",
        run.run_id,
        phase.value,
        run.state(phase).retry_count,
    )
    return turn


class RevisionDecision:
    """
    Reads the review verdict and picks the next node.

    Malformed review output (no verdict marker at all) is treated as a
    request for revision while iterations remain.
    """

    def __init__(self, config: EngineConfig, emitter: EventEmitter):
        self._config = config
        self._emitter = emitter

    def decide(self, run: WorkflowRun) -> Node:
        """
        Record the verdict and route to implement or done.

        Returns:
            Node.IMPLEMENT when another revision pass is allowed,
            Node.DONE otherwise
        """
        start = run.state(Phase.REVIEW).start_index or 0
        verdict, notes = extract_verdict(run.transcript.slice(start))
        run.review_verdict = verdict
        run.review_notes = notes

        wants_revision = verdict is not Verdict.APPROVED
        if wants_revision and run.iteration_count < self._config.max_iterations:
            run.iteration_count += 1
            run.state(Phase.IMPLEMENT).reset()
            run.state(Phase.REVIEW).reset()
            logger.info(
                "Run %s: revision requested (%d/%d)",
                run.run_id,
                run.iteration_count,
                self._config.max_iterations,
            )
            self._emitter.revision_requested(
                run.iteration_count, self._config.max_iterations
            )
            return Node.IMPLEMENT

        if verdict is Verdict.APPROVED:
            self._emitter.phase_done(Phase.REVIEW, "Code approved!")
        else:
            self._emitter.phase_done(
                Phase.REVIEW, "Max iterations reached. Proceeding with current code."
            )
        return Node.DONE
