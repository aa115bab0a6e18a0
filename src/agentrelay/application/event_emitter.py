"""Lifecycle event emission for a single run."""

import logging
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from agentrelay.domain.events import ORCHESTRATOR, AgentEvent, EventKind
from agentrelay.domain.interfaces import EventSinkInterface
from agentrelay.domain.models import Phase

logger = logging.getLogger(__name__)

WORKFLOW_STARTED_MESSAGE = "Starting multi-agent workflow..."


class EventEmitter:
    """Emits lifecycle events to an observer sink.

    Provides convenience methods for the events a run produces, handling
    ID generation and timestamps. Delivery is best-effort: a sink that
    raises (for example because the client disconnected) is logged and
    counted, and the run carries on.
    """

    def __init__(self, sink: EventSinkInterface | None, run_id: str) -> None:
        self._sink = sink
        self._run_id = run_id
        self._dropped = 0

    @property
    def dropped(self) -> int:
        """Number of events the sink failed to accept."""
        return self._dropped

    def _now(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _emit(
        self,
        kind: EventKind,
        phase: Phase | None,
        content: str = "",
        action_name: str | None = None,
        action_args: dict[str, Any] | None = None,
    ) -> None:
        if self._sink is None:
            return
        event = AgentEvent(
            event_id=str(uuid.uuid4()),
            run_id=self._run_id,
            kind=kind,
            phase=phase.value if phase is not None else ORCHESTRATOR,
            content=content,
            action_name=action_name,
            action_args=action_args,
            created_at=self._now(),
        )
        try:
            self._sink.emit(event)
        except Exception as e:
            self._dropped += 1
            logger.debug(
                "Run %s: observer rejected %s event: %s", self._run_id, kind.value, e
            )

    def workflow_started(self) -> None:
        """Emit the orchestrator PHASE_STARTED that opens a run."""
        self._emit(EventKind.PHASE_STARTED, None, WORKFLOW_STARTED_MESSAGE)

    def phase_started(self, phase: Phase, message: str = "") -> None:
        """Emit PHASE_STARTED before an Agent Step calls the model."""
        self._emit(EventKind.PHASE_STARTED, phase, message)

    def phase_message(self, phase: Phase, content: str) -> None:
        """Emit PHASE_MESSAGE with the agent's reply text."""
        self._emit(EventKind.PHASE_MESSAGE, phase, content)

    def tool_requested(self, phase: Phase, name: str, args: Mapping[str, Any]) -> None:
        """Emit TOOL_REQUESTED for one action of an agent turn."""
        self._emit(EventKind.TOOL_REQUESTED, phase, "", name, dict(args))

    def tool_result(self, phase: Phase, name: str, result: str) -> None:
        """Emit TOOL_RESULT once an action has been executed."""
        self._emit(EventKind.TOOL_RESULT, phase, result, name)

    def phase_done(self, phase: Phase, message: str = "") -> None:
        """Emit PHASE_DONE when the run advances past a phase."""
        self._emit(EventKind.PHASE_DONE, phase, message)

    def phase_failed(self, phase: Phase, error: str) -> None:
        """Emit PHASE_FAILED when the model call of a phase fails."""
        self._emit(EventKind.PHASE_FAILED, phase, error)

    def revision_requested(self, iteration: int, max_iterations: int) -> None:
        """Emit REVISION_REQUESTED when review sends the run back."""
        self._emit(
            EventKind.REVISION_REQUESTED,
            Phase.REVIEW,
            f"Revision needed (iteration {iteration}/{max_iterations}). "
            "Sending back to implementation...",
        )

    def workflow_done(self, content: str) -> None:
        """Emit the terminal WORKFLOW_DONE event."""
        self._emit(EventKind.WORKFLOW_DONE, None, content)
