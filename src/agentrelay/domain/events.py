"""Lifecycle events streamed to the run observer."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

ORCHESTRATOR = "orchestrator"


class EventKind(str, Enum):
    """Kinds of lifecycle events."""

    PHASE_STARTED = "phase_started"
    PHASE_MESSAGE = "phase_message"
    TOOL_REQUESTED = "tool_requested"
    TOOL_RESULT = "tool_result"
    PHASE_DONE = "phase_done"
    PHASE_FAILED = "phase_failed"
    REVISION_REQUESTED = "revision_requested"
    WORKFLOW_DONE = "workflow_done"


@dataclass(frozen=True)
class AgentEvent:
    """Single observable lifecycle event.

    `phase` is a Phase value, or "orchestrator" for run-level events.
    """

    event_id: str
    run_id: str
    kind: EventKind
    phase: str
    content: str = ""
    action_name: str | None = None
    action_args: dict[str, Any] | None = None
    created_at: str = ""  # ISO 8601

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "event_id": self.event_id,
            "run_id": self.run_id,
            "kind": self.kind.value,
            "phase": self.phase,
            "content": self.content,
            "created_at": self.created_at,
        }
        if self.action_name is not None:
            data["action_name"] = self.action_name
        if self.action_args is not None:
            data["action_args"] = self.action_args
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AgentEvent":
        return cls(
            event_id=data["event_id"],
            run_id=data["run_id"],
            kind=EventKind(data["kind"]),
            phase=data["phase"],
            content=data.get("content", ""),
            action_name=data.get("action_name"),
            action_args=data.get("action_args"),
            created_at=data.get("created_at", ""),
        )
