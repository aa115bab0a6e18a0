"""Event sink implementations for run observers."""

import json
from pathlib import Path
from typing import TextIO

from agentrelay.domain.events import AgentEvent, EventKind
from agentrelay.domain.interfaces import EventSinkInterface


class InMemoryEventSink(EventSinkInterface):
    """In-memory implementation for testing."""

    def __init__(self) -> None:
        self._events: list[AgentEvent] = []

    def emit(self, event: AgentEvent) -> None:
        self._events.append(event)

    def get_events(
        self,
        kind: EventKind | None = None,
        phase: str | None = None,
        run_id: str | None = None,
    ) -> list[AgentEvent]:
        return [
            e
            for e in self._events
            if (kind is None or e.kind == kind)
            and (phase is None or e.phase == phase)
            and (run_id is None or e.run_id == run_id)
        ]

    def kinds(self) -> list[EventKind]:
        return [e.kind for e in self._events]


class JsonlEventSink(EventSinkInterface):
    """Filesystem implementation appending events as JSONL."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, event: AgentEvent) -> None:
        with open(self.path, "a") as f:
            f.write(json.dumps(event.to_dict()) + "\n")


def read_events(path: Path, run_id: str | None = None) -> list[AgentEvent]:
    """Load events written by a JsonlEventSink, in file order."""
    path = Path(path)
    if not path.exists():
        return []
    events: list[AgentEvent] = []
    with open(path) as f:
        for line in f:
            if not line.strip():
                continue
            event = AgentEvent.from_dict(json.loads(line))
            if run_id and event.run_id != run_id:
                continue
            events.append(event)
    return events


class StreamEventSink(EventSinkInterface):
    """Writes server-sent-event frames to a text stream.

    Raises whatever the stream raises once the client is gone (for
    example ValueError on a closed stream); the engine's emitter absorbs it.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def emit(self, event: AgentEvent) -> None:
        self._stream.write(f"data: {json.dumps(event.to_dict())}\n\n")
        self._stream.flush()
