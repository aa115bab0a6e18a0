"""
Append-only transcript shared by every phase of a run.

Turns are frozen and numbered on append; nothing is ever replaced or
removed. Phases see a scoped view: the original user request plus the
turns of their own current activation.
"""

from collections.abc import Iterator

from agentrelay.domain.models import Phase, Role, ToolAction, Turn


class Transcript:
    """Ordered log of turns with monotonic sequence numbers."""

    def __init__(self) -> None:
        self._turns: list[Turn] = []

    def append(
        self,
        role: Role,
        content: str,
        phase: Phase | None = None,
        actions: tuple[ToolAction, ...] = (),
        action_id: str | None = None,
        is_error: bool = False,
    ) -> Turn:
        """Create the next turn and add it to the log."""
        turn = Turn(
            sequence=len(self._turns),
            role=role,
            content=content,
            phase=phase,
            actions=tuple(actions),
            action_id=action_id,
            is_error=is_error,
        )
        self._turns.append(turn)
        return turn

    def slice(self, from_index: int) -> tuple[Turn, ...]:
        return tuple(self._turns[from_index:])

    def last_turn(self) -> Turn | None:
        return self._turns[-1] if self._turns else None

    def first_user_turn(self) -> Turn | None:
        """First user turn of the whole transcript (the original request)."""
        for turn in self._turns:
            if turn.role is Role.USER:
                return turn
        return None

    def scoped_view(self, start_index: int) -> tuple[Turn, ...]:
        """
        Turns visible to a phase whose activation began at `start_index`.

        Args:
            start_index: First transcript index of the phase activation

        Returns:
            The original user turn followed by every turn from start_index on
        """
        own = self.slice(start_index)
        first = self.first_user_turn()
        if first is None or first.sequence >= start_index:
            return own
        return (first, *own)

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))
