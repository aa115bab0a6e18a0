"""Tests for domain models."""

from dataclasses import FrozenInstanceError

import pytest

from agentrelay.domain.models import (
    EngineConfig,
    Phase,
    PhaseState,
    Role,
    RunResult,
    RunStatus,
    ToolAction,
    Turn,
    WorkflowRun,
)
from agentrelay.domain.transcript import Transcript


class TestTurn:
    """Tests for Turn value object."""

    def test_turn_is_frozen(self) -> None:
        """Turns cannot be mutated after creation."""
        turn = Turn(sequence=0, role=Role.USER, content="hi")

        with pytest.raises(FrozenInstanceError):
            turn.content = "changed"  # type: ignore[misc]

    def test_has_actions_only_for_agent_turns(self) -> None:
        """has_actions is True only for agent turns with actions."""
        action = ToolAction(action_id="a", name="x")

        assert Turn(0, Role.AGENT, "", actions=(action,)).has_actions
        assert not Turn(0, Role.AGENT, "").has_actions


class TestToolAction:
    """Tests for ToolAction value object."""

    def test_args_are_read_only(self) -> None:
        """Recorded arguments cannot be changed in place."""
        action = ToolAction(action_id="a", name="x", args={"path": "/App.jsx"})

        with pytest.raises(TypeError):
            action.args["path"] = "/other.jsx"  # type: ignore[index]

    def test_args_detached_from_caller_dict(self) -> None:
        """Mutating the source dict does not reach the action."""
        args = {"path": "/App.jsx"}
        action = ToolAction(action_id="a", name="x", args=args)
        args["path"] = "/other.jsx"

        assert action.args == {"path": "/App.jsx"}

    def test_turn_with_action_stays_unchanged(self) -> None:
        """A transcript turn's action arguments are fixed once appended."""
        transcript = Transcript()
        turn = transcript.append(
            Role.AGENT, "", actions=(ToolAction("a", "x", {"n": 1}),)
        )

        with pytest.raises(TypeError):
            turn.actions[0].args["n"] = 2  # type: ignore[index]
        assert transcript.turns[0].actions[0].args == {"n": 1}


class TestEngineConfig:
    """Tests for EngineConfig validation."""

    def test_defaults(self) -> None:
        """Defaults allow one nudge and two revision loops."""
        config = EngineConfig()

        assert config.max_retries == 1
        assert config.max_iterations == 2
        assert config.step_budget == 80

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_retries": -1}, {"max_iterations": -1}, {"step_budget": 0}],
    )
    def test_rejects_invalid_bounds(self, kwargs: dict) -> None:
        """Negative caps and an empty step budget are rejected."""
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)


class TestPhaseState:
    """Tests for PhaseState."""

    def test_activate_sets_start_once(self) -> None:
        """The first activation fixes the start index for the phase."""
        state = PhaseState()

        assert state.activate(4) == 4
        assert state.activate(9) == 4

    def test_reset_clears_counters(self) -> None:
        """reset() gives the phase fresh scoping and retries."""
        state = PhaseState(retry_count=1, start_index=3)

        state.reset()

        assert state.retry_count == 0
        assert state.start_index is None


class TestWorkflowRun:
    """Tests for WorkflowRun defaults."""

    def test_every_phase_has_state(self) -> None:
        """A new run has independent state for every phase."""
        run = WorkflowRun(run_id="r", transcript=Transcript())

        assert set(run.phases) == set(Phase)
        run.state(Phase.DESIGN).retry_count = 1
        assert run.state(Phase.IMPLEMENT).retry_count == 0

    def test_runs_do_not_share_state(self) -> None:
        """Two runs never share a phase state map."""
        a = WorkflowRun(run_id="a", transcript=Transcript())
        b = WorkflowRun(run_id="b", transcript=Transcript())

        assert a.phases is not b.phases


class TestRunResult:
    """Tests for RunResult."""

    def test_succeeded(self) -> None:
        """succeeded reflects the status."""
        ok = RunResult(run_id="r", status=RunStatus.SUCCESS, snapshot={}, transcript=())
        failed = RunResult(
            run_id="r", status=RunStatus.FAILED, snapshot={}, transcript=()
        )

        assert ok.succeeded
        assert not failed.succeeded
