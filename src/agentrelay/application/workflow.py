"""
WorkflowEngine: drives one request through design, implement and review.

The run is an explicit state machine. Each node has a handler that
returns the next node; a single loop executes handlers until the run is
terminal, checking the hard step budget on every iteration.
"""

import json
import logging
import uuid
from collections.abc import Callable

from agentrelay.application.agent_step import AgentStep
from agentrelay.application.event_emitter import EventEmitter
from agentrelay.application.revision import RevisionDecision, nudge
from agentrelay.application.tool_invoker import ToolInvoker
from agentrelay.domain.exceptions import (
    ModelCallFailed,
    StepBudgetExceeded,
    WorkflowHalted,
)
from agentrelay.domain.interfaces import (
    EventSinkInterface,
    ModelServiceInterface,
    ToolboxInterface,
)
from agentrelay.domain.models import (
    EngineConfig,
    Node,
    Phase,
    Role,
    RunResult,
    RunStatus,
    WorkflowRun,
)
from agentrelay.domain.phases import DEFAULT_PHASES, PhaseDefinition
from agentrelay.domain.routing import (
    NEXT_NODE,
    Route,
    extract_design,
    phase_node,
    route_phase,
    route_target,
)
from agentrelay.domain.transcript import Transcript

logger = logging.getLogger(__name__)

EXISTING_FILES_NOTICE = (
    "[EXISTING FILES in the project. Use 'view' to read them before making "
    "changes]"
)
DEFAULT_SUMMARY = "Multi-agent workflow completed."


class _RunContext:
    """Collaborators bound to a single run."""

    def __init__(
        self,
        run: WorkflowRun,
        emitter: EventEmitter,
        agent: AgentStep,
        invoker: ToolInvoker,
        revision: RevisionDecision,
    ):
        self.run = run
        self.emitter = emitter
        self.agent = agent
        self.invoker = invoker
        self.revision = revision


class WorkflowEngine:
    """
    Orchestrates the three agent phases for a request.

    One engine may serve many runs, concurrently or not: all mutable state
    lives in the WorkflowRun created by run().
    """

    def __init__(
        self,
        model: ModelServiceInterface,
        sink: EventSinkInterface | None = None,
        config: EngineConfig | None = None,
        definitions: dict[Phase, PhaseDefinition] | None = None,
    ):
        """
        Args:
            model: Completion service shared by all phases
            sink: Observer receiving lifecycle events (optional)
            config: Retry, iteration and step bounds (defaults if None)
            definitions: Per-phase overrides; phases not given keep their
                defaults
        """
        self._model = model
        self._sink = sink
        self._config = config or EngineConfig()
        self._definitions = {**DEFAULT_PHASES, **(definitions or {})}

    @property
    def config(self) -> EngineConfig:
        return self._config

    def run(
        self,
        user_request: str,
        toolbox: ToolboxInterface,
        run_id: str | None = None,
    ) -> RunResult:
        """
        Execute the workflow until done or a hard failure.

        Args:
            user_request: The natural-language request
            toolbox: Project collaborator the tools act on
            run_id: Identifier for events and logs (generated if None)

        Returns:
            RunResult with the final project snapshot; exactly one
            workflow_done event has been emitted
        """
        run = WorkflowRun(run_id=run_id or str(uuid.uuid4()), transcript=Transcript())
        emitter = EventEmitter(self._sink, run.run_id)
        ctx = _RunContext(
            run=run,
            emitter=emitter,
            agent=AgentStep(self._model, toolbox, emitter, self._definitions),
            invoker=ToolInvoker(
                toolbox,
                emitter,
                {phase: d.tools for phase, d in self._definitions.items()},
            ),
            revision=RevisionDecision(self._config, emitter),
        )

        status = RunStatus.SUCCESS
        logger.info("Run %s: started", run.run_id)
        try:
            emitter.workflow_started()
            run.transcript.append(Role.USER, self._compose_request(user_request, toolbox))
            self._drive(ctx)
        except StepBudgetExceeded as e:
            status = RunStatus.STEP_LIMIT_EXCEEDED
            run.error = str(e)
            logger.error("Run %s: %s", run.run_id, e)
        except ModelCallFailed as e:
            status = RunStatus.FAILED
            run.error = str(e)
            logger.error("Run %s: %s", run.run_id, e)
        except Exception as e:
            status = RunStatus.FAILED
            run.error = f"{type(e).__name__}: {e}"
            logger.exception("Run %s: unexpected error", run.run_id)
        finally:
            run.terminal = True

        return self._finish(ctx, toolbox, status)

    # -------------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------------

    def _drive(self, ctx: _RunContext) -> None:
        """Execute node handlers until the run reaches DONE."""
        run = ctx.run
        handlers = self._transition_table()

        while run.current is not Node.DONE:
            if run.steps >= self._config.step_budget:
                raise StepBudgetExceeded(self._config.step_budget, run.run_id)
            run.steps += 1

            handler = handlers.get(run.current)
            if handler is None:
                raise WorkflowHalted(f"No handler for node {run.current.value}", run.run_id)

            previous = run.current
            run.current = handler(ctx)
            logger.debug(
                "Run %s: %s -> %s", run.run_id, previous.value, run.current.value
            )

    def _transition_table(self) -> dict[Node, Callable[[_RunContext], Node]]:
        table: dict[Node, Callable[[_RunContext], Node]] = {
            Node.REVISION_DECISION: self._revision_decision,
        }
        for phase in Phase:
            table[phase_node(phase)] = self._phase_handler(phase)
            table[route_target(phase, Route.TOOLS)] = self._tools_handler(phase)
            table[route_target(phase, Route.NUDGE)] = self._nudge_handler(phase)
        return table

    def _phase_handler(self, phase: Phase) -> Callable[[_RunContext], Node]:
        def handle(ctx: _RunContext) -> Node:
            run = ctx.run
            ctx.agent.run(run, phase)
            route = route_phase(
                run.transcript.last_turn(),
                run.state(phase).retry_count,
                self._config.max_retries,
            )
            if route is Route.ADVANCE:
                logger.info("Run %s: %s complete", run.run_id, phase.value)
                if NEXT_NODE[phase] is not Node.REVISION_DECISION:
                    ctx.emitter.phase_done(phase)
            return route_target(phase, route)

        return handle

    def _tools_handler(self, phase: Phase) -> Callable[[_RunContext], Node]:
        def handle(ctx: _RunContext) -> Node:
            run = ctx.run
            turn = run.transcript.last_turn()
            if turn is not None:
                ctx.invoker.run(run, phase, turn)
            if phase is Phase.DESIGN:
                start = run.state(phase).start_index or 0
                design = extract_design(run.transcript.slice(start))
                if design is not None:
                    run.design_artifact = design
            return phase_node(phase)

        return handle

    def _nudge_handler(self, phase: Phase) -> Callable[[_RunContext], Node]:
        def handle(ctx: _RunContext) -> Node:
            nudge(ctx.run, self._definitions[phase])
            return phase_node(phase)

        return handle

    def _revision_decision(self, ctx: _RunContext) -> Node:
        return ctx.revision.decide(ctx.run)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _compose_request(self, user_request: str, toolbox: ToolboxInterface) -> str:
        """Append the list of already existing files to the request."""
        paths = toolbox.list_paths()
        if not paths:
            return user_request
        return f"{user_request}\n\n{EXISTING_FILES_NOTICE}\n" + "\n".join(paths)

    def _finish(
        self, ctx: _RunContext, toolbox: ToolboxInterface, status: RunStatus
    ) -> RunResult:
        """Emit the terminal event and build the result."""
        run = ctx.run
        payload: dict[str, object] = {
            "turns": len(run.transcript),
            "iterations": run.iteration_count,
        }
        snapshot: dict[str, object] = {}
        try:
            snapshot = toolbox.snapshot()
            payload["files"] = snapshot
        except Exception as e:
            logger.warning("Run %s: could not snapshot project: %s", run.run_id, e)
        if run.error:
            payload["error"] = run.error

        ctx.emitter.workflow_done(json.dumps(payload, default=str))
        logger.info(
            "Run %s: finished with %s after %d steps",
            run.run_id,
            status.value,
            run.steps,
        )

        summary_parts = [
            t.content
            for t in run.transcript
            if t.role is Role.AGENT and not t.is_error and t.content.strip()
        ]
        return RunResult(
            run_id=run.run_id,
            status=status,
            snapshot=snapshot,
            transcript=run.transcript.turns,
            iteration_count=run.iteration_count,
            design_artifact=run.design_artifact,
            review_verdict=run.review_verdict,
            steps=run.steps,
            error=run.error,
            summary="\n\n".join(summary_parts) or DEFAULT_SUMMARY,
        )
