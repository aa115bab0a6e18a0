"""
Routing decisions for the workflow state machine.

Everything here is a pure function of its arguments: the engine feeds in
the latest turn and counters and acts on the answer.
"""

from collections.abc import Iterable
from enum import Enum

from agentrelay.domain.models import Node, Phase, Role, Turn, Verdict

DESIGN_TOOL = "create_design_spec"
REVIEW_TOOL = "submit_review"

DESIGN_SPEC_MARKER = "Design spec created"
NEEDS_REVISION_MARKER = "NEEDS REVISION"
APPROVED_MARKER = "APPROVED"


class Route(Enum):
    """Where a phase goes after its Agent Step."""

    TOOLS = "tools"
    NUDGE = "nudge"
    ADVANCE = "advance"


# =============================================================================
# TRANSITION TABLE
# =============================================================================

_PHASE_NODES: dict[Phase, tuple[Node, Node, Node]] = {
    # phase: (agent node, tools node, nudge node)
    Phase.DESIGN: (Node.DESIGN, Node.DESIGN_TOOLS, Node.DESIGN_NUDGE),
    Phase.IMPLEMENT: (Node.IMPLEMENT, Node.IMPLEMENT_TOOLS, Node.IMPLEMENT_NUDGE),
    Phase.REVIEW: (Node.REVIEW, Node.REVIEW_TOOLS, Node.REVIEW_NUDGE),
}

NEXT_NODE: dict[Phase, Node] = {
    Phase.DESIGN: Node.IMPLEMENT,
    Phase.IMPLEMENT: Node.REVIEW,
    Phase.REVIEW: Node.REVISION_DECISION,
}

_NODE_PHASE: dict[Node, Phase] = {
    node: phase for phase, nodes in _PHASE_NODES.items() for node in nodes
}


def phase_node(phase: Phase) -> Node:
    return _PHASE_NODES[phase][0]


def tools_node(phase: Phase) -> Node:
    return _PHASE_NODES[phase][1]


def nudge_node(phase: Phase) -> Node:
    return _PHASE_NODES[phase][2]


def phase_of(node: Node) -> Phase | None:
    """Phase a node belongs to (None for revision_decision and done)."""
    return _NODE_PHASE.get(node)


# =============================================================================
# ROUTER
# =============================================================================


def route_phase(last_turn: Turn | None, retry_count: int, max_retries: int) -> Route:
    """
    Decide what follows an Agent Step.

    Args:
        last_turn: Most recent transcript turn
        retry_count: Nudges already issued in this phase activation
        max_retries: Nudge cap

    Returns:
        TOOLS if the agent requested actions, NUDGE while retries remain,
        ADVANCE otherwise
    """
    if last_turn is not None and last_turn.has_actions:
        return Route.TOOLS
    if retry_count < max_retries:
        return Route.NUDGE
    return Route.ADVANCE


def route_target(phase: Phase, route: Route) -> Node:
    """Node reached from `phase` along `route`."""
    if route is Route.TOOLS:
        return tools_node(phase)
    if route is Route.NUDGE:
        return nudge_node(phase)
    return NEXT_NODE[phase]


# =============================================================================
# ARTIFACT EXTRACTION
# =============================================================================


def _answers_to(turns: Iterable[Turn], tool_name: str) -> list[Turn]:
    """Successful results of `tool_name` actions, newest first.

    Results are matched to the requesting agent turn by action id, so text
    returned by other tools (a viewed file, say) is never read as an
    artifact.
    """
    ordered = tuple(turns)
    action_ids = {
        action.action_id
        for turn in ordered
        if turn.role is Role.AGENT
        for action in turn.actions
        if action.name == tool_name
    }
    return [
        t
        for t in reversed(ordered)
        if t.role is Role.TOOL_RESULT and not t.is_error and t.action_id in action_ids
    ]


def extract_verdict(turns: Iterable[Turn]) -> tuple[Verdict | None, str]:
    """
    Find the latest verdict submitted through the review tool.

    Only the headline of the result is inspected; NEEDS REVISION wins if
    both markers appear there.

    Returns:
        (verdict, notes) where notes is the verdict turn's content, or
        (None, "") when no review was submitted
    """
    for turn in _answers_to(turns, REVIEW_TOOL):
        headline = turn.content.split("\n", 1)[0]
        if NEEDS_REVISION_MARKER in headline:
            return Verdict.NEEDS_REVISION, turn.content
        if APPROVED_MARKER in headline:
            return Verdict.APPROVED, turn.content
    return None, ""


def extract_design(turns: Iterable[Turn]) -> str | None:
    """Latest design specification recorded through the design tool, if any."""
    for turn in _answers_to(turns, DESIGN_TOOL):
        if turn.content.startswith(DESIGN_SPEC_MARKER):
            return turn.content
    return None
