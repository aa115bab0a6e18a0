"""
Phase definitions for the agent relay.

This module provides:
- PhaseDefinition: instruction rendering, tool allow-list and nudge text
- DEFAULT_PHASES: the stock design / implement / review definitions

Prompt wording is intentionally short; applications supply their own
definitions when they care about prompt quality.
"""

from dataclasses import dataclass

from agentrelay.domain.models import Phase


@dataclass(frozen=True)
class PhaseDefinition:
    """Everything the engine needs to drive one phase."""

    phase: Phase
    role: str
    rules: str
    task: str
    tools: tuple[str, ...]
    nudge: str
    started_message: str = ""

    def render(self, design_artifact: str = "", review_notes: str = "") -> str:
        """Render the system instruction with cross-phase artifacts."""
        parts = [
            f"# ROLE\n{self.role}",
            f"# RULES\n{self.rules}",
        ]

        if design_artifact:
            parts.append(f"# DESIGN SPECIFICATION\n{design_artifact}")

        if review_notes:
            parts.append(
                "# REVIEW NOTES\nThe previous version was reviewed and needs "
                f"changes. Fix the issues below.\n{review_notes}"
            )

        parts.append(f"# TASK\n{self.task}")
        return "\n\n".join(parts)


_AUTONOMY_RULES = (
    "You run inside an automated pipeline with no human in the loop. "
    "Never ask questions or request permission; decide with your best "
    "judgment. Every response MUST include a tool call."
)

DEFAULT_PHASES: dict[Phase, PhaseDefinition] = {
    Phase.DESIGN: PhaseDefinition(
        phase=Phase.DESIGN,
        role="Design agent: plans component structure before code is written.",
        rules=_AUTONOMY_RULES,
        task=(
            "Describe the component hierarchy, props and state, styling and "
            "layout, then record it with the create_design_spec tool. Use "
            "str_replace_editor 'view' to read existing files first."
        ),
        tools=("create_design_spec", "str_replace_editor"),
        nudge=(
            "You must use the create_design_spec tool now. Do not ask "
            "questions; produce the design spec immediately."
        ),
        started_message="Planning component design...",
    ),
    Phase.IMPLEMENT: PhaseDefinition(
        phase=Phase.IMPLEMENT,
        role="Engineer agent: writes the code described by the design spec.",
        rules=_AUTONOMY_RULES,
        task=(
            "Create or update the project files with str_replace_editor, "
            "starting with /App.jsx. Use file_manager to rename or delete."
        ),
        tools=("str_replace_editor", "file_manager"),
        nudge=(
            "You must use the str_replace_editor tool now to create the "
            "files. Start with /App.jsx immediately."
        ),
        started_message="Writing component code...",
    ),
    Phase.REVIEW: PhaseDefinition(
        phase=Phase.REVIEW,
        role="QA agent: reviews the code written by the engineer agent.",
        rules=_AUTONOMY_RULES,
        task=(
            "View the files with str_replace_editor, then deliver a verdict "
            "with submit_review. Only request revision for issues that "
            "break the code or seriously hurt usability."
        ),
        tools=("submit_review", "str_replace_editor"),
        nudge=(
            "You must view the files with str_replace_editor and then call "
            "submit_review now. Start by viewing /App.jsx."
        ),
        started_message="Reviewing code quality...",
    ),
}
