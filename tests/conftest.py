"""Shared pytest fixtures for agentrelay tests."""

import pytest

from agentrelay.domain.models import EngineConfig, ModelReply, Role, WorkflowRun
from agentrelay.domain.transcript import Transcript
from agentrelay.infrastructure.events import InMemoryEventSink
from agentrelay.infrastructure.llm.mock import call, reply
from agentrelay.infrastructure.project import ProjectToolbox, VirtualProject

APP_SOURCE = "export default function App() {\n  return <h1>Counter</h1>;\n}\n"


class ReplyFactory:
    """Builds the model replies the scripted tests feed to the engine."""

    app_source = APP_SOURCE

    def text(self, content: str = "Done.") -> ModelReply:
        return reply(content)

    def design(self, spec: str = "A single App component.") -> ModelReply:
        return reply(
            "Planning the layout.",
            call(
                "create_design_spec",
                spec=spec,
                components=[
                    {"name": "App", "filePath": "/App.jsx", "description": "Root view"}
                ],
            ),
        )

    def write(self, path: str = "/App.jsx", text: str = APP_SOURCE) -> ModelReply:
        return reply(
            "", call("str_replace_editor", command="create", path=path, file_text=text)
        )

    def review(self, needs_revision: bool, summary: str = "Looks fine.") -> ModelReply:
        issues = (
            [{"severity": "critical", "file": "/App.jsx", "description": "No state"}]
            if needs_revision
            else []
        )
        return reply(
            "",
            call(
                "submit_review",
                summary=summary,
                issues=issues,
                needsRevision=needs_revision,
            ),
        )


@pytest.fixture
def replies() -> ReplyFactory:
    """Create a factory for scripted model replies."""
    return ReplyFactory()


@pytest.fixture
def transcript() -> Transcript:
    """Create a transcript holding only the user request."""
    t = Transcript()
    t.append(Role.USER, "Build a counter")
    return t


@pytest.fixture
def workflow_run(transcript: Transcript) -> WorkflowRun:
    """Create a run around the sample transcript."""
    return WorkflowRun(run_id="run-001", transcript=transcript)


@pytest.fixture
def sink() -> InMemoryEventSink:
    """Create an in-memory event sink."""
    return InMemoryEventSink()


@pytest.fixture
def project() -> VirtualProject:
    """Create an empty virtual project."""
    return VirtualProject()


@pytest.fixture
def toolbox(project: VirtualProject) -> ProjectToolbox:
    """Create a toolbox over the empty project."""
    return ProjectToolbox(project)


@pytest.fixture
def strict_config() -> EngineConfig:
    """Engine bounds with nudging disabled, so each phase advances on idle."""
    return EngineConfig(max_retries=0, max_iterations=2, step_budget=80)


@pytest.fixture
def single_pass_script(replies: ReplyFactory) -> list[ModelReply]:
    """Replies for one approved pass with nudging disabled."""
    return [
        replies.design(),
        replies.text("Design complete."),
        replies.write(),
        replies.text("Implementation complete."),
        replies.review(needs_revision=False),
        replies.text("Review complete."),
    ]
