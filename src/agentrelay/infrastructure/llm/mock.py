"""
Models that run without an LLM.

ScriptedModel returns predefined replies in sequence for tests. DemoModel
plays every phase from canned content so a run works offline.
"""

import uuid
from typing import Any

from agentrelay.domain.interfaces import ModelServiceInterface
from agentrelay.domain.models import ModelReply, Role, ToolAction, ToolSpec, Turn
from agentrelay.domain.routing import DESIGN_TOOL, REVIEW_TOOL


def call(name: str, **args: Any) -> ToolAction:
    """Build a tool action with a fresh id."""
    return ToolAction(action_id=f"call_{uuid.uuid4().hex[:12]}", name=name, args=args)


def reply(content: str = "", *actions: ToolAction) -> ModelReply:
    """Build a model reply, optionally requesting actions."""
    return ModelReply(content=content, actions=tuple(actions))


class ScriptedModel(ModelServiceInterface):
    """Returns predefined replies for testing.

    A script entry that is an exception instance is raised instead of
    returned, to simulate a failing model call.
    """

    def __init__(self, replies: list[ModelReply | BaseException] | None = None):
        """
        Args:
            replies: Replies (or exceptions) to produce in sequence
        """
        self._replies = list(replies or [])
        self._call_count = 0
        self._calls: list[tuple[str, tuple[Turn, ...], tuple[ToolSpec, ...]]] = []

    def complete(
        self,
        instruction: str,
        transcript: tuple[Turn, ...],
        tools: tuple[ToolSpec, ...] = (),
    ) -> ModelReply:
        """Return the next predefined reply."""
        if self._call_count >= len(self._replies):
            raise RuntimeError("ScriptedModel exhausted replies")

        self._calls.append((instruction, transcript, tools))
        item = self._replies[self._call_count]
        self._call_count += 1

        if isinstance(item, BaseException):
            raise item
        return item

    @property
    def call_count(self) -> int:
        """Number of times complete() has been called."""
        return self._call_count

    @property
    def calls(self) -> list[tuple[str, tuple[Turn, ...], tuple[ToolSpec, ...]]]:
        """(instruction, transcript, tools) for every call, in order."""
        return list(self._calls)

    def reset(self) -> None:
        """Reset the call counter to reuse replies."""
        self._call_count = 0
        self._calls.clear()


_DEMO_COMPONENTS: dict[str, tuple[str, str, str]] = {
    # keyword: (component name, design notes, component body)
    "form": (
        "ContactForm",
        "Centered card with labeled name, email and message fields. "
        "Controlled inputs via useState; submit shows a thank-you banner.",
        "import { useState } from 'react';\n\n"
        "export default function ContactForm() {\n"
        "  const [form, setForm] = useState({ name: '', email: '', message: '' });\n"
        "  const [sent, setSent] = useState(false);\n"
        "  const update = (e) =>\n"
        "    setForm({ ...form, [e.target.name]: e.target.value });\n"
        "  return (\n"
        "    <form onSubmit={(e) => { e.preventDefault(); setSent(true); }}"
        " className=\"max-w-md mx-auto p-6 bg-white rounded-xl shadow-lg space-y-4\">\n"
        "      {sent && <p className=\"text-green-700\">Thank you!</p>}\n"
        "      <input name=\"name\" value={form.name} onChange={update} required />\n"
        "      <input name=\"email\" type=\"email\" value={form.email}"
        " onChange={update} required />\n"
        "      <textarea name=\"message\" rows={4} value={form.message}"
        " onChange={update} required />\n"
        "      <button type=\"submit\">Send Message</button>\n"
        "    </form>\n"
        "  );\n"
        "}\n",
    ),
    "card": (
        "Card",
        "Rounded card with shadow, optional hero image, title, description "
        "and an actions footer.",
        "export default function Card({ title = 'Welcome', description = '',"
        " imageUrl, actions }) {\n"
        "  return (\n"
        "    <div className=\"bg-white rounded-xl shadow-lg overflow-hidden\">\n"
        "      {imageUrl && <img src={imageUrl} alt={title}"
        " className=\"w-full h-48 object-cover\" />}\n"
        "      <div className=\"p-6\">\n"
        "        <h3 className=\"text-xl font-semibold\">{title}</h3>\n"
        "        <p className=\"text-gray-500\">{description}</p>\n"
        "        {actions}\n"
        "      </div>\n"
        "    </div>\n"
        "  );\n"
        "}\n",
    ),
    "counter": (
        "Counter",
        "Centered column with a large count and Decrease, Reset and "
        "Increase buttons. Count starts at 0.",
        "import { useState } from 'react';\n\n"
        "export default function Counter() {\n"
        "  const [count, setCount] = useState(0);\n"
        "  return (\n"
        "    <div className=\"flex flex-col items-center p-8 bg-white rounded-xl"
        " shadow-lg\">\n"
        "      <div className=\"text-5xl font-bold mb-8\">{count}</div>\n"
        "      <div className=\"flex gap-3\">\n"
        "        <button onClick={() => setCount((n) => n - 1)}>Decrease</button>\n"
        "        <button onClick={() => setCount(0)}>Reset</button>\n"
        "        <button onClick={() => setCount((n) => n + 1)}>Increase</button>\n"
        "      </div>\n"
        "    </div>\n"
        "  );\n"
        "}\n",
    ),
}


def _detect_component(request: str) -> tuple[str, str, str]:
    lower = request.lower()
    for keyword in ("form", "card"):
        if keyword in lower:
            return _DEMO_COMPONENTS[keyword]
    return _DEMO_COMPONENTS["counter"]


class DemoModel(ModelServiceInterface):
    """Offline stand-in for a real provider.

    Plays each phase from the tools it is offered: a design spec, then the
    component and /App.jsx, then a review. The component is picked from
    the request ("form", "card", otherwise a counter). Once the current
    phase view holds an agent turn with actions, it replies with plain
    text so the phase can advance.
    """

    def __init__(self, revisions: int = 0):
        """
        Args:
            revisions: Review passes that ask for revision before approving
        """
        if revisions < 0:
            raise ValueError("revisions must be >= 0")
        self._revisions = revisions
        self._reviews = 0

    def complete(
        self,
        instruction: str,
        transcript: tuple[Turn, ...],
        tools: tuple[ToolSpec, ...] = (),
    ) -> ModelReply:
        names = {spec.name for spec in tools}
        if any(t.role is Role.AGENT and t.actions for t in transcript):
            return reply("Done.")

        request = next((t.content for t in transcript if t.role is Role.USER), "")
        name, notes, body = _detect_component(request)
        path = f"/components/{name}.jsx"

        if DESIGN_TOOL in names:
            return reply(
                f"Planning the {name} component.",
                call(
                    DESIGN_TOOL,
                    spec=f"## Design Specification: {name}\n\n{notes}",
                    components=[
                        {"name": name, "filePath": path, "description": notes},
                        {"name": "App", "filePath": "/App.jsx", "description": "Root"},
                    ],
                ),
            )
        if REVIEW_TOOL in names:
            return self._review(name, path)
        if "str_replace_editor" in names:
            app = (
                f"import {name} from '@/components/{name}';\n\n"
                "export default function App() {\n"
                f"  return <{name} />;\n"
                "}\n"
            )
            return reply(
                f"Writing {path} and /App.jsx.",
                call("str_replace_editor", command="create", path=path, file_text=body),
                call(
                    "str_replace_editor",
                    command="create",
                    path="/App.jsx",
                    file_text=app,
                ),
            )
        return reply("Nothing to do.")

    def _review(self, name: str, path: str) -> ModelReply:
        self._reviews += 1
        needs_revision = self._reviews <= self._revisions
        issues = (
            [{"severity": "warning", "file": path, "description": "Add aria labels"}]
            if needs_revision
            else []
        )
        return reply(
            f"Reviewing {name}.",
            call("str_replace_editor", command="view", path=path),
            call(
                REVIEW_TOOL,
                summary=f"{name} renders and its controls work.",
                issues=issues,
                needsRevision=needs_revision,
            ),
        )
