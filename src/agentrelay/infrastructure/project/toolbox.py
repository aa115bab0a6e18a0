"""
Tools exposed to the agents, backed by a VirtualProject.

Arguments are validated against each tool's JSON Schema before dispatch,
so the agent gets a precise message when a call is malformed.
"""

import logging
from collections.abc import Callable
from typing import Any

import jsonschema

from agentrelay.domain.exceptions import InvalidToolArguments, UnknownTool
from agentrelay.domain.interfaces import ToolboxInterface
from agentrelay.domain.models import ToolAction, ToolSpec
from agentrelay.domain.routing import (
    APPROVED_MARKER,
    DESIGN_SPEC_MARKER,
    DESIGN_TOOL,
    NEEDS_REVISION_MARKER,
    REVIEW_TOOL,
)
from agentrelay.infrastructure.project.memory import ProjectError, VirtualProject

logger = logging.getLogger(__name__)

STR_REPLACE_EDITOR = ToolSpec(
    name="str_replace_editor",
    description=(
        "A text editor for viewing, creating and editing project files. "
        "Commands: 'view' (read a file or list a directory), 'create' "
        "(create a file), 'str_replace' (replace text), 'insert' (insert "
        "after a line)."
    ),
    parameters={
        "type": "object",
        "properties": {
            "command": {
                "type": "string",
                "enum": ["view", "create", "str_replace", "insert", "undo_edit"],
            },
            "path": {"type": "string", "minLength": 1},
            "file_text": {"type": "string"},
            "insert_line": {"type": "integer", "minimum": 0},
            "new_str": {"type": "string"},
            "old_str": {"type": "string"},
            "view_range": {
                "type": "array",
                "items": {"type": "integer"},
                "minItems": 2,
                "maxItems": 2,
            },
        },
        "required": ["command", "path"],
    },
)

FILE_MANAGER = ToolSpec(
    name="file_manager",
    description=(
        "Rename or delete files or folders. Rename can be used to move a "
        "file; destination folders are created as required."
    ),
    parameters={
        "type": "object",
        "properties": {
            "command": {"type": "string", "enum": ["rename", "delete"]},
            "path": {"type": "string", "minLength": 1},
            "new_path": {"type": "string", "minLength": 1},
        },
        "required": ["command", "path"],
    },
)

CREATE_DESIGN_SPEC = ToolSpec(
    name=DESIGN_TOOL,
    description="Record the design specification for the components to build.",
    parameters={
        "type": "object",
        "properties": {
            "spec": {"type": "string", "minLength": 1},
            "components": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "filePath": {"type": "string"},
                        "description": {"type": "string"},
                        "props": {"type": "array", "items": {"type": "string"}},
                        "hasState": {"type": "boolean"},
                    },
                    "required": ["name", "filePath", "description"],
                },
            },
        },
        "required": ["spec", "components"],
    },
)

SUBMIT_REVIEW = ToolSpec(
    name=REVIEW_TOOL,
    description="Submit a code review with findings and a pass/fail verdict.",
    parameters={
        "type": "object",
        "properties": {
            "summary": {"type": "string"},
            "issues": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "severity": {
                            "type": "string",
                            "enum": ["critical", "warning", "suggestion"],
                        },
                        "file": {"type": "string"},
                        "description": {"type": "string"},
                        "suggestedFix": {"type": "string"},
                    },
                    "required": ["severity", "file", "description"],
                },
            },
            "needsRevision": {"type": "boolean"},
        },
        "required": ["summary", "issues", "needsRevision"],
    },
)


class ProjectToolbox(ToolboxInterface):
    """Dispatches tool actions to a VirtualProject."""

    def __init__(self, project: VirtualProject | None = None) -> None:
        self._project = project if project is not None else VirtualProject()
        self._tools: dict[str, tuple[ToolSpec, Callable[[dict[str, Any]], str]]] = {
            STR_REPLACE_EDITOR.name: (STR_REPLACE_EDITOR, self._str_replace_editor),
            FILE_MANAGER.name: (FILE_MANAGER, self._file_manager),
            CREATE_DESIGN_SPEC.name: (CREATE_DESIGN_SPEC, self._create_design_spec),
            SUBMIT_REVIEW.name: (SUBMIT_REVIEW, self._submit_review),
        }

    @property
    def project(self) -> VirtualProject:
        return self._project

    def tool_specs(self, names: tuple[str, ...]) -> tuple[ToolSpec, ...]:
        return tuple(self._tools[name][0] for name in names if name in self._tools)

    def execute(self, action: ToolAction) -> str:
        if action.name not in self._tools:
            raise UnknownTool(action.name)
        spec, handler = self._tools[action.name]
        args = dict(action.args)
        try:
            jsonschema.validate(args, spec.parameters)
        except jsonschema.ValidationError as e:
            raise InvalidToolArguments(action.name, e.message) from e
        return handler(args)

    def list_paths(self) -> tuple[str, ...]:
        return self._project.list_paths()

    def snapshot(self) -> dict[str, Any]:
        return self._project.snapshot()

    # -------------------------------------------------------------------------
    # Tool handlers
    # -------------------------------------------------------------------------

    def _str_replace_editor(self, args: dict[str, Any]) -> str:
        command = args["command"]
        path = args["path"]
        if command == "view":
            return self._project.view(path, args.get("view_range"))
        if command == "create":
            return self._project.create(path, args.get("file_text", ""))
        if command == "str_replace":
            return self._project.replace(
                path, args.get("old_str", ""), args.get("new_str", "")
            )
        if command == "insert":
            return self._project.insert(
                path, args.get("insert_line", 0), args.get("new_str", "")
            )
        raise ProjectError(
            "undo_edit command is not supported. Use str_replace to revert changes."
        )

    def _file_manager(self, args: dict[str, Any]) -> str:
        if args["command"] == "rename":
            new_path = args.get("new_path")
            if not new_path:
                raise ProjectError("new_path is required for rename command")
            return self._project.rename(args["path"], new_path)
        return self._project.delete(args["path"])

    def _create_design_spec(self, args: dict[str, Any]) -> str:
        components = "\n".join(
            f"- {c['name']} ({c['filePath']}): {c['description']}"
            for c in args["components"]
        )
        return (
            f"{DESIGN_SPEC_MARKER} successfully.\n\n"
            f"Components planned:\n{components}\n\n"
            f"Full spec:\n{args['spec']}"
        )

    def _submit_review(self, args: dict[str, Any]) -> str:
        issues = args["issues"]
        issue_list = (
            "\n".join(
                f"[{i['severity'].upper()}] {i['file']}: {i['description']}"
                for i in issues
            )
            if issues
            else "No issues found."
        )
        verdict = NEEDS_REVISION_MARKER if args["needsRevision"] else APPROVED_MARKER
        logger.debug("Review submitted: %s (%d issues)", verdict, len(issues))
        return f"Review {verdict}\n\n{args['summary']}\n\nIssues:\n{issue_list}"
