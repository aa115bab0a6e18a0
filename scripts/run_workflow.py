#!/usr/bin/env python3
"""Run the design/implement/review workflow for one request.

Usage:
    python scripts/run_workflow.py "<request>" [--config engine.json] [--snapshot files.json]
        [--model NAME] [--events events.jsonl] [--output result.json]

Example:
    python scripts/run_workflow.py "Build a todo list" --config engine.json --events out/events.jsonl
    python scripts/run_workflow.py "Build a contact form" --model DemoModel
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from agentrelay.application.workflow import WorkflowEngine
from agentrelay.domain.models import EngineConfig
from agentrelay.infrastructure.events import JsonlEventSink
from agentrelay.infrastructure.llm.openai_chat import DEFAULT_OPENAI_MODEL
from agentrelay.infrastructure.project import ProjectToolbox, VirtualProject
from agentrelay.infrastructure.registry import ModelRegistry
from agentrelay.schemas import load_engine_config, load_model_block


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the agent relay workflow")
    parser.add_argument("request", help="Natural-language request")
    parser.add_argument("--config", type=Path, help="Engine configuration JSON")
    parser.add_argument(
        "--model", help="Model provider name, e.g. DemoModel for an offline run"
    )
    parser.add_argument("--snapshot", type=Path, help="Initial project files JSON")
    parser.add_argument("--events", type=Path, help="Append events to this JSONL file")
    parser.add_argument("--output", type=Path, help="Write final snapshot JSON here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = EngineConfig()
    model_block = {"name": "OpenAIChatModel", "config": {"model": DEFAULT_OPENAI_MODEL}}
    if args.config:
        config = load_engine_config(args.config)
        model_block = load_model_block(args.config) or model_block

    if args.model:
        model_block = {"name": args.model}

    registry = ModelRegistry()
    try:
        model = registry.from_config(model_block)
    except (KeyError, ValueError, TypeError) as e:
        parser.error(f"cannot build model: {e}")

    files: dict[str, str] = {}
    if args.snapshot:
        with open(args.snapshot) as f:
            files = json.load(f)
    toolbox = ProjectToolbox(VirtualProject.from_snapshot(files))

    sink = JsonlEventSink(args.events) if args.events else None
    engine = WorkflowEngine(model=model, sink=sink, config=config)
    result = engine.run(args.request, toolbox)

    print(f"Run: {result.run_id}")
    print(f"Status: {result.status.value}")
    print(f"Steps: {result.steps}  Iterations: {result.iteration_count}")
    if result.error:
        print(f"Error: {result.error}")
    print(f"Files: {', '.join(sorted(result.snapshot)) or '(none)'}")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w") as f:
            json.dump(
                {"status": result.status.value, "files": result.snapshot}, f, indent=2
            )

    return 0 if result.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
