#!/usr/bin/env python3
"""Generate a trace report from a run's JSONL event log.

Usage:
    python scripts/trace_report.py <events.jsonl> [--run-id <id>] [--format table|timeline]

Example:
    python scripts/trace_report.py output/events.jsonl --run-id abc-123 --format timeline
"""

import argparse
from pathlib import Path

from agentrelay.domain.events import AgentEvent, EventKind
from agentrelay.infrastructure.events import read_events


def _detail(event: AgentEvent) -> str:
    if event.action_name:
        return event.action_name
    return event.content.replace("\n", " ")


def format_table(events: list[AgentEvent]) -> None:
    """Format events as a table."""
    print(f"{'#':>3} {'Event':20} {'Phase':13} {'Details'}")
    print("-" * 80)

    for i, event in enumerate(events, 1):
        print(f"{i:>3} {event.kind.value:20} {event.phase:13} {_detail(event)[:40]}")


def format_timeline(events: list[AgentEvent]) -> None:
    """Format events as a timeline."""
    for event in events:
        timestamp = event.created_at[:19] if event.created_at else "?"
        symbol = {
            EventKind.PHASE_STARTED: "[>]",
            EventKind.PHASE_MESSAGE: "[.]",
            EventKind.TOOL_REQUESTED: "[*]",
            EventKind.TOOL_RESULT: "[=]",
            EventKind.PHASE_DONE: "[+]",
            EventKind.PHASE_FAILED: "[-]",
            EventKind.REVISION_REQUESTED: "[^]",
            EventKind.WORKFLOW_DONE: "[#]",
        }.get(event.kind, "[?]")

        line = f"{timestamp} {symbol} {event.phase}"
        detail = _detail(event)
        if detail:
            line += f": {detail[:60]}"
        print(line)

        if event.action_args:
            for key in sorted(event.action_args):
                print(f"              {key}: {str(event.action_args[key])[:50]}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate run trace report")
    parser.add_argument("events_path", type=Path, help="Path to JSONL event log")
    parser.add_argument("--run-id", default=None, help="Only report this run")
    parser.add_argument(
        "--format",
        choices=["table", "timeline"],
        default="table",
        help="Output format (default: table)",
    )
    args = parser.parse_args()

    events = read_events(args.events_path, run_id=args.run_id)

    if not events:
        print(f"No events found in {args.events_path}")
        return

    run_ids = sorted({e.run_id for e in events})
    print(f"Runs: {', '.join(run_ids)}")
    print(f"Events: {len(events)}")
    print()

    if args.format == "table":
        format_table(events)
    else:
        format_timeline(events)

    # Summary statistics
    print()
    print("Summary:")
    print(f"  Total events: {len(events)}")
    print(
        f"  Phases started: {sum(1 for e in events if e.kind == EventKind.PHASE_STARTED)}"
    )
    print(
        f"  Tool calls: {sum(1 for e in events if e.kind == EventKind.TOOL_REQUESTED)}"
    )
    print(
        f"  Phase failures: {sum(1 for e in events if e.kind == EventKind.PHASE_FAILED)}"
    )
    print(
        f"  Revisions: {sum(1 for e in events if e.kind == EventKind.REVISION_REQUESTED)}"
    )


if __name__ == "__main__":
    main()
