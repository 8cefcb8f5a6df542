"""CLI entrypoint for jira-plan-creator.

Parse a PLANNING.md document and create its epics, stories, subtasks and tasks
in Jira.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from jira_plan_creator import __version__
from jira_plan_creator.config import JiraSettings, MissingCredentials
from jira_plan_creator.creation.orchestrator import CreationOrchestrator, LogEntry
from jira_plan_creator.creation.report import write_run_report
from jira_plan_creator.jira.client import JiraClient
from jira_plan_creator.jira.fields import suggest_field_slot
from jira_plan_creator.logging import configure_logging
from jira_plan_creator.planning.models import ParsedPlan
from jira_plan_creator.planning.parser import count_issues, parse_plan
from jira_plan_creator.planning.preview import format_counts, format_plan_tree

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jira-plan-creator",
        description="Create Jira epics, stories, subtasks and tasks from a PLANNING.md file",
    )
    parser.add_argument(
        "--version", action="version", version=f"jira-plan-creator {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Parse a planning document and show the tree")
    parse_cmd.add_argument("path", type=Path, help="Path to the planning markdown file")

    subparsers.add_parser("test-connection", help="Check Jira credentials")

    subparsers.add_parser(
        "discover-fields",
        help="List epic/story/estimate related Jira fields and the setting each one fits",
    )

    create = subparsers.add_parser("create", help="Create all issues of a planning document")
    create.add_argument("path", type=Path, help="Path to the planning markdown file")
    create.add_argument(
        "--dry-run",
        action="store_true",
        help="Log what would be created without calling Jira",
    )
    create.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON report (plan with Jira keys + log) to this path",
    )

    return parser


def _load_plan(path: Path) -> ParsedPlan:
    # utf-8-sig drops a leading byte order mark so a first-line heading still matches.
    text = path.read_text(encoding="utf-8-sig")
    if not text.strip():
        raise ValueError(f"Planning document is empty: {path}")
    return parse_plan(text)


def _build_client(settings: JiraSettings) -> JiraClient:
    settings.require_credentials()
    return JiraClient(
        base_url=settings.base_url,
        username=settings.username,
        token=settings.token,
        auth_method=settings.auth_method,
        field_config=settings.field_config(),
    )


def _print_log_entry(entry: LogEntry) -> None:
    print(f"[{entry.status.value.upper()}] {entry.message}", flush=True)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = JiraSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, fmt=settings.log_format)

    try:
        if args.command == "parse":
            plan = _load_plan(args.path)
            for line in format_plan_tree(plan):
                print(line)
            print(format_counts(count_issues(plan)))
            return 0

        if args.command == "test-connection":
            client = _build_client(settings)
            try:
                me = client.who_am_i()
            finally:
                client.close()
            print(f"Connected as: {me.display_name}")
            return 0

        if args.command == "discover-fields":
            client = _build_client(settings)
            try:
                fields = client.discover_fields()
            finally:
                client.close()

            if not fields:
                print("No epic/story/estimate related fields found")
                return 0
            for field in fields:
                slot = suggest_field_slot(field)
                hint = f"  -> {slot.env_var}" if slot is not None else ""
                print(f"{field.name}\t{field.id}\t{field.schema_type or '?'}{hint}")
            return 0

        if args.command == "create":
            plan = _load_plan(args.path)
            print(format_counts(count_issues(plan)))

            client = None if args.dry_run else _build_client(settings)
            try:
                orchestrator = CreationOrchestrator(
                    tracker=client,
                    field_config=settings.field_config() if client is None else None,
                    throttle_seconds=settings.throttle_seconds,
                    on_log=_print_log_entry,
                )
                result = orchestrator.execute(plan, dry_run=args.dry_run)
            finally:
                if client is not None:
                    client.close()

            if args.report is not None:
                written = write_run_report(args.report, plan, result)
                logger.info("Run report written", extra={"path": str(written)})
                print(f"Report written to {written}")

            # Exit codes are designed to be CI-friendly.
            return 0 if result.succeeded else 4

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except MissingCredentials as e:
        logger.error(str(e))
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
