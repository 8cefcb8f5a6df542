#!/usr/bin/env python3
"""Programmatic plan creation example.

This demonstrates using the components directly:

* load settings from `.env`
* parse a PLANNING.md document
* create its issues in Jira (or only log them with --dry-run)
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from jira_plan_creator.config import JiraSettings
from jira_plan_creator.creation.orchestrator import CreationOrchestrator
from jira_plan_creator.jira.client import JiraClient
from jira_plan_creator.logging import configure_logging
from jira_plan_creator.planning.parser import parse_plan
from jira_plan_creator.planning.preview import format_plan_tree


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create Jira issues from a planning document.")
    parser.add_argument("path", type=Path, help="Path to PLANNING.md")
    parser.add_argument("--dry-run", action="store_true", help="Do not call Jira")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = JiraSettings()
    configure_logging(settings.log_level, fmt="text")

    plan = parse_plan(args.path.read_text(encoding="utf-8-sig"))

    client = None
    if not args.dry_run:
        settings.require_credentials()
        client = JiraClient(
            base_url=settings.base_url,
            username=settings.username,
            token=settings.token,
            auth_method=settings.auth_method,
            field_config=settings.field_config(),
        )

    try:
        result = CreationOrchestrator(
            tracker=client,
            field_config=settings.field_config() if client is None else None,
            throttle_seconds=settings.throttle_seconds,
        ).execute(plan, dry_run=args.dry_run)
    finally:
        if client is not None:
            client.close()

    for line in format_plan_tree(plan):
        print(line)
    print(f"{result.error_count} errors")
    return 0 if result.succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
