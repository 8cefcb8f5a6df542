"""JSON report of a creation run.

The report keeps the created Jira keys next to the plan items they belong to,
so a partially failed run can be inspected (and the missing items created by
hand) after the fact.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from jira_plan_creator.creation.orchestrator import CreationResult
from jira_plan_creator.planning.models import ParsedPlan


def build_run_report(plan: ParsedPlan, result: CreationResult) -> dict[str, Any]:
    return {
        "dry_run": result.dry_run,
        "aborted": result.aborted,
        "errors": result.error_count,
        "counts": asdict(result.counts),
        "plan": plan.model_dump(mode="json"),
        "log": [entry.model_dump(mode="json") for entry in result.log],
    }


def write_run_report(path: Path, plan: ParsedPlan, result: CreationResult) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = build_run_report(plan, result)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
