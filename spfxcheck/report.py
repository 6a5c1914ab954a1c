"""Render upgrade and externalize results as text, JSON or Markdown.

Every function here is a pure function of an already computed result.
"""

from __future__ import annotations

import json
from collections import OrderedDict
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from .result import EDIT_ACTIONS, ExternalizeResult, FileEdit, UpgradeResult

Result = Union[UpgradeResult, ExternalizeResult]

CONFIG_JSON = "config/config.json"
CODE_FENCES = {"cmd": "sh", "json": "json", "scss": "scss", "ts": "ts"}


def to_json(result: Result) -> Any:
    """Return the lossless, JSON-serializable form of ``result``."""

    return result.to_dict()


def dumps(result: Result) -> str:
    return json.dumps(to_json(result), indent=2)


def render(result: Result, output: str = "text", today: Optional[date] = None) -> str:
    """Render ``result`` for the requested output mode."""

    if output == "json":
        return dumps(result)
    if isinstance(result, ExternalizeResult):
        if output == "md":
            return externalize_markdown(result, today)
        return externalize_text(result)
    if output == "md":
        return upgrade_markdown(result, today)
    return upgrade_text(result)


# ----------------------------------------------------------------------
# Upgrade
# ----------------------------------------------------------------------
def upgrade_text(result: UpgradeResult) -> str:
    if result.up_to_date:
        return f"Project {result.project_name} is already on version {result.to_version}"
    if not result.findings:
        return f"Project {result.project_name} can be upgraded to {result.to_version} without changes"

    lines: List[str] = [f"Upgrade project {result.project_name} from {result.from_version} to {result.to_version}", ""]
    for finding in result.findings:
        lines.append(f"[{finding.severity.value}] {finding.id} {finding.title}")
        lines.append(f"  {finding.description}")
        for occurrence in finding.occurrences:
            resolution = occurrence.resolution.replace("\n", "\n    ")
            location = occurrence.file
            if occurrence.position:
                location = f"{location}:{occurrence.position['line']}"
            lines.append(f"  {location}:")
            lines.append(f"    {resolution}")
        lines.append("")
    return "\n".join(lines).strip()


def upgrade_markdown(result: UpgradeResult, today: Optional[date] = None) -> str:
    today = today or date.today()
    lines: List[str] = [
        f"# Upgrade project {result.project_name} to v{result.to_version}",
        "",
        f"Date: {today.isoformat()}",
        "",
        "## Findings",
        "",
    ]
    if result.up_to_date or not result.findings:
        lines.append("No changes required.")
        return "\n".join(lines) + "\n"

    lines += ["Following is the list of steps required to upgrade your project.", ""]
    lines += ["| Id | Title | Severity |", "|----|-------|----------|"]
    for finding in sorted(result.findings, key=lambda item: item.severity.rank):
        lines.append(f"| {finding.id} | {finding.title} | {finding.severity.value} |")
    lines.append("")

    for finding in result.findings:
        fence = CODE_FENCES.get(finding.resolution_type, "")
        lines += [f"### {finding.id} {finding.title} | {finding.severity.value}", "", finding.description, ""]
        for occurrence in finding.occurrences:
            if finding.resolution_type == "cmd":
                lines.append("Execute the following command:")
            else:
                lines.append(f"In file [{occurrence.file}]({occurrence.file}) update the code as follows:")
            lines += ["", f"```{fence}", occurrence.resolution, "```", ""]
    return "\n".join(lines)


# ----------------------------------------------------------------------
# Externalize
# ----------------------------------------------------------------------
def externalize_text(result: ExternalizeResult) -> str:
    lines = [
        f"In the {CONFIG_JSON} file update the externals property to:",
        "",
        dumps(result),
    ]
    return "\n".join(lines).strip()


def group_edits(edits: Sequence[FileEdit]) -> "OrderedDict[str, Dict[str, List[str]]]":
    """Group edit targets by path, then action, keeping first-seen path order."""

    grouped: "OrderedDict[str, Dict[str, List[str]]]" = OrderedDict()
    for edit in edits:
        actions = grouped.setdefault(edit.path, {action: [] for action in EDIT_ACTIONS})
        actions[edit.action].append(edit.target_value)
    return grouped


def externalize_markdown(result: ExternalizeResult, today: Optional[date] = None) -> str:
    today = today or date.today()
    lines: List[str] = [
        f"# Externalizing dependencies of project {result.project_name}",
        "",
        f"Date: {today.isoformat()}",
        "",
        "## Findings",
        "",
        "### Modify files",
        "",
        f"#### [config.json]({CONFIG_JSON})",
        "",
        "Replace the externals property (or add if not defined) with",
        "",
        "```json",
        json.dumps({"externals": result.externals()}, indent=2),
        "```",
        "",
    ]
    for path, actions in group_edits(result.edits).items():
        lines += [f"#### [{path}]({path})", ""]
        for action in EDIT_ACTIONS:
            targets = actions[action]
            if not targets:
                continue
            lines += [f"{action}:", "", "```JavaScript", *targets, "```", ""]
    return "\n".join(lines)
