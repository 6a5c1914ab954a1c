"""Run rule sets against a project model."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, List, Sequence, Tuple, Union

from .model import ProjectModel
from .result import ExternalizeEntry, FileEdit, Finding, Occurrence, dedupe_entries
from .rules import ExternalizeRule, RuleOutcome, UpgradeRule

logger = logging.getLogger(__name__)


def build_finding(rule: UpgradeRule, occurrences: Sequence[Occurrence]) -> Finding:
    """Copy the rule's metadata next to what it found."""

    return Finding(
        id=rule.id,
        title=rule.title,
        description=rule.description,
        resolution=rule.resolution,
        resolution_type=rule.resolution_type,
        severity=rule.severity,
        file=rule.file,
        occurrences=tuple(occurrences),
    )


def run_upgrade_rules(rules: Sequence[UpgradeRule], project: ProjectModel) -> List[Finding]:
    """Visit ``rules`` one after another and return findings in rule order.

    Rules that find nothing contribute nothing. Exceptions raised by a rule
    propagate to the caller as-is.
    """

    findings: List[Finding] = []
    for rule in rules:
        occurrences = rule.visit(project)
        logger.debug("Rule %s produced %d occurrence(s)", rule.id, len(occurrences))
        if occurrences:
            findings.append(build_finding(rule, occurrences))
    return findings


async def collect(rule: Any, project: ProjectModel) -> Union[List[Occurrence], RuleOutcome]:
    """Return a rule's result, awaiting it when the rule is asynchronous."""

    outcome: Union[Any, Awaitable[Any]] = rule.visit(project)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    return outcome


async def run_externalize_rules(
    rules: Sequence[ExternalizeRule],
    project: ProjectModel,
) -> Tuple[List[ExternalizeEntry], List[FileEdit]]:
    """Visit all ``rules`` concurrently and join their outcomes.

    The first failing rule fails the whole run; its exception is re-raised
    unchanged and nothing computed so far is returned. Entries are
    deduplicated by key with the earliest registered rule winning.
    """

    outcomes = await asyncio.gather(*(collect(rule, project) for rule in rules))
    entries: List[ExternalizeEntry] = []
    suggestions: List[FileEdit] = []
    for rule, outcome in zip(rules, outcomes):
        logger.debug(
            "Rule %s produced %d entries and %d suggestions",
            getattr(rule, "name", type(rule).__name__),
            len(outcome.entries),
            len(outcome.suggestions),
        )
        entries.extend(outcome.entries)
        suggestions.extend(outcome.suggestions)
    return dedupe_entries(entries), suggestions

