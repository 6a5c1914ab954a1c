"""Version gating and orchestration for the upgrade and externalize commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from .config import Settings
from .engine import run_externalize_rules, run_upgrade_rules
from .errors import DowngradeNotSupported, RuleExecutionFailure, UnsupportedVersion, VersionUndetectable
from .model import ProjectModel
from .package_manager import render_findings
from .registry import version_key
from .result import ExternalizeResult, Finding, UpgradeResult, filter_suppressed, supersede_findings
from .rules.dependency import drop_undone_installs, removed_packages
from .rulesets import SUPPORTED_VERSIONS
from .rulesets.externalize import externalize_registry
from .rulesets.upgrade import upgrade_registry

logger = logging.getLogger(__name__)


def project_name(project: ProjectModel) -> str:
    return project.package_json.name or Path(project.path).name


def _project_version(project: ProjectModel, action: str) -> str:
    if not project.version:
        raise VersionUndetectable()
    if project.version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersion(project.version, SUPPORTED_VERSIONS, action)
    return project.version


def plan_upgrade(project: ProjectModel, to_version: Optional[str] = None, settings: Optional[Settings] = None) -> UpgradeResult:
    """Collect the findings of every release between the project and ``to_version``."""

    settings = settings or Settings()
    registry = upgrade_registry()
    from_version = _project_version(project, registry.action)
    target = registry.ensure_supported(to_version or registry.latest)
    name = project_name(project)

    if from_version == target:
        logger.info("Project %s is already on version %s", name, target)
        return UpgradeResult(name, from_version, target)
    if version_key(from_version) > version_key(target):
        raise DowngradeNotSupported(from_version, target)

    findings: List[Finding] = []
    for version in registry.versions_between(from_version, target):
        logger.info("Checking rules for SharePoint Framework %s", version)
        rules = registry.lookup(version)
        findings = drop_undone_installs(findings, removed_packages(rules))
        findings.extend(run_upgrade_rules(rules, project))

    findings = supersede_findings(findings)
    findings = filter_suppressed(findings, settings.suppress)
    findings = render_findings(findings, settings.package_manager)
    return UpgradeResult(name, from_version, target, findings)


async def plan_externalize_async(project: ProjectModel, settings: Optional[Settings] = None) -> ExternalizeResult:
    settings = settings or Settings()
    registry = externalize_registry(settings.cdn_base_url)
    rules = registry.lookup(project.version)
    try:
        entries, edits = await run_externalize_rules(rules, project)
    except Exception as exc:  # pylint: disable=broad-except
        raise RuleExecutionFailure(str(exc)) from exc
    return ExternalizeResult(project_name(project), entries, edits)


def plan_externalize(project: ProjectModel, settings: Optional[Settings] = None) -> ExternalizeResult:
    """Propose CDN externals for the project's bundled dependencies."""

    return asyncio.run(plan_externalize_async(project, settings))
