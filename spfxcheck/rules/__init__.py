"""Rule contracts shared by upgrade and externalize rules."""

from __future__ import annotations

from typing import Any, List, Mapping, NamedTuple, Optional, Protocol, Tuple

from spfxcheck.model import ProjectModel
from spfxcheck.result import ExternalizeEntry, FileEdit, Occurrence
from spfxcheck.severity import Severity


class UpgradeRule(Protocol):
    """Synchronous rule: inspects the project and returns occurrences."""

    id: str
    title: str
    description: str
    resolution: str
    resolution_type: str
    severity: Severity
    file: str

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        """Return zero or more occurrences. Must not mutate ``project``."""


class RuleOutcome(NamedTuple):
    entries: Tuple[ExternalizeEntry, ...] = ()
    suggestions: Tuple[FileEdit, ...] = ()


class PackageResolver(Protocol):
    """Looks up metadata of an installed package."""

    async def manifest(self, package: str) -> Optional[Mapping[str, Any]]:
        """Return the package's ``package.json`` or None when unknown."""


class ExternalizeRule(Protocol):
    """Asynchronous rule: returns its own entries and edit suggestions."""

    name: str

    async def visit(self, project: ProjectModel) -> RuleOutcome:
        """Compute entries for ``project`` without touching shared state."""


class SnapshotResolver:
    """Resolve package manifests from the loader's ``node_modules`` snapshot."""

    def __init__(self, project: ProjectModel) -> None:
        self._packages = project.installed_packages

    async def manifest(self, package: str) -> Optional[Mapping[str, Any]]:
        return self._packages.get(package)


def make_occurrence(
    rule: UpgradeRule,
    file: str,
    resolution: Optional[str] = None,
    position: Optional[Mapping[str, int]] = None,
) -> Occurrence:
    """Build an occurrence, defaulting to the rule's own resolution."""

    return Occurrence(
        file=file,
        resolution=rule.resolution if resolution is None else resolution,
        position=dict(position) if position is not None else None,
    )
