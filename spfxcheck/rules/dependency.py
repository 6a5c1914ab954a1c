"""Check ``package.json`` dependency versions against an SPFx release."""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from spfxcheck.model import ProjectModel
from spfxcheck.result import Finding, Occurrence
from spfxcheck.severity import Severity

from . import make_occurrence

PACKAGE_JSON = "./package.json"
INSTALL_TOKENS = ("installDep", "installDevDep")


class DependencyRule:
    """Flag a (dev) dependency that is missing, outdated or no longer needed.

    ``optional`` rules only fire when the package is already referenced, so
    they never suggest adding a package the project doesn't use. ``remove``
    rules fire when a package that the target release dropped is present.
    """

    resolution_type = "cmd"
    file = PACKAGE_JSON

    def __init__(
        self,
        rule_id: str,
        package: str,
        version: str = "",
        dev: bool = False,
        optional: bool = False,
        remove: bool = False,
    ) -> None:
        self.id = rule_id
        self.package = package
        self.version = version
        self.dev = dev
        self.optional = optional
        self.remove = remove
        self.severity = Severity.OPTIONAL if optional and not remove else Severity.REQUIRED

    @property
    def title(self) -> str:
        return self.package

    @property
    def description(self) -> str:
        kind = "dev dependency" if self.dev else "dependency"
        verb = "Remove" if self.remove else "Upgrade"
        return f"{verb} SharePoint Framework {kind} package {self.package}"

    @property
    def resolution(self) -> str:
        suffix = "DevDep" if self.dev else "Dep"
        if self.remove:
            return f"uninstall{suffix} {self.package}"
        return f"install{suffix} {self.package}@{self.version}"

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        current = project.package_json.version_of(self.package, dev=self.dev)
        if self.remove:
            return [make_occurrence(self, self.file)] if current is not None else []
        if current is None:
            return [] if self.optional else [make_occurrence(self, self.file)]
        if current != self.version:
            return [make_occurrence(self, self.file)]
        return []


def dependency(rule_id: str, package: str, version: str, **kwargs) -> DependencyRule:
    return DependencyRule(rule_id, package, version, **kwargs)


def dev_dependency(rule_id: str, package: str, version: str, **kwargs) -> DependencyRule:
    return DependencyRule(rule_id, package, version, dev=True, **kwargs)


def removed_dependency(rule_id: str, package: str, dev: bool = False) -> DependencyRule:
    return DependencyRule(rule_id, package, dev=dev, remove=True)


def removed_packages(rules: Iterable[object]) -> Set[str]:
    """Return the packages that ``rules`` ask to uninstall."""

    return {rule.package for rule in rules if isinstance(rule, DependencyRule) and rule.remove}


def installed_package(finding: Finding) -> Optional[str]:
    """Return the package an unrendered install finding adds, if any."""

    if finding.resolution_type != DependencyRule.resolution_type:
        return None
    token, _, target = finding.resolution.partition(" ")
    if token not in INSTALL_TOKENS:
        return None
    return target.rpartition("@")[0] or None


def drop_undone_installs(findings: Iterable[Finding], removed: Set[str]) -> List[Finding]:
    """Drop install advice for packages that a later release removes again."""

    return [finding for finding in findings if installed_package(finding) not in removed]
