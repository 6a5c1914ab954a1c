"""Rules about project files and housekeeping."""

from __future__ import annotations

from typing import List

from spfxcheck.model import ProjectModel
from spfxcheck.result import Occurrence
from spfxcheck.severity import Severity

from . import make_occurrence


class RemoveFileRule:
    """Flag a file the target release no longer uses."""

    resolution_type = "cmd"
    severity = Severity.REQUIRED

    def __init__(self, rule_id: str, relative_path: str, reason: str = "") -> None:
        self.id = rule_id
        self.relative_path = relative_path
        self.file = f"./{relative_path}"
        self.title = relative_path
        self.description = reason or f"Remove file {relative_path}"

    @property
    def resolution(self) -> str:
        return f"rm {self.relative_path}"

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        if not project.has_file(self.relative_path):
            return []
        return [make_occurrence(self, self.file)]


class NpmDedupeRule:
    id = "FN017001"
    title = "Run npm dedupe"
    description = "If, after upgrading npm packages, when building the project you have errors similar to: \"error TS2345: Argument of type 'SPHttpClientConfiguration' is not assignable to parameter of type 'SPHttpClientConfiguration'\", try running 'npm dedupe' to cleanup npm packages."
    resolution = "dedupe"
    resolution_type = "cmd"
    severity = Severity.OPTIONAL
    file = "./package.json"

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        manifest = project.package_json
        if not manifest.dependencies and not manifest.dev_dependencies:
            return []
        return [make_occurrence(self, self.file)]
