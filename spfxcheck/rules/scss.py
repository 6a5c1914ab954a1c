"""Rules over the project's SCSS files."""

from __future__ import annotations

from typing import Dict, List, Optional

from spfxcheck.model import ProjectModel, is_react_project
from spfxcheck.result import Occurrence
from spfxcheck.severity import Severity

from . import make_occurrence


def find_position(source: str, needle: str) -> Optional[Dict[str, int]]:
    """Return the 1-based line and character of the first ``needle``."""

    for number, line in enumerate(source.splitlines(), start=1):
        column = line.find(needle)
        if column != -1:
            return {"line": number, "character": column + 1}
    return None


class ScssAddImportRule:
    """Ask React projects to import ``import_value`` in every SCSS file."""

    id = "FN022002"
    title = "Scss file import"
    description = "Add scss file import"
    resolution_type = "scss"
    severity = Severity.OPTIONAL
    file = ""

    def __init__(self, import_value: str = "") -> None:
        self.import_value = import_value or ""

    @property
    def resolution(self) -> str:
        return f"@import '{self.import_value}'"

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        if not is_react_project(project) or not project.scss_files:
            return []
        return [
            make_occurrence(self, scss.path)
            for scss in project.scss_files
            if self.import_value not in scss.source
        ]


class ScssRemoveImportRule:
    """Flag SCSS files that still import a stylesheet the release dropped."""

    id = "FN022001"
    title = "Scss file import"
    description = "Remove scss file import"
    resolution_type = "scss"
    severity = Severity.OPTIONAL
    file = ""

    def __init__(self, import_value: str = "") -> None:
        self.import_value = import_value or ""

    @property
    def resolution(self) -> str:
        return f"@import '{self.import_value}'"

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        if not self.import_value:
            return []
        return [
            make_occurrence(self, scss.path, position=find_position(scss.source, self.import_value))
            for scss in project.scss_files
            if self.import_value in scss.source
        ]
