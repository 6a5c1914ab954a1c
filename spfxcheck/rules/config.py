"""Rules over parsed JSON configuration documents."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from spfxcheck.model import ProjectModel
from spfxcheck.result import Occurrence
from spfxcheck.severity import Severity

from . import make_occurrence

YO_RC = ".yo-rc.json"
GENERATOR_KEY = "@microsoft/generator-sharepoint"
EXTENSIONS_JSON = ".vscode/extensions.json"
LAUNCH_JSON = ".vscode/launch.json"
CHROME_DEBUGGER = "msjsdiag.debugger-for-chrome"
_MISSING = object()

LAUNCH_CONFIGURATION = {
    "version": "0.2.0",
    "configurations": [
        {
            "name": "Local workbench",
            "type": "chrome",
            "request": "launch",
            "url": "https://localhost:4321/temp/workbench.html",
            "webRoot": "${workspaceRoot}",
            "sourceMaps": True,
            "sourceMapPathOverrides": {
                "webpack:///../../../src/*": "${webRoot}/src/*",
                "webpack:///../../../../src/*": "${webRoot}/src/*",
                "webpack:///../../../../../src/*": "${webRoot}/src/*",
            },
            "runtimeArgs": ["--remote-debugging-port=9222"],
        }
    ],
}


def _lookup(document: Any, keys: Sequence[str]) -> Any:
    current = document
    for key in keys:
        if not isinstance(current, Mapping) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _nest(keys: Sequence[str], value: Any) -> Dict[str, Any]:
    nested: Any = value
    for key in reversed(keys):
        nested = {key: nested}
    return nested


def _document(project: ProjectModel, file: str) -> Optional[Any]:
    if file == YO_RC:
        return project.yo_rc_json or None
    return project.document(file)


class JsonPropertyRule:
    """Require a property of a JSON config document to hold a given value."""

    resolution_type = "json"

    def __init__(
        self,
        rule_id: str,
        file: str,
        keys: Sequence[str],
        value: Any,
        title: str = "",
        description: str = "",
        severity: Severity = Severity.REQUIRED,
    ) -> None:
        self.id = rule_id
        self.file = f"./{file}"
        self._document_path = file
        self.keys = tuple(keys)
        self.value = value
        self.title = title or f"{file} {self.keys[-1] if self.keys else ''}".strip()
        self.description = description or f"Update {'.'.join(self.keys)} in {file}"
        self.severity = severity

    @property
    def resolution(self) -> str:
        return json.dumps(_nest(self.keys, self.value), indent=2)

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        document = _document(project, self._document_path)
        if document is None:
            return []
        if _lookup(document, self.keys) == self.value:
            return []
        return [make_occurrence(self, self.file)]


def schema_rule(rule_id: str, file: str, schema_url: str) -> JsonPropertyRule:
    return JsonPropertyRule(
        rule_id,
        file,
        ("$schema",),
        schema_url,
        title=f"{file} schema",
        description=f"Update {file} schema URL",
    )


def yo_rc_version(version: str) -> JsonPropertyRule:
    return JsonPropertyRule(
        "FN010001",
        YO_RC,
        (GENERATOR_KEY, "version"),
        version,
        title=".yo-rc.json version",
        description="Update version in .yo-rc.json",
        severity=Severity.RECOMMENDED,
    )


class VsCodeExtensionsRule:
    """Recommend the Chrome debugger extension for VS Code users."""

    id = "FN014002"
    title = "Recommended VSCode extensions"
    description = "In the .vscode folder, add the extensions.json file"
    resolution_type = "json"
    severity = Severity.RECOMMENDED
    file = f"./{EXTENSIONS_JSON}"

    @property
    def resolution(self) -> str:
        return json.dumps({"recommendations": [CHROME_DEBUGGER]}, indent=2)

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        document = project.document(EXTENSIONS_JSON)
        if document is not None:
            recommendations = _lookup(document, ("recommendations",))
            if isinstance(recommendations, list) and CHROME_DEBUGGER in recommendations:
                return []
        return [make_occurrence(self, self.file)]


class LaunchJsonRule:
    """Suggest a debug configuration for the local workbench."""

    id = "FN014003"
    title = "Debug configuration for VSCode"
    description = "In the .vscode folder, add the launch.json file"
    resolution_type = "json"
    severity = Severity.RECOMMENDED
    file = f"./{LAUNCH_JSON}"

    @property
    def resolution(self) -> str:
        return json.dumps(LAUNCH_CONFIGURATION, indent=2)

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        if project.has_file(LAUNCH_JSON):
            return []
        return [make_occurrence(self, self.file)]


class ManifestSchemaRule:
    """Require component manifests of one type to reference the given schema."""

    resolution_type = "json"
    severity = Severity.REQUIRED
    file = ""

    def __init__(self, rule_id: str, component_type: str, schema_url: str) -> None:
        self.id = rule_id
        self.component_type = component_type
        self.schema_url = schema_url
        self.title = f"{component_type} manifest schema"
        self.description = f"Update schema in manifest of each {component_type}"

    @property
    def resolution(self) -> str:
        return json.dumps({"$schema": self.schema_url}, indent=2)

    def visit(self, project: ProjectModel) -> List[Occurrence]:
        occurrences: List[Occurrence] = []
        for manifest in project.manifests:
            if manifest.document.get("componentType") != self.component_type:
                continue
            if manifest.document.get("$schema") != self.schema_url:
                occurrences.append(make_occurrence(self, f"./{manifest.path}"))
        return occurrences
