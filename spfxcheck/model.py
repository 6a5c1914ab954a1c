"""Read-only snapshot of a SharePoint Framework project."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class SourceFile:
    """A text file captured by the loader, path relative to the project root."""

    path: str
    source: str = ""


@dataclass(frozen=True)
class ManifestFile:
    """A component ``*.manifest.json`` document."""

    path: str
    document: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PackageManifest:
    """Subset of ``package.json`` the rules care about."""

    name: str = ""
    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", _freeze(self.dependencies))
        object.__setattr__(self, "dev_dependencies", _freeze(self.dev_dependencies))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PackageManifest":
        data = data or {}
        return cls(
            name=str(data.get("name", "")),
            dependencies={k: str(v) for k, v in (data.get("dependencies") or {}).items()},
            dev_dependencies={k: str(v) for k, v in (data.get("devDependencies") or {}).items()},
        )

    def version_of(self, package: str, dev: bool = False) -> Optional[str]:
        source = self.dev_dependencies if dev else self.dependencies
        return source.get(package)


@dataclass(frozen=True)
class ProjectModel:
    """Everything the rules may inspect. Rules never mutate it."""

    path: str
    version: Optional[str] = None
    package_json: PackageManifest = field(default_factory=PackageManifest)
    yo_rc_json: Mapping[str, Any] = field(default_factory=dict)
    documents: Mapping[str, Any] = field(default_factory=dict)
    scss_files: Tuple[SourceFile, ...] = ()
    ts_files: Tuple[SourceFile, ...] = ()
    manifests: Tuple[ManifestFile, ...] = ()
    files: FrozenSet[str] = frozenset()
    installed_packages: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "yo_rc_json", _freeze(self.yo_rc_json))
        object.__setattr__(self, "documents", _freeze(self.documents))
        object.__setattr__(self, "installed_packages", _freeze(self.installed_packages))
        object.__setattr__(self, "scss_files", tuple(self.scss_files))
        object.__setattr__(self, "ts_files", tuple(self.ts_files))
        object.__setattr__(self, "manifests", tuple(self.manifests))
        object.__setattr__(self, "files", frozenset(self.files))

    @property
    def generator_settings(self) -> Mapping[str, Any]:
        return self.yo_rc_json.get("@microsoft/generator-sharepoint") or {}

    def document(self, relative_path: str) -> Optional[Any]:
        return self.documents.get(relative_path)

    def has_file(self, relative_path: str) -> bool:
        return relative_path in self.files or relative_path in self.documents


def is_react_project(project: ProjectModel) -> bool:
    """Return True when the project was scaffolded for, or depends on, React."""

    framework = str(project.generator_settings.get("framework", "")).lower()
    if framework == "react":
        return True
    return project.package_json.version_of("react") is not None
