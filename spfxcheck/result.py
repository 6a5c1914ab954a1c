"""Core result data structures for upgrade and externalize runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .severity import Severity

EDIT_ACTIONS = ("add", "remove")


@dataclass(frozen=True)
class Occurrence:
    """One concrete location plus the fix suggested for it."""

    file: str
    resolution: str
    position: Optional[Dict[str, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"file": self.file, "resolution": self.resolution}
        if self.position is not None:
            data["position"] = dict(self.position)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Occurrence":
        return cls(file=data["file"], resolution=data["resolution"], position=data.get("position"))


@dataclass(frozen=True)
class Finding:
    """Aggregated result of one rule over one project."""

    id: str
    title: str
    description: str
    resolution: str
    resolution_type: str
    severity: Severity
    file: str
    occurrences: Tuple[Occurrence, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "resolution": self.resolution,
            "resolutionType": self.resolution_type,
            "severity": self.severity.value,
            "file": self.file,
            "occurrences": [occurrence.to_dict() for occurrence in self.occurrences],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data["description"],
            resolution=data["resolution"],
            resolution_type=data["resolutionType"],
            severity=Severity(data["severity"]),
            file=data["file"],
            occurrences=tuple(Occurrence.from_dict(item) for item in data["occurrences"]),
        )


@dataclass(frozen=True)
class ExternalizeEntry:
    """A dependency that can be loaded from a CDN instead of being bundled."""

    key: str
    path: str
    global_name: Optional[str] = None
    global_dependencies: Tuple[str, ...] = ()

    def to_external(self) -> Union[str, Dict[str, Any]]:
        """Return the value used for this entry in ``config.json`` externals."""

        if not self.global_name:
            return self.path
        return {
            "path": self.path,
            "globalName": self.global_name,
            "globalDependencies": list(self.global_dependencies),
        }

    @classmethod
    def from_external(cls, key: str, value: Union[str, Dict[str, Any]]) -> "ExternalizeEntry":
        if isinstance(value, str):
            return cls(key=key, path=value)
        return cls(
            key=key,
            path=value["path"],
            global_name=value.get("globalName"),
            global_dependencies=tuple(value.get("globalDependencies") or ()),
        )


@dataclass(frozen=True)
class FileEdit:
    """A source edit suggestion. Never applied automatically."""

    path: str
    action: str
    target_value: str

    def __post_init__(self) -> None:
        if self.action not in EDIT_ACTIONS:
            raise ValueError(f"Unsupported edit action: {self.action}")

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "action": self.action, "targetValue": self.target_value}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "FileEdit":
        return cls(path=data["path"], action=data["action"], target_value=data["targetValue"])


@dataclass
class UpgradeResult:
    """Findings of an upgrade run, plus the versions it covered."""

    project_name: str
    from_version: str
    to_version: str
    findings: List[Finding] = field(default_factory=list)

    @property
    def up_to_date(self) -> bool:
        return self.from_version == self.to_version

    def to_dict(self) -> List[Dict[str, Any]]:
        return [finding.to_dict() for finding in self.findings]

    @classmethod
    def from_dict(cls, project_name: str, from_version: str, to_version: str, data: List[Dict[str, Any]]) -> "UpgradeResult":
        return cls(project_name, from_version, to_version, [Finding.from_dict(item) for item in data])


@dataclass
class ExternalizeResult:
    """Deduplicated externals and the edits needed to consume them."""

    project_name: str
    entries: List[ExternalizeEntry] = field(default_factory=list)
    edits: List[FileEdit] = field(default_factory=list)

    def externals(self) -> Dict[str, Any]:
        return {entry.key: entry.to_external() for entry in self.entries}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "externalConfiguration": {"externals": self.externals()},
            "edits": [edit.to_dict() for edit in self.edits],
        }

    @classmethod
    def from_dict(cls, project_name: str, data: Dict[str, Any]) -> "ExternalizeResult":
        externals = data["externalConfiguration"]["externals"]
        return cls(
            project_name=project_name,
            entries=[ExternalizeEntry.from_external(key, value) for key, value in externals.items()],
            edits=[FileEdit.from_dict(item) for item in data["edits"]],
        )


def dedupe_entries(entries: Iterable[ExternalizeEntry]) -> List[ExternalizeEntry]:
    """Keep the first entry seen for each key, in input order."""

    seen = set()
    unique: List[ExternalizeEntry] = []
    for entry in entries:
        if entry.key in seen:
            continue
        seen.add(entry.key)
        unique.append(entry)
    return unique


def supersede_findings(findings: Sequence[Finding]) -> List[Finding]:
    """Keep only the last finding for each rule id.

    Later upgrade steps replace the advice of earlier ones, e.g. a package
    bumped to 1.4.0 and later to 1.5.0 must only be reported once.
    """

    last_index = {finding.id: idx for idx, finding in enumerate(findings)}
    return [finding for idx, finding in enumerate(findings) if last_index[finding.id] == idx]


def filter_suppressed(findings: Iterable[Finding], suppressed: Iterable[str]) -> List[Finding]:
    ids = {rule_id.upper() for rule_id in suppressed}
    return [finding for finding in findings if finding.id.upper() not in ids]
