"""Error taxonomy for project analysis."""

from __future__ import annotations

from typing import Iterable


class SpfxCheckError(Exception):
    """Base error carrying the numeric code reported by the CLI."""

    code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProjectNotFound(SpfxCheckError):
    code = 1

    def __init__(self, start_path: str = "") -> None:
        detail = f" from {start_path}" if start_path else ""
        super().__init__(f"Couldn't find project root folder{detail}")


class UnsupportedVersion(SpfxCheckError):
    code = 2

    def __init__(self, version: str, supported: Iterable[str], action: str = "analyzing") -> None:
        self.version = version
        self.supported = tuple(supported)
        super().__init__(
            f"spfx-check doesn't support {action} SharePoint Framework projects of version {version}. "
            f"Supported versions are {', '.join(self.supported)}"
        )


class VersionUndetectable(SpfxCheckError):
    code = 3

    def __init__(self) -> None:
        super().__init__("Unable to determine the version of the current SharePoint Framework project")


class RuleExecutionFailure(SpfxCheckError):
    """An asynchronous rule failed; the original message is kept verbatim."""

    code = 4


class ConfigError(SpfxCheckError):
    code = 5


class DowngradeNotSupported(SpfxCheckError):
    code = 6

    def __init__(self, from_version: str, to_version: str) -> None:
        super().__init__(f"You cannot downgrade a project from {from_version} to {to_version}")
