"""Build a :class:`ProjectModel` snapshot from an SPFx project on disk."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

from spfxcheck.errors import ProjectNotFound
from spfxcheck.model import ManifestFile, PackageManifest, ProjectModel, SourceFile

from .code import iter_code_files
from .fileio import read_json_file, read_text_file

logger = logging.getLogger(__name__)

PROJECT_MARKER = ".yo-rc.json"
PACKAGE_MARKER = "package.json"
GENERATOR_KEY = "@microsoft/generator-sharepoint"
CORE_LIBRARY = "@microsoft/sp-core-library"
SOURCE_DIR = "src"
CONFIG_DOCUMENTS = (
    "tsconfig.json",
    "tslint.json",
    "config/config.json",
    "config/copy-assets.json",
    "config/deploy-azure-storage.json",
    "config/package-solution.json",
    "config/serve.json",
    "config/tslint.json",
    "config/write-manifests.json",
    ".vscode/extensions.json",
    ".vscode/launch.json",
    ".vscode/settings.json",
)
_SEMVER = re.compile(r"(\d+\.\d+\.\d+)")


def find_project_root(start: Path) -> Path:
    """Walk up from ``start`` to the project folder.

    The nearest ``.yo-rc.json`` wins; without one anywhere up the tree the
    nearest ``package.json`` marks the root.
    """

    current = start.resolve()
    folders = (current, *current.parents)
    for marker in (PROJECT_MARKER, PACKAGE_MARKER):
        for candidate in folders:
            if (candidate / marker).is_file():
                return candidate
    raise ProjectNotFound(str(start))


def detect_version(yo_rc: Dict[str, Any], package_json: PackageManifest) -> Optional[str]:
    """Return the SPFx version from ``.yo-rc.json``, or the core library version."""

    settings = yo_rc.get(GENERATOR_KEY) or {}
    for candidate in (settings.get("version"), package_json.version_of(CORE_LIBRARY)):
        if not candidate:
            continue
        match = _SEMVER.search(str(candidate))
        if match:
            return match.group(1)
    return None


def _relative(root: Path, path: Path) -> str:
    return path.relative_to(root).as_posix()


def load_project(root: Path) -> ProjectModel:
    """Read everything the rules need. Nothing is written."""

    root = root.resolve()
    package_data = read_json_file(root / PACKAGE_MARKER) or {}
    package_json = PackageManifest.from_dict(package_data)
    yo_rc = read_json_file(root / PROJECT_MARKER) or {}

    documents: Dict[str, Any] = {}
    for relative_path in CONFIG_DOCUMENTS:
        document = read_json_file(root / relative_path)
        if document is not None:
            documents[relative_path] = document

    source_root = root / SOURCE_DIR
    scss_files = [
        SourceFile(_relative(root, path), read_text_file(path)) for path in iter_code_files([source_root], (".scss",))
    ]
    ts_files = [
        SourceFile(_relative(root, path), read_text_file(path))
        for path in iter_code_files([source_root], (".ts", ".tsx"))
    ]
    manifests = [
        ManifestFile(_relative(root, path), read_json_file(path) or {})
        for path in iter_code_files([source_root], (".manifest.json",))
    ]

    files = {_relative(root, path) for path in root.iterdir() if path.is_file()}
    for folder in ("config", ".vscode"):
        if (root / folder).is_dir():
            files.update(_relative(root, path) for path in (root / folder).iterdir() if path.is_file())

    installed: Dict[str, Any] = {}
    for package in (*package_json.dependencies, *package_json.dev_dependencies):
        manifest = read_json_file(root / "node_modules" / package / "package.json")
        if manifest is not None:
            installed[package] = manifest

    project = ProjectModel(
        path=str(root),
        version=detect_version(yo_rc, package_json),
        package_json=package_json,
        yo_rc_json=yo_rc,
        documents=documents,
        scss_files=tuple(scss_files),
        ts_files=tuple(ts_files),
        manifests=tuple(manifests),
        files=frozenset(files),
        installed_packages=installed,
    )
    logger.info(
        "Collected project %s (version %s): %d scss, %d ts, %d manifest file(s)",
        root.name,
        project.version,
        len(scss_files),
        len(ts_files),
        len(manifests),
    )
    return project
