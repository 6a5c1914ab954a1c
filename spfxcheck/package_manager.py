"""Render package operation tokens for a concrete package manager."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List

from .result import Finding

PACKAGE_MANAGERS: Dict[str, Dict[str, str]] = {
    "npm": {
        "installDep": "npm i -SE",
        "installDevDep": "npm i -DE",
        "uninstallDep": "npm un -S",
        "uninstallDevDep": "npm un -D",
        "dedupe": "npm dedupe",
    },
    "pnpm": {
        "installDep": "pnpm i -E",
        "installDevDep": "pnpm i -DE",
        "uninstallDep": "pnpm un",
        "uninstallDevDep": "pnpm un",
        "dedupe": "pnpm dedupe",
    },
    "yarn": {
        "installDep": "yarn add -E",
        "installDevDep": "yarn add -DE",
        "uninstallDep": "yarn remove",
        "uninstallDevDep": "yarn remove",
        "dedupe": "yarn dedupe",
    },
}


def render_command(resolution: str, package_manager: str = "npm") -> str:
    """Replace the leading operation token of a ``cmd`` resolution."""

    commands = PACKAGE_MANAGERS.get(package_manager)
    if commands is None:
        raise ValueError(f"Unsupported package manager: {package_manager}")
    token, _, rest = resolution.partition(" ")
    if token not in commands:
        return resolution
    return f"{commands[token]} {rest}".strip()


def render_findings(findings: Iterable[Finding], package_manager: str = "npm") -> List[Finding]:
    """Return copies of ``findings`` whose command resolutions are rendered."""

    rendered: List[Finding] = []
    for finding in findings:
        if finding.resolution_type != "cmd":
            rendered.append(finding)
            continue
        occurrences = tuple(
            replace(occurrence, resolution=render_command(occurrence.resolution, package_manager))
            for occurrence in finding.occurrences
        )
        rendered.append(
            replace(
                finding,
                resolution=render_command(finding.resolution, package_manager),
                occurrences=occurrences,
            )
        )
    return rendered
