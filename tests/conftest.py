"""Shared builders for spfx-check tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from spfxcheck.model import PackageManifest, ProjectModel

REACT_YO_RC = {"@microsoft/generator-sharepoint": {"framework": "react", "version": "1.8.2"}}


def make_project(
    version: Optional[str] = "1.8.2",
    dependencies: Optional[Dict[str, str]] = None,
    dev_dependencies: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> ProjectModel:
    return ProjectModel(
        path="/usr/tmp/project",
        version=version,
        package_json=PackageManifest(
            name="spfx-solution",
            dependencies=dependencies or {},
            dev_dependencies=dev_dependencies or {},
        ),
        **kwargs,
    )


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A minimal React web part project on disk, scaffolded with SPFx 1.8.2."""

    root = tmp_path / "hello-world"
    write_json(root / ".yo-rc.json", REACT_YO_RC)
    write_json(
        root / "package.json",
        {
            "name": "hello-world",
            "dependencies": {
                "@microsoft/sp-core-library": "1.8.2",
                "@microsoft/sp-webpart-base": "1.8.2",
                "react": "16.7.0",
                "jquery": "^3.4.1",
            },
            "devDependencies": {"@microsoft/sp-build-web": "1.8.2"},
        },
    )
    write_json(root / "config" / "config.json", {"version": "2.0"})
    scss = root / "src" / "webparts" / "helloWorld" / "components" / "HelloWorld.module.scss"
    scss.parent.mkdir(parents=True, exist_ok=True)
    scss.write_text(".helloWorld { color: red; }\n", encoding="utf-8")
    return root
