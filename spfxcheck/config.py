"""Settings: defaults, optional ``.spfx-check.yaml`` and CLI overrides."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError
from .package_manager import PACKAGE_MANAGERS
from .rules.externalize import UNPKG
from .utils.fileio import read_yaml_file

CONFIG_FILENAME = ".spfx-check.yaml"
OUTPUT_MODES = ("text", "json", "md")


@dataclass(frozen=True)
class Settings:
    output: str = "text"
    package_manager: str = "npm"
    suppress: Tuple[str, ...] = ()
    cdn_base_url: str = UNPKG

    def __post_init__(self) -> None:
        if self.output not in OUTPUT_MODES:
            raise ConfigError(f"Unsupported output mode: {self.output}. Use one of {', '.join(OUTPUT_MODES)}")
        if self.package_manager not in PACKAGE_MANAGERS:
            raise ConfigError(
                f"Unsupported package manager: {self.package_manager}. "
                f"Use one of {', '.join(PACKAGE_MANAGERS)}"
            )

    def merged(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""

        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def _coerce(data: Dict[str, Any], source: Path) -> Dict[str, Any]:
    known = {item.name for item in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown setting(s) in {source}: {', '.join(unknown)}")
    values = dict(data)
    suppress = values.get("suppress")
    if suppress is not None:
        if isinstance(suppress, str):
            suppress = [suppress]
        if not isinstance(suppress, (list, tuple)):
            raise ConfigError(f"'suppress' in {source} must be a list of rule ids")
        values["suppress"] = tuple(str(rule_id).upper() for rule_id in suppress)
    return values


def load_settings(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> Settings:
    """Load settings from ``config_path`` or the project's ``.spfx-check.yaml``.

    An explicitly requested file must exist; the implicit project file is
    optional.
    """

    path = config_path
    if path is None and project_root is not None:
        path = project_root / CONFIG_FILENAME
    if path is None:
        return Settings()
    if config_path is not None and not path.exists():
        raise ConfigError(f"Configuration file {path} doesn't exist")
    try:
        data = read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid configuration file {path}: {exc}") from exc
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return Settings(**_coerce(data, path))
