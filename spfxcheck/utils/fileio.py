"""Basic file IO helpers."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml

# SPFx config and manifest files are JSON with comments.
_JSON_COMMENTS = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)


def strip_json_comments(text: str) -> str:
    return _JSON_COMMENTS.sub(lambda match: match.group(1) or "", text)


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def read_json_file(path: Path) -> Any:
    """Return the parsed JSON (comments allowed) or ``None`` if missing or invalid."""

    text = read_text_file(path)
    if not text.strip():
        return None
    try:
        return json.loads(strip_json_comments(text))
    except json.JSONDecodeError:
        return None


def read_text_file(path: Path) -> str:
    """Return the file contents as UTF-8 text, or an empty string if missing."""

    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8-sig")
