"""Source code helper utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Iterable

SKIPPED_DIRS = {"node_modules", "lib", "dist", "temp", ".git"}


def iter_code_files(root_paths: Iterable[Path], extensions: tuple[str, ...] = (".ts",)) -> Generator[Path, None, None]:
    """Yield code files beneath the provided directories, skipping build output."""

    for root in root_paths:
        if not root.is_dir():
            continue
        for path in sorted(root.rglob("*")):
            if SKIPPED_DIRS.intersection(path.relative_to(root).parts):
                continue
            if path.name.endswith(extensions) and path.is_file():
                yield path
