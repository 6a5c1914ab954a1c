"""Utility helpers for loading projects from disk."""

from .fileio import read_json_file, read_text_file, read_yaml_file
from .code import iter_code_files
from .project import detect_version, find_project_root, load_project

__all__ = [
    "read_json_file",
    "read_text_file",
    "read_yaml_file",
    "iter_code_files",
    "detect_version",
    "find_project_root",
    "load_project",
]
