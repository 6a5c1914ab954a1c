"""Rule engine for SharePoint Framework upgrade and externalize reports."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("spfx-check")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = ["__version__"]
