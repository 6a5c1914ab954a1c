"""Rule set tables for the supported SharePoint Framework releases."""

from __future__ import annotations

SUPPORTED_VERSIONS = (
    "1.0.0",
    "1.0.1",
    "1.0.2",
    "1.1.0",
    "1.1.1",
    "1.1.3",
    "1.2.0",
    "1.3.0",
    "1.3.1",
    "1.3.2",
    "1.3.4",
    "1.4.0",
    "1.4.1",
    "1.5.0",
    "1.5.1",
    "1.6.0",
    "1.7.0",
    "1.7.1",
    "1.8.0",
    "1.8.1",
    "1.8.2",
    "1.9.1",
)
