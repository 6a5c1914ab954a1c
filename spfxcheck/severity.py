"""Severity definitions for upgrade findings."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Enumerate how strongly a finding should be acted upon."""

    REQUIRED = "Required"
    RECOMMENDED = "Recommended"
    OPTIONAL = "Optional"

    @property
    def rank(self) -> int:
        """Return an integer ranking used to order summaries."""

        ordering = {
            Severity.REQUIRED: 0,
            Severity.RECOMMENDED: 1,
            Severity.OPTIONAL: 2,
        }
        return ordering[self]
