"""Version-keyed rule set tables."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar

from .errors import UnsupportedVersion, VersionUndetectable

RuleT = TypeVar("RuleT")

_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)")


def version_key(version: str) -> Tuple[int, int, int]:
    """Return a sortable key for a ``major.minor.patch`` version string."""

    match = _VERSION_PATTERN.match(version)
    if not match:
        raise ValueError(f"Not a semantic version: {version}")
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


class RuleSetRegistry(Generic[RuleT]):
    """Immutable mapping of exact version strings to ordered rule tuples."""

    def __init__(self, rule_sets: Mapping[str, Sequence[RuleT]], action: str = "analyzing") -> None:
        ordered = sorted(rule_sets.items(), key=lambda item: version_key(item[0]))
        self._rule_sets: Mapping[str, Tuple[RuleT, ...]] = MappingProxyType(
            {version: tuple(rules) for version, rules in ordered}
        )
        self.action = action

    @property
    def supported_versions(self) -> Tuple[str, ...]:
        return tuple(self._rule_sets)

    @property
    def latest(self) -> str:
        return self.supported_versions[-1]

    def __contains__(self, version: object) -> bool:
        return version in self._rule_sets

    def ensure_supported(self, version: Optional[str]) -> str:
        if not version:
            raise VersionUndetectable()
        if version not in self._rule_sets:
            raise UnsupportedVersion(version, self.supported_versions, self.action)
        return version

    def lookup(self, version: Optional[str]) -> Tuple[RuleT, ...]:
        """Return the rules registered for exactly ``version``."""

        return self._rule_sets[self.ensure_supported(version)]

    def versions_between(self, from_version: str, to_version: str) -> List[str]:
        """Return registered versions in ``(from_version, to_version]``, ascending."""

        lower = version_key(from_version)
        upper = version_key(self.ensure_supported(to_version))
        return [version for version in self._rule_sets if lower < version_key(version) <= upper]
