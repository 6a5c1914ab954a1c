"""Rules proposing CDN externals for bundled dependencies."""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from spfxcheck.model import ProjectModel, SourceFile
from spfxcheck.result import ExternalizeEntry, FileEdit

from . import PackageResolver, RuleOutcome, SnapshotResolver

UNPKG = "https://unpkg.com"
EXACT_VERSION = re.compile(r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?$")
RANGE_PREFIX = re.compile(r"^[\^~=v\s]+")
PLATFORM_PREFIXES = ("@microsoft/", "@types/")
PLATFORM_PACKAGES = {"react", "react-dom", "tslib"}
PNP_BUNDLE = "@pnp/pnpjs"
PNP_PACKAGES = ("common", "logging", "config-store", "odata", "graph", "sp", "sp-clientsvc", "sp-taxonomy")

ResolverFactory = Callable[[ProjectModel], PackageResolver]


def concrete_version(declared: Optional[str]) -> Optional[str]:
    """Return the exact version of a declared dependency, if one is implied."""

    if not declared:
        return None
    candidate = RANGE_PREFIX.sub("", declared.strip())
    return candidate if EXACT_VERSION.match(candidate) else None


async def resolve_version(resolver: PackageResolver, package: str, declared: Optional[str]) -> Optional[str]:
    """Prefer the installed version, fall back to an exact declared one."""

    manifest = await resolver.manifest(package)
    return installed_version(manifest) or concrete_version(declared)


def installed_version(manifest: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not manifest:
        return None
    return concrete_version(str(manifest.get("version", "")))


def cdn_url(base_url: str, package: str, version: str, bundle_path: str) -> str:
    return f"{base_url.rstrip('/')}/{package}@{version}/{bundle_path.removeprefix('./').lstrip('/')}"


class KnownPackageRule:
    """Externalize a dependency whose CDN bundle location is known upfront."""

    def __init__(
        self,
        package: str,
        bundle_path: str,
        global_name: Optional[str] = None,
        global_dependencies: Sequence[str] = (),
        cdn_base_url: str = UNPKG,
        resolver_factory: ResolverFactory = SnapshotResolver,
    ) -> None:
        self.name = package
        self.package = package
        self.bundle_path = bundle_path
        self.global_name = global_name
        self.global_dependencies = tuple(global_dependencies)
        self.cdn_base_url = cdn_base_url
        self._resolver_factory = resolver_factory

    async def visit(self, project: ProjectModel) -> RuleOutcome:
        declared = project.package_json.version_of(self.package)
        if declared is None:
            return RuleOutcome()
        version = await resolve_version(self._resolver_factory(project), self.package, declared)
        if version is None:
            return RuleOutcome()
        entry = ExternalizeEntry(
            key=self.package,
            path=cdn_url(self.cdn_base_url, self.package, version, self.bundle_path),
            global_name=self.global_name,
            global_dependencies=self.global_dependencies,
        )
        return RuleOutcome(entries=(entry,))


class PnPJsRule:
    """Externalize PnPjs, either as the all-in-one bundle or per package.

    When the bundle is used, imports from the individual ``@pnp/*`` packages
    have to point at the bundle instead, so edits are suggested for them.
    """

    name = "pnpjs"
    _import_pattern = re.compile(
        r"^\s*import\s+(?P<names>\{[^}]*\}|[^\s{][^\n]*?)\s+from\s+['\"](?P<module>@pnp/[a-z-]+)['\"];?\s*$",
        re.MULTILINE,
    )

    def __init__(self, cdn_base_url: str = UNPKG, resolver_factory: ResolverFactory = SnapshotResolver) -> None:
        self.cdn_base_url = cdn_base_url
        self._resolver_factory = resolver_factory

    async def visit(self, project: ProjectModel) -> RuleOutcome:
        resolver = self._resolver_factory(project)
        dependencies = project.package_json.dependencies
        if PNP_BUNDLE in dependencies:
            version = await resolve_version(resolver, PNP_BUNDLE, dependencies[PNP_BUNDLE])
            if version is None:
                return RuleOutcome()
            entry = ExternalizeEntry(
                key=PNP_BUNDLE,
                path=cdn_url(self.cdn_base_url, PNP_BUNDLE, version, "dist/pnpjs.es5.umd.bundle.min.js"),
                global_name="pnp",
            )
            return RuleOutcome(entries=(entry,), suggestions=tuple(self._bundle_edits(project.ts_files)))

        entries: List[ExternalizeEntry] = []
        loaded: List[str] = []
        for short_name in PNP_PACKAGES:
            package = f"@pnp/{short_name}"
            if package not in dependencies:
                continue
            version = await resolve_version(resolver, package, dependencies[package])
            if version is None:
                continue
            entries.append(
                ExternalizeEntry(
                    key=package,
                    path=cdn_url(self.cdn_base_url, package, version, f"dist/{short_name}.es5.umd.min.js"),
                    global_name=f"pnp.{short_name.replace('-', '')}",
                    global_dependencies=tuple(loaded),
                )
            )
            loaded.append(package)
        return RuleOutcome(entries=tuple(entries))

    def _bundle_edits(self, sources: Iterable[SourceFile]) -> Iterable[FileEdit]:
        for source in sources:
            for match in self._import_pattern.finditer(source.source):
                if match.group("module") == PNP_BUNDLE:
                    continue
                names = match.group("names")
                yield FileEdit(path=source.path, action="remove", target_value=match.group(0).strip())
                yield FileEdit(path=source.path, action="add", target_value=f'import {names} from "{PNP_BUNDLE}";')


class UmdManifestRule:
    """Externalize any other dependency that ships a CDN-ready UMD bundle.

    The bundle location is taken from the ``unpkg`` or ``jsdelivr`` field of
    the installed package's manifest.
    """

    name = "umd-manifest"
    bundle_fields: Tuple[str, ...] = ("unpkg", "jsdelivr")

    def __init__(self, cdn_base_url: str = UNPKG, resolver_factory: ResolverFactory = SnapshotResolver) -> None:
        self.cdn_base_url = cdn_base_url
        self._resolver_factory = resolver_factory

    async def visit(self, project: ProjectModel) -> RuleOutcome:
        resolver = self._resolver_factory(project)
        entries: List[ExternalizeEntry] = []
        for package, declared in project.package_json.dependencies.items():
            if package in PLATFORM_PACKAGES or package.startswith(PLATFORM_PREFIXES):
                continue
            manifest = await resolver.manifest(package)
            if not manifest:
                continue
            bundle = next(
                (manifest[field] for field in self.bundle_fields if isinstance(manifest.get(field), str)),
                None,
            )
            if not bundle or not bundle.endswith(".js"):
                continue
            version = installed_version(manifest) or concrete_version(declared)
            if version is None:
                continue
            entries.append(ExternalizeEntry(key=package, path=cdn_url(self.cdn_base_url, package, version, bundle)))
        return RuleOutcome(entries=tuple(entries))
