"""Externalize rule set shared by every supported SharePoint Framework version."""

from __future__ import annotations

from typing import List

from spfxcheck.registry import RuleSetRegistry
from spfxcheck.rules import ExternalizeRule
from spfxcheck.rules.externalize import UNPKG, KnownPackageRule, PnPJsRule, UmdManifestRule

from . import SUPPORTED_VERSIONS


def default_rules(cdn_base_url: str = UNPKG) -> List[ExternalizeRule]:
    """Known CDN bundles first so they win over manifest-derived entries."""

    return [
        KnownPackageRule("jquery", "dist/jquery.min.js", global_name="jQuery", cdn_base_url=cdn_base_url),
        KnownPackageRule("moment", "min/moment.min.js", cdn_base_url=cdn_base_url),
        KnownPackageRule("lodash", "lodash.min.js", global_name="_", cdn_base_url=cdn_base_url),
        KnownPackageRule("angular", "angular.min.js", global_name="angular", cdn_base_url=cdn_base_url),
        KnownPackageRule("axios", "dist/axios.min.js", global_name="axios", cdn_base_url=cdn_base_url),
        KnownPackageRule("chart.js", "dist/Chart.min.js", global_name="Chart", cdn_base_url=cdn_base_url),
        KnownPackageRule("handlebars", "dist/handlebars.min.js", global_name="Handlebars", cdn_base_url=cdn_base_url),
        KnownPackageRule("sp-pnp-js", "dist/pnp.min.js", global_name="$pnp", cdn_base_url=cdn_base_url),
        PnPJsRule(cdn_base_url=cdn_base_url),
        UmdManifestRule(cdn_base_url=cdn_base_url),
    ]


def externalize_registry(cdn_base_url: str = UNPKG) -> RuleSetRegistry[ExternalizeRule]:
    rules = tuple(default_rules(cdn_base_url))
    return RuleSetRegistry({version: rules for version in SUPPORTED_VERSIONS}, action="externalizing dependencies of")
