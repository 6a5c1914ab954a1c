"""Upgrade rule sets, keyed by the SharePoint Framework version upgraded to."""

from __future__ import annotations

from typing import List, Optional

from spfxcheck.registry import RuleSetRegistry, version_key
from spfxcheck.rules import UpgradeRule
from spfxcheck.rules.config import (
    JsonPropertyRule,
    LaunchJsonRule,
    ManifestSchemaRule,
    VsCodeExtensionsRule,
    schema_rule,
    yo_rc_version,
)
from spfxcheck.rules.dependency import dependency, dev_dependency, removed_dependency
from spfxcheck.rules.files import NpmDedupeRule, RemoveFileRule
from spfxcheck.rules.scss import ScssAddImportRule, ScssRemoveImportRule

SPFX_BUILD_SCHEMAS = "https://developer.microsoft.com/json-schemas/spfx-build"
WEB_PART_MANIFEST_SCHEMA = "https://developer.microsoft.com/json-schemas/spfx/client-side-web-part-manifest.schema.json"
EXTENSION_MANIFEST_SCHEMA = "https://developer.microsoft.com/json-schemas/spfx/client-side-extension-manifest.schema.json"
FABRIC_CORE_SCSS = "~@microsoft/sp-office-ui-fabric-core/dist/sass/SPFabricCore.scss"
FABRIC_REACT_SCSS = "~office-ui-fabric-react/dist/sass/References.scss"


def _at_least(version: str, minimum: str) -> bool:
    return version_key(version) >= version_key(minimum)


def _spfx_packages(version: str) -> List[UpgradeRule]:
    """Framework packages that always move in lockstep with the release."""

    rules: List[UpgradeRule] = [
        dependency("FN001001", "@microsoft/sp-core-library", version),
        dependency("FN001002", "@microsoft/sp-lodash-subset", version),
        dependency("FN001003", "@microsoft/sp-office-ui-fabric-core", version),
        dependency("FN001004", "@microsoft/sp-webpart-base", version),
    ]
    if _at_least(version, "1.1.0"):
        rules += [
            dependency("FN001011", "@microsoft/sp-dialog", version, optional=True),
            dependency("FN001012", "@microsoft/sp-application-base", version, optional=True),
            dependency("FN001013", "@microsoft/decorators", version, optional=True),
            dependency("FN001014", "@microsoft/sp-listview-extensibility", version, optional=True),
            dependency("FN001023", "@microsoft/sp-component-base", version, optional=True),
            dependency("FN001026", "@microsoft/sp-extension-base", version, optional=True),
            dependency("FN001027", "@microsoft/sp-http", version, optional=True),
            dependency("FN001029", "@microsoft/sp-loader", version, optional=True),
            dependency("FN001030", "@microsoft/sp-module-interfaces", version, optional=True),
            dependency("FN001031", "@microsoft/sp-odata-types", version, optional=True),
        ]
    if _at_least(version, "1.8.0"):
        rules.append(dependency("FN001021", "@microsoft/sp-property-pane", version))
    rules += [
        dev_dependency("FN002001", "@microsoft/sp-build-web", version),
        dev_dependency("FN002002", "@microsoft/sp-module-interfaces", version),
        dev_dependency("FN002003", "@microsoft/sp-webpart-workbench", version),
    ]
    return rules


def _react_packages(react: str, types_react: str, fabric: Optional[str] = None) -> List[UpgradeRule]:
    rules: List[UpgradeRule] = [
        dependency("FN001008", "react", react, optional=True),
        dependency("FN001009", "react-dom", react, optional=True),
        dependency("FN001005", "@types/react", types_react, optional=True),
        dependency("FN001006", "@types/react-dom", types_react, optional=True),
    ]
    if fabric:
        rules.append(dependency("FN001022", "office-ui-fabric-react", fabric, optional=True))
    return rules


def _config_schemas() -> List[UpgradeRule]:
    return [
        schema_rule("FN003001", "config/config.json", f"{SPFX_BUILD_SCHEMAS}/config.2.0.schema.json"),
        JsonPropertyRule("FN003002", "config/config.json", ("version",), "2.0", title="config.json version"),
        schema_rule("FN004001", "config/copy-assets.json", f"{SPFX_BUILD_SCHEMAS}/copy-assets.schema.json"),
        schema_rule(
            "FN005001", "config/deploy-azure-storage.json", f"{SPFX_BUILD_SCHEMAS}/deploy-azure-storage.schema.json"
        ),
        schema_rule("FN006001", "config/package-solution.json", f"{SPFX_BUILD_SCHEMAS}/package-solution.schema.json"),
        schema_rule("FN007001", "config/serve.json", f"{SPFX_BUILD_SCHEMAS}/serve.schema.json"),
        schema_rule("FN009001", "config/write-manifests.json", f"{SPFX_BUILD_SCHEMAS}/write-manifests.schema.json"),
    ]


def _tooling(version: str) -> List[UpgradeRule]:
    """Rules that apply to every release from 1.3.0 onwards."""

    return [
        dev_dependency("FN002007", "ajv", "5.2.2"),
        yo_rc_version(version),
        VsCodeExtensionsRule(),
        LaunchJsonRule(),
    ]


def _basic(version: str) -> List[UpgradeRule]:
    return _spfx_packages(version) + [yo_rc_version(version)]


def upgrade_1_3(version: str) -> List[UpgradeRule]:
    return _spfx_packages(version) + _tooling(version)


def upgrade_1_4(version: str) -> List[UpgradeRule]:
    return (
        _spfx_packages(version)
        + _react_packages("15.6.2", "15.6.6")
        + _tooling(version)
        + _config_schemas()
        + [
            dev_dependency("FN002008", "tslint-microsoft-contrib", "5.0.0", optional=True),
            JsonPropertyRule(
                "FN006002",
                "config/package-solution.json",
                ("solution", "includeClientSideAssets"),
                True,
                title="package-solution.json includeClientSideAssets",
                description="Update package-solution.json includeClientSideAssets",
            ),
            ManifestSchemaRule("FN011001", "WebPart", WEB_PART_MANIFEST_SCHEMA),
            ManifestSchemaRule("FN011002", "Extension", EXTENSION_MANIFEST_SCHEMA),
            NpmDedupeRule(),
        ]
    )


def upgrade_1_7(version: str) -> List[UpgradeRule]:
    return (
        _spfx_packages(version)
        + _react_packages("16.3.2", "16.4.2", fabric="5.131.0")
        + _tooling(version)
        + _config_schemas()
        + [
            dev_dependency("FN002010", "@microsoft/rush-stack-compiler-2.7", "0.4.0"),
            removed_dependency("FN002013", "typescript", dev=True),
            JsonPropertyRule(
                "FN012017",
                "tsconfig.json",
                ("extends",),
                "./node_modules/@microsoft/rush-stack-compiler-2.7/includes/tsconfig-web.json",
                title="tsconfig.json extends property",
                description="Update tsconfig.json extends property",
            ),
            RemoveFileRule("FN015003", "config/tslint.json", "Remove file config/tslint.json, rules move to tslint.json"),
            ManifestSchemaRule("FN011001", "WebPart", WEB_PART_MANIFEST_SCHEMA),
            ManifestSchemaRule("FN011002", "Extension", EXTENSION_MANIFEST_SCHEMA),
            NpmDedupeRule(),
        ]
    )


def upgrade_1_8(version: str, compiler: str = "2.9", fabric: str = "6.143.0", react: str = "16.7.0") -> List[UpgradeRule]:
    return (
        _spfx_packages(version)
        + _react_packages(react, "16.4.2", fabric=fabric)
        + _tooling(version)
        + _config_schemas()
        + [
            dev_dependency("FN002009", "@microsoft/sp-tslint-rules", version),
            dev_dependency("FN002011", f"@microsoft/rush-stack-compiler-{compiler}", "0.7.7"),
            removed_dependency("FN002012", "@microsoft/rush-stack-compiler-2.7", dev=True),
            JsonPropertyRule(
                "FN012017",
                "tsconfig.json",
                ("extends",),
                f"./node_modules/@microsoft/rush-stack-compiler-{compiler}/includes/tsconfig-web.json",
                title="tsconfig.json extends property",
                description="Update tsconfig.json extends property",
            ),
            JsonPropertyRule(
                "FN012018",
                "tsconfig.json",
                ("compilerOptions", "module"),
                "esnext",
                title="tsconfig.json module",
                description="Update module type in tsconfig.json",
            ),
            JsonPropertyRule(
                "FN012019",
                "tsconfig.json",
                ("compilerOptions", "moduleResolution"),
                "node",
                title="tsconfig.json moduleResolution",
                description="Update moduleResolution in tsconfig.json",
            ),
            ManifestSchemaRule("FN011001", "WebPart", WEB_PART_MANIFEST_SCHEMA),
            ManifestSchemaRule("FN011002", "Extension", EXTENSION_MANIFEST_SCHEMA),
            ScssRemoveImportRule(FABRIC_CORE_SCSS),
            ScssAddImportRule(FABRIC_REACT_SCSS),
            NpmDedupeRule(),
        ]
    )


def upgrade_1_9(version: str) -> List[UpgradeRule]:
    return upgrade_1_8(version, fabric="6.189.2", react="16.8.5") + [
        removed_dependency("FN001010", "@types/es6-promise"),
    ]


UPGRADE_RULE_SETS = {
    "1.0.1": _basic("1.0.1"),
    "1.0.2": _basic("1.0.2"),
    "1.1.0": _basic("1.1.0"),
    "1.1.1": _basic("1.1.1"),
    "1.1.3": _basic("1.1.3"),
    "1.2.0": _basic("1.2.0"),
    "1.3.0": upgrade_1_3("1.3.0"),
    "1.3.1": upgrade_1_3("1.3.1"),
    "1.3.2": upgrade_1_3("1.3.2"),
    "1.3.4": upgrade_1_3("1.3.4"),
    "1.4.0": upgrade_1_4("1.4.0"),
    "1.4.1": upgrade_1_4("1.4.1"),
    "1.5.0": upgrade_1_4("1.5.0"),
    "1.5.1": upgrade_1_4("1.5.1"),
    "1.6.0": upgrade_1_4("1.6.0"),
    "1.7.0": upgrade_1_7("1.7.0"),
    "1.7.1": upgrade_1_7("1.7.1"),
    "1.8.0": upgrade_1_8("1.8.0"),
    "1.8.1": upgrade_1_8("1.8.1"),
    "1.8.2": upgrade_1_8("1.8.2"),
    "1.9.1": upgrade_1_9("1.9.1"),
}


def upgrade_registry() -> RuleSetRegistry[UpgradeRule]:
    return RuleSetRegistry(UPGRADE_RULE_SETS, action="upgrading")
