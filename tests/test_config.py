import pytest

from spfxcheck.config import CONFIG_FILENAME, Settings, load_settings
from spfxcheck.errors import ConfigError


def test_defaults_without_config_file(tmp_path):
    assert load_settings(project_root=tmp_path) == Settings()


def test_project_config_file_is_loaded(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text(
        "output: md\npackage_manager: pnpm\nsuppress:\n  - fn017001\n",
        encoding="utf-8",
    )

    settings = load_settings(project_root=tmp_path)

    assert settings.output == "md"
    assert settings.package_manager == "pnpm"
    assert settings.suppress == ("FN017001",)


def test_cli_overrides_win_over_file_values(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text("output: md\n", encoding="utf-8")

    settings = load_settings(project_root=tmp_path).merged(output="json", package_manager=None)

    assert settings.output == "json"
    assert settings.package_manager == "npm"


def test_explicit_config_must_exist(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(config_path=tmp_path / "missing.yaml")


def test_unknown_settings_are_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("outptu: md\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="outptu"):
        load_settings(config_path=path)


def test_invalid_values_are_rejected():
    with pytest.raises(ConfigError):
        Settings(output="html")
    with pytest.raises(ConfigError):
        Settings(package_manager="bun")
