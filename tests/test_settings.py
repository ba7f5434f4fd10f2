"""Tests for loader settings and YAML settings files."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from commonjs_loader.settings import SETTINGS_ENV_VAR
from commonjs_loader.settings import LoaderSettings
from commonjs_loader.settings import load_settings
from commonjs_loader.settings import parse_override_options


def test_defaults():
    settings = LoaderSettings()
    assert settings.extensions == (".js", ".json")
    assert settings.manifest_name == "package.json"
    assert settings.manifest_fields == ("browser", "main")
    assert settings.default_entry == "index"
    assert settings.modules_directory == "node_modules"
    assert settings.native_extensions == (".node",)
    assert settings.builtin_overrides == {}
    assert settings.override_base_directory == "/"


def test_with_overrides_ignores_none():
    settings = LoaderSettings()
    assert settings.with_overrides(builtin_overrides=None) is settings
    updated = settings.with_overrides(override_base_directory="/app")
    assert updated.override_base_directory == "/app"
    assert settings.override_base_directory == "/"


def test_settings_are_frozen():
    with pytest.raises(ValidationError):
        LoaderSettings().default_entry = "main"


def test_load_settings_from_loader_section(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        dedent("""
            loader:
              extensions: [".js"]
              builtin_overrides:
                fs: ./shims/fs
              override_base_directory: /app
        """)
    )
    settings = load_settings(path)
    assert settings.extensions == (".js",)
    assert settings.builtin_overrides == {"fs": "./shims/fs"}
    assert settings.override_base_directory == "/app"


def test_load_settings_top_level(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("modules_directory: vendor\n")
    assert load_settings(path).modules_directory == "vendor"


def test_missing_file_gives_defaults(tmp_path: Path):
    assert load_settings(tmp_path / "nope.yaml") == LoaderSettings()


def test_env_var_points_at_settings(tmp_path: Path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text("default_entry: main\n")
    monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
    assert load_settings().default_entry == "main"


def test_no_file_and_no_env_gives_defaults(monkeypatch):
    monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
    assert load_settings() == LoaderSettings()


def test_non_mapping_file_rejected(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_settings(path)


def test_wrong_field_type_rejected(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("builtin_overrides: [1, 2]\n")
    with pytest.raises(ValidationError):
        load_settings(path)


def test_parse_override_options():
    assert parse_override_options(["fs=./shims/fs", "path=/lib/path.js"]) == {
        "fs": "./shims/fs",
        "path": "/lib/path.js",
    }


@pytest.mark.parametrize("value", ["fs", "=./x"])
def test_parse_override_options_invalid(value):
    with pytest.raises(ValueError, match="NAME=PATH"):
        parse_override_options([value])
