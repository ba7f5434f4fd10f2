"""Loader settings.

Settings come from code (LoaderSettings keyword arguments) or from a YAML
file. A settings file holds either a top-level ``loader:`` section or the
fields directly:

    loader:
      extensions: [".js", ".json"]
      builtin_overrides:
        fs: ./shims/fs.js
      override_base_directory: /app
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "CJS_LOADER_SETTINGS"


class LoaderSettings(BaseModel):
    """Resolution policy for a Loader instance."""

    model_config = ConfigDict(frozen=True)

    extensions: tuple[str, ...] = Field(
        default=(".js", ".json"), description="Extensions tried, in order, after the exact path"
    )
    json_extension: str = Field(default=".json", description="Extension parsed as structured data")
    native_extensions: tuple[str, ...] = Field(
        default=(".node",), description="Native binary extensions that are refused"
    )
    manifest_name: str = Field(default="package.json", description="Per-directory manifest file")
    manifest_fields: tuple[str, ...] = Field(
        default=("browser", "main"),
        description="Manifest fields naming the entry point, first string wins; 'browser' is the override field",
    )
    default_entry: str = Field(default="index", description="Entry fragment when no manifest field applies")
    modules_directory: str = Field(default="node_modules", description="Directory probed by ancestor search")
    builtin_overrides: dict[str, str] = Field(
        default_factory=dict, description="Bare specifier -> replacement path fragment"
    )
    override_base_directory: str = Field(
        default="/", description="Base directory for relative override fragments"
    )

    def with_overrides(self, **changes: Any) -> "LoaderSettings":
        """Return a copy with the non-None changes applied."""
        updates = {key: value for key, value in changes.items() if value is not None}
        if not updates:
            return self
        return self.model_copy(update=updates)


def _read_settings(path: Path) -> dict[str, Any]:
    """Read a YAML settings file.

    Returns:
        The settings mapping, empty if the file is missing or empty
    """
    if not path.exists():
        logger.debug(f"Settings file not found: {path}")
        return {}

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")

    section = data.get("loader", data)
    if not isinstance(section, dict):
        raise ValueError(f"'loader' section in {path} must be a mapping")
    return section


def load_settings(path: str | Path | None = None) -> LoaderSettings:
    """Load settings from a YAML file.

    Args:
        path: Settings file. Falls back to $CJS_LOADER_SETTINGS, then defaults.

    Returns:
        LoaderSettings instance

    Raises:
        ValueError: The file does not hold a mapping
        pydantic.ValidationError: A field has the wrong type
    """
    if path is None:
        env_path = os.environ.get(SETTINGS_ENV_VAR)
        if not env_path:
            return LoaderSettings()
        path = env_path

    settings = LoaderSettings(**_read_settings(Path(path)))
    logger.debug(f"Loaded settings from {path}")
    return settings


def parse_override_options(values: tuple[str, ...] | list[str]) -> dict[str, str]:
    """Parse ``NAME=PATH`` override options from the command line.

    Raises:
        ValueError: An option has no '=' or an empty name
    """
    overrides: dict[str, str] = {}
    for value in values:
        name, sep, target = value.partition("=")
        if not sep or not name:
            raise ValueError(f"Invalid override '{value}', expected NAME=PATH")
        overrides[name] = target
    return overrides
