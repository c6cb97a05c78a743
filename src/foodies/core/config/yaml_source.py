"""YAML settings source layered by APP_ENV."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge override into base dict.

    Args:
        base: Base dictionary to merge into.
        override: Dictionary with values to override.

    Returns:
        New dictionary with merged values.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_directory(directory: Path) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    if not directory.is_dir():
        return merged
    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            merged = deep_merge(merged, yaml.safe_load(f) or {})
    return merged


def load_yaml_config(config_dir: Path, app_env: str) -> dict[str, Any]:
    """Read config/base/*.yaml, then overlay config/environments/{app_env}/*.yaml.

    Args:
        config_dir: Directory holding the ``base`` and ``environments`` folders.
        app_env: Name of the environment folder to overlay.

    Returns:
        The merged configuration mapping.
    """
    return deep_merge(
        _read_directory(config_dir / "base"),
        _read_directory(config_dir / "environments" / app_env),
    )


def default_config_dir() -> Path:
    """Locate the config directory.

    ``FOODIES_CONFIG_DIR`` wins when set; otherwise the ``config`` folder at the
    project root (src/foodies/core/config/yaml_source.py -> project root).
    """
    override = os.getenv("FOODIES_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[4] / "config"


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the layered YAML files."""

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_data = load_yaml_config(
            default_config_dir(),
            os.getenv("APP_ENV", "development"),
        )

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Get the value for a specific field from YAML data."""
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        return self._yaml_data
