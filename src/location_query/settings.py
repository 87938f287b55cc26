"""
Settings Management Module

Provides pydantic-based process-wide defaults for query updates with:
- YAML configuration file loading (``location_query:`` section)
- Environment variable overrides (``LOCATION_QUERY_*``)
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import QueryConfigNotFoundError, QueryConfigValidationError
from .types import CollisionPolicy


DEFAULT_CONFIG_FILENAME = "location_query.yaml"
CONFIG_SECTION = "location_query"


class QuerySettings(BaseSettings):
    """
    Default options applied when a caller passes no explicit options.

    Configuration hierarchy (lowest to highest precedence):
    1. Field defaults
    2. YAML file, ``location_query:`` section
    3. Environment variables (LOCATION_QUERY_*)

    Examples:
        >>> settings = QuerySettings()
        >>> settings.is_save_old
        True

        Environment override:
        $ export LOCATION_QUERY_IS_SAVE_HASH=false
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCATION_QUERY_",
        case_sensitive=False,
        extra="ignore",
    )

    is_save_old: bool = True
    is_save_hash: bool = True
    is_save_empty_fields: bool = False
    collision_policy: CollisionPolicy = CollisionPolicy.KEEP_NEW

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment wins over values loaded from YAML (passed as init kwargs)
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def load_from_yaml(cls, config_path: Path | None = None) -> "QuerySettings":
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to config file. When omitted, ``location_query.yaml``
                in the working directory is used if present.

        Returns:
            QuerySettings instance

        Raises:
            QueryConfigNotFoundError: An explicit config_path does not exist
            QueryConfigValidationError: The file or a value in it is invalid
        """
        if config_path is None:
            config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
            if not config_path.exists():
                return cls._build({})
        elif not config_path.exists():
            raise QueryConfigNotFoundError(
                "Settings file not found", config_path=str(config_path)
            )

        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise QueryConfigValidationError(
                f"Invalid YAML in settings file: {e}",
                context={"config_path": str(config_path)},
            ) from e

        if not isinstance(config_data, dict):
            raise QueryConfigValidationError(
                "Settings file must contain a mapping",
                context={"config_path": str(config_path)},
            )

        section = config_data.get(CONFIG_SECTION) or {}
        if not isinstance(section, dict):
            raise QueryConfigValidationError(
                f"'{CONFIG_SECTION}' section must be a mapping",
                config_key=CONFIG_SECTION,
                config_value=section,
            )
        return cls._build(section)

    @classmethod
    def _build(cls, values: dict[str, Any]) -> "QuerySettings":
        try:
            return cls(**values)
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first.get("loc", ()))
            raise QueryConfigValidationError(
                f"Invalid settings value: {first.get('msg')}",
                config_key=key or None,
                config_value=first.get("input"),
            ) from e


@lru_cache
def get_settings(config_path: Path | None = None) -> QuerySettings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to config file

    Returns:
        QuerySettings instance
    """
    return QuerySettings.load_from_yaml(config_path)


def reload_settings() -> QuerySettings:
    """Reload settings by clearing cache."""
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "QuerySettings",
    "get_settings",
    "reload_settings",
]
