"""
Location Query Configuration Module

Provides the per-call options object controlling the merger and serializer.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any

from .exceptions import QueryConfigValidationError
from .log_config import get_context_logger
from .settings import QuerySettings, get_settings
from .types import CollisionPolicy


# camelCase option names accepted by from_dict
OPTION_ALIASES = {
    "isSaveOld": "is_save_old",
    "isSaveHash": "is_save_hash",
    "isSaveEmptyFields": "is_save_empty_fields",
    "collisionPolicy": "collision_policy",
}

BOOLEAN_OPTIONS = ("is_save_old", "is_save_hash", "is_save_empty_fields")

logger = get_context_logger("query_config")


@dataclass(frozen=True)
class SetQueryConfig:
    """
    Options for a single query update.

    Attributes:
        is_save_old: Merge the new fields with the query already in the location
        is_save_hash: Keep the current fragment in the new address
        is_save_empty_fields: Emit fields whose value is empty or falsy
        collision_policy: What to do with a key present in both the new and old query

    Examples:
        >>> config = SetQueryConfig(is_save_old=False)
        >>> config = SetQueryConfig.from_dict({"isSaveHash": False})
        >>> config.is_save_hash
        False
    """

    is_save_old: bool = True
    is_save_hash: bool = True
    is_save_empty_fields: bool = False
    collision_policy: CollisionPolicy = CollisionPolicy.KEEP_NEW

    @classmethod
    def from_settings(cls, settings: QuerySettings | None = None) -> "SetQueryConfig":
        """Build the default options from process-wide settings.

        Args:
            settings: Settings instance, the cached global settings when omitted

        Returns:
            SetQueryConfig carrying the settings' defaults
        """
        settings = settings or get_settings()
        return cls(
            is_save_old=settings.is_save_old,
            is_save_hash=settings.is_save_hash,
            is_save_empty_fields=settings.is_save_empty_fields,
            collision_policy=settings.collision_policy,
        )

    @classmethod
    def from_dict(
        cls,
        options: dict[str, Any] | None,
        defaults: "SetQueryConfig | None" = None,
    ) -> "SetQueryConfig":
        """Create configuration from an options dictionary.

        Both snake_case names and the camelCase aliases (``isSaveOld``,
        ``isSaveHash``, ``isSaveEmptyFields``) are accepted. Boolean options
        are coerced with ``bool()``; unknown keys are logged and ignored.

        Args:
            options: Options dictionary
            defaults: Values for options the dictionary leaves out

        Returns:
            SetQueryConfig instance

        Raises:
            QueryConfigValidationError: collision_policy is not a known policy
        """
        defaults = defaults or cls()
        if not options:
            return defaults

        overrides: dict[str, Any] = {}
        for key, value in options.items():
            name = OPTION_ALIASES.get(key, key)
            if name in BOOLEAN_OPTIONS:
                overrides[name] = bool(value)
            elif name == "collision_policy":
                overrides[name] = _parse_collision_policy(value)
            else:
                logger.warning("config.unknown_option", option=key)

        return replace(defaults, **overrides)

    def merge(self, **overrides: Any) -> "SetQueryConfig":
        """Create new configuration with some options replaced."""
        return self.from_dict(overrides, defaults=self)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        data = asdict(self)
        data["collision_policy"] = self.collision_policy.value
        return data


def _parse_collision_policy(value: Any) -> CollisionPolicy:
    if isinstance(value, CollisionPolicy):
        return value
    try:
        return CollisionPolicy(str(value).lower())
    except ValueError as e:
        raise QueryConfigValidationError(
            "Unknown collision policy",
            config_key="collision_policy",
            config_value=value,
            context={"allowed": ", ".join(p.value for p in CollisionPolicy)},
        ) from e


def resolve_config(options: "SetQueryConfig | dict[str, Any] | None") -> SetQueryConfig:
    """Turn whatever the caller passed as options into a SetQueryConfig.

    Args:
        options: A config instance, an options dictionary, or None

    Returns:
        Config instance; dictionaries are laid over the settings defaults
    """
    if isinstance(options, SetQueryConfig):
        return options
    return SetQueryConfig.from_dict(options, defaults=SetQueryConfig.from_settings())


__all__ = [
    "SetQueryConfig",
    "CollisionPolicy",
    "resolve_config",
]
