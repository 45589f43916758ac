"""
Runtime configuration for entitykit.

Settings are read once from the environment and can be overridden
programmatically, which is mostly useful in tests:

- ENTITYKIT_INTERNAL_PREFIX: Field name prefix marking internal-use fields
  that generic accessors and serialization ignore (default "_")
- ENTITYKIT_DEFAULT_TIMEZONE: Zone used for default timestamps, either
  "local" or "UTC" (default "local")
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SUPPORTED_TIMEZONES = ("local", "UTC")


@dataclass(frozen=True)
class Settings:
    """
    Process-wide entitykit settings.

    Attributes:
        internal_prefix (str): Prefix of field names hidden from accessors and output
        default_timezone (str): "local" or "UTC", used when stamping new entities
    """

    internal_prefix: str = "_"
    default_timezone: str = "local"

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.internal_prefix:
            raise ConfigurationError("internal_prefix must be a non-empty string")
        if self.default_timezone not in SUPPORTED_TIMEZONES:
            raise ConfigurationError(
                f"default_timezone must be one of {', '.join(SUPPORTED_TIMEZONES)}, "
                f"got {self.default_timezone!r}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from ENTITYKIT_* environment variables.

        Unsupported timezone values fall back to the default with a warning,
        since environment input is outside the caller's control.

        Returns:
            Settings: Settings populated from the environment
        """
        prefix = os.environ.get("ENTITYKIT_INTERNAL_PREFIX") or cls.internal_prefix
        zone = os.environ.get("ENTITYKIT_DEFAULT_TIMEZONE", cls.default_timezone)
        if zone not in SUPPORTED_TIMEZONES:
            logger.warning(
                "Ignoring unsupported ENTITYKIT_DEFAULT_TIMEZONE %r, using %r",
                zone,
                cls.default_timezone,
            )
            zone = cls.default_timezone
        return cls(internal_prefix=prefix, default_timezone=zone)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the active settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure(**overrides: Any) -> Settings:
    """
    Replace selected settings.

    Args:
        **overrides: Settings attributes to change

    Returns:
        Settings: The new active settings

    Raises:
        ConfigurationError: If an override is unknown or invalid
    """
    global _settings
    unknown = set(overrides) - set(Settings.__dataclass_fields__)
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")
    _settings = replace(get_settings(), **overrides)
    return _settings


def reset_settings() -> None:
    """Discard overrides; the next get_settings() call re-reads the environment."""
    global _settings
    _settings = None
