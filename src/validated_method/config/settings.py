"""Process-wide defaults.

Priority chain for the quiet toggle (highest to lowest):
  1. ``ValidationConfig(quiet=...)`` given to a single method
  2. Runtime override installed with :func:`set_quiet`
  3. Env var ``VALIDATED_METHOD_QUIET``
  4. Code default (``False``)

The override and the cached settings are plain module state shared by
every validated method and are not synchronized. They only gate the
unexpected-parameter diagnostic, never validation results.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings

from validated_method.config.models import ValidationConfig


class GlobalSettings(BaseSettings):
    """Environment-backed defaults for all validated methods."""

    model_config = {
        "frozen": True,
        "env_prefix": "VALIDATED_METHOD_",
    }

    quiet: bool = False


_settings: GlobalSettings | None = None
_quiet_override: bool | None = None


def get_settings() -> GlobalSettings:
    """Return the cached settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = GlobalSettings()
    return _settings


def set_quiet(value: bool | None) -> None:
    """Install a process-wide quiet override; None removes it."""
    global _quiet_override
    _quiet_override = None if value is None else bool(value)


def is_quiet() -> bool:
    """Effective process-wide quiet flag."""
    if _quiet_override is not None:
        return _quiet_override
    return get_settings().quiet


def resolve_quiet(config: ValidationConfig) -> bool:
    """Quiet flag for one method: its own setting wins over the global one."""
    if config.quiet is not None:
        return config.quiet
    return is_quiet()


def reset_settings() -> None:
    """Forget the cached settings and any override (used by tests)."""
    global _settings, _quiet_override
    _settings = None
    _quiet_override = None
