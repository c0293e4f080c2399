from typing import Dict, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from contract_asserts.environment import EnvironmentKind
from contract_asserts.exceptions import ConfigError
from contract_asserts.logging import LogLevel, logger

ENV_PREFIX = "CONTRACT_ASSERTS_"

_session_defaults: Dict[str, object] = {}


class AssertsConfig(BaseSettings):
    """
    Settings for the assertion helpers. Every field can be set through an
    environment variable prefixed with ``CONTRACT_ASSERTS_``, for example
    ``CONTRACT_ASSERTS_ENVIRONMENT=geth``.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True)

    environment: Optional[EnvironmentKind] = None
    """
    Force how failures are classified. When unset, the environment
    predicate is asked for every assertion.
    """

    log_level: LogLevel = LogLevel.WARNING

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None

        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value):
        if isinstance(value, str) and not value.isdigit():
            try:
                return LogLevel[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown log level '{value}'")

        return value


def set_session_defaults(**defaults) -> Dict[str, object]:
    """
    Set values that every later :func:`load_config` call uses, above the
    environment variables but below its own keyword overrides. The pytest
    plugin sets these from its command line options.

    Returns:
        Dict[str, object]: The previous defaults, for restoring them.
    """

    global _session_defaults
    previous = _session_defaults
    _session_defaults = {key: value for key, value in defaults.items() if value is not None}
    return previous


def load_config(**overrides) -> AssertsConfig:
    """
    Load settings from the environment and the session defaults, with keyword
    overrides taking precedence. ``None`` overrides are ignored. An explicitly
    set ``log_level`` is applied to the contract-asserts logger.

    Raises:
        :class:`~contract_asserts.exceptions.ConfigError`: When a value is invalid.
    """

    values = {
        **_session_defaults,
        **{key: value for key, value in overrides.items() if value is not None},
    }
    try:
        config = AssertsConfig(**values)
    except ValidationError as err:
        raise ConfigError(f"Invalid contract-asserts settings: {err}") from err

    if "log_level" in config.model_fields_set:
        logger.set_level(config.log_level)

    return config
