"""Configuration loading for depchange.

Settings come from a YAML file, then ``DEPCHANGE_*`` environment variables;
CLI flags are applied on top by the caller.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from .errors import ConfigError
from .logging_utils import LOG_LEVEL_ENV

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "dependabot"
DEFAULT_SEPARATOR = "/"
DEFAULT_MAX_LENGTH = None

DEFAULT_CONFIG_PATHS = (
    Path("depchange.yml"),
    Path(".depchange.yml"),
    Path("~/.config/depchange/config.yml"),
)

ENV_BRANCH_PREFIX = "DEPCHANGE_BRANCH_PREFIX"
ENV_BRANCH_SEPARATOR = "DEPCHANGE_BRANCH_SEPARATOR"
ENV_BRANCH_MAX_LENGTH = "DEPCHANGE_BRANCH_MAX_LENGTH"


@dataclass(frozen=True)
class BranchNameConfig:
    """How branch names are built."""

    prefix: str = DEFAULT_PREFIX
    separator: str = DEFAULT_SEPARATOR
    max_length: int | None = DEFAULT_MAX_LENGTH

    def __post_init__(self):
        if not self.separator:
            raise ConfigError("Branch separator must not be empty")
        if self.max_length is not None and (
            isinstance(self.max_length, bool)
            or not isinstance(self.max_length, int)
            or self.max_length <= 0
        ):
            raise ConfigError(f"Branch max_length must be a positive integer, got {self.max_length!r}")


@dataclass(frozen=True)
class Settings:
    branch: BranchNameConfig = field(default_factory=BranchNameConfig)
    log_level: str | None = None


def _parse_max_length(value) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Branch max_length must be an integer, got {value!r}") from None


def _find_default_config() -> Path | None:
    for candidate in DEFAULT_CONFIG_PATHS:
        path = candidate.expanduser()
        if path.is_file():
            return path
    return None


def _read_yaml(path: Path) -> Mapping:
    try:
        with path.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def settings_from_mapping(data: Mapping) -> Settings:
    """Build Settings from an already-loaded config mapping."""
    branch = data.get("branch") or {}
    if not isinstance(branch, Mapping):
        raise ConfigError("'branch' section must be a mapping")

    config = BranchNameConfig(
        prefix=str(branch.get("prefix", DEFAULT_PREFIX)),
        separator=str(branch.get("separator", DEFAULT_SEPARATOR)),
        max_length=_parse_max_length(branch.get("max_length", DEFAULT_MAX_LENGTH)),
    )
    log_level = data.get("log_level")
    return Settings(branch=config, log_level=str(log_level) if log_level else None)


def apply_env_overrides(settings: Settings, environ: Mapping[str, str]) -> Settings:
    branch = settings.branch
    if environ.get(ENV_BRANCH_PREFIX):
        branch = replace(branch, prefix=environ[ENV_BRANCH_PREFIX])
    if environ.get(ENV_BRANCH_SEPARATOR):
        branch = replace(branch, separator=environ[ENV_BRANCH_SEPARATOR])
    if ENV_BRANCH_MAX_LENGTH in environ:
        branch = replace(branch, max_length=_parse_max_length(environ[ENV_BRANCH_MAX_LENGTH]))

    log_level = environ.get(LOG_LEVEL_ENV) or settings.log_level
    return Settings(branch=branch, log_level=log_level)


def load_settings(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Load settings from YAML and the environment.

    Args:
        path: Explicit config file; must exist when given
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        Resolved Settings

    Raises:
        ConfigError: If the file or an override is invalid
    """
    if environ is None:
        environ = os.environ

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Config file {config_path} not found")
    else:
        config_path = _find_default_config()

    if config_path is not None:
        logger.debug("Loading configuration from %s", config_path)
        settings = settings_from_mapping(_read_yaml(config_path))
    else:
        settings = Settings()

    return apply_env_overrides(settings, environ)
