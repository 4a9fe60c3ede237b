"""
Kaede Runtime Configuration

This module defines the Pydantic model holding the tunable parts of the
runtime (fallback values, the text codec used at the file boundary, the
random seed) and the helpers that load it from YAML files or the
environment.
"""

import codecs
import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

logger = logging.getLogger('KaedeRT.config')

CONFIG_ENV_VAR = "KAEDE_RUNTIME_CONFIG"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class RuntimeConfig(BaseModel):
    """Runtime configuration

    Every field has a default so that an empty file, or no file at all,
    yields the reference behaviour.
    """
    null_char: str = "\0"  # returned by charAt out of bounds
    file_encoding: str = "latin-1"  # byte <-> character codec for files
    random_seed: Optional[int] = None  # None seeds from host entropy
    read_int_default: int = 0
    read_float_default: float = 0.0
    debug_prefix: str = "[DEBUG]"
    log_level: str = Field(default="WARNING")

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator('null_char')
    def validate_null_char(cls, v):
        """The null character must be exactly one character"""
        if len(v) != 1:
            raise ValueError(f"null_char must be a single character, got {v!r}")
        return v

    @field_validator('file_encoding')
    def validate_file_encoding(cls, v):
        """Reject codec names the host does not know"""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown file encoding: {v}")
        return v

    @field_validator('log_level')
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid log level: {v}")
        return level


def config_from_dict(data: Optional[Dict[str, Any]]) -> RuntimeConfig:
    """Build a configuration from a plain mapping

    Raises:
        ConfigError: If the mapping has unknown keys or invalid values
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")
    try:
        return RuntimeConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid runtime configuration: {e}")


def load_config(path: str) -> RuntimeConfig:
    """
    Load a configuration from a YAML file

    Args:
        path: Path to the YAML file

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse configuration file {path}: {e}")

    logger.debug(f"Loaded runtime configuration from {path}")
    return config_from_dict(data)


def from_env() -> RuntimeConfig:
    """Load the file named by KAEDE_RUNTIME_CONFIG, or the defaults"""
    path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return RuntimeConfig()
    return load_config(path)


_config: Optional[RuntimeConfig] = None


def get_config() -> RuntimeConfig:
    """Get the process-wide configuration, loading it on first use"""
    global _config
    if _config is None:
        _config = from_env()
    return _config


def set_config(config: Optional[RuntimeConfig]) -> None:
    """Replace the process-wide configuration (None reloads on next use)"""
    global _config
    _config = config


def setup_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the runtime's logger hierarchy"""
    if level is None:
        level = get_config().log_level
    root = logging.getLogger('KaedeRT')
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())
