"""Configuration loading from CLI args, env vars, and optional YAML file."""

import os
import logging
from dataclasses import dataclass, fields, replace

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    host: str = "0.0.0.0"
    port: int = 1625
    verbose: bool = True
    log_level: str = "INFO"
    state_ttl_seconds: float = 30.0
    sweep_interval_seconds: float = 10.0


_CASTS = {
    "host": str,
    "port": int,
    "verbose": _parse_bool,
    "log_level": lambda v: str(v).upper(),
    "state_ttl_seconds": float,
    "sweep_interval_seconds": float,
}

_ENV_VARS = {
    "host": "SERVER_HOST",
    "port": "SERVER_PORT",
    "verbose": "VERBOSE",
    "log_level": "LOG_LEVEL",
    "state_ttl_seconds": "STATE_TTL_SECONDS",
    "sweep_interval_seconds": "SWEEP_INTERVAL_SECONDS",
}


def load_yaml_config(path: str | None) -> dict:
    """Load overrides from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(cli_args=None, yaml_data: dict | None = None, environ=None) -> Config:
    """Build Config from defaults, YAML data, env vars and CLI args (in that order).

    ``cli_args`` is an argparse namespace; attributes left as ``None`` do not
    override anything.
    """
    environ = os.environ if environ is None else environ
    known = {f.name for f in fields(Config)}
    values = {}

    for key, value in (yaml_data or {}).items():
        if key not in known:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        values[key] = _CASTS[key](value)

    for key, env_name in _ENV_VARS.items():
        if env_name in environ:
            values[key] = _CASTS[key](environ[env_name])

    if cli_args is not None:
        for key in known:
            value = getattr(cli_args, key, None)
            if value is not None:
                values[key] = _CASTS[key](value)

    config = replace(Config(), **values)
    _validate(config)
    return config


def _validate(config: Config):
    if not 0 <= config.port <= 65535:
        raise ValueError(f"port must be between 0 and 65535, got {config.port}")
    if config.state_ttl_seconds <= 0:
        raise ValueError(f"state_ttl_seconds must be positive, got {config.state_ttl_seconds}")
    if config.sweep_interval_seconds < 0:
        raise ValueError(
            f"sweep_interval_seconds must not be negative, got {config.sweep_interval_seconds}"
        )
    if config.log_level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {config.log_level}")
