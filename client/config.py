from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from dotenv import load_dotenv

from shared.protocol import DEFAULT_MAX_BODY_SIZE
from shared.utils import split_address

DEFAULT_CONFIG: Dict[str, Any] = {
    "lookupd_tcp_addresses": ["127.0.0.1:4160"],
    "max_body_size": DEFAULT_MAX_BODY_SIZE,
    "ping_interval": 15,
    "topics": [],
    "log_level": "INFO",
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in DEFAULT_CONFIG.items():
        env_key = f"LOOKUP_{key.upper()}"
        value = os.getenv(env_key, default_value)
        CLIENT_CONFIG[key] = _coerce_type(value, type(default_value))

    CLIENT_CONFIG["log_level"] = CLIENT_CONFIG["log_level"].upper()
    _validate_config()
    logging.getLogger().setLevel(CLIENT_CONFIG["log_level"])
    return CLIENT_CONFIG


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        if target_type is bool:
            return str(value).lower() in ("1", "true", "yes", "on")
        if target_type is list:
            return _split_list(str(value))
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _validate_config() -> None:
    if not CLIENT_CONFIG["lookupd_tcp_addresses"]:
        raise ConfigError("lookupd_tcp_addresses must not be empty")
    for address in CLIENT_CONFIG["lookupd_tcp_addresses"]:
        try:
            split_address(address)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    if CLIENT_CONFIG["max_body_size"] < 0:
        raise ConfigError("max_body_size must not be negative")
    if CLIENT_CONFIG["ping_interval"] <= 0:
        raise ConfigError("ping_interval must be positive")
    if not isinstance(logging.getLevelName(CLIENT_CONFIG["log_level"]), int):
        raise ConfigError(f"unknown log_level {CLIENT_CONFIG['log_level']}")


def get(key: str, default: Any = None) -> Any:
    return CLIENT_CONFIG.get(key, default)


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "ConfigError", "get", "load_config"]
