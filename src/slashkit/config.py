from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .constants import DISCORD_API_BASE_URL
from .errors import ConfigError
from .rest import InteractionRestClient

DEFAULT_CONFIG_FILENAME = "slashkit.yml"
DEFAULT_BOT_TOKEN_ENV = "SLASHKIT_BOT_TOKEN"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY = 1.0
DEFAULT_RETRY_MAX_DELAY = 30.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class SlashkitConfig:
    api_base_url: str = DISCORD_API_BASE_URL
    bot_token_env: str = DEFAULT_BOT_TOKEN_ENV
    bot_token: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY
    retry_max_delay: float = DEFAULT_RETRY_MAX_DELAY
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "SlashkitConfig":
        cfg: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

        api_base_url = str(cfg.get("api_base_url", DISCORD_API_BASE_URL)).strip()
        if not api_base_url.startswith(("http://", "https://")):
            raise ConfigError("slashkit.api_base_url must be an http(s) URL")

        bot_token_env = str(cfg.get("bot_token_env", DEFAULT_BOT_TOKEN_ENV)).strip()
        if not bot_token_env:
            raise ConfigError("slashkit.bot_token_env must be non-empty")
        bot_token = os.environ.get(bot_token_env) or None

        timeout_seconds = _parse_positive_float(
            cfg.get("timeout_seconds"),
            default=DEFAULT_TIMEOUT_SECONDS,
            key="slashkit.timeout_seconds",
        )
        max_retries = _parse_non_negative_int(
            cfg.get("max_retries"),
            default=DEFAULT_MAX_RETRIES,
            key="slashkit.max_retries",
        )
        retry_base_delay = _parse_positive_float(
            cfg.get("retry_base_delay"),
            default=DEFAULT_RETRY_BASE_DELAY,
            key="slashkit.retry_base_delay",
        )
        retry_max_delay = _parse_positive_float(
            cfg.get("retry_max_delay"),
            default=DEFAULT_RETRY_MAX_DELAY,
            key="slashkit.retry_max_delay",
        )
        if retry_max_delay < retry_base_delay:
            raise ConfigError(
                "slashkit.retry_max_delay must be >= slashkit.retry_base_delay"
            )

        log_level = str(cfg.get("log_level", DEFAULT_LOG_LEVEL)).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"slashkit.log_level {log_level!r} is not a logging level")

        return cls(
            api_base_url=api_base_url.rstrip("/"),
            bot_token_env=bot_token_env,
            bot_token=bot_token,
            timeout_seconds=timeout_seconds,
            max_retries=max_retries,
            retry_base_delay=retry_base_delay,
            retry_max_delay=retry_max_delay,
            log_level=log_level,
        )

    def create_rest_client(self) -> InteractionRestClient:
        return InteractionRestClient(
            bot_token=self.bot_token,
            timeout_seconds=self.timeout_seconds,
            base_url=self.api_base_url,
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
            retry_max_delay=self.retry_max_delay,
        )


def load_config(path: Optional[Path] = None) -> SlashkitConfig:
    """Load config from a YAML file; a missing file yields the defaults.

    The settings may sit at the top level or under a ``slashkit`` key.
    """
    config_path = path or Path.cwd() / DEFAULT_CONFIG_FILENAME
    if not config_path.exists():
        return SlashkitConfig.from_raw({})
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping: {config_path}")
    section = data.get("slashkit", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'slashkit' section must be a mapping: {config_path}")
    return SlashkitConfig.from_raw(section)


def _parse_positive_float(value: Any, *, default: float, key: str) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number")
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number") from exc
    if parsed <= 0:
        raise ConfigError(f"{key} must be > 0")
    return parsed


def _parse_non_negative_int(value: Any, *, default: int, key: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer")
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer") from exc
    if parsed < 0:
        raise ConfigError(f"{key} must be >= 0")
    return parsed
