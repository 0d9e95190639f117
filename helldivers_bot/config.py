"""Configuration loader for helldivers-bot."""

from __future__ import annotations

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from . import constants

# Environment variable -> (section, option)
ENVIRONMENT_OVERRIDES = {
    "DISCORD_TOKEN": ("discord", "token"),
    "CLIENT_ID": ("discord", "application_id"),
    "PORT": ("liveness", "port"),
    "HELLDIVERS_API_URL": ("api", "base_url"),
}


class ConfigurationError(RuntimeError):
    """Raised when the configuration cannot be used to start the bot."""


@dataclass(slots=True)
class DiscordConfig:
    token: Optional[str] = None
    application_id: Optional[int] = None


@dataclass(slots=True)
class ApiConfig:
    base_url: str = constants.DEFAULT_API_BASE_URL
    timeout_seconds: float = constants.DEFAULT_API_TIMEOUT_SECONDS


@dataclass(slots=True)
class LivenessConfig:
    enabled: bool = True
    host: str = constants.DEFAULT_LIVENESS_HOST
    port: int = constants.DEFAULT_LIVENESS_PORT


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    path: Optional[Path] = None
    log_network: bool = False


@dataclass(slots=True)
class BotConfig:
    discord: DiscordConfig
    api: ApiConfig
    liveness: LivenessConfig
    logging: LoggingConfig
    raw: ConfigParser
    path: Path

    def require_token(self) -> str:
        if not self.discord.token:
            raise ConfigurationError(
                "Discord bot token missing; set DISCORD_TOKEN or [discord] token"
            )
        return self.discord.token


def _parse_application_id(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid application id: {value!r}") from exc


def _apply_environment(parser: ConfigParser, environ: Mapping[str, str]) -> None:
    for variable, (section, option) in ENVIRONMENT_OVERRIDES.items():
        value = environ.get(variable)
        if value:
            parser.set(section, option, value)


def load_config(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    load_env_file: bool = True,
) -> BotConfig:
    """Load configuration from disk and the environment, applying defaults.

    Environment variables take precedence over the configuration file. When
    ``environ`` is omitted, ``os.environ`` is used after reading a ``.env``
    file from the working directory (if present).
    """

    config_path = path or constants.DEFAULT_CONFIG_PATH
    parser = ConfigParser(interpolation=None)
    parser.read_dict(
        {
            "discord": {
                "token": "",
                "application_id": "",
            },
            "api": {
                "base_url": constants.DEFAULT_API_BASE_URL,
                "timeout_seconds": str(constants.DEFAULT_API_TIMEOUT_SECONDS),
            },
            "liveness": {
                "enabled": "true",
                "host": constants.DEFAULT_LIVENESS_HOST,
                "port": str(constants.DEFAULT_LIVENESS_PORT),
            },
            "logging": {
                "level": "INFO",
                "path": "",
                "log_network": "false",
            },
        }
    )

    if config_path.exists():
        parser.read(config_path)

    if environ is None:
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ
    _apply_environment(parser, environ)

    discord_config = DiscordConfig(
        token=parser.get("discord", "token", fallback="").strip() or None,
        application_id=_parse_application_id(
            parser.get("discord", "application_id", fallback="")
        ),
    )

    default_timeout = ApiConfig().timeout_seconds
    try:
        timeout_value = parser.getfloat(
            "api", "timeout_seconds", fallback=default_timeout
        )
    except ValueError:
        timeout_value = default_timeout

    api = ApiConfig(
        base_url=parser.get("api", "base_url").rstrip("/"),
        timeout_seconds=max(0.1, timeout_value),
    )

    try:
        port_value = parser.getint(
            "liveness", "port", fallback=constants.DEFAULT_LIVENESS_PORT
        )
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid liveness port: {parser.get('liveness', 'port')!r}"
        ) from exc
    if not 0 <= port_value <= 65535:
        raise ConfigurationError(
            f"Invalid liveness port: {port_value} is outside 0-65535"
        )

    liveness = LivenessConfig(
        enabled=parser.getboolean("liveness", "enabled", fallback=True),
        host=parser.get("liveness", "host", fallback=constants.DEFAULT_LIVENESS_HOST),
        port=port_value,
    )

    log_path_value = parser.get("logging", "path", fallback="").strip()
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO"),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_network=parser.getboolean("logging", "log_network", fallback=False),
    )

    return BotConfig(
        discord=discord_config,
        api=api,
        liveness=liveness,
        logging=logging_config,
        raw=parser,
        path=config_path,
    )
