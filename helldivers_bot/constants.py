"""Constants used across the helldivers-bot package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "helldivers-bot"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / APP_NAME / DEFAULT_CONFIG_FILENAME

DEFAULT_API_BASE_URL = "https://helldiverstrainingmanual.com/api/v1"
DEFAULT_API_TIMEOUT_SECONDS = 10.0

DEFAULT_LIVENESS_HOST = "0.0.0.0"
DEFAULT_LIVENESS_PORT = 3000
LIVENESS_BODY = "Bot is alive!"

DISCORD_MESSAGE_LIMIT = 2000
