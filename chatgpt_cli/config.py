"""
Configuration settings for the ChatGPT CLI.

Values are resolved per field with the precedence
environment variable > config file > built-in default.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Optional
import logging
import os

from pydantic import BaseModel, ConfigDict, Field

from chatgpt_cli.errors import ConfigError
from chatgpt_cli.helpers.parsers import (
    parse_duration_or_default,
    parse_float_or_default,
    parse_int_or_default,
)

logger = logging.getLogger(__name__)

# Environment variable names
ENV_API_KEY = "OPENAI_API_KEY"
ENV_API_URL = "OPENAI_API_URL"
ENV_MODEL = "OPENAI_MODEL"
ENV_TIMEOUT = "OPENAI_TIMEOUT"
ENV_MAX_TOKENS = "OPENAI_MAX_TOKENS"
ENV_TEMPERATURE = "OPENAI_TEMPERATURE"
ENV_CONFIG_DIR = "CHATGPT_CLI_CONFIG_DIR"

# Built-in defaults
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TIMEOUT = timedelta(seconds=60)
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7

CONFIG_DIR_NAME = ".chatgpt-cli"
CONFIG_FILE_NAME = "config"

# Keys written to the config file, in file order
SETTABLE_KEYS = [
    ENV_API_KEY,
    ENV_API_URL,
    ENV_MODEL,
    ENV_TIMEOUT,
    ENV_MAX_TOKENS,
    ENV_TEMPERATURE,
]


class Config(BaseModel):
    """Resolved configuration for one invocation of the CLI."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", description="Bearer token; empty when not configured")
    api_url: str = Field(default=DEFAULT_API_URL, description="Chat-completion endpoint")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier sent with each request")
    timeout: timedelta = Field(default=DEFAULT_TIMEOUT, description="Bound on the whole HTTP exchange")
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, description="Max tokens in the completion")
    temperature: float = Field(default=DEFAULT_TEMPERATURE, description="Sampling temperature")
    config_dir: Path = Field(..., description="Directory holding the config file and the log")

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME


def get_config_dir() -> Path:
    """
    Determine the configuration directory.

    Returns:
        $CHATGPT_CLI_CONFIG_DIR if set, else ~/.chatgpt-cli, else a relative
        .chatgpt-cli when the home directory cannot be determined
    """
    override = os.getenv(ENV_CONFIG_DIR)
    if override:
        return Path(override)

    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        logger.debug("Home directory unavailable, using ./%s", CONFIG_DIR_NAME)
        return Path(CONFIG_DIR_NAME)
    return home / CONFIG_DIR_NAME


def load_config_file(config_dir: Path) -> Dict[str, str]:
    """
    Read KEY=VALUE pairs from the config file.

    Blank lines and lines starting with '#' are skipped. A missing or
    unreadable file yields an empty mapping; undecodable bytes read as U+FFFD.
    """
    config_file = Path(config_dir) / CONFIG_FILE_NAME
    values: Dict[str, str] = {}

    try:
        text = config_file.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return values

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if sep:
            values[key.strip()] = value.strip()

    return values


def save_config_file(config_dir: Path, updates: Dict[str, str]) -> Path:
    """
    Merge updates into the config file and rewrite it.

    Args:
        config_dir: Directory containing the config file
        updates: Keys to add or replace

    Returns:
        Path of the written file

    Raises:
        ConfigError: If the file cannot be written
    """
    config_file = Path(config_dir) / CONFIG_FILE_NAME

    merged = load_config_file(config_dir)
    merged.update(updates)

    lines = [
        "# ChatGPT CLI Configuration",
        "# Generated on " + datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "",
    ]
    for key in SETTABLE_KEYS:
        value = merged.get(key, "")
        if value:
            lines.append(f"{key}={value}")

    try:
        fd = os.open(config_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        os.chmod(config_file, 0o600)
    except OSError as e:
        raise ConfigError(f"failed to save configuration: {e}") from e

    logger.debug("Wrote %d keys to %s", len(lines) - 3, config_file)
    return config_file


def _env_or_file(env_key: str, file_value: Optional[str]) -> str:
    return os.getenv(env_key) or file_value or ""


def load_config() -> Config:
    """
    Build the configuration for this invocation.

    Creates the config directory if needed, reads the config file and
    resolves every field as environment > file > default.

    Raises:
        ConfigError: If the config directory cannot be created
    """
    config_dir = get_config_dir()

    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"failed to create config directory: {e}") from e

    file_values = load_config_file(config_dir)

    return Config(
        api_key=_env_or_file(ENV_API_KEY, file_values.get(ENV_API_KEY)),
        api_url=_env_or_file(ENV_API_URL, file_values.get(ENV_API_URL)) or DEFAULT_API_URL,
        model=_env_or_file(ENV_MODEL, file_values.get(ENV_MODEL)) or DEFAULT_MODEL,
        timeout=parse_duration_or_default(
            _env_or_file(ENV_TIMEOUT, file_values.get(ENV_TIMEOUT)), DEFAULT_TIMEOUT
        ),
        max_tokens=parse_int_or_default(
            _env_or_file(ENV_MAX_TOKENS, file_values.get(ENV_MAX_TOKENS)), DEFAULT_MAX_TOKENS
        ),
        temperature=parse_float_or_default(
            _env_or_file(ENV_TEMPERATURE, file_values.get(ENV_TEMPERATURE)), DEFAULT_TEMPERATURE
        ),
        config_dir=config_dir,
    )
