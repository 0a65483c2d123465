"""
Command handlers for the ChatGPT CLI.

Each handler takes the resolved Config and the command's arguments, prints
its output and raises a CLIError subclass on failure.
"""

from typing import List
import logging

from chatgpt_cli.chat_client import format_response, send_chat_request
from chatgpt_cli.config import (
    Config,
    DEFAULT_API_URL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT,
    ENV_API_KEY,
    ENV_API_URL,
    ENV_CONFIG_DIR,
    ENV_MAX_TOKENS,
    ENV_MODEL,
    ENV_TEMPERATURE,
    ENV_TIMEOUT,
    SETTABLE_KEYS,
    save_config_file,
)
from chatgpt_cli.errors import ChatClientError, CLIError, ConfigValidationError, UsageError
from chatgpt_cli.helpers.parsers import (
    format_duration,
    mask_api_key,
    parse_duration,
    parse_float,
    parse_int,
    truncate,
)
from chatgpt_cli.managers.logManager import LogManager, log_entry

logger = logging.getLogger(__name__)

LOG_PREVIEW_LENGTH = 80

HELP_TEXT = """ChatGPT CLI - Command Line Interface for ChatGPT

Usage:
  chatgpt-cli <command> [arguments]

Available Commands:
  help                    Show this help message
  prompt <text>           Send a prompt to ChatGPT
  logs                    Display application logs
  config list             List current configuration
  config get <key>        Get a configuration value
  config set <key> <val>  Set a configuration value

Examples:
  chatgpt-cli prompt "Explain Python generators"
  chatgpt-cli logs
  chatgpt-cli config list
  chatgpt-cli config set OPENAI_MODEL gpt-4

Configuration:
  Environment variables override values saved with 'config set':
    OPENAI_API_KEY       - Your OpenAI API key (required)
    OPENAI_API_URL       - API endpoint URL (default: {api_url})
    OPENAI_MODEL         - Model to use (default: {model})
    OPENAI_TIMEOUT       - Request timeout (default: {timeout})
    OPENAI_MAX_TOKENS    - Max tokens in response (default: {max_tokens})
    OPENAI_TEMPERATURE   - Response randomness 0.0-2.0 (default: {temperature:.1f})
    CHATGPT_CLI_CONFIG_DIR - Config directory (default: ~/.chatgpt-cli)
"""


def get_help_text() -> str:
    return HELP_TEXT.format(
        api_url=DEFAULT_API_URL,
        model=DEFAULT_MODEL,
        timeout=format_duration(DEFAULT_TIMEOUT),
        max_tokens=DEFAULT_MAX_TOKENS,
        temperature=DEFAULT_TEMPERATURE,
    )


def help_command(config: Config, args: List[str]) -> None:
    """Display usage information."""
    print(get_help_text(), end="")


def prompt_command(config: Config, args: List[str]) -> None:
    """
    Send the arguments, joined by spaces, as a prompt and print the reply.

    Both failed and successful attempts are written to the interaction log.

    Raises:
        UsageError: If no prompt was given, it is blank, or no API key is configured
        CLIError: If the request failed
    """
    if not args:
        raise UsageError('prompt text is required\nUsage: chatgpt-cli prompt "your prompt here"')

    prompt = " ".join(args)
    if not prompt.strip():
        raise UsageError("prompt cannot be empty")

    if not config.api_key:
        raise UsageError(f"missing API key: {ENV_API_KEY} environment variable not set")

    try:
        response = send_chat_request(config, prompt)
    except ChatClientError as e:
        log_entry(config, "prompt", prompt=prompt, error_msg=str(e))
        raise CLIError(f"failed to get response: {e}") from e

    content = format_response(response)
    print(content)

    log_entry(config, "prompt", prompt=prompt, response=content)


def logs_command(config: Config, args: List[str]) -> None:
    """
    Display the interaction log.

    Lines that are not valid entries are skipped and do not take a number.
    """
    manager = LogManager(config.config_dir)
    try:
        lines = manager.read_lines()
    except OSError as e:
        raise CLIError(f"failed to read logs: {e}") from e

    if not lines:
        print("No logs found.")
        return

    print(f"Showing {len(lines)} log entries:\n")

    index = 0
    for line in lines:
        entry = manager.parse_line(line)
        if entry is None:
            logger.debug("Skipping malformed log line: %s", line)
            continue

        index += 1
        print(f"[{index}] {entry.timestamp.strftime('%Y-%m-%d %H:%M:%S')} - {entry.command}")
        if entry.prompt:
            print(f"    Prompt: {truncate(entry.prompt, LOG_PREVIEW_LENGTH)}")
        if entry.response:
            print(f"    Response: {truncate(entry.response, LOG_PREVIEW_LENGTH)}")
        if entry.error:
            print(f"    Error: {entry.error}")
        print()


def config_command(config: Config, args: List[str]) -> None:
    """Dispatch to 'config list', 'config get' or 'config set'."""
    if not args:
        raise UsageError("config subcommand required\nUsage: chatgpt-cli config <list|get|set>")

    subcommands = {
        "list": config_list_command,
        "get": config_get_command,
        "set": config_set_command,
    }
    subcommand = args[0]
    handler = subcommands.get(subcommand)
    if handler is None:
        raise UsageError(f"unknown config subcommand: {subcommand}\nValid subcommands: list, get, set")

    handler(config, args[1:])


def _display_values(config: Config) -> dict:
    """Map every readable key to its display string."""
    return {
        ENV_API_KEY: mask_api_key(config.api_key),
        ENV_API_URL: config.api_url,
        ENV_MODEL: config.model,
        ENV_TIMEOUT: format_duration(config.timeout),
        ENV_MAX_TOKENS: str(config.max_tokens),
        ENV_TEMPERATURE: str(config.temperature),
        ENV_CONFIG_DIR: str(config.config_dir),
    }


def config_list_command(config: Config, args: List[str]) -> None:
    """Print every configuration value with the API key masked."""
    values = _display_values(config)
    values[ENV_TEMPERATURE] = f"{config.temperature:.1f}"

    print("Current Configuration:")
    print("━" * 51)
    for key, value in values.items():
        print(f"{key + ':':<25} {value}")


def config_get_command(config: Config, args: List[str]) -> None:
    """Print one configuration value; the key is case-insensitive."""
    if len(args) != 1:
        raise UsageError("configuration key required\nUsage: chatgpt-cli config get <key>")

    key = args[0].upper()
    values = _display_values(config)
    if key not in values:
        raise UsageError(f"unknown configuration key: {key}")

    print(values[key])


def validate_config_value(key: str, value: str) -> None:
    """
    Check a value before it is saved with 'config set'.

    Raises:
        ConfigValidationError: If the value breaks the key's rule
        UsageError: If the key cannot be set
    """
    if key == ENV_API_KEY:
        if not value:
            raise ConfigValidationError("API key cannot be empty")

    elif key == ENV_API_URL:
        if not value.startswith(("http://", "https://")):
            raise ConfigValidationError("API URL must start with http:// or https://")

    elif key == ENV_MODEL:
        if not value:
            raise ConfigValidationError("model cannot be empty")

    elif key == ENV_TIMEOUT:
        try:
            parse_duration(value)
        except ValueError as e:
            raise ConfigValidationError(
                f"invalid timeout format (use format like '60s', '1m', '90s'): {e}"
            ) from e

    elif key == ENV_MAX_TOKENS:
        try:
            tokens = parse_int(value)
        except ValueError:
            tokens = 0
        if tokens <= 0:
            raise ConfigValidationError("max tokens must be a positive integer")

    elif key == ENV_TEMPERATURE:
        try:
            temperature = parse_float(value)
        except ValueError:
            temperature = -1.0
        if not 0.0 <= temperature <= 2.0:
            raise ConfigValidationError("temperature must be a number between 0.0 and 2.0")

    elif key == ENV_CONFIG_DIR:
        raise UsageError(
            f"{ENV_CONFIG_DIR} cannot be set via config set command. Use the environment variable instead."
        )

    else:
        raise UsageError(
            f"unknown configuration key: {key}\nValid keys: {', '.join(SETTABLE_KEYS)}"
        )


def config_set_command(config: Config, args: List[str]) -> None:
    """
    Validate and persist one configuration value.

    Only the config file changes; the Config already loaded for this
    invocation keeps its values.
    """
    if len(args) != 2:
        raise UsageError("both key and value required\nUsage: chatgpt-cli config set <key> <value>")

    key = args[0].upper()
    value = args[1]

    validate_config_value(key, value)

    config_file = save_config_file(config.config_dir, {key: value})

    print(f"Set {key}={value}")
    print(f"Configuration saved to {config_file}")
