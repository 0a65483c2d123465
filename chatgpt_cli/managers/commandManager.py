"""
Manager for command lookup and dispatch.
"""

from typing import Callable, Dict, List, Tuple
import logging
import sys

from colorama import Fore, Style
from pydantic import BaseModel, Field

from chatgpt_cli.commands import (
    config_command,
    get_help_text,
    help_command,
    logs_command,
    prompt_command,
)
from chatgpt_cli.config import Config
from chatgpt_cli.errors import CLIError

logger = logging.getLogger(__name__)


class Command(BaseModel):
    """A named CLI command and the function that runs it."""

    name: str = Field(..., description="Name typed on the command line")
    description: str = Field(..., description="One-line summary")
    handler: Callable[[Config, List[str]], None] = Field(..., description="Function that runs the command")


def get_commands() -> Dict[str, Command]:
    """Return the table of available commands keyed by name."""
    return {
        "help": Command(name="help", description="Show help message", handler=help_command),
        "prompt": Command(name="prompt", description="Send a prompt to ChatGPT", handler=prompt_command),
        "logs": Command(name="logs", description="Display application logs", handler=logs_command),
        "config": Command(name="config", description="Manage configuration", handler=config_command),
    }


def parse_command(argv: List[str]) -> Tuple[str, List[str]]:
    """
    Split process arguments into a command name and its arguments.

    Args:
        argv: Full argument vector, program name first

    Returns:
        ("help", []) when no command is given, else (argv[1], argv[2:])
    """
    if len(argv) < 2:
        return "help", []
    return argv[1], list(argv[2:])


def run(config: Config, argv: List[str]) -> int:
    """
    Run the command named in argv.

    Returns:
        Process exit status: 0 on success, 1 for an unknown command or a failed command
    """
    name, args = parse_command(argv)
    command = get_commands().get(name)

    if command is None:
        print(f"{Fore.RED}Unknown command: {name}{Style.RESET_ALL}\n", file=sys.stderr)
        print(get_help_text(), end="")
        return 1

    logger.debug("Running %s with %d argument(s)", command.name, len(args))
    try:
        command.handler(config, args)
    except CLIError as e:
        print(f"{Fore.RED}Error: {e}{Style.RESET_ALL}", file=sys.stderr)
        return 1

    return 0
