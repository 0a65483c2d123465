"""
Main entry point for the ChatGPT CLI.
Sends a single prompt to a chat-completion API and manages local configuration.
"""

import logging
import os
import sys

from colorama import Fore, Style, init
from dotenv import load_dotenv

from chatgpt_cli.config import load_config
from chatgpt_cli.errors import ConfigError
from chatgpt_cli.managers.commandManager import run

DEBUG_ENV = "CHATGPT_CLI_DEBUG"


def main() -> None:
    """Resolve configuration, run the requested command and exit with its status."""
    # Initialize colorama for Windows color support
    init(autoreset=True)
    load_dotenv()

    logging.basicConfig(
        level=logging.DEBUG if os.getenv(DEBUG_ENV) else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config()
    except ConfigError as e:
        print(f"{Fore.RED}Configuration error: {e}{Style.RESET_ALL}", file=sys.stderr)
        sys.exit(1)

    sys.exit(run(config, sys.argv))


if __name__ == "__main__":
    main()
