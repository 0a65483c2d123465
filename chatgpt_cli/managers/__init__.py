"""
Managers package for command dispatch and the interaction log.
"""
from chatgpt_cli.managers.logManager import LogManager
from chatgpt_cli.managers.commandManager import get_commands, parse_command, run

__all__ = ['LogManager', 'get_commands', 'parse_command', 'run']
