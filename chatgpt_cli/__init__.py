"""
ChatGPT CLI: send a prompt to a chat-completion API from the command line.
This module re-exports the public API for convenience.
"""

# Re-export configuration
from chatgpt_cli.config import Config, load_config, save_config_file

# Re-export models
from chatgpt_cli.data_models import (
    ChatRequest,
    ChatResponse,
    Choice,
    LogEntry,
    Message,
    Usage,
)

# Re-export client and managers
from chatgpt_cli.chat_client import send_chat_request
from chatgpt_cli.managers.commandManager import get_commands, parse_command
from chatgpt_cli.managers.logManager import LogManager, log_entry

__version__ = "1.0.0"

__all__ = [
    # Configuration
    'Config',
    'load_config',
    'save_config_file',
    # Data models
    'ChatRequest',
    'ChatResponse',
    'Choice',
    'LogEntry',
    'Message',
    'Usage',
    # Client and managers
    'send_chat_request',
    'get_commands',
    'parse_command',
    'LogManager',
    'log_entry',
]
