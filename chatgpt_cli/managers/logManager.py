"""
Manager for the append-only interaction log (logs.jsonl).
"""

from pathlib import Path
from typing import List, Optional
import logging

from chatgpt_cli.config import Config
from chatgpt_cli.data_models import LogEntry

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "logs.jsonl"


class LogManager:
    """Reads and appends LogEntry records, one JSON object per line."""

    def __init__(self, config_dir: Path):
        """
        Initialize LogManager.

        Args:
            config_dir: Directory holding logs.jsonl
        """
        self.log_file = Path(config_dir) / LOG_FILE_NAME

    def append(self, entry: LogEntry) -> None:
        """
        Append one entry to the log file, creating it if absent.

        Raises:
            OSError: If the file cannot be opened or written
        """
        line = entry.model_dump_json(exclude_none=True)
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def read_lines(self) -> List[str]:
        """
        Return the non-empty lines of the log file in file order.

        A missing file reads as no lines.

        Raises:
            OSError: If the file exists but cannot be read
        """
        if not self.log_file.exists():
            return []
        text = self.log_file.read_text(encoding="utf-8", errors="replace")
        return [line for line in text.strip().splitlines() if line.strip()]

    @staticmethod
    def parse_line(line: str) -> Optional[LogEntry]:
        """Parse one log line, returning None if it is not a valid entry."""
        try:
            return LogEntry.model_validate_json(line)
        except ValueError:
            return None


def log_entry(
    config: Config,
    command: str,
    prompt: str = "",
    response: str = "",
    error_msg: str = ""
) -> None:
    """
    Record one command invocation in the interaction log.

    Never raises: a failed write is reported at DEBUG level and dropped so
    that logging cannot abort the command that called it.
    """
    try:
        entry = LogEntry(
            command=command,
            prompt=prompt or None,
            response=response or None,
            error=error_msg or None,
        )
        LogManager(config.config_dir).append(entry)
    except Exception as e:
        logger.debug("Could not write log entry for %s: %s", command, e)
