"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from common.constants import TRANSFER_LOG_FILE


class ServerLogger:
    """Server logging class."""

    def __init__(self, logs_dir: Optional[str] = None, log_level: int = logging.INFO):
        # Set up main logger
        self.logger = logging.getLogger('filedrop_server')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

        self.transfer_log_path: Optional[Path] = None
        if logs_dir:
            self.set_logs_dir(logs_dir)

    def set_logs_dir(self, logs_dir: str):
        """Enable the transfer log file inside ``logs_dir``."""
        path = Path(logs_dir)
        path.mkdir(parents=True, exist_ok=True)
        self.transfer_log_path = path / TRANSFER_LOG_FILE

    def set_level(self, log_level: int):
        """Change the console log level."""
        self.logger.setLevel(log_level)
        for handler in self.logger.handlers:
            handler.setLevel(log_level)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, peer: str):
        """Log an accepted connection."""
        self.debug(f"New connection from {peer}")

    def log_transfer_started(self, requested: str, resolved: str, peer: str):
        """Log the start of a transfer."""
        if requested == resolved:
            self.info(f"Receiving '{resolved}' from {peer}...")
        else:
            self.info(f"Receiving '{resolved}' from {peer} ('{requested}' already taken)...")

    def log_transfer_complete(self, requested: str, resolved: str, size: int, peer: str):
        """Log a successful transfer."""
        self.info(f"Received '{resolved}' ({size} bytes)")
        self._write_to_file(f"{datetime.now().isoformat()} | RECEIVED | {resolved} | REQUESTED: {requested} | SIZE: {size} bytes | FROM: {peer}")

    def log_transfer_failed(self, filename: str, peer: str, reason: str):
        """Log an aborted transfer."""
        self.error(f"Could not receive '{filename}' from {peer}: {reason}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")

    def _write_to_file(self, content: str):
        """Append a line to the transfer log file, if one is configured."""
        if self.transfer_log_path is None:
            return
        try:
            with open(self.transfer_log_path, 'a', encoding='utf-8') as f:
                f.write(content + '\n')
        except OSError as e:
            self.error(f"Failed to write to log file {self.transfer_log_path}: {e}")


# Global logger instance
logger = ServerLogger()
