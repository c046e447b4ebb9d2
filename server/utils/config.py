"""
Server configuration module.

This module handles server-side configuration settings.
"""

from pathlib import Path
from typing import Optional

from common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, STORAGE_DIR, CHUNK_SIZE, MAX_FILENAME_LENGTH


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT, storage_dir: str = STORAGE_DIR,
                 logs_dir: Optional[str] = None):
        self.host = host
        self.port = port
        self.storage_dir = Path(storage_dir)

        # Logging configuration
        self.logs_dir = logs_dir

        # File transfer settings
        self.chunk_size = CHUNK_SIZE
        self.max_filename_length = MAX_FILENAME_LENGTH

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }

    def get_file_settings(self):
        """Get file transfer settings."""
        return {
            'storage_dir': str(self.storage_dir),
            'chunk_size': self.chunk_size,
            'max_filename_length': self.max_filename_length
        }

    def get_log_settings(self):
        """Get logging settings."""
        return {
            'logs_dir': self.logs_dir
        }
