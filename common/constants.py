"""
Shared constants for the filedrop file-receiving service.

This module contains all constants used across client and server components.
"""

import zlib

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 9000

# Buffer Sizes
CHUNK_SIZE = 8192

# Storage
STORAGE_DIR = '.'
COPY_SUFFIX = '_copy'

# Header
MAX_FILENAME_LENGTH = 255
HEADER_WHITESPACE = b' \t\r\n\v\f'

# Compression (raw DEFLATE, no zlib/gzip wrapper)
DEFLATE_WBITS = -zlib.MAX_WBITS
COMPRESSION_LEVEL = 6

# Logging
TRANSFER_LOG_FILE = 'file_transfers.log'


# Transfer session states
class TransferStates:
    AWAIT_HEADER = 'await_header'
    RESOLVING = 'resolving'
    STREAMING = 'streaming'
    CLOSED_SUCCESS = 'closed_success'
    CLOSED_ERROR = 'closed_error'
