"""
Protocol definitions for the filedrop file-receiving service.

One file per connection:

    client -> server: <filename-token><one whitespace byte>
    client -> server: <raw DEFLATE stream of the file contents>
    server -> client: <resolved filename bytes>   (no delimiter, then close)
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from common.constants import HEADER_WHITESPACE, MAX_FILENAME_LENGTH, TransferStates


class ProtocolError(Exception):
    """Raised when the filename header is missing or malformed."""


class TransferError(Exception):
    """Raised when the compressed stream cannot be received and stored."""


@dataclass
class TransferSession:
    """Per-connection transfer state."""
    peer: str
    state: str = TransferStates.AWAIT_HEADER
    requested: Optional[str] = None
    resolved: Optional[str] = None
    bytes_received: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == TransferStates.CLOSED_SUCCESS


async def read_filename_header(reader: asyncio.StreamReader, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """
    Read the requested filename token from the start of a connection.

    Leading spaces and tabs are skipped. The token ends at the first
    whitespace byte, which is consumed; everything after it is left in the
    reader for the compressed body.
    """
    token = bytearray()

    while True:
        byte = await reader.read(1)
        if not byte:
            if token:
                raise ProtocolError("connection closed in the middle of the filename")
            raise ProtocolError("connection closed before a filename was sent")

        if byte in HEADER_WHITESPACE:
            if token:
                break
            if byte in b'\r\n':
                raise ProtocolError("empty filename line")
            continue

        token += byte
        if len(token) > max_length:
            raise ProtocolError(f"filename longer than {max_length} bytes")

    try:
        return token.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ProtocolError(f"filename is not valid UTF-8: {e}") from e


def encode_filename_header(filename: str) -> bytes:
    """Encode a filename header as sent by clients."""
    if not filename or any(ch.encode('utf-8') in HEADER_WHITESPACE for ch in filename):
        raise ValueError(f"filename must be non-empty and contain no whitespace: {filename!r}")
    return filename.encode('utf-8') + b'\n'


def encode_resolved_name(filename: str) -> bytes:
    """Encode the server's reply: the stored filename, no delimiter."""
    return filename.encode('utf-8')


def decode_resolved_name(data: bytes) -> str:
    """Decode the server's reply."""
    return data.decode('utf-8')
