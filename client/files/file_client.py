"""
File client module.

This module sends a single file to a filedrop server.
"""

import asyncio
import io
import zlib
from pathlib import Path
from typing import BinaryIO, Optional

from common.constants import DEFAULT_HOST, DEFAULT_PORT, CHUNK_SIZE, COMPRESSION_LEVEL, DEFLATE_WBITS
from common.protocol_definitions import encode_filename_header, decode_resolved_name
from client.utils.logger import logger


class FileClient:
    """Client-side file transfer functionality."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, chunk_size: int = CHUNK_SIZE,
                 connect_timeout: float = 10.0):
        self.host = host
        self.port = port
        self.chunk_size = chunk_size
        self.connect_timeout = connect_timeout

    async def send_file(self, file_path: str, remote_name: Optional[str] = None) -> str:
        """Upload a file and return the name the server stored it under."""
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"Not a file: {file_path}")

        with open(path, 'rb') as f:
            return await self.send_stream(f, remote_name or path.name)

    async def send_bytes(self, data: bytes, remote_name: str) -> str:
        """Upload an in-memory payload and return the stored name."""
        return await self.send_stream(io.BytesIO(data), remote_name)

    async def send_stream(self, source: BinaryIO, remote_name: str) -> str:
        """Compress ``source`` onto a new connection and return the stored name."""
        header = encode_filename_header(remote_name)

        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=self.connect_timeout
            )
        except (OSError, asyncio.TimeoutError):
            logger.log_connection(self.host, self.port, False)
            raise
        logger.log_connection(self.host, self.port, True)

        try:
            writer.write(header)

            compressor = zlib.compressobj(COMPRESSION_LEVEL, zlib.DEFLATED, DEFLATE_WBITS)
            bytes_sent = 0
            while True:
                data = source.read(self.chunk_size)
                if not data:
                    break
                bytes_sent += len(data)
                writer.write(compressor.compress(data))
                await writer.drain()

            writer.write(compressor.flush())
            await writer.drain()
            if writer.can_write_eof():
                writer.write_eof()

            reply = await reader.read()
        finally:
            writer.close()
            await writer.wait_closed()

        resolved = decode_resolved_name(reply)
        logger.log_upload(remote_name, resolved, bytes_sent)
        return resolved
