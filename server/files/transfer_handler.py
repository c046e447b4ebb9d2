"""
Transfer handler module.

This module drives the per-connection receive protocol: read the requested
filename, reply with the resolved name, then inflate the raw DEFLATE stream
into a new file.
"""

import asyncio
import os
import zlib
from pathlib import Path

from common.constants import CHUNK_SIZE, DEFLATE_WBITS, MAX_FILENAME_LENGTH, TransferStates
from common.protocol_definitions import (
    ProtocolError, TransferError, TransferSession,
    read_filename_header, encode_resolved_name
)
from server.files.name_resolver import NameResolver
from server.utils.logger import logger


def _format_peer(writer: asyncio.StreamWriter) -> str:
    peer = writer.get_extra_info('peername')
    if isinstance(peer, tuple) and len(peer) >= 2:
        return f"{peer[0]}:{peer[1]}"
    return str(peer)


class TransferHandler:
    """Server-side receive protocol, one call to handle() per connection."""

    def __init__(self, resolver: NameResolver, storage_dir: str = '.', chunk_size: int = CHUNK_SIZE,
                 max_filename_length: int = MAX_FILENAME_LENGTH):
        self.resolver = resolver
        self.storage_dir = Path(storage_dir)
        self.chunk_size = chunk_size
        self.max_filename_length = max_filename_length

    async def handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> TransferSession:
        """Receive one file from a connection. Never raises for per-connection errors."""
        session = TransferSession(peer=_format_peer(writer))
        logger.log_connection(session.peer)

        try:
            try:
                session.requested = await read_filename_header(reader, self.max_filename_length)
            except (ProtocolError, ConnectionError) as e:
                self._fail(session, f"could not read the name of the file: {e}")
                return session

            session.state = TransferStates.RESOLVING
            session.resolved = self.resolver.resolve(session.requested)
            await self._send_resolved_name(session, writer)

            session.state = TransferStates.STREAMING
            try:
                f = self._create_output(session.resolved)
            except (OSError, ValueError) as e:
                self._fail(session, f"could not create file: {e}")
                return session

            logger.log_transfer_started(session.requested, session.resolved, session.peer)
            with f:
                try:
                    await self._receive_stream(session, reader, f)
                except (TransferError, zlib.error, OSError) as e:
                    self._fail(session, str(e))
                    return session

            session.state = TransferStates.CLOSED_SUCCESS
            logger.log_transfer_complete(session.requested, session.resolved, session.bytes_received, session.peer)
            return session

        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError) as e:
                logger.debug(f"Connection from {session.peer} closed uncleanly: {e}")

    async def _send_resolved_name(self, session: TransferSession, writer: asyncio.StreamWriter):
        """Reply with the stored name. Failure is not fatal for the transfer."""
        try:
            writer.write(encode_resolved_name(session.resolved))
            await writer.drain()
        except (ConnectionError, OSError) as e:
            logger.warning(f"Could not send the name '{session.resolved}' back to {session.peer}: {e}")

    def _create_output(self, filename: str):
        """Create the output file, refusing anything but a plain file name."""
        if os.path.basename(filename) != filename or filename in ('.', '..') or '\x00' in filename:
            raise OSError(f"invalid file name {filename!r}")
        return open(self.storage_dir / filename, 'xb')

    async def _receive_stream(self, session: TransferSession, reader: asyncio.StreamReader, f):
        """Inflate the rest of the connection into ``f`` until end of the DEFLATE stream."""
        decompressor = zlib.decompressobj(DEFLATE_WBITS)
        pending = False  # Last call hit the output limit, zlib may hold more

        while not decompressor.eof:
            data = decompressor.unconsumed_tail
            if not data and not pending:
                data = await reader.read(self.chunk_size)
                if not data:
                    raise TransferError("connection closed before the end of the compressed stream")

            chunk = decompressor.decompress(data, self.chunk_size)
            pending = len(chunk) == self.chunk_size
            if chunk:
                f.write(chunk)
                session.bytes_received += len(chunk)

        try:
            tail = decompressor.flush()
        except zlib.error as e:
            logger.warning(f"Could not close the decompressor for '{session.resolved}': {e}")
            return
        if tail:
            f.write(tail)
            session.bytes_received += len(tail)

    def _fail(self, session: TransferSession, reason: str):
        session.state = TransferStates.CLOSED_ERROR
        session.error = reason
        logger.log_transfer_failed(session.resolved or session.requested or '<unknown>', session.peer, reason)
