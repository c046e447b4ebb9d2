"""
Filedrop Server - connection dispatcher

This is the main server module. It accepts connections and runs one transfer
task per connection, all sharing a single name resolver.
"""

import asyncio
from typing import Optional

from server.files.name_resolver import NameResolver
from server.files.transfer_handler import TransferHandler
from server.utils.config import ServerConfig
from server.utils.logger import logger


class FileDropServer:
    """Main server class: listener plus shared resolver."""

    def __init__(self, config: Optional[ServerConfig] = None, resolver: Optional[NameResolver] = None):
        self.config = config or ServerConfig()

        # Snapshot of the storage directory, taken once at startup
        if resolver is None:
            resolver = NameResolver.from_directory(str(self.config.storage_dir))
            logger.info(f"Indexed {len(resolver)} existing names in {self.config.storage_dir}")
        self.resolver = resolver

        self.transfer_handler = TransferHandler(self.resolver, **self.config.get_file_settings())
        self.server: Optional[asyncio.AbstractServer] = None

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        try:
            await self.transfer_handler.handle(reader, writer)
        except asyncio.CancelledError:
            logger.info(f"Transfer cancelled for {writer.get_extra_info('peername')}")
            raise

    async def start_serving(self) -> asyncio.AbstractServer:
        """Bind the listening socket and start accepting connections."""
        info = self.config.get_connection_info()
        self.server = await asyncio.start_server(self.handle_client, info['host'], info['port'])

        addr = ', '.join(str(sock.getsockname()) for sock in self.server.sockets)
        logger.info(f"Server listening on {addr}")
        return self.server

    async def start(self):
        """Start the server and serve until cancelled."""
        server = await self.start_serving()
        async with server:
            await server.serve_forever()
