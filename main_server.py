#!/usr/bin/env python3
"""
Filedrop Server - Main Entry Point

Receives files over TCP and stores them in the storage directory without
ever overwriting an existing file.

Usage:
    python main_server.py PORT

Optional arguments:
    --host HOST           Bind address (default: 0.0.0.0)
    --dir DIR             Storage directory (default: current directory)
    --log-dir DIR         Also append completed transfers to DIR/file_transfers.log
    --debug               Verbose logging
"""

import argparse
import asyncio
import logging
import sys

from common.constants import DEFAULT_SERVER_HOST, STORAGE_DIR
from server.main_server import FileDropServer
from server.utils.config import ServerConfig
from server.utils.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Filedrop Server')
    parser.add_argument('port', type=int,
                        help='TCP port to listen on')
    parser.add_argument('--host', type=str, default=DEFAULT_SERVER_HOST,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    parser.add_argument('--dir', type=str, default=STORAGE_DIR, dest='storage_dir',
                        help='Directory received files are stored in (default: current directory)')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Directory for the transfer log file (default: none)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = ServerConfig(host=args.host, port=args.port, storage_dir=args.storage_dir, logs_dir=args.log_dir)
    if args.debug:
        logger.set_level(logging.DEBUG)

    try:
        logs_dir = config.get_log_settings()['logs_dir']
        if logs_dir:
            logger.set_logs_dir(logs_dir)

        server = FileDropServer(config)
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except OSError as e:
        logger.log_error("server", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
