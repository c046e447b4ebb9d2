#!/usr/bin/env python3
"""
Filedrop Client - Main Entry Point

Sends one file to a filedrop server and prints the name it was stored under.

Usage:
    python main_client.py HOST PORT FILE [--name NAME]
"""

import argparse
import asyncio
import sys

from client.files.file_client import FileClient
from client.utils.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Filedrop Client')
    parser.add_argument('host', type=str,
                        help='Server host')
    parser.add_argument('port', type=int,
                        help='Server TCP port')
    parser.add_argument('file', type=str,
                        help='File to send')
    parser.add_argument('--name', type=str, default=None,
                        help='Name to request on the server (default: local file name)')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    client = FileClient(args.host, args.port)
    try:
        resolved = asyncio.run(client.send_file(args.file, args.name))
    except (OSError, ValueError, asyncio.TimeoutError) as e:
        logger.error(f"Upload failed: {e}")
        return 1

    print(resolved)
    return 0


if __name__ == "__main__":
    sys.exit(main())
