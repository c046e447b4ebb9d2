#!/usr/bin/env python3
"""
Unit tests for server/utils/logger.py and client/utils/logger.py
"""

import logging
import tempfile
import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from client.utils.logger import ClientLogger
from server.utils.logger import ServerLogger


class TestServerLogger(unittest.TestCase):
    """Test cases for the transfer log file."""

    def test_no_file_without_logs_dir(self):
        server_logger = ServerLogger()

        with self.assertLogs('filedrop_server', level='INFO') as captured:
            server_logger.log_transfer_complete("a.txt", "a.txt", 10, "127.0.0.1:1")

        self.assertIsNone(server_logger.transfer_log_path)
        self.assertIn("Received 'a.txt' (10 bytes)", captured.output[0])

    def test_completed_transfer_is_appended(self):
        with tempfile.TemporaryDirectory() as tmp:
            server_logger = ServerLogger(logs_dir=str(Path(tmp, "logs")))

            with self.assertLogs('filedrop_server', level='INFO'):
                server_logger.log_transfer_complete("a.txt", "a_copy1.txt", 42, "127.0.0.1:5000")
                server_logger.log_transfer_complete("b.txt", "b.txt", 7, "127.0.0.1:5001")

            lines = server_logger.transfer_log_path.read_text(encoding='utf-8').splitlines()

        self.assertEqual(len(lines), 2)
        self.assertIn("| RECEIVED | a_copy1.txt | REQUESTED: a.txt | SIZE: 42 bytes | FROM: 127.0.0.1:5000", lines[0])
        self.assertIn("| RECEIVED | b.txt |", lines[1])

    def test_failed_transfer_logs_error(self):
        server_logger = ServerLogger()

        with self.assertLogs('filedrop_server', level='ERROR') as captured:
            server_logger.log_transfer_failed("x.bin", "127.0.0.1:9", "boom")

        self.assertIn("Could not receive 'x.bin' from 127.0.0.1:9: boom", captured.output[0])

    def test_renamed_transfer_start_mentions_requested_name(self):
        server_logger = ServerLogger()

        with self.assertLogs('filedrop_server', level='INFO') as captured:
            server_logger.log_transfer_started("a.txt", "a_copy1.txt", "peer")

        self.assertIn("'a.txt' already taken", captured.output[0])

    def test_console_handler_follows_log_level(self):
        server_logger = ServerLogger(log_level=logging.WARNING)

        self.assertEqual([h.level for h in server_logger.logger.handlers], [logging.WARNING])

        server_logger.set_level(logging.DEBUG)
        self.assertEqual(server_logger.logger.level, logging.DEBUG)
        self.assertEqual([h.level for h in server_logger.logger.handlers], [logging.DEBUG])
        server_logger.set_level(logging.INFO)

    def test_client_console_handler_follows_log_level(self):
        client_logger = ClientLogger(log_level=logging.ERROR)
        self.addCleanup(ClientLogger)

        self.assertEqual([h.level for h in client_logger.logger.handlers], [logging.ERROR])


if __name__ == '__main__':
    unittest.main()
