"""Tests for the logging configuration."""

import unittest
import logging
import tempfile
import shutil
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cat_alarm_system import logging_config
from cat_alarm_system.logging_config import (
    StructuredFormatter, LoggingManager, get_logger, setup_logging
)
from cat_alarm_system.config.defaults import SYSTEM_CONSTANTS


class TestLoggingConfig(unittest.TestCase):
    """Test cases for logging setup."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        root = logging.getLogger()
        self.saved_handlers = list(root.handlers)
        self.saved_level = root.level
        self.saved_manager = logging_config.logging_manager

    def tearDown(self):
        """Restore the root logger."""
        root = logging.getLogger()
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = self.saved_handlers
        root.setLevel(self.saved_level)
        logging_config.logging_manager = self.saved_manager
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_component_logger_namespace(self):
        logger = get_logger("unit_test_component")
        self.assertEqual(logger.name, "cat_alarm.unit_test_component")
        self.assertIs(get_logger("unit_test_component"), logger)

    def test_manager_without_log_dir_creates_no_files(self):
        manager = LoggingManager()
        self.assertIsNone(manager.log_dir)
        self.assertIsNone(manager.main_log_file)

    def test_rotation_size_from_system_constants(self):
        manager = LoggingManager(self.test_dir)
        self.assertEqual(manager.max_log_size, SYSTEM_CONSTANTS["LOG_ROTATION_SIZE_MB"] * 1024 * 1024)

    def test_setup_logging_writes_files(self):
        log_dir = os.path.join(self.test_dir, "logs")
        manager = setup_logging("DEBUG", log_dir)

        get_logger("unit_test_files").error("disk on fire")
        for handler in logging.getLogger().handlers:
            handler.flush()

        self.assertEqual(manager.log_level, logging.DEBUG)
        self.assertTrue(os.path.exists(os.path.join(log_dir, "cat_alarm.log")))
        with open(os.path.join(log_dir, "errors.log")) as f:
            self.assertIn("disk on fire", f.read())

    def test_structured_formatter_includes_context(self):
        record = logging.LogRecord("cat_alarm.test", logging.INFO, "", 0, "armed", (), None)
        record.context = {"mode": "ARMED_HOME"}

        self.assertIn("Context: mode=ARMED_HOME", StructuredFormatter(include_context=True).format(record))
        self.assertNotIn("Context", StructuredFormatter(include_context=False).format(record))


if __name__ == '__main__':
    unittest.main()
