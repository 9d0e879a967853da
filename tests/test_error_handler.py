"""Tests for error tracking."""

import unittest
from datetime import datetime, timedelta
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cat_alarm_system.services.error_handler import (
    ErrorHandler, ErrorSeverity, ComponentStatus, ErrorRecord
)


class TestErrorHandler(unittest.TestCase):
    """Test error handler functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler(max_error_history=5)

    def tearDown(self):
        """Clean up test fixtures."""
        self.error_handler.clear_error_history()

    def test_error_handler_initialization(self):
        self.assertEqual(len(self.error_handler.error_records), 0)
        self.assertEqual(len(self.error_handler.component_status), 0)
        self.assertFalse(self.error_handler.is_system_degraded())

    def test_component_registration(self):
        self.error_handler.register_component("camera")
        self.assertEqual(self.error_handler.get_component_health()["camera"], ComponentStatus.HEALTHY)
        self.assertEqual(self.error_handler.component_error_counts["camera"], 0)

    def test_error_handling_basic(self):
        self.error_handler.register_component("camera")
        error = ValueError("bad frame")

        record = self.error_handler.handle_error("camera", error, ErrorSeverity.MEDIUM)

        self.assertIsInstance(record, ErrorRecord)
        self.assertIs(record.error, error)
        self.assertEqual(self.error_handler.component_error_counts["camera"], 1)
        self.assertEqual(self.error_handler.get_component_health()["camera"], ComponentStatus.HEALTHY)
        self.assertFalse(self.error_handler.is_system_degraded())

    def test_severity_updates_component_status(self):
        self.error_handler.register_component("storage")
        self.error_handler.register_component("camera")

        self.error_handler.handle_error("storage", IOError("disk"), ErrorSeverity.HIGH)
        self.error_handler.handle_error("camera", RuntimeError("gone"), ErrorSeverity.CRITICAL)

        health = self.error_handler.get_component_health()
        self.assertEqual(health["storage"], ComponentStatus.DEGRADED)
        self.assertEqual(health["camera"], ComponentStatus.FAILED)
        self.assertTrue(self.error_handler.is_system_degraded())

    def test_unregistered_component_status_unknown(self):
        self.error_handler.handle_error("mystery", RuntimeError("?"), ErrorSeverity.LOW)
        self.assertEqual(self.error_handler.get_component_health()["mystery"], ComponentStatus.UNKNOWN)

    def test_traceback_captured(self):
        try:
            raise KeyError("missing")
        except KeyError as e:
            record = self.error_handler.handle_error("repo", e)
        self.assertIn("KeyError", record.traceback_str)

    def test_history_is_bounded(self):
        for i in range(8):
            self.error_handler.handle_error("camera", RuntimeError(str(i)))

        self.assertEqual(len(self.error_handler.error_records), 5)
        self.assertEqual(str(self.error_handler.error_records[-1].error), "7")
        self.assertEqual(self.error_handler.component_error_counts["camera"], 8)

    def test_reset_error_counts(self):
        self.error_handler.register_component("camera")
        self.error_handler.register_component("storage")
        self.error_handler.handle_error("camera", RuntimeError("x"), ErrorSeverity.CRITICAL)
        self.error_handler.handle_error("storage", RuntimeError("y"), ErrorSeverity.HIGH)

        self.error_handler.reset_error_counts("camera")
        self.assertEqual(self.error_handler.component_error_counts["camera"], 0)
        self.assertTrue(self.error_handler.is_system_degraded())

        self.error_handler.reset_error_counts()
        self.assertFalse(self.error_handler.is_system_degraded())

    def test_error_summary(self):
        self.error_handler.handle_error("camera", RuntimeError("a"), ErrorSeverity.LOW)
        self.error_handler.handle_error("camera", RuntimeError("b"), ErrorSeverity.HIGH)
        old = self.error_handler.handle_error("storage", RuntimeError("c"), ErrorSeverity.LOW)
        old.timestamp = datetime.now() - timedelta(hours=48)

        summary = self.error_handler.get_error_summary(hours=24)

        self.assertEqual(summary["total_errors"], 2)
        self.assertEqual(summary["component_counts"], {"camera": 2})
        self.assertEqual(summary["severity_counts"]["high"], 1)
        self.assertEqual(summary["severity_counts"]["critical"], 0)

    def test_error_stats(self):
        self.error_handler.handle_error("camera", RuntimeError("a"))
        stats = self.error_handler.get_error_stats()
        self.assertEqual(stats["total_errors"], 1)
        self.assertEqual(stats["component_error_counts"], {"camera": 1})


if __name__ == '__main__':
    unittest.main()
