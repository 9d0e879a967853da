"""Centralized logging configuration for the cat alarm system."""

import logging
import logging.handlers
import os
import sys
from datetime import datetime
from typing import Optional, Dict, Any
from pathlib import Path

from .config.defaults import SYSTEM_CONSTANTS


class StructuredFormatter(logging.Formatter):
    """Custom formatter that adds structured information to log records."""

    def __init__(self, include_context: bool = True):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured information."""
        base_format = "%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s"

        if self.include_context and hasattr(record, 'context'):
            context_str = " | ".join([f"{k}={v}" for k, v in record.context.items()])
            base_format += f" | Context: {context_str}"

        if record.levelno >= logging.ERROR and record.exc_info:
            base_format += " | %(pathname)s:%(lineno)d"

        formatter = logging.Formatter(base_format)
        return formatter.format(record)


class ContextFilter(logging.Filter):
    """Filter that adds system context to log records."""

    def __init__(self, component_name: Optional[str] = None):
        super().__init__()
        self.component_name = component_name
        self.process_id = os.getpid()

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context information to log record."""
        record.process_id = self.process_id

        if self.component_name:
            record.component = self.component_name

        record.timestamp_ms = datetime.now().timestamp() * 1000

        return True


class LoggingManager:
    """Centralized logging management for the cat alarm system.

    Component loggers are available as soon as the module is imported.
    Root handlers are only installed by ``configure_root_logger`` (called
    from ``setup_logging``), so importing the package never touches the
    host application's logging setup.
    """

    def __init__(self, log_dir: Optional[str] = None):
        self.log_dir = Path(log_dir) if log_dir else None

        # Log files
        self.main_log_file = self.log_dir / "cat_alarm.log" if self.log_dir else None
        self.error_log_file = self.log_dir / "errors.log" if self.log_dir else None

        # Logging configuration
        self.log_level = logging.INFO
        self.max_log_size = SYSTEM_CONSTANTS["LOG_ROTATION_SIZE_MB"] * 1024 * 1024
        self.backup_count = 5

        # Component loggers
        self.component_loggers: Dict[str, logging.Logger] = {}

    def configure_root_logger(self) -> None:
        """Setup the root logger configuration."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)

        # Clear existing handlers
        root_logger.handlers.clear()

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(StructuredFormatter(include_context=False))
        root_logger.addHandler(console_handler)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

            # Main log file handler (rotating)
            main_file_handler = logging.handlers.RotatingFileHandler(
                self.main_log_file,
                maxBytes=self.max_log_size,
                backupCount=self.backup_count
            )
            main_file_handler.setLevel(logging.DEBUG)
            main_file_handler.setFormatter(StructuredFormatter(include_context=True))
            root_logger.addHandler(main_file_handler)

            # Error log file handler (errors and critical only)
            error_file_handler = logging.handlers.RotatingFileHandler(
                self.error_log_file,
                maxBytes=self.max_log_size,
                backupCount=self.backup_count
            )
            error_file_handler.setLevel(logging.ERROR)
            error_file_handler.setFormatter(StructuredFormatter(include_context=True))
            root_logger.addHandler(error_file_handler)

        logging.info("Logging system initialized")

    def get_component_logger(self, component_name: str,
                             log_level: Optional[int] = None) -> logging.Logger:
        """Get or create a logger for a specific component."""
        if component_name in self.component_loggers:
            return self.component_loggers[component_name]

        logger = logging.getLogger(f"cat_alarm.{component_name}")

        if log_level:
            logger.setLevel(log_level)

        logger.addFilter(ContextFilter(component_name))

        self.component_loggers[component_name] = logger
        return logger

    def log_with_context(self, logger: logging.Logger, level: int,
                         message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log message with additional context information."""
        if context:
            record = logger.makeRecord(
                logger.name, level, "", 0, message, (), None
            )
            record.context = context
            logger.handle(record)
        else:
            logger.log(level, message)

    def set_log_level(self, level: int) -> None:
        """Set the global log level."""
        self.log_level = level
        logging.getLogger().setLevel(level)

        for logger in self.component_loggers.values():
            logger.setLevel(level)


# Global logging manager instance
logging_manager = LoggingManager()


def get_logger(component_name: str) -> logging.Logger:
    """Convenience function to get a component logger."""
    return logging_manager.get_component_logger(component_name)


def log_with_context(logger: logging.Logger, level: int, message: str,
                     context: Optional[Dict[str, Any]] = None) -> None:
    """Convenience function to log a message with structured context."""
    logging_manager.log_with_context(logger, level, message, context)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None) -> LoggingManager:
    """Setup centralized logging system."""
    global logging_manager

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # Carry already-issued component loggers over to the new manager
    component_loggers = logging_manager.component_loggers

    logging_manager = LoggingManager(log_dir)
    logging_manager.component_loggers = component_loggers
    logging_manager.log_level = numeric_level
    logging_manager.configure_root_logger()
    logging_manager.set_log_level(numeric_level)

    return logging_manager
