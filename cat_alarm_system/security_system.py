"""Security system that wires configuration, storage and image analysis into the security service."""

import logging
from typing import Any, Dict, Optional

from .config_manager import ConfigManager
from .models.config import SystemConfig
from .models.security import Sensor
from .services.interfaces import SecurityRepositoryInterface, ImageServiceInterface
from .services.security_service import SecurityService
from .services.memory_repository import InMemorySecurityRepository
from .services.sqlite_repository import SqliteSecurityRepository
from .services.image_service import FakeImageService, OpenCVImageService
from .services.status_listeners import LoggingStatusListener, StatusHistoryListener
from .services.error_handler import ErrorHandler, ErrorSeverity, global_error_handler
from .logging_config import get_logger, log_with_context, setup_logging

logger = get_logger("security_system")

COMPONENT_NAME = "security_system"


def create_repository(config: SystemConfig) -> SecurityRepositoryInterface:
    """Build the repository selected by the configuration."""
    if config.repository_backend == "sqlite":
        return SqliteSecurityRepository(config.database_path)
    if config.repository_backend == "memory":
        return InMemorySecurityRepository()
    raise ValueError(f"Unknown repository backend: {config.repository_backend}")


def create_image_service(config: SystemConfig) -> ImageServiceInterface:
    """Build the image service selected by the configuration."""
    if config.image_service == "opencv":
        return OpenCVImageService(config.cascade_path)
    if config.image_service == "fake":
        return FakeImageService()
    raise ValueError(f"Unknown image service: {config.image_service}")


class SecuritySystem:
    """Owns a SecurityService together with its collaborators."""

    def __init__(self,
                 config_manager: Optional[ConfigManager] = None,
                 repository: Optional[SecurityRepositoryInterface] = None,
                 image_service: Optional[ImageServiceInterface] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 configure_logging: bool = False):
        """
        Initialize the security system.

        Args:
            config_manager: Configuration source, defaults to config.json
            repository: Overrides the repository built from the configuration
            image_service: Overrides the image service built from the configuration
            error_handler: Error bookkeeping, defaults to the global handler
            configure_logging: Install root log handlers from the configuration
        """
        self.config_manager = config_manager or ConfigManager()
        self.config = self.config_manager.get_config()

        if configure_logging:
            setup_logging(self.config.log_level, self.config.log_dir)

        if not self.config_manager.validate_config():
            raise ValueError(f"Invalid configuration in {self.config_manager.config_path}")

        self.error_handler = error_handler or global_error_handler
        self.error_handler.register_component(COMPONENT_NAME)

        try:
            self.repository = repository or create_repository(self.config)
            self.image_service = image_service or create_image_service(self.config)
        except Exception as e:
            self.error_handler.handle_error(COMPONENT_NAME, e, ErrorSeverity.CRITICAL)
            raise

        self.security_service = SecurityService(
            self.repository,
            self.image_service,
            cat_confidence_threshold=self.config.cat_confidence_threshold
        )

        self.logging_listener = LoggingStatusListener()
        self.history_listener = StatusHistoryListener(self.config.event_history_size)
        self.security_service.add_status_listener(self.logging_listener)
        self.security_service.add_status_listener(self.history_listener)

        self.config_manager.register_change_callback(self._on_config_changed)

        log_with_context(logger, logging.INFO, "Security system initialized", {
            "repository": self.config.repository_backend,
            "image_service": self.config.image_service,
            "cat_confidence_threshold": self.config.cat_confidence_threshold
        })

    def _on_config_changed(self, config: SystemConfig) -> None:
        if not self.config_manager.validate_config():
            logger.warning(f"Ignoring invalid configuration change, cat confidence threshold "
                           f"stays at {self.security_service.cat_confidence_threshold}%")
            return

        self.config = config
        self.security_service.cat_confidence_threshold = config.cat_confidence_threshold
        logger.info(f"Cat confidence threshold now {config.cat_confidence_threshold}%")

    def process_image(self, image: Any) -> bool:
        """Submit a camera image and return the cached cat verdict.

        Image analysis failures are recorded with the error handler and
        re-raised to the caller.
        """
        try:
            self.security_service.process_image(image)
        except Exception as e:
            self.error_handler.handle_error(COMPONENT_NAME, e, ErrorSeverity.MEDIUM)
            raise
        return self.security_service.is_cat_detected()

    def get_sensor(self, name: str) -> Optional[Sensor]:
        """Find a known sensor by name."""
        for sensor in self.security_service.get_sensors():
            if sensor.name == name:
                return sensor
        return None

    def get_status(self, event_limit: int = 10) -> Dict[str, Any]:
        """Snapshot of the current system state."""
        arming_status = self.security_service.get_arming_status()
        return {
            "arming_status": arming_status.name,
            "armed": arming_status.is_armed,
            "alarm_status": self.security_service.get_alarm_status().name,
            "cat_detected": self.security_service.is_cat_detected(),
            "sensors": [sensor.to_dict() for sensor in self.security_service.get_sensors()],
            "recent_events": [event.to_dict()
                              for event in self.history_listener.get_recent_events(event_limit)],
            "system_degraded": self.error_handler.is_system_degraded()
        }
