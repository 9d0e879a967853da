"""Configuration management with JSON file persistence."""

import json
import os
from dataclasses import asdict, fields
from typing import Optional, Dict, Any, Callable, List

from .models.config import SystemConfig
from .config.defaults import (
    DEFAULT_PATHS,
    SYSTEM_CONSTANTS,
    VALID_IMAGE_SERVICES,
    VALID_REPOSITORY_BACKENDS
)
from .utils import ensure_directory_exists
from .logging_config import get_logger

logger = get_logger("config_manager")


class ConfigManager:
    """Manages system configuration with file persistence and change callbacks."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SystemConfig] = None
        self._config_change_callbacks: List[Callable[[SystemConfig], None]] = []

        self.load_config()

    def load_config(self) -> SystemConfig:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                self._config = self._from_dict(config_dict)
            except (json.JSONDecodeError, TypeError, AttributeError) as e:
                logger.error(f"Error loading config: {e}. Using defaults.")
                self._config = SystemConfig()
        else:
            self._config = SystemConfig()
            self.save_config()

        return self._config

    @staticmethod
    def _from_dict(config_dict: Dict[str, Any]) -> SystemConfig:
        known = {f.name for f in fields(SystemConfig)}
        unknown = set(config_dict) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        return SystemConfig(**{k: v for k, v in config_dict.items() if k in known})

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        ensure_directory_exists(os.path.dirname(self.config_path))
        with open(self.config_path, 'w') as f:
            json.dump(self.export_config(), f, indent=2)

    def get_config(self) -> SystemConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values."""
        if self._config is None:
            self.load_config()

        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
            else:
                logger.warning(f"Unknown config key ignored: {key}")

        self.save_config()
        self._notify_callbacks()

    def validate_config(self) -> bool:
        """Validate current configuration."""
        if self._config is None:
            return False

        threshold = self._config.cat_confidence_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)) or \
                not 0.0 <= threshold <= 100.0:
            return False

        if self._config.image_service not in VALID_IMAGE_SERVICES:
            return False

        if self._config.repository_backend not in VALID_REPOSITORY_BACKENDS:
            return False

        if self._config.repository_backend == "sqlite" and not self._config.database_path:
            return False

        if not isinstance(self._config.log_level, str) or \
                self._config.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return False

        history_size = self._config.event_history_size
        if isinstance(history_size, bool) or not isinstance(history_size, int) or \
                not 1 <= history_size <= SYSTEM_CONSTANTS["MAX_EVENT_HISTORY"]:
            return False

        if self._config.cascade_path is not None and not isinstance(self._config.cascade_path, str):
            return False

        return True

    def register_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Register a callback to be called when config changes."""
        if callback not in self._config_change_callbacks:
            self._config_change_callbacks.append(callback)

    def unregister_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Unregister a config change callback."""
        if callback in self._config_change_callbacks:
            self._config_change_callbacks.remove(callback)

    def _notify_callbacks(self) -> None:
        for callback in self._config_change_callbacks:
            try:
                callback(self._config)
            except Exception as e:
                logger.error(f"Error in config change callback: {e}", exc_info=True)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = SystemConfig()
        self.save_config()
        self._notify_callbacks()

    def export_config(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        if not self._config:
            return {}
        return asdict(self._config)

    def import_config(self, config_dict: Dict[str, Any]) -> bool:
        """
        Import configuration from a dictionary.

        Args:
            config_dict: Dictionary containing configuration values

        Returns:
            True if import was successful, False otherwise
        """
        try:
            temp_config = SystemConfig(**config_dict)
        except (TypeError, ValueError) as e:
            logger.error(f"Error importing config: {e}")
            return False

        old_config = self._config
        self._config = temp_config

        if not self.validate_config():
            self._config = old_config
            return False

        self.save_config()
        self._notify_callbacks()
        return True
