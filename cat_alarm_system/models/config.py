"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import DEFAULT_PATHS


@dataclass
class SystemConfig:
    """System configuration settings."""
    # Detection settings
    cat_confidence_threshold: float = 50.0  # Percent, 0-100
    image_service: str = "fake"  # fake, opencv
    cascade_path: Optional[str] = None

    # Persistence settings
    repository_backend: str = "memory"  # memory, sqlite
    database_path: str = DEFAULT_PATHS["database_file"]

    # Logging settings
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    # Status history
    event_history_size: int = 100
