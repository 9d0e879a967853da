"""Default configuration values and constants."""

from typing import Dict, Any

# Default system configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Detection settings
    "cat_confidence_threshold": 50.0,
    "image_service": "fake",
    "cascade_path": None,

    # Persistence settings
    "repository_backend": "memory",
    "database_path": "data/security.db",

    # Logging settings
    "log_level": "INFO",
    "log_dir": None,

    # Status history
    "event_history_size": 100
}

# System constants
SYSTEM_CONSTANTS = {
    "CAT_CONFIDENCE_THRESHOLD": 50.0,  # Percent confidence passed to the image service
    "MAX_EVENT_HISTORY": 1000,
    "LOG_ROTATION_SIZE_MB": 10
}

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "config.json",
    "database_file": "data/security.db"
}

# Haar cascade settings for the OpenCV image service
CASCADE_SETTINGS = {
    "cascade_files": (
        "haarcascade_frontalcatface.xml",
        "haarcascade_frontalcatface_extended.xml"
    ),
    "scale_factor": 1.1,
    "min_neighbors": 3,
    "min_size": (30, 30),
    "max_size": (300, 300),
    "blur_kernel_size": 3
}

VALID_IMAGE_SERVICES = ("fake", "opencv")
VALID_REPOSITORY_BACKENDS = ("memory", "sqlite")
