"""Utility functions for the cat alarm system."""

import os
from datetime import datetime
from typing import Iterable

from .models.security import Sensor


def ensure_directory_exists(path: str) -> None:
    """Ensure a directory exists, create if it doesn't."""
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def all_sensors_in_state(sensors: Iterable[Sensor], active: bool) -> bool:
    """Check whether every sensor has the given activation state."""
    return all(sensor.active == active for sensor in sensors)


def format_timestamp(dt: datetime) -> str:
    """Format datetime for consistent display."""
    return dt.strftime("%Y-%m-%d %H:%M:%S")
