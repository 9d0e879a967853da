"""Configuration components for the cat alarm system."""

from .defaults import (
    DEFAULT_CONFIG,
    SYSTEM_CONSTANTS,
    DEFAULT_PATHS,
    CASCADE_SETTINGS,
    VALID_IMAGE_SERVICES,
    VALID_REPOSITORY_BACKENDS
)

__all__ = [
    'DEFAULT_CONFIG',
    'SYSTEM_CONSTANTS',
    'DEFAULT_PATHS',
    'CASCADE_SETTINGS',
    'VALID_IMAGE_SERVICES',
    'VALID_REPOSITORY_BACKENDS'
]
