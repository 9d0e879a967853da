"""
Cat Alarm System

Home security controller that derives the alarm status from the arming
mode, door/window/motion sensors and camera-based cat detection.
"""

__version__ = "1.0.0"
__author__ = "Cat Alarm System"

# Import core components
from .config_manager import ConfigManager
from .models import (
    ArmingStatus,
    AlarmStatus,
    SensorType,
    Sensor,
    SystemConfig
)
from .services import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListenerInterface,
    SecurityService,
    InMemorySecurityRepository,
    SqliteSecurityRepository,
    LoggingStatusListener,
    StatusHistoryListener,
    ImageAnalysisError
)
from . import utils

__all__ = [
    # Core management
    'ConfigManager',
    'SecurityService',

    # Data models
    'ArmingStatus',
    'AlarmStatus',
    'SensorType',
    'Sensor',
    'SystemConfig',

    # Service interfaces
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListenerInterface',

    # Adapters
    'InMemorySecurityRepository',
    'SqliteSecurityRepository',
    'LoggingStatusListener',
    'StatusHistoryListener',
    'ImageAnalysisError',

    # Utilities
    'utils'
]
