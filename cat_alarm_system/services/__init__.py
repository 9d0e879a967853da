"""Services for the cat alarm system."""

from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListenerInterface
)
from .security_service import SecurityService
from .memory_repository import InMemorySecurityRepository
from .sqlite_repository import SqliteSecurityRepository
from .status_listeners import LoggingStatusListener, StatusHistoryListener, StatusEvent
from .error_handler import ImageAnalysisError

__all__ = [
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListenerInterface',
    'SecurityService',
    'InMemorySecurityRepository',
    'SqliteSecurityRepository',
    'LoggingStatusListener',
    'StatusHistoryListener',
    'StatusEvent',
    'ImageAnalysisError'
]
