"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Any, List

from ..models.security import AlarmStatus, ArmingStatus, Sensor


class SecurityRepositoryInterface(ABC):
    """Interface for persisting sensors and system status."""

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor to the store."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor from the store."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Replace the stored copy of a sensor."""
        pass

    @abstractmethod
    def get_sensors(self) -> List[Sensor]:
        """Get all known sensors."""
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the persisted arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Persist the arming status."""
        pass

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the persisted alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status."""
        pass

    @abstractmethod
    def is_cat_detected(self) -> bool:
        """Get the cached result of the last image analysis."""
        pass

    @abstractmethod
    def set_cat_detected(self, cat_detected: bool) -> None:
        """Cache the result of the last image analysis."""
        pass


class ImageServiceInterface(ABC):
    """Interface for image analysis."""

    @abstractmethod
    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """Check whether the image shows a cat with at least the given confidence (percent)."""
        pass


class StatusListenerInterface(ABC):
    """Interface for receiving security status updates."""

    @abstractmethod
    def on_alarm_status_changed(self, alarm_status: AlarmStatus) -> None:
        """Called after every alarm status change."""
        pass

    @abstractmethod
    def on_cat_detected(self, cat_detected: bool) -> None:
        """Called after every image analysis."""
        pass
