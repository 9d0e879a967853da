"""Security service: the alarm status decision engine."""

from typing import Any, Dict, List

from ..models.security import AlarmStatus, ArmingStatus, Sensor
from ..config.defaults import SYSTEM_CONSTANTS
from ..utils import all_sensors_in_state
from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListenerInterface
)
from ..logging_config import get_logger

logger = get_logger("security_service")


class SecurityService:
    """Receives changes to the security system and decides the alarm status.

    Every state change is written through the repository. Alarm status
    changes are broadcast to the registered status listeners. The service
    holds no lock; callers running on several threads must serialize
    access themselves.
    """

    def __init__(self,
                 security_repository: SecurityRepositoryInterface,
                 image_service: ImageServiceInterface,
                 cat_confidence_threshold: float = SYSTEM_CONSTANTS["CAT_CONFIDENCE_THRESHOLD"]):
        """
        Initialize security service.

        Args:
            security_repository: Store for sensors and system status
            image_service: Image analysis used by process_image
            cat_confidence_threshold: Confidence percentage passed to the image service
        """
        self.security_repository = security_repository
        self.image_service = image_service
        self.cat_confidence_threshold = cat_confidence_threshold
        # Keyed by identity so listeners need not be hashable
        self._status_listeners: Dict[int, StatusListenerInterface] = {}

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Set the arming status, updating the alarm status or resetting sensors.

        The arming status is persisted last so that any alarm status change
        is already stored when the new arming status becomes visible.
        """
        if arming_status == ArmingStatus.DISARMED:
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        elif self.is_cat_detected() and arming_status == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)
        else:
            self._reset_sensors()

        self.security_repository.set_arming_status(arming_status)
        logger.info(f"Arming status set to {arming_status.name}")

    def report_cat_detected(self, cat: bool) -> bool:
        """Update the alarm status for an image analysis verdict.

        Listeners are told about the verdict whether or not the alarm
        status changed. The cached flag is left to the caller.
        """
        if cat and self.get_arming_status() == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)
        elif not cat and all_sensors_in_state(self.get_sensors(), False):
            self.set_alarm_status(AlarmStatus.NO_ALARM)

        for listener in list(self._status_listeners.values()):
            listener.on_cat_detected(cat)
        return cat

    def add_status_listener(self, status_listener: StatusListenerInterface) -> None:
        """Register a listener for alarm system updates."""
        self._status_listeners.setdefault(id(status_listener), status_listener)

    def remove_status_listener(self, status_listener: StatusListenerInterface) -> None:
        self._status_listeners.pop(id(status_listener), None)

    @property
    def status_listeners(self) -> List[StatusListenerInterface]:
        return list(self._status_listeners.values())

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Change the alarm status and notify all listeners."""
        self.security_repository.set_alarm_status(alarm_status)
        logger.info(f"Alarm status set to {alarm_status.name}")
        for listener in list(self._status_listeners.values()):
            listener.on_alarm_status_changed(alarm_status)

    def handle_sensor_activated(self, previous_state: bool) -> None:
        """Escalate the alarm status after a sensor was activated."""
        if self.security_repository.get_arming_status() == ArmingStatus.DISARMED:
            return

        alarm_status = self.security_repository.get_alarm_status()
        if alarm_status == AlarmStatus.NO_ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            if previous_state:
                self.set_alarm_status(AlarmStatus.ALARM)
            # Always true under the DISARMED guard above
            elif self.get_arming_status() in (ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY):
                self.set_alarm_status(AlarmStatus.ALARM)

    def handle_sensor_deactivated(self, previous_state: bool) -> None:
        """De-escalate the alarm status after a sensor was deactivated.

        Called directly, this also steps an ALARM back to PENDING_ALARM.
        change_sensor_activation_status never reaches that branch because
        it stops early while the alarm is on.
        """
        if not previous_state:
            return

        alarm_status = self.security_repository.get_alarm_status()
        if alarm_status == AlarmStatus.PENDING_ALARM:
            if all_sensors_in_state(self.get_sensors(), False):
                self.set_alarm_status(AlarmStatus.NO_ALARM)
        elif alarm_status == AlarmStatus.ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Change the activation status of a sensor and update the alarm status if needed."""
        previous_state = sensor.active
        sensor.active = active
        self.security_repository.update_sensor(sensor)
        logger.debug(f"Sensor {sensor.name} ({sensor.sensor_type.name}) "
                     f"changed from {previous_state} to {active}")

        if self.security_repository.get_alarm_status() == AlarmStatus.ALARM:
            return

        if active:
            self.handle_sensor_activated(previous_state)
        else:
            self.handle_sensor_deactivated(previous_state)

    def _reset_sensors(self) -> None:
        """Deactivate every sensor, writing each one back to the repository."""
        for sensor in self.get_sensors():
            sensor.active = False
            self.security_repository.update_sensor(sensor)

    def process_image(self, current_camera_image: Any) -> None:
        """Analyse a camera image for cats and update the alarm status.

        The cached cat flag is written only after the analysis and the
        status update succeed.
        """
        cat = self.image_service.image_contains_cat(current_camera_image, self.cat_confidence_threshold)
        logger.debug(f"Image analysis result: cat={cat}")
        self.set_cat_detected(self.report_cat_detected(cat))

    def get_alarm_status(self) -> AlarmStatus:
        return self.security_repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.security_repository.get_arming_status()

    def get_sensors(self) -> List[Sensor]:
        return list(self.security_repository.get_sensors())

    def add_sensor(self, sensor: Sensor) -> None:
        self.security_repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        self.security_repository.remove_sensor(sensor)

    def is_cat_detected(self) -> bool:
        return self.security_repository.is_cat_detected()

    def set_cat_detected(self, cat_detected: bool) -> None:
        self.security_repository.set_cat_detected(cat_detected)
