"""In-memory security repository."""

from typing import Dict, List, Tuple

from ..models.security import AlarmStatus, ArmingStatus, Sensor, SensorType
from .interfaces import SecurityRepositoryInterface


class InMemorySecurityRepository(SecurityRepositoryInterface):
    """Keeps sensors and system status in process memory.

    Sensors are held by identity (name and type); update_sensor replaces
    the stored object so later reads see the caller's copy.
    """

    def __init__(self,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
                 cat_detected: bool = False):
        self._sensors: Dict[Tuple[str, SensorType], Sensor] = {}
        self._arming_status = arming_status
        self._alarm_status = alarm_status
        self._cat_detected = cat_detected

    @staticmethod
    def _key(sensor: Sensor) -> Tuple[str, SensorType]:
        return (sensor.name, sensor.sensor_type)

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors[self._key(sensor)] = sensor

    def remove_sensor(self, sensor: Sensor) -> None:
        self._sensors.pop(self._key(sensor), None)

    def update_sensor(self, sensor: Sensor) -> None:
        self._sensors[self._key(sensor)] = sensor

    def get_sensors(self) -> List[Sensor]:
        return sorted(self._sensors.values(), key=lambda s: (s.name, s.sensor_type.value))

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status

    def is_cat_detected(self) -> bool:
        return self._cat_detected

    def set_cat_detected(self, cat_detected: bool) -> None:
        self._cat_detected = cat_detected
