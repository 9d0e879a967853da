"""Security system data models."""

from dataclasses import dataclass, field
from enum import Enum


class ArmingStatus(Enum):
    """Arming modes selectable by the user."""
    DISARMED = "disarmed"
    ARMED_HOME = "armed_home"
    ARMED_AWAY = "armed_away"

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


class AlarmStatus(Enum):
    """Three-level alarm escalation state."""
    NO_ALARM = "no_alarm"
    PENDING_ALARM = "pending_alarm"
    ALARM = "alarm"


class SensorType(Enum):
    """Kinds of sensor attached to the system."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"


@dataclass(unsafe_hash=True)
class Sensor:
    """A door, window or motion sensor.

    Two sensors are the same sensor when name and type match; the
    activation flag is state, not identity.
    """
    name: str
    sensor_type: SensorType
    active: bool = field(default=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sensor_type": self.sensor_type.value,
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sensor":
        return cls(
            name=data["name"],
            sensor_type=SensorType(data["sensor_type"]),
            active=bool(data.get("active", False)),
        )
