"""Data models for the cat alarm system."""

from .security import ArmingStatus, AlarmStatus, SensorType, Sensor
from .config import SystemConfig

__all__ = ['ArmingStatus', 'AlarmStatus', 'SensorType', 'Sensor', 'SystemConfig']
