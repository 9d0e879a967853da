"""SQLite-backed security repository."""

import json
import os
import sqlite3
from typing import Any, List

from ..models.security import AlarmStatus, ArmingStatus, Sensor
from .interfaces import SecurityRepositoryInterface
from .error_handler import global_error_handler, ErrorSeverity
from ..utils import ensure_directory_exists
from ..config.defaults import DEFAULT_PATHS
from ..logging_config import get_logger

logger = get_logger("sqlite_repository")

ARMING_STATUS_KEY = "arming_status"
ALARM_STATUS_KEY = "alarm_status"
CAT_DETECTED_KEY = "cat_detected"


class SqliteSecurityRepository(SecurityRepositoryInterface):
    """Stores sensors and system status in a SQLite database.

    Sensors live in the ``sensors`` table keyed by name and type. Arming
    status, alarm status and the cat flag are JSON values in the
    ``system_state`` key/value table. Missing state reads as the defaults
    of a freshly installed system: disarmed, no alarm, no cat.
    """

    def __init__(self, database_path: str = DEFAULT_PATHS["database_file"]):
        """
        Initialize repository.

        Args:
            database_path: Path to SQLite database file
        """
        self.database_path = database_path

        global_error_handler.register_component("sqlite_repository")

        self._initialize_database()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.database_path)

    def _initialize_database(self) -> None:
        """Create the database file and tables."""
        ensure_directory_exists(os.path.dirname(self.database_path))

        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS sensors (
                    name TEXT NOT NULL,
                    sensor_type TEXT NOT NULL,
                    active INTEGER NOT NULL DEFAULT 0,
                    PRIMARY KEY (name, sensor_type)
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS system_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

        logger.info(f"Security database initialized at {self.database_path}")

    def _execute(self, query: str, params: tuple = ()) -> List[tuple]:
        try:
            with self._connect() as conn:
                cursor = conn.execute(query, params)
                return cursor.fetchall()
        except sqlite3.Error as e:
            global_error_handler.handle_error("sqlite_repository", e, ErrorSeverity.HIGH)
            raise

    def _get_state(self, key: str, default: Any) -> Any:
        rows = self._execute("SELECT value FROM system_state WHERE key = ?", (key,))
        if not rows:
            return default
        return json.loads(rows[0][0])

    def _set_state(self, key: str, value: Any) -> None:
        self._execute(
            "INSERT OR REPLACE INTO system_state (key, value) VALUES (?, ?)",
            (key, json.dumps(value))
        )

    def add_sensor(self, sensor: Sensor) -> None:
        self._execute(
            "INSERT OR REPLACE INTO sensors (name, sensor_type, active) VALUES (?, ?, ?)",
            (sensor.name, sensor.sensor_type.value, int(sensor.active))
        )
        logger.debug(f"Added sensor {sensor.name}")

    def remove_sensor(self, sensor: Sensor) -> None:
        self._execute(
            "DELETE FROM sensors WHERE name = ? AND sensor_type = ?",
            (sensor.name, sensor.sensor_type.value)
        )
        logger.debug(f"Removed sensor {sensor.name}")

    def update_sensor(self, sensor: Sensor) -> None:
        # An unknown sensor is stored rather than dropped
        self.add_sensor(sensor)

    def get_sensors(self) -> List[Sensor]:
        rows = self._execute(
            "SELECT name, sensor_type, active FROM sensors ORDER BY name, sensor_type"
        )
        return [Sensor.from_dict({"name": name, "sensor_type": sensor_type, "active": active})
                for name, sensor_type, active in rows]

    def get_arming_status(self) -> ArmingStatus:
        return ArmingStatus(self._get_state(ARMING_STATUS_KEY, ArmingStatus.DISARMED.value))

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._set_state(ARMING_STATUS_KEY, arming_status.value)

    def get_alarm_status(self) -> AlarmStatus:
        return AlarmStatus(self._get_state(ALARM_STATUS_KEY, AlarmStatus.NO_ALARM.value))

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._set_state(ALARM_STATUS_KEY, alarm_status.value)

    def is_cat_detected(self) -> bool:
        return bool(self._get_state(CAT_DETECTED_KEY, False))

    def set_cat_detected(self, cat_detected: bool) -> None:
        self._set_state(CAT_DETECTED_KEY, bool(cat_detected))
