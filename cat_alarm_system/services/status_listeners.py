"""Status listeners that observe the security service."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from ..models.security import AlarmStatus
from .interfaces import StatusListenerInterface
from ..utils import format_timestamp
from ..logging_config import get_logger

logger = get_logger("status_listeners")


class LoggingStatusListener(StatusListenerInterface):
    """Writes every alarm status change and cat verdict to the log."""

    def __init__(self):
        self.last_alarm_status: Optional[AlarmStatus] = None
        self.last_cat_detected: Optional[bool] = None

    def on_alarm_status_changed(self, alarm_status: AlarmStatus) -> None:
        self.last_alarm_status = alarm_status
        if alarm_status == AlarmStatus.ALARM:
            logger.warning("ALARM triggered")
        else:
            logger.info(f"Alarm status is now {alarm_status.name}")

    def on_cat_detected(self, cat_detected: bool) -> None:
        self.last_cat_detected = cat_detected
        if cat_detected:
            logger.info("Cat detected in camera image")
        else:
            logger.debug("No cat in camera image")


@dataclass
class StatusEvent:
    """A single notification received from the security service."""
    kind: str  # "alarm_status", "cat_detected"
    value: Any
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        value = self.value.name if isinstance(self.value, AlarmStatus) else self.value
        return {
            "kind": self.kind,
            "value": value,
            "timestamp": format_timestamp(self.timestamp)
        }


class StatusHistoryListener(StatusListenerInterface):
    """Keeps a bounded history of the most recent status events."""

    def __init__(self, max_events: int = 100):
        self.events: Deque[StatusEvent] = deque(maxlen=max(1, max_events))

    def on_alarm_status_changed(self, alarm_status: AlarmStatus) -> None:
        self.events.append(StatusEvent(kind="alarm_status", value=alarm_status))

    def on_cat_detected(self, cat_detected: bool) -> None:
        self.events.append(StatusEvent(kind="cat_detected", value=cat_detected))

    def get_recent_events(self, limit: Optional[int] = None) -> List[StatusEvent]:
        """Get events oldest first, optionally only the last ``limit``."""
        events = list(self.events)
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def clear(self) -> None:
        self.events.clear()
