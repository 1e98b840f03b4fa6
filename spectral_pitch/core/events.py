"""Event system for publishing detection results."""

from typing import Dict, List, Callable, Any
from enum import Enum, auto

from ..logging_config import get_logger

logger = get_logger(__name__)


class PitchEventType(Enum):
    """Event types emitted by the detection service."""

    PITCH_DETECTED = auto()
    ERROR = auto()


class EventEmitter:
    """Dispatches events to registered listeners in registration order."""

    def __init__(self):
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event type to listen for
            callback: Function to call when the event occurs
        """
        listeners = self._listeners.setdefault(event_type, [])
        if callback not in listeners:
            listeners.append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Emit an event.

        A failing listener is logged and does not prevent the remaining
        listeners from running.
        """
        for callback in self._listeners.get(event_type, []):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}")
