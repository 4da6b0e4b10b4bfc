"""
Event system for translation pipeline observability.

Provides decoupled event publishing and subscription for monitoring
per-language progress and provider fallbacks.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Translation pipeline event types."""

    # Request-level events
    TRANSLATION_STARTED = "translation_started"
    TRANSLATION_COMPLETED = "translation_completed"

    # Language-level events
    LANGUAGE_STARTED = "language_started"
    LANGUAGE_COMPLETED = "language_completed"
    LANGUAGE_FAILED = "language_failed"

    # Provider chain events
    PROVIDER_FAILED = "provider_failed"
    FALLBACK_USED = "fallback_used"

    # Performance events
    PERFORMANCE_METRIC = "performance_metric"


@dataclass
class Event:
    """Translation pipeline event.

    Attributes:
        type: Event type
        data: Event-specific data dictionary
        timestamp: Unix timestamp when event occurred
        source: Optional source identifier (e.g., "dispatcher")
    """
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"


class EventBus:
    """Central event bus for the translation pipeline."""

    def __init__(self):
        """Initialize event bus."""
        self._listeners: Dict[EventType, List[Callable]] = {}
        self._history: List[Event] = []
        self._record_history = False

    def subscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> None:
        """Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            callback: Function to call when event occurs (receives Event object)
        """
        self._listeners.setdefault(event_type, []).append(callback)

    def subscribe_multiple(
        self,
        event_types: List[EventType],
        callback: Callable[[Event], None]
    ) -> None:
        """Subscribe to multiple event types with same callback."""
        for event_type in event_types:
            self.subscribe(event_type, callback)

    def unsubscribe(self, event_type: EventType, callback: Callable) -> None:
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            try:
                self._listeners[event_type].remove(callback)
            except ValueError:
                pass  # Callback not found

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        Args:
            event: Event to publish
        """
        if self._record_history:
            self._history.append(event)

        for listener in list(self._listeners.get(event.type, [])):
            try:
                listener(event)
            except Exception:
                # Don't let listener errors crash the pipeline
                logger.exception(f"Event listener failed for {event.type.value}")

    def enable_history(self) -> None:
        """Enable event history recording."""
        self._record_history = True

    def disable_history(self) -> None:
        """Disable event history recording."""
        self._record_history = False

    def get_history(self) -> List[Event]:
        """Get recorded event history in chronological order."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()

    def get_events_by_type(self, event_type: EventType) -> List[Event]:
        """Get all events of a specific type from history."""
        return [e for e in self._history if e.type == event_type]


def publish(event_bus: Optional[EventBus], event: Event) -> None:
    """Publish on an optional bus."""
    if event_bus is not None:
        event_bus.publish(event)


# === Convenience Event Builders ===

def create_provider_failed_event(
    provider: str,
    target_language: str,
    error_message: str,
    position: int
) -> Event:
    """Create provider failure event.

    Args:
        provider: Backend that failed
        target_language: Language being translated
        error_message: Why the backend failed
        position: Index of the backend in the chain

    Returns:
        Event object
    """
    return Event(
        type=EventType.PROVIDER_FAILED,
        data={
            "provider": provider,
            "target_language": target_language,
            "error_message": error_message,
            "position": position
        },
        source="dispatcher"
    )


def create_fallback_event(provider: str, target_language: str, failed_providers: List[str]) -> Event:
    """Create fallback usage event (a backend other than the first one succeeded)."""
    return Event(
        type=EventType.FALLBACK_USED,
        data={
            "provider": provider,
            "target_language": target_language,
            "failed_providers": list(failed_providers)
        },
        source="dispatcher"
    )


def create_language_event(
    event_type: EventType,
    target_language: str,
    **data: Any
) -> Event:
    """Create a language-level event (started, completed, failed)."""
    return Event(
        type=event_type,
        data={"target_language": target_language, **data},
        source="orchestrator"
    )


def create_performance_metric_event(
    stage: str,
    metric_name: str,
    value: Any
) -> Event:
    """Create performance metric event.

    Args:
        stage: Pipeline stage name
        metric_name: Name of the metric
        value: Metric value

    Returns:
        Event object
    """
    return Event(
        type=EventType.PERFORMANCE_METRIC,
        data={
            "stage": stage,
            "metric_name": metric_name,
            "value": value
        },
        source=stage
    )
