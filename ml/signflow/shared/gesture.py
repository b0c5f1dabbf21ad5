"""
Gesture Stream Aggregator

Turns the noisy stream of classifier predictions into a stable
"currently recognised sign" plus a short recency-ordered history.

The aggregator owns no timers. The gesture source polls the classifier
(roughly every 300ms) and pushes each prediction in through observe().
"""

import logging
import math
from collections import deque
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Deque, Dict, List, Optional

from .config import GESTURE_CONFIG

logger = logging.getLogger(__name__)


class SourceState(Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class GestureEvent:
    """A single classification pushed by the gesture source."""
    label: str
    confidence: float      # Clamped into [0, 1]
    timestamp_ms: int

    def __post_init__(self):
        confidence = float(self.confidence)
        if math.isnan(confidence):
            confidence = 0.0
        object.__setattr__(self, 'confidence', min(1.0, max(0.0, confidence)))
        object.__setattr__(self, 'label', str(self.label))
        object.__setattr__(self, 'timestamp_ms', int(self.timestamp_ms))

    def to_dict(self) -> Dict:
        return asdict(self)


class GestureAggregator:
    """
    Debounces classifier output into a current label and a bounded history.

    Not thread-safe: observe() must be called from a single context or be
    serialized by the caller.

    Usage:
        aggregator = GestureAggregator()
        aggregator.start()
        aggregator.observe(GestureEvent("wave", 0.92, 1000))
        aggregator.current_label()   # "wave"
        aggregator.stop()            # clears everything
    """

    def __init__(self, confidence_threshold: Optional[float] = None,
                 history_size: Optional[int] = None):
        """
        Args:
            confidence_threshold: Events must score strictly above this to count.
                None = use config default
            history_size: Maximum number of distinct labels kept.
                None = use config default
        """
        if confidence_threshold is None:
            confidence_threshold = GESTURE_CONFIG['confidence_threshold']
        if history_size is None:
            history_size = GESTURE_CONFIG['history_size']

        self.confidence_threshold = confidence_threshold
        self.history_size = history_size
        self._history: Deque[GestureEvent] = deque(maxlen=history_size)
        self._current_label = ""
        self._state = SourceState.IDLE

    @property
    def state(self) -> SourceState:
        return self._state

    def start(self):
        """Mark the gesture source as active."""
        if self._state is SourceState.IDLE:
            logger.info("Gesture source activated")
        self._state = SourceState.ACTIVE

    def stop(self):
        """Mark the gesture source as inactive and drop all state."""
        if self._state is SourceState.ACTIVE:
            logger.info("Gesture source deactivated")
        self._state = SourceState.IDLE
        self.reset()

    def observe(self, event: GestureEvent):
        """
        Feed one classification into the aggregator.

        Low-confidence events clear the current label but leave the
        history untouched. Accepted events move their label to the front
        of the history.
        """
        # A source that delivers events is active even if start() was skipped
        self._state = SourceState.ACTIVE

        if event.confidence <= self.confidence_threshold:
            self._current_label = ""
            logger.debug(f"Discarded {event.label!r} at {event.confidence:.2f}")
            return

        self._current_label = event.label

        for existing in list(self._history):
            if existing.label == event.label:
                self._history.remove(existing)
        self._history.appendleft(event)

        logger.debug(f"Accepted {event.label!r} at {event.confidence:.2f}")

    def reset(self):
        """Clear the current label and the history."""
        self._current_label = ""
        self._history.clear()

    def current_label(self) -> str:
        return self._current_label

    def recent_history(self) -> List[GestureEvent]:
        """History snapshot, most recent first."""
        return list(self._history)

    def snapshot(self) -> Dict:
        """JSON-friendly view of the aggregator state."""
        return {
            'state': self._state.value,
            'current_label': self._current_label,
            'history': [e.to_dict() for e in self._history],
        }
