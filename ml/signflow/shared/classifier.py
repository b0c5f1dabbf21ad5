"""
Gesture classifier boundary.

The recognition model is a black box. This module only converts what it
produces (a probability vector, or the percent-scale prediction dict of the
recognition engine) into GestureEvents for the aggregator.
"""

import logging
import time
from typing import Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

from .gesture import GestureEvent

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Wall-clock timestamp in milliseconds."""
    return int(time.time() * 1000)


class ClassifierAdapter:
    """
    Maps classifier output onto GestureEvents.

    Usage:
        adapter = ClassifierAdapter({0: "hello", 1: "thanks"})
        event = adapter.to_event(np.array([0.1, 0.9]))
        aggregator.observe(event)
    """

    def __init__(self, class_names: Union[Mapping[int, str], Sequence[str], None] = None):
        """
        Args:
            class_names: Index → label mapping (or a list in index order).
                Missing indices are labelled "class_<idx>".
        """
        if class_names is None:
            class_names = {}
        if isinstance(class_names, Mapping):
            self.idx_to_class = {int(k): v for k, v in class_names.items()}
        else:
            self.idx_to_class = dict(enumerate(class_names))

    def label_for(self, idx: int) -> str:
        return self.idx_to_class.get(idx, f"class_{idx}")

    def top_k(self, probabilities, k: int = 5) -> List[tuple]:
        """Return the k best (label, probability) pairs, best first."""
        probs = np.asarray(probabilities, dtype=np.float64).ravel()
        if probs.size == 0:
            return []
        top_k_indices = np.argsort(probs)[::-1][:k]
        return [(self.label_for(int(idx)), float(probs[idx])) for idx in top_k_indices]

    def to_event(self, probabilities, timestamp_ms: Optional[int] = None) -> Optional[GestureEvent]:
        """
        Convert one probability vector into the event for its best class.

        Returns:
            GestureEvent, or None for an empty vector
        """
        best = self.top_k(probabilities, k=1)
        if not best:
            return None
        label, confidence = best[0]
        if timestamp_ms is None:
            timestamp_ms = now_ms()
        return GestureEvent(label=label, confidence=confidence, timestamp_ms=timestamp_ms)

    @staticmethod
    def from_prediction(prediction: Dict, timestamp_ms: Optional[int] = None) -> Optional[GestureEvent]:
        """
        Convert a recognition engine prediction dict into an event.

        The engine reports confidence on a 0-100 scale and uses a sentinel
        label when its model is unavailable; those predictions produce None.

        Raises:
            ValueError: if the confidence is not a number
        """
        label = prediction.get('predicted_sign')
        if not label or label == 'model_unavailable' or prediction.get('method') == 'error':
            return None
        if timestamp_ms is None:
            timestamp_ms = now_ms()
        try:
            confidence = float(prediction.get('confidence', 0.0)) / 100.0
        except (TypeError, ValueError):
            raise ValueError('confidence must be a number')
        return GestureEvent(label=label, confidence=confidence, timestamp_ms=timestamp_ms)
