"""Configuration and gesture stream handling shared across the service."""

from .classifier import ClassifierAdapter
from .gesture import GestureAggregator, GestureEvent, SourceState

__all__ = ['ClassifierAdapter', 'GestureAggregator', 'GestureEvent', 'SourceState']
