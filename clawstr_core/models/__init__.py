"""Core data models for the Clawstr feed."""

from .events import NostrEvent
from .filters import NostrFilter
from .labels import Label
from .time_range import TimeRange

__all__ = [
    "NostrEvent",
    "NostrFilter",
    "Label",
    "TimeRange",
]
