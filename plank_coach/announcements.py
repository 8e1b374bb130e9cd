"""
Spoken announcement records handed to the speech collaborator.
"""

from dataclasses import dataclass
from enum import Enum

from .classifier import PlankType


class Priority(Enum):
    """Announcement priority; session-control events are HIGH"""
    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class Announcement:
    text: str
    priority: Priority = Priority.MEDIUM


BODY_IDENTIFIED = "Full body identified"
TIMER_STARTED = "Timer started"
SESSION_PAUSED = "Session paused"
SESSION_RESUMED = "Session resumed"
SESSION_COMPLETED = "Session completed"


def plank_type_message(plank_type: PlankType) -> str:
    return f"Plank type: {plank_type.value}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_duration(elapsed_seconds: int) -> str:
    """
    Spoken form of an elapsed duration.

    >>> format_duration(70)
    '1 minute 10 seconds'
    """
    minutes, seconds = divmod(int(elapsed_seconds), 60)
    if minutes == 0:
        return _plural(seconds, 'second')
    text = _plural(minutes, 'minute')
    if seconds:
        text += ' ' + _plural(seconds, 'second')
    return text


def checkpoint_message(elapsed_seconds: int) -> str:
    return f"{format_duration(elapsed_seconds)} completed. Keep holding!"
