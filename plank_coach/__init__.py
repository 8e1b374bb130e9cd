"""
Plank coaching from pose landmarks.

Scores plank form, classifies high vs. elbow planks and debounces the noisy
per-frame signal into a timed coaching session.
"""

from .announcements import Announcement, Priority
from .classifier import PlankType, classify
from .config import CoachConfig
from .geometry import angle_at_vertex
from .landmarks import Landmark
from .scorer import AnalysisResult, score
from .session import AnalysisRateLimiter, CoachingSession, FrameOutcome
from .stabilizer import EventType, LifecycleEvent, SessionPhase, StabilizationState
from .throttle import FeedbackThrottle
from .timer import SessionTimer

__all__ = [
    'AnalysisRateLimiter',
    'AnalysisResult',
    'Announcement',
    'CoachConfig',
    'CoachingSession',
    'EventType',
    'FeedbackThrottle',
    'FrameOutcome',
    'Landmark',
    'LifecycleEvent',
    'PlankType',
    'Priority',
    'SessionPhase',
    'SessionTimer',
    'StabilizationState',
    'angle_at_vertex',
    'classify',
    'score',
]
