"""
Rate limiting for spoken form corrections.
"""

from typing import Optional

from .announcements import Announcement, Priority
from .config import CoachConfig
from .scorer import AnalysisResult


class FeedbackThrottle:
    """Speaks at most one correction per interval, most critical first."""

    def __init__(self, config: Optional[CoachConfig] = None):
        self.config = config or CoachConfig()
        self.last_feedback_time: Optional[float] = None

    def offer(self, result: AnalysisResult, now: float) -> Optional[Announcement]:
        if self.last_feedback_time is not None and now - self.last_feedback_time < self.config.feedback_interval:
            return None
        if not result.feedback or result.overall_score >= self.config.good_score:
            return None

        self.last_feedback_time = now
        return Announcement(result.feedback[0], Priority.MEDIUM)

    def reset(self) -> None:
        self.last_feedback_time = None
