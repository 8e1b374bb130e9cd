"""
Coaching session controller.

Owns the per-session state (stabilizer, timer, feedback throttle, analysis
rate limiter) and is the single path that mutates it. Each call returns what
the display and speech collaborators need; nothing here blocks or spawns
background work.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional

import numpy as np

from . import announcements as messages
from . import stabilizer
from .announcements import Announcement, Priority
from .classifier import PlankType, classify
from .config import CoachConfig
from .estimator import frame_from_results
from .scorer import AnalysisResult, round_half_up, score
from .stabilizer import EventType, LifecycleEvent, SessionPhase, StabilizationState
from .throttle import FeedbackThrottle
from .timer import SessionTimer

logger = logging.getLogger(__name__)


class AnalysisRateLimiter:
    """Admits frames at most once per interval; extra frames are dropped, not queued."""

    def __init__(self, interval: float):
        self.interval = interval
        self._last_admitted: Optional[float] = None

    def allow(self, now: float) -> bool:
        if self._last_admitted is not None and now - self._last_admitted < self.interval:
            return False
        self._last_admitted = now
        return True

    def reset(self) -> None:
        self._last_admitted = None


@dataclass
class FrameOutcome:
    """What one processed frame produced"""
    result: Optional[AnalysisResult]
    phase: SessionPhase
    events: List[LifecycleEvent] = field(default_factory=list)
    announcements: List[Announcement] = field(default_factory=list)


class CoachingSession:
    """
    One plank coaching session.

    Feed estimator results to ``process``; control the session with
    ``pause``, ``resume``, ``stop`` or ``handle_transcript``.
    """

    def __init__(self, config: Optional[CoachConfig] = None):
        self.config = config or CoachConfig()
        self.state: StabilizationState = stabilizer.reset()
        self.timer = SessionTimer(self.config)
        self.throttle = FeedbackThrottle(self.config)
        self.rate_limiter = AnalysisRateLimiter(self.config.analysis_interval)
        self.history: Deque[AnalysisResult] = deque(maxlen=self.config.history_size)
        self.voice_enabled = True
        self.last_result: Optional[AnalysisResult] = None

        logger.info("CoachingSession initialized with config: %s", self.config)

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def plank_type(self) -> PlankType:
        return self.state.confirmed_variant

    def process(self, results: Any, now: Optional[float] = None) -> Optional[FrameOutcome]:
        """
        Analyze one estimator result.

        Args:
            results: Pose estimator output (see estimator.frame_from_results)
            now: Timestamp in seconds; defaults to time.time()

        Returns:
            FrameOutcome, or None when the frame was dropped by the rate
            limiter or the session is already completed
        """
        now = time.time() if now is None else now
        if self.state.completed:
            return None

        frame = frame_from_results(results)
        if frame is None:
            # No person in view: continuity breaks but the grace timer still runs
            self.state, events = stabilizer.update(self.state, now, None, self.config)
            announcements = self._announce_events(events)
            announcements.extend(self._tick(now))
            return FrameOutcome(None, self.phase, events, self._voice(announcements))

        if not self.rate_limiter.allow(now):
            return None

        plank_type = classify(frame, self.config)
        result = score(frame, plank_type, self.config)
        self.last_result = result
        logger.debug(
            "Frame %.3f: %s plank, score %d, feedback %s",
            now, plank_type.value, result.overall_score, list(result.feedback),
        )

        self.state, events = stabilizer.update(self.state, now, result, self.config)
        announcements = self._announce_events(events)

        if self.phase == SessionPhase.TIMING_ACTIVE and self.timer.running:
            self.history.append(result)
            if self.voice_enabled:
                correction = self.throttle.offer(result, now)
                if correction is not None:
                    announcements.append(correction)

        announcements.extend(self._tick(now))
        return FrameOutcome(result, self.phase, events, self._voice(announcements))

    def tick(self, now: Optional[float] = None) -> List[Announcement]:
        """Advance timers without a frame (e.g. from a once-per-second loop)."""
        now = time.time() if now is None else now
        if self.state.completed:
            return []
        self.state, events = stabilizer.update(self.state, now, None, self.config)
        announcements = self._announce_events(events)
        announcements.extend(self._tick(now))
        return self._voice(announcements)

    def pause(self, now: Optional[float] = None) -> List[Announcement]:
        now = time.time() if now is None else now
        if self.phase != SessionPhase.TIMING_ACTIVE or not self.timer.pause(now):
            logger.debug("Ignoring pause in phase %s", self.phase.value)
            return []
        return self._voice([Announcement(messages.SESSION_PAUSED, Priority.HIGH)])

    def resume(self, now: Optional[float] = None) -> List[Announcement]:
        now = time.time() if now is None else now
        if self.phase != SessionPhase.TIMING_ACTIVE or not self.timer.resume(now):
            logger.debug("Ignoring resume in phase %s", self.phase.value)
            return []
        return self._voice([Announcement(messages.SESSION_RESUMED, Priority.HIGH)])

    def toggle_pause(self, now: Optional[float] = None) -> List[Announcement]:
        if self.timer.running:
            return self.pause(now)
        return self.resume(now)

    def stop(self, now: Optional[float] = None) -> List[Announcement]:
        now = time.time() if now is None else now
        self.state, events = stabilizer.stop(self.state, now)
        return self._voice(self._announce_events(events))

    def handle_transcript(self, transcript: Optional[str], now: Optional[float] = None) -> List[Announcement]:
        """React to a recognized utterance; only "stop" ends the session."""
        now = time.time() if now is None else now
        self.state, events = stabilizer.handle_transcript(self.state, transcript, now)
        return self._voice(self._announce_events(events))

    def toggle_voice(self) -> bool:
        self.voice_enabled = not self.voice_enabled
        logger.info("Voice feedback %s", "enabled" if self.voice_enabled else "disabled")
        return self.voice_enabled

    def reset(self) -> None:
        """Start over from IDLE, discarding all session state."""
        self.state = stabilizer.reset()
        self.timer = SessionTimer(self.config)
        self.throttle.reset()
        self.rate_limiter.reset()
        self.history.clear()
        self.last_result = None
        logger.info("Session reset")

    def summary(self, now: Optional[float] = None) -> Dict[str, Any]:
        """Get a summary of the current/last session."""
        now = time.time() if now is None else now
        if self.history:
            body = round_half_up(float(np.mean([r.body_alignment_score for r in self.history])))
            knee = round_half_up(float(np.mean([r.knee_position_score for r in self.history])))
            stack = round_half_up(float(np.mean([r.shoulder_stack_score for r in self.history])))
            average = round_half_up((body + knee + stack) / 3)
        else:
            body = knee = stack = average = 0

        return {
            'duration': int(self.timer.elapsed(now)),
            'plank_type': self.plank_type.value,
            'average_score': average,
            'body_alignment_score': body,
            'knee_position_score': knee,
            'shoulder_stack_score': stack,
            'samples': len(self.history),
            'completed': self.state.completed,
        }

    def _tick(self, now: float) -> List[Announcement]:
        checkpoint = self.timer.tick(now)
        return [checkpoint] if checkpoint is not None else []

    def _announce_events(self, events: List[LifecycleEvent]) -> List[Announcement]:
        announcements = []
        for event in events:
            if event.type == EventType.BODY_CONFIRMED:
                announcements.append(Announcement(messages.BODY_IDENTIFIED, Priority.HIGH))
            elif event.type == EventType.VARIANT_CONFIRMED:
                announcements.append(Announcement(messages.plank_type_message(event.plank_type), Priority.HIGH))
            elif event.type == EventType.TIMING_STARTED:
                self.timer.start(event.at)
                announcements.append(Announcement(messages.TIMER_STARTED, Priority.HIGH))
            elif event.type == EventType.SESSION_COMPLETED:
                self.timer.pause(event.at)
                announcements.append(Announcement(messages.SESSION_COMPLETED, Priority.HIGH))
                logger.info("Session summary: %s", self.summary(event.at))
        return announcements

    def _voice(self, announcements: List[Announcement]) -> List[Announcement]:
        return announcements if self.voice_enabled else []
