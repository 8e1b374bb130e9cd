"""
Detection stabilizer: debounces per-frame analysis into a session lifecycle.

States, in order::

    IDLE -> BODY_CONFIRMED -> VARIANT_CONFIRMED -> TIMING_ACTIVE -> COMPLETED

The state is an immutable value; ``update`` returns a new state plus the
lifecycle events the call produced. Confirmation flags only move from False to
True. Going back is only possible through ``reset``.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

from .classifier import PlankType
from .config import CoachConfig
from .scorer import AnalysisResult

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    """Lifecycle phases of a coaching session"""
    IDLE = "idle"
    BODY_CONFIRMED = "body_confirmed"
    VARIANT_CONFIRMED = "variant_confirmed"
    TIMING_ACTIVE = "timing_active"
    COMPLETED = "completed"


class EventType(Enum):
    BODY_CONFIRMED = "body_confirmed"
    VARIANT_CONFIRMED = "variant_confirmed"
    TIMING_STARTED = "timing_started"
    SESSION_COMPLETED = "session_completed"


@dataclass(frozen=True)
class LifecycleEvent:
    """A lifecycle transition and the instant it fired"""
    type: EventType
    at: float
    plank_type: PlankType = PlankType.UNKNOWN


@dataclass(frozen=True)
class StabilizationState:
    """Debounce bookkeeping for one coaching session"""
    candidate_variant: PlankType = PlankType.UNKNOWN
    # None while no qualifying run is in progress
    candidate_since: Optional[float] = None
    body_confirmed: bool = False
    variant_confirmed: bool = False
    timing_started: bool = False
    completed: bool = False
    confirmed_variant: PlankType = PlankType.UNKNOWN
    confirmed_at: Optional[float] = None
    timing_started_at: Optional[float] = None

    @property
    def phase(self) -> SessionPhase:
        if self.completed:
            return SessionPhase.COMPLETED
        if self.timing_started:
            return SessionPhase.TIMING_ACTIVE
        if self.variant_confirmed:
            return SessionPhase.VARIANT_CONFIRMED
        if self.body_confirmed:
            return SessionPhase.BODY_CONFIRMED
        return SessionPhase.IDLE


def reset() -> StabilizationState:
    return StabilizationState()


def is_plausible_body(result: Optional[AnalysisResult], config: CoachConfig) -> bool:
    """True when every sub-score clears the floor and the variant is known."""
    if result is None or result.plank_type == PlankType.UNKNOWN:
        return False
    floor = config.body_score_floor
    return (result.body_alignment_score > floor
            and result.knee_position_score > floor
            and result.shoulder_stack_score > floor)


def _track_dwell(state: StabilizationState, now: float, result: Optional[AnalysisResult],
                 config: CoachConfig) -> Tuple[StabilizationState, List[LifecycleEvent]]:
    if result is not None and result.plank_type != PlankType.UNKNOWN:
        if result.plank_type != state.candidate_variant:
            # New candidate: restart the clock, never blend across variants
            state = replace(state, candidate_variant=result.plank_type, candidate_since=None)

    if not is_plausible_body(result, config):
        if state.candidate_since is not None:
            logger.debug("Dwell broken at %.3f", now)
        return replace(state, candidate_since=None), []

    if state.candidate_since is None:
        return replace(state, candidate_since=now), []

    if now - state.candidate_since < config.dwell_seconds:
        return state, []

    variant = state.candidate_variant
    logger.info("Body and %s plank confirmed after %.2fs", variant.value, now - state.candidate_since)
    state = replace(
        state,
        body_confirmed=True,
        variant_confirmed=True,
        confirmed_variant=variant,
        confirmed_at=now,
    )
    return state, [
        LifecycleEvent(EventType.BODY_CONFIRMED, now, variant),
        LifecycleEvent(EventType.VARIANT_CONFIRMED, now, variant),
    ]


def update(state: StabilizationState, now: float, result: Optional[AnalysisResult] = None,
           config: Optional[CoachConfig] = None) -> Tuple[StabilizationState, List[LifecycleEvent]]:
    """
    Advance the stabilizer with one analysis result.

    Args:
        state: Current state
        now: Wall-clock timestamp in seconds
        result: Analysis of the current frame, or None when no pose was seen
        config: Thresholds; defaults to CoachConfig()

    Returns:
        Tuple of (new state, lifecycle events fired by this update)
    """
    config = config or CoachConfig()
    if state.completed:
        return state, []

    events: List[LifecycleEvent] = []
    if not state.variant_confirmed:
        state, events = _track_dwell(state, now, result, config)

    if (state.variant_confirmed and not state.timing_started
            and now - state.confirmed_at >= config.start_delay_seconds):
        logger.info("Timing started for %s plank", state.confirmed_variant.value)
        state = replace(state, timing_started=True, timing_started_at=now)
        events.append(LifecycleEvent(EventType.TIMING_STARTED, now, state.confirmed_variant))

    return state, events


def stop(state: StabilizationState, now: float) -> Tuple[StabilizationState, List[LifecycleEvent]]:
    """Complete the session. A no-op unless timing is active."""
    if not state.timing_started or state.completed:
        logger.debug("Ignoring stop in phase %s", state.phase.value)
        return state, []
    logger.info("Session completed at %.3f", now)
    state = replace(state, completed=True)
    return state, [LifecycleEvent(EventType.SESSION_COMPLETED, now, state.confirmed_variant)]


def handle_transcript(state: StabilizationState, transcript: Optional[str],
                      now: float) -> Tuple[StabilizationState, List[LifecycleEvent]]:
    """React to a voice transcript; only "stop" has an effect."""
    if transcript and 'stop' in transcript.lower():
        return stop(state, now)
    return state, []
