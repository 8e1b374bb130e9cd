"""
Session timer with periodic time-checkpoint announcements.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .announcements import Announcement, Priority, checkpoint_message
from .config import CoachConfig

logger = logging.getLogger(__name__)


@dataclass
class SessionTimerState:
    """Elapsed-time bookkeeping for an active session"""
    start_instant: Optional[float] = None
    # Elapsed seconds captured at the last pause
    frozen_elapsed: float = 0.0
    running: bool = False
    last_announcement_elapsed: Optional[int] = None


class SessionTimer:
    """
    Tracks active plank time across pauses.

    Elapsed time is ``now - start_instant`` while running and frozen while
    paused; resuming shifts ``start_instant`` so no paused time is counted.
    """

    def __init__(self, config: Optional[CoachConfig] = None):
        self.config = config or CoachConfig()
        self.state = SessionTimerState()

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def started(self) -> bool:
        return self.state.start_instant is not None

    def start(self, now: float) -> None:
        if self.started:
            logger.debug("Timer already started")
            return
        self.state.start_instant = now
        self.state.frozen_elapsed = 0.0
        self.state.running = True
        logger.info("Session timer started")

    def elapsed(self, now: float) -> float:
        if not self.started:
            return 0.0
        if not self.state.running:
            return self.state.frozen_elapsed
        # Never report less than what was already frozen, even if the clock jitters
        return max(self.state.frozen_elapsed, now - self.state.start_instant)

    def pause(self, now: float) -> bool:
        """Freeze elapsed time. Returns False when there was nothing to pause."""
        if not self.state.running:
            return False
        self.state.frozen_elapsed = self.elapsed(now)
        self.state.running = False
        logger.info("Session timer paused at %.1fs", self.state.frozen_elapsed)
        return True

    def resume(self, now: float) -> bool:
        """Continue counting from the frozen elapsed time."""
        if self.state.running or not self.started:
            return False
        self.state.start_instant = now - self.state.frozen_elapsed
        self.state.running = True
        logger.info("Session timer resumed at %.1fs", self.state.frozen_elapsed)
        return True

    def tick(self, now: float) -> Optional[Announcement]:
        """
        Check whether a time checkpoint is due.

        Fires on positive multiples of the checkpoint interval, provided the
        previous checkpoint is at least the minimum gap behind, so repeated
        ticks within the same second announce once.
        """
        if not self.state.running:
            return None

        elapsed = int(self.elapsed(now))
        if elapsed <= 0 or elapsed % self.config.checkpoint_interval != 0:
            return None

        last = self.state.last_announcement_elapsed
        if last is not None and elapsed - last < self.config.min_announcement_gap:
            return None

        self.state.last_announcement_elapsed = elapsed
        logger.debug("Checkpoint at %ds", elapsed)
        return Announcement(checkpoint_message(elapsed), Priority.MEDIUM)
