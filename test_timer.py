"""
Unit tests for the session timer, announcements and feedback throttle
"""

import pytest

from plank_coach.announcements import Priority, checkpoint_message, format_duration
from plank_coach.classifier import PlankType
from plank_coach.config import CoachConfig
from plank_coach.scorer import AnalysisResult
from plank_coach.throttle import FeedbackThrottle
from plank_coach.timer import SessionTimer


class TestElapsedTime:

    def test_not_started(self):
        timer = SessionTimer()
        assert timer.elapsed(100.0) == 0.0
        assert not timer.running
        assert timer.tick(100.0) is None

    def test_running(self):
        timer = SessionTimer()
        timer.start(100.0)
        assert timer.elapsed(107.5) == pytest.approx(7.5)

    def test_pause_and_resume(self):
        """5s paused are not counted: reads 15s, not 20s."""
        timer = SessionTimer()
        timer.start(0.0)
        assert timer.pause(10.0)
        assert timer.elapsed(12.0) == pytest.approx(10.0)
        assert timer.resume(15.0)
        assert timer.elapsed(20.0) == pytest.approx(15.0)

    def test_pause_twice_is_noop(self):
        timer = SessionTimer()
        timer.start(0.0)
        timer.pause(10.0)
        assert not timer.pause(11.0)
        assert timer.elapsed(30.0) == pytest.approx(10.0)

    def test_resume_while_running_is_noop(self):
        timer = SessionTimer()
        timer.start(0.0)
        assert not timer.resume(5.0)
        assert timer.elapsed(5.0) == pytest.approx(5.0)

    def test_resume_before_start_is_noop(self):
        assert not SessionTimer().resume(5.0)

    def test_start_twice_keeps_first_instant(self):
        timer = SessionTimer()
        timer.start(0.0)
        timer.start(4.0)
        assert timer.elapsed(6.0) == pytest.approx(6.0)

    def test_monotonic_while_running(self):
        timer = SessionTimer()
        timer.start(0.0)
        timer.pause(3.0)
        timer.resume(4.0)
        readings = [timer.elapsed(4.0 + i * 0.25) for i in range(20)]
        assert readings == sorted(readings)


class TestCheckpoints:

    def test_fires_on_interval(self):
        timer = SessionTimer()
        timer.start(0.0)
        assert timer.tick(9.9) is None

        announcement = timer.tick(10.0)
        assert announcement.text == "10 seconds completed. Keep holding!"
        assert announcement.priority == Priority.MEDIUM

    def test_jittered_ticks_announce_once(self):
        timer = SessionTimer()
        timer.start(0.0)
        fired = [timer.tick(t) for t in (10.0, 10.3, 10.6, 10.9)]
        assert sum(a is not None for a in fired) == 1

    def test_every_interval(self):
        timer = SessionTimer()
        timer.start(0.0)
        texts = [a.text for a in (timer.tick(float(t)) for t in range(0, 61)) if a]
        assert len(texts) == 6
        assert texts[-1] == "1 minute completed. Keep holding!"

    def test_minimum_gap(self):
        timer = SessionTimer(CoachConfig(checkpoint_interval=2, min_announcement_gap=5))
        timer.start(0.0)
        fired = [t for t in range(0, 11) if timer.tick(float(t))]
        assert fired == [2, 8]

    def test_no_checkpoints_while_paused(self):
        timer = SessionTimer()
        timer.start(0.0)
        timer.pause(10.0)
        assert timer.tick(10.0) is None

    def test_checkpoint_after_resume(self):
        timer = SessionTimer()
        timer.start(0.0)
        timer.pause(8.0)
        timer.resume(20.0)
        assert timer.tick(21.0) is None
        assert timer.tick(22.0).text.startswith("10 seconds")


class TestAnnouncementText:

    @pytest.mark.parametrize('seconds, text', [
        (1, "1 second"),
        (10, "10 seconds"),
        (60, "1 minute"),
        (61, "1 minute 1 second"),
        (70, "1 minute 10 seconds"),
        (120, "2 minutes"),
        (130, "2 minutes 10 seconds"),
    ])
    def test_format_duration(self, seconds, text):
        assert format_duration(seconds) == text

    def test_checkpoint_message(self):
        assert checkpoint_message(90) == "1 minute 30 seconds completed. Keep holding!"


def low_result(message="Hips too low"):
    return AnalysisResult(
        plank_type=PlankType.HIGH,
        body_alignment_score=20,
        knee_position_score=100,
        shoulder_stack_score=60,
        overall_score=60,
        feedback=(message, "Straighten your legs"),
    )


class TestFeedbackThrottle:

    def test_one_announcement_per_interval(self):
        throttle = FeedbackThrottle()
        announcements = [throttle.offer(low_result(), t) for t in (0.0, 0.5, 1.0, 1.5, 2.0)]
        spoken = [a for a in announcements if a]

        assert len(spoken) == 1
        assert spoken[0].text == "Hips too low"
        assert spoken[0].priority == Priority.MEDIUM

    def test_speaks_again_after_interval(self):
        throttle = FeedbackThrottle()
        assert throttle.offer(low_result(), 0.0)
        assert throttle.offer(low_result(), 4.9) is None
        assert throttle.offer(low_result("Straighten your legs"), 5.0).text == "Straighten your legs"

    def test_good_results_are_silent(self):
        throttle = FeedbackThrottle()
        good = AnalysisResult(overall_score=70, feedback=("Straighten your legs",))
        assert throttle.offer(good, 0.0) is None
        # Silence does not consume the interval
        assert throttle.offer(low_result(), 0.1) is not None

    def test_empty_feedback_is_silent(self):
        throttle = FeedbackThrottle()
        assert throttle.offer(AnalysisResult(overall_score=10), 0.0) is None

    def test_reset(self):
        throttle = FeedbackThrottle()
        throttle.offer(low_result(), 0.0)
        throttle.reset()
        assert throttle.offer(low_result(), 1.0) is not None
