"""
Configuration parameters for plank coaching.

Every threshold used by the classifier, scorer, stabilizer and the
announcement helpers lives here so a session can be tuned without touching
the analysis code.
"""

from dataclasses import dataclass


@dataclass
class CoachConfig:
    """Configuration parameters for plank coaching thresholds"""
    # Visibility threshold below which a landmark is unusable
    confidence_floor: float = 0.3

    # Variant classification (normalized frame units)
    # Posture gate: max vertical offset shoulder->hip and hip->knee
    max_torso_drop: float = 0.15
    max_leg_drop: float = 0.15
    # Arms must bear weight: elbows and wrists below shoulders by this much
    min_arm_drop: float = 0.03
    # High plank: wrist drop must exceed elbow drop by this ratio
    arm_extension_ratio: float = 1.4
    min_forearm_drop: float = 0.05
    # Elbow plank: elbows and wrists at nearly the same height
    elbow_level_tolerance: float = 0.04

    # Body alignment: shoulder-hip-ankle angle (ideal: 180°)
    body_alignment_target: float = 180.0
    body_alignment_tolerance: float = 10.0
    body_alignment_penalty_per_degree: float = 3.0
    hips_low_angle: float = 170.0
    hips_high_angle: float = 190.0

    # Knee angle: legs should be straight
    knee_target: float = 170.0
    knee_penalty_per_degree: float = 2.5

    # Shoulder stack: horizontal shoulder-support offset (normalized units)
    shoulder_stack_excellent: float = 0.05
    shoulder_stack_good: float = 0.10
    # Elevation of the shoulder-support line (90° = stacked vertically)
    shoulder_stack_target: float = 90.0
    shoulder_stack_tolerance: float = 20.0
    shoulder_stack_fallback_score: float = 50.0

    # Detection stabilizer
    body_score_floor: float = 30.0
    dwell_seconds: float = 1.0
    start_delay_seconds: float = 1.5

    # Timer announcements (seconds of elapsed session time)
    checkpoint_interval: int = 10
    min_announcement_gap: int = 5

    # Voice feedback throttling
    feedback_interval: float = 5.0
    good_score: float = 70.0

    # Analysis cadence (seconds between evaluated frames)
    analysis_interval: float = 0.1

    # Number of results kept for the session summary
    history_size: int = 3000

    # Pose estimator options
    model_complexity: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_floor <= 1.0:
            raise ValueError(
                f"confidence_floor must be within [0, 1], got {self.confidence_floor}"
            )
        if self.hips_low_angle > self.hips_high_angle:
            raise ValueError("hips_low_angle must not exceed hips_high_angle")
        if self.shoulder_stack_excellent > self.shoulder_stack_good:
            raise ValueError(
                "shoulder_stack_excellent must not exceed shoulder_stack_good"
            )
        if self.arm_extension_ratio <= 1.0:
            raise ValueError("arm_extension_ratio must be greater than 1")
        if self.checkpoint_interval <= 0:
            raise ValueError("checkpoint_interval must be positive")
        if self.min_announcement_gap < 0:
            raise ValueError("min_announcement_gap must not be negative")
        for name in ('dwell_seconds', 'start_delay_seconds',
                     'feedback_interval', 'analysis_interval'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.history_size <= 0:
            raise ValueError("history_size must be positive")
