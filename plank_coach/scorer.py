"""
Per-frame plank form scoring.

Three criteria are scored independently, each gated on landmark confidence:

1. Body alignment (shoulder-hip-ankle should be ~180°)
2. Knee position (legs straight)
3. Shoulder stack (shoulders over wrists for a high plank, over elbows for
   an elbow plank)

The overall score is the rounded mean of the three sub-scores.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .classifier import PlankType
from .config import CoachConfig
from .geometry import angle_at_vertex, body_line_angle, elevation_angle, is_computable
from .landmarks import LandmarkFrame, is_usable, select_side, side_landmark

FEEDBACK_MESSAGES = {
    'hips_low': "Hips too low - lift your hips into a straight line",
    'hips_high': "Hips too high - lower your hips in line with your shoulders",
    'alignment_low_visibility': "Low visibility - make sure your shoulders, hips and ankles are in view",
    'bent_legs': "Straighten your legs",
    'knee_low_visibility': "Low visibility - make sure your legs are in view",
    'shoulders_over_wrists': "Shoulders not over wrists - stack your shoulders above your hands",
    'shoulders_over_elbows': "Shoulders not over elbows - stack your shoulders above your elbows",
    'shoulder_low_visibility': "Low visibility - make sure your arms are in view",
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class AnalysisResult:
    """Form analysis for one evaluated frame"""
    plank_type: PlankType = PlankType.UNKNOWN
    body_alignment_angle: float = 0.0
    knee_angle: float = 0.0
    shoulder_stack_angle: float = 0.0
    body_alignment_score: int = 0
    knee_position_score: int = 0
    shoulder_stack_score: int = 0
    overall_score: int = 0
    feedback: Tuple[str, ...] = field(default_factory=tuple)

    def to_record(self) -> Dict[str, Any]:
        """Flattened record for session persistence and transport."""
        return {
            'bodyAlignmentAngle': float(self.body_alignment_angle),
            'kneeAngle': float(self.knee_angle),
            'shoulderStackAngle': float(self.shoulder_stack_angle),
            'overallScore': int(self.overall_score),
            'feedback': ', '.join(self.feedback),
        }


def _score_body_alignment(shoulder, hip, ankle, config: CoachConfig) -> Tuple[float, float, Optional[str]]:
    floor = config.confidence_floor
    if not (is_usable(shoulder, floor) and is_usable(hip, floor) and is_usable(ankle, floor)):
        return 0.0, 0.0, FEEDBACK_MESSAGES['alignment_low_visibility']

    angle = body_line_angle(shoulder, hip, ankle)
    if not is_computable(angle):
        return 0.0, 0.0, FEEDBACK_MESSAGES['alignment_low_visibility']

    deviation = abs(angle - config.body_alignment_target)
    if deviation <= config.body_alignment_tolerance:
        score = 100.0
    else:
        score = max(
            0.0,
            100.0 - (deviation - config.body_alignment_tolerance) * config.body_alignment_penalty_per_degree,
        )

    message = None
    if angle < config.hips_low_angle:
        message = FEEDBACK_MESSAGES['hips_low']
    elif angle > config.hips_high_angle:
        message = FEEDBACK_MESSAGES['hips_high']
    return angle, score, message


def _score_knee_position(hip, knee, ankle, config: CoachConfig) -> Tuple[float, float, Optional[str]]:
    floor = config.confidence_floor
    if not (is_usable(hip, floor) and is_usable(knee, floor) and is_usable(ankle, floor)):
        return 0.0, 0.0, FEEDBACK_MESSAGES['knee_low_visibility']

    angle = angle_at_vertex(hip, knee, ankle)
    if not is_computable(angle):
        return 0.0, 0.0, FEEDBACK_MESSAGES['knee_low_visibility']

    if angle >= config.knee_target:
        return angle, 100.0, None

    deficit = config.knee_target - angle
    score = max(0.0, 100.0 - deficit * config.knee_penalty_per_degree)
    return angle, score, FEEDBACK_MESSAGES['bent_legs']


def _score_shoulder_stack(shoulder, support, plank_type: PlankType,
                          config: CoachConfig) -> Tuple[float, float, Optional[str]]:
    floor = config.confidence_floor
    if not (is_usable(shoulder, floor) and is_usable(support, floor)):
        # Neither good nor bad: the support joint can't be judged
        return 0.0, config.shoulder_stack_fallback_score, FEEDBACK_MESSAGES['shoulder_low_visibility']

    horizontal_offset = abs(shoulder.x - support.x)
    vertical_offset = abs(shoulder.y - support.y)
    if not (math.isfinite(horizontal_offset) and math.isfinite(vertical_offset)) or \
            (horizontal_offset == 0.0 and vertical_offset == 0.0):
        # A zero-length segment has no direction to measure
        return 0.0, config.shoulder_stack_fallback_score, FEEDBACK_MESSAGES['shoulder_low_visibility']
    angle = elevation_angle(shoulder, support)

    if horizontal_offset < config.shoulder_stack_excellent:
        score = 100.0
    elif horizontal_offset < config.shoulder_stack_good:
        score = 80.0
    else:
        score = 60.0

    message = None
    if abs(angle - config.shoulder_stack_target) > config.shoulder_stack_tolerance:
        if plank_type == PlankType.HIGH:
            message = FEEDBACK_MESSAGES['shoulders_over_wrists']
        else:
            message = FEEDBACK_MESSAGES['shoulders_over_elbows']
    return angle, score, message


def score(frame: LandmarkFrame, plank_type: PlankType,
          config: Optional[CoachConfig] = None) -> AnalysisResult:
    """
    Score plank form for one frame.

    Args:
        frame: 33-entry landmark frame
        plank_type: Variant classified on the same frame
        config: Thresholds; defaults to CoachConfig()

    Returns:
        AnalysisResult with angles, sub-scores, overall score and feedback
    """
    config = config or CoachConfig()
    side = select_side(frame)

    shoulder = side_landmark(frame, side, 'shoulder')
    hip = side_landmark(frame, side, 'hip')
    knee = side_landmark(frame, side, 'knee')
    ankle = side_landmark(frame, side, 'ankle')
    support_joint = 'wrist' if plank_type == PlankType.HIGH else 'elbow'
    support = side_landmark(frame, side, support_joint)

    alignment_angle, alignment_score, alignment_msg = _score_body_alignment(shoulder, hip, ankle, config)
    knee_angle, knee_score, knee_msg = _score_knee_position(hip, knee, ankle, config)
    stack_angle, stack_score, stack_msg = _score_shoulder_stack(shoulder, support, plank_type, config)

    sub_scores = [round_half_up(s) for s in (alignment_score, knee_score, stack_score)]
    feedback: List[str] = [m for m in (alignment_msg, knee_msg, stack_msg) if m]

    return AnalysisResult(
        plank_type=plank_type,
        body_alignment_angle=alignment_angle,
        knee_angle=knee_angle,
        shoulder_stack_angle=stack_angle,
        body_alignment_score=sub_scores[0],
        knee_position_score=sub_scores[1],
        shoulder_stack_score=sub_scores[2],
        overall_score=round_half_up(sum(sub_scores) / 3),
        feedback=tuple(feedback),
    )
