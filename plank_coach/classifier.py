"""
Plank variant classification.

Stateless, per-frame decision between a high plank (arms extended, weight on
the hands) and an elbow plank (weight on the forearms). Anything ambiguous,
occluded or not horizontal is reported as UNKNOWN rather than guessed.
"""

import logging
from enum import Enum
from typing import Optional

from .config import CoachConfig
from .geometry import midpoint
from .landmarks import LandmarkFrame, get_landmark, is_usable, mean_visibility

logger = logging.getLogger(__name__)


class PlankType(Enum):
    """Plank variants"""
    HIGH = "high"
    ELBOW = "elbow"
    UNKNOWN = "unknown"


REQUIRED_JOINTS = ('shoulder', 'elbow', 'wrist', 'hip', 'knee')


def classify(frame: LandmarkFrame, config: Optional[CoachConfig] = None) -> PlankType:
    """
    Classify the plank variant shown in a single frame.

    Args:
        frame: 33-entry landmark frame
        config: Thresholds; defaults to CoachConfig()

    Returns:
        PlankType.HIGH, PlankType.ELBOW or PlankType.UNKNOWN
    """
    config = config or CoachConfig()

    points = {}
    for joint in REQUIRED_JOINTS:
        for side in ('left', 'right'):
            points[f'{side}_{joint}'] = get_landmark(frame, f'{side}_{joint}')

    if not all(is_usable(lm, config.confidence_floor) for lm in points.values()):
        return PlankType.UNKNOWN
    if mean_visibility(points.values()) < config.confidence_floor:
        return PlankType.UNKNOWN

    centers = {
        joint: midpoint(points[f'left_{joint}'], points[f'right_{joint}'])
        for joint in REQUIRED_JOINTS
    }
    shoulder = centers['shoulder']
    hip = centers['hip']
    knee = centers['knee']
    elbow = centers['elbow']
    wrist = centers['wrist']

    # Posture gate runs before the arm checks: a standing person with bent
    # arms must never reach the variant decision.
    if abs(hip.y - shoulder.y) > config.max_torso_drop or abs(knee.y - hip.y) > config.max_leg_drop:
        logger.debug(
            "Body not horizontal (torso drop %.3f, leg drop %.3f)",
            hip.y - shoulder.y, knee.y - hip.y,
        )
        return PlankType.UNKNOWN

    elbow_drop = elbow.y - shoulder.y
    wrist_drop = wrist.y - shoulder.y
    if elbow_drop < config.min_arm_drop or wrist_drop < config.min_arm_drop:
        logger.debug("Arms not supporting (elbow drop %.3f, wrist drop %.3f)", elbow_drop, wrist_drop)
        return PlankType.UNKNOWN

    forearm_drop = wrist.y - elbow.y
    if wrist_drop > config.arm_extension_ratio * elbow_drop and forearm_drop > config.min_forearm_drop:
        return PlankType.HIGH
    if abs(forearm_drop) < config.elbow_level_tolerance:
        return PlankType.ELBOW

    logger.debug(
        "Ambiguous arm configuration (elbow drop %.3f, wrist drop %.3f)",
        elbow_drop, wrist_drop,
    )
    return PlankType.UNKNOWN
