"""
Landmark schema shared by the classifier and the scorer.

Frames follow the MediaPipe Pose 33-point layout. Entries may be ``None`` when
the estimator did not report a point; helpers here treat missing points and
missing visibility as unusable instead of raising.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

FRAME_SIZE = 33

# MediaPipe landmark indices for key body parts
LANDMARKS = {
    'left_shoulder': 11,
    'right_shoulder': 12,
    'left_elbow': 13,
    'right_elbow': 14,
    'left_wrist': 15,
    'right_wrist': 16,
    'left_hip': 23,
    'right_hip': 24,
    'left_knee': 25,
    'right_knee': 26,
    'left_ankle': 27,
    'right_ankle': 28,
}

# Joints compared when picking the better-visible side
SIDE_SELECTION_JOINTS = ('shoulder', 'hip', 'knee', 'ankle')


@dataclass(frozen=True)
class Landmark:
    """One normalized body keypoint (origin top-left, 0..1)."""
    x: float
    y: float
    z: Optional[float] = None
    visibility: Optional[float] = None


LandmarkFrame = Sequence[Optional[Landmark]]


class Side(Enum):
    """Body side used for single-sided angle computations."""
    LEFT = "left"
    RIGHT = "right"


def get_landmark(frame: LandmarkFrame, name: str) -> Optional[Landmark]:
    """Look up a landmark by name, returning None when absent."""
    idx = LANDMARKS[name]
    if frame is None or idx >= len(frame):
        return None
    return frame[idx]


def visibility_of(landmark: Optional[Landmark]) -> float:
    if landmark is None or landmark.visibility is None:
        return 0.0
    return float(landmark.visibility)


def is_usable(landmark: Optional[Landmark], floor: float) -> bool:
    """A landmark is usable when present and at or above the confidence floor."""
    return landmark is not None and visibility_of(landmark) >= floor


def mean_visibility(landmarks: Iterable[Optional[Landmark]]) -> float:
    values = [visibility_of(lm) for lm in landmarks]
    if not values:
        return 0.0
    return sum(values) / len(values)


def select_side(frame: LandmarkFrame) -> Side:
    """
    Pick the side of the body the camera sees best.

    Compares mean visibility of shoulder, hip, knee and ankle on each side.
    The left side wins only when strictly better.
    """
    left = mean_visibility(get_landmark(frame, f'left_{j}') for j in SIDE_SELECTION_JOINTS)
    right = mean_visibility(get_landmark(frame, f'right_{j}') for j in SIDE_SELECTION_JOINTS)
    return Side.LEFT if left > right else Side.RIGHT


def side_landmark(frame: LandmarkFrame, side: Side, joint: str) -> Optional[Landmark]:
    return get_landmark(frame, f'{side.value}_{joint}')
