"""
Unit tests for plank variant classification
"""

import pytest

from pose_frames import ELBOW_PLANK, HIGH_PLANK, build_frame, with_joints
from plank_coach.classifier import REQUIRED_JOINTS, PlankType, classify
from plank_coach.config import CoachConfig
from plank_coach.landmarks import Landmark

REQUIRED_NAMES = [f'{side}_{joint}' for joint in REQUIRED_JOINTS for side in ('left', 'right')]


class TestVariants:
    """Clean poses classify into the expected variant."""

    def test_high_plank(self, high_plank_frame):
        assert classify(high_plank_frame) == PlankType.HIGH

    def test_elbow_plank(self, elbow_plank_frame):
        assert classify(elbow_plank_frame) == PlankType.ELBOW

    def test_classification_is_stateless(self, high_plank_frame, elbow_plank_frame):
        assert classify(elbow_plank_frame) == PlankType.ELBOW
        assert classify(high_plank_frame) == PlankType.HIGH
        assert classify(elbow_plank_frame) == PlankType.ELBOW

    def test_ankles_are_not_required(self):
        frame = build_frame(HIGH_PLANK, overrides={'left_ankle': None, 'right_ankle': None})
        assert classify(frame) == PlankType.HIGH


class TestConfidenceGating:
    """Occlusion degrades to UNKNOWN rather than a guess."""

    @pytest.mark.parametrize('name', REQUIRED_NAMES)
    def test_low_visibility_landmark(self, name):
        x, y = HIGH_PLANK[name.split('_', 1)[1]]
        frame = build_frame(HIGH_PLANK, overrides={name: Landmark(x=x, y=y, visibility=0.29)})
        assert classify(frame) == PlankType.UNKNOWN

    @pytest.mark.parametrize('name', REQUIRED_NAMES)
    def test_missing_landmark(self, name):
        frame = build_frame(ELBOW_PLANK, overrides={name: None})
        assert classify(frame) == PlankType.UNKNOWN

    def test_missing_visibility_counts_as_zero(self):
        x, y = HIGH_PLANK['wrist']
        frame = build_frame(HIGH_PLANK, overrides={'left_wrist': Landmark(x=x, y=y)})
        assert classify(frame) == PlankType.UNKNOWN

    def test_empty_frame(self):
        assert classify([]) == PlankType.UNKNOWN
        assert classify([None] * 33) == PlankType.UNKNOWN

    def test_visibility_at_floor_is_usable(self):
        frame = build_frame(HIGH_PLANK, visibility=0.3)
        assert classify(frame) == PlankType.HIGH


class TestPostureGates:
    """Non-plank postures are rejected before arm shape is considered."""

    def test_standing_with_bent_arms(self, standing_frame):
        assert classify(standing_frame) == PlankType.UNKNOWN

    def test_kneeling_upright(self):
        layout = with_joints(HIGH_PLANK, knee=(0.55, 0.80))
        assert classify(build_frame(layout)) == PlankType.UNKNOWN

    def test_arms_raised(self):
        layout = with_joints(HIGH_PLANK, elbow=(0.25, 0.40), wrist=(0.20, 0.30))
        assert classify(build_frame(layout)) == PlankType.UNKNOWN

    def test_arms_resting_at_shoulder_height(self):
        layout = with_joints(HIGH_PLANK, elbow=(0.20, 0.51), wrist=(0.10, 0.51))
        assert classify(build_frame(layout)) == PlankType.UNKNOWN


class TestArmShape:

    def test_ambiguous_arms_are_unknown(self):
        # Wrists only slightly below elbows: neither extended nor grounded
        layout = with_joints(HIGH_PLANK, elbow=(0.31, 0.65), wrist=(0.31, 0.70))
        assert classify(build_frame(layout)) == PlankType.UNKNOWN

    def test_extension_ratio_is_configurable(self, high_plank_frame):
        # Default frame has a wrist/elbow drop ratio of 2.0
        assert classify(high_plank_frame, CoachConfig(arm_extension_ratio=1.5)) == PlankType.HIGH
        assert classify(high_plank_frame, CoachConfig(arm_extension_ratio=2.5)) == PlankType.UNKNOWN

    def test_elbow_tolerance_is_configurable(self, elbow_plank_frame):
        assert classify(elbow_plank_frame, CoachConfig(elbow_level_tolerance=0.005)) == PlankType.UNKNOWN
