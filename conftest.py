"""
Shared fixtures; the frame builders live in pose_frames.
"""

import pytest

from pose_frames import ELBOW_PLANK, HIGH_PLANK, STANDING, build_frame


@pytest.fixture
def high_plank_frame():
    return build_frame(HIGH_PLANK)


@pytest.fixture
def elbow_plank_frame():
    return build_frame(ELBOW_PLANK)


@pytest.fixture
def standing_frame():
    return build_frame(STANDING)
