"""
Synthetic landmark frames shared by the test modules and fixtures.

Frames are side views with the head on the left; both body sides get the
same coordinates unless a test overrides them.
"""

from plank_coach.landmarks import FRAME_SIZE, LANDMARKS, Landmark

HIGH_PLANK = {
    'shoulder': (0.30, 0.50),
    'elbow': (0.31, 0.62),
    'wrist': (0.31, 0.74),
    'hip': (0.55, 0.55),
    'knee': (0.70, 0.58),
    'ankle': (0.85, 0.61),
}

ELBOW_PLANK = {
    'shoulder': (0.30, 0.55),
    'elbow': (0.31, 0.70),
    'wrist': (0.20, 0.71),
    'hip': (0.55, 0.58),
    'knee': (0.70, 0.60),
    'ankle': (0.85, 0.62),
}

STANDING = {
    'shoulder': (0.50, 0.30),
    'elbow': (0.52, 0.45),
    'wrist': (0.52, 0.45),
    'hip': (0.50, 0.60),
    'knee': (0.50, 0.80),
    'ankle': (0.50, 0.95),
}


def build_frame(joints, visibility=0.9, overrides=None):
    """
    Build a 33-entry frame.

    Args:
        joints: joint name -> (x, y), applied to both sides
        visibility: default visibility for every placed landmark
        overrides: full landmark name -> Landmark or None
    """
    frame = [None] * FRAME_SIZE
    for joint, (x, y) in joints.items():
        for side in ('left', 'right'):
            frame[LANDMARKS[f'{side}_{joint}']] = Landmark(x=x, y=y, z=0.0, visibility=visibility)
    for name, landmark in (overrides or {}).items():
        frame[LANDMARKS[name]] = landmark
    return frame


def with_joints(base, **joints):
    """Copy a joint layout replacing some positions."""
    layout = dict(base)
    layout.update(joints)
    return layout
