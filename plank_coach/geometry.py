"""
Geometric helpers for pose landmarks.

All computations use only the x, y image plane; depth and visibility are
ignored.
"""

import math

import numpy as np

from .landmarks import Landmark


def angle_at_vertex(a: Landmark, b: Landmark, c: Landmark) -> float:
    """
    Calculate the angle ABC where B is the vertex.

    Args:
        a: First point
        b: Middle point / vertex
        c: End point

    Returns:
        Angle in degrees (0-180), or NaN when a or c coincides with b
    """
    ba = np.array([a.x - b.x, a.y - b.y], dtype=float)
    bc = np.array([c.x - b.x, c.y - b.y], dtype=float)

    norms = np.linalg.norm(ba) * np.linalg.norm(bc)
    if norms == 0:
        return math.nan

    # Clip guards against floating-point overshoot on collinear points
    cosine_angle = np.clip(np.dot(ba, bc) / norms, -1.0, 1.0)
    return float(np.degrees(np.arccos(cosine_angle)))


def is_computable(angle: float) -> bool:
    return not math.isnan(angle)


def midpoint(a: Landmark, b: Landmark) -> Landmark:
    """Average x and y of two landmarks independently."""
    return Landmark(x=(a.x + b.x) / 2, y=(a.y + b.y) / 2)


def body_line_angle(shoulder: Landmark, hip: Landmark, ankle: Landmark) -> float:
    """
    Hip angle on a 0-360 scale.

    Equals the vertex angle when the hip sits on or below the shoulder-ankle
    line (sagging side, larger y) and 360 minus it when the hip is above the
    line (piking), so 180 is a straight body either way.
    """
    angle = angle_at_vertex(shoulder, hip, ankle)
    if not is_computable(angle):
        return angle

    # Sign of the cross product tells which side of the shoulder->ankle line the hip is on
    cross = (ankle.x - shoulder.x) * (hip.y - shoulder.y) - (ankle.y - shoulder.y) * (hip.x - shoulder.x)
    line_goes_right = ankle.x >= shoulder.x
    hip_above = cross < 0 if line_goes_right else cross > 0
    return 360.0 - angle if hip_above else angle


def elevation_angle(upper: Landmark, lower: Landmark) -> float:
    """Angle of the upper->lower segment above horizontal, 0-90 degrees."""
    return math.degrees(math.atan2(abs(upper.y - lower.y), abs(upper.x - lower.x)))
