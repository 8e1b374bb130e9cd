"""
Adapter from pose-estimator output to landmark frames.

Accepts the shapes MediaPipe produces (Tasks ``PoseLandmarkerResult`` with a
list of poses, or the legacy solutions result exposing
``pose_landmarks.landmark``) as well as plain sequences and mappings with a
``poseLandmarks`` key. Anything absent or malformed degrades to ``None``.
"""

import logging
import math
from typing import Any, List, Mapping, Optional

from .landmarks import FRAME_SIZE, Landmark

logger = logging.getLogger(__name__)


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def to_landmark(entry: Any) -> Optional[Landmark]:
    """Convert one estimator landmark, or None if it lacks usable x/y."""
    if entry is None:
        return None
    x = _field(entry, 'x')
    y = _field(entry, 'y')
    if x is None or y is None:
        return None
    try:
        x, y = float(x), float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        z = _field(entry, 'z')
        visibility = _field(entry, 'visibility')
        return Landmark(
            x=x,
            y=y,
            z=float(z) if z is not None else None,
            visibility=float(visibility) if visibility is not None else None,
        )
    except (TypeError, ValueError):
        return None


def _pose_landmarks(results: Any) -> Any:
    if results is None:
        return None
    if isinstance(results, Mapping):
        poses = results.get('poseLandmarks', results.get('pose_landmarks'))
    elif isinstance(results, (list, tuple)):
        poses = results
    else:
        poses = getattr(results, 'pose_landmarks', None)
    if poses is None:
        return None
    # Legacy solutions API: NormalizedLandmarkList
    if hasattr(poses, 'landmark'):
        return poses.landmark
    # Tasks API: one list per detected pose; only the first person is coached
    if isinstance(poses, (list, tuple)) and poses and isinstance(poses[0], (list, tuple)):
        return poses[0]
    return poses


def frame_from_results(results: Any) -> Optional[List[Optional[Landmark]]]:
    """
    Build a 33-entry landmark frame from estimator results.

    Returns:
        List of landmarks (None for unusable entries), or None when the
        results contain no pose at all
    """
    raw = _pose_landmarks(results)
    if raw is None:
        return None
    try:
        entries = list(raw)
    except TypeError:
        logger.debug("Unsupported landmark container: %r", type(raw))
        return None
    if not entries:
        return None

    frame = [to_landmark(entry) for entry in entries[:FRAME_SIZE]]
    frame.extend([None] * (FRAME_SIZE - len(frame)))
    return frame
