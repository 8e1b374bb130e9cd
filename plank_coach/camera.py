"""
Real-time plank coaching from a camera feed.

OpenCV captures frames, MediaPipe's PoseLandmarker produces landmarks and a
CoachingSession turns them into scores and announcements. Announcements are
written to the log; a speech collaborator can subscribe via ``speak``.
"""

import argparse
import logging
import pathlib
import time
import urllib.request
from typing import Callable, Optional

import cv2
import mediapipe as mp
from mediapipe.tasks import python as mp_python
from mediapipe.tasks.python import vision

from .announcements import Announcement
from .config import CoachConfig
from .session import CoachingSession, FrameOutcome

logger = logging.getLogger(__name__)

POSE_MODEL_URLS = {
    0: "https://storage.googleapis.com/mediapipe-models/pose_landmarker/"
       "pose_landmarker_lite/float16/latest/pose_landmarker_lite.task",
    1: "https://storage.googleapis.com/mediapipe-models/pose_landmarker/"
       "pose_landmarker_full/float16/latest/pose_landmarker_full.task",
    2: "https://storage.googleapis.com/mediapipe-models/pose_landmarker/"
       "pose_landmarker_heavy/float16/latest/pose_landmarker_heavy.task",
}


def download_model(url: str, dest: pathlib.Path) -> pathlib.Path:
    """Fetch the pose model once; later runs reuse the file."""
    if dest.exists():
        return dest
    logger.info("Downloading pose model to %s", dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    urllib.request.urlretrieve(url, str(dest))
    return dest


def create_landmarker(config: CoachConfig, model_dir: pathlib.Path) -> vision.PoseLandmarker:
    url = POSE_MODEL_URLS[config.model_complexity]
    model_path = download_model(url, model_dir / url.rsplit('/', 1)[-1])
    options = vision.PoseLandmarkerOptions(
        base_options=mp_python.BaseOptions(model_asset_path=str(model_path)),
        running_mode=vision.RunningMode.VIDEO,
        num_poses=1,
        min_pose_detection_confidence=config.min_detection_confidence,
        min_tracking_confidence=config.min_tracking_confidence,
    )
    return vision.PoseLandmarker.create_from_options(options)


def log_announcement(announcement: Announcement) -> None:
    logger.info("[%s] %s", announcement.priority.value, announcement.text)


def _report(outcome: Optional[FrameOutcome], speak: Callable[[Announcement], None]) -> None:
    if outcome is None:
        return
    for event in outcome.events:
        logger.info("Lifecycle: %s (%s)", event.type.value, event.plank_type.value)
    for announcement in outcome.announcements:
        speak(announcement)


def run_camera_coaching(
    camera_id: int = 0,
    config: Optional[CoachConfig] = None,
    model_dir: pathlib.Path = pathlib.Path("models"),
    speak: Callable[[Announcement], None] = log_announcement,
    window_name: str = "Plank Coach"
) -> None:
    """
    Run real-time plank coaching from camera feed.

    Args:
        camera_id: Camera device ID (default 0 for primary camera)
        config: Optional CoachConfig for customization
        model_dir: Where the pose model is cached
        speak: Receives every announcement
        window_name: Name of the display window
    """
    config = config or CoachConfig()
    session = CoachingSession(config)
    cap = cv2.VideoCapture(camera_id)

    if not cap.isOpened():
        logger.error("Failed to open camera %d", camera_id)
        return

    landmarker = None

    try:
        landmarker = create_landmarker(config, model_dir)
        logger.info("Starting plank coaching. Keys: q quit, p pause/resume, s stop, r reset, v voice.")
        start = time.monotonic()
        while True:
            ret, frame = cap.read()
            if not ret:
                logger.warning("Failed to read frame from camera")
                break

            # Flip frame horizontally for mirror effect
            frame = cv2.flip(frame, 1)
            now = time.monotonic()

            rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)
            results = landmarker.detect_for_video(image, int((now - start) * 1000))
            _report(session.process(results, now), speak)

            cv2.imshow(window_name, frame)

            key = cv2.waitKey(1) & 0xFF
            announcements = []
            if key == ord('q'):
                break
            elif key == ord('p'):
                announcements = session.toggle_pause(now)
            elif key == ord('s'):
                announcements = session.stop(now)
            elif key == ord('r'):
                session.reset()
            elif key == ord('v'):
                session.toggle_voice()
            for announcement in announcements:
                speak(announcement)

    except KeyboardInterrupt:
        logger.info("Coaching stopped by user")

    finally:
        summary = session.summary(time.monotonic())
        print("\n" + "=" * 50)
        print("SESSION SUMMARY")
        print("=" * 50)
        print(f"Plank Type:       {summary['plank_type']}")
        print(f"Duration:         {summary['duration']} seconds")
        print(f"Average Score:    {summary['average_score']}/100")
        print(f"Body Alignment:   {summary['body_alignment_score']}/100")
        print(f"Knee Position:    {summary['knee_position_score']}/100")
        print(f"Shoulder Stack:   {summary['shoulder_stack_score']}/100")
        print("=" * 50)

        if landmarker is not None:
            landmarker.close()
        cap.release()
        cv2.destroyAllWindows()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Real-time plank coaching")
    parser.add_argument("--camera", type=int, default=0, help="camera device ID")
    parser.add_argument("--model-complexity", type=int, choices=(0, 1, 2), default=1)
    parser.add_argument("--model-dir", type=pathlib.Path, default=pathlib.Path("models"))
    parser.add_argument("--verbose", action="store_true", help="log per-frame analysis")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    config = CoachConfig(model_complexity=args.model_complexity)
    run_camera_coaching(camera_id=args.camera, config=config, model_dir=args.model_dir)


if __name__ == "__main__":
    main()
