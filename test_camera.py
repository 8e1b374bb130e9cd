"""
Tests for camera runner resource handling, with capture and model stubbed out
"""

import pytest

from plank_coach import camera


class FakeCapture:

    def __init__(self, opened=True):
        self.opened = opened
        self.released = False

    def isOpened(self):
        return self.opened

    def read(self):
        return False, None

    def release(self):
        self.released = True


class FakeLandmarker:

    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def capture(monkeypatch):
    cap = FakeCapture()
    monkeypatch.setattr(camera.cv2, 'VideoCapture', lambda camera_id: cap)
    monkeypatch.setattr(camera.cv2, 'destroyAllWindows', lambda: None)
    return cap


class TestResourceCleanup:

    def test_capture_released_when_model_fails(self, capture, monkeypatch, tmp_path):
        def fail(config, model_dir):
            raise OSError("model download failed")

        monkeypatch.setattr(camera, 'create_landmarker', fail)
        with pytest.raises(OSError):
            camera.run_camera_coaching(model_dir=tmp_path)

        assert capture.released

    def test_landmarker_closed_when_feed_ends(self, capture, monkeypatch, tmp_path):
        landmarker = FakeLandmarker()
        monkeypatch.setattr(camera, 'create_landmarker', lambda config, model_dir: landmarker)
        camera.run_camera_coaching(model_dir=tmp_path)

        assert landmarker.closed
        assert capture.released

    def test_unopened_camera_skips_model(self, monkeypatch, tmp_path):
        monkeypatch.setattr(camera.cv2, 'VideoCapture', lambda camera_id: FakeCapture(opened=False))
        monkeypatch.setattr(camera, 'create_landmarker', lambda config, model_dir: pytest.fail("model loaded"))
        camera.run_camera_coaching(model_dir=tmp_path)
