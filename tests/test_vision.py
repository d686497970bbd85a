import sys
from types import SimpleNamespace

import numpy as np
import pytest

from heart_trail.core.errors import InsecureContext, DeviceError, DetectorUnavailable
from heart_trail.vision.camera import Camera, resolve_source
from heart_trail.vision.hand_tracker import HandTracker, load_detector
from heart_trail.vision.landmark_source import AsyncLandmarkSource, InlineLandmarkSource


def test_resolve_source_accepts_devices_and_tls_streams():
    assert resolve_source(0) == 0
    assert resolve_source("1") == 1
    assert resolve_source("https://cam.local/stream.mjpg") == "https://cam.local/stream.mjpg"
    assert resolve_source("/videos/hands.mp4") == "/videos/hands.mp4"


@pytest.mark.parametrize("url", ["http://10.0.0.5/video", "rtsp://cam/live", "RTSP://cam/live"])
def test_resolve_source_refuses_plain_network_streams(url):
    with pytest.raises(InsecureContext):
        resolve_source(url)


def test_camera_that_cannot_open_raises_device_error(tmp_path):
    camera = Camera(str(tmp_path / "missing.mp4"))
    with pytest.raises(DeviceError):
        camera.setup()
    camera.release()


def test_camera_read_before_setup_has_no_frame():
    assert Camera("/nowhere.mp4").read() == (False, None)


class FakeHands:
    def __init__(self, result):
        self.result = result
        self.closed = False

    def process(self, rgb_frame):
        self.shape = rgb_frame.shape
        return self.result

    def close(self):
        self.closed = True


def mp_result(points):
    landmarks = SimpleNamespace(landmark=[SimpleNamespace(x=x, y=y, z=0.0) for x, y in points])
    return SimpleNamespace(multi_hand_landmarks=[landmarks])


def test_hand_tracker_scales_landmarks_to_requested_size():
    points = [(0.5, 0.25)] * 21
    tracker = HandTracker(FakeHands(mp_result(points)))
    frame = np.zeros((480, 640, 3), dtype=np.uint8)

    detections = tracker.estimate(frame)
    assert len(detections) == 1
    assert detections[0].landmarks[8] == (320.0, 120.0)

    scaled = tracker.estimate(frame, (1280, 720))
    assert scaled[0].landmarks[8] == (640.0, 180.0)


def test_hand_tracker_no_hands_is_empty_list():
    empty = SimpleNamespace(multi_hand_landmarks=None)
    tracker = HandTracker(FakeHands(empty))
    assert tracker.estimate(np.zeros((10, 10, 3), dtype=np.uint8)) == []


def test_load_detector_rejects_unknown_variant():
    with pytest.raises(ValueError):
        load_detector("huge")


def test_load_detector_without_mediapipe(monkeypatch):
    monkeypatch.setitem(sys.modules, "mediapipe", None)
    with pytest.raises(DetectorUnavailable):
        load_detector("lite")


class EchoDetector:
    def __init__(self):
        self.closed = False

    def estimate(self, frame, size=None):
        if frame is None:
            raise RuntimeError("no frame")
        return [size]

    def close(self):
        self.closed = True


def test_async_source_returns_future_from_worker():
    detector = EchoDetector()
    source = AsyncLandmarkSource(detector)
    assert source.submit("frame", (4, 3)).result(timeout=5) == [(4, 3)]
    source.close()
    source.executor.shutdown(wait=True)
    assert detector.closed


def test_inline_source_resolves_immediately_and_carries_errors():
    source = InlineLandmarkSource(EchoDetector())
    assert source.submit("frame", (1, 2)).done()

    failed = source.submit(None)
    with pytest.raises(RuntimeError):
        failed.result()


def test_async_source_close_twice_is_harmless():
    detector = EchoDetector()
    source = AsyncLandmarkSource(detector)
    source.close()
    source.close()
    source.executor.shutdown(wait=True)
    assert detector.closed
