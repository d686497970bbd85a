import os
from concurrent.futures import Future

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from heart_trail.core.gestures import Detection


def hand(index_tip=(400.0, 300.0), thumb_tip=(480.0, 360.0)):
    """A 21-point landmark set with the two tips that matter placed explicitly."""
    points = [(200.0 + i, 400.0 + i) for i in range(21)]
    points[4] = thumb_tip
    points[8] = index_tip
    return points


def done_future(value):
    future = Future()
    future.set_result(value)
    return future


class ScriptedSource:
    """Landmark source that answers each submit() with the next scripted result, already resolved."""
    def __init__(self, script):
        self.script = list(script)
        self.calls = []
        self.closed = False

    def submit(self, frame, size=None):
        self.calls.append(size)
        detections = self.script.pop(0) if self.script else []
        if isinstance(detections, Exception):
            future = Future()
            future.set_exception(detections)
            return future
        return done_future(detections)

    def close(self):
        self.closed = True


class PendingSource:
    """Hands out futures that only resolve when the test says so."""
    def __init__(self):
        self.futures = []

    def submit(self, frame, size=None):
        future = Future()
        self.futures.append(future)
        return future

    def close(self):
        pass


class FakeCamera:
    def __init__(self, error=None, frame=None):
        self.error = error
        self.frame = frame if frame is not None else np.zeros((72, 128, 3), dtype=np.uint8)
        self.setups = 0
        self.released = False
        self.delivering = True

    def setup(self):
        self.setups += 1
        if self.error is not None:
            raise self.error

    def read(self):
        if not self.delivering:
            return False, None
        return True, self.frame

    def release(self):
        self.released = True


@pytest.fixture
def frame():
    return np.zeros((720, 1280, 3), dtype=np.uint8)


@pytest.fixture
def one_hand():
    return [Detection(hand())]


@pytest.fixture(scope="session")
def qapp():
    from PyQt5.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
