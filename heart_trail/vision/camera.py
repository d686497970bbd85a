from urllib.parse import urlparse

import cv2
from heart_trail.config import CAMERA_SOURCE, CAMERA_WIDTH, CAMERA_HEIGHT, INSECURE_SCHEMES
from heart_trail.core.errors import InsecureContext, UnsupportedEnvironment, DeviceError


def resolve_source(source):
    """Device index (int or digit string) or stream URL. Plain-text network streams are refused."""
    if isinstance(source, str):
        if source.isdigit():
            return int(source)
        scheme = urlparse(source).scheme.lower()
        if scheme in INSECURE_SCHEMES:
            raise InsecureContext(f"Camera stream '{source}' is not encrypted; use a local device or a TLS stream.")
    return source


class Camera:
    def __init__(self, source=CAMERA_SOURCE, width=CAMERA_WIDTH, height=CAMERA_HEIGHT):
        self.source = resolve_source(source)
        self.width = width
        self.height = height
        self.cap = None

    def setup(self):
        """(Re)opens the capture. Called at startup and again after a window resize."""
        if isinstance(self.source, int) and not cv2.videoio_registry.getCameraBackends():
            raise UnsupportedEnvironment("This OpenCV build has no camera backends.")

        if self.cap is not None:
            self.cap.release()

        self.cap = cv2.VideoCapture(self.source)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)

        if not self.cap.isOpened():
            raise DeviceError(f"Camera {self.source!r} could not be opened (missing device or access denied).")
        print("📷 Camera initialized")

    def read(self):
        # Frames stay un-mirrored; flipping is a drawing concern
        if self.cap is None:
            return False, None
        ret, frame = self.cap.read()
        if ret:
            return True, frame
        return False, None

    def release(self):
        if self.cap is not None:
            self.cap.release()
            self.cap = None
