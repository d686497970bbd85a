import threading
from enum import Enum

from heart_trail.config import MODEL_VARIANT, MAX_READ_FAILURES
from heart_trail.core.errors import SetupError
from heart_trail.vision.landmark_source import AsyncLandmarkSource


class ReadinessFlag:
    """Goes true once, when the landmark model has loaded. There is no way back."""
    def __init__(self):
        self._ready = False

    def set(self):
        self._ready = True

    def is_set(self):
        return self._ready

    def __bool__(self):
        return self._ready


class SessionState(Enum):
    INITIALIZING = 'initializing'
    CAMERA_READY = 'camera_ready'
    MODEL_LOADING = 'model_loading'
    MODEL_READY = 'model_ready'
    ERROR = 'error'


def run_in_daemon_thread(target):
    threading.Thread(target=target, daemon=True).start()


class SessionController:
    """
    Startup ordering: camera first so the background shows at once, then the
    model loads off the GUI thread. Gestures switch on when it arrives.
    Any setup failure is terminal; the frame loop keeps drawing background.
    """
    def __init__(self, signals, camera_factory, detector_loader, pipeline,
                 source_factory=AsyncLandmarkSource, variant=MODEL_VARIANT, run_in_background=run_in_daemon_thread):
        self.signals = signals
        self.camera_factory = camera_factory
        self.detector_loader = detector_loader
        self.pipeline = pipeline
        self.source_factory = source_factory
        self.variant = variant
        self.run_in_background = run_in_background

        self.state = SessionState.INITIALIZING
        self.ready = pipeline.readiness
        self.camera = None
        self.source = None
        self.error_message = None
        self.read_failures = 0

        self.signals.model_ready.connect(self._on_model_ready)
        self.signals.setup_failed.connect(self.fail)

    def start(self):
        try:
            self.setup_camera()
        except SetupError as e:
            self.fail(str(e))
            return False

        self.state = SessionState.MODEL_LOADING
        print(f"⏳ Loading hand landmark model ({self.variant})...")
        self.run_in_background(self._load_model)
        return True

    def setup_camera(self):
        if self.camera is None:
            self.camera = self.camera_factory()
        self.camera.setup()
        self.read_failures = 0
        if self.state == SessionState.INITIALIZING:
            self.state = SessionState.CAMERA_READY

    def on_resize(self):
        # Best effort: re-open the camera, never restart the loop
        if self.state == SessionState.ERROR:
            return
        try:
            self.setup_camera()
        except SetupError as e:
            self.fail(str(e))

    def read_frame(self):
        if self.camera is None:
            return False, None

        ok, frame = self.camera.read()
        if ok:
            self.read_failures = 0
            return True, frame

        self.read_failures += 1
        if self.read_failures == MAX_READ_FAILURES and self.state != SessionState.ERROR:
            self.fail(f"Camera stopped delivering frames ({MAX_READ_FAILURES} failed reads in a row).")
        return False, None

    def _load_model(self):
        # Runs on the loader thread; report back through signals only
        try:
            detector = self.detector_loader(self.variant)
        except SetupError as e:
            self.signals.setup_failed.emit(str(e))
            return
        except Exception as e:
            self.signals.setup_failed.emit(f"Hand landmark model failed to load: {e}")
            return
        self.signals.model_ready.emit(detector)

    def _on_model_ready(self, detector):
        if self.state == SessionState.ERROR:
            # Too late; free the graph instead of leaking it
            if hasattr(detector, 'close'):
                detector.close()
            return
        self.source = self.source_factory(detector)
        self.pipeline.attach_source(self.source)
        self.ready.set()
        self.state = SessionState.MODEL_READY
        print("✅ Hand landmark model ready")

    def fail(self, message):
        print(f"❌ {message}")
        self.state = SessionState.ERROR
        self.error_message = message

    def shutdown(self):
        if self.source is not None:
            self.source.close()
            self.source = None
        if self.camera is not None:
            self.camera.release()
