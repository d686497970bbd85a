import argparse
import sys
from PyQt5.QtWidgets import QApplication

from heart_trail.config import CAMERA_SOURCE, TRIGGER_MODE, MODEL_VARIANT, MODEL_COMPLEXITY
from heart_trail.core.gestures import GestureClassifier, MODES
from heart_trail.core.pipeline import RenderPipeline
from heart_trail.core.session import SessionController
from heart_trail.core.signals import SessionSignals
from heart_trail.ui.effect_window import EffectWindow
from heart_trail.vision.camera import Camera
from heart_trail.vision.hand_tracker import load_detector


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Hearts that trail your fingertip over a live camera view.")
    parser.add_argument("--camera", default=str(CAMERA_SOURCE), help="device index or stream URL")
    parser.add_argument("--mode", choices=MODES, default=TRIGGER_MODE, help="spawn on a visible fingertip or on a pinch")
    parser.add_argument("--variant", choices=sorted(MODEL_COMPLEXITY), default=MODEL_VARIANT, help="hand model size")
    parser.add_argument("--max-frames", type=int, default=None, help="stop after this many frames")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    app = QApplication(sys.argv[:1])
    app.setStyle('Fusion')

    # Dependency Injection
    pipeline = RenderPipeline(classifier=GestureClassifier(args.mode))
    session = SessionController(
        SessionSignals(),
        lambda: Camera(args.camera),
        load_detector,
        pipeline,
        variant=args.variant
    )

    # Camera first, model in the background; the loop never waits for it
    session.start()
    window = EffectWindow(pipeline, session, max_frames=args.max_frames)
    window.loop.start()

    try:
        sys.exit(app.exec_())
    except KeyboardInterrupt:
        window.loop.stop()
        session.shutdown()
        print("\n⚠️  Stopped")

if __name__ == "__main__":
    main()
