import cv2
from heart_trail.config import MODEL_VARIANT, MODEL_COMPLEXITY, DETECTION_CONFIDENCE, TRACKING_CONFIDENCE
from heart_trail.core.errors import DetectorUnavailable
from heart_trail.core.gestures import Detection


class HandTracker:
    def __init__(self, hands):
        self.hands = hands
        print("🖐️ Hand Tracker initialized")

    def estimate(self, frame, size=None):
        """
        Converts BGR to RGB, runs MediaPipe and returns a list of Detection.
        Landmarks are scaled to `size` (width, height), defaulting to the frame's own.
        """
        h, w = frame.shape[:2]
        if size is not None:
            w, h = size

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        result = self.hands.process(rgb_frame)

        detections = []
        if result.multi_hand_landmarks:
            for hand_landmarks in result.multi_hand_landmarks:
                points = [(lm.x * w, lm.y * h) for lm in hand_landmarks.landmark]
                detections.append(Detection(points))
        return detections

    def close(self):
        self.hands.close()


def load_detector(variant=MODEL_VARIANT):
    """Builds the MediaPipe hands model. Slow; call it off the GUI thread."""
    if variant not in MODEL_COMPLEXITY:
        raise ValueError(f"Unknown model variant: {variant!r}")

    try:
        import mediapipe as mp
        hands_solution = mp.solutions.hands
    except (ImportError, AttributeError) as e:
        raise DetectorUnavailable(f"MediaPipe hands could not be loaded: {e}") from e

    hands = hands_solution.Hands(
        static_image_mode=False,
        max_num_hands=1,
        model_complexity=MODEL_COMPLEXITY[variant],
        min_detection_confidence=DETECTION_CONFIDENCE,
        min_tracking_confidence=TRACKING_CONFIDENCE
    )
    return HandTracker(hands)
