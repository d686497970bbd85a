from collections import namedtuple
from enum import Enum

import numpy as np

from heart_trail.config import PINCH_THRESHOLD, THUMB_TIP, INDEX_TIP, TRIGGER_MODE

MODES = ('point', 'pinch')


class Trigger(Enum):
    NONE = 'none'
    POINT = 'point'
    PINCH = 'pinch'


GestureEvent = namedtuple('GestureEvent', ['trigger', 'anchor'])
NO_GESTURE = GestureEvent(Trigger.NONE, None)


class Detection:
    """One detected hand: ordered (x, y) landmarks in camera pixel space."""
    __slots__ = ('landmarks',)

    def __init__(self, landmarks):
        self.landmarks = landmarks


def pinch_distance(landmarks):
    """Euclidean distance between thumb tip (4) and index fingertip (8), in pixels."""
    thumb = landmarks[THUMB_TIP]
    index = landmarks[INDEX_TIP]
    return float(np.sqrt((thumb[0] - index[0])**2 + (thumb[1] - index[1])**2))


def classify(landmarks, mode=TRIGGER_MODE, threshold=PINCH_THRESHOLD):
    """
    Turns one landmark set into a trigger and an anchor point.
    Coordinates stay in camera space (un-mirrored); a missing hand is NONE.
    """
    if landmarks is None or len(landmarks) <= INDEX_TIP:
        return NO_GESTURE

    index = landmarks[INDEX_TIP]

    if mode == 'point':
        return GestureEvent(Trigger.POINT, (float(index[0]), float(index[1])))

    if mode == 'pinch':
        # Strictly below: touching the threshold is still "open"
        if pinch_distance(landmarks) < threshold:
            thumb = landmarks[THUMB_TIP]
            anchor = ((thumb[0] + index[0]) / 2.0, (thumb[1] + index[1]) / 2.0)
            return GestureEvent(Trigger.PINCH, anchor)
        return NO_GESTURE

    raise ValueError(f"Unknown trigger mode: {mode!r}")


class GestureClassifier:
    """Keeps the active trigger mode and classifies the latest detection."""
    def __init__(self, mode=TRIGGER_MODE, threshold=PINCH_THRESHOLD):
        if mode not in MODES:
            raise ValueError(f"Unknown trigger mode: {mode!r}")
        self.mode = mode
        self.threshold = threshold

    def toggle_mode(self):
        self.mode = MODES[(MODES.index(self.mode) + 1) % len(MODES)]
        print(f"🔄 Trigger mode: {self.mode.upper()}")
        return self.mode

    def classify(self, detections):
        # Only the first hand counts
        if not detections:
            return NO_GESTURE
        return classify(detections[0].landmarks, self.mode, self.threshold)
