import os

import numpy as np
import pandas as pd

from heart_trail.core.gestures import Detection

NUM_LANDMARKS = 21
COLUMNS = [f"{axis}{i}" for i in range(NUM_LANDMARKS) for axis in ("x", "y")]


class TraceLoader:
    """
    Loads landmark traces: one CSV row per frame, columns x0,y0..x20,y20 in
    camera pixels. A row of blanks means no hand in that frame.
    """
    def __init__(self, file_path):
        self.file_path = file_path

    def load(self):
        if not os.path.exists(self.file_path):
            print(f"❌ Error: Trace file not found at {self.file_path}")
            return None

        print(f"📂 Loading landmark trace from: {self.file_path}")
        data = pd.read_csv(self.file_path)
        missing = [c for c in COLUMNS if c not in data.columns]
        if missing:
            raise ValueError(f"Trace {self.file_path} is missing columns: {', '.join(missing[:4])}...")
        return data[COLUMNS]


def rows_to_landmarks(data):
    """DataFrame -> list with one landmark list (or None) per frame."""
    frames = []
    for row in data.to_numpy(dtype=float):
        if np.isnan(row).any():
            frames.append(None)
        else:
            frames.append([(row[i], row[i + 1]) for i in range(0, len(row), 2)])
    return frames


def synthetic_trace(num_frames=300, width=1280, height=720, radius=180.0, pinch_every=40, absent_every=90, seed=42):
    """
    A hand circling the frame centre. The thumb closes onto the index tip on a
    regular beat and the hand drops out for a few frames now and then.
    """
    rng = np.random.default_rng(seed)
    rows = []
    for t in range(num_frames):
        if absent_every and t % absent_every >= absent_every - 5:
            rows.append([np.nan] * len(COLUMNS))
            continue

        angle = 2 * np.pi * t / 120
        cx = width / 2 + radius * np.cos(angle)
        cy = height / 2 + radius * np.sin(angle)
        points = np.column_stack([
            cx + rng.normal(0, 25, NUM_LANDMARKS),
            cy + rng.normal(0, 25, NUM_LANDMARKS) + 60
        ])
        index_tip = np.array([cx, cy])
        gap = 12.0 if pinch_every and t % pinch_every < 10 else 70.0
        points[8] = index_tip
        points[4] = index_tip + np.array([gap, 0.0])
        rows.append(points.flatten().tolist())

    return pd.DataFrame(rows, columns=COLUMNS)


class TraceDetector:
    """Replays a trace as if it were the hand model: one entry per estimate() call, looping."""
    def __init__(self, frames):
        if not frames:
            raise ValueError("Trace has no frames")
        self.frames = frames
        self.position = 0

    def estimate(self, frame, size=None):
        landmarks = self.frames[self.position % len(self.frames)]
        self.position += 1
        if landmarks is None:
            return []
        return [Detection(landmarks)]
