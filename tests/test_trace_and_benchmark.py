import pandas as pd
import pytest

from heart_trail.config import PARTICLE_LIFESPAN
from heart_trail.dataset.trace_loader import (
    TraceLoader, TraceDetector, COLUMNS, rows_to_landmarks, synthetic_trace
)
from heart_trail.evaluation.render_stability_test import RenderStabilityTest, main


def test_trace_round_trips_through_csv(tmp_path):
    path = tmp_path / "trace.csv"
    synthetic_trace(num_frames=30, absent_every=10).to_csv(path, index=False)

    data = TraceLoader(str(path)).load()
    frames = rows_to_landmarks(data)
    assert len(frames) == 30
    assert frames[9] is None
    assert len(frames[0]) == 21


def test_missing_trace_file_returns_none(tmp_path):
    assert TraceLoader(str(tmp_path / "nope.csv")).load() is None


def test_trace_without_landmark_columns_is_rejected(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"x0": [1.0], "y0": [2.0]}).to_csv(path, index=False)
    with pytest.raises(ValueError):
        TraceLoader(str(path)).load()


def test_trace_detector_replays_and_loops():
    frames = rows_to_landmarks(synthetic_trace(num_frames=3, absent_every=0))
    detector = TraceDetector(frames)
    first = detector.estimate(None)
    detector.estimate(None)
    detector.estimate(None)
    assert detector.estimate(None)[0].landmarks == first[0].landmarks


def test_synthetic_trace_pinches_on_beat():
    data = synthetic_trace(num_frames=50, pinch_every=40, absent_every=0)
    assert list(data.columns) == COLUMNS
    gap_open = data.loc[20, "x4"] - data.loc[20, "x8"]
    gap_closed = data.loc[0, "x4"] - data.loc[0, "x8"]
    assert gap_closed < 30 < gap_open


@pytest.mark.parametrize("mode", ["point", "pinch"])
def test_benchmark_stays_under_steady_state_bound(mode):
    summary = RenderStabilityTest(mode=mode, frames=200).run()
    assert summary["frames"] == 200
    assert summary["errors"] == 0
    assert summary["spawned"] > 0
    assert summary["peak_particles"] <= PARTICLE_LIFESPAN * 2
    assert summary["stable"]


def test_benchmark_cli_prints_report(capsys):
    summary = main(["--frames", "20"])
    assert summary["frames"] == 20
    assert "HEADLESS RENDER STABILITY REPORT" in capsys.readouterr().out
