"""Tests for oneeuro.data_loader module."""

import numpy as np
import pandas as pd
import pytest
from oneeuro.data_loader import (
    TransformTrack,
    dataframe_to_track,
    load_track,
    save_track,
    track_to_dataframe,
)


def make_dataframe(n_frames: int = 10, with_rotation: bool = True) -> pd.DataFrame:
    t = np.arange(n_frames) / 60.0
    data = {
        "timestamp": t,
        "px": np.sin(t),
        "py": np.cos(t),
        "pz": t,
    }
    if with_rotation:
        data.update({"qx": 0.0, "qy": 0.0, "qz": 0.0, "qw": 1.0})
    return pd.DataFrame(data)


class TestDataframeConversion:
    """Test DataFrame to track conversion."""

    def test_positions_and_rotations(self):
        """Columns should map to (n, 3) positions and (n, 4) rotations."""
        track = dataframe_to_track(make_dataframe(12))
        assert track.n_frames == 12
        assert track.positions.shape == (12, 3)
        assert track.rotations.shape == (12, 4)
        np.testing.assert_array_equal(track.rotations[:, 3], 1.0)

    def test_rotations_optional(self):
        """Tracks without quaternion columns should have no rotations."""
        track = dataframe_to_track(make_dataframe(with_rotation=False))
        assert track.rotations is None

    def test_missing_position_column_raises(self):
        """A missing position column should raise ValueError naming it."""
        df = make_dataframe().drop(columns=["py"])
        with pytest.raises(ValueError, match="py"):
            dataframe_to_track(df)

    def test_to_dataframe_columns(self):
        """Track to DataFrame should produce the recording columns in order."""
        track = dataframe_to_track(make_dataframe())
        df = track_to_dataframe(track)
        assert list(df.columns) == ["timestamp", "px", "py", "pz", "qx", "qy", "qz", "qw"]


class TestTrackFiles:
    """Test CSV loading and saving."""

    def test_load_csv(self, tmp_path):
        """load_track should read a CSV recording."""
        path = tmp_path / "track.csv"
        make_dataframe(20).to_csv(path, index=False)

        track = load_track(path)

        assert track.n_frames == 20
        assert track.sample_rate == pytest.approx(60.0)

    def test_save_then_load(self, tmp_path):
        """Saved tracks should load back with the same values."""
        track = TransformTrack(
            timestamps=np.array([0.0, 0.5, 1.0]),
            positions=np.array([[0.0, 1.0, 2.0], [0.5, 1.5, 2.5], [1.0, 2.0, 3.0]]),
        )
        path = tmp_path / "out.csv"
        save_track(track, path)

        loaded = load_track(path)
        np.testing.assert_allclose(loaded.positions, track.positions)
        assert loaded.rotations is None

    def test_sample_rate_single_frame(self):
        """Sample rate should be NaN with fewer than two frames."""
        track = TransformTrack(timestamps=np.array([0.0]), positions=np.zeros((1, 3)))
        assert np.isnan(track.sample_rate)
