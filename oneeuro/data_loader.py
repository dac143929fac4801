"""Loading and saving recorded transform tracks."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

TIMESTAMP_COLUMN = "timestamp"
POSITION_COLUMNS = ["px", "py", "pz"]
ROTATION_COLUMNS = ["qx", "qy", "qz", "qw"]


@dataclass
class TransformTrack:
    """A recorded sequence of transform samples."""

    timestamps: np.ndarray

    # Positions: (n_frames, 3)
    positions: np.ndarray

    # Rotations: (n_frames, 4) quaternions (x, y, z, w), if recorded
    rotations: Optional[np.ndarray] = None

    @property
    def n_frames(self) -> int:
        """Number of frames in the track."""
        return len(self.timestamps)

    @property
    def sample_rate(self) -> float:
        """Mean sampling rate from the timestamps (Hz)."""
        if self.n_frames < 2:
            return float("nan")
        duration = float(self.timestamps[-1] - self.timestamps[0])
        return (self.n_frames - 1) / duration if duration > 0 else float("nan")


def dataframe_to_track(df: pd.DataFrame) -> TransformTrack:
    """Convert DataFrame to TransformTrack."""
    missing = [c for c in [TIMESTAMP_COLUMN, *POSITION_COLUMNS] if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {', '.join(missing)}")

    rotations = None
    if all(c in df.columns for c in ROTATION_COLUMNS):
        rotations = df[ROTATION_COLUMNS].to_numpy(dtype=np.float64)

    return TransformTrack(
        timestamps=df[TIMESTAMP_COLUMN].to_numpy(dtype=np.float64),
        positions=df[POSITION_COLUMNS].to_numpy(dtype=np.float64),
        rotations=rotations,
    )


def track_to_dataframe(track: TransformTrack) -> pd.DataFrame:
    """Convert TransformTrack to DataFrame."""
    columns = {TIMESTAMP_COLUMN: track.timestamps}
    for i, name in enumerate(POSITION_COLUMNS):
        columns[name] = track.positions[:, i]
    if track.rotations is not None:
        for i, name in enumerate(ROTATION_COLUMNS):
            columns[name] = track.rotations[:, i]
    return pd.DataFrame(columns)


def load_track(filepath: Path | str) -> TransformTrack:
    """Load a transform track from a CSV file."""
    return dataframe_to_track(pd.read_csv(filepath))


def save_track(track: TransformTrack, filepath: Path | str) -> None:
    """Save a transform track to a CSV file."""
    track_to_dataframe(track).to_csv(filepath, index=False, float_format="%.6f")
