"""Visualization of raw versus filtered tracks."""

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np


def plot_track_comparison(
    timestamps: np.ndarray,
    raw: np.ndarray,
    filtered: np.ndarray,
    labels: Sequence[str],
    title: str = "",
    output_path: Path | str | None = None,
    figsize: tuple[int, int] = (12, 8),
) -> plt.Figure:
    """
    Plot raw and filtered channels, one subplot per channel.

    Args:
        timestamps: (n_frames,) sample times
        raw: (n_frames, n_channels) raw samples
        filtered: (n_frames, n_channels) filtered samples
        labels: Channel names
        title: Figure title
        output_path: Optional path to save figure
        figsize: Figure size

    Returns:
        Matplotlib figure
    """
    raw = np.asarray(raw).reshape(len(timestamps), -1)
    filtered = np.asarray(filtered).reshape(len(timestamps), -1)
    n_channels = raw.shape[1]

    fig, axes = plt.subplots(n_channels, 1, figsize=figsize, sharex=True, squeeze=False)

    for i, ax in enumerate(axes[:, 0]):
        ax.plot(timestamps, raw[:, i], color="0.6", linewidth=1, label="Raw")
        ax.plot(timestamps, filtered[:, i], "b-", linewidth=2, label="Filtered")
        ax.set_ylabel(labels[i] if i < len(labels) else f"ch{i}")
        ax.grid(True, alpha=0.3)

    axes[0, 0].legend(loc="upper right")
    axes[-1, 0].set_xlabel("Time (s)")
    if title:
        fig.suptitle(title)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches="tight")

    plt.close(fig)
    return fig
