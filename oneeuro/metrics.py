"""
Offline evaluation of the adaptive filter.

Runs recorded samples through the streaming filter and measures the
jitter/lag trade-off of the result.
"""

from typing import Optional

import numpy as np
from scipy import signal
from scipy.spatial.transform import Rotation

from .axes import ValueKind, get_layout
from .config import DEFAULT_PARAMETERS, FilterParameters
from .diagnostics import Diagnostics
from .multi_axis import MultiAxisFilter

_KIND_BY_WIDTH = {
    2: ValueKind.VECTOR2,
    3: ValueKind.VECTOR3,
    4: ValueKind.VECTOR4,
}


def filter_series(
    values: np.ndarray,
    timestamps: Optional[np.ndarray] = None,
    kind: Optional[ValueKind] = None,
    parameters: FilterParameters = DEFAULT_PARAMETERS,
    diagnostics: Optional[Diagnostics] = None,
) -> np.ndarray:
    """
    Filter a whole recording sample by sample.

    Args:
        values: (n_samples,) scalars or (n_samples, n_axes) vectors
        timestamps: Optional (n_samples,) sample times in seconds
        kind: Value kind (default: inferred from the shape; pass
            ValueKind.ROTATION for quaternions)
        parameters: Filter parameters
        diagnostics: Optional diagnostics sink

    Returns:
        Filtered values with the same shape as `values`
    """
    values = np.asarray(values, dtype=np.float64)

    if kind is None:
        if values.ndim == 1:
            kind = ValueKind.SCALAR
        elif values.ndim == 2 and values.shape[1] in _KIND_BY_WIDTH:
            kind = _KIND_BY_WIDTH[values.shape[1]]
        else:
            raise ValueError(f"Cannot infer value kind from shape {values.shape}")

    layout = get_layout(kind)
    width = 1 if values.ndim == 1 else values.shape[1]
    if width != layout.dimensions:
        raise ValueError(
            f"{layout.kind.value} expects {layout.dimensions} axes, got {width}"
        )
    if timestamps is not None and len(timestamps) != len(values):
        raise ValueError(
            f"Expected {len(values)} timestamps, got {len(timestamps)}"
        )

    smoother = MultiAxisFilter(layout, parameters, diagnostics)
    result = np.empty_like(values)

    for i in range(len(values)):
        t = None if timestamps is None else float(timestamps[i])
        if values.ndim == 1:
            result[i] = smoother.filter(float(values[i]), t)
        else:
            result[i] = smoother.filter(values[i], t)

    return result


def compute_jitter(values: np.ndarray) -> float:
    """Mean magnitude of the second difference (per-sample acceleration)."""
    values = np.asarray(values, dtype=np.float64)
    if len(values) < 3:
        return float("nan")
    accel = values[2:] - 2 * values[1:-1] + values[:-2]
    if accel.ndim == 1:
        return float(np.abs(accel).mean())
    return float(np.linalg.norm(accel, axis=1).mean())


def estimate_lag(
    reference: np.ndarray,
    delayed: np.ndarray,
    sample_rate: float,
    max_lag: Optional[int] = None,
) -> float:
    """
    Estimate how far `delayed` trails `reference` using cross-correlation.

    Args:
        reference: (n,) reference signal
        delayed: (n,) signal to compare
        sample_rate: Sampling rate in Hz
        max_lag: Optional maximum lag to search, in samples

    Returns:
        Lag in seconds (positive when `delayed` is behind)
    """
    reference = np.asarray(reference, dtype=np.float64)
    delayed = np.asarray(delayed, dtype=np.float64)

    correlation = signal.correlate(
        delayed - delayed.mean(), reference - reference.mean(), mode="full"
    )
    lags = signal.correlation_lags(len(delayed), len(reference), mode="full")

    if max_lag is not None:
        window = np.abs(lags) <= max_lag
        correlation = correlation[window]
        lags = lags[window]

    return float(lags[np.argmax(correlation)]) / sample_rate


def angular_jitter(quaternions: np.ndarray) -> float:
    """
    Mean rotation angle between consecutive quaternions (radians).

    Args:
        quaternions: (n, 4) array in (x, y, z, w) order
    """
    quaternions = np.asarray(quaternions, dtype=np.float64)
    if len(quaternions) < 2:
        return float("nan")
    rotations = Rotation.from_quat(quaternions)
    steps = rotations[1:] * rotations[:-1].inv()
    return float(np.mean(steps.magnitude()))


def compute_metrics(
    raw: np.ndarray,
    filtered: np.ndarray,
    sample_rate: float,
    reference: Optional[np.ndarray] = None,
    max_lag: Optional[int] = None,
) -> dict[str, float]:
    """
    Compute quality metrics comparing raw and filtered samples.

    Args:
        raw: (n,) or (n, d) raw samples
        filtered: Filtered samples, same shape
        sample_rate: Sampling rate in Hz
        reference: Optional noise-free signal for RMSE and lag (default: raw)
        max_lag: Optional maximum lag to search, in samples

    Returns:
        Dictionary of metrics
    """
    raw = np.asarray(raw, dtype=np.float64)
    filtered = np.asarray(filtered, dtype=np.float64)
    target = raw if reference is None else np.asarray(reference, dtype=np.float64)

    if raw.ndim == 1:
        raw = raw[:, None]
        filtered = filtered[:, None]
        target = target.reshape(-1, 1)

    metrics = {}

    metrics["jitter_raw"] = compute_jitter(raw)
    metrics["jitter_filtered"] = compute_jitter(filtered)
    metrics["jitter_reduction"] = metrics["jitter_raw"] / (metrics["jitter_filtered"] + 1e-12)

    diff = filtered - target
    metrics["rmse"] = float(np.sqrt(np.mean(diff ** 2)))

    # Lag per axis, ignoring constant axes (no correlation peak)
    lags = [
        estimate_lag(target[:, j], filtered[:, j], sample_rate, max_lag)
        for j in range(target.shape[1])
        if np.std(target[:, j]) > 0
    ]
    metrics["lag_s"] = float(np.median(lags)) if lags else float("nan")

    return metrics
