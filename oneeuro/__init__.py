"""
Adaptive one-euro smoothing for real-time signals

This package implements a speed-adaptive low-pass filter for noisy,
irregularly sampled scalars, vectors and rotations.

Key features:
- Cutoff frequency grows with signal speed: low jitter at rest, low lag in motion
- Sampling frequency estimated from timestamps, static fallback without them
- Per-axis filtering of 2D/3D/4D vectors and quaternions
- Quaternion sign-flip correction across the double cover
- Invalid parameters are corrected and reported, never fatal
"""

from .axes import IDENTITY, Quaternion, ValueKind, Vector2, Vector3, Vector4
from .config import DEFAULT_PARAMETERS, DriverConfig, FilterParameters, get_preset_parameters
from .diagnostics import Diagnostics, ValidationIssue, ValidationWarning
from .driver import TransformSmoother
from .multi_axis import MultiAxisFilter
from .smoothing import AdaptiveFilter, ExponentialSmoother, smoothing_alpha

__all__ = [
    "AdaptiveFilter",
    "DEFAULT_PARAMETERS",
    "Diagnostics",
    "DriverConfig",
    "ExponentialSmoother",
    "FilterParameters",
    "IDENTITY",
    "MultiAxisFilter",
    "Quaternion",
    "TransformSmoother",
    "ValidationIssue",
    "ValidationWarning",
    "ValueKind",
    "Vector2",
    "Vector3",
    "Vector4",
    "get_preset_parameters",
    "smoothing_alpha",
]
