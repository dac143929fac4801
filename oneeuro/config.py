"""Configuration for adaptive one-euro smoothing."""

from dataclasses import dataclass, field

import numpy as np


# Smallest positive float; replaces non-positive frequencies, cutoffs and alphas
MIN_POSITIVE = float(np.nextafter(0.0, 1.0))

# Squared distance between normalized quaternions above which the raw
# rotation is treated as the opposite sign of the filtered one
ROTATION_FLIP_THRESHOLD = 2.0

# Vectors shorter than this normalize to zero
NORMALIZE_EPSILON = 1e-5

# Maximum number of validation warnings kept by a Diagnostics queue
DIAGNOSTICS_MAXLEN = 256


@dataclass(frozen=True)
class FilterParameters:
    """Tunable knobs of the adaptive filter."""

    # Sampling frequency used when no timestamps are supplied (Hz)
    frequency: float = 120.0

    # Cutoff at zero speed (Hz). Lower = less jitter, more lag
    min_cutoff: float = 1.0

    # Speed coefficient. Higher = less lag on fast motion
    beta: float = 0.0

    # Cutoff for the derivative estimate (Hz)
    derivative_cutoff: float = 1.0


DEFAULT_PARAMETERS = FilterParameters()


@dataclass
class DriverConfig:
    """Configuration for a position + rotation smoother driven per frame."""

    position: FilterParameters = field(default_factory=FilterParameters)
    rotation: FilterParameters = field(default_factory=FilterParameters)

    # Bypass both filters when False
    enabled: bool = True

    # Estimate sampling frequency from timestamps when available
    use_timestamps: bool = True


PRESET_NAMES = ["default", "responsive", "smooth"]


def get_preset_parameters(preset: str) -> FilterParameters:
    """Get preset filter parameters."""
    if preset == "responsive":
        # Hand/head tracking: let fast motion through with little lag
        return FilterParameters(min_cutoff=1.0, beta=0.5, derivative_cutoff=1.0)

    elif preset == "smooth":
        # Slow sensors and UI cursors: heavy smoothing at rest
        return FilterParameters(min_cutoff=0.3, beta=0.05, derivative_cutoff=1.0)

    return DEFAULT_PARAMETERS


def get_preset_config(preset: str) -> DriverConfig:
    """Get a driver configuration using the same preset for both channels."""
    parameters = get_preset_parameters(preset)
    return DriverConfig(position=parameters, rotation=parameters)
