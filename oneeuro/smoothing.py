"""
Scalar adaptive smoothing.

An ExponentialSmoother is a first-order low-pass filter whose coefficient is
supplied on every call. AdaptiveFilter cascades two of them: one smooths the
signal's derivative, whose magnitude raises the cutoff of the second one that
smooths the signal itself (the "1 euro" filter of Casiez et al., CHI 2012).
"""

import math
from typing import Optional

from .config import DEFAULT_PARAMETERS, FilterParameters
from .diagnostics import Diagnostics, validate_alpha, validate_frequency, validate_parameters


def smoothing_alpha(cutoff: float, frequency: float) -> float:
    """
    Exponential smoothing coefficient for an RC low-pass filter.

    Args:
        cutoff: Cutoff frequency (Hz)
        frequency: Sampling frequency (Hz)

    Returns:
        Coefficient in (0, 1] for positive inputs, 0.0 otherwise
    """
    if not (cutoff > 0.0 and frequency > 0.0):
        return 0.0
    te = 1.0 / frequency
    tau = 1.0 / (2.0 * math.pi * cutoff)
    return 1.0 / (1.0 + tau / te)


class ExponentialSmoother:
    """Exponential moving average with a per-call coefficient."""

    def __init__(
        self,
        alpha: float = 1.0,
        initial_value: float = 0.0,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.diagnostics = diagnostics
        self.initial_value = initial_value
        self.alpha = validate_alpha(alpha, diagnostics)
        self.last_input = initial_value
        self.last_output = initial_value
        self.initialized = False

    def set_alpha(self, alpha: float) -> None:
        self.alpha = validate_alpha(alpha, self.diagnostics)

    def filter(self, value: float, alpha: float) -> float:
        """
        Smooth a new value.

        The first value passes through unchanged and seeds the state.
        """
        self.set_alpha(alpha)
        if self.initialized:
            result = self.alpha * value + (1.0 - self.alpha) * self.last_output
        else:
            result = value
            self.initialized = True
        self.last_input = value
        self.last_output = result
        return result

    def reset(self) -> None:
        self.last_input = self.initial_value
        self.last_output = self.initial_value
        self.initialized = False


class AdaptiveFilter:
    """
    Speed-adaptive low-pass filter for a single scalar signal.

    Jitter is removed at low speeds (cutoff close to `min_cutoff`) while lag
    is reduced at high speeds (cutoff grows with `beta` times the smoothed
    speed).
    """

    def __init__(
        self,
        parameters: FilterParameters = DEFAULT_PARAMETERS,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.parameters = validate_parameters(parameters, self.diagnostics)

        # Frequency used by the latest call (estimated or configured)
        self.frequency = self.parameters.frequency

        self.value_smoother = ExponentialSmoother(diagnostics=self.diagnostics)
        self.derivative_smoother = ExponentialSmoother(diagnostics=self.diagnostics)

        self.last_timestamp: Optional[float] = None
        self.current_output = 0.0
        self.previous_output = 0.0

    def update_parameters(self, parameters: FilterParameters) -> None:
        """Replace the parameter set; takes effect on the next call."""
        self.parameters = validate_parameters(parameters, self.diagnostics)
        self.frequency = self.parameters.frequency

    def estimate_frequency(self, timestamp: Optional[float]) -> float:
        """Sampling frequency for a sample at `timestamp`, validated."""
        if timestamp is None or self.last_timestamp is None:
            return self.parameters.frequency

        elapsed = timestamp - self.last_timestamp
        frequency = 1.0 / elapsed if elapsed != 0.0 else math.inf
        return validate_frequency(frequency, self.diagnostics)

    def filter(
        self,
        value: float,
        timestamp: Optional[float] = None,
        frequency: Optional[float] = None,
    ) -> float:
        """
        Filter a new sample.

        Args:
            value: Raw sample
            timestamp: Sample time in seconds. Without one (on this or the
                previous call) the configured frequency is used.
            frequency: Already validated frequency to use instead of
                estimating one from `timestamp`

        Returns:
            Filtered sample
        """
        self.previous_output = self.current_output

        if frequency is None:
            frequency = self.estimate_frequency(timestamp)
        self.frequency = frequency
        self.last_timestamp = timestamp

        # Variation per second; zero until there is a previous sample
        if self.value_smoother.initialized:
            derivative = (value - self.value_smoother.last_input) * self.frequency
        else:
            derivative = 0.0

        smoothed_derivative = self.derivative_smoother.filter(
            derivative, smoothing_alpha(self.parameters.derivative_cutoff, self.frequency)
        )

        cutoff = self.parameters.min_cutoff + self.parameters.beta * abs(smoothed_derivative)

        self.current_output = self.value_smoother.filter(
            value, smoothing_alpha(cutoff, self.frequency)
        )
        return self.current_output

    def reset(self) -> None:
        """Forget all samples; parameters are kept."""
        self.value_smoother.reset()
        self.derivative_smoother.reset()
        self.frequency = self.parameters.frequency
        self.last_timestamp = None
        self.current_output = 0.0
        self.previous_output = 0.0
