"""Adaptive filtering of structured values, one AdaptiveFilter per axis."""

from typing import Any, Optional, Union

import numpy as np

from .axes import AxisLayout, ValueKind, get_layout, is_opposite_cover
from .config import DEFAULT_PARAMETERS, FilterParameters
from .diagnostics import Diagnostics, validate_parameters
from .smoothing import AdaptiveFilter


class MultiAxisFilter:
    """
    Filter for vectors and rotations.

    The value is split into axes by its layout, each axis is filtered
    independently and the results are recomposed into the same type. For
    rotations the raw quaternion is first flipped onto the hemisphere of the
    current filtered rotation, so a sign change upstream does not look like
    a half-turn jump.

    Example:
        >>> f = MultiAxisFilter(ValueKind.VECTOR3, FilterParameters(beta=0.5))
        >>> f.filter(Vector3(0.0, 1.0, 2.0), timestamp=0.0)
        Vector3(x=0.0, y=1.0, z=2.0)
    """

    def __init__(
        self,
        layout: Union[AxisLayout, ValueKind, str],
        parameters: FilterParameters = DEFAULT_PARAMETERS,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.layout = get_layout(layout)
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        # Validate once so warnings are not repeated per axis
        parameters = validate_parameters(parameters, self.diagnostics)
        self.axis_filters = tuple(
            AdaptiveFilter(parameters, self.diagnostics)
            for _ in range(self.layout.dimensions)
        )

        # Scratch buffer, only written by filter()
        self._buffer = np.zeros(self.layout.dimensions, dtype=np.float64)

        self._current_output = self.layout.recompose(self._buffer)
        self._previous_output = self._current_output

    @property
    def dimensions(self) -> int:
        return self.layout.dimensions

    @property
    def parameters(self) -> FilterParameters:
        return self.axis_filters[0].parameters

    @property
    def current_output(self) -> Any:
        """Latest filtered value."""
        return self._current_output

    @property
    def previous_output(self) -> Any:
        """Filtered value before the latest call."""
        return self._previous_output

    def update_parameters(self, parameters: FilterParameters) -> None:
        """Replace the parameters of every axis; takes effect on the next call."""
        parameters = validate_parameters(parameters, self.diagnostics)
        for axis_filter in self.axis_filters:
            axis_filter.update_parameters(parameters)

    def _filtered_axes(self) -> np.ndarray:
        return np.array([f.current_output for f in self.axis_filters], dtype=np.float64)

    def filter(self, value: Any, timestamp: Optional[float] = None) -> Any:
        """
        Filter a new sample.

        Args:
            value: Raw value of the layout's type
            timestamp: Sample time in seconds, shared by all axes

        Returns:
            Filtered value of the same type
        """
        buffer = self._buffer
        self.layout.decompose(value, buffer)

        if self.layout.double_cover and is_opposite_cover(self._filtered_axes(), buffer):
            np.negative(buffer, out=buffer)

        # Axes share their timestamp history, so one estimate (and one
        # warning for a bad timestamp) serves every axis
        frequency = self.axis_filters[0].estimate_frequency(timestamp)
        for i, axis_filter in enumerate(self.axis_filters):
            buffer[i] = axis_filter.filter(float(buffer[i]), timestamp, frequency)

        self._previous_output = self._current_output
        self._current_output = self.layout.recompose(buffer)
        return self._current_output

    def reset(self) -> None:
        """Forget all samples; parameters are kept."""
        for axis_filter in self.axis_filters:
            axis_filter.reset()
        self._buffer[:] = 0.0
        self._current_output = self.layout.recompose(self._buffer)
        self._previous_output = self._current_output
