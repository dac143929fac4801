"""Per-frame smoothing of a tracked transform (position + rotation)."""

from dataclasses import replace
from typing import Optional, Sequence

from .axes import Quaternion, ValueKind, Vector3
from .config import DriverConfig, FilterParameters
from .diagnostics import Diagnostics
from .multi_axis import MultiAxisFilter


class TransformSmoother:
    """
    Smooths the position and rotation of one tracked object.

    Meant to be called once per frame by the host update loop. While
    disabled, raw values are returned unchanged and the filters keep their
    state from the last enabled frame.
    """

    def __init__(
        self,
        config: Optional[DriverConfig] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        # Own copy: set_enabled and update_parameters write to it
        self.config = replace(config) if config is not None else DriverConfig()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        self.position_filter = MultiAxisFilter(
            ValueKind.VECTOR3, self.config.position, self.diagnostics
        )
        self.rotation_filter = MultiAxisFilter(
            ValueKind.ROTATION, self.config.rotation, self.diagnostics
        )

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def set_enabled(self, enabled: bool) -> None:
        self.config.enabled = enabled

    def update_parameters(
        self,
        position: Optional[FilterParameters] = None,
        rotation: Optional[FilterParameters] = None,
    ) -> None:
        if position is not None:
            self.config.position = position
            self.position_filter.update_parameters(position)
        if rotation is not None:
            self.config.rotation = rotation
            self.rotation_filter.update_parameters(rotation)

    def update(
        self,
        position: Sequence[float],
        rotation: Sequence[float],
        timestamp: Optional[float] = None,
    ) -> tuple[Vector3, Quaternion]:
        """
        Process one frame.

        Args:
            position: Raw position (x, y, z)
            rotation: Raw rotation quaternion (x, y, z, w)
            timestamp: Frame time in seconds

        Returns:
            (position, rotation) to apply to the output transform
        """
        if not self.config.enabled:
            return Vector3(*position), Quaternion(*rotation)

        if not self.config.use_timestamps:
            timestamp = None

        return (
            self.position_filter.filter(position, timestamp),
            self.rotation_filter.filter(rotation, timestamp),
        )

    def reset(self) -> None:
        self.position_filter.reset()
        self.rotation_filter.reset()
