"""
Structured values and their decomposition into filterable axes.

Each ValueKind maps to an AxisLayout: the number of axes plus a pair of
functions writing a value into a float buffer and reading it back.
"""

import enum
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Sequence

import numpy as np

from .config import NORMALIZE_EPSILON, ROTATION_FLIP_THRESHOLD


class Vector2(NamedTuple):
    """2D vector."""

    x: float
    y: float


class Vector3(NamedTuple):
    """3D vector."""

    x: float
    y: float
    z: float


class Vector4(NamedTuple):
    """4D vector."""

    x: float
    y: float
    z: float
    w: float


class Quaternion(NamedTuple):
    """Rotation quaternion, scalar last (same order as scipy's as_quat)."""

    x: float
    y: float
    z: float
    w: float

    def as_array(self) -> np.ndarray:
        """Return as (4,) array."""
        return np.array(self, dtype=np.float64)

    def normalized(self) -> "Quaternion":
        return Quaternion(*(float(c) for c in normalize(self.as_array())))

    def __neg__(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, -self.w)


IDENTITY = Quaternion(0.0, 0.0, 0.0, 1.0)


class ValueKind(enum.Enum):
    """Structured value types a MultiAxisFilter can smooth."""

    SCALAR = "scalar"
    VECTOR2 = "vector2"
    VECTOR3 = "vector3"
    VECTOR4 = "vector4"
    ROTATION = "rotation"


@dataclass(frozen=True)
class AxisLayout:
    """How a structured value maps onto a fixed number of scalar axes."""

    kind: ValueKind
    dimensions: int

    # decompose(value, out) writes `dimensions` floats into `out`
    decompose: Callable[[Any, np.ndarray], None]

    # recompose(buffer) builds the structured value from `dimensions` floats
    recompose: Callable[[np.ndarray], Any]

    # q and -q are the same value (unit quaternions)
    double_cover: bool = False


def _decompose_scalar(value: float, out: np.ndarray) -> None:
    out[0] = value


def _recompose_scalar(buffer: np.ndarray) -> float:
    return float(buffer[0])


def _components(dimensions: int) -> Callable[[Sequence[float], np.ndarray], None]:
    def decompose(value: Sequence[float], out: np.ndarray) -> None:
        if len(value) != dimensions:
            raise ValueError(f"Expected {dimensions} components, got {len(value)}")
        for i in range(dimensions):
            out[i] = value[i]

    return decompose


def _recompose_as(cls) -> Callable[[np.ndarray], Any]:
    def recompose(buffer: np.ndarray):
        return cls(*(float(c) for c in buffer))

    return recompose


LAYOUTS: dict[ValueKind, AxisLayout] = {
    ValueKind.SCALAR: AxisLayout(ValueKind.SCALAR, 1, _decompose_scalar, _recompose_scalar),
    ValueKind.VECTOR2: AxisLayout(ValueKind.VECTOR2, 2, _components(2), _recompose_as(Vector2)),
    ValueKind.VECTOR3: AxisLayout(ValueKind.VECTOR3, 3, _components(3), _recompose_as(Vector3)),
    ValueKind.VECTOR4: AxisLayout(ValueKind.VECTOR4, 4, _components(4), _recompose_as(Vector4)),
    ValueKind.ROTATION: AxisLayout(
        ValueKind.ROTATION, 4, _components(4), _recompose_as(Quaternion), double_cover=True
    ),
}


def get_layout(kind) -> AxisLayout:
    """Resolve a ValueKind (or its name) to its AxisLayout."""
    if isinstance(kind, AxisLayout):
        return kind
    try:
        return LAYOUTS[ValueKind(kind)]
    except ValueError:
        raise ValueError(f"Unknown value kind: {kind!r}") from None


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along `v`, or zeros when `v` is (nearly) zero."""
    magnitude = np.linalg.norm(v)
    if magnitude > NORMALIZE_EPSILON:
        return v / magnitude
    return np.zeros_like(v, dtype=np.float64)


def is_opposite_cover(reference: np.ndarray, raw: np.ndarray) -> bool:
    """
    True when `raw` lies on the other side of the quaternion double cover.

    Both inputs are normalized; squared distances between unit quaternions
    range from 0 to 4 and exceed the threshold when the dot product is negative.
    """
    diff = normalize(reference) - normalize(raw)
    return float(np.dot(diff, diff)) > ROTATION_FLIP_THRESHOLD
