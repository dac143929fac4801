"""
Validation of filter parameters and coefficients.

Faults are never fatal: every invalid value is replaced by a usable one and
the correction is reported through a Diagnostics object owned by the caller.
"""

from __future__ import annotations

import enum
import logging
import math
from collections import Counter, deque
from dataclasses import dataclass, replace
from typing import Callable, Iterator, Optional

from .config import DIAGNOSTICS_MAXLEN, MIN_POSITIVE, FilterParameters

logger = logging.getLogger(__name__)


class ValidationIssue(enum.Enum):
    """Kinds of recoverable configuration faults."""

    NON_POSITIVE_FREQUENCY = "non_positive_frequency"
    NON_POSITIVE_CUTOFF = "non_positive_cutoff"


@dataclass(frozen=True)
class ValidationWarning:
    """A single corrected value."""

    issue: ValidationIssue
    field: str
    value: float
    corrected: float

    def __str__(self) -> str:
        return f"{self.issue.value}: {self.field}={self.value!r} corrected to {self.corrected!r}"


class Diagnostics:
    """
    Side channel collecting validation warnings.

    Keeps the most recent warnings in a bounded queue and forwards each one
    to an optional callback. `total` and `count()` cover every report, not
    only the queued ones. Records are also emitted at DEBUG level on this
    module's logger; no handler is installed here.
    """

    def __init__(
        self,
        callback: Optional[Callable[[ValidationWarning], None]] = None,
        maxlen: int = DIAGNOSTICS_MAXLEN,
    ):
        self.callback = callback
        self.warnings: deque[ValidationWarning] = deque(maxlen=maxlen)
        self.counts: Counter[ValidationIssue] = Counter()
        self.total = 0

    def report(self, warning: ValidationWarning) -> None:
        self.warnings.append(warning)
        self.counts[warning.issue] += 1
        self.total += 1
        logger.debug("%s", warning)
        if self.callback is not None:
            self.callback(warning)

    def count(self, issue: ValidationIssue) -> int:
        """Number of warnings of the given kind reported since the last clear()."""
        return self.counts[issue]

    def clear(self) -> None:
        self.warnings.clear()
        self.counts.clear()
        self.total = 0

    def __len__(self) -> int:
        return len(self.warnings)

    def __iter__(self) -> Iterator[ValidationWarning]:
        return iter(self.warnings)


def _report(
    diagnostics: Optional[Diagnostics],
    issue: ValidationIssue,
    name: str,
    value: float,
    corrected: float,
) -> float:
    if diagnostics is not None:
        diagnostics.report(ValidationWarning(issue, name, value, corrected))
    return corrected


def validate_frequency(
    frequency: float,
    diagnostics: Optional[Diagnostics] = None,
    name: str = "frequency",
) -> float:
    """
    Clamp a sampling frequency to a finite positive value.

    Infinite frequencies come from two samples sharing a timestamp and are
    treated like any other non-positive sample period.
    """
    if not 0.0 < frequency < math.inf:
        return _report(
            diagnostics, ValidationIssue.NON_POSITIVE_FREQUENCY, name, frequency, MIN_POSITIVE
        )
    return frequency


def validate_cutoff(
    cutoff: float,
    diagnostics: Optional[Diagnostics] = None,
    name: str = "min_cutoff",
) -> float:
    """Clamp a cutoff frequency to a positive value."""
    if not cutoff > 0.0:
        return _report(
            diagnostics, ValidationIssue.NON_POSITIVE_CUTOFF, name, cutoff, MIN_POSITIVE
        )
    return cutoff


def validate_alpha(alpha: float, diagnostics: Optional[Diagnostics] = None) -> float:
    """
    Clamp a smoothing coefficient into (0, 1].

    A coefficient of zero or below corresponds to a zero cutoff; one above 1
    only arises from a negative sample period.
    """
    if not alpha > 0.0:
        return _report(
            diagnostics, ValidationIssue.NON_POSITIVE_CUTOFF, "alpha", alpha, MIN_POSITIVE
        )
    if alpha > 1.0:
        return _report(
            diagnostics, ValidationIssue.NON_POSITIVE_FREQUENCY, "alpha", alpha, 1.0
        )
    return alpha


def validate_parameters(
    parameters: FilterParameters,
    diagnostics: Optional[Diagnostics] = None,
) -> FilterParameters:
    """Return a copy of `parameters` with every frequency and cutoff positive."""
    frequency = validate_frequency(parameters.frequency, diagnostics)
    min_cutoff = validate_cutoff(parameters.min_cutoff, diagnostics, "min_cutoff")
    derivative_cutoff = validate_cutoff(
        parameters.derivative_cutoff, diagnostics, "derivative_cutoff"
    )

    if (
        frequency == parameters.frequency
        and min_cutoff == parameters.min_cutoff
        and derivative_cutoff == parameters.derivative_cutoff
    ):
        return parameters

    return replace(
        parameters,
        frequency=frequency,
        min_cutoff=min_cutoff,
        derivative_cutoff=derivative_cutoff,
    )
