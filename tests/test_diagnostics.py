"""Tests for oneeuro.diagnostics module."""

import math

import pytest
from oneeuro.config import MIN_POSITIVE, FilterParameters
from oneeuro.diagnostics import (
    Diagnostics,
    ValidationIssue,
    ValidationWarning,
    validate_alpha,
    validate_cutoff,
    validate_frequency,
    validate_parameters,
)


class TestValidateFrequency:
    """Test sampling frequency validation."""

    def test_valid_frequency_unchanged(self):
        """Positive finite frequencies should pass through without warnings."""
        diagnostics = Diagnostics()
        assert validate_frequency(60.0, diagnostics) == 60.0
        assert len(diagnostics) == 0

    @pytest.mark.parametrize("frequency", [0.0, -1.0, -120.0, math.inf, math.nan])
    def test_invalid_frequency_clamped(self, frequency):
        """Zero, negative, infinite and NaN frequencies should become MIN_POSITIVE."""
        diagnostics = Diagnostics()
        assert validate_frequency(frequency, diagnostics) == MIN_POSITIVE
        assert diagnostics.count(ValidationIssue.NON_POSITIVE_FREQUENCY) == 1

    def test_without_diagnostics(self):
        """Validation should work without a diagnostics sink."""
        assert validate_frequency(-5.0) == MIN_POSITIVE


class TestValidateCutoff:
    """Test cutoff validation."""

    def test_negative_cutoff_clamped(self):
        """Negative cutoff should be replaced and reported with its field name."""
        diagnostics = Diagnostics()
        assert validate_cutoff(-1.0, diagnostics, "min_cutoff") == MIN_POSITIVE

        warning = diagnostics.warnings[0]
        assert warning.issue is ValidationIssue.NON_POSITIVE_CUTOFF
        assert warning.field == "min_cutoff"
        assert warning.value == -1.0
        assert warning.corrected == MIN_POSITIVE

    def test_positive_cutoff_unchanged(self):
        """Positive cutoff should pass through."""
        assert validate_cutoff(0.5) == 0.5


class TestValidateAlpha:
    """Test smoothing coefficient validation."""

    def test_alpha_in_range_unchanged(self):
        """Alphas in (0, 1] should pass through."""
        diagnostics = Diagnostics()
        assert validate_alpha(0.25, diagnostics) == 0.25
        assert validate_alpha(1.0, diagnostics) == 1.0
        assert len(diagnostics) == 0

    def test_non_positive_alpha(self):
        """Alpha <= 0 should become MIN_POSITIVE (reported as a cutoff fault)."""
        diagnostics = Diagnostics()
        assert validate_alpha(0.0, diagnostics) == MIN_POSITIVE
        assert validate_alpha(-0.5, diagnostics) == MIN_POSITIVE
        assert diagnostics.count(ValidationIssue.NON_POSITIVE_CUTOFF) == 2

    def test_alpha_above_one(self):
        """Alpha > 1 should be clamped to 1 (reported as a frequency fault)."""
        diagnostics = Diagnostics()
        assert validate_alpha(1.5, diagnostics) == 1.0
        assert diagnostics.count(ValidationIssue.NON_POSITIVE_FREQUENCY) == 1


class TestValidateParameters:
    """Test whole parameter set validation."""

    def test_valid_parameters_returned_as_is(self):
        """Valid parameters should be returned without copying."""
        params = FilterParameters(frequency=60.0, min_cutoff=0.5, beta=0.1)
        assert validate_parameters(params) is params

    def test_all_faults_corrected(self):
        """Every non-positive field should be corrected in the returned copy."""
        params = FilterParameters(frequency=0.0, min_cutoff=-1.0, beta=0.3, derivative_cutoff=0.0)
        diagnostics = Diagnostics()

        validated = validate_parameters(params, diagnostics)

        assert validated.frequency == MIN_POSITIVE
        assert validated.min_cutoff == MIN_POSITIVE
        assert validated.derivative_cutoff == MIN_POSITIVE
        assert validated.beta == 0.3
        # Original untouched
        assert params.min_cutoff == -1.0
        assert diagnostics.count(ValidationIssue.NON_POSITIVE_FREQUENCY) == 1
        assert diagnostics.count(ValidationIssue.NON_POSITIVE_CUTOFF) == 2


class TestDiagnostics:
    """Test the diagnostics side channel."""

    def test_callback_receives_warnings(self):
        """Callback should be invoked for every report."""
        received = []
        diagnostics = Diagnostics(callback=received.append)

        validate_frequency(-1.0, diagnostics)

        assert len(received) == 1
        assert isinstance(received[0], ValidationWarning)
        assert received[0].issue is ValidationIssue.NON_POSITIVE_FREQUENCY

    def test_queue_is_bounded(self):
        """Only the most recent warnings should be kept."""
        diagnostics = Diagnostics(maxlen=3)
        for value in range(10):
            validate_cutoff(-float(value), diagnostics)

        assert len(diagnostics) == 3
        assert [w.value for w in diagnostics] == [-7.0, -8.0, -9.0]

    def test_counts_cover_evicted_warnings(self):
        """Totals and per-kind counts should include warnings dropped from the queue."""
        diagnostics = Diagnostics(maxlen=3)
        for value in range(10):
            validate_cutoff(-float(value), diagnostics)
        validate_frequency(0.0, diagnostics)

        assert len(diagnostics) == 3
        assert diagnostics.total == 11
        assert diagnostics.count(ValidationIssue.NON_POSITIVE_CUTOFF) == 10
        assert diagnostics.count(ValidationIssue.NON_POSITIVE_FREQUENCY) == 1

    def test_clear(self):
        """clear() should empty the queue and reset the counts."""
        diagnostics = Diagnostics()
        validate_cutoff(0.0, diagnostics)
        diagnostics.clear()
        assert len(diagnostics) == 0
        assert diagnostics.total == 0
        assert diagnostics.count(ValidationIssue.NON_POSITIVE_CUTOFF) == 0

    def test_warning_str(self):
        """Warnings should format with kind, field and values."""
        warning = ValidationWarning(ValidationIssue.NON_POSITIVE_CUTOFF, "min_cutoff", -1.0, 1.0)
        assert str(warning) == "non_positive_cutoff: min_cutoff=-1.0 corrected to 1.0"
