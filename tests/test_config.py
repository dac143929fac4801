"""Tests for oneeuro.config module."""

import dataclasses

import pytest
from oneeuro.config import (
    DEFAULT_PARAMETERS,
    MIN_POSITIVE,
    PRESET_NAMES,
    ROTATION_FLIP_THRESHOLD,
    DriverConfig,
    FilterParameters,
    get_preset_config,
    get_preset_parameters,
)


class TestFilterParameters:
    """Test parameter set definitions."""

    def test_default_values(self):
        """Defaults should be 120 Hz, min cutoff 1, beta 0, derivative cutoff 1."""
        params = FilterParameters()
        assert params.frequency == 120.0
        assert params.min_cutoff == 1.0
        assert params.beta == 0.0
        assert params.derivative_cutoff == 1.0
        assert params == DEFAULT_PARAMETERS

    def test_parameters_are_immutable(self):
        """Parameter sets should not be mutable in place."""
        params = FilterParameters()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.beta = 1.0

    def test_replace_creates_new_instance(self):
        """dataclasses.replace should leave the original untouched."""
        params = FilterParameters()
        updated = dataclasses.replace(params, beta=0.5)
        assert updated.beta == 0.5
        assert params.beta == 0.0


class TestConstants:
    """Test module-level constants."""

    def test_min_positive_is_smallest_float(self):
        """MIN_POSITIVE should be positive with nothing representable below it."""
        assert MIN_POSITIVE > 0.0
        assert MIN_POSITIVE / 2 == 0.0

    def test_flip_threshold(self):
        """Sign-flip threshold should be half the maximum squared distance (4)."""
        assert ROTATION_FLIP_THRESHOLD == 2.0


class TestPresets:
    """Test parameter presets."""

    def test_default_preset(self):
        """Default preset should return the default parameters."""
        assert get_preset_parameters("default") == DEFAULT_PARAMETERS

    def test_responsive_preset_has_higher_beta(self):
        """Responsive preset should react more to speed than smooth preset."""
        responsive = get_preset_parameters("responsive")
        smooth = get_preset_parameters("smooth")
        assert responsive.beta > smooth.beta
        assert responsive.min_cutoff > smooth.min_cutoff

    def test_unknown_preset_returns_default(self):
        """Unknown preset should return default parameters."""
        assert get_preset_parameters("unknown") == DEFAULT_PARAMETERS

    def test_all_named_presets_resolve(self):
        """Every listed preset should produce positive cutoffs."""
        for name in PRESET_NAMES:
            params = get_preset_parameters(name)
            assert params.min_cutoff > 0
            assert params.derivative_cutoff > 0


class TestDriverConfig:
    """Test driver configuration."""

    def test_default_config(self):
        """Default driver config should be enabled and use timestamps."""
        config = DriverConfig()
        assert config.enabled
        assert config.use_timestamps
        assert config.position == DEFAULT_PARAMETERS
        assert config.rotation == DEFAULT_PARAMETERS

    def test_preset_config_applies_to_both_channels(self):
        """Preset config should use the preset for position and rotation."""
        config = get_preset_config("responsive")
        assert config.position == get_preset_parameters("responsive")
        assert config.rotation == get_preset_parameters("responsive")
