"""Tests for ice density classification and vertical thresholds."""

import dataclasses

import numpy as np
import pytest

from radar_tools.constants import DEFAULT_TEMPERATURE_THRESHOLD, DENSITY_BINS
from radar_tools.ice import (
    VerticalThreshold,
    apply_vertical_threshold,
    classify_ice_density,
    resolve_threshold,
)


class TestClassifyIceDensity:
    def test_bin_edges(self) -> None:
        dbz = [17.999, 18.0, 29.999, 30.0, 34.999, 35.0, 39.999, 40.0, 65.0]
        expected = [0.0, 400.0, 400.0, 600.0, 600.0, 700.0, 700.0, 800.0, 800.0]
        np.testing.assert_array_equal(classify_ice_density(dbz), expected)

    def test_preserves_shape(self) -> None:
        dbz = np.full((2, 3, 4), 32.0)
        density = classify_ice_density(dbz)
        assert density.shape == (2, 3, 4)
        np.testing.assert_array_equal(density, 600.0)

    def test_non_finite_is_ice_free(self) -> None:
        density = classify_ice_density([np.nan, np.inf, -np.inf, 25.0])
        np.testing.assert_array_equal(density, [0.0, 0.0, 0.0, 400.0])

    def test_scalar_input(self) -> None:
        assert float(classify_ice_density(36.0)) == 700.0

    def test_default_table(self) -> None:
        assert [lower for lower, _ in DENSITY_BINS] == [18.0, 30.0, 35.0, 40.0]

    def test_unsorted_bins_rejected(self) -> None:
        with pytest.raises(ValueError, match="strictly increasing"):
            classify_ice_density([20.0], bins=[(30.0, 600.0), (18.0, 400.0)])

    def test_empty_bins_rejected(self) -> None:
        with pytest.raises(ValueError):
            classify_ice_density([20.0], bins=[])


class TestVerticalThreshold:
    def test_temperature_excludes_warmer(self) -> None:
        mask = VerticalThreshold.temperature(-10.0).excludes([-9.0, -10.0, -11.0])
        np.testing.assert_array_equal(mask, [True, False, False])

    def test_altitude_excludes_lower(self) -> None:
        mask = VerticalThreshold.altitude(4500.0).excludes([4000.0, 4500.0, 5000.0])
        np.testing.assert_array_equal(mask, [True, False, False])

    def test_default_temperature(self) -> None:
        assert VerticalThreshold.temperature().value == DEFAULT_TEMPERATURE_THRESHOLD

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="kind must be one of"):
            VerticalThreshold('pressure', 500.0)

    def test_frozen(self) -> None:
        threshold = VerticalThreshold.altitude(4000.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            threshold.value = 5000.0  # type: ignore[misc]

    def test_value_is_float(self) -> None:
        assert isinstance(VerticalThreshold.altitude(4000).value, float)


class TestResolveThreshold:
    def test_default(self) -> None:
        assert resolve_threshold() == VerticalThreshold('temperature', -10.0)

    def test_temperature_keyword(self) -> None:
        assert resolve_threshold(temperature_threshold=-20.0) == VerticalThreshold.temperature(-20.0)

    def test_melting_level_keyword(self) -> None:
        assert resolve_threshold(melting_level=4200.0) == VerticalThreshold.altitude(4200.0)

    def test_bare_number_is_temperature(self) -> None:
        assert resolve_threshold(-15.0).kind == 'temperature'

    def test_object_passes_through(self) -> None:
        threshold = VerticalThreshold.altitude(3000.0)
        assert resolve_threshold(threshold) is threshold

    def test_more_than_one_raises(self) -> None:
        with pytest.raises(ValueError, match="temperature_threshold, melting_level"):
            resolve_threshold(temperature_threshold=-10.0, melting_level=4000.0)


class TestApplyVerticalThreshold:
    def test_zeroes_excluded_cells(self) -> None:
        density = np.array([400.0, 600.0, 800.0])
        temp = np.array([0.0, -12.0, -30.0])
        result = apply_vertical_threshold(density, temp, VerticalThreshold.temperature(-10.0))
        np.testing.assert_array_equal(result, [0.0, 600.0, 800.0])

    def test_input_untouched(self) -> None:
        density = np.array([400.0, 600.0])
        apply_vertical_threshold(density, [3000.0, 5000.0], VerticalThreshold.altitude(4000.0))
        np.testing.assert_array_equal(density, [400.0, 600.0])
