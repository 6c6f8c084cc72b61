"""
Tests for tabulated thermistor curves.

Validates:
1. CSV parsing with header rows and delimiter detection
2. Interpolation hits table points and stays monotonic in between
3. Inverse lookup recovers the temperature
4. Invalid tables and out-of-range lookups are rejected
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from eseries.exceptions import InvalidArgument
from eseries.thermistor import ThermistorCurve


class TestFromCsv:
    """R/T table parsing."""

    def test_semicolon_with_header(self, ntc_csv):
        curve = ThermistorCurve.from_csv(ntc_csv)
        assert len(curve) == 34
        assert curve.kind == 'ntc'

    def test_comma_delimiter(self):
        curve = ThermistorCurve.from_csv("temp,res\n0,32650\n25,10000\n50,3603\n")
        assert curve.resistance(25.0) == pytest.approx(10000.0)

    def test_tab_delimiter(self):
        curve = ThermistorCurve.from_csv("0\t32650\n25\t10000\n")
        assert len(curve) == 2

    def test_unsorted_rows(self):
        curve = ThermistorCurve.from_csv("50;3603\n0;32650\n25;10000\n")
        assert list(curve.temperatures) == [0.0, 25.0, 50.0]

    def test_empty_raises(self):
        with pytest.raises(InvalidArgument):
            ThermistorCurve.from_csv("   ")

    def test_too_few_points_raises(self):
        with pytest.raises(InvalidArgument):
            ThermistorCurve.from_csv("T;R\n25;10000\n")


class TestInterpolation:
    """R(T) and T(R)."""

    def test_table_point(self, ntc_curve):
        assert ntc_curve.resistance(25.0) == pytest.approx(10000.0)

    def test_between_points_is_monotonic(self, ntc_curve):
        temps = np.linspace(-40.0, 125.0, 500)
        res = ntc_curve.resistance(temps)
        assert np.all(np.diff(res) < 0)

    def test_log_interpolation_is_close_to_beta_model(self, ntc_curve):
        expected = 10e3 * np.exp(3435.0 * (1.0 / (27.5 + 273.15) - 1.0 / 298.15))
        assert ntc_curve.resistance(27.5) == pytest.approx(expected, rel=2e-3)

    def test_inverse(self, ntc_curve):
        for temp in (-12.3, 0.0, 31.7, 88.8):
            assert ntc_curve.temperature(ntc_curve.resistance(temp)) == pytest.approx(temp)

    def test_array_input(self, ntc_curve):
        result = ntc_curve.temperature(np.array([10000.0, 5000.0]))
        assert result.shape == (2,)
        assert result[0] == pytest.approx(25.0)

    def test_ptc(self):
        curve = ThermistorCurve([0, 50, 100], [100.0, 120.0, 200.0])
        assert curve.kind == 'ptc'
        assert curve.temperature(120.0) == pytest.approx(50.0)

    def test_temperature_out_of_range(self, ntc_curve):
        with pytest.raises(InvalidArgument):
            ntc_curve.resistance(200.0)

    def test_resistance_out_of_range(self, ntc_curve):
        with pytest.raises(InvalidArgument):
            ntc_curve.temperature(1.0)


class TestCurveValidation:
    """Invalid tables."""

    def test_non_monotonic(self):
        with pytest.raises(InvalidArgument):
            ThermistorCurve([0, 25, 50], [100.0, 50.0, 80.0])

    def test_negative_resistance(self):
        with pytest.raises(InvalidArgument):
            ThermistorCurve([0, 25], [100.0, -5.0])

    def test_duplicate_temperature(self):
        with pytest.raises(InvalidArgument):
            ThermistorCurve([25, 25], [100.0, 90.0])

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgument):
            ThermistorCurve([0, 25, 50], [100.0, 90.0])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
