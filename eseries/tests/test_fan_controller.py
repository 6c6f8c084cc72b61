"""
Tests for MAX31740 fan controller dimensioning.

Validates:
1. Standard values for the reference design (25kHz / 33Hz, 30..40 °C)
2. Recalculated operating point
3. Duty cycle curve shape
4. Input validation
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from eseries.exceptions import InvalidArgument, InvalidSeries
from eseries.fan_controller import FREQUENCY_CONSTANT, design_max31740
from eseries.thermistor import ThermistorCurve


class TestReferenceDesign:
    """10kΩ B3435 NTC, defaults of the datasheet example."""

    def test_capacitors(self, ntc_curve):
        design = design_max31740(ntc_curve)
        assert design.c_f1 == pytest.approx(470e-12)
        assert design.c_f2 == pytest.approx(330e-9)

    def test_resistors(self, ntc_curve):
        design = design_max31740(ntc_curve)
        assert design.r_st == pytest.approx(8200.0)
        assert design.r_slope == pytest.approx(5600.0)

    def test_switching_frequencies(self, ntc_curve):
        design = design_max31740(ntc_curve)
        assert design.f_sw_high == pytest.approx(FREQUENCY_CONSTANT / 470e-12)
        assert design.f_sw_low == pytest.approx(FREQUENCY_CONSTANT / (470e-12 + 330e-9))

    def test_temperature_window(self, ntc_curve):
        design = design_max31740(ntc_curve)
        assert 30.0 < design.temp_start < 32.0
        assert 38.0 < design.temp_full < 42.0

    def test_resistor_series(self, ntc_curve):
        design = design_max31740(ntc_curve, resistor_series='E96')
        assert design.r_st == pytest.approx(ntc_curve.resistance(30.0), rel=0.015)

    def test_summary(self, ntc_curve):
        lines = design_max31740(ntc_curve).summary()
        assert lines[0] == 'Component values:'
        assert any('8.2kΩ' in line for line in lines)
        assert any('470pF' in line for line in lines)


class TestDutyCycle:
    """PWM duty over temperature."""

    def test_limits(self, ntc_curve):
        design = design_max31740(ntc_curve)
        assert design.duty_cycle(20.0) == 0.0
        assert design.duty_cycle(60.0) == 100.0

    def test_window_edges(self, ntc_curve):
        design = design_max31740(ntc_curve)
        assert design.duty_cycle(design.temp_start) == pytest.approx(0.0, abs=1e-6)
        assert design.duty_cycle(design.temp_full) == pytest.approx(100.0, abs=0.5)

    def test_monotonic(self, ntc_curve):
        design = design_max31740(ntc_curve)
        temps = np.linspace(25.0, 45.0, 200)
        duty = design.duty_cycle(temps)
        assert duty.shape == temps.shape
        assert np.all(np.diff(duty) >= 0)


class TestValidation:
    """Invalid design inputs."""

    def test_inverted_window(self, ntc_curve):
        with pytest.raises(InvalidArgument):
            design_max31740(ntc_curve, temp_start=40.0, temp_full=30.0)

    def test_inverted_frequencies(self, ntc_curve):
        with pytest.raises(InvalidArgument):
            design_max31740(ntc_curve, f_sw_high=20.0, f_sw_low=25e3)

    def test_ptc_rejected(self):
        curve = ThermistorCurve([0, 50, 100], [100.0, 120.0, 200.0])
        with pytest.raises(InvalidArgument):
            design_max31740(curve)

    def test_unknown_series(self, ntc_curve):
        with pytest.raises(InvalidSeries):
            design_max31740(ntc_curve, capacitor_series='E7')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
