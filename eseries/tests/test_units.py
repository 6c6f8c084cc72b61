"""
Tests for engineering notation formatting.
"""

import math

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from eseries.units import engineering_notation


class TestEngineeringNotation:
    """Test engineering notation formatting."""

    def test_kilo(self):
        """1000 → '1kΩ'."""
        assert engineering_notation(1000, 'Ω') == '1kΩ'

    def test_fractional_kilo(self):
        """4700 → '4.7kΩ'."""
        assert engineering_notation(4700, 'Ω') == '4.7kΩ'

    def test_float_noise_is_hidden(self):
        """A quantized 4.7 * 10^3 with binary noise still reads 4.7k."""
        assert engineering_notation(4.7 * 1e3 * (1 + 1e-15), 'Ω') == '4.7kΩ'

    def test_mega(self):
        assert engineering_notation(2.2e6, 'Ω') == '2.2MΩ'

    def test_micro(self):
        """0.0001 → '100µF'."""
        assert engineering_notation(0.0001, 'F') == '100µF'

    def test_nano(self):
        assert engineering_notation(330e-9, 'F') == '330nF'

    def test_pico(self):
        assert engineering_notation(470e-12, 'F') == '470pF'

    def test_precision(self):
        assert engineering_notation(3.33333, 'V') == '3.333V'
        assert engineering_notation(3.33333, 'V', precision=2) == '3.3V'

    def test_large_prefixes(self):
        assert engineering_notation(5e12, 'Hz') == '5THz'

    def test_no_unit(self):
        assert engineering_notation(1000) == '1k'

    def test_zero(self):
        assert engineering_notation(0, 'Ω') == '0Ω'

    def test_negative(self):
        assert engineering_notation(-1500, 'V') == '-1.5kV'

    def test_rounding_carries_into_next_prefix(self):
        """999.99 rounds to 1000 at 4 digits and is shown as 1k."""
        assert engineering_notation(999.99, 'Ω') == '1kΩ'
        assert engineering_notation(999.99e-6, 'F') == '1mF'
        assert engineering_notation(-999.99e3, 'V') == '-1MV'

    def test_no_carry_below_threshold(self):
        assert engineering_notation(999.4, 'Ω') == '999.4Ω'

    def test_infinity(self):
        assert engineering_notation(math.inf, 'Ω') == 'infΩ'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
