"""
Tests for the E-series tables and series name parsing.

Validates:
1. Table sizes, ordering and decade bounds
2. Lower series are contained in the higher ones of the same family
3. Numeric and string aliases resolve to the same series
4. Unknown series are rejected
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from eseries.exceptions import InvalidSeries
from eseries.series import (
    E_SERIES,
    E12_BASE,
    E24_BASE,
    E48_BASE,
    E96_BASE,
    E192_BASE,
    SeriesName,
    parse_series,
    series_values,
)


class TestSeriesTables:
    """Verify the E-series arrays are complete and sorted."""

    @pytest.mark.parametrize("name", list(SeriesName))
    def test_count(self, name):
        """Each table has one entry per step plus the closing 10.0."""
        assert len(E_SERIES[name]) == name.size + 1

    @pytest.mark.parametrize("name", list(SeriesName))
    def test_strictly_increasing(self, name):
        values = E_SERIES[name]
        assert all(a < b for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("name", list(SeriesName))
    def test_decade_bounds(self, name):
        assert E_SERIES[name][0] == 1.0
        assert E_SERIES[name][-1] == 10.0

    def test_e12_in_e24(self):
        assert set(E12_BASE) <= set(E24_BASE)

    def test_e48_in_e96(self):
        assert set(E48_BASE) <= set(E96_BASE)

    def test_e96_in_e192(self):
        assert set(E96_BASE) <= set(E192_BASE)

    def test_tables_are_read_only(self):
        """The table mapping cannot be modified."""
        with pytest.raises(TypeError):
            E_SERIES[SeriesName.E24] = (1.0, 10.0)


class TestParseSeries:
    """Test series token normalization."""

    @pytest.mark.parametrize("token", [24, "24", "E24", "e24", " E24 ", SeriesName.E24])
    def test_aliases(self, token):
        assert parse_series(token) is SeriesName.E24

    def test_all_sizes_as_numbers(self):
        for name in SeriesName:
            assert parse_series(name.size) is name

    @pytest.mark.parametrize("token", ["E13", 13, "", "E", None, 2.5, True])
    def test_unknown_series_raises(self, token):
        with pytest.raises(InvalidSeries):
            parse_series(token)

    def test_invalid_series_is_value_error(self):
        """Callers catching ValueError also catch unknown series."""
        with pytest.raises(ValueError):
            parse_series("E7")

    def test_series_values(self):
        assert series_values("e12") == E12_BASE


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
