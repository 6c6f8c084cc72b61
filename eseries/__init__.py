"""
E-series component value engine

Snaps exact component values onto standard E-series values and searches for
the pair of standard values that best realizes a ratio or a voltage divider.

All math is deterministic and side-effect free.
"""

from eseries.exceptions import ESeriesError, InvalidArgument, InvalidSeries, DegradedDirectionWarning
from eseries.series import SeriesName, E_SERIES, parse_series, series_values
from eseries.quantize import (
    RoundingDirection,
    deviation_pct,
    parse_direction,
    quantization_error,
    quantize,
)
from eseries.ranges import expand_range
from eseries.matching import MatchCandidate, MatchResult, match_ratio, match_divider
from eseries.units import engineering_notation
from eseries.thermistor import ThermistorCurve
from eseries.fan_controller import Max31740Design, design_max31740

__version__ = "0.1.0"
