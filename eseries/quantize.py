"""
Quantization of continuous values onto an E-series.

A positive value is split into its decade and an in-decade remainder in
[1, 10). The remainder is resolved against the series table according to the
rounding direction and the decade is multiplied back in:

    value = remainder · 10^exponent,   1 <= remainder < 10
    result = entry · 10^exponent

Zero and +inf are passed through unchanged (short and open circuit).
"""

import numbers
import warnings
from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np

from eseries.exceptions import DegradedDirectionWarning, InvalidArgument
from eseries.series import E_SERIES, SeriesLike, SeriesName, parse_series

# Remainders are compared at this many decimals so that binary noise such as
# 0.47 / 0.1 == 4.699999999999999 resolves onto the intended table entry.
_REMAINDER_DECIMALS = 12


class RoundingDirection(str, Enum):
    NEAREST = "nearest"
    UP = "up"
    DOWN = "down"


_DIRECTION_ALIASES = {
    "nearest": RoundingDirection.NEAREST,
    "n": RoundingDirection.NEAREST,
    "up": RoundingDirection.UP,
    "u": RoundingDirection.UP,
    "down": RoundingDirection.DOWN,
    "d": RoundingDirection.DOWN,
}

DirectionLike = Union[RoundingDirection, str]
ValueLike = Union[float, Sequence[float], np.ndarray]


def parse_direction(direction: DirectionLike) -> RoundingDirection:
    """
    Resolve a rounding direction token.

    Unknown tokens are not fatal: a DegradedDirectionWarning is emitted and
    RoundingDirection.NEAREST is returned.
    """
    if isinstance(direction, RoundingDirection):
        return direction
    if isinstance(direction, str):
        resolved = _DIRECTION_ALIASES.get(direction.strip().lower())
        if resolved is not None:
            return resolved
    warnings.warn(
        f"Unknown rounding direction {direction!r}, using nearest instead",
        DegradedDirectionWarning,
        stacklevel=3,
    )
    return RoundingDirection.NEAREST


def scale_decade(values: np.ndarray, exponent: np.ndarray) -> np.ndarray:
    """Multiply by 10**exponent, dividing for negative exponents."""
    power = 10.0 ** np.abs(exponent)
    return np.where(exponent >= 0, values * power, values / power)


def split_decade(values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split positive finite values into (remainder, exponent).

    The remainder lies in [1, 10) and the exponent is integer valued, so that
    values == remainder * 10**exponent.
    """
    exponent = np.floor(np.log10(values))
    remainder = np.round(scale_decade(values, -exponent), _REMAINDER_DECIMALS)

    # log10 can land a hair off an exact power of ten
    high = remainder >= 10.0
    exponent = np.where(high, exponent + 1, exponent)
    remainder = np.where(high, np.round(remainder / 10.0, _REMAINDER_DECIMALS), remainder)
    low = remainder < 1.0
    exponent = np.where(low, exponent - 1, exponent)
    remainder = np.where(low, np.round(remainder * 10.0, _REMAINDER_DECIMALS), remainder)

    return remainder, exponent


def resolve_remainder(
    remainder: np.ndarray,
    table: Sequence[float],
    direction: RoundingDirection,
) -> np.ndarray:
    """
    Pick a table entry for each in-decade remainder.

    DOWN takes the greatest entry <= remainder, UP the least entry >=
    remainder, NEAREST the closer of the two with ties going to the lower one.
    """
    entries = np.asarray(table, dtype=float)
    last = len(entries) - 1

    upper = entries[np.minimum(np.searchsorted(entries, remainder, side="left"), last)]
    lower = entries[np.maximum(np.searchsorted(entries, remainder, side="right") - 1, 0)]

    if direction is RoundingDirection.UP:
        return upper
    if direction is RoundingDirection.DOWN:
        return lower

    distance_up = np.round(upper - remainder, _REMAINDER_DECIMALS)
    distance_down = np.round(remainder - lower, _REMAINDER_DECIMALS)
    return np.where(distance_up < distance_down, upper, lower)


def _as_values(value: ValueLike) -> np.ndarray:
    try:
        values = np.array(value, dtype=float)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Value must be a number or a sequence of numbers, got {value!r}") from None

    if np.any(np.isnan(values)):
        raise InvalidArgument("Value must not be NaN")
    if np.any(values < 0):
        raise InvalidArgument(f"Value must not be negative, got {value!r}")
    return values


def quantize(
    value: ValueLike,
    series: SeriesLike = SeriesName.E24,
    direction: DirectionLike = RoundingDirection.NEAREST,
) -> Union[float, np.ndarray]:
    """
    Snap a value, or every element of a sequence of values, onto an E-series.

    Args:
        value: Exact component value(s), any unit. Must be >= 0.
        series: Series to choose from (SeriesName, 'E24', 'e24', 24, ...).
        direction: 'nearest', 'up' or 'down' (or a RoundingDirection).

    Returns:
        A float for scalar input, otherwise an ndarray of the input's shape.

    Note:
        The in-decade remainder is rounded to 12 decimals before lookup, so a
        value within about 1e-12 (relative) of a table entry counts as that
        entry. quantize(4.69999999999999, 'E12', 'down') gives 4.7, slightly
        above the input. DOWN and UP therefore bracket the input only up to
        that tolerance.

    Examples:
        quantize(2.5e3)                → 2400.0
        quantize(2.5e3, 'E12')         → 2700.0
        quantize(2.5e3, 'E12', 'down') → 2200.0

    Raises:
        InvalidArgument: for negative, NaN or non-numeric input.
        InvalidSeries: for an unknown series.
    """
    name = parse_series(series)
    mode = parse_direction(direction)
    values = _as_values(value)

    result = values.copy()
    regular = (values > 0) & np.isfinite(values)
    if np.any(regular):
        remainder, exponent = split_decade(values[regular])
        entries = resolve_remainder(remainder, E_SERIES[name], mode)
        result[regular] = scale_decade(entries, exponent)

    if result.ndim == 0:
        return float(result)
    return result


def quantization_error(
    value: float,
    series: SeriesLike = SeriesName.E24,
    direction: DirectionLike = RoundingDirection.NEAREST,
) -> Tuple[float, float]:
    """
    Quantize a single positive value and report the deviation.

    Returns:
        Tuple of (snapped_value, error_percentage).
        error_percentage is signed: positive means snapped value is higher.
    """
    if not isinstance(value, numbers.Real) or not np.isfinite(value) or value <= 0:
        raise InvalidArgument(f"Value must be a positive finite number, got {value!r}")

    snapped = quantize(value, series, direction)
    return snapped, deviation_pct(snapped, value)


def deviation_pct(snapped, value):
    """
    Signed deviation of snapped value(s) from exact value(s) in percent.

    Rounded to 4 decimals; positive means the snapped value is higher.
    """
    snapped = np.asarray(snapped, dtype=float)
    error_pct = np.round((snapped - value) / value * 100, 4)
    return float(error_pct) if error_pct.ndim == 0 else error_pct
