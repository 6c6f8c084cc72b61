"""
Expansion of a value range into every standard value it contains.

A search over a first component spanning several decades (10kΩ..100kΩ, or
330Ω..4.7kΩ) has to offer every series value in between, not only the two
endpoints. The endpoints are snapped to their nearest series entries first,
then each spanned decade contributes the entries that fall between them.
"""

import logging
import numbers
from typing import Sequence, Union

import numpy as np

from eseries.exceptions import InvalidArgument
from eseries.quantize import (
    RoundingDirection,
    quantize,
    resolve_remainder,
    scale_decade,
    split_decade,
)
from eseries.series import E_SERIES, SeriesLike, SeriesName, parse_series

logger = logging.getLogger(__name__)

RangeLike = Union[float, Sequence[float], np.ndarray]


def _check_bound(value: float) -> float:
    if not isinstance(value, numbers.Real) or not np.isfinite(value) or value <= 0:
        raise InvalidArgument(f"Range bounds must be positive finite numbers, got {value!r}")
    return float(value)


def expand_range(range_spec: RangeLike, series: SeriesLike = SeriesName.E24) -> np.ndarray:
    """
    List all series values covered by an anchor value or a [min, max] range.

    Args:
        range_spec: A single anchor value, or a sequence of values whose
            smallest and largest entries bound the range. A one-element
            sequence is an anchor.
        series: Series to draw values from.

    Returns:
        Ascending array of unique series values. An anchor yields a
        single element: the anchor snapped to its nearest series value.

    Examples:
        expand_range(10e3)            → [10000.]
        expand_range([10e3, 30e3])    → [10000., 11000., ..., 27000., 30000.]
        expand_range([680, 1.5e3], 6) → [680., 1000., 1500.]
    """
    name = parse_series(series)

    if isinstance(range_spec, numbers.Real) or np.ndim(range_spec) == 0:
        points = [range_spec.item() if isinstance(range_spec, np.ndarray) else range_spec]
    else:
        points = [b.item() if isinstance(b, np.generic) else b for b in np.ravel(range_spec)]
    bounds = [_check_bound(b) for b in points]

    if not bounds:
        raise InvalidArgument("A range needs at least one value")
    if len(bounds) == 1:
        return np.array([quantize(bounds[0], name, RoundingDirection.NEAREST)])

    table = np.asarray(E_SERIES[name], dtype=float)
    remainders, exponents = split_decade(np.array([min(bounds), max(bounds)]))
    lo_bound, hi_bound = resolve_remainder(remainders, table, RoundingDirection.NEAREST)
    start_exponent, end_exponent = int(exponents[0]), int(exponents[1])

    values = []
    for exponent in range(start_exponent, end_exponent + 1):
        # Bounds expressed as multipliers of the current decade
        lower = lo_bound * 10.0 ** (start_exponent - exponent)
        upper = hi_bound * 10.0 ** (end_exponent - exponent)
        selected = table[(table >= lower) & (table <= upper)]
        for value in scale_decade(selected, np.full(selected.shape, float(exponent))):
            # 10.0 of one decade is 1.0 of the next
            if values and np.isclose(value, values[-1], rtol=1e-9, atol=0.0):
                continue
            values.append(float(value))

    logger.debug(
        "Expanded %s..%s over %s decade(s) into %d %s values",
        min(bounds), max(bounds), end_exponent - start_exponent + 1, len(values), name.value,
    )
    return np.array(values)
