"""
Two-component best-match search over an E-series.

Given a target relationship between two components and a value or range for
the first one, every standard first-component value is paired with the
standard second-component value(s) closest to its ideal partner. Each pair is
scored by the absolute error of the relationship it actually achieves and the
full list is returned ranked by that error.

Two relationships are supported:

    ratio:            ratio = R2 / R1
    voltage divider:  Vout  = Vin · R2 / (R1 + R2)

With 'nearest' rounding both the next-lower and the next-higher second
component are evaluated for every first component. The value closest to the
ideal R2 is not always the one giving the closest ratio, so the error ranking
decides between them.
"""

import logging
import numbers
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Tuple

import numpy as np

from eseries.exceptions import InvalidArgument
from eseries.quantize import DirectionLike, RoundingDirection, parse_direction, quantize
from eseries.ranges import RangeLike, expand_range
from eseries.series import SeriesLike, SeriesName, parse_series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchCandidate:
    """One evaluated component pair."""
    r1: float
    r2: float
    achieved: float
    error: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class MatchResult:
    """Best pair plus every evaluated pair, sorted by ascending error."""
    best: MatchCandidate
    ranked: Tuple[MatchCandidate, ...]
    target: float
    series: SeriesName
    direction: RoundingDirection

    def top(self, n: int) -> Tuple[MatchCandidate, ...]:
        """Return the n best candidates."""
        return self.ranked[:n]


def _check_number(name: str, value: float) -> float:
    if not isinstance(value, numbers.Real) or np.isnan(value):
        raise InvalidArgument(f"{name} needs to be a number, got {value!r}")
    return float(value)


def _sentinel(
    r1: float,
    r2: float,
    achieved: float,
    target: float,
    series: SeriesName,
    direction: RoundingDirection,
) -> MatchResult:
    """Open/short circuit result for a relationship no finite pair can express."""
    candidate = MatchCandidate(r1=r1, r2=r2, achieved=achieved, error=0.0)
    return MatchResult(best=candidate, ranked=(candidate,), target=target, series=series, direction=direction)


def _search(
    target: float,
    r1_range: RangeLike,
    series: SeriesName,
    direction: RoundingDirection,
    ideal_r2: Callable[[np.ndarray], np.ndarray],
    achieved: Callable[[np.ndarray, np.ndarray], np.ndarray],
) -> MatchResult:
    r1_list = expand_range(r1_range, series)
    with np.errstate(over="ignore"):
        r2_ideal = ideal_r2(r1_list)
    if not np.all(np.isfinite(r2_ideal)):
        raise InvalidArgument(
            f"Target {target:g} needs a second component beyond the floating point range"
        )

    if direction is RoundingDirection.NEAREST:
        r2_list = np.concatenate([
            quantize(r2_ideal, series, RoundingDirection.DOWN),
            quantize(r2_ideal, series, RoundingDirection.UP),
        ])
        r1_list = np.concatenate([r1_list, r1_list])
    else:
        r2_list = quantize(r2_ideal, series, direction)

    achieved_list = achieved(r1_list, r2_list)
    error_list = np.abs(achieved_list - target)

    # Stable sort keeps enumeration order among equal errors
    order = np.argsort(error_list, kind="stable")
    ranked = tuple(
        MatchCandidate(
            r1=float(r1_list[i]),
            r2=float(r2_list[i]),
            achieved=float(achieved_list[i]),
            error=float(error_list[i]),
        )
        for i in order
    )

    logger.debug(
        "Evaluated %d %s pairs (%s), best error %.6g",
        len(ranked), series.value, direction.value, ranked[0].error,
    )
    return MatchResult(best=ranked[0], ranked=ranked, target=target, series=series, direction=direction)


def match_ratio(
    ratio: float,
    r1_range: RangeLike,
    series: SeriesLike = SeriesName.E24,
    direction: DirectionLike = RoundingDirection.NEAREST,
) -> MatchResult:
    """
    Select two series values whose ratio R2/R1 best matches a target.

    Args:
        ratio: Desired ratio R2 / R1. Must be >= 0; 0 and inf are allowed.
        r1_range: Value of R1, or [min, max] range of R1 to search.
        series: Series to draw both components from.
        direction: Rounding direction applied to R2.

    Returns:
        MatchResult. For ratio == 0 the pair is (r1=0, r2=inf); for
        ratio == inf it is (r1=inf, r2=0). Both report achieved=0, error=0.

    Examples:
        match_ratio(pi, 10e3).best.r2                     → 30000
        match_ratio(pi, [10e3, 30e3]).best                → r2=47000, r1=15000
        match_ratio(pi, [10e3, 30e3], 'E12', 'up').best   → r2=39000, r1=12000

    Raises:
        InvalidArgument: if the ratio is negative or not a number, or so
            large that R2 overflows for some R1 in the range.
    """
    name = parse_series(series)
    mode = parse_direction(direction)
    ratio = _check_number("Ratio", ratio)

    if ratio == np.inf:
        return _sentinel(r1=np.inf, r2=0.0, achieved=0.0, target=ratio, series=name, direction=mode)
    if ratio == 0:
        return _sentinel(r1=0.0, r2=np.inf, achieved=0.0, target=ratio, series=name, direction=mode)
    if ratio < 0:
        raise InvalidArgument("Ratio must be positive")

    return _search(
        target=ratio,
        r1_range=r1_range,
        series=name,
        direction=mode,
        ideal_r2=lambda r1: r1 * ratio,
        achieved=lambda r1, r2: r2 / r1,
    )


def match_divider(
    v_in: float,
    v_out: float,
    r1_range: RangeLike,
    series: SeriesLike = SeriesName.E24,
    direction: DirectionLike = RoundingDirection.NEAREST,
) -> MatchResult:
    """
    Design a voltage divider from two series resistors.

    R1 is the input side resistor and R2 the ground side resistor:

        Vout = Vin · R2 / (R1 + R2)

    Args:
        v_in: Input voltage of the divider.
        v_out: Desired output voltage.
        r1_range: Value of R1, or [min, max] range of R1 to search.
        series: Series to draw both resistors from.
        direction: Rounding direction applied to R2.

    Returns:
        MatchResult with achieved output voltages. For v_out == 0 the pair is
        (r1=inf, r2=0); for v_out == v_in it is (r1=0, r2=inf).

    Examples:
        match_divider(10, 3.3, 10e3).best            → r2=5100, r1=10000
        match_divider(10, 3.3, [10e3, 30e3]).best    → r2=7500, r1=15000, Vout≈3.3333

    Raises:
        InvalidArgument: if v_in is zero, v_out > v_in, the divider would
            have to invert the input voltage, or an input is not a number.
    """
    name = parse_series(series)
    mode = parse_direction(direction)
    v_in = _check_number("Input voltage", v_in)
    v_out = _check_number("Output voltage", v_out)

    if v_in == 0:
        raise InvalidArgument("Input voltage must not be zero")

    attenuation = v_out / v_in
    if attenuation == 0:
        return _sentinel(r1=np.inf, r2=0.0, achieved=0.0, target=v_out, series=name, direction=mode)
    if v_out == v_in:
        return _sentinel(r1=0.0, r2=np.inf, achieved=v_in, target=v_out, series=name, direction=mode)
    if attenuation < 0:
        raise InvalidArgument("Voltage dividers can not invert voltages")
    if attenuation > 1 or v_out > v_in:
        raise InvalidArgument(f"Output voltage {v_out:g} V exceeds input voltage {v_in:g} V")

    return _search(
        target=v_out,
        r1_range=r1_range,
        series=name,
        direction=mode,
        ideal_r2=lambda r1: r1 / (v_in / v_out - 1),
        achieved=lambda r1, r2: v_in / (r1 / r2 + 1),
    )
