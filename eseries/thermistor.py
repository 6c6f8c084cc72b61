"""
Tabulated thermistor resistance/temperature curves.

Manufacturers publish R/T tables for NTC and PTC thermistors. The resistance
of a thermistor is close to exponential in temperature, so the table is
interpolated in log-resistance space:

    ln R(T) ≈ piecewise linear in T

Interpolation is monotonic between table points, which keeps the inverse
T(R) well defined.
"""

import csv
import io
from typing import Optional, Union

import numpy as np

from eseries.exceptions import InvalidArgument

ArrayLike = Union[float, np.ndarray]


class ThermistorCurve:
    """
    Resistance as a function of temperature, and its inverse.

    Args:
        temperatures: Table temperatures (°C), any order.
        resistances: Resistance (Ohms) at each temperature.
    """

    def __init__(self, temperatures, resistances):
        temps = np.asarray(temperatures, dtype=float)
        res = np.asarray(resistances, dtype=float)

        if temps.ndim != 1 or temps.shape != res.shape:
            raise InvalidArgument("Temperatures and resistances must be 1-D arrays of equal length")
        if len(temps) < 2:
            raise InvalidArgument("A thermistor curve needs at least 2 points")
        if not (np.all(np.isfinite(temps)) and np.all(np.isfinite(res))):
            raise InvalidArgument("Thermistor curve points must be finite")
        if np.any(res <= 0):
            raise InvalidArgument("Thermistor resistances must be positive")

        order = np.argsort(temps)
        self.temperatures = temps[order]
        self.resistances = res[order]

        if np.any(np.diff(self.temperatures) == 0):
            raise InvalidArgument("Thermistor curve has duplicate temperatures")

        steps = np.diff(self.resistances)
        if np.all(steps < 0):
            self.kind = 'ntc'
        elif np.all(steps > 0):
            self.kind = 'ptc'
        else:
            raise InvalidArgument("Thermistor resistance must be strictly monotonic in temperature")

        self._log_r = np.log(self.resistances)

    @classmethod
    def from_csv(cls, csv_content: str, delimiter: Optional[str] = None) -> 'ThermistorCurve':
        """
        Parse an R/T table.

        Expects columns: temperature (°C), resistance (Ohms).
        Header rows are skipped. The delimiter is detected from ';', ',' or tab
        when not given.
        """
        if not csv_content.strip():
            raise InvalidArgument("Empty CSV content")

        if delimiter is None:
            if ';' in csv_content:
                delimiter = ';'
            elif ',' in csv_content:
                delimiter = ','
            else:
                delimiter = '\t'

        temps = []
        res = []
        for row in csv.reader(io.StringIO(csv_content), delimiter=delimiter):
            if len(row) < 2:
                continue
            try:
                t = float(row[0])
                r = float(row[1])
            except ValueError:
                continue
            temps.append(t)
            res.append(r)

        if len(temps) < 2:
            raise InvalidArgument("CSV must contain at least 2 valid data points")

        return cls(temps, res)

    def resistance(self, temperature: ArrayLike) -> ArrayLike:
        """Resistance (Ohms) at the given temperature(s) in °C."""
        t = np.asarray(temperature, dtype=float)
        self._check_span(t, self.temperatures, 'Temperature')
        result = np.exp(np.interp(t, self.temperatures, self._log_r))
        return float(result) if result.ndim == 0 else result

    def temperature(self, resistance: ArrayLike) -> ArrayLike:
        """Temperature (°C) at which the thermistor has the given resistance."""
        r = np.asarray(resistance, dtype=float)
        if np.any(r <= 0):
            raise InvalidArgument("Resistance must be positive")
        self._check_span(r, self.resistances, 'Resistance')

        # np.interp needs increasing sample points
        log_r, temps = self._log_r, self.temperatures
        if self.kind == 'ntc':
            log_r, temps = log_r[::-1], temps[::-1]
        result = np.interp(np.log(r), log_r, temps)
        return float(result) if result.ndim == 0 else result

    @staticmethod
    def _check_span(values: np.ndarray, table: np.ndarray, label: str) -> None:
        if np.any(values < table.min()) or np.any(values > table.max()):
            raise InvalidArgument(
                f"{label} outside of the tabulated range {table.min():g}..{table.max():g}"
            )

    def __len__(self) -> int:
        return len(self.temperatures)

    def __repr__(self) -> str:
        return (
            f"ThermistorCurve({self.kind}, {len(self)} points, "
            f"{self.temperatures[0]:g}..{self.temperatures[-1]:g} °C)"
        )
