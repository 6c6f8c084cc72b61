"""
MAX31740 fan-speed controller dimensioning.

The MAX31740 drives a fan with a PWM signal whose duty cycle follows an NTC
thermistor. Two capacitors set the PWM switching frequencies and two resistors
set the temperature window:

    C_F1 = K / f_high
    C_F2 = K / f_low - C_F1                       K = 10.5455 µF·Hz

    R_ST     = R_ntc(T_start)
    ΔU       = 0.5 - R_ntc(T_full) / (R_ntc(T_full) + R_ST)
    A_V      = 0.5 / ΔU
    R_SLOPE  = 25 kΩ / (A_V - 1)

The ideal values are replaced by standard values and the operating point is
recalculated from those, so the reported frequencies and temperatures are the
ones the built circuit will have.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from eseries.exceptions import InvalidArgument
from eseries.quantize import quantize
from eseries.series import SeriesLike, SeriesName, parse_series
from eseries.thermistor import ThermistorCurve
from eseries.units import engineering_notation

logger = logging.getLogger(__name__)

# Frequency constant of the PWM oscillator (F·Hz)
FREQUENCY_CONSTANT = 10.5455e-6

# Internal gain-setting resistor (Ohms)
INTERNAL_RESISTOR = 25e3


@dataclass(frozen=True)
class Max31740Design:
    """Standard component values and the operating point they produce."""
    c_f1: float
    c_f2: float
    r_st: float
    r_slope: float
    f_sw_high: float
    f_sw_low: float
    temp_start: float
    temp_full: float
    gain: float
    curve: ThermistorCurve

    def duty_cycle(self, temperatures):
        """
        PWM duty cycle (%) at the given temperature(s).

        0 % below the start temperature, 100 % above the full-speed temperature
        and linear in the divider voltage in between.
        """
        t = np.asarray(temperatures, dtype=float)
        ntc = self.curve.resistance(np.clip(t, self.curve.temperatures[0], self.curve.temperatures[-1]))
        duty = 200 * (0.5 - ntc / (ntc + self.r_st)) * self.gain
        duty = np.where(t < self.temp_start, 0.0, duty)
        duty = np.where(t > self.temp_full, 100.0, duty)
        duty = np.clip(duty, 0.0, 100.0)
        return float(duty) if duty.ndim == 0 else duty

    def components(self) -> Dict[str, str]:
        return {
            'C_F1': engineering_notation(self.c_f1, 'F'),
            'C_F2': engineering_notation(self.c_f2, 'F'),
            'R_ST': engineering_notation(self.r_st, 'Ω'),
            'R_SLOPE': engineering_notation(self.r_slope, 'Ω'),
        }

    def operating_parameters(self) -> Dict[str, str]:
        return {
            'low_switching_frequency': engineering_notation(self.f_sw_low, 'Hz'),
            'high_switching_frequency': engineering_notation(self.f_sw_high, 'Hz'),
            'start_temperature': engineering_notation(self.temp_start, '°C'),
            'full_speed_temperature': engineering_notation(self.temp_full, '°C'),
        }

    def summary(self) -> List[str]:
        """Human readable report lines."""
        lines = ['Component values:', '=================']
        lines += [f"{name + ':':<9}{value}" for name, value in self.components().items()]
        lines += ['', 'Operating parameters:', '=====================']
        labels = {
            'low_switching_frequency': 'Low switching frequency:',
            'high_switching_frequency': 'High switching frequency:',
            'start_temperature': 'Starting temperature:',
            'full_speed_temperature': 'Max speed temperature:',
        }
        lines += [f"{labels[key]:<26}{value}" for key, value in self.operating_parameters().items()]
        return lines


def design_max31740(
    curve: ThermistorCurve,
    f_sw_high: float = 25e3,
    f_sw_low: float = 33.0,
    temp_start: float = 30.0,
    temp_full: float = 40.0,
    resistor_series: SeriesLike = SeriesName.E24,
    capacitor_series: SeriesLike = SeriesName.E6,
) -> Max31740Design:
    """
    Dimension the external components of a MAX31740 fan controller.

    Args:
        curve: R/T curve of the NTC thermistor on the TEMP input.
        f_sw_high: High PWM switching frequency (Hz).
        f_sw_low: Low PWM switching frequency (Hz).
        temp_start: Temperature at which the fan starts (°C).
        temp_full: Temperature at which the fan reaches 100 % duty (°C).
        resistor_series: Series for R_ST and R_SLOPE.
        capacitor_series: Series for C_F1 and C_F2.

    Returns:
        Max31740Design with standard values and the recalculated operating point.
    """
    resistor_series = parse_series(resistor_series)
    capacitor_series = parse_series(capacitor_series)

    if f_sw_high <= 0 or f_sw_low <= 0:
        raise InvalidArgument("Switching frequencies must be positive")
    if f_sw_low >= f_sw_high:
        raise InvalidArgument("Low switching frequency must be below the high switching frequency")
    if temp_full <= temp_start:
        raise InvalidArgument("Full speed temperature must be above the start temperature")
    if curve.kind != 'ntc':
        raise InvalidArgument("The MAX31740 needs an NTC thermistor")

    # Ideal values
    c_f1 = FREQUENCY_CONSTANT / f_sw_high
    c_f2 = FREQUENCY_CONSTANT / f_sw_low - c_f1
    r_st = curve.resistance(temp_start)
    r_ntc_full = curve.resistance(temp_full)
    du_full = 0.5 - r_ntc_full / (r_ntc_full + r_st)
    gain = 0.5 / du_full
    if gain <= 1:
        raise InvalidArgument("Temperature window is too wide for the slope resistor range")
    r_slope = INTERNAL_RESISTOR / (gain - 1)

    # Standard values
    c_f1_e = quantize(c_f1, capacitor_series)
    c_f2_e = quantize(c_f2, capacitor_series)
    r_st_e = quantize(r_st, resistor_series)
    r_slope_e = quantize(r_slope, resistor_series)

    # Operating point with standard values
    f_high_e = FREQUENCY_CONSTANT / c_f1_e
    f_low_e = FREQUENCY_CONSTANT / (c_f1_e + c_f2_e)
    gain_e = INTERNAL_RESISTOR / r_slope_e + 1
    du_full_e = 0.5 / gain_e
    r_ntc_full_e = r_st_e * ((0.5 - du_full_e) / (0.5 + du_full_e))
    temp_start_e = curve.temperature(r_st_e)
    temp_full_e = curve.temperature(r_ntc_full_e)

    logger.debug(
        "MAX31740: R_ST %s -> %s, R_SLOPE %s -> %s",
        r_st, r_st_e, r_slope, r_slope_e,
    )

    return Max31740Design(
        c_f1=c_f1_e,
        c_f2=c_f2_e,
        r_st=r_st_e,
        r_slope=r_slope_e,
        f_sw_high=f_high_e,
        f_sw_low=f_low_e,
        temp_start=temp_start_e,
        temp_full=temp_full_e,
        gain=gain_e,
        curve=curve,
    )
