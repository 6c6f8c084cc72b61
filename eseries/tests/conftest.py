import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from eseries.thermistor import ThermistorCurve


def beta_table(r25: float = 10e3, beta: float = 3435.0):
    """R/T table of an ideal NTC from -40 °C to 125 °C in 5 °C steps."""
    temps = np.arange(-40.0, 130.0, 5.0)
    kelvin = temps + 273.15
    res = r25 * np.exp(beta * (1.0 / kelvin - 1.0 / 298.15))
    return temps, res


@pytest.fixture
def ntc_curve():
    temps, res = beta_table()
    return ThermistorCurve(temps, res)


@pytest.fixture
def ntc_csv():
    temps, res = beta_table()
    lines = ["T [°C];R [Ohm]"]
    lines += [f"{t:g};{r:.2f}" for t, r in zip(temps, res)]
    return "\n".join(lines)
