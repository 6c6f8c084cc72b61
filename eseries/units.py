"""
Engineering notation for component values.
"""

import logging
import math

logger = logging.getLogger(__name__)

# SI prefix table
_SI_PREFIXES = [
    (1e-24, 'y'),
    (1e-21, 'z'),
    (1e-18, 'a'),
    (1e-15, 'f'),
    (1e-12, 'p'),
    (1e-9,  'n'),
    (1e-6,  'µ'),
    (1e-3,  'm'),
    (1e0,   ''),
    (1e3,   'k'),
    (1e6,   'M'),
    (1e9,   'G'),
    (1e12,  'T'),
    (1e15,  'P'),
    (1e18,  'E'),
    (1e21,  'Z'),
    (1e24,  'Y'),
]


def engineering_notation(value: float, unit: str = '', precision: int = 4) -> str:
    """
    Format a value in engineering notation with SI prefix.

    Examples:
        engineering_notation(1000, 'Ω')     → '1kΩ'
        engineering_notation(4700, 'Ω')     → '4.7kΩ'
        engineering_notation(1.5e-9, 'F')   → '1.5nF'
        engineering_notation(3.3333, 'V')   → '3.333V'
        engineering_notation(math.inf, 'Ω') → 'infΩ'
    """
    if value == 0:
        return f"0{unit}"

    if math.isinf(value):
        logger.warning("Infinite value formatted as 'inf%s'", unit)
        return f"{'-' if value < 0 else ''}inf{unit}"

    abs_value = abs(value)
    sign = '-' if value < 0 else ''

    for index in range(len(_SI_PREFIXES) - 1, -1, -1):
        scale, prefix = _SI_PREFIXES[index]
        if abs_value >= scale:
            # Round to the requested precision before choosing integer form
            scaled = float(f"{abs_value / scale:.{precision}g}")
            # Rounding can carry into the next prefix: 999.99 -> 1000 -> 1k
            if scaled >= 1000 and index + 1 < len(_SI_PREFIXES):
                scale, prefix = _SI_PREFIXES[index + 1]
                scaled = float(f"{abs_value / scale:.{precision}g}")
            if scaled == int(scaled):
                return f"{sign}{int(scaled)}{prefix}{unit}"
            return f"{sign}{scaled:g}{prefix}{unit}"

    # Fallback for values below the smallest prefix
    return f"{value:.{precision}g}{unit}"
