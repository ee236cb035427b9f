"""
Numeric helpers shared by the dosing formulas.

Rounding is "half away from zero" applied once, at the end of each
calculation. Arithmetic on malformed inputs follows IEEE-754 (inf / nan)
instead of raising, so a bad number degrades to a non-finite result; the
validation boundary in ``clinical_safety.schemas`` is what rejects it.
"""
import math

# Above 2**52 every float is already an integer
MAX_EXACT_FLOAT_INT = 2 ** 52


def round_half_away(value: float, ndigits: int = 0) -> float:
    """
    Round half away from zero to ``ndigits`` decimals.

    Non-finite values pass through, as do magnitudes too large to carry a
    fractional part (scaling them would overflow to inf).
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** ndigits
    scaled = abs(value) * factor
    if not math.isfinite(scaled) or scaled >= MAX_EXACT_FLOAT_INT:
        return value
    return math.copysign(math.floor(scaled + 0.5), value) / factor


def ieee_divide(numerator: float, denominator: float) -> float:
    """Division that returns ±inf / nan on a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def ieee_pow(base: float, exponent: float) -> float:
    """Real-valued power: inf for 0 ** negative, nan instead of a complex result."""
    try:
        result = base ** exponent
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        return math.inf
    if isinstance(result, complex):
        return math.nan
    return float(result)


def ieee_sqrt(value: float) -> float:
    if value < 0:
        return math.nan
    return math.sqrt(value)


def format_number(value: float) -> str:
    """Render a rounded quantity for messages: 16.0 -> '16', 32.3 -> '32.3'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
