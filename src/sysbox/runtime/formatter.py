import math

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def format_result(value: float) -> str:
    """Render a result as a plain integer when it has no fractional part.

    Anything else (fractions, values outside the signed 64-bit range,
    infinities and NaN) uses fixed-point notation with six decimals.
    """
    if math.isfinite(value) and value == math.trunc(value):
        as_int = math.trunc(value)
        if _INT64_MIN <= as_int <= _INT64_MAX:
            return str(as_int)
    return f"{value:f}"
