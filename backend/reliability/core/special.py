"""
Special functions used by the reliability calculations.

Only the gamma function is needed: the Weibull mean life is
MTBF = eta * Gamma(1 + 1/beta).
"""

import math

# Lanczos approximation, g = 7
_LANCZOS_G = 7
_LANCZOS_BASE = 0.99999999999980993
_LANCZOS_COEFFICIENTS = (
    676.5203681218851,
    -1259.1392167224028,
    771.32342877765313,
    -176.61502916214059,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)


def gamma(z: float) -> float:
    """Evaluate the gamma function using the Lanczos approximation.

    For z < 0.5 the reflection formula is applied:
    Gamma(z) = pi / (sin(pi * z) * Gamma(1 - z))

    Relative error is around 1e-13 for the arguments used by the MTBF
    calculation (1 + 1/beta, always > 1). The power term is evaluated in
    log space; arguments above about 171 exceed the float range and
    return ``inf``.

    Args:
        z: Argument. Must not be zero or a negative integer.

    Returns:
        Gamma(z).

    Examples:
        >>> gamma(5.0)
        24.0
        >>> gamma(1.5)  # sqrt(pi) / 2
        0.886226925452758
    """
    if z < 0.5:
        return math.pi / (math.sin(math.pi * z) * gamma(1 - z))

    z -= 1
    x = _LANCZOS_BASE
    for i, coefficient in enumerate(_LANCZOS_COEFFICIENTS, start=1):
        x += coefficient / (z + i)

    t = z + _LANCZOS_G + 0.5
    try:
        return math.sqrt(2 * math.pi) * math.exp((z + 0.5) * math.log(t) - t) * x
    except OverflowError:
        return math.inf
