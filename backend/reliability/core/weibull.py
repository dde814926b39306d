"""
Two-parameter Weibull distribution model for reliability engineering.

Provides the reliability function, hazard (failure) rate, cumulative
failure probability, inverse CDF and mean life of a Weibull population,
plus the sampled curves used for reliability plots.

Functions accept scalars or numpy arrays for the time / probability
argument and follow numpy broadcasting rules.

Reference:
- Abernethy, The New Weibull Handbook
"""

from dataclasses import dataclass
from typing import Dict, Any

import numpy as np

from reliability.core.special import gamma
from reliability.schemas.weibull import WeibullParameters

# Number of intervals over [0, time_horizon]; curves hold CURVE_INTERVALS + 1 points
CURVE_INTERVALS = 100


@dataclass
class WeibullAnalysis:
    """Sampled reliability curves for a Weibull population.

    Attributes:
        times: Evenly spaced sample times over [0, time_horizon].
        reliability: R(t) at each sample time.
        failure_rate: h(t) at each sample time. The first value is
            infinite when beta < 1.
        cumulative_failure_probability: F(t) at each sample time.
        mtbf: Mean time between failures, eta * Gamma(1 + 1/beta).
    """
    times: np.ndarray
    reliability: np.ndarray
    failure_rate: np.ndarray
    cumulative_failure_probability: np.ndarray
    mtbf: float

    def to_dict(self) -> Dict[str, Any]:
        times = [float(t) for t in self.times]
        return {
            "reliabilityCurve": [
                {"time": t, "reliability": float(r)}
                for t, r in zip(times, self.reliability)
            ],
            "failureRateCurve": [
                {"time": t, "failureRate": float(h)}
                for t, h in zip(times, self.failure_rate)
            ],
            "cumulativeFailureProbability": [
                {"time": t, "probability": float(p)}
                for t, p in zip(times, self.cumulative_failure_probability)
            ],
            "mtbf": float(self.mtbf),
        }


def calculate_reliability(time, beta: float, eta: float):
    """Calculate reliability at given time.

    Reliability R(t) is the probability that a unit survives beyond
    time t without failure.

    Formula: R(t) = exp(-(t / eta)^beta)

    Args:
        time: Time (scalar or array), t >= 0.
        beta: Weibull shape parameter. Must be positive.
        eta: Weibull scale parameter. Must be positive.

    Returns:
        Reliability between 0 and 1. R(0) = 1.

    Examples:
        >>> calculate_reliability(1000, beta=2.0, eta=1000)
        0.36787944117144233  # exp(-1)
    """
    t = np.asarray(time, dtype=float)
    return np.exp(-np.power(t / eta, beta))


def calculate_failure_rate(time, beta: float, eta: float):
    """Calculate instantaneous failure (hazard) rate at given time.

    Formula: h(t) = (beta / eta) * (t / eta)^(beta - 1)

    At t = 0 with beta < 1 the formula is unbounded and the result is
    ``inf``; this is returned as-is rather than clamped.

    Args:
        time: Time (scalar or array), t >= 0.
        beta: Weibull shape parameter. Must be positive.
        eta: Weibull scale parameter. Must be positive.

    Returns:
        Failure rate per unit time.

    Examples:
        >>> calculate_failure_rate(500, beta=1.0, eta=1000)
        0.001  # constant 1/eta for beta = 1
    """
    t = np.asarray(time, dtype=float)
    with np.errstate(divide="ignore"):
        return (beta / eta) * np.power(t / eta, beta - 1)


def calculate_failure_probability(time, beta: float, eta: float):
    """Calculate cumulative failure probability F(t) = 1 - R(t)."""
    return 1 - calculate_reliability(time, beta, eta)


def calculate_mtbf(beta: float, eta: float) -> float:
    """Calculate mean time between failures of a Weibull population.

    Formula: MTBF = eta * Gamma(1 + 1/beta)

    For beta = 1 (exponential) the MTBF equals eta.

    Args:
        beta: Weibull shape parameter. Must be positive.
        eta: Weibull scale parameter. Must be positive.

    Returns:
        MTBF in the same units as eta.

    Examples:
        >>> calculate_mtbf(2.0, 1000)
        886.2269...
    """
    return eta * gamma(1 + 1 / beta)


def weibull_inverse_cdf(p, beta: float, eta: float):
    """Calculate the time at which cumulative failure probability equals p.

    Formula: t = eta * (-ln(1 - p))^(1/beta)

    Used to draw random failure times from a uniform variate.

    Args:
        p: Probability in [0, 1) (scalar or array). p = 0 gives 0;
            the result grows without bound as p approaches 1.
        beta: Weibull shape parameter. Must be positive.
        eta: Weibull scale parameter. Must be positive.

    Returns:
        Time to failure.
    """
    p = np.asarray(p, dtype=float)
    with np.errstate(divide="ignore"):
        return eta * np.power(-np.log1p(-p), 1 / beta)


def generate_weibull_analysis(params: WeibullParameters) -> WeibullAnalysis:
    """Sample reliability, failure rate and failure probability curves.

    Curves are evaluated at 101 evenly spaced points over
    [0, time_horizon].

    Args:
        params: Weibull parameters including the time horizon.

    Returns:
        WeibullAnalysis with the three curves and the MTBF.
    """
    beta, eta = params.beta, params.eta
    times = np.linspace(0.0, params.time_horizon, CURVE_INTERVALS + 1)

    return WeibullAnalysis(
        times=times,
        reliability=calculate_reliability(times, beta, eta),
        failure_rate=calculate_failure_rate(times, beta, eta),
        cumulative_failure_probability=calculate_failure_probability(times, beta, eta),
        mtbf=calculate_mtbf(beta, eta)
    )

