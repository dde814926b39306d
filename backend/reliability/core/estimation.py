"""
Weibull parameter estimation from failure-history records.

This module turns a batch of failure observations into Weibull
parameters using median-rank regression (rank regression on Y), and
provides the plain arithmetic-mean MTBF used when regression is not
possible, together with the derived metrics (B-life, failure pattern,
failure mechanism counts).

Insufficient or degenerate data never raises: the fit returns ``None``
and the MTBF result carries ``mtbf=None`` so callers can fall back
through the estimation tiers.

Key features:
- Bernard's approximation for median ranks
- Least squares on the linearised Weibull CDF
- Detection of zero-variance inputs before they produce NaN/inf
- Data-driven analysis pipeline with MTBF cross-verification

References:
- Abernethy, The New Weibull Handbook, ch. 2 and 5
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Any

import numpy as np

from reliability.core.weibull import (
    calculate_mtbf,
    generate_weibull_analysis,
    WeibullAnalysis
)
from reliability.schemas.failure import FailureObservation
from reliability.schemas.weibull import WeibullParameters

logger = logging.getLogger(__name__)

MIN_REGRESSION_POINTS = 3
MIN_OPERATING_HOURS_POINTS = 2
MIN_TBF_DAYS_POINTS = 1

# +/-5% band around beta = 1
EARLY_LIFE_BETA_LIMIT = 0.95
WEAR_OUT_BETA_LIMIT = 1.05

UNKNOWN_MECHANISM = "Unknown"

CalculationMethod = Literal["operatingHours", "tbfDays"]
FailurePattern = Literal["early-life", "random", "wear-out"]


@dataclass
class WeibullDataPoint:
    """A failure time with its median rank on the Weibull plot.

    Attributes:
        time: Failure time (days or operating hours).
        median_rank: Estimated cumulative failure probability.
        adjusted: Whether the rank was adjusted for suspensions. Always
            False for complete (uncensored) data.
    """
    time: float
    median_rank: float
    adjusted: bool = False


@dataclass
class WeibullFitResult:
    """Result of median-rank regression.

    Attributes:
        beta: Fitted shape parameter (regression slope).
        eta: Fitted scale parameter, exp(-intercept / beta).
        r_squared: Coefficient of determination of the linearised fit.
        data_points: Sorted failure times with their median ranks.
    """
    beta: float
    eta: float
    r_squared: float
    data_points: List[WeibullDataPoint]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "beta": self.beta,
            "eta": self.eta,
            "r2": self.r_squared,
            "dataPoints": [
                {"time": p.time, "rank": p.median_rank, "adjusted": p.adjusted}
                for p in self.data_points
            ],
        }


@dataclass
class MTBFResult:
    """Arithmetic-mean MTBF estimate.

    Attributes:
        mtbf: Mean of the usable time values, or None when there is not
            enough data.
        calculation_method: Time basis used ("operatingHours" or
            "tbfDays"), None when mtbf is None.
        data_points_used: Time values that went into the mean.
    """
    mtbf: Optional[float]
    calculation_method: Optional[CalculationMethod]
    data_points_used: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mtbf": self.mtbf,
            "calculationMethod": self.calculation_method,
            "dataPointsUsed": list(self.data_points_used),
        }


@dataclass
class FailureHistoryAnalysis:
    """Data-driven Weibull analysis of a failure-history batch.

    Attributes:
        beta: Shape parameter (1.0 for the MTBF fallback).
        eta: Scale parameter (the MTBF for the fallback).
        r_squared: Fit quality (1.0 for the fallback).
        mtbf: Weibull MTBF, or the arithmetic mean for the fallback.
        b10_life: Time by which 10% of the population fails.
        b50_life: Median life.
        failure_pattern: "early-life", "random" or "wear-out".
        failure_count: Number of records supplied.
        time_units: "hours" or "days", following the time basis used.
        curves: Reliability, failure rate and probability curves.
        failure_mechanisms: Occurrence count per failure mechanism.
        data_points: Regression points (empty for the fallback).
        fallback_calculation: True when the fit failed and the
            arithmetic-mean MTBF was used as an exponential model.
        verification: Arithmetic-mean MTBF for cross-checking the
            Weibull MTBF.
    """
    beta: float
    eta: float
    r_squared: float
    mtbf: float
    b10_life: float
    b50_life: float
    failure_pattern: FailurePattern
    failure_count: int
    time_units: str
    curves: WeibullAnalysis
    failure_mechanisms: Dict[str, int]
    data_points: List[WeibullDataPoint] = field(default_factory=list)
    fallback_calculation: bool = False
    verification: Optional[MTBFResult] = None

    def to_dict(self) -> Dict[str, Any]:
        result = self.curves.to_dict()
        result.update({
            "fittedParameters": {"beta": self.beta, "eta": self.eta, "r2": self.r_squared},
            "mtbf": self.mtbf,
            "bLifeValues": {"b10Life": self.b10_life, "b50Life": self.b50_life},
            "failurePattern": self.failure_pattern,
            "failureCount": self.failure_count,
            "timeUnits": self.time_units,
            "failureMechanisms": dict(self.failure_mechanisms),
            "dataPoints": [
                {"time": p.time, "rank": p.median_rank, "adjusted": p.adjusted}
                for p in self.data_points
            ],
            "fallbackCalculation": self.fallback_calculation,
            "verification": self.verification.to_dict() if self.verification else None,
        })
        return result


def calculate_median_rank(position: int, total: int) -> float:
    """Calculate the median rank of the i-th ordered failure.

    Bernard's approximation: MR(i) = (i - 0.3) / (n + 0.4)

    Args:
        position: 1-based position in the sorted failure list.
        total: Total number of failures.

    Returns:
        Median rank (cumulative failure probability estimate).

    Examples:
        >>> calculate_median_rank(1, 5)
        0.12962962962962962
    """
    return (position - 0.3) / (total + 0.4)


def _usable_times(
    records: Iterable[FailureObservation],
    use_operating_hours: bool
) -> List[float]:
    """Extract positive time values on the requested basis."""
    if use_operating_hours:
        values = (r.operating_hours_at_failure for r in records)
    else:
        values = (r.tbf_days for r in records)
    return [float(v) for v in values if v is not None and v > 0]


def fit_weibull_to_failure_data(
    records: Sequence[FailureObservation],
    use_operating_hours: bool = False
) -> Optional[WeibullFitResult]:
    """Fit Weibull parameters to failure records by median-rank regression.

    The sorted failure times are assigned Bernard median ranks and
    y = ln(-ln(1 - rank)) is regressed on x = ln(time). The slope is
    beta and eta = exp(-intercept / beta).

    Args:
        records: Failure observations. Only records with a positive time
            value on the selected basis are used.
        use_operating_hours: Use operating hours at failure instead of
            TBF days.

    Returns:
        WeibullFitResult, or None when fewer than 3 usable records exist
        or the data has no variance (identical times) so that the
        regression is degenerate.
    """
    times = sorted(_usable_times(records, use_operating_hours))
    logger.debug(
        "Usable time values: %d out of %d records (basis=%s)",
        len(times), len(records), "operatingHours" if use_operating_hours else "tbfDays"
    )

    n = len(times)
    if n < MIN_REGRESSION_POINTS:
        return None

    data_points = [
        WeibullDataPoint(time=t, median_rank=calculate_median_rank(i + 1, n))
        for i, t in enumerate(times)
    ]

    x = np.log(np.array(times))
    ranks = np.array([p.median_rank for p in data_points])
    y = np.log(-np.log(1 - ranks))

    sum_x = np.sum(x)
    sum_y = np.sum(y)
    sum_xy = np.sum(x * y)
    sum_x2 = np.sum(x ** 2)
    logger.debug(
        "Regression inputs: n=%d sum_x=%g sum_y=%g sum_xy=%g sum_x2=%g",
        n, sum_x, sum_y, sum_xy, sum_x2
    )

    # Identical times leave float round-off in the denominator, so test the spread too
    denominator = n * sum_x2 - sum_x ** 2
    if denominator == 0 or np.ptp(x) == 0:
        logger.debug("Fit rejected: no variance in ln(time)")
        return None

    beta = (n * sum_xy - sum_x * sum_y) / denominator
    if beta == 0 or not np.isfinite(beta):
        logger.debug("Fit rejected: beta=%s", beta)
        return None

    intercept = (sum_y - beta * sum_x) / n
    eta = math.exp(-intercept / beta)

    y_mean = sum_y / n
    ss_total = np.sum((y - y_mean) ** 2)
    if ss_total == 0:
        logger.debug("Fit rejected: no variance in median-rank transform")
        return None

    ss_residual = np.sum((y - (beta * x + intercept)) ** 2)
    r_squared = 1 - ss_residual / ss_total
    logger.debug("Fitted beta=%g eta=%g r2=%g", beta, eta, r_squared)

    return WeibullFitResult(
        beta=float(beta),
        eta=float(eta),
        r_squared=float(r_squared),
        data_points=data_points
    )


def calculate_simple_mtbf(records: Sequence[FailureObservation]) -> MTBFResult:
    """Calculate MTBF as the arithmetic mean of the usable time values.

    Operating hours are preferred when at least two records carry a
    positive value; otherwise TBF days are used, which need at least one
    positive value.

    Args:
        records: Failure observations.

    Returns:
        MTBFResult naming the time basis used. ``mtbf`` is None when no
        usable records exist.
    """
    hours = _usable_times(records, use_operating_hours=True)
    if len(hours) >= MIN_OPERATING_HOURS_POINTS:
        return MTBFResult(
            mtbf=float(np.mean(hours)),
            calculation_method="operatingHours",
            data_points_used=hours
        )

    days = _usable_times(records, use_operating_hours=False)
    if len(days) >= MIN_TBF_DAYS_POINTS:
        return MTBFResult(
            mtbf=float(np.mean(days)),
            calculation_method="tbfDays",
            data_points_used=days
        )

    return MTBFResult(mtbf=None, calculation_method=None, data_points_used=[])


def calculate_b_life(beta: float, eta: float, percentage: float) -> float:
    """Calculate life at which a given percentage of units has failed.

    Formula: B(P) = eta * (-ln(1 - P/100))^(1/beta)

    Args:
        beta: Weibull shape parameter.
        eta: Weibull scale parameter.
        percentage: Failed percentage, e.g. 10 for B10 life.

    Returns:
        B-life in the units of eta.

    Raises:
        ValueError: If percentage is not between 0 and 100 (exclusive).

    Examples:
        >>> calculate_b_life(2.0, 1000, 10)
        324.59...
    """
    if not (0 < percentage < 100):
        raise ValueError("Percentage must be between 0 and 100")

    probability = percentage / 100
    return eta * (-math.log(1 - probability)) ** (1 / beta)


def classify_failure_pattern(beta: float) -> FailurePattern:
    """Classify the failure pattern indicated by the shape parameter.

    Returns "early-life" for beta < 0.95, "random" for
    0.95 <= beta <= 1.05 and "wear-out" for beta > 1.05.
    """
    if beta < EARLY_LIFE_BETA_LIMIT:
        return "early-life"
    if beta <= WEAR_OUT_BETA_LIMIT:
        return "random"
    return "wear-out"


def analyze_failure_mechanisms(records: Iterable[FailureObservation]) -> Dict[str, int]:
    """Count failure records per failure mechanism.

    Records without a mechanism are grouped under "Unknown".
    """
    counts = Counter(r.failure_mechanism or UNKNOWN_MECHANISM for r in records)
    return dict(counts)


def analyze_failure_history(
    records: Sequence[FailureObservation],
    time_horizon: float,
    use_operating_hours: bool = False
) -> Optional[FailureHistoryAnalysis]:
    """Run the data-driven Weibull analysis on a failure-history batch.

    Tries median-rank regression first. When it fails, the arithmetic
    mean MTBF is used as an exponential model (beta = 1, eta = MTBF).

    Args:
        records: Failure observations for one asset, equipment class or
            failure mode.
        time_horizon: End of the window for the reliability curves.
        use_operating_hours: Fit on operating hours instead of TBF days.

    Returns:
        FailureHistoryAnalysis, or None when no record carries a usable
        time value and no analysis is possible.
    """
    simple = calculate_simple_mtbf(records)
    mechanisms = analyze_failure_mechanisms(records)
    fit = fit_weibull_to_failure_data(records, use_operating_hours)

    if fit is not None:
        curves = generate_weibull_analysis(WeibullParameters(
            beta=fit.beta,
            eta=fit.eta,
            time_units="hours" if use_operating_hours else "days",
            time_horizon=time_horizon
        ))
        return FailureHistoryAnalysis(
            beta=fit.beta,
            eta=fit.eta,
            r_squared=fit.r_squared,
            mtbf=calculate_mtbf(fit.beta, fit.eta),
            b10_life=calculate_b_life(fit.beta, fit.eta, 10),
            b50_life=calculate_b_life(fit.beta, fit.eta, 50),
            failure_pattern=classify_failure_pattern(fit.beta),
            failure_count=len(records),
            time_units="hours" if use_operating_hours else "days",
            curves=curves,
            failure_mechanisms=mechanisms,
            data_points=fit.data_points,
            verification=simple
        )

    if simple.mtbf is None:
        logger.debug("No usable failure records; analysis not possible")
        return None

    logger.debug(
        "Weibull fit unavailable, using %s MTBF=%g",
        simple.calculation_method, simple.mtbf
    )
    units = "hours" if simple.calculation_method == "operatingHours" else "days"
    curves = generate_weibull_analysis(WeibullParameters(
        beta=1.0,
        eta=simple.mtbf,
        time_units=units,
        time_horizon=time_horizon
    ))
    return FailureHistoryAnalysis(
        beta=1.0,
        eta=simple.mtbf,
        r_squared=1.0,
        mtbf=simple.mtbf,
        b10_life=calculate_b_life(1.0, simple.mtbf, 10),
        b50_life=calculate_b_life(1.0, simple.mtbf, 50),
        failure_pattern="random",
        failure_count=len(records),
        time_units=units,
        curves=curves,
        failure_mechanisms=mechanisms,
        fallback_calculation=True,
        verification=simple
    )
