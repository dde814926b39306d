"""
Monte Carlo simulation of failure and maintenance costs.

Each run follows one unit from time zero to the horizon, drawing Weibull
failure times by inverse-transform sampling. With a PM interval, a
failure before the next PM is repaired and the unit is then maintained at
the next PM boundary; otherwise the PM is performed. Without a PM interval
the unit runs to failure repeatedly.

Runs are not seeded: results are reproducible in distribution only.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from reliability.core.weibull import weibull_inverse_cdf
from reliability.schemas.simulation import SimulationParameters

logger = logging.getLogger(__name__)

HISTOGRAM_BINS = 20


@dataclass
class HistogramBin:
    """Number of simulated failures with time in [bin_start, bin_end)."""
    bin_start: float
    bin_end: float
    count: int


@dataclass
class SimulationResult:
    """Aggregated Monte Carlo results.

    Attributes:
        total_cost: Mean total cost per run.
        average_failures: Mean number of failures per run.
        histogram: Failure-time histogram over all runs, 20 equal bins
            spanning the horizon.
        total_failures: Failures recorded across all runs; equals the
            sum of the histogram counts.
    """
    total_cost: float
    average_failures: float
    histogram: List[HistogramBin] = field(default_factory=list)
    total_failures: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCost": self.total_cost,
            "averageFailures": self.average_failures,
            "histogram": [
                {"binStart": b.bin_start, "binEnd": b.bin_end, "count": b.count}
                for b in self.histogram
            ],
        }


def _draw_failure_time(rng: np.random.Generator, beta: float, eta: float) -> float:
    return float(weibull_inverse_cdf(rng.random(), beta, eta))


def _simulate_with_pm(
    params: SimulationParameters,
    rng: np.random.Generator
) -> Tuple[float, List[float]]:
    """Simulate one run with periodic preventive maintenance."""
    horizon = params.time_horizon
    pm_interval = params.pm_interval
    time = 0.0
    cost = 0.0
    failure_times = []

    while time < horizon:
        ttf = _draw_failure_time(rng, params.beta, params.eta)

        if ttf < pm_interval and time + ttf < horizon:
            time += ttf
            cost += params.failure_cost
            failure_times.append(time)

            # Repaired, then maintained at the next PM boundary
            time = math.floor(time / pm_interval) * pm_interval + pm_interval
            cost += params.pm_cost
        elif time + pm_interval < horizon:
            time += pm_interval
            cost += params.pm_cost
        else:
            break

    return cost, failure_times


def _simulate_run_to_failure(
    params: SimulationParameters,
    rng: np.random.Generator
) -> Tuple[float, List[float]]:
    """Simulate one run without preventive maintenance."""
    time = 0.0
    cost = 0.0
    failure_times = []

    while time < params.time_horizon:
        ttf = _draw_failure_time(rng, params.beta, params.eta)
        if time + ttf >= params.time_horizon:
            break

        time += ttf
        cost += params.failure_cost
        failure_times.append(time)

    return cost, failure_times


def build_failure_histogram(
    failure_times: List[float],
    time_horizon: float,
    num_bins: int = HISTOGRAM_BINS
) -> List[HistogramBin]:
    """Bin failure times into equal-width bins over [0, time_horizon].

    A time is placed in bin min(floor(time / bin_width), num_bins - 1).
    """
    bin_width = time_horizon / num_bins
    counts = np.zeros(num_bins, dtype=int)

    if failure_times:
        indices = np.floor(np.asarray(failure_times) / bin_width).astype(int)
        indices = np.minimum(indices, num_bins - 1)
        counts = np.bincount(indices, minlength=num_bins)

    return [
        HistogramBin(
            bin_start=i * bin_width,
            bin_end=(i + 1) * bin_width,
            count=int(counts[i])
        )
        for i in range(num_bins)
    ]


def run_simulation(
    params: SimulationParameters,
    rng: Optional[np.random.Generator] = None
) -> SimulationResult:
    """Run a Monte Carlo simulation of failures and maintenance costs.

    Args:
        params: Weibull parameters, number of runs, horizon, optional PM
            interval and costs.
        rng: Random generator. A new unseeded generator is created when
            omitted.

    Returns:
        SimulationResult with mean cost and failures per run and the
        failure-time histogram.

    Examples:
        >>> params = SimulationParameters(beta=2.0, eta=1000, number_of_runs=1000,
        ...     time_horizon=5000, pm_cost=100, failure_cost=1000)
        >>> result = run_simulation(params)
        >>> len(result.histogram)
        20
    """
    if rng is None:
        rng = np.random.default_rng()

    simulate = _simulate_with_pm if params.pm_interval is not None else _simulate_run_to_failure

    total_cost = 0.0
    all_failure_times: List[float] = []
    for _ in range(params.number_of_runs):
        run_cost, run_failures = simulate(params, rng)
        total_cost += run_cost
        all_failure_times.extend(run_failures)

    total_failures = len(all_failure_times)
    logger.debug(
        "Simulated %d runs: total cost %g, %d failures",
        params.number_of_runs, total_cost, total_failures
    )

    return SimulationResult(
        total_cost=total_cost / params.number_of_runs,
        average_failures=total_failures / params.number_of_runs,
        histogram=build_failure_histogram(all_failure_times, params.time_horizon),
        total_failures=total_failures
    )
