"""
Preventive maintenance interval optimisation.

Selects a maintenance strategy and PM interval from Weibull parameters,
maintenance costs and the acceptable downtime. The decision is taken in
priority order:

1. Zero acceptable downtime: PM is mandatory, interval = 0.5 x MTBF.
2. Downtime up to 24 h with beta <= 1: PM is still required, interval
   scaled from the MTBF by the downtime.
3. beta <= 1 with more than 24 h downtime: run-to-failure.
4. beta > 1: numeric cost minimisation over (0, 2*eta], cross-checked
   against the closed-form optimum and run-to-failure; run-to-failure is
   recommended only when it is strictly cheaper than every PM interval.

Cost model: each PM interval is treated as an independent trial with
failure probability F(interval); failures inside an interval are repaired
without shifting the PM schedule. This is a simplification of the renewal
process and is kept so that costs stay comparable with earlier results.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from reliability.core.weibull import calculate_mtbf, calculate_reliability, calculate_failure_probability
from reliability.schemas.maintenance import MaintenanceOptimizationParameters

logger = logging.getLogger(__name__)

COST_CURVE_POINTS = 50
MAX_INTERVAL_FACTOR = 2.0  # grid upper bound as a multiple of eta
LIMITED_DOWNTIME_HOURS = 24.0
HOURS_PER_MONTH = 24.0 * 30
DEFAULT_RELIABILITY_TARGET = 0.9
ZERO_DOWNTIME_RELIABILITY_TARGET = 0.95
ZERO_DOWNTIME_MTBF_FRACTION = 0.5

PREVENTIVE_MAINTENANCE = "Preventive Maintenance"
RUN_TO_FAILURE = "Run-to-Failure"


@dataclass
class CostCurvePoint:
    """Total maintenance cost over the horizon for one PM interval."""
    interval: float
    cost: float


@dataclass
class AlternativeMethod:
    """A PM interval estimated by an alternative method.

    Attributes:
        name: Method name.
        interval: Suggested PM interval.
        description: What the method optimises.
        formula: Formula used, for display.
        target_reliability: Reliability target in percent, for
            threshold-based methods.
    """
    name: str
    interval: float
    description: str
    formula: str
    target_reliability: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "name": self.name,
            "interval": self.interval,
            "description": self.description,
            "formula": self.formula,
        }
        if self.target_reliability is not None:
            result["targetReliability"] = self.target_reliability
        return result


@dataclass
class CalculationDetails:
    """Supporting figures behind an optimisation decision.

    Reliability and failure probability are in percent.
    """
    mtbf: float
    beta: float
    eta: float
    maximum_downtime: float
    decision_rule: str
    reliability_at_optimal: Optional[float] = None
    failure_probability: Optional[float] = None
    reliability_factor: Optional[float] = None
    alternative_methods: List[AlternativeMethod] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "mtbf": self.mtbf,
            "decisionFactors": {
                "betaValue": self.beta,
                "etaValue": self.eta,
                "maximumDowntime": self.maximum_downtime,
                "decisionRule": self.decision_rule,
            },
        }
        if self.reliability_at_optimal is not None:
            result["reliabilityAtOptimal"] = self.reliability_at_optimal
            result["failureProbability"] = self.failure_probability
        if self.reliability_factor is not None:
            result["reliabilityFactor"] = self.reliability_factor
            result["adjustedForDowntime"] = True
        if self.alternative_methods:
            result["alternativeMethods"] = {
                f"method{i}": method.to_dict()
                for i, method in enumerate(self.alternative_methods, start=1)
            }
        return result


@dataclass
class MaintenanceOptimizationResult:
    """Recommended maintenance strategy and PM interval.

    Attributes:
        optimal_interval: Recommended PM interval; ``inf`` for
            run-to-failure.
        optimal_cost: Total cost over the horizon at that interval.
        cost_curve: Sampled cost curve (single point for run-to-failure).
        maintenance_strategy: "Preventive Maintenance" or "Run-to-Failure".
        recommendation_reason: Human-readable justification.
        calculation_details: Supporting figures and alternative methods.
    """
    optimal_interval: float
    optimal_cost: float
    cost_curve: List[CostCurvePoint]
    maintenance_strategy: str
    recommendation_reason: str
    calculation_details: CalculationDetails

    def to_dict(self) -> Dict[str, Any]:
        return {
            "optimalInterval": self.optimal_interval,
            "optimalCost": self.optimal_cost,
            "costCurve": [{"interval": p.interval, "cost": p.cost} for p in self.cost_curve],
            "maintenanceStrategy": self.maintenance_strategy,
            "recommendationReason": self.recommendation_reason,
            "calculationDetails": self.calculation_details.to_dict(),
        }


def calculate_optimal_pm_interval(beta: float, eta: float) -> float:
    """Calculate the closed-form optimal PM interval.

    Formula: t = eta * (1 - (1/beta)^(1/beta))^(1/beta)

    Args:
        beta: Weibull shape parameter.
        eta: Weibull scale parameter.

    Returns:
        Optimal interval, or ``inf`` for beta <= 1 where run-to-failure
        is optimal.

    Examples:
        >>> calculate_optimal_pm_interval(2.0, 1000)
        707.106...
    """
    if beta <= 1:
        return math.inf

    return eta * (1 - (1 / beta) ** (1 / beta)) ** (1 / beta)


def calculate_total_cost(
    interval: float,
    beta: float,
    eta: float,
    pm_cost: float,
    failure_cost: float,
    time_horizon: float
) -> float:
    """Calculate total maintenance cost over the time horizon.

    - interval <= 0: invalid, returns ``inf``.
    - interval = ``inf``: run-to-failure,
      cost = failure_cost * time_horizon / MTBF.
    - otherwise: n = floor(time_horizon / interval) PM actions, each
      interval failing with probability F(interval),
      cost = n * pm_cost + n * F(interval) * failure_cost.

    Args:
        interval: PM interval.
        beta: Weibull shape parameter.
        eta: Weibull scale parameter.
        pm_cost: Cost of one PM action.
        failure_cost: Cost of one failure.
        time_horizon: Period over which costs are summed.

    Returns:
        Total cost over the horizon.
    """
    if interval <= 0:
        return math.inf

    if math.isinf(interval):
        expected_failures = time_horizon / calculate_mtbf(beta, eta)
        return failure_cost * expected_failures

    num_pm = math.floor(time_horizon / interval)
    failure_probability = float(calculate_failure_probability(interval, beta, eta))
    expected_failures = num_pm * failure_probability

    return num_pm * pm_cost + expected_failures * failure_cost


def calculate_reliability_based_interval(beta: float, eta: float, target_reliability: float) -> float:
    """Interval at which reliability falls to the target.

    Formula: t = eta * (-ln(R))^(1/beta)
    """
    return eta * (-math.log(target_reliability)) ** (1 / beta)


def generate_cost_curve(params: MaintenanceOptimizationParameters) -> List[CostCurvePoint]:
    """Sample total cost at 50 evenly spaced intervals over (0, 2*eta]."""
    step = params.eta * MAX_INTERVAL_FACTOR / COST_CURVE_POINTS
    intervals = np.arange(1, COST_CURVE_POINTS + 1) * step

    return [
        CostCurvePoint(
            interval=float(interval),
            cost=calculate_total_cost(
                float(interval),
                params.beta,
                params.eta,
                params.preventive_maintenance_cost,
                params.corrective_maintenance_cost,
                params.time_horizon
            )
        )
        for interval in intervals
    ]


def _percent_at(interval: float, beta: float, eta: float) -> Dict[str, float]:
    reliability = float(calculate_reliability(interval, beta, eta))
    return {
        "reliability_at_optimal": reliability * 100,
        "failure_probability": (1 - reliability) * 100,
    }


def _cost_at(interval: float, params: MaintenanceOptimizationParameters) -> float:
    return calculate_total_cost(
        interval,
        params.beta,
        params.eta,
        params.preventive_maintenance_cost,
        params.corrective_maintenance_cost,
        params.time_horizon
    )


def _zero_downtime(params: MaintenanceOptimizationParameters) -> MaintenanceOptimizationResult:
    beta, eta = params.beta, params.eta
    mtbf = calculate_mtbf(beta, eta)
    optimal_interval = mtbf * ZERO_DOWNTIME_MTBF_FRACTION

    target = ZERO_DOWNTIME_RELIABILITY_TARGET
    methods = [
        AlternativeMethod(
            name="Cost-Based Approach with Zero Downtime Constraint",
            interval=optimal_interval,
            description="Conservative PM interval (50% of MTBF) to ensure zero downtime",
            formula="Interval = MTBF × 0.5"
        ),
        AlternativeMethod(
            name="Reliability Threshold Approach",
            interval=calculate_reliability_based_interval(beta, eta, target),
            description="Sets PM interval where reliability is 95% or higher",
            formula="t = η · (-ln(R))^(1/β) where R = 0.95",
            target_reliability=target * 100
        ),
    ]

    return MaintenanceOptimizationResult(
        optimal_interval=optimal_interval,
        optimal_cost=_cost_at(optimal_interval, params),
        cost_curve=generate_cost_curve(params),
        maintenance_strategy=PREVENTIVE_MAINTENANCE,
        recommendation_reason=(
            "Zero tolerance for downtime requires preventive maintenance "
            "before failure occurs"
        ),
        calculation_details=CalculationDetails(
            mtbf=mtbf,
            beta=beta,
            eta=eta,
            maximum_downtime=params.maximum_acceptable_downtime,
            decision_rule="Zero downtime tolerance overrides standard beta-based decision",
            alternative_methods=methods,
            **_percent_at(optimal_interval, beta, eta)
        )
    )


def _limited_downtime(params: MaintenanceOptimizationParameters) -> MaintenanceOptimizationResult:
    beta, eta = params.beta, params.eta
    downtime = params.maximum_acceptable_downtime
    mtbf = calculate_mtbf(beta, eta)

    # Less acceptable downtime -> shorter interval, never below 60% of MTBF
    reliability_factor = max(0.6, 1 - downtime / LIMITED_DOWNTIME_HOURS)
    optimal_interval = mtbf * reliability_factor

    reliability_target = max(0.8, 1 - downtime / (2 * LIMITED_DOWNTIME_HOURS))
    availability_target = 1 - downtime / HOURS_PER_MONTH

    methods = [
        AlternativeMethod(
            name="Modified Cost-Based Approach",
            interval=optimal_interval,
            description=f"Adjusted for limited downtime ({downtime:g} hours)",
            formula=f"Interval = MTBF × {reliability_factor:.2f} (reliability factor)"
        ),
        AlternativeMethod(
            name="Reliability Threshold Approach",
            interval=calculate_reliability_based_interval(beta, eta, reliability_target),
            description="Sets PM interval to maintain minimum required reliability",
            formula="t = η · (-ln(R))^(1/β) where R is target reliability",
            target_reliability=reliability_target * 100
        ),
        AlternativeMethod(
            name="Availability Maximization",
            interval=mtbf * availability_target,
            description="Optimizes interval to meet availability requirements",
            formula="Interval ≈ MTBF × Target Availability"
        ),
    ]

    return MaintenanceOptimizationResult(
        optimal_interval=optimal_interval,
        optimal_cost=_cost_at(optimal_interval, params),
        cost_curve=generate_cost_curve(params),
        maintenance_strategy=PREVENTIVE_MAINTENANCE,
        recommendation_reason=(
            "Despite random failures (β ≤ 1), limited acceptable downtime "
            "requires preventive maintenance"
        ),
        calculation_details=CalculationDetails(
            mtbf=mtbf,
            beta=beta,
            eta=eta,
            maximum_downtime=downtime,
            decision_rule=(
                "Limited downtime tolerance (≤24 hours) overrides standard "
                "beta-based decision"
            ),
            reliability_factor=reliability_factor,
            alternative_methods=methods,
            **_percent_at(optimal_interval, beta, eta)
        )
    )


def _run_to_failure(params: MaintenanceOptimizationParameters) -> MaintenanceOptimizationResult:
    beta, eta = params.beta, params.eta
    cost = _cost_at(math.inf, params)

    return MaintenanceOptimizationResult(
        optimal_interval=math.inf,
        optimal_cost=cost,
        cost_curve=[CostCurvePoint(interval=eta, cost=cost)],
        maintenance_strategy=RUN_TO_FAILURE,
        recommendation_reason=(
            "For beta <= 1, failures occur early or randomly, making "
            "preventive maintenance suboptimal"
        ),
        calculation_details=CalculationDetails(
            mtbf=calculate_mtbf(beta, eta),
            beta=beta,
            eta=eta,
            maximum_downtime=params.maximum_acceptable_downtime,
            decision_rule=(
                "When beta <= 1 and acceptable downtime > 24 hours, "
                "run-to-failure is usually more cost-effective"
            )
        )
    )


def _minimise_cost(params: MaintenanceOptimizationParameters) -> MaintenanceOptimizationResult:
    beta, eta = params.beta, params.eta
    cost_curve = generate_cost_curve(params)

    costs = np.array([point.cost for point in cost_curve])
    best = int(np.argmin(costs))
    optimal_interval = cost_curve[best].interval
    optimal_cost = cost_curve[best].cost

    # The grid is coarse; the closed form may land closer to the minimum
    analytical_interval = calculate_optimal_pm_interval(beta, eta)
    analytical_cost = _cost_at(analytical_interval, params)
    if analytical_cost < optimal_cost:
        optimal_interval = analytical_interval
        optimal_cost = analytical_cost

    # PM may cost more than the failures it prevents
    run_to_failure_cost = _cost_at(math.inf, params)
    run_to_failure = run_to_failure_cost < optimal_cost
    if run_to_failure:
        optimal_interval = math.inf
        optimal_cost = run_to_failure_cost

    logger.debug(
        "Grid optimum %g, analytical optimum %g (cost %g), run-to-failure cost %g, chosen %g",
        cost_curve[best].interval, analytical_interval, analytical_cost,
        run_to_failure_cost, optimal_interval
    )

    target = params.target_reliability_threshold or DEFAULT_RELIABILITY_TARGET
    methods = [
        AlternativeMethod(
            name="Cost-Based Approach",
            interval=optimal_interval,
            description="Minimizes total cost by balancing PM and failure costs",
            formula="Cost = N_PM × PM Cost + N_PM × F(t) × Failure Cost"
        ),
        AlternativeMethod(
            name="Reliability Threshold Approach",
            interval=calculate_reliability_based_interval(beta, eta, target),
            description="Sets PM interval where reliability drops below target",
            formula="t = η · (-ln(R))^(1/β) where R is target reliability",
            target_reliability=target * 100
        ),
    ]

    if run_to_failure:
        return MaintenanceOptimizationResult(
            optimal_interval=optimal_interval,
            optimal_cost=optimal_cost,
            cost_curve=cost_curve,
            maintenance_strategy=RUN_TO_FAILURE,
            recommendation_reason=(
                "Although beta > 1, preventive maintenance at every interval "
                "costs more than the expected failures over the horizon"
            ),
            calculation_details=CalculationDetails(
                mtbf=calculate_mtbf(beta, eta),
                beta=beta,
                eta=eta,
                maximum_downtime=params.maximum_acceptable_downtime,
                decision_rule=(
                    "When beta > 1 but failures cost less than preventive "
                    "maintenance, run-to-failure is more cost-effective"
                ),
                alternative_methods=methods
            )
        )

    return MaintenanceOptimizationResult(
        optimal_interval=optimal_interval,
        optimal_cost=optimal_cost,
        cost_curve=cost_curve,
        maintenance_strategy=PREVENTIVE_MAINTENANCE,
        recommendation_reason=(
            "For beta > 1, wear-out failures are predictable, making "
            "preventive maintenance optimal"
        ),
        calculation_details=CalculationDetails(
            mtbf=calculate_mtbf(beta, eta),
            beta=beta,
            eta=eta,
            maximum_downtime=params.maximum_acceptable_downtime,
            decision_rule=(
                "When beta > 1, component shows wear-out pattern, favoring "
                "preventive maintenance"
            ),
            alternative_methods=methods,
            **_percent_at(optimal_interval, beta, eta)
        )
    )


def optimize_maintenance_interval(
    params: MaintenanceOptimizationParameters
) -> MaintenanceOptimizationResult:
    """Recommend a maintenance strategy and PM interval.

    The first matching rule wins:

    1. maximum_acceptable_downtime == 0: preventive maintenance at
       0.5 x MTBF.
    2. 0 < downtime <= 24 and beta <= 1: preventive maintenance at
       MTBF x max(0.6, 1 - downtime/24).
    3. beta <= 1 and downtime > 24: run-to-failure.
    4. beta > 1: lowest total cost of the 50-point grid over (0, 2*eta],
       the closed-form optimum and run-to-failure (interval ``inf``). The
       strategy is preventive maintenance whenever a finite interval wins.

    Args:
        params: Weibull parameters, costs, downtime limit and horizon.

    Returns:
        MaintenanceOptimizationResult with the chosen interval, its cost,
        the cost curve and supporting details.

    Examples:
        >>> params = MaintenanceOptimizationParameters(
        ...     beta=2.0, eta=1000, preventive_maintenance_cost=100,
        ...     corrective_maintenance_cost=1000, maximum_acceptable_downtime=48,
        ...     time_horizon=10000)
        >>> result = optimize_maintenance_interval(params)
        >>> result.maintenance_strategy
        'Preventive Maintenance'
    """
    beta = params.beta
    downtime = params.maximum_acceptable_downtime

    if downtime == 0:
        logger.debug("Zero downtime tolerance: mandatory PM")
        return _zero_downtime(params)

    if downtime <= LIMITED_DOWNTIME_HOURS and beta <= 1:
        logger.debug("Limited downtime (%g h) with beta=%g: PM required", downtime, beta)
        return _limited_downtime(params)

    if beta <= 1:
        logger.debug("beta=%g with downtime %g h: run-to-failure", beta, downtime)
        return _run_to_failure(params)

    return _minimise_cost(params)
