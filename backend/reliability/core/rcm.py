"""
RCM (Reliability Centred Maintenance) strategy selection.

A decision table over failure predictability, asset criticality and cost
of failure, followed by task recommendations triggered by keywords in the
current practice, failure mode and consequence descriptions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from reliability.schemas.rcm import RCMParameters

PREVENTIVE_COST_THRESHOLD = 5000.0
UNPREDICTABLE_PREVENTIVE_COST_THRESHOLD = 3000.0

_STRATEGY_TASKS = {
    "Predictive Maintenance": [
        "Implement condition monitoring to detect early signs of failure",
        "Develop threshold limits for key parameters indicating degradation",
        "Create response procedures for different severity levels of degradation",
        "Train staff on proper use of predictive technologies",
    ],
    "Preventive Maintenance": [
        "Establish time-based maintenance intervals",
        "Develop detailed maintenance procedures for each task",
        "Create checklist for preventive maintenance activities",
    ],
    "Condition-Based Maintenance": [
        "Implement basic condition monitoring",
        "Establish threshold alerts for maintenance actions",
        "Develop response procedures for alerts",
    ],
    "Redesign": [
        "Analyze failure modes to identify opportunities for design improvements",
        "Consider redundant systems to improve reliability",
        "Evaluate alternative technologies or materials",
        "Conduct engineering analysis to address root causes of failures",
    ],
    "Run-to-Failure": [
        "Ensure spare parts are available for quick replacement",
        "Document repair procedures to minimize downtime",
        "Train staff on quick response and repair techniques",
    ],
}

# Preventive maintenance chosen for unpredictable failures uses more conservative tasks
_UNPREDICTABLE_PREVENTIVE_TASKS = [
    "Establish conservative time-based maintenance intervals",
    "Document detailed maintenance procedures",
    "Track effectiveness and adjust intervals based on results",
]

_REACTIVE_PRACTICE_TASKS = [
    "Transition from reactive to planned maintenance approach",
    "Document all failures to build historical data for analysis",
]
_WEAR_TASKS = [
    "Implement lubrication program to reduce wear-related failures",
    "Consider surface treatments or hardening to improve wear resistance",
]
_SAFETY_TASKS = [
    "Develop emergency response procedures for safety-critical failures",
    "Implement additional safety controls and monitoring",
]


@dataclass
class MaintenanceStrategyResult:
    """Selected RCM strategy with its task recommendations."""
    maintenance_strategy: str
    task_recommendations: List[str] = field(default_factory=list)
    analysis_inputs: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maintenanceStrategy": self.maintenance_strategy,
            "taskRecommendations": list(self.task_recommendations),
            "analysisInputs": {
                "assetCriticality": self.analysis_inputs["asset_criticality"],
                "isPredictable": self.analysis_inputs["is_predictable"],
                "costOfFailure": self.analysis_inputs["cost_of_failure"],
            },
        }


def _select_strategy(params: RCMParameters) -> str:
    if params.is_predictable:
        if params.asset_criticality == "High":
            return "Predictive Maintenance"
        if params.cost_of_failure > PREVENTIVE_COST_THRESHOLD:
            return "Preventive Maintenance"
        return "Condition-Based Maintenance"

    if params.asset_criticality == "High":
        return "Redesign"
    if params.cost_of_failure > UNPREDICTABLE_PREVENTIVE_COST_THRESHOLD:
        return "Preventive Maintenance"
    return "Run-to-Failure"


def _mentions(texts: List[str], *keywords: str) -> bool:
    return any(keyword in text.lower() for text in texts for keyword in keywords)


def determine_maintenance_strategy(params: RCMParameters) -> MaintenanceStrategyResult:
    """Determine the maintenance strategy using RCM decision logic.

    Strategy selection:

    - predictable, High criticality: Predictive Maintenance
    - predictable, cost of failure > 5000: Preventive Maintenance
    - predictable, otherwise: Condition-Based Maintenance
    - unpredictable, High criticality: Redesign
    - unpredictable, cost of failure > 3000: Preventive Maintenance
    - unpredictable, otherwise: Run-to-Failure

    Extra recommendations are appended when the current practice mentions
    "reactive" or "run to fail", a failure mode mentions "wear", or a
    consequence mentions "safety" (case-insensitive).

    Args:
        params: RCM inputs.

    Returns:
        MaintenanceStrategyResult with the strategy, ordered task
        recommendations and the key inputs.

    Examples:
        >>> params = RCMParameters(asset_criticality="Low", is_predictable=False,
        ...     cost_of_failure=500, failure_mode_descriptions=["Seal leak"],
        ...     failure_consequences=["Production loss"])
        >>> determine_maintenance_strategy(params).maintenance_strategy
        'Run-to-Failure'
    """
    strategy = _select_strategy(params)

    if strategy == "Preventive Maintenance" and not params.is_predictable:
        tasks = list(_UNPREDICTABLE_PREVENTIVE_TASKS)
    else:
        tasks = list(_STRATEGY_TASKS[strategy])

    if _mentions([params.current_maintenance_practices], "reactive", "run to fail"):
        tasks.extend(_REACTIVE_PRACTICE_TASKS)
    if _mentions(params.failure_mode_descriptions, "wear"):
        tasks.extend(_WEAR_TASKS)
    if _mentions(params.failure_consequences, "safety"):
        tasks.extend(_SAFETY_TASKS)

    return MaintenanceStrategyResult(
        maintenance_strategy=strategy,
        task_recommendations=tasks,
        analysis_inputs={
            "asset_criticality": params.asset_criticality,
            "is_predictable": params.is_predictable,
            "cost_of_failure": params.cost_of_failure,
        }
    )
