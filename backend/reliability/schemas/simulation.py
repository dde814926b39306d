"""
Pydantic schemas for Monte Carlo failure-cost simulation.
"""
from typing import Optional

from pydantic import Field, field_validator

from reliability.config import get_settings
from reliability.schemas.base import CamelModel


class SimulationParameters(CamelModel):
    """Inputs for the Monte Carlo maintenance cost simulation."""
    beta: float = Field(..., gt=0, description="Weibull shape parameter")
    eta: float = Field(..., gt=0, description="Weibull scale parameter")
    number_of_runs: int = Field(
        default_factory=lambda: get_settings().default_simulation_runs,
        gt=0,
        validate_default=True,
        description="Number of independent simulation runs"
    )
    time_horizon: float = Field(..., gt=0, description="Simulated period per run")
    pm_interval: Optional[float] = Field(
        None, gt=0, description="Preventive maintenance interval; None for run-to-failure"
    )
    pm_cost: float = Field(..., ge=0, description="Cost of one PM action")
    failure_cost: float = Field(..., ge=0, description="Cost of one failure")

    @field_validator("number_of_runs")
    @classmethod
    def check_run_limit(cls, value: int) -> int:
        limit = get_settings().max_simulation_runs
        if value > limit:
            raise ValueError(f"number_of_runs must not exceed {limit}")
        return value
