"""
Pydantic schemas for maintenance interval optimisation.
"""
from pydantic import Field

from reliability.schemas.base import CamelModel


class MaintenanceOptimizationParameters(CamelModel):
    """Inputs for preventive maintenance interval optimisation."""
    beta: float = Field(..., gt=0, description="Weibull shape parameter")
    eta: float = Field(..., gt=0, description="Weibull scale parameter")
    preventive_maintenance_cost: float = Field(..., ge=0, description="Cost of one PM action")
    corrective_maintenance_cost: float = Field(..., ge=0, description="Cost of one failure")
    target_reliability_threshold: float = Field(
        default=0.9, ge=0, le=1,
        description="Reliability target (0-1) for the threshold method; 0 means default 0.9"
    )
    maximum_acceptable_downtime: float = Field(..., ge=0, description="Acceptable downtime in hours")
    time_horizon: float = Field(..., gt=0, description="Planning horizon")
