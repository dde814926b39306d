"""
Pydantic schemas for Weibull distribution parameters.
"""
from typing import Literal

from pydantic import Field

from reliability.config import get_settings
from reliability.schemas.base import CamelModel

TimeUnits = Literal["hours", "days", "months", "years"]


class WeibullParameters(CamelModel):
    """Weibull distribution parameters for reliability curve analysis."""
    beta: float = Field(..., gt=0, description="Shape parameter (beta)")
    eta: float = Field(..., gt=0, description="Scale parameter (eta), characteristic life")
    time_units: TimeUnits = Field(
        default_factory=lambda: get_settings().default_time_units,
        validate_default=True,
        description="Units of eta and time_horizon"
    )
    time_horizon: float = Field(..., gt=0, description="End of the analysis window")
