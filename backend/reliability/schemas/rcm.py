"""
Pydantic schemas for RCM strategy selection.
"""
from typing import List, Literal

from pydantic import Field

from reliability.schemas.base import CamelModel

AssetCriticality = Literal["High", "Medium", "Low"]


class RCMParameters(CamelModel):
    """Inputs to the RCM maintenance strategy decision table."""
    asset_criticality: AssetCriticality = Field(..., description="Asset criticality level")
    is_predictable: bool = Field(..., description="Whether failures give warning / follow a pattern")
    cost_of_failure: float = Field(..., ge=0, description="Cost of a single failure")
    failure_mode_descriptions: List[str] = Field(
        ..., min_length=1, description="Failure mode descriptions"
    )
    failure_consequences: List[str] = Field(
        ..., min_length=1, description="Failure consequence descriptions"
    )
    current_maintenance_practices: str = Field(
        default="", description="Free-text description of current practice"
    )
