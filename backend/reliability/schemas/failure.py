"""
Pydantic schema for failure-history observations.

Records are owned by the external record store; the reliability core
only reads a batch of them.
"""
from typing import Optional

from pydantic import Field

from reliability.schemas.base import CamelModel


class FailureObservation(CamelModel):
    """One failure event of an asset."""
    asset_id: int = Field(..., description="Identifier of the failed asset")
    tbf_days: Optional[float] = Field(
        None, description="Time to failure (first failure) or between failures, in days"
    )
    operating_hours_at_failure: Optional[float] = Field(
        None, description="Operating hours since installation or last overhaul"
    )
    failure_mechanism: Optional[str] = Field(
        None, description="How the item failed physically or chemically"
    )
