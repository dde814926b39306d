"""
Pydantic schemas for FMECA worksheet rows.

Asset-level and system-level rows share most of their fields; they are
modelled as one tagged union discriminated by ``record_kind``.
"""
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, TypeAdapter, computed_field

from reliability.schemas.base import CamelModel


class FmecaRecordBase(CamelModel):
    """Fields common to asset and system FMECA rows."""
    failure_mode: str = Field(..., min_length=1)
    cause: str = Field(..., min_length=1)
    effect: str = Field(..., min_length=1)
    severity: int = Field(..., ge=1, le=10, description="Severity ranking (1-10)")
    probability: int = Field(..., ge=1, le=10, description="Occurrence ranking (1-10)")
    detection: int = Field(..., ge=1, le=10, description="Detection ranking (1-10)")
    action: Optional[str] = None
    responsibility: Optional[str] = None
    target_date: Optional[str] = Field(None, description="ISO date")
    comments: Optional[str] = None

    @computed_field
    @property
    def rpn(self) -> int:
        """Risk priority number, severity x occurrence x detection."""
        return self.severity * self.probability * self.detection


class AssetFmecaRecord(FmecaRecordBase):
    """FMECA row analysed against a single tagged asset."""
    record_kind: Literal["asset"] = "asset"
    tag_number: str = Field(..., min_length=1)
    asset_description: str = Field(..., min_length=1)
    component: str = Field(..., min_length=1)


class SystemFmecaRecord(FmecaRecordBase):
    """FMECA row analysed against a system / subsystem."""
    record_kind: Literal["system"] = "system"
    system_id: str = Field(..., min_length=1)
    system_name: str = Field(..., min_length=1)
    subsystem: str = Field(..., min_length=1)


FmecaRecord = Annotated[
    Union[AssetFmecaRecord, SystemFmecaRecord],
    Field(discriminator="record_kind")
]

_fmeca_adapter = TypeAdapter(FmecaRecord)


def parse_fmeca_record(data: dict) -> Union[AssetFmecaRecord, SystemFmecaRecord]:
    """Validate a raw FMECA row into the matching record type."""
    return _fmeca_adapter.validate_python(data)
