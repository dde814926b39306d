"""
Pydantic schemas for reliability core inputs.
"""
from reliability.schemas.weibull import WeibullParameters, TimeUnits
from reliability.schemas.failure import FailureObservation
from reliability.schemas.maintenance import MaintenanceOptimizationParameters
from reliability.schemas.rcm import RCMParameters, AssetCriticality
from reliability.schemas.simulation import SimulationParameters
from reliability.schemas.fmeca import (
    AssetFmecaRecord,
    SystemFmecaRecord,
    FmecaRecord,
    parse_fmeca_record
)

__all__ = [
    "WeibullParameters",
    "TimeUnits",
    "FailureObservation",
    "MaintenanceOptimizationParameters",
    "RCMParameters",
    "AssetCriticality",
    "SimulationParameters",
    "AssetFmecaRecord",
    "SystemFmecaRecord",
    "FmecaRecord",
    "parse_fmeca_record",
]
