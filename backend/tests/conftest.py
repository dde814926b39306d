"""
Pytest configuration and shared fixtures.

This module provides common fixtures for all test modules.
"""

import pytest
import numpy as np
from typing import List

from reliability.config import get_settings
from reliability.schemas import (
    FailureObservation,
    MaintenanceOptimizationParameters,
    RCMParameters,
    SimulationParameters,
    WeibullParameters,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings for every test so env overrides do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# Failure history fixtures
@pytest.fixture
def wear_out_records() -> List[FailureObservation]:
    """Failure records with increasing TBF spread typical of wear-out."""
    tbf_days = [410.0, 520.0, 610.0, 700.0, 790.0, 880.0, 1010.0]
    return [
        FailureObservation(asset_id=1, tbf_days=t, failure_mechanism="Fatigue")
        for t in tbf_days
    ]


@pytest.fixture
def operating_hours_records() -> List[FailureObservation]:
    """Records carrying both TBF days and operating hours."""
    return [
        FailureObservation(asset_id=2, tbf_days=30.0, operating_hours_at_failure=700.0),
        FailureObservation(asset_id=2, tbf_days=45.0, operating_hours_at_failure=1100.0),
        FailureObservation(asset_id=2, tbf_days=60.0, operating_hours_at_failure=1450.0),
        FailureObservation(asset_id=2, tbf_days=80.0, operating_hours_at_failure=1900.0),
    ]


@pytest.fixture
def identical_records() -> List[FailureObservation]:
    """Three records with the same TBF (zero variance)."""
    return [FailureObservation(asset_id=3, tbf_days=100.0) for _ in range(3)]


@pytest.fixture
def sparse_records() -> List[FailureObservation]:
    """Only two usable records: too few for regression."""
    return [
        FailureObservation(asset_id=4, tbf_days=120.0),
        FailureObservation(asset_id=4, tbf_days=180.0),
        FailureObservation(asset_id=4, tbf_days=None),
    ]


# Parameter fixtures
@pytest.fixture
def weibull_params() -> WeibullParameters:
    """Wear-out Weibull parameters."""
    return WeibullParameters(beta=2.0, eta=1000.0, time_units="hours", time_horizon=5000.0)


@pytest.fixture
def optimization_params() -> MaintenanceOptimizationParameters:
    """Wear-out component with unconstrained downtime."""
    return MaintenanceOptimizationParameters(
        beta=2.0,
        eta=1000.0,
        preventive_maintenance_cost=100.0,
        corrective_maintenance_cost=1000.0,
        target_reliability_threshold=0.9,
        maximum_acceptable_downtime=48.0,
        time_horizon=10000.0,
    )


@pytest.fixture
def rcm_params() -> RCMParameters:
    """High criticality, predictable failures."""
    return RCMParameters(
        asset_criticality="High",
        is_predictable=True,
        cost_of_failure=5000.0,
        failure_mode_descriptions=["Bearing seizure"],
        failure_consequences=["Production loss"],
        current_maintenance_practices="Scheduled inspections",
    )


@pytest.fixture
def simulation_params() -> SimulationParameters:
    """Run-to-failure simulation of a wear-out component."""
    return SimulationParameters(
        beta=2.0,
        eta=1000.0,
        number_of_runs=1000,
        time_horizon=5000.0,
        pm_cost=100.0,
        failure_cost=1000.0,
    )


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for repeatable simulation tests."""
    return np.random.default_rng(12345)
