"""
Tests for request schemas and configuration.

Tests cover:
- Parameter validation (positivity, ranges, required fields)
- camelCase aliases
- Configured defaults and the simulation run cap
- FMECA tagged union and risk priority number
"""

import pytest
from pydantic import ValidationError

from reliability.config import get_settings
from reliability.schemas import (
    AssetFmecaRecord,
    FailureObservation,
    MaintenanceOptimizationParameters,
    RCMParameters,
    SimulationParameters,
    SystemFmecaRecord,
    WeibullParameters,
    parse_fmeca_record,
)


class TestSettings:
    """Test configuration defaults and environment overrides."""

    def test_defaults(self):
        """Test built-in defaults."""
        settings = get_settings()

        assert settings.default_time_units == "hours"
        assert settings.default_simulation_runs == 1000
        assert settings.max_simulation_runs == 100_000

    def test_environment_override(self, monkeypatch):
        """Test RELIABILITY_ prefixed variables override defaults."""
        monkeypatch.setenv("RELIABILITY_DEFAULT_SIMULATION_RUNS", "250")
        get_settings.cache_clear()

        assert get_settings().default_simulation_runs == 250

    def test_cached(self):
        """Test settings are created once."""
        assert get_settings() is get_settings()


class TestWeibullParameters:
    """Test Weibull parameter validation."""

    def test_valid(self):
        """Test valid parameters with default units."""
        params = WeibullParameters(beta=2.0, eta=1000, time_horizon=5000)

        assert params.time_units == "hours"
        assert params.eta == 1000.0

    def test_camel_case_alias(self):
        """Test the HTTP-style camelCase payload."""
        params = WeibullParameters.model_validate(
            {"beta": 1.5, "eta": 300, "timeUnits": "days", "timeHorizon": 900}
        )

        assert params.time_units == "days"
        assert params.time_horizon == 900.0

    @pytest.mark.parametrize("field,value", [
        ("beta", 0), ("beta", -1.0), ("eta", 0), ("time_horizon", 0),
    ])
    def test_non_positive_rejected(self, field, value):
        """Test beta, eta and horizon must be positive."""
        values = {"beta": 2.0, "eta": 1000.0, "time_horizon": 5000.0}
        values[field] = value
        with pytest.raises(ValidationError):
            WeibullParameters(**values)

    def test_unknown_units_rejected(self):
        """Test units outside the allowed set."""
        with pytest.raises(ValidationError):
            WeibullParameters(beta=2.0, eta=1000, time_units="weeks", time_horizon=5000)

    def test_configured_default_units_validated(self, monkeypatch):
        """Test default units from configuration must be allowed units."""
        monkeypatch.setenv("RELIABILITY_DEFAULT_TIME_UNITS", "weeks")
        get_settings.cache_clear()

        with pytest.raises(ValidationError):
            WeibullParameters(beta=2.0, eta=1000, time_horizon=5000)

    def test_configured_default_units(self, monkeypatch):
        """Test allowed default units from configuration are used."""
        monkeypatch.setenv("RELIABILITY_DEFAULT_TIME_UNITS", "days")
        get_settings.cache_clear()

        assert WeibullParameters(beta=2.0, eta=1000, time_horizon=5000).time_units == "days"


class TestFailureObservation:
    """Test failure observation records."""

    def test_optional_fields(self):
        """Test only the asset id is required."""
        record = FailureObservation(asset_id=7)

        assert record.tbf_days is None
        assert record.operating_hours_at_failure is None
        assert record.failure_mechanism is None

    def test_camel_case_alias(self):
        """Test camelCase keys from the record store."""
        record = FailureObservation.model_validate({
            "assetId": 7, "tbfDays": 12.5, "operatingHoursAtFailure": 300,
            "failureMechanism": "Corrosion"
        })

        assert record.tbf_days == 12.5
        assert record.failure_mechanism == "Corrosion"

    def test_frozen(self):
        """Test records are read-only."""
        record = FailureObservation(asset_id=7, tbf_days=10.0)
        with pytest.raises(ValidationError):
            record.tbf_days = 20.0


class TestMaintenanceOptimizationParameters:
    """Test optimisation input validation."""

    def _values(self, **overrides):
        values = dict(
            beta=2.0, eta=1000.0, preventive_maintenance_cost=100.0,
            corrective_maintenance_cost=1000.0, maximum_acceptable_downtime=48.0,
            time_horizon=10000.0
        )
        values.update(overrides)
        return values

    def test_default_target_reliability(self):
        """Test the reliability target defaults to 0.9."""
        params = MaintenanceOptimizationParameters(**self._values())
        assert params.target_reliability_threshold == 0.9

    @pytest.mark.parametrize("overrides", [
        {"preventive_maintenance_cost": -1.0},
        {"corrective_maintenance_cost": -1.0},
        {"maximum_acceptable_downtime": -0.5},
        {"target_reliability_threshold": 1.5},
        {"target_reliability_threshold": -0.1},
        {"eta": 0},
    ])
    def test_invalid_values(self, overrides):
        """Test negative costs and out-of-range targets are rejected."""
        with pytest.raises(ValidationError):
            MaintenanceOptimizationParameters(**self._values(**overrides))

    def test_zero_costs_allowed(self):
        """Test costs may be zero."""
        params = MaintenanceOptimizationParameters(
            **self._values(preventive_maintenance_cost=0.0, corrective_maintenance_cost=0.0)
        )
        assert params.preventive_maintenance_cost == 0.0


class TestRCMParameters:
    """Test RCM input validation."""

    def test_camel_case_alias(self):
        """Test camelCase payload."""
        params = RCMParameters.model_validate({
            "assetCriticality": "Low",
            "isPredictable": False,
            "costOfFailure": 250,
            "failureModeDescriptions": ["Leak"],
            "failureConsequences": ["Minor"],
        })

        assert params.asset_criticality == "Low"
        assert params.current_maintenance_practices == ""

    def test_unknown_criticality(self):
        """Test criticality outside High/Medium/Low."""
        with pytest.raises(ValidationError):
            RCMParameters(
                asset_criticality="Extreme", is_predictable=True, cost_of_failure=1.0,
                failure_mode_descriptions=["a"], failure_consequences=["b"]
            )

    @pytest.mark.parametrize("field", ["failure_mode_descriptions", "failure_consequences"])
    def test_empty_lists_rejected(self, field):
        """Test at least one failure mode and consequence are required."""
        values = dict(
            asset_criticality="High", is_predictable=True, cost_of_failure=1.0,
            failure_mode_descriptions=["a"], failure_consequences=["b"]
        )
        values[field] = []
        with pytest.raises(ValidationError):
            RCMParameters(**values)


class TestSimulationParameters:
    """Test simulation input validation."""

    def test_camel_case_alias(self):
        """Test camelCase payload with a PM interval."""
        params = SimulationParameters.model_validate({
            "beta": 2, "eta": 1000, "numberOfRuns": 10, "timeHorizon": 5000,
            "pmInterval": 500, "pmCost": 100, "failureCost": 1000
        })

        assert params.number_of_runs == 10
        assert params.pm_interval == 500.0

    def test_costs_required(self):
        """Test PM and failure costs must be supplied."""
        with pytest.raises(ValidationError):
            SimulationParameters(beta=2.0, eta=1000.0, time_horizon=5000.0)

    @pytest.mark.parametrize("overrides", [
        {"number_of_runs": 0},
        {"pm_interval": 0},
        {"pm_cost": -1.0},
        {"failure_cost": -1.0},
    ])
    def test_invalid_values(self, overrides):
        """Test non-positive runs and intervals and negative costs."""
        values = dict(
            beta=2.0, eta=1000.0, number_of_runs=10, time_horizon=5000.0,
            pm_cost=100.0, failure_cost=1000.0
        )
        values.update(overrides)
        with pytest.raises(ValidationError):
            SimulationParameters(**values)

    def test_configured_default_runs_capped(self, monkeypatch):
        """Test a configured default above the run cap is rejected."""
        monkeypatch.setenv("RELIABILITY_DEFAULT_SIMULATION_RUNS", "200000")
        get_settings.cache_clear()

        with pytest.raises(ValidationError, match="must not exceed 100000"):
            SimulationParameters(
                beta=2.0, eta=1000.0, time_horizon=5000.0, pm_cost=100.0, failure_cost=1000.0
            )

    def test_configured_default_runs_positive(self, monkeypatch):
        """Test a configured default of zero runs is rejected."""
        monkeypatch.setenv("RELIABILITY_DEFAULT_SIMULATION_RUNS", "0")
        get_settings.cache_clear()

        with pytest.raises(ValidationError):
            SimulationParameters(
                beta=2.0, eta=1000.0, time_horizon=5000.0, pm_cost=100.0, failure_cost=1000.0
            )

    def test_configured_run_cap(self, monkeypatch):
        """Test the run cap follows configuration."""
        monkeypatch.setenv("RELIABILITY_MAX_SIMULATION_RUNS", "500")
        get_settings.cache_clear()

        with pytest.raises(ValidationError, match="must not exceed 500"):
            SimulationParameters(
                beta=2.0, eta=1000.0, number_of_runs=501, time_horizon=5000.0,
                pm_cost=100.0, failure_cost=1000.0
            )

        params = SimulationParameters(
            beta=2.0, eta=1000.0, number_of_runs=500, time_horizon=5000.0,
            pm_cost=100.0, failure_cost=1000.0
        )
        assert params.number_of_runs == 500


class TestFmecaRecords:
    """Test FMECA tagged union."""

    COMMON = {
        "failureMode": "Seal leak",
        "cause": "Elastomer ageing",
        "effect": "Loss of containment",
        "severity": 8,
        "probability": 4,
        "detection": 5,
    }

    def test_asset_record(self):
        """Test an asset row parses into AssetFmecaRecord."""
        record = parse_fmeca_record({
            **self.COMMON,
            "recordKind": "asset",
            "tagNumber": "P-101A",
            "assetDescription": "Feed pump",
            "component": "Mechanical seal",
        })

        assert isinstance(record, AssetFmecaRecord)
        assert record.tag_number == "P-101A"
        assert record.rpn == 160

    def test_system_record(self):
        """Test a system row parses into SystemFmecaRecord."""
        record = parse_fmeca_record({
            **self.COMMON,
            "recordKind": "system",
            "systemId": "SYS-01",
            "systemName": "Cooling water",
            "subsystem": "Circulation",
            "targetDate": "2025-03-01",
        })

        assert isinstance(record, SystemFmecaRecord)
        assert record.subsystem == "Circulation"
        assert record.target_date == "2025-03-01"

    def test_rpn_serialised(self):
        """Test the RPN is included in dumps."""
        record = AssetFmecaRecord(
            failure_mode="Wear", cause="Abrasion", effect="Vibration",
            severity=2, probability=3, detection=4,
            tag_number="C-1", asset_description="Conveyor", component="Roller"
        )

        data = record.model_dump(by_alias=True)

        assert data["rpn"] == 24
        assert data["recordKind"] == "asset"

    def test_unknown_kind(self):
        """Test a row with an unknown kind is rejected."""
        with pytest.raises(ValidationError):
            parse_fmeca_record({**self.COMMON, "recordKind": "plant"})

    def test_missing_kind_fields(self):
        """Test an asset row without asset fields is rejected."""
        with pytest.raises(ValidationError):
            parse_fmeca_record({**self.COMMON, "recordKind": "asset"})

    @pytest.mark.parametrize("severity", [0, 11])
    def test_ranking_range(self, severity):
        """Test rankings must lie in 1-10."""
        with pytest.raises(ValidationError):
            parse_fmeca_record({
                **self.COMMON,
                "severity": severity,
                "recordKind": "asset",
                "tagNumber": "P-1",
                "assetDescription": "Pump",
                "component": "Seal",
            })
