from __future__ import annotations

import pytest

from pyfootprint.agriculture import (
    AgricultureInput,
    estimate,
    fertilizer_emissions,
    water_efficiency,
)


def test_estimate_sums_components() -> None:
    result = estimate(
        AgricultureInput(
            pump_hours=10,
            pump_power_kw=2,
            fertilizer_kg=100,
            fertilizer_type="organic",
            treated_litres=5000,
            treatment_kwh_per_1000l=4,
            crop_hectares=1,
            crop_type="rice",
        )
    )

    assert result.irrigation == pytest.approx(10.0)
    assert result.fertilizer == pytest.approx(80.0)
    assert result.water_treatment == pytest.approx(10.0)
    assert result.total == pytest.approx(100.0)
    assert result.water_efficiency == pytest.approx(60.0)


def test_unknown_fertilizer_uses_nitrogen() -> None:
    assert fertilizer_emissions(10, "guano") == pytest.approx(21.0)


def test_invalid_numbers_become_zero() -> None:
    data = AgricultureInput(pump_hours="?", fertilizer_kg=None)

    assert data.pump_hours == 0
    assert estimate(data).total == 0


def test_water_efficiency_edges() -> None:
    assert water_efficiency(0, "wheat", 10, 1) == 0
    assert water_efficiency(1, "wheat", 0, 0) == 100
    assert water_efficiency(100, "cotton", 1, 1) == 100
