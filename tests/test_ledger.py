from __future__ import annotations

import pytest

from pyfootprint.ledger.store import EmissionsLedger
from pyfootprint.models.readings import DEFAULT_SUGGESTIONS, EmissionsSnapshot, TransportReading
from pyfootprint.storage import MemoryStorage


def _ledger() -> EmissionsLedger:
    return EmissionsLedger(MemoryStorage())


def _sum_of_parts(snapshot: EmissionsSnapshot) -> float:
    return (
        snapshot.electricity.emissions
        + sum(reading.emissions for reading in snapshot.transport.values())
        + snapshot.waste.emissions
    )


def test_default_snapshot_is_all_zero() -> None:
    snapshot = _ledger().snapshot

    assert snapshot.electricity.kwh == 0
    assert snapshot.waste.kg == 0
    assert set(snapshot.transport) == {"car", "bus", "train", "flight"}
    assert all(reading.km == 0 and reading.emissions == 0 for reading in snapshot.transport.values())
    assert snapshot.total_emissions == 0
    assert snapshot.ai_suggestions == DEFAULT_SUGGESTIONS
    assert len(snapshot.ai_suggestions) == 4


def test_end_to_end_example_totals() -> None:
    ledger = _ledger()

    ledger.update_electricity(100)
    assert ledger.snapshot.electricity.emissions == 50

    ledger.update_transport({"car": {"km": 50}})
    assert ledger.snapshot.transport["car"].emissions == pytest.approx(10)

    ledger.update_waste(10)
    assert ledger.snapshot.waste.emissions == pytest.approx(25.3)

    assert ledger.snapshot.total_emissions == pytest.approx(85.3)


@pytest.mark.parametrize("kwh", [0, 1, 12.5, 100, 3333.3])
def test_electricity_emissions_and_total_delta(kwh: float) -> None:
    ledger = _ledger()
    ledger.update_transport({"bus": {"km": 20}})
    ledger.update_waste(3)
    before = ledger.snapshot.total_emissions

    snapshot = ledger.update_electricity(kwh)

    assert snapshot.electricity.kwh == kwh
    assert snapshot.electricity.emissions == kwh * 0.5
    assert snapshot.total_emissions - before == pytest.approx(kwh * 0.5)


@pytest.mark.parametrize("kg", [0, 1, 10, 42.42])
def test_waste_emissions(kg: float) -> None:
    snapshot = _ledger().update_waste(kg)

    assert snapshot.waste.emissions == kg * 2.53


@pytest.mark.parametrize("value", [None, "", "abc", float("nan"), float("inf"), [], {}, True])
def test_invalid_quantities_become_zero(value: object) -> None:
    ledger = _ledger()
    ledger.update_electricity(10)

    snapshot = ledger.update_electricity(value)

    assert snapshot.electricity.kwh == 0
    assert snapshot.electricity.emissions == 0
    assert snapshot.total_emissions == 0


def test_numeric_strings_are_accepted() -> None:
    snapshot = _ledger().update_waste(" 4 ")

    assert snapshot.waste.kg == 4
    assert snapshot.waste.emissions == 4 * 2.53


def test_transport_factors_per_mode() -> None:
    ledger = _ledger()

    snapshot = ledger.update_transport(
        {
            "car": {"km": 10},
            "bus": {"km": 10},
            "train": {"km": 10},
            "flight": {"km": 10},
        }
    )

    assert snapshot.transport["car"].emissions == 10 * 0.2
    assert snapshot.transport["bus"].emissions == 10 * 0.1
    assert snapshot.transport["train"].emissions == 10 * 0.04
    assert snapshot.transport["flight"].emissions == 10 * 0.25


def test_unknown_mode_uses_car_factor() -> None:
    snapshot = _ledger().update_transport({"scooter": {"km": 30}})

    assert snapshot.transport["scooter"].emissions == 30 * 0.2
    assert snapshot.total_emissions == pytest.approx(6.0)


def test_explicit_type_selects_factor() -> None:
    snapshot = _ledger().update_transport({"commute": {"km": 100, "type": "train"}})

    assert snapshot.transport["commute"].emissions == 100 * 0.04
    assert snapshot.transport["commute"].type == "train"


def test_bare_number_is_treated_as_km() -> None:
    snapshot = _ledger().update_transport({"bus": 40})

    assert snapshot.transport["bus"].km == 40
    assert snapshot.transport["bus"].emissions == 40 * 0.1


def test_transport_update_leaves_other_modes_untouched() -> None:
    ledger = _ledger()
    ledger.update_transport({"car": {"km": 50}, "train": {"km": 200}})
    before = ledger.snapshot.transport

    after = ledger.update_transport({"flight": {"km": 1000}}).transport

    for mode in ("car", "bus", "train"):
        assert after[mode].km == before[mode].km
        assert after[mode].emissions == before[mode].emissions
    assert after["flight"].emissions == 1000 * 0.25


def test_transport_entry_is_replaced_not_merged() -> None:
    ledger = _ledger()
    ledger.update_transport({"commute": {"km": 10, "type": "flight"}})

    snapshot = ledger.update_transport({"commute": {"km": 10}})

    assert snapshot.transport["commute"].type is None
    assert snapshot.transport["commute"].emissions == 10 * 0.2


def test_total_is_sum_of_parts_after_every_operation() -> None:
    ledger = _ledger()
    operations = [
        lambda: ledger.update_electricity(321),
        lambda: ledger.update_transport({"car": {"km": 12}, "ferry": {"km": 7}}),
        lambda: ledger.update_waste(8.8),
        lambda: ledger.update_transport({"car": {"km": 0}}),
        lambda: ledger.update_electricity("nope"),
        lambda: ledger.reset(),
        lambda: ledger.update_waste(1),
    ]

    for operation in operations:
        snapshot = operation()
        assert snapshot.total_emissions == pytest.approx(_sum_of_parts(snapshot))
        assert ledger.snapshot is snapshot


def test_reset_restores_default() -> None:
    ledger = _ledger()
    ledger.update_electricity(100)
    ledger.update_transport({"car": {"km": 50}, "boat": {"km": 5}})
    ledger.update_waste(10)

    snapshot = ledger.reset()

    assert snapshot == EmissionsSnapshot()
    assert snapshot.total_emissions == 0
    assert "boat" not in snapshot.transport


def test_previous_snapshot_is_not_mutated() -> None:
    ledger = _ledger()
    first = ledger.update_transport({"car": {"km": 5}})

    ledger.update_transport({"car": {"km": 500}, "bus": {"km": 1}})

    assert first.transport["car"].km == 5
    assert first.transport["bus"].km == 0


def test_snapshot_transport_is_read_only() -> None:
    ledger = _ledger()
    snapshot = ledger.update_transport({"car": {"km": 10}})

    with pytest.raises(TypeError):
        snapshot.transport["car"] = TransportReading(km=5, emissions=999)
    with pytest.raises(TypeError):
        ledger.snapshot.transport["boat"] = TransportReading(km=1, emissions=1)

    assert ledger.snapshot.transport["car"].emissions == pytest.approx(2)
    assert "boat" not in ledger.snapshot.transport
    assert ledger.total_emissions == _sum_of_parts(ledger.snapshot)

    after = ledger.update_transport({"bus": {"km": 10}})
    assert after.transport["car"].km == 10
    assert "boat" not in after.transport


def test_default_snapshot_transport_is_read_only() -> None:
    with pytest.raises(TypeError):
        EmissionsSnapshot().transport["car"] = TransportReading(km=1)


def test_read_only_transport_serializes_as_object() -> None:
    snapshot = _ledger().update_transport({"car": {"km": 10}})

    wire = snapshot.to_wire()

    assert isinstance(wire["transport"], dict)
    assert wire["transport"]["car"] == {"km": 10.0, "emissions": 2.0}


def test_subscribers_receive_each_committed_snapshot() -> None:
    ledger = _ledger()
    received: list[EmissionsSnapshot] = []
    unsubscribe = ledger.subscribe(received.append)

    ledger.update_electricity(2)
    ledger.update_waste(1)
    unsubscribe()
    ledger.update_waste(2)

    assert len(received) == 2
    assert received[-1].waste.kg == 1


def test_failing_subscriber_does_not_break_ledger() -> None:
    ledger = _ledger()
    received: list[EmissionsSnapshot] = []

    def _boom(_snapshot: EmissionsSnapshot) -> None:
        raise RuntimeError("listener failure")

    ledger.subscribe(_boom)
    ledger.subscribe(received.append)

    snapshot = ledger.update_electricity(4)

    assert snapshot.electricity.emissions == 2
    assert received == [snapshot]


def test_close_drops_subscribers() -> None:
    ledger = _ledger()
    received: list[EmissionsSnapshot] = []
    ledger.subscribe(received.append)

    ledger.close()
    ledger.update_electricity(1)

    assert received == []
