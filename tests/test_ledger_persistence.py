from __future__ import annotations

import json

import pytest

from pyfootprint._constants import SNAPSHOT_KEY
from pyfootprint.ledger.store import EmissionsLedger
from pyfootprint.models.readings import EmissionsSnapshot
from pyfootprint.storage import FileStorage, MemoryStorage


def test_every_mutation_is_persisted_before_listeners_run() -> None:
    storage = MemoryStorage()
    ledger = EmissionsLedger(storage)
    seen: list[float] = []

    def _check(snapshot: EmissionsSnapshot) -> None:
        persisted = json.loads(storage.get(SNAPSHOT_KEY) or "{}")
        seen.append(persisted["totalEmissions"])
        assert persisted["totalEmissions"] == snapshot.total_emissions

    ledger.subscribe(_check)
    ledger.update_electricity(10)
    ledger.update_waste(1)

    assert seen == [5.0, pytest.approx(7.53)]


def test_persisted_shape_uses_camel_case_keys() -> None:
    storage = MemoryStorage()
    EmissionsLedger(storage).update_transport({"car": {"km": 1}})

    persisted = json.loads(storage.get(SNAPSHOT_KEY) or "{}")

    assert set(persisted) == {"electricity", "transport", "waste", "totalEmissions", "aiSuggestions"}
    assert persisted["transport"]["car"] == {"km": 1.0, "emissions": 0.2}
    assert persisted["aiSuggestions"][0]["title"] == "Switch to Renewable Energy"


def test_restart_replays_to_identical_total() -> None:
    storage = MemoryStorage()
    ledger = EmissionsLedger(storage)
    ledger.update_electricity(100)
    ledger.update_transport({"car": {"km": 50}, "commute": {"km": 30, "type": "bus"}})
    ledger.update_waste(10)
    expected = ledger.snapshot

    restored = EmissionsLedger(storage).snapshot

    assert restored.total_emissions == expected.total_emissions
    assert restored.transport["commute"].emissions == 30 * 0.1
    assert restored == expected


def test_replay_recomputes_stale_emissions() -> None:
    stale = {
        "electricity": {"kwh": 100, "emissions": 9999},
        "transport": {
            "car": {"km": 50, "emissions": 1},
            "flight": {"km": 4, "emissions": 0},
        },
        "waste": {"kg": 10, "emissions": -5},
        "totalEmissions": 123456,
    }
    storage = MemoryStorage({SNAPSHOT_KEY: json.dumps(stale)})

    snapshot = EmissionsLedger(storage).snapshot

    assert snapshot.electricity.emissions == 50
    assert snapshot.transport["car"].emissions == 50 * 0.2
    assert snapshot.transport["flight"].emissions == 4 * 0.25
    assert snapshot.waste.emissions == 10 * 2.53
    assert snapshot.total_emissions == pytest.approx(50 + 10 + 1 + 25.3)
    assert json.loads(storage.get(SNAPSHOT_KEY) or "{}")["totalEmissions"] == snapshot.total_emissions


def test_replay_ignores_persisted_suggestions() -> None:
    storage = MemoryStorage({SNAPSHOT_KEY: json.dumps({"aiSuggestions": [], "electricity": {"kwh": 2}})})

    snapshot = EmissionsLedger(storage).snapshot

    assert len(snapshot.ai_suggestions) == 4
    assert snapshot.electricity.emissions == 1


@pytest.mark.parametrize("raw", ["{not json", "", "[1, 2]", "null", "42"])
def test_corrupt_snapshot_falls_back_to_default(raw: str) -> None:
    storage = MemoryStorage({SNAPSHOT_KEY: raw})

    snapshot = EmissionsLedger(storage).snapshot

    assert snapshot == EmissionsSnapshot()


def test_malformed_sections_degrade_to_zero() -> None:
    saved = {"electricity": {"kwh": "lots"}, "transport": {"car": {"km": None}, "bus": "7"}, "waste": []}
    storage = MemoryStorage({SNAPSHOT_KEY: json.dumps(saved)})

    snapshot = EmissionsLedger(storage).snapshot

    assert snapshot.electricity.kwh == 0
    assert snapshot.transport["car"].km == 0
    assert snapshot.transport["bus"].km == 7
    assert snapshot.waste.kg == 0


def test_reset_overwrites_persisted_copy(tmp_path) -> None:
    storage = FileStorage(tmp_path)
    ledger = EmissionsLedger(storage)
    ledger.update_electricity(100)

    ledger.reset()

    assert EmissionsLedger(FileStorage(tmp_path)).snapshot.total_emissions == 0
    persisted = json.loads((tmp_path / f"{SNAPSHOT_KEY}.json").read_text(encoding="utf-8"))
    assert persisted["electricity"] == {"kwh": 0.0, "emissions": 0.0}


def test_custom_snapshot_key() -> None:
    storage = MemoryStorage()
    EmissionsLedger(storage, key="otherSnapshot").update_waste(1)

    assert storage.get(SNAPSHOT_KEY) is None
    assert storage.get("otherSnapshot") is not None
