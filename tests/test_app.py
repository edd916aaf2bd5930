from __future__ import annotations

from pyfootprint import FootprintConfig, FootprintServices, MemoryStorage
from pyfootprint.storage import FileStorage


def test_services_share_storage_and_restore(tmp_path) -> None:
    config = FootprintConfig(storage_dir=str(tmp_path))

    with FootprintServices.create(config) as services:
        assert isinstance(services.storage, FileStorage)
        services.accounts.register("A", "a@x.com", "pw")
        services.ledger.update_electricity(100)

    restored = FootprintServices.create(config)

    assert restored.ledger.snapshot.electricity.emissions == 50
    assert restored.accounts.current_user is not None
    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "accountRegistry.json",
        "currentSession.json",
        "currentSnapshot.json",
    ]


def test_in_memory_services_and_custom_keys() -> None:
    storage = MemoryStorage()
    config = FootprintConfig(snapshot_key="snap", registry_key="users", session_key="me")

    services = FootprintServices.create(config, storage=storage)
    services.accounts.register("A", "a@x.com", "pw")
    services.ledger.update_waste(1)

    assert storage.keys() == ["me", "snap", "users"]
