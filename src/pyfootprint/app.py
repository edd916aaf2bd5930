"""Composition root.

Builds the storage backend and both state containers from a
:class:`FootprintConfig` so presentation code receives explicit instances
instead of reaching for module-level singletons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pyfootprint.accounts import AccountStore
from pyfootprint.config import FootprintConfig
from pyfootprint.environment import EnvironmentSimulator
from pyfootprint.ledger.store import EmissionsLedger
from pyfootprint.storage import FileStorage, KeyValueStorage, MemoryStorage

_logger = logging.getLogger(__name__)


def open_storage(config: FootprintConfig) -> KeyValueStorage:
    if config.storage_dir is None:
        return MemoryStorage()
    return FileStorage(config.storage_dir)


@dataclass
class FootprintServices:
    """Everything a front end needs, created together and torn down together."""

    config: FootprintConfig
    storage: KeyValueStorage
    ledger: EmissionsLedger
    accounts: AccountStore
    environment: EnvironmentSimulator = field(default_factory=EnvironmentSimulator)

    @classmethod
    def create(
        cls,
        config: FootprintConfig | None = None,
        *,
        storage: KeyValueStorage | None = None,
        **overrides: Any,
    ) -> FootprintServices:
        """Build services from *config* (``FootprintConfig.from_env()`` if omitted)."""
        config = config or FootprintConfig.from_env(**overrides)
        storage = storage if storage is not None else open_storage(config)
        _logger.debug("Opening footprint services (storage_dir=%s)", config.storage_dir)
        return cls(
            config=config,
            storage=storage,
            ledger=EmissionsLedger(storage, key=config.snapshot_key),
            accounts=AccountStore(
                storage,
                registry_key=config.registry_key,
                session_key=config.session_key,
            ),
        )

    def close(self) -> None:
        self.ledger.close()
        self.accounts.close()

    def __enter__(self) -> FootprintServices:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
