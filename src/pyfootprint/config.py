"""Library configuration for pyfootprint."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyfootprint._constants import REGISTRY_KEY, SESSION_KEY, SNAPSHOT_KEY
from pyfootprint.exceptions import FootprintConfigError


@dataclasses.dataclass(frozen=True)
class FootprintConfig:
    """Library configuration.

    Parameters
    ----------
    storage_dir : str or None
        Directory holding one ``<key>.json`` file per persisted record.
        ``None`` keeps everything in memory for the lifetime of the process.
    snapshot_key : str
        Record key of the emissions snapshot.
    registry_key : str
        Record key of the account registry.
    session_key : str
        Record key of the active session.
    environment_interval : float
        Seconds between two simulated environment readings.
    """

    storage_dir: str | None = None
    snapshot_key: str = SNAPSHOT_KEY
    registry_key: str = REGISTRY_KEY
    session_key: str = SESSION_KEY
    environment_interval: float = 5.0

    @classmethod
    def from_env(cls, **overrides: Any) -> FootprintConfig:
        """Create configuration from ``FOOTPRINT_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        FootprintConfigError
            If ``FOOTPRINT_ENVIRONMENT_INTERVAL`` is not a positive number.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "FOOTPRINT_STORAGE_DIR": "storage_dir",
            "FOOTPRINT_SNAPSHOT_KEY": "snapshot_key",
            "FOOTPRINT_REGISTRY_KEY": "registry_key",
            "FOOTPRINT_SESSION_KEY": "session_key",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None and val.strip():
                config_kwargs[field_name] = val.strip()

        interval_env = env.get("FOOTPRINT_ENVIRONMENT_INTERVAL")
        if interval_env is not None and "environment_interval" not in overrides:
            try:
                interval = float(interval_env)
            except ValueError as exc:
                raise FootprintConfigError(f"FOOTPRINT_ENVIRONMENT_INTERVAL must be a number, got {interval_env!r}") from exc
            if interval <= 0:
                raise FootprintConfigError(f"FOOTPRINT_ENVIRONMENT_INTERVAL must be positive, got {interval}")
            config_kwargs["environment_interval"] = interval

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
