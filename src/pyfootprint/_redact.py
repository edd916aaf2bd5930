"""Keep account passwords out of DEBUG logs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_PASSWORD_KEYS: frozenset[str] = frozenset({"password", "newpassword", "currentpassword"})


def redact_for_log(value: Any) -> Any:
    """Return a copy of *value* with every password field masked."""
    if isinstance(value, Mapping):
        return {
            str(key): "<redacted>" if str(key).lower() in _PASSWORD_KEYS else redact_for_log(item)
            for key, item in value.items()
        }
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [redact_for_log(item) for item in value]
    return value
