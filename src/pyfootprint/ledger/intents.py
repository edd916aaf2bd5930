"""Ledger intents.

Each intent has a fixed shape and a ``kind`` tag, so presentation code can
dispatch either model instances or plain dicts (e.g. decoded from a form
post) and the ledger knows exactly which keys are allowed.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from pyfootprint.normalize import coerce_quantity

_logger = logging.getLogger(__name__)


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SetElectricity(_Intent):
    """Replace the electricity reading."""

    kind: Literal["set_electricity"] = "set_electricity"
    kwh: float = 0.0

    @field_validator("kwh", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return coerce_quantity(value)


class SetTransportMode(_Intent):
    """Replace the reading of a single transport mode.

    ``type`` picks the emissions factor; when omitted the mode name does.
    """

    kind: Literal["set_transport_mode"] = "set_transport_mode"
    mode: str
    km: float = 0.0
    type: str | None = None

    @field_validator("mode")
    @classmethod
    def _normalize_mode(cls, value: str) -> str:
        mode = value.strip()
        if not mode:
            raise ValueError("mode must be non-empty")
        return mode

    @field_validator("km", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return coerce_quantity(value)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value


class SetWaste(_Intent):
    """Replace the waste reading."""

    kind: Literal["set_waste"] = "set_waste"
    kg: float = 0.0

    @field_validator("kg", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return coerce_quantity(value)


class Reset(_Intent):
    """Discard every reading and restore the default snapshot."""

    kind: Literal["reset"] = "reset"


Intent = Annotated[
    SetElectricity | SetTransportMode | SetWaste | Reset,
    Field(discriminator="kind"),
]

_INTENT_ADAPTER: TypeAdapter[Intent] = TypeAdapter(Intent)


def parse_intent(data: Any) -> Intent | None:
    """Validate a dict into an intent, or return ``None`` if it is malformed."""
    if isinstance(data, (SetElectricity, SetTransportMode, SetWaste, Reset)):
        return data
    try:
        return _INTENT_ADAPTER.validate_python(data)
    except ValidationError:
        _logger.debug("Ignoring malformed intent: %r", data, exc_info=True)
        return None
