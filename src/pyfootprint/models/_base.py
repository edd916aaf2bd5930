"""Base model for persisted pyfootprint records.

Persisted JSON uses camelCase keys (``totalEmissions``, ``userType``) while
the Python API uses snake_case. :class:`FootprintModel` bridges the two with
``alias_generator=to_camel`` and ``populate_by_name=True`` so records can be
built from either spelling.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FootprintModel(BaseModel):
    """Frozen model with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to the persisted (camelCase, JSON-compatible) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
