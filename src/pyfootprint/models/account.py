"""Account registry records and operation results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pyfootprint.models._base import FootprintModel


class UserProfile(FootprintModel):
    """An account as exposed to callers and stored as the session record.

    Never carries the password. Keys added by profile updates that are not
    declared fields are kept as extras.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str
    name: str
    email: str
    user_type: str = "individual"
    created_at: str
    carbon_footprint: float = 0.0
    goals: list[Any] = Field(default_factory=list)
    achievements: list[Any] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _drop_password(cls, values: Any) -> Any:
        if cls is UserProfile and isinstance(values, dict) and "password" in values:
            return {key: value for key, value in values.items() if key != "password"}
        return values


class AccountRecord(UserProfile):
    """Full registry entry, including the (plaintext) password."""

    password: str

    def to_profile(self) -> UserProfile:
        return UserProfile.model_validate(self.model_dump(mode="json", by_alias=True, exclude={"password"}))


class OperationResult(BaseModel):
    """Outcome of an account operation.

    Business-rule failures are reported here instead of being raised.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    user: UserProfile | None = None
