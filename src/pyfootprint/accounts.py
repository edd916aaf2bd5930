"""Account registry and active session.

Follows the same persistence contract as the emissions ledger: every
change is written to storage synchronously, then listeners are notified.

Passwords are stored and compared in plaintext. This is adequate for a
local, single-user demo and is not a security boundary.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from pyfootprint._constants import REGISTRY_KEY, SESSION_KEY
from pyfootprint._redact import redact_for_log
from pyfootprint.models.account import AccountRecord, OperationResult, UserProfile
from pyfootprint.storage import KeyValueStorage

_logger = logging.getLogger(__name__)

SessionListener = Callable[[UserProfile | None], None]

MSG_REGISTERED = "Registration successful!"
MSG_DUPLICATE_EMAIL = "User with this email already exists"
MSG_LOGGED_IN = "Login successful!"
MSG_INVALID_CREDENTIALS = "Invalid email or password"
MSG_NOT_LOGGED_IN = "No user logged in"
MSG_USER_NOT_FOUND = "User not found"
MSG_PROFILE_UPDATED = "Profile updated successfully!"
MSG_INVALID_UPDATE = "Invalid profile update"
MSG_INVALID_REGISTRATION = "Invalid registration details"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _iso_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _wire_keys(updates: Mapping[str, Any]) -> dict[str, Any]:
    """Map snake_case field names in *updates* to their persisted aliases."""
    fields = AccountRecord.model_fields
    wired: dict[str, Any] = {}
    for key, value in updates.items():
        name = str(key)
        field = fields.get(name)
        wired[field.alias if field is not None and field.alias else name] = value
    return wired


class AccountStore:
    """Registry of accounts plus the single active session.

    Usage::

        accounts = AccountStore(FileStorage("data"))
        result = accounts.register("Ada", "ada@example.com", "pw")
        if not result.success:
            show_error(result.message)
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        registry_key: str = REGISTRY_KEY,
        session_key: str = SESSION_KEY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._registry_key = registry_key
        self._session_key = session_key
        self._clock = clock
        self._listeners: list[SessionListener] = []
        self._registry: list[AccountRecord] = self._load_registry()
        self._current: UserProfile | None = self._load_session()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def current_user(self) -> UserProfile | None:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    @property
    def accounts(self) -> tuple[UserProfile, ...]:
        return tuple(record.to_profile() for record in self._registry)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        self._listeners.clear()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._current)
            except Exception:
                _logger.debug("Session listener failed", exc_info=True)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def register(
        self,
        name: str,
        email: str,
        password: str,
        user_type: str = "individual",
    ) -> OperationResult:
        if self._find_by_email(email) is not None:
            return OperationResult(success=False, message=MSG_DUPLICATE_EMAIL)

        now = self._clock()
        try:
            record = AccountRecord(
                id=self._new_id(now),
                name=name,
                email=email,
                password=password,
                user_type=user_type,
                created_at=_iso_timestamp(now),
            )
        except ValidationError:
            _logger.debug("Rejected registration for %r", email, exc_info=True)
            return OperationResult(success=False, message=MSG_INVALID_REGISTRATION)

        self._registry.append(record)
        self._persist_registry()
        _logger.debug("Registered account %s", redact_for_log(record.to_wire()))

        profile = record.to_profile()
        self._set_session(profile)
        return OperationResult(success=True, message=MSG_REGISTERED, user=profile)

    def login(self, email: str, password: str) -> OperationResult:
        # Unknown e-mail and wrong password share one message.
        for record in self._registry:
            if record.email == email and record.password == password:
                profile = record.to_profile()
                self._set_session(profile)
                _logger.debug("Account %s logged in", record.id)
                return OperationResult(success=True, message=MSG_LOGGED_IN, user=profile)
        return OperationResult(success=False, message=MSG_INVALID_CREDENTIALS)

    def logout(self) -> None:
        self._current = None
        self._storage.remove(self._session_key)
        self._notify()

    def update_profile(self, updates: Mapping[str, Any]) -> OperationResult:
        """Shallow-merge *updates* into the logged-in account.

        ``id`` cannot be changed and is dropped from *updates*.
        """
        current = self._current
        if current is None:
            return OperationResult(success=False, message=MSG_NOT_LOGGED_IN)

        index = self._index_of(current.id)
        if index is None:
            return OperationResult(success=False, message=MSG_USER_NOT_FOUND)

        if not isinstance(updates, Mapping):
            _logger.debug("Ignoring profile update that is not a mapping: %r", type(updates).__name__)
            return OperationResult(success=False, message=MSG_INVALID_UPDATE)

        patch = _wire_keys(updates)
        if patch.pop("id", None) is not None:
            _logger.debug("Ignoring attempt to change account id %s", current.id)

        new_email = patch.get("email")
        if new_email is not None:
            other = self._find_by_email(new_email)
            if other is not None and other.id != current.id:
                return OperationResult(success=False, message=MSG_DUPLICATE_EMAIL)

        merged = {**self._registry[index].to_wire(), **patch}
        try:
            record = AccountRecord.model_validate(merged)
        except ValidationError:
            _logger.debug("Rejected profile update %s", redact_for_log(patch), exc_info=True)
            return OperationResult(success=False, message=MSG_INVALID_UPDATE)

        self._registry[index] = record
        self._persist_registry()

        profile = record.to_profile()
        self._set_session(profile)
        return OperationResult(success=True, message=MSG_PROFILE_UPDATED, user=profile)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find_by_email(self, email: str) -> AccountRecord | None:
        for record in self._registry:
            if record.email == email:
                return record
        return None

    def _index_of(self, account_id: str) -> int | None:
        for index, record in enumerate(self._registry):
            if record.id == account_id:
                return index
        return None

    def _new_id(self, now: datetime) -> str:
        """Epoch milliseconds, bumped until unused."""
        candidate = int(now.timestamp() * 1000)
        taken = {record.id for record in self._registry}
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def _set_session(self, profile: UserProfile) -> None:
        self._current = profile
        self._storage.set(self._session_key, json.dumps(profile.to_wire()))
        self._notify()

    def _persist_registry(self) -> None:
        payload = [record.to_wire() for record in self._registry]
        self._storage.set(self._registry_key, json.dumps(payload))

    def _load_registry(self) -> list[AccountRecord]:
        raw = self._storage.get(self._registry_key)
        if raw is None:
            return []
        try:
            entries = json.loads(raw)
        except ValueError:
            _logger.warning("Discarding unparseable account registry under %r", self._registry_key)
            return []
        if not isinstance(entries, list):
            _logger.warning("Discarding account registry under %r: not a list", self._registry_key)
            return []

        registry: list[AccountRecord] = []
        for position, entry in enumerate(entries):
            try:
                registry.append(AccountRecord.model_validate(entry))
            except ValidationError:
                _logger.warning("Skipping invalid account record %d under %r", position, self._registry_key)
        return registry

    def _load_session(self) -> UserProfile | None:
        raw = self._storage.get(self._session_key)
        if raw is None:
            return None
        try:
            return UserProfile.model_validate(json.loads(raw))
        except (ValueError, ValidationError):
            _logger.warning("Discarding unparseable session under %r", self._session_key)
            self._storage.remove(self._session_key)
            return None
