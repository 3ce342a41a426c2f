"""In-memory collaborators standing in for the host application's objects."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@dataclass
class FakeAccount:
    """Account draft / record with the attributes the interceptors touch."""

    handle: str | None = None
    address: str | None = None
    confirmed_at: datetime | None = None
    persisted: bool = False
    id: int | None = None
    settings: dict[str, Any] = field(default_factory=dict)
    skip_calls: int = 0

    def skip_confirmation(self) -> None:
        self.skip_calls += 1
        if self.confirmed_at is None:
            self.confirmed_at = FIXED_NOW


class InMemoryAccountRepository:
    """Dict-backed account storage with change tracking."""

    def __init__(self) -> None:
        self.rows: dict[int, FakeAccount] = {}
        self.save_count = 0
        self.fail_on_save: int | None = None
        self._next_id = 1

    def _snapshot(self, account: FakeAccount) -> FakeAccount:
        snap = copy.deepcopy(account)
        snap.skip_calls = 0
        return snap

    def create(self, account: FakeAccount) -> FakeAccount:
        account.id = self._next_id
        self._next_id += 1
        account.persisted = True
        self.rows[account.id] = self._snapshot(account)
        return account

    def has_changes(self, account: FakeAccount) -> bool:
        stored = self.rows.get(account.id) if account.id is not None else None
        if stored is None:
            return True
        return (stored.address, stored.confirmed_at, stored.settings) != (
            account.address,
            account.confirmed_at,
            account.settings,
        )

    def save(self, account: FakeAccount) -> None:
        self.save_count += 1
        if self.fail_on_save is not None and self.save_count >= self.fail_on_save:
            raise RuntimeError("database unavailable")
        if account.id is None:
            self.create(account)
        else:
            self.rows[account.id] = self._snapshot(account)

    def reload(self, account: FakeAccount) -> FakeAccount:
        assert account.id is not None
        return copy.deepcopy(self.rows[account.id])


class InMemorySettingsStore:
    """Applies key-path updates to ``account.settings``."""

    def __init__(self) -> None:
        self.updates: list[dict[str, Any]] = []

    def update(self, account: FakeAccount, values: dict[str, Any]) -> None:
        self.updates.append(values)
        account.settings.update(values)


@dataclass
class FakeClient:
    uid: str
    name: str = "Test App"


@dataclass
class FakeAuthorizationRequest:
    client: FakeClient | None = None
    client_id: str | None = None


class FakeClientRegistry:
    def __init__(self, *clients: FakeClient) -> None:
        self._clients = {c.uid: c for c in clients}
        self.lookups: list[str] = []

    def find_by_uid(self, uid: str) -> FakeClient | None:
        self.lookups.append(uid)
        return self._clients.get(uid)
