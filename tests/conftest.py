"""Shared fixtures: an in-memory status contract with controllable timing."""

import asyncio
from typing import Any, Optional

import pytest

from status_message import DEFAULT_GAS, StatusRecord, FeedEntry, SyncController

ALICE = "alice.near"
BOB = "bob.near"

HISTORY_LIMIT = 10
FEED_LIMIT = 50


class FakeStore:
    """Behaves like the deployed status contract.

    ``hold(method)`` or ``hold(method, first_arg)`` returns an Event; matching
    calls block until it is set. ``fail(method, exc)`` makes calls raise.
    Reads return a snapshot taken when the call is released, not when it is
    issued.
    """

    def __init__(self) -> None:
        self.records: dict[str, StatusRecord] = {}
        self.history: dict[str, list[StatusRecord]] = {}
        self.feed: list[FeedEntry] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.gas_seen: list[int] = []
        self.signer: Optional[str] = None
        self.clock = 1_700_000_000_000_000_000
        self._gates: dict[Any, asyncio.Event] = {}
        self._failures: dict[str, Exception] = {}

    def hold(self, method: str, arg: Any = None) -> asyncio.Event:
        event = asyncio.Event()
        self._gates[method if arg is None else (method, arg)] = event
        return event

    def fail(self, method: str, exc: Exception) -> None:
        self._failures[method] = exc

    def recover(self, method: str) -> None:
        self._failures.pop(method, None)

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def methods(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def _enter(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        gate = self._gates.get((method, args[0])) if args else None
        gate = gate or self._gates.get(method)
        if gate is not None:
            await gate.wait()
        exc = self._failures.get(method)
        if exc is not None:
            raise exc

    def publish(self, account_id: str, message: str) -> StatusRecord:
        """Write directly, bypassing the client (another user's activity)."""
        self.clock += 1_000_000_000
        record = StatusRecord(message=message, timestamp=self.clock, author=account_id)
        self.records[account_id] = record
        history = self.history.setdefault(account_id, [])
        history.append(record)
        del history[:-HISTORY_LIMIT]
        self.feed.append(FeedEntry(account_id=account_id, status=record))
        del self.feed[:-FEED_LIMIT]
        return record

    async def get_status(self, account_id: str) -> Optional[StatusRecord]:
        await self._enter("get_status", account_id)
        return self.records.get(account_id)

    async def get_status_history(self, account_id: str) -> list[StatusRecord]:
        await self._enter("get_status_history", account_id)
        return list(self.history.get(account_id, []))

    async def get_public_feed(self) -> list[FeedEntry]:
        await self._enter("get_public_feed")
        return list(self.feed)

    async def search_statuses(self, keyword: str) -> list[FeedEntry]:
        await self._enter("search_statuses", keyword)
        return [entry for entry in self.feed if keyword in entry.status.message]

    async def set_status(self, message: str, account_id: Optional[str] = None,
                         gas: int = DEFAULT_GAS) -> dict[str, Any]:
        await self._enter("set_status", message)
        self.gas_seen.append(gas)
        assert len(message) <= 280, "Message must be 280 characters or less"
        record = self.publish(account_id or self.signer, message)
        return {"transaction_hash": f"tx-{record.timestamp}"}

    async def delete_status(self, gas: int = DEFAULT_GAS) -> dict[str, Any]:
        await self._enter("delete_status")
        self.gas_seen.append(gas)
        self.records.pop(self.signer, None)
        return {"transaction_hash": f"tx-delete-{self.clock}"}


async def drain(rounds: int = 10) -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def store() -> FakeStore:
    s = FakeStore()
    s.signer = ALICE
    return s


@pytest.fixture
def controller(store: FakeStore) -> SyncController:
    return SyncController(store)
