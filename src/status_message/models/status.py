"""
Status records and the controller's view snapshot.

Timestamps are kept exactly as the remote store reports them (nanoseconds).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_MESSAGE_LENGTH = 280


class StatusRecord(BaseModel):
    """A published status. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    message: str
    timestamp: int = 0
    author: Optional[str] = None


class FeedEntry(BaseModel):
    """An (account_id, status) pair from the public feed or a search."""

    model_config = ConfigDict(frozen=True)

    account_id: str
    status: StatusRecord

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        # Remote returns tuples as two-element arrays: [account_id, {message, timestamp}]
        if isinstance(data, (list, tuple)) and len(data) == 2:
            account_id, status = data
            if isinstance(status, dict):
                status = {**status, "author": status.get("author") or account_id}
            return {"account_id": account_id, "status": status}
        return data

    @property
    def message(self) -> str:
        return self.status.message


class ViewState(BaseModel):
    """Snapshot of everything the UI shows. Replaced wholesale, never patched."""

    model_config = ConfigDict(frozen=True)

    identity: Optional[str] = None
    current: Optional[StatusRecord] = None
    history: tuple[StatusRecord, ...] = ()
    feed: tuple[FeedEntry, ...] = ()
    search_results: tuple[FeedEntry, ...] = ()
    query: str = ""
    draft: str = ""
    settled: bool = True
    submitting: bool = False
    searching: bool = False
    notices: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def authenticated(self) -> bool:
        return self.identity is not None

    @property
    def remaining_chars(self) -> int:
        return MAX_MESSAGE_LENGTH - len(self.draft)
