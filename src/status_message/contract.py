"""
Status contract API: the six remote store operations.

View methods are free and unauthenticated. Change methods are ledger writes:
they need a signed-in account and carry a gas budget that is passed through
to the gateway untouched.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from status_message.models.events import RemoteMethod
from status_message.models.status import FeedEntry, StatusRecord
from status_message.transport.http import HttpClient

DEFAULT_CONTRACT_ID = "status-message.testnet"
# 3 * 10^13 gas: generous ceiling for a single set/delete.
DEFAULT_GAS = 30_000_000_000_000


class RemoteStore(Protocol):
    """What the synchronization core needs from the remote store."""

    async def get_status(self, account_id: str) -> Optional[StatusRecord]: ...

    async def get_status_history(self, account_id: str) -> list[StatusRecord]: ...

    async def get_public_feed(self) -> list[FeedEntry]: ...

    async def search_statuses(self, keyword: str) -> list[FeedEntry]: ...

    async def set_status(self, message: str, account_id: Optional[str] = None,
                         gas: int = DEFAULT_GAS) -> dict[str, Any]: ...

    async def delete_status(self, gas: int = DEFAULT_GAS) -> dict[str, Any]: ...


class StatusContract:
    def __init__(self, http: HttpClient, contract_id: str = DEFAULT_CONTRACT_ID):
        self._http = http
        self._contract_id = contract_id

    @property
    def contract_id(self) -> str:
        return self._contract_id

    async def _view(self, method: str, args: Optional[dict[str, Any]] = None) -> Any:
        return await self._http.post(
            f"/v1/contracts/{self._contract_id}/view/{method}", args or {}, authenticated=False,
        )

    async def _call(self, method: str, args: dict[str, Any], gas: int) -> dict[str, Any]:
        result = await self._http.post(
            f"/v1/contracts/{self._contract_id}/call/{method}",
            {"args": args, "gas": str(gas)},
        )
        return result if isinstance(result, dict) else {"result": result}

    async def get_status(self, account_id: str) -> Optional[StatusRecord]:
        data = await self._view(RemoteMethod.GET_STATUS, {"account_id": account_id})
        if data is None:
            return None
        return StatusRecord.model_validate({**data, "author": account_id})

    async def get_status_history(self, account_id: str) -> list[StatusRecord]:
        data = await self._view(RemoteMethod.GET_STATUS_HISTORY, {"account_id": account_id})
        return [StatusRecord.model_validate({**item, "author": account_id}) for item in data or []]

    async def get_public_feed(self) -> list[FeedEntry]:
        data = await self._view(RemoteMethod.GET_PUBLIC_FEED)
        return [FeedEntry.model_validate(item) for item in data or []]

    async def search_statuses(self, keyword: str) -> list[FeedEntry]:
        data = await self._view(RemoteMethod.SEARCH_STATUSES, {"keyword": keyword})
        return [FeedEntry.model_validate(item) for item in data or []]

    async def set_status(self, message: str, account_id: Optional[str] = None,
                         gas: int = DEFAULT_GAS) -> dict[str, Any]:
        args: dict[str, Any] = {"message": message}
        if account_id:
            args["account_id"] = account_id
        return await self._call(RemoteMethod.SET_STATUS, args, gas)

    async def delete_status(self, gas: int = DEFAULT_GAS) -> dict[str, Any]:
        return await self._call(RemoteMethod.DELETE_STATUS, {}, gas)
