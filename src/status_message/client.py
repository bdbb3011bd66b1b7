"""
AsyncStatusClient / StatusClient — main SDK clients.
"""

import asyncio
from typing import Any, Optional

from status_message.aggregator import RefreshResult
from status_message.contract import DEFAULT_CONTRACT_ID, DEFAULT_GAS, StatusContract
from status_message.controller import SyncController
from status_message.errors import AuthError
from status_message.models.status import FeedEntry, ViewState
from status_message.transport.http import DEFAULT_BASE_URL, HttpClient
from status_message.wallet import WalletAuth
from status_message.writer import WriteResult

APP_TITLE = "Status Message"


class AsyncStatusClient:
    """Async status client (primary)."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        account_id: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        contract_id: str = DEFAULT_CONTRACT_ID,
        gas: int = DEFAULT_GAS,
        timeout: float = 30.0,
        http: Optional[HttpClient] = None,
    ):
        self._account_id = account_id
        self.http = http or HttpClient(base_url=base_url, token=access_token, timeout=timeout)
        if access_token:
            self.http.set_token(access_token)
        self.wallet = WalletAuth(self.http)
        self.contract = StatusContract(self.http, contract_id=contract_id)
        self.controller = SyncController(self.contract, gas=gas)

    @property
    def state(self) -> ViewState:
        return self.controller.state

    @property
    def authenticated(self) -> bool:
        return self.controller.gate.is_authenticated()

    async def request_sign_in(self) -> dict[str, Any]:
        """Step 1 of wallet sign-in. Returns request_token and login_url."""
        return await self.wallet.request_sign_in(self.contract.contract_id, APP_TITLE)

    async def complete_sign_in(self, request_token: str) -> ViewState:
        """Step 2 of wallet sign-in. Authenticates the controller and loads all views."""
        result = await self.wallet.complete_sign_in(request_token)
        self._account_id = result["account_id"]
        return await self.controller.sign_in(self._account_id)

    async def sign_in(self, account_id: Optional[str] = None) -> ViewState:
        """Authenticate with an already-issued token (e.g. loaded from config)."""
        account = account_id or self._account_id
        if not account:
            raise AuthError("account_id required. Run the sign-in flow first.")
        self._account_id = account
        return await self.controller.sign_in(account)

    async def sign_out(self) -> ViewState:
        # Views reset first so nothing late from the wallet round-trip can repopulate them.
        self.controller.sign_out()
        self._account_id = None
        await self.wallet.sign_out()
        return self.controller.state

    async def refresh(self) -> RefreshResult:
        return await self.controller.refresh()

    async def submit(self, message: Optional[str] = None) -> WriteResult:
        return await self.controller.submit(message)

    async def delete_status(self) -> WriteResult:
        return await self.controller.delete_status()

    async def search(self, keyword: str) -> tuple[FeedEntry, ...]:
        return await self.controller.search(keyword)

    async def close(self) -> None:
        await self.http.close()


class StatusClient:
    """Sync wrapper around AsyncStatusClient. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncStatusClient(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def state(self) -> ViewState:
        return self._async.state

    @property
    def authenticated(self) -> bool:
        return self._async.authenticated

    @property
    def contract(self) -> StatusContract:
        return self._async.contract

    def request_sign_in(self) -> dict[str, Any]:
        return self._run(self._async.request_sign_in())

    def complete_sign_in(self, request_token: str) -> ViewState:
        return self._run(self._async.complete_sign_in(request_token))

    def sign_in(self, account_id: Optional[str] = None) -> ViewState:
        return self._run(self._async.sign_in(account_id))

    def sign_out(self) -> ViewState:
        return self._run(self._async.sign_out())

    def refresh(self) -> RefreshResult:
        return self._run(self._async.refresh())

    def submit(self, message: Optional[str] = None) -> WriteResult:
        return self._run(self._async.submit(message))

    def delete_status(self) -> WriteResult:
        return self._run(self._async.delete_status())

    def search(self, keyword: str) -> tuple[FeedEntry, ...]:
        return self._run(self._async.search(keyword))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
