"""
Wallet sign-in, the external identity provider.

Two-step flow: request a sign-in (the user approves it in the wallet UI at
``login_url``), then complete it to receive the account id and access token.
"""

from typing import Any

from status_message.transport.http import HttpClient
from status_message.errors import AuthError


class WalletAuth:
    def __init__(self, http: HttpClient):
        self._http = http

    async def request_sign_in(self, app_name: str, display_label: str) -> dict[str, Any]:
        """Step 1: ask the wallet to authorize ``app_name``. Returns request_token and login_url."""
        try:
            return await self._http.post(
                "/v1/wallet/sign-in/request",
                {"contract_id": app_name, "title": display_label},
                authenticated=False,
            )
        except Exception as e:
            raise AuthError(f"Failed to request sign-in: {e}")

    async def complete_sign_in(self, request_token: str) -> dict[str, Any]:
        """Step 2: exchange the approved request for account_id and access_token."""
        try:
            result = await self._http.post(
                "/v1/wallet/sign-in/complete",
                {"request_token": request_token},
                authenticated=False,
            )
        except Exception as e:
            raise AuthError(f"Failed to complete sign-in: {e}")
        if not result or not result.get("account_id") or not result.get("access_token"):
            raise AuthError("Wallet did not return an account")
        self._http.set_token(result["access_token"])
        return result

    async def sign_out(self) -> None:
        if not self._http.token:
            return
        try:
            await self._http.post("/v1/wallet/sign-out")
        except Exception as e:
            raise AuthError(f"Failed to sign out: {e}")
        finally:
            self._http.set_token(None)
