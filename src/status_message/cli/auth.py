"""CLI: status-message auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from status_message.client import AsyncStatusClient
from status_message.contract import DEFAULT_CONTRACT_ID
from status_message.transport.http import DEFAULT_BASE_URL

console = Console()


def _load_config() -> dict:
    from status_message.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from status_message.cli.main import _save_config
    _save_config(cfg)


def _make_client(cfg: dict) -> AsyncStatusClient:
    from status_message.cli.main import _make_client
    return _make_client(cfg)


def _run(coro):
    from status_message.cli.main import _run
    return _run(coro)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--base-url", default=None, help="Contract gateway base URL")
@click.option("--contract", "contract_id", default=None, help="Status contract account")
def auth_login(base_url: Optional[str], contract_id: Optional[str]):
    """Sign in through the wallet."""

    async def _login():
        cfg = _load_config()
        url = base_url or cfg.get("base_url", DEFAULT_BASE_URL)
        contract = contract_id or cfg.get("contract_id", DEFAULT_CONTRACT_ID)
        client = AsyncStatusClient(base_url=url, contract_id=contract)
        try:
            with console.status("Requesting sign-in..."):
                request = await client.request_sign_in()
            console.print(f"Approve the sign-in in your wallet: [bold]{request['login_url']}[/bold]")
            click.confirm("Approved?", default=True, abort=True)

            with console.status("Completing sign-in..."):
                state = await client.complete_sign_in(request["request_token"])
            console.print(f"[green]Signed in as {state.identity}[/green]")

            _save_config({**cfg, "access_token": client.http.token, "account_id": state.identity,
                          "base_url": url, "contract_id": contract})
            console.print("[dim]Token saved to ~/.status-message/config.json[/dim]")
        finally:
            await client.close()

    _run(_login())


@auth.command("status")
def auth_status():
    """Show current auth status."""
    cfg = _load_config()
    if cfg.get("access_token"):
        console.print(f"[green]Logged in[/green] as {cfg.get('account_id', 'unknown')}")
    else:
        console.print("[yellow]Not logged in. Run `status-message auth login`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Revoke the wallet session and clear saved credentials."""
    cfg = _load_config()

    async def _logout():
        client = _make_client(cfg)
        try:
            await client.sign_out()
        finally:
            await client.close()

    try:
        if cfg.get("access_token"):
            _run(_logout())
    finally:
        # Local credentials go even if the gateway refused the revocation.
        _save_config({k: cfg[k] for k in ("base_url", "contract_id") if k in cfg})
    console.print("[green]Logged out.[/green]")
