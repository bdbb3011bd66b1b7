"""CLI: status-message show|set|delete|history|feed|search"""

import json
from typing import Optional

import click
from rich.console import Console

from status_message.cli.render import render_current, render_entries, render_history
from status_message.display import character_counter
from status_message.errors import RemoteReadError
from status_message.models.status import ViewState

console = Console()


def _get_client(require_login: bool = True):
    from status_message.cli.main import _get_client
    return _get_client(require_login)


def _run(coro):
    from status_message.cli.main import _run
    return _run(coro)


def _print_notices(state: ViewState) -> None:
    for notice in state.notices:
        console.print(f"[yellow]{notice}[/yellow]")


def _print_state(state: ViewState) -> None:
    console.print(render_current(state))
    console.print(render_history(state.history))
    console.print(render_entries(state.feed))
    _print_notices(state)


def _dump(records) -> None:
    click.echo(json.dumps([r.model_dump() for r in records], indent=2))


@click.command("show")
@click.option("--json-output", "--json", is_flag=True)
def show_cmd(json_output: bool):
    """Show your current status, history and the public feed."""
    client = _get_client()

    async def _show():
        try:
            with console.status("Loading..."):
                state = await client.sign_in()
        finally:
            await client.close()
        if json_output:
            click.echo(state.model_dump_json(
                include={"identity", "current", "history", "feed", "notices"}, indent=2))
            return
        _print_state(state)

    _run(_show())


@click.command("set")
@click.argument("message")
def set_cmd(message: str):
    """Publish or update your status (max 280 characters)."""
    client = _get_client()

    async def _set():
        try:
            with console.status("Loading..."):
                await client.sign_in()
            with console.status(f"Publishing ({character_counter(message)})..."):
                await client.submit(message)
            state = client.state
        finally:
            await client.close()
        console.print(render_current(state))
        _print_notices(state)

    _run(_set())


@click.command("delete")
def delete_cmd():
    """Delete your current status. History is kept."""
    client = _get_client()

    async def _delete():
        try:
            with console.status("Loading..."):
                await client.sign_in()
            with console.status("Deleting..."):
                await client.delete_status()
            state = client.state
        finally:
            await client.close()
        console.print("[green]Status deleted.[/green]")
        console.print(render_current(state))
        _print_notices(state)

    _run(_delete())


@click.command("history")
@click.argument("account_id", required=False)
@click.option("--json-output", "--json", is_flag=True)
def history_cmd(account_id: Optional[str], json_output: bool):
    """Status history of an account (defaults to yours)."""
    client = _get_client(require_login=account_id is None)

    async def _history():
        account = account_id or _get_saved_account()
        try:
            records = await client.contract.get_status_history(account)
        except Exception as e:
            raise RemoteReadError("history", f"Could not load history: {e}") from e
        finally:
            await client.close()
        if json_output:
            _dump(records)
            return
        console.print(render_history(records, title=f"History of {account}"))

    _run(_history())


@click.command("feed")
@click.option("--json-output", "--json", is_flag=True)
def feed_cmd(json_output: bool):
    """Public feed of recent statuses."""
    client = _get_client(require_login=False)

    async def _feed():
        try:
            entries = await client.contract.get_public_feed()
        except Exception as e:
            raise RemoteReadError("feed", f"Could not load feed: {e}") from e
        finally:
            await client.close()
        if json_output:
            _dump(entries)
            return
        console.print(render_entries(entries))

    _run(_feed())


@click.command("search")
@click.argument("keyword")
@click.option("--json-output", "--json", is_flag=True)
def search_cmd(keyword: str, json_output: bool):
    """Search published statuses."""
    client = _get_client(require_login=False)

    async def _search():
        try:
            results = await client.search(keyword)
        finally:
            await client.close()
        if json_output:
            _dump(results)
            return
        console.print(render_entries(results, title=f"Results for {keyword!r}"))

    _run(_search())


def _get_saved_account() -> str:
    from status_message.cli.main import _load_config
    return _load_config().get("account_id", "")
