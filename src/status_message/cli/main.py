"""
Status message CLI — `status-message` command.

Commands:
  status-message auth login        Wallet sign-in
  status-message show              Current status, history and feed
  status-message set <message>     Publish or update your status
  status-message delete            Remove your current status
  status-message history [acct]    Status history of an account
  status-message feed              Public feed
  status-message search <keyword>  Search published statuses
"""

import asyncio
import json
from pathlib import Path

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install status-message[cli]")

from status_message import __version__
from status_message.client import AsyncStatusClient
from status_message.contract import DEFAULT_CONTRACT_ID
from status_message.errors import StatusMessageError
from status_message.transport.http import DEFAULT_BASE_URL

console = Console()
CONFIG_FILE = Path.home() / ".status-message" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _make_client(cfg: dict) -> AsyncStatusClient:
    return AsyncStatusClient(
        access_token=cfg.get("access_token"),
        account_id=cfg.get("account_id"),
        base_url=cfg.get("base_url", DEFAULT_BASE_URL),
        contract_id=cfg.get("contract_id", DEFAULT_CONTRACT_ID),
    )


def _get_client(require_login: bool = True) -> AsyncStatusClient:
    cfg = _load_config()
    if require_login and (not cfg.get("access_token") or not cfg.get("account_id")):
        console.print("[red]Not logged in. Run `status-message auth login` first.[/red]")
        raise SystemExit(1)
    return _make_client(cfg)


def _run(coro):
    try:
        return asyncio.run(coro)
    except StatusMessageError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option(__version__)
def main():
    """Status message CLI — publish a status, follow the public feed."""


# Register subcommands from separate modules
from status_message.cli.auth import auth
from status_message.cli.status import show_cmd, set_cmd, delete_cmd, history_cmd, feed_cmd, search_cmd

main.add_command(auth)
main.add_command(show_cmd)
main.add_command(set_cmd)
main.add_command(delete_cmd)
main.add_command(history_cmd)
main.add_command(feed_cmd)
main.add_command(search_cmd)


if __name__ == "__main__":
    main()
