"""
AppNexus CLI — `appnexus` command.

Commands:
  appnexus auth login|status|logout    Session management
  appnexus deals list|get|delete       Deal service
  appnexus publishers list|get         Publisher service
  appnexus sites list|get              Site service
  appnexus placements list|get         Placement service
  appnexus members list|get            Member service
  appnexus segments list|get           Segment service
"""

import asyncio
import json
import os
from pathlib import Path

try:
    import click
    from rich.console import Console
    from rich.markup import escape
except ImportError:
    raise SystemExit("CLI requires extras: pip install appnexus-client[cli]")

from appnexus.client import AsyncAppNexus
from appnexus.errors import AppNexusError
from appnexus.log import configure_logging
from appnexus.transport.http import DEFAULT_BASE_URL

console = Console()
CONFIG_FILE = Path.home() / ".appnexus" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncAppNexus:
    cfg = _load_config()
    if not cfg.get("token") and not os.environ.get("APPNEXUS_PASSWORD"):
        console.print("[red]Not logged in. Run `appnexus auth login` first.[/red]")
        raise SystemExit(1)
    return AsyncAppNexus(
        base_url=os.environ.get("APPNEXUS_ENDPOINT") or cfg.get("endpoint", DEFAULT_BASE_URL),
        token=cfg.get("token"),
        member_id=cfg.get("member_id"),
    )


async def _prime(client: AsyncAppNexus) -> None:
    """Log in up front when a password is in the environment, so expired tokens renew."""
    password = os.environ.get("APPNEXUS_PASSWORD")
    username = os.environ.get("APPNEXUS_USERNAME") or _load_config().get("username")
    if password and username:
        await client.login(username, password)


def _run(coro):
    try:
        return asyncio.run(coro)
    except AppNexusError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log requests, rate-limit waits and re-logins.")
def main(verbose: bool):
    """AppNexus CLI: manage console inventory from the terminal."""
    configure_logging("debug" if verbose else "warning")


# Register subcommands from separate modules
from appnexus.cli.auth import auth
from appnexus.cli.resources import deals, members, placements, publishers, segments, sites

main.add_command(auth)
main.add_command(deals)
main.add_command(publishers)
main.add_command(sites)
main.add_command(placements)
main.add_command(members)
main.add_command(segments)


if __name__ == "__main__":
    main()
