"""CLI: appnexus auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from appnexus.client import AsyncAppNexus
from appnexus.transport.http import DEFAULT_BASE_URL

console = Console()


def _load_config() -> dict:
    from appnexus.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from appnexus.cli.main import _save_config
    _save_config(cfg)


def _run(coro):
    from appnexus.cli.main import _run
    return _run(coro)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--endpoint", default=None, envvar="APPNEXUS_ENDPOINT", help="AppNexus API endpoint")
@click.option("--username", default=None, envvar="APPNEXUS_USERNAME")
@click.option("--password", default=None, envvar="APPNEXUS_PASSWORD")
@click.option("--member-id", default=None, type=int, help="Default member for segment calls")
def auth_login(endpoint: Optional[str], username: Optional[str], password: Optional[str], member_id: Optional[int]):
    """Log in with username and password."""

    async def _login():
        cfg = _load_config()
        url = endpoint or cfg.get("endpoint", DEFAULT_BASE_URL)
        user = username or click.prompt("Username", default=cfg.get("username"))
        secret = password or click.prompt("Password", hide_input=True)

        async with AsyncAppNexus(base_url=url) as client:
            with console.status("Logging in..."):
                token = await client.login(user, secret)
        console.print(f"[green]Logged in as {user}[/green]")

        _save_config({**cfg, "endpoint": url, "username": user, "token": token,
                      "member_id": member_id or cfg.get("member_id")})
        console.print("[dim]Token saved to ~/.appnexus/config.json[/dim]")

    _run(_login())


@auth.command("status")
def auth_status():
    """Show current auth status."""
    cfg = _load_config()
    if cfg.get("token"):
        console.print(f"[green]Logged in[/green] as {cfg.get('username', 'unknown')} at {cfg.get('endpoint')}")
    else:
        console.print("[yellow]Not logged in. Run `appnexus auth login`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Clear the saved token."""
    cfg = _load_config()
    cfg.pop("token", None)
    _save_config(cfg)
    console.print("[green]Logged out.[/green]")
