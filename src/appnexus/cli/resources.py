"""CLI: appnexus <resource> list|get, one command group per resource service."""

import json
from typing import Callable, Optional

import click
from rich.console import Console
from rich.table import Table

from appnexus.client import AsyncAppNexus
from appnexus.models.envelope import ListOptions

console = Console()


def _get_client() -> AsyncAppNexus:
    from appnexus.cli.main import _get_client
    return _get_client()


def _run(coro):
    from appnexus.cli.main import _run
    return _run(coro)


def _prime(client: AsyncAppNexus):
    from appnexus.cli.main import _prime
    return _prime(client)


def _print_page(title: str, page, columns: list[str], json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps([item.model_dump(mode="json", exclude_none=True) for item in page.items], indent=2))
        return
    total = f"{page.count} total" if page.count is not None else f"{len(page.items)} shown"
    table = Table(title=f"{title} ({total})")
    for col in columns:
        table.add_column(col.upper() if col == "id" else col.replace("_", " ").title(),
                         style="bold" if col == "id" else None)
    for item in page.items:
        table.add_row(*[str(getattr(item, col) if getattr(item, col) is not None else "") for col in columns])
    console.print(table)


def _resource_group(
    name: str,
    service: Callable[[AsyncAppNexus], object],
    columns: list[str],
    scope: Optional[str] = None,
    deletable: bool = False,
) -> click.Group:
    """Build `list` / `get` (and optionally `delete`) for one service.

    `scope` names the parent id the service is keyed on (publisher_id, member_id).
    """

    @click.group(name=name, help=f"{name.title()} service.")
    def group():
        pass

    scope_option = click.option(f"--{scope.replace('_', '-')}", scope, type=int, default=None) if scope else None

    def with_scope(f):
        return scope_option(f) if scope_option else f

    @group.command("list")
    @click.option("--start", "start_element", type=int, default=None)
    @click.option("--limit", "num_elements", type=int, default=None)
    @click.option("--active", is_flag=True)
    @click.option("--json-output", "--json", is_flag=True)
    @with_scope
    def list_cmd(start_element, num_elements, active, json_output, **kwargs):
        """List items."""

        async def _list():
            options = ListOptions(start_element=start_element, num_elements=num_elements, active=active or None)
            async with _get_client() as client:
                await _prime(client)
                page = await service(client).list(options=options, **kwargs)
            _print_page(name.title(), page, columns, json_output)

        _run(_list())

    @group.command("get")
    @click.argument("item_id", type=int)
    @with_scope
    def get_cmd(item_id, **kwargs):
        """Show one item as JSON."""

        async def _get():
            async with _get_client() as client:
                await _prime(client)
                item = await service(client).get(item_id, **kwargs)
            click.echo(item.model_dump_json(indent=2, exclude_none=True))

        _run(_get())

    if deletable:
        @group.command("delete")
        @click.argument("item_id", type=int)
        @with_scope
        @click.confirmation_option(prompt=f"Delete this {name.rstrip('s')}?")
        def delete_cmd(item_id, **kwargs):
            """Delete an item."""

            async def _delete():
                async with _get_client() as client:
                    await _prime(client)
                    with console.status("Deleting..."):
                        await service(client).delete(item_id, **kwargs)
                console.print(f"[green]{name.rstrip('s').title()} {item_id} deleted.[/green]")

            _run(_delete())

    return group


deals = _resource_group("deals", lambda c: c.deals, ["id", "code", "name", "active", "floor_price"], deletable=True)
publishers = _resource_group("publishers", lambda c: c.publishers, ["id", "code", "name", "state"])
sites = _resource_group("sites", lambda c: c.sites, ["id", "publisher_id", "name", "url", "state"], scope="publisher_id")
placements = _resource_group("placements", lambda c: c.placements, ["id", "publisher_id", "site_id", "code", "name"],
                                 scope="publisher_id")
members = _resource_group("members", lambda c: c.members, ["id", "name", "state"])
segments = _resource_group("segments", lambda c: c.segments, ["id", "code", "short_name", "state"], scope="member_id")
