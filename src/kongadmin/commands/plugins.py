"""Plugin commands -- the ``kongadmin plugins`` sub-command group.

Every command resolves the active profile, opens a
:class:`~kongadmin.client.SyncClient`, and calls the matching
:class:`~kongadmin.services.PluginService` operation. Library errors are
printed to stderr and turned into the exit code carried by the exception.

Typical workflow::

    kongadmin plugins create --name rate-limiting --service svc1 --config '{"minute": 5}'
    kongadmin plugins list --service svc1
    kongadmin plugins update 3f1c... --disable
    kongadmin plugins delete 3f1c... --force
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import typer

from kongadmin.exceptions import KongAdminError
from kongadmin.models import ForeignKey, ListOpt, Plugin
from kongadmin.output import error, info, print_plugin, print_plugins, success


plugins_app = typer.Typer(no_args_is_help=True)


@contextmanager
def _plugin_service(ctx: typer.Context) -> Iterator[Any]:
    """Yield a :class:`PluginService` bound to the profile selected on the command line."""
    from kongadmin.client import SyncClient
    from kongadmin.config import resolve_profile
    from kongadmin.services import PluginService

    obj = ctx.obj or {}
    try:
        profile = resolve_profile(obj.get("profile"), obj.get("base_url"))
        with SyncClient(profile, dry_run=obj.get("dry_run", False)) as client:
            yield PluginService(client)
    except KongAdminError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _parse_config(raw: Optional[str]) -> Optional[dict[str, Any]]:
    if raw is None:
        return None
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        error(f"--config is not valid JSON: {exc}")
        raise typer.Exit(code=2) from None
    if not isinstance(parsed, dict):
        error("--config must be a JSON object")
        raise typer.Exit(code=2)
    return parsed


def _ref(entity_id: Optional[str]) -> Optional[ForeignKey]:
    return ForeignKey(id=entity_id) if entity_id else None


@plugins_app.command("list")
def plugins_list(
    ctx: typer.Context,
    all_pages: bool = typer.Option(False, "--all", help="Follow pagination to the last page."),
    size: Optional[int] = typer.Option(None, "--size", min=1, help="Page size."),
    offset: Optional[str] = typer.Option(None, "--offset", help="Cursor from a previous page."),
    tags: list[str] = typer.Option([], "--tag", help="Filter by tag (repeatable)."),
    match_all_tags: bool = typer.Option(
        False, "--match-all-tags", help="Require every --tag instead of any."
    ),
    service: Optional[str] = typer.Option(None, "--service", help="Plugins of this service."),
    route: Optional[str] = typer.Option(None, "--route", help="Plugins of this route."),
    consumer: Optional[str] = typer.Option(None, "--consumer", help="Plugins of this consumer."),
) -> None:
    """List plugins, globally or for one service, route or consumer.

    Scoped listings always scan every page. A global listing fetches one
    page and prints the cursor for the next one unless ``--all`` is given.
    Page and tag options only apply to a single global page.

    Example::

        kongadmin plugins list --size 50
        kongadmin plugins list --offset WyJ... --size 50
        kongadmin plugins list --route r1
    """
    scopes = [s for s in (service, route, consumer) if s is not None]
    if len(scopes) > 1:
        error("Use at most one of --service, --route, --consumer.")
        raise typer.Exit(code=2)

    page_options = [
        flag
        for flag, given in (
            ("--size", size is not None),
            ("--offset", offset is not None),
            ("--tag", bool(tags)),
            ("--match-all-tags", match_all_tags),
        )
        if given
    ]
    if page_options and (scopes or all_pages):
        error(
            f"{', '.join(page_options)} cannot be combined with "
            "--all, --service, --route or --consumer."
        )
        raise typer.Exit(code=2)

    with _plugin_service(ctx) as svc:
        if service is not None:
            plugins = svc.list_all_for_service(service)
        elif route is not None:
            plugins = svc.list_all_for_route(route)
        elif consumer is not None:
            plugins = svc.list_all_for_consumer(consumer)
        elif all_pages:
            plugins = svc.list_all()
        else:
            opt = ListOpt(size=size, offset=offset, tags=tags, match_all_tags=match_all_tags)
            plugins, next_opt = svc.list(opt)
            if next_opt is not None:
                info(f"Next page: --offset {next_opt.offset}")

    print_plugins(plugins)


@plugins_app.command("get")
def plugins_get(
    ctx: typer.Context,
    id_or_name: str = typer.Argument(help="Plugin ID or name."),
) -> None:
    """Show a single plugin."""
    with _plugin_service(ctx) as svc:
        plugin = svc.get(id_or_name)
    print_plugin(plugin)


@plugins_app.command("create")
def plugins_create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Plugin type, e.g. rate-limiting."),
    plugin_id: Optional[str] = typer.Option(
        None, "--id", help="Client-chosen ID; the plugin is upserted under it."
    ),
    config: Optional[str] = typer.Option(None, "--config", help="Plugin config as a JSON object."),
    service: Optional[str] = typer.Option(None, "--service", help="Attach to this service ID."),
    route: Optional[str] = typer.Option(None, "--route", help="Attach to this route ID."),
    consumer: Optional[str] = typer.Option(None, "--consumer", help="Attach to this consumer ID."),
    disabled: bool = typer.Option(False, "--disabled", help="Create the plugin disabled."),
    tags: list[str] = typer.Option([], "--tag", help="Tag (repeatable)."),
) -> None:
    """Create a plugin.

    Example::

        kongadmin plugins create --name key-auth --route r1
        kongadmin plugins create --name cors --id 0b9c... --config '{"origins": ["*"]}'
    """
    plugin = Plugin(
        id=plugin_id,
        name=name,
        config=_parse_config(config),
        service=_ref(service),
        route=_ref(route),
        consumer=_ref(consumer),
        enabled=False if disabled else None,
        tags=tags or None,
    )
    with _plugin_service(ctx) as svc:
        created = svc.create(plugin)
    success(f"Created plugin {created.id or name}")
    print_plugin(created)


@plugins_app.command("update")
def plugins_update(
    ctx: typer.Context,
    key: str = typer.Argument(help="Plugin ID, or plugin name when addressed by name."),
    config: Optional[str] = typer.Option(None, "--config", help="Plugin config as a JSON object."),
    enabled: Optional[bool] = typer.Option(
        None, "--enable/--disable", help="Enable or disable the plugin."
    ),
    service: Optional[str] = typer.Option(
        None, "--service", help="Update through this service's plugin namespace."
    ),
    by_name: bool = typer.Option(False, "--by-name", help="Treat KEY as the plugin name."),
    tags: list[str] = typer.Option([], "--tag", help="Replace tags (repeatable)."),
) -> None:
    """Update a plugin.

    Example::

        kongadmin plugins update 3f1c... --disable
        kongadmin plugins update rate-limiting --by-name --service svc1 --config '{"minute": 10}'
    """
    plugin = Plugin(
        id=None if by_name else key,
        name=key if by_name else None,
        config=_parse_config(config),
        enabled=enabled,
        service=_ref(service),
        tags=tags or None,
    )
    with _plugin_service(ctx) as svc:
        updated = svc.update(plugin)
    success(f"Updated plugin {updated.id or key}")
    print_plugin(updated)


@plugins_app.command("delete")
def plugins_delete(
    ctx: typer.Context,
    id_or_name: str = typer.Argument(help="Plugin ID or name."),
) -> None:
    """Delete a plugin. Asks for confirmation unless ``--force`` is active."""
    force = ctx.obj.get("force", False) if ctx.obj else False
    if not force:
        confirmed = typer.confirm(f"Delete plugin '{id_or_name}'?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    with _plugin_service(ctx) as svc:
        svc.delete(id_or_name)
    success(f"Deleted plugin {id_or_name}")


@plugins_app.command("validate")
def plugins_validate(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Plugin type, e.g. rate-limiting."),
    config: Optional[str] = typer.Option(None, "--config", help="Plugin config as a JSON object."),
    service: Optional[str] = typer.Option(None, "--service", help="Service ID."),
    route: Optional[str] = typer.Option(None, "--route", help="Route ID."),
    consumer: Optional[str] = typer.Option(None, "--consumer", help="Consumer ID."),
) -> None:
    """Check a plugin definition against its schema without creating it.

    Exits with code 1 when the gateway does not report the plugin as valid.
    """
    plugin = Plugin(
        name=name,
        config=_parse_config(config),
        service=_ref(service),
        route=_ref(route),
        consumer=_ref(consumer),
    )
    with _plugin_service(ctx) as svc:
        valid = svc.validate(plugin)
    if not valid:
        error(f"Plugin '{name}' is not valid.")
        raise typer.Exit(code=1)
    success(f"Plugin '{name}' is valid.")
