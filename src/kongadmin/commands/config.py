"""Config commands -- manage connection profiles.

Provides the ``kongadmin config`` sub-command group for saving Admin API
profiles, choosing the default one, and inspecting the effective settings.
"""

from __future__ import annotations

from typing import Optional

import typer

from kongadmin.exceptions import ConfigError
from kongadmin.output import error, info, print_document, print_table, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the profile that commands would use right now.

    Example::

        kongadmin config show
        kongadmin --profile staging config show --json
    """
    from kongadmin.config import get_config_dir, resolve_profile

    obj = ctx.obj or {}
    try:
        profile = resolve_profile(obj.get("profile"), obj.get("base_url"))
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config directory: {get_config_dir()}")
    print_document(profile.model_dump(mode="json"))


@config_app.command("add-profile")
def config_add_profile(
    name: str = typer.Argument(help="Profile name."),
    base_url: str = typer.Option(
        "http://localhost:8001", "--base-url", help="Admin API base URL."
    ),
    workspace: Optional[str] = typer.Option(None, "--workspace", help="Kong workspace."),
    token_source: Optional[str] = typer.Option(
        None, "--token-source", help="Admin token source: env:VAR, file:/path or prompt."
    ),
    timeout: int = typer.Option(30, "--timeout", min=1, help="Request timeout in seconds."),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS verification."),
) -> None:
    """Create or overwrite a profile.

    Example::

        kongadmin config add-profile staging --base-url https://admin.staging:8444 \\
            --token-source env:KONG_ADMIN_TOKEN
    """
    from kongadmin.config import save_profile
    from kongadmin.models import Profile, RequestConfig

    profile = Profile(
        name=name,
        base_url=base_url,
        workspace=workspace,
        admin_token_source=token_source,
        request=RequestConfig(timeout=timeout, verify_ssl=not insecure),
    )
    save_profile(profile)
    success(f"Saved profile '{name}'")


@config_app.command("use")
def config_use(
    name: str = typer.Argument(help="Profile to make the default."),
) -> None:
    """Make a saved profile the default."""
    from kongadmin.config import list_profiles, load_global_config, save_global_config

    if name not in list_profiles():
        error(f"Profile '{name}' does not exist.")
        raise typer.Exit(code=2)
    config = load_global_config()
    config.default_profile = name
    save_global_config(config)
    success(f"Default profile is now '{name}'")


@config_app.command("list")
def config_list() -> None:
    """List saved profiles."""
    from kongadmin.config import list_profiles, load_global_config, load_profile

    default = load_global_config().default_profile
    rows = []
    for name in list_profiles():
        profile = load_profile(name)
        rows.append([name, profile.base_url, "*" if name == default else ""])
    print_table(["NAME", "BASE URL", "DEFAULT"], rows, title="Profiles")


@config_app.command("remove")
def config_remove(
    name: str = typer.Argument(help="Profile to delete."),
) -> None:
    """Delete a saved profile, clearing the default if it pointed at it."""
    from kongadmin.config import delete_profile, load_global_config, save_global_config

    try:
        delete_profile(name)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=2) from None

    config = load_global_config()
    if config.default_profile == name:
        config.default_profile = None
        save_global_config(config)
    success(f"Removed profile '{name}'")
