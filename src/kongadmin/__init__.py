"""kongadmin -- typed client for the Plugin resource of the Kong Admin API.

The package wraps the gateway's administrative REST endpoints for plugins
behind :class:`~kongadmin.services.plugins.PluginService`, and ships a small
Typer CLI that exposes the same operations from the shell.

Typical usage::

    from kongadmin.client import SyncClient
    from kongadmin.models import Plugin, Profile
    from kongadmin.services import PluginService

    with SyncClient(Profile(name="local")) as client:
        plugins = PluginService(client)
        created = plugins.create(Plugin(name="rate-limiting", config={"minute": 5}))

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for plugins, pagination and profiles.
    config: XDG-aware profile management.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
