"""Resource services built on :class:`~kongadmin.client.SyncClient`."""

from kongadmin.services.plugins import PluginService

__all__ = ["PluginService"]
