"""Typed operations for the Plugin resource of the Kong Admin API.

:class:`PluginService` maps each operation to one fixed endpoint:

=====================  ======  ======================================
Operation              Method  Path
=====================  ======  ======================================
create (no id)         POST    ``/plugins``
create (with id)       PUT     ``/plugins/{id}``
get                    GET     ``/plugins/{id_or_name}``
update (global)        PUT     ``/plugins/{key}``
update (service)       PUT     ``/services/{service_id}/plugins/{key}``
delete                 DELETE  ``/plugins/{id_or_name}``
validate               POST    ``/schemas/plugins/validate``
list / list_all        GET     ``/plugins``
list_all_for_consumer  GET     ``/consumers/{id}/plugins``
list_all_for_service   GET     ``/services/{id}/plugins``
list_all_for_route     GET     ``/routes/{id}/plugins``
=====================  ======  ======================================

Identifiers are validated locally: an empty one raises
:class:`~kongadmin.exceptions.InvalidArgumentError` before any request.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from kongadmin.client.pagination import fetch_page
from kongadmin.client.response import decode_json
from kongadmin.client.sync_client import SyncClient
from kongadmin.exceptions import DecodeError, InvalidArgumentError
from kongadmin.models import DEFAULT_PAGE_SIZE, ListOpt, Plugin

logger = logging.getLogger(__name__)


def _is_empty(value: Optional[str]) -> bool:
    return value is None or value == ""


def _decode_plugin(data: Any) -> Plugin:
    try:
        return Plugin.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise DecodeError(f"Invalid plugin payload: {exc}") from exc


class PluginService:
    """Create, fetch, update, delete, validate and list plugins.

    The service holds no state besides the transport; every call is a
    fresh round trip and returns new :class:`~kongadmin.models.Plugin`
    instances.

    Args:
        client: An open :class:`~kongadmin.client.SyncClient`.
    """

    def __init__(self, client: SyncClient) -> None:
        self._client = client

    def create(self, plugin: Plugin) -> Plugin:
        """Create a plugin.

        If ``plugin.id`` is set the plugin is upserted with
        ``PUT /plugins/{id}``; otherwise it is posted to ``/plugins`` and
        the gateway generates the ID.
        """
        path = "/plugins"
        method = "POST"
        if plugin.id is not None:
            path = f"{path}/{plugin.id}"
            method = "PUT"

        response = self._client.request(method, path, json_body=plugin.to_payload())
        return _decode_plugin(decode_json(response))

    def get(self, id_or_name: Optional[str]) -> Plugin:
        """Fetch a plugin by ID or name.

        Raises:
            InvalidArgumentError: If *id_or_name* is empty.
            NotFoundError: If the gateway has no such plugin.
        """
        if _is_empty(id_or_name):
            raise InvalidArgumentError("id_or_name cannot be empty for get operation")

        response = self._client.get(f"/plugins/{id_or_name}")
        return _decode_plugin(decode_json(response))

    def update(self, plugin: Plugin) -> Plugin:
        """Update a plugin, addressed by its ID or, failing that, its name.

        A plugin attached to a service (``plugin.service.id`` set) is
        updated through the service's namespace.

        Raises:
            InvalidArgumentError: If neither ``id`` nor ``name`` is set.
        """
        key = plugin.id if not _is_empty(plugin.id) else plugin.name
        if _is_empty(key):
            raise InvalidArgumentError("plugin id or name is required for update operation")

        if plugin.service is not None and not _is_empty(plugin.service.id):
            path = f"/services/{plugin.service.id}/plugins/{key}"
        else:
            path = f"/plugins/{key}"

        response = self._client.put(path, json_body=plugin.to_payload())
        return _decode_plugin(decode_json(response))

    def delete(self, id_or_name: Optional[str]) -> None:
        """Delete a plugin by ID or name.

        Raises:
            InvalidArgumentError: If *id_or_name* is empty.
        """
        if _is_empty(id_or_name):
            raise InvalidArgumentError("id_or_name cannot be empty for delete operation")

        self._client.delete(f"/plugins/{id_or_name}")

    def validate(self, plugin: Plugin) -> bool:
        """Validate a plugin against its schema without creating it.

        Returns ``True`` only when the gateway answers ``201 Created`` and
        ``False`` for any other success status. Error statuses raise.
        """
        response = self._client.post(
            "/schemas/plugins/validate", json_body=plugin.to_payload()
        )
        return response.status_code == 201

    def list(self, opt: Optional[ListOpt] = None) -> tuple[list[Plugin], Optional[ListOpt]]:
        """Fetch one page of plugins.

        Returns:
            The plugins of the page and the cursor for the next page, or
            ``None`` when this was the last one.
        """
        return self._list_by_path("/plugins", opt)

    def list_all(self) -> list[Plugin]:
        """Fetch every plugin. Scans the whole collection page by page."""
        return self._list_all_by_path("/plugins")

    def list_all_for_consumer(self, consumer_id_or_name: Optional[str]) -> list[Plugin]:
        """Fetch every plugin enabled for a consumer."""
        if _is_empty(consumer_id_or_name):
            raise InvalidArgumentError("consumer_id_or_name cannot be empty")
        return self._list_all_by_path(f"/consumers/{consumer_id_or_name}/plugins")

    def list_all_for_service(self, service_id_or_name: Optional[str]) -> list[Plugin]:
        """Fetch every plugin enabled for a service."""
        if _is_empty(service_id_or_name):
            raise InvalidArgumentError("service_id_or_name cannot be empty")
        return self._list_all_by_path(f"/services/{service_id_or_name}/plugins")

    def list_all_for_route(self, route_id: Optional[str]) -> list[Plugin]:
        """Fetch every plugin enabled for a route."""
        if _is_empty(route_id):
            raise InvalidArgumentError("route_id cannot be empty")
        return self._list_all_by_path(f"/routes/{route_id}/plugins")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _list_by_path(
        self, path: str, opt: Optional[ListOpt]
    ) -> tuple[list[Plugin], Optional[ListOpt]]:
        data, next_opt = fetch_page(self._client, path, opt)
        plugins = [_decode_plugin(item) for item in data]
        return plugins, next_opt

    def _list_all_by_path(self, path: str) -> list[Plugin]:
        # Stops only when the server returns no next cursor; there is no page cap.
        plugins: list[Plugin] = []
        opt: Optional[ListOpt] = ListOpt(size=DEFAULT_PAGE_SIZE)
        while opt is not None:
            page, opt = self._list_by_path(path, opt)
            plugins.extend(page)
        logger.debug("Listed %d plugin(s) from %s", len(plugins), path)
        return plugins
