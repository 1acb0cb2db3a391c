"""Pydantic models shared across kongadmin modules.

The models fall into two groups:

**Entity models** -- mirror the JSON bodies exchanged with the Admin API:
    :class:`ForeignKey`, :class:`Plugin`, and the pagination cursor
    :class:`ListOpt`.

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`Profile`, and :class:`GlobalConfig`.

Every entity field is optional. ``None`` means "unset" and is dropped from
request bodies by :meth:`Plugin.to_payload`, so a partial update never sends
``null`` for fields the caller did not touch.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 1000
"""Page size used by the full-scan listings."""

DEFAULT_ADMIN_URL = "http://localhost:8001"


# --- Entities ---


class ForeignKey(BaseModel):
    """Reference to another entity by ID, as Kong encodes it: ``{"id": "..."}``."""

    id: Optional[str] = None


class Plugin(BaseModel):
    """A plugin instance, either global or scoped to a service, route or consumer.

    Example::

        Plugin(
            name="rate-limiting",
            service=ForeignKey(id="svc1"),
            config={"minute": 20, "policy": "local"},
        )
    """

    id: Optional[str] = None
    name: Optional[str] = None
    instance_name: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    route: Optional[ForeignKey] = None
    service: Optional[ForeignKey] = None
    consumer: Optional[ForeignKey] = None
    config: Optional[dict[str, Any]] = None
    enabled: Optional[bool] = None
    run_on: Optional[str] = None
    ordering: Optional[dict[str, Any]] = None
    protocols: Optional[list[str]] = None
    tags: Optional[list[str]] = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for a request, leaving out unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


class ListOpt(BaseModel):
    """Pagination cursor for list endpoints.

    Pass one to :meth:`~kongadmin.services.plugins.PluginService.list` to
    fetch a page; the call returns the cursor for the following page, or
    ``None`` once the server reports there is nothing left.
    """

    size: Optional[int] = Field(
        default=None, ge=1, description="Requested page size; server default when unset"
    )
    offset: Optional[str] = Field(
        default=None, description="Opaque cursor returned by the previous page"
    )
    tags: list[str] = Field(default_factory=list, description="Only list entities with these tags")
    match_all_tags: bool = Field(
        default=False, description="Require every tag instead of any of them"
    )

    def to_params(self) -> dict[str, Any]:
        """Render the cursor as query parameters."""
        params: dict[str, Any] = {}
        if self.size:
            params["size"] = self.size
        if self.offset:
            params["offset"] = self.offset
        if self.tags:
            separator = "," if self.match_all_tags else "/"
            params["tags"] = separator.join(self.tags)
        return params


# --- Configuration ---


class RequestConfig(BaseModel):
    """HTTP settings applied to every Admin API call in a profile."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class Profile(BaseModel):
    """Connection settings for one Kong Admin API, stored as ``profiles/<name>.json``.

    Example::

        Profile(
            name="staging",
            base_url="https://kong-admin.staging.internal:8444",
            admin_token_source="env:KONG_ADMIN_TOKEN",
        )
    """

    name: str = Field(description="Profile name, also the file stem on disk")
    base_url: str = Field(default=DEFAULT_ADMIN_URL, description="Admin API base URL")
    workspace: Optional[str] = Field(
        default=None, description="Kong workspace prefixed to every path"
    )
    admin_token_source: Optional[str] = Field(
        default=None,
        description="Credential source for the admin token: env:VAR, file:/path, prompt",
    )
    admin_token_header: str = Field(
        default="Kong-Admin-Token", description="Header carrying the admin token"
    )
    request: RequestConfig = Field(default_factory=RequestConfig)


class GlobalConfig(BaseModel):
    """User-wide settings persisted at ``~/.config/kongadmin/config.json``."""

    default_profile: Optional[str] = Field(
        default=None, description="Profile used when none is selected explicitly"
    )
