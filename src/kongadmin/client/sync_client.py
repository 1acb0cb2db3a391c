"""Synchronous HTTP transport for the Kong Admin API.

This module provides :class:`SyncClient`, the blocking client every service
in kongadmin delegates to. It wraps :class:`httpx.Client` and layers on:

- **Admin token injection** -- resolved once from the profile's credential
  source and sent on every request.
- **Workspace prefixing** -- paths are rewritten to ``/{workspace}/...``
  when the profile names a workspace.
- **Dry-run mode** -- prints the request to stderr and returns a synthetic
  200 response without sending traffic.
- **Error mapping** -- non-2xx statuses and failed requests are raised as
  :class:`~kongadmin.exceptions.TransportError` subclasses.

Requests are sent exactly once. Timeouts come from the profile's
:class:`~kongadmin.models.RequestConfig`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from kongadmin.config import resolve_credential
from kongadmin.exceptions import (
    AuthError,
    BadRequestError,
    ConflictError,
    ConnectionError_,
    NotFoundError,
    ServerError,
    TransportError,
)
from kongadmin.models import Profile
from kongadmin.output import get_output

logger = logging.getLogger(__name__)


class SyncClient:
    """Synchronous HTTP client for Admin API calls.

    Must be used as a context manager so that the underlying connection
    pool is opened and closed.

    Args:
        profile: Connection profile with ``base_url``, workspace, token
            source and request settings.
        admin_token: Explicit admin token. Takes precedence over the
            profile's ``admin_token_source``.
        dry_run: When ``True``, requests are printed to stderr and a
            synthetic 200 response is returned without network I/O.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`.

    Example::

        with SyncClient(profile) as client:
            response = client.get("/plugins", params={"size": 100})
    """

    def __init__(
        self,
        profile: Profile,
        admin_token: Optional[str] = None,
        dry_run: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._profile = profile
        self._admin_token = admin_token
        self._dry_run = dry_run
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def profile(self) -> Profile:
        return self._profile

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        if self._admin_token is None and self._profile.admin_token_source:
            self._admin_token = resolve_credential(self._profile.admin_token_source)
        config = self._profile.request
        self._client = httpx.Client(
            base_url=self._profile.base_url,
            timeout=config.timeout,
            verify=config.verify_ssl,
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[Any] = None,
    ) -> httpx.Response:
        """Send one request and map error statuses to exceptions.

        Redirects are followed; the returned response is the final one.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: Admin API path such as ``/plugins/{id}``.
            params: Query parameters.
            json_body: JSON-serialisable body.

        Returns:
            The :class:`httpx.Response` for a 2xx status.

        Raises:
            BadRequestError: On 400.
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ConflictError: On 409.
            ServerError: On any other 4xx / 5xx status.
            TransportError: On a 1xx or 3xx status that was not followed.
            ConnectionError_: When no response was received (timeouts,
                refused connections, protocol errors, unusable URLs,
                redirect loops).
        """
        headers: dict[str, str] = {"Accept": "application/json"}
        if self._admin_token:
            headers[self._profile.admin_token_header] = self._admin_token

        full_path = self._scoped_path(path)

        if self._dry_run:
            return self._print_dry_run(method, full_path, params, json_body)

        if self._client is None:
            raise TransportError("Client not initialised -- use as context manager")

        kwargs: dict[str, Any] = {
            "method": method,
            "url": full_path,
            "headers": headers,
            "params": params,
        }
        if json_body is not None:
            kwargs["json"] = json_body

        logger.debug("%s %s params=%s", method, full_path, params)
        try:
            response = self._client.request(**kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ConnectionError_(f"{method} {full_path} failed: {exc}") from exc

        logger.debug("%s %s -> %s", method, full_path, response.status_code)
        self._map_response_error(response)
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _scoped_path(self, path: str) -> str:
        workspace = self._profile.workspace
        if workspace:
            return f"/{workspace}{path}"
        return path

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for every status outside 2xx."""
        status = response.status_code
        if response.is_success:
            return

        # Kong reports errors as {"message": ..., "name": ..., "fields": {...}}.
        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("message") or detail.get("error") or ""
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""

        prefix = f"HTTP {status}"
        full_msg = f"{prefix}: {msg}" if msg else prefix

        if status < 400:
            raise TransportError(f"{full_msg} (unexpected non-success status)", status_code=status)
        if status == 400:
            raise BadRequestError(full_msg, status_code=status)
        if status in (401, 403):
            raise AuthError(full_msg, status_code=status)
        if status == 404:
            raise NotFoundError(full_msg, status_code=status)
        if status == 409:
            raise ConflictError(full_msg, status_code=status)
        raise ServerError(full_msg, status_code=status)

    def _print_dry_run(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]],
        json_body: Any,
    ) -> httpx.Response:
        """Print request details to stderr and return a synthetic 200 response."""
        output = get_output()
        url = f"{self._profile.base_url}{path}"
        output.info(f"[dry-run] {method} {url}")

        if params:
            for key, value in params.items():
                output.info(f"  Param: {key}={value}")
        if json_body is not None:
            output.info(f"  Body (JSON): {json.dumps(json_body, indent=2)}")

        return httpx.Response(
            status_code=200,
            headers={"content-type": "application/json"},
            json={},
            request=httpx.Request(method=method, url=url),
        )
