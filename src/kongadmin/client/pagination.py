"""Single-page fetches for the Admin API's cursor-paginated list endpoints.

Kong answers a list request with::

    {"data": [...], "next": "/plugins?offset=WyJ...", "offset": "WyJ..."}

``next`` is ``null`` on the last page. :func:`fetch_page` turns that into a
``(items, next_opt)`` pair where ``next_opt`` is ``None`` once the server
reports the end of the collection.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from kongadmin.client.response import decode_json
from kongadmin.client.sync_client import SyncClient
from kongadmin.exceptions import DecodeError
from kongadmin.models import ListOpt

logger = logging.getLogger(__name__)


def fetch_page(
    client: SyncClient,
    path: str,
    opt: Optional[ListOpt] = None,
) -> tuple[list[dict[str, Any]], Optional[ListOpt]]:
    """Fetch one page of *path*.

    Args:
        client: An open :class:`SyncClient`.
        path: List endpoint, e.g. ``/plugins`` or ``/routes/{id}/plugins``.
        opt: Cursor for the page to fetch. ``None`` fetches the first page
            with the server's default size.

    Returns:
        The raw items of the page in server order, and the cursor for the
        next page. The next cursor keeps the requested size and tag filter.

    Raises:
        DecodeError: If the body is not a list document.
    """
    params = opt.to_params() if opt is not None else None
    body = decode_json(client.get(path, params=params))
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise DecodeError(f"Expected a list document from {path}, got {type(body).__name__}")

    data = body.get("data") or []
    if not isinstance(data, list):
        raise DecodeError(f"Expected 'data' to be an array in response from {path}")

    logger.debug("Fetched %d item(s) from %s", len(data), path)

    if body.get("next") is None:
        return data, None

    next_opt = ListOpt(offset=body.get("offset"))
    if opt is not None:
        next_opt.size = opt.size
        next_opt.tags = list(opt.tags)
        next_opt.match_all_tags = opt.match_all_tags
    return data, next_opt
