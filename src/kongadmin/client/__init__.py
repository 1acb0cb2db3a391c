"""HTTP layer for kongadmin.

Classes and functions:
    :class:`SyncClient` -- blocking transport backed by :class:`httpx.Client`.
    :func:`fetch_page` -- one page of a cursor-paginated list endpoint.
    :func:`decode_json` -- JSON body decoding with typed errors.

Example::

    from kongadmin.client import SyncClient, fetch_page

    with SyncClient(profile) as client:
        items, next_opt = fetch_page(client, "/plugins")
"""

from kongadmin.client.pagination import fetch_page
from kongadmin.client.response import decode_json
from kongadmin.client.sync_client import SyncClient

__all__ = ["SyncClient", "decode_json", "fetch_page"]
