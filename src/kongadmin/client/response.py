"""Response decoding -- maps :class:`httpx.Response` bodies to Python objects.

:func:`decode_json` is the single place where a response body is parsed;
a body that is not valid JSON surfaces as
:class:`~kongadmin.exceptions.DecodeError` rather than leaking
:class:`ValueError` to callers.
"""

from __future__ import annotations

from typing import Any

import httpx

from kongadmin.exceptions import DecodeError


def decode_json(response: httpx.Response) -> Any:
    """Decode the JSON body of *response*.

    Returns ``None`` for responses with no content (e.g. ``204 No Content``).

    Raises:
        DecodeError: If the body is present but is not valid JSON.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(
            f"Invalid JSON in response to {response.request.method} "
            f"{response.request.url.path}: {exc}"
        ) from exc
