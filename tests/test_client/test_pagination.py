"""Tests for single-page list fetches."""

from __future__ import annotations

import httpx
import pytest

from kongadmin.client.pagination import fetch_page
from kongadmin.exceptions import DecodeError
from kongadmin.models import ListOpt


class TestFetchPage:
    def test_first_page_without_cursor_sends_no_params(self, api, client) -> None:
        api.add("GET", "/plugins", httpx.Response(200, json={"data": [{"id": "a"}], "next": None}))

        items, next_opt = fetch_page(client, "/plugins")

        assert items == [{"id": "a"}]
        assert next_opt is None
        assert str(api.requests[0].url.query, "ascii") == ""

    def test_next_cursor_carries_size_and_tags(self, api, client) -> None:
        api.add(
            "GET",
            "/plugins",
            httpx.Response(
                200,
                json={"data": [], "next": "/plugins?offset=xyz", "offset": "xyz"},
            ),
        )

        _, next_opt = fetch_page(
            client, "/plugins", ListOpt(size=5, tags=["a", "b"], match_all_tags=True)
        )

        assert next_opt == ListOpt(size=5, offset="xyz", tags=["a", "b"], match_all_tags=True)
        assert api.requests[0].url.params["tags"] == "a,b"

    def test_next_cursor_without_request_cursor(self, api, client) -> None:
        api.add(
            "GET",
            "/plugins",
            httpx.Response(200, json={"data": [], "next": "/plugins?offset=o", "offset": "o"}),
        )

        _, next_opt = fetch_page(client, "/plugins")

        assert next_opt == ListOpt(offset="o")

    def test_missing_data_is_empty_page(self, api, client) -> None:
        api.add("GET", "/plugins", httpx.Response(200, json={"next": None}))

        assert fetch_page(client, "/plugins") == ([], None)

    @pytest.mark.parametrize("body", [[1, 2], {"data": {"id": "a"}}])
    def test_unexpected_shape_raises(self, api, client, body) -> None:
        api.add("GET", "/plugins", httpx.Response(200, json=body))

        with pytest.raises(DecodeError):
            fetch_page(client, "/plugins")

    def test_invalid_json_raises(self, api, client) -> None:
        api.add("GET", "/plugins", httpx.Response(200, text="{not json"))

        with pytest.raises(DecodeError, match="Invalid JSON"):
            fetch_page(client, "/plugins")
