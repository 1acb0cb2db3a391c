"""Tests for response body decoding."""

from __future__ import annotations

import httpx
import pytest

from kongadmin.client.response import decode_json
from kongadmin.exceptions import DecodeError


def _response(**kwargs) -> httpx.Response:
    return httpx.Response(request=httpx.Request("GET", "http://kong.test/plugins/abc"), **kwargs)


class TestDecodeJson:
    def test_json_body(self) -> None:
        assert decode_json(_response(status_code=200, json={"id": "abc"})) == {"id": "abc"}

    def test_empty_body_is_none(self) -> None:
        assert decode_json(_response(status_code=204)) is None

    def test_invalid_json_names_request(self) -> None:
        with pytest.raises(DecodeError, match="GET /plugins/abc"):
            decode_json(_response(status_code=200, text="<html>"))
