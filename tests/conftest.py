"""Shared test fixtures for kongadmin.

Provides an isolated config environment, output reset between tests, and a
recording mock Admin API built on :class:`httpx.MockTransport`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from kongadmin.client import SyncClient
from kongadmin.models import Profile, RequestConfig
from kongadmin.output import OutputFormat, OutputManager, reset_output, set_output


BASE_URL = "http://kong.test:8001"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time, which
    goes stale once CliRunner restores the real streams.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN output manager."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at tmp_path and clear KONGADMIN_* variables."""
    monkeypatch.setattr("kongadmin.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ["KONGADMIN_PROFILE", "KONGADMIN_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Mock Admin API
# ---------------------------------------------------------------------------


class RecordingAPI:
    """Mock Admin API that records every request and answers from a handler.

    ``routes`` maps ``(method, path)`` to either a response or a callable
    taking the request. Unknown routes answer 404.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Any] = {}

    def add(
        self,
        method: str,
        path: str,
        response: httpx.Response | Callable[[httpx.Request], httpx.Response],
    ) -> None:
        self.routes[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(route):
            return route(request)
        return route

    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def body(self, index: int = -1) -> Optional[dict[str, Any]]:
        content = self.requests[index].content
        return json.loads(content) if content else None

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def api() -> RecordingAPI:
    return RecordingAPI()


@pytest.fixture
def profile() -> Profile:
    return Profile(name="test", base_url=BASE_URL, request=RequestConfig(timeout=5))


@pytest.fixture
def client(api: RecordingAPI, profile: Profile) -> SyncClient:
    with SyncClient(profile, transport=api.transport()) as c:
        yield c


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()
