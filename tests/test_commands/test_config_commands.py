"""Tests for the ``kongadmin config`` command group."""

from __future__ import annotations

import json

from kongadmin.app import app
from kongadmin.config import load_global_config, load_profile, save_profile
from kongadmin.models import Profile


class TestAddProfile:
    def test_saves_profile(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(
            app,
            [
                "config",
                "add-profile",
                "staging",
                "--base-url",
                "https://admin.staging:8444",
                "--workspace",
                "team-a",
                "--token-source",
                "env:KONG_ADMIN_TOKEN",
                "--insecure",
            ],
        )

        assert result.exit_code == 0, result.output
        profile = load_profile("staging")
        assert profile.base_url == "https://admin.staging:8444"
        assert profile.workspace == "team-a"
        assert profile.admin_token_source == "env:KONG_ADMIN_TOKEN"
        assert profile.request.verify_ssl is False


class TestUse:
    def test_sets_default(self, cli_runner, isolated_config) -> None:
        save_profile(Profile(name="prod"))

        result = cli_runner.invoke(app, ["config", "use", "prod"])

        assert result.exit_code == 0, result.output
        assert load_global_config().default_profile == "prod"

    def test_unknown_profile(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(app, ["config", "use", "ghost"])

        assert result.exit_code == 2
        assert load_global_config().default_profile is None


class TestListAndShow:
    def test_list_marks_default(self, cli_runner, isolated_config) -> None:
        save_profile(Profile(name="a", base_url="http://a:8001"))
        save_profile(Profile(name="b", base_url="http://b:8001"))
        cli_runner.invoke(app, ["config", "use", "b"])

        result = cli_runner.invoke(app, ["--plain", "config", "list"])

        assert result.exit_code == 0, result.output
        assert "a\thttp://a:8001\t\n" in result.output
        assert "b\thttp://b:8001\t*" in result.output

    def test_show_effective_profile(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(
            app, ["--json", "--quiet", "--base-url", "http://cli:8001", "config", "show"]
        )

        assert result.exit_code == 0, result.output
        shown = json.loads(result.stdout)
        assert shown["name"] == "default"
        assert shown["base_url"] == "http://cli:8001"

    def test_show_missing_profile(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(app, ["--profile", "ghost", "config", "show"])

        assert result.exit_code == 1


class TestRemove:
    def test_clears_default(self, cli_runner, isolated_config) -> None:
        save_profile(Profile(name="old"))
        cli_runner.invoke(app, ["config", "use", "old"])

        result = cli_runner.invoke(app, ["config", "remove", "old"])

        assert result.exit_code == 0, result.output
        assert load_global_config().default_profile is None

    def test_missing(self, cli_runner, isolated_config) -> None:
        result = cli_runner.invoke(app, ["config", "remove", "ghost"])

        assert result.exit_code == 2
