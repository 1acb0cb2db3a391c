"""Tests for kongadmin.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kongadmin.models import DEFAULT_ADMIN_URL, ForeignKey, ListOpt, Plugin, Profile


class TestPlugin:
    def test_payload_omits_unset_fields(self) -> None:
        plugin = Plugin(name="cors", service=ForeignKey(id="svc1"), enabled=False)
        assert plugin.to_payload() == {
            "name": "cors",
            "service": {"id": "svc1"},
            "enabled": False,
        }

    def test_payload_keeps_empty_config(self) -> None:
        assert Plugin(name="cors", config={}).to_payload() == {"name": "cors", "config": {}}

    def test_decodes_full_entity(self) -> None:
        plugin = Plugin.model_validate(
            {
                "id": "abc",
                "name": "rate-limiting",
                "instance_name": "rl-1",
                "created_at": 1,
                "updated_at": 2,
                "route": None,
                "service": {"id": "svc1"},
                "consumer": None,
                "config": {"minute": 5},
                "enabled": True,
                "protocols": ["http", "https"],
                "tags": ["prod"],
                "ordering": {"before": {"access": ["key-auth"]}},
            }
        )
        assert plugin.service == ForeignKey(id="svc1")
        assert plugin.route is None
        assert plugin.protocols == ["http", "https"]
        assert plugin.ordering == {"before": {"access": ["key-auth"]}}


class TestListOpt:
    def test_empty_cursor_has_no_params(self) -> None:
        assert ListOpt().to_params() == {}

    def test_size_and_offset(self) -> None:
        assert ListOpt(size=50, offset="abc").to_params() == {"size": 50, "offset": "abc"}

    def test_any_tag_uses_slash(self) -> None:
        assert ListOpt(tags=["a", "b"]).to_params() == {"tags": "a/b"}

    def test_all_tags_use_comma(self) -> None:
        assert ListOpt(tags=["a", "b"], match_all_tags=True).to_params() == {"tags": "a,b"}

    def test_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ListOpt(size=0)


class TestProfile:
    def test_defaults(self) -> None:
        profile = Profile(name="local")
        assert profile.base_url == DEFAULT_ADMIN_URL
        assert profile.admin_token_header == "Kong-Admin-Token"
        assert profile.request.timeout == 30
        assert profile.request.verify_ssl is True
