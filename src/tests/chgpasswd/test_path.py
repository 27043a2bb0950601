# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import pytest

from chgpasswd.path import (
    get_group_path,
    get_gshadow_path,
    get_login_defs_path,
    get_path,
    get_root_env,
)


@pytest.fixture
def no_root(monkeypatch):
    monkeypatch.delenv("CHGPASSWD_ROOT", raising=False)


class TestGetRootEnv:
    def test_unset(self, no_root):
        assert get_root_env() == "/"

    def test_empty(self, monkeypatch):
        monkeypatch.setenv("CHGPASSWD_ROOT", "")
        assert get_root_env() == "/"

    def test_set(self, monkeypatch):
        monkeypatch.setenv("CHGPASSWD_ROOT", "/srv/image")
        assert get_root_env() == "/srv/image"


class TestGetPath:
    def test_defaults_to_running_system(self, no_root):
        assert get_path("/etc/group") == "/etc/group"

    def test_normalises(self, no_root):
        assert get_path("etc//./group") == "/etc/group"
        assert get_path() == "/"

    def test_uses_root_argument(self, monkeypatch):
        monkeypatch.setenv("CHGPASSWD_ROOT", "/elsewhere")
        assert get_path("/etc/group", root="/srv/image") == (
            "/srv/image/etc/group"
        )

    def test_uses_environment(self, monkeypatch):
        monkeypatch.setenv("CHGPASSWD_ROOT", "/srv/image")
        assert get_path("/etc", "gshadow") == "/srv/image/etc/gshadow"

    def test_empty_root_argument_falls_back(self, monkeypatch):
        monkeypatch.setenv("CHGPASSWD_ROOT", "/srv/image")
        assert get_path("/etc/group", root="") == "/srv/image/etc/group"

    def test_database_paths(self, no_root):
        assert get_group_path("/r") == "/r/etc/group"
        assert get_gshadow_path("/r") == "/r/etc/gshadow"
        assert get_login_defs_path() == "/etc/login.defs"
