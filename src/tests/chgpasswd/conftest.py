# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from textwrap import dedent

import pytest

from chgpasswd.auth import Authorizer
from chgpasswd.lifecycle import DatabasePaths
from chgpasswd.logger import get_logger

GROUP = dedent(
    """\
    root:x:0:
    adm:x:4:syslog,alice
    staff:x:50:alice,bob
    devs:!:1001:carol
    """
)

GSHADOW = dedent(
    """\
    root:*::
    adm:*::syslog,alice
    staff:!:alice:alice,bob
    """
)


class AllowAll(Authorizer):
    def may_update_group_passwords(self, principal):
        return True


class DenyAll(Authorizer):
    def may_update_group_passwords(self, principal):
        return False


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo `chgpasswd.logger.configure`, which scripts tests call."""
    log = get_logger()
    handlers, level, propagate = log.handlers[:], log.level, log.propagate
    yield
    log.handlers[:] = handlers
    log.setLevel(level)
    log.propagate = propagate


@pytest.fixture
def make_paths(tmp_path):
    """Return a factory for databases under a fresh root."""

    def _make_paths(group=GROUP, gshadow=GSHADOW, login_defs=None):
        etc = tmp_path / "etc"
        etc.mkdir(exist_ok=True)
        paths = DatabasePaths.from_root(str(tmp_path))
        (etc / "group").write_text(group)
        if gshadow is not None:
            (etc / "gshadow").write_text(gshadow)
        if login_defs is not None:
            (etc / "login.defs").write_text(login_defs)
        return paths

    return _make_paths


@pytest.fixture
def paths(make_paths):
    return make_paths()


@pytest.fixture
def allow_all():
    return AllowAll()


@pytest.fixture
def deny_all():
    return DenyAll()
