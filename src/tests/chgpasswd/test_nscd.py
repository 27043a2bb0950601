# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from subprocess import TimeoutExpired

import pytest

from chgpasswd import nscd
from chgpasswd.nscd import flush_nscd_cache
from chgpasswd.utils.shell import ExternalProcessError


@pytest.fixture
def call_and_check(mocker):
    mocker.patch.object(nscd, "has_command_available", return_value=True)
    return mocker.patch.object(nscd, "call_and_check")


class TestFlushNscdCache:
    def test_invalidates_group_cache(self, call_and_check):
        assert flush_nscd_cache()
        call_and_check.assert_called_once_with(
            ["nscd", "-i", "group"], timeout=30
        )

    def test_does_nothing_without_nscd(self, mocker):
        mocker.patch.object(nscd, "has_command_available", return_value=False)
        call_and_check = mocker.patch.object(nscd, "call_and_check")
        assert not flush_nscd_cache()
        call_and_check.assert_not_called()

    def test_failure_is_logged_not_raised(self, call_and_check, caplog):
        call_and_check.side_effect = ExternalProcessError(
            1, ["nscd", "-i", "group"], output=b"nscd not running"
        )
        assert not flush_nscd_cache()
        assert "Failed to flush the nscd cache for group" in caplog.text

    def test_timeout_is_logged_not_raised(self, call_and_check, caplog):
        call_and_check.side_effect = TimeoutExpired(["nscd"], 30)
        assert not flush_nscd_cache()
        assert "Timed out flushing the nscd cache" in caplog.text
