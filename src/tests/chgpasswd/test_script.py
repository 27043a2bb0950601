# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from io import BytesIO, TextIOWrapper

import pytest

from chgpasswd import script
from chgpasswd.db import GroupDatabase
from chgpasswd.exitcodes import EXIT_STATUS
from chgpasswd.utils.script import CommandScript


@pytest.fixture(autouse=True)
def environment(tmp_path, mocker):
    mocker.patch.object(CommandScript, "setup")
    mocker.patch(
        "chgpasswd.logger._logging.SYSLOG_ADDRESS",
        str(tmp_path / "no-syslog"),
    )
    mocker.patch("chgpasswd.auth.get_invoking_principal", return_value="root")
    mocker.patch("chgpasswd.nscd.has_command_available", return_value=False)


def set_stdin(monkeypatch, data):
    if isinstance(data, str):
        data = data.encode("utf-8")
    monkeypatch.setattr("sys.stdin", TextIOWrapper(BytesIO(data)))


def run_script(paths, data, *args, monkeypatch):
    set_stdin(monkeypatch, data)
    root = paths.group[: -len("/etc/group")]
    with pytest.raises(SystemExit) as error:
        script.main(["--prefix", root, *args])
    return error.value.code


def read(path):
    with open(path) as fd:
        return fd.read()


class TestChgpasswdScript:
    def test_success(self, paths, monkeypatch, capsys):
        code = run_script(
            paths, "staff:s1\ndevs:d1\n", "-c", "NONE", monkeypatch=monkeypatch
        )
        assert code == EXIT_STATUS.SUCCESS
        assert "staff:s1:" in read(paths.gshadow)
        assert "devs:d1:" in read(paths.group)
        assert capsys.readouterr().err == ""

    def test_rejected_lines(self, paths, monkeypatch, capsys):
        before = read(paths.group), read(paths.gshadow)
        code = run_script(
            paths,
            "staff:s1\nbroken\nghosts:boo\n",
            "-c",
            "NONE",
            monkeypatch=monkeypatch,
        )
        assert code == EXIT_STATUS.FAILURE
        assert (read(paths.group), read(paths.gshadow)) == before
        assert capsys.readouterr().err.splitlines() == [
            "chgpasswd: line 2: missing new password",
            "chgpasswd: line 3: group 'ghosts' does not exist",
            "chgpasswd: error detected, changes ignored",
        ]

    def test_usage_error(self, paths, monkeypatch, capsys):
        code = run_script(paths, "", "-s", "5000", monkeypatch=monkeypatch)
        assert code == EXIT_STATUS.USAGE
        assert capsys.readouterr().err == (
            "chgpasswd: -s flag is only allowed with the -c flag\n"
        )

    def test_unknown_option(self, paths, monkeypatch):
        code = run_script(paths, "", "--frobnicate", monkeypatch=monkeypatch)
        assert code == EXIT_STATUS.USAGE

    def test_lock_held(self, paths, monkeypatch, capsys):
        other = GroupDatabase(paths.group)
        other.lock()
        try:
            code = run_script(paths, "staff:s1\n", monkeypatch=monkeypatch)
        finally:
            other.abort_and_unlock()
        assert code == EXIT_STATUS.FAILURE
        assert capsys.readouterr().err == (
            f"chgpasswd: cannot lock {paths.group}; try again later.\n"
        )

    def test_permission_denied(self, paths, monkeypatch, mocker, capsys):
        mocker.patch(
            "chgpasswd.auth.get_invoking_principal", return_value=None
        )
        code = run_script(paths, "staff:s1\n", monkeypatch=monkeypatch)
        assert code == EXIT_STATUS.NOPERM
        assert capsys.readouterr().err == "chgpasswd: Permission denied.\n"

    def test_verbose(self, paths, monkeypatch, capsys):
        code = run_script(
            paths, "staff:s1\n", "-c", "NONE", "-v", monkeypatch=monkeypatch
        )
        assert code == EXIT_STATUS.SUCCESS
        assert "Updated 1 group password(s)." in capsys.readouterr().err

    def test_encrypts_by_default(self, paths, monkeypatch):
        code = run_script(paths, "staff:s1\n", "-m", monkeypatch=monkeypatch)
        assert code == EXIT_STATUS.SUCCESS
        assert "staff:$1$" in read(paths.gshadow)

    def test_interrupted(self, paths, monkeypatch, mocker):
        mocker.patch.object(
            script, "update_group_passwords", side_effect=KeyboardInterrupt
        )
        code = run_script(paths, "staff:s1\n", monkeypatch=monkeypatch)
        assert code == EXIT_STATUS.FAILURE

    def test_root_from_environment(self, paths, monkeypatch):
        root = paths.group[: -len("/etc/group")]
        monkeypatch.setenv("CHGPASSWD_ROOT", root)
        set_stdin(monkeypatch, "staff:s1\n")
        with pytest.raises(SystemExit) as error:
            script.main(["-c", "NONE"])
        assert error.value.code == EXIT_STATUS.SUCCESS
        assert "staff:s1:" in read(paths.gshadow)

    def test_input_that_is_not_utf8_is_stored_as_is(
        self, paths, monkeypatch
    ):
        code = run_script(
            paths, b"staff:caf\xe9\n", "-c", "NONE", monkeypatch=monkeypatch
        )
        assert code == EXIT_STATUS.SUCCESS
        with open(paths.gshadow, "rb") as fd:
            assert b"staff:caf\xe9:alice:alice,bob\n" in fd.read()

    def test_unknown_group_that_is_not_utf8(self, paths, monkeypatch, capsys):
        before = read(paths.group), read(paths.gshadow)
        code = run_script(
            paths, b"caf\xe9:pw\n", "-c", "NONE", monkeypatch=monkeypatch
        )
        assert code == EXIT_STATUS.FAILURE
        assert (read(paths.group), read(paths.gshadow)) == before
        assert capsys.readouterr().err.splitlines() == [
            "chgpasswd: line 1: group 'caf\\xe9' does not exist",
            "chgpasswd: error detected, changes ignored",
        ]
