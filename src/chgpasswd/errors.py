# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Errors raised while updating group passwords."""

from chgpasswd.exitcodes import EXIT_STATUS


class ChgpasswdError(Exception):
    """Base class for errors that end a run.

    The message is meant for the administrator; `returncode` is the exit
    status the command terminates with.
    """

    returncode = EXIT_STATUS.FAILURE


class UsageError(ChgpasswdError):
    """The command-line options are inconsistent or invalid."""

    returncode = EXIT_STATUS.USAGE


class AuthorizationDenied(ChgpasswdError):
    """The invoking user may not update group passwords."""

    returncode = EXIT_STATUS.NOPERM


class DatabaseError(ChgpasswdError):
    """Something went wrong with a group database."""

    def __init__(self, path, message):
        self.path = path
        super().__init__(message)


class LockUnavailable(DatabaseError):
    """Another process holds the lock on a database."""

    def __init__(self, path):
        super().__init__(path, f"cannot lock {path}; try again later.")


class OpenFailure(DatabaseError):
    """A database could not be read, or is malformed."""

    def __init__(self, path, reason=None):
        message = f"cannot open {path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class UpdateRejected(DatabaseError):
    """A staged update did not match any entry in the database."""

    def __init__(self, path, name):
        self.name = name
        super().__init__(
            path, f"failed to prepare the new {path} entry '{name}'"
        )


class CommitFailure(DatabaseError):
    """Writing a database back to storage failed."""

    def __init__(self, path, reason=None):
        self.reason = reason
        message = f"failure while writing changes to {path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class PartialCommitFailure(CommitFailure):
    """The shadow database was committed, the group database was not.

    There is no rollback of the first commit; the two databases now disagree
    and need manual attention.
    """

    returncode = EXIT_STATUS.PARTIAL_COMMIT

    def __init__(self, path, committed, reason=None):
        self.committed = committed
        super().__init__(path, reason)
        self.args = (
            f"{self.args[0]}; changes to {committed} were already "
            f"committed, the databases are now inconsistent",
        )


class BatchAborted(ChgpasswdError):
    """One or more input lines were rejected; nothing was written."""

    def __init__(self, errors):
        self.errors = errors
        super().__init__("error detected, changes ignored")
